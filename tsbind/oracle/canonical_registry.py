# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import hashlib
import json
import threading
from typing import Dict, Iterator, List, Tuple

from tsbind.core.errors import CanonicalNameCollisionError
from tsbind.core.type_desc import TypeDesc, describe


class CanonicalNameRegistry:
	"""
	Run-scoped map from canonical name to the type shape that produced it.

	Registration is idempotent for structurally equal descriptors (the common
	case: the same `Sequence<Int32>` used by many functions) and a hard error for
	different ones. One registry per generation run; never shared across runs.

	`register` is a single check-and-insert under a lock, so concurrent walkers
	cannot both see a name as unseen and register different shapes for it.
	"""

	def __init__(self) -> None:
		self._by_name: Dict[str, TypeDesc] = {}
		self._order: List[str] = []
		self._lock = threading.Lock()

	def register(self, name: str, desc: TypeDesc) -> TypeDesc:
		"""
		Associate `name` with `desc` and return the stored descriptor.

		Raises CanonicalNameCollisionError if `name` is already bound to a
		structurally different descriptor.
		"""
		if not name:
			raise ValueError("canonical name must be non-empty")
		with self._lock:
			existing = self._by_name.get(name)
			if existing is None:
				self._by_name[name] = desc
				self._order.append(name)
				return desc
		if existing != desc:
			raise CanonicalNameCollisionError(
				message=f"canonical name '{name}' is produced by two different types",
				canonical_name=name,
				descriptor=desc,
				other_descriptor=existing,
			)
		return existing

	def lookup(self, name: str) -> TypeDesc | None:
		with self._lock:
			return self._by_name.get(name)

	def names(self) -> List[str]:
		"""Canonical names in first-registration order."""
		with self._lock:
			return list(self._order)

	def items(self) -> List[Tuple[str, TypeDesc]]:
		with self._lock:
			return [(n, self._by_name[n]) for n in self._order]

	def fingerprint(self) -> str:
		"""
		sha256 over the canonical JSON of (name, shape) pairs sorted by name.

		Independent of registration order, so identical interfaces yield the same
		fingerprint however the walk was scheduled.
		"""
		pairs = sorted((n, describe(d)) for n, d in self.items())
		data = json.dumps(pairs, ensure_ascii=False, separators=(",", ":")).encode("utf-8")
		return hashlib.sha256(data).hexdigest()

	def __contains__(self, name: object) -> bool:
		with self._lock:
			return name in self._by_name

	def __len__(self) -> int:
		with self._lock:
			return len(self._by_name)

	def __iter__(self) -> Iterator[str]:
		return iter(self.names())


__all__ = ["CanonicalNameRegistry"]

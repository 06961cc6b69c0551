# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from .diagnostics import Diagnostic
from .type_desc import TypeDesc, describe


@dataclass(frozen=True)
class OracleError(Exception):
	"""
	A structured, serializable failure of a generation run.

	Every oracle failure is fatal for the run: callers report it and stop, they
	never fall back to a placeholder type or a de-duplicated name.
	"""

	message: str
	canonical_name: str | None = None
	descriptor: TypeDesc | None = None
	other_descriptor: TypeDesc | None = None  # the previously registered one, for collisions
	module: str | None = None

	reason_code: ClassVar[str] = "E-ORACLE"

	def __str__(self) -> str:
		return self.format_human()

	def to_dict(self) -> dict[str, Any]:
		return {
			"reason_code": self.reason_code,
			"message": self.message,
			"canonical_name": self.canonical_name,
			"descriptor": describe(self.descriptor) if self.descriptor is not None else None,
			"other_descriptor": describe(self.other_descriptor) if self.other_descriptor is not None else None,
			"module": self.module,
		}

	def format_human(self) -> str:
		parts: list[str] = [f"[{self.reason_code}] {self.message}"]
		if self.canonical_name is not None:
			parts.append(f"canonical_name={self.canonical_name}")
		if self.descriptor is not None:
			parts.append(f"descriptor=({describe(self.descriptor)})")
		if self.other_descriptor is not None:
			parts.append(f"registered=({describe(self.other_descriptor)})")
		if self.module is not None:
			parts.append(f"module={self.module}")
		return " ".join(parts)

	def to_diagnostic(self) -> Diagnostic:
		notes: list[str] = []
		if self.descriptor is not None:
			notes.append(f"type: {describe(self.descriptor)}")
		if self.other_descriptor is not None:
			notes.append(f"already registered for: {describe(self.other_descriptor)}")
		return Diagnostic(message=self.message, code=self.reason_code, phase="oracle", notes=notes)


class UnresolvedReferenceError(OracleError):
	"""A descriptor refers to an external module that was not supplied."""

	reason_code = "E-UNRESOLVED-REF"


class CanonicalNameCollisionError(OracleError):
	"""Two structurally different descriptors produced the same canonical name."""

	reason_code = "E-CANONICAL-COLLISION"


class UnregisteredMiscellanyError(OracleError):
	"""A builtin id has no Miscellany Registry entry (a build-time defect)."""

	reason_code = "E-UNREGISTERED-MISC"


__all__ = [
	"OracleError",
	"UnresolvedReferenceError",
	"CanonicalNameCollisionError",
	"UnregisteredMiscellanyError",
]

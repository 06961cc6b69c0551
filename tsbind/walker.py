# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Walk an interface and resolve every type reference through the oracle.

This is the emitter-facing pass: for each declaration it visits the declared
type itself and every type it mentions (arguments, return values, errors
thrown, record fields, enum payloads, custom builtins), asks the oracle for
the rendered and canonical names, and records the result in a `BindingPlan`.

The plan lists one helper per canonical name, so a shape used by fifty
functions gets one set of lowering/lifting helpers.

With `jobs > 1` declarations are resolved on a thread pool. The oracle is
stateless apart from the run's registry, whose `register` is atomic; the plan
is assembled in declaration order afterwards, so its content does not depend
on scheduling.

Any oracle error aborts the walk; there is no partial plan.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Tuple

from tsbind.core.type_desc import TypeDesc, describe, iter_type_tree
from tsbind.model.interface import (
	Argument,
	CallbackInterface,
	CustomType,
	Declaration,
	Enum,
	ErrorDecl,
	ExternalType,
	Function,
	Interface,
	Object,
	Record,
)
from tsbind.oracle.oracle import TypeImport, TypeOracle


@dataclass(frozen=True)
class TypeRef:
	"""One resolved type reference (`owner` is e.g. `function add` or `record Point`)."""

	owner: str
	role: str  # "declaration" | "argument" | "return" | "throws" | "field" | "builtin"
	name: str
	type: TypeDesc
	rendered: str
	canonical: str

	def to_json(self) -> Dict[str, Any]:
		return {
			"owner": self.owner,
			"role": self.role,
			"name": self.name,
			"type": describe(self.type),
			"rendered": self.rendered,
			"canonical": self.canonical,
		}


@dataclass(frozen=True)
class HelperSpec:
	"""A type shape that needs generated lowering/lifting code."""

	canonical: str
	rendered: str
	ffi_converter: str
	type: TypeDesc

	def to_json(self) -> Dict[str, Any]:
		return {
			"canonical": self.canonical,
			"rendered": self.rendered,
			"ffi_converter": self.ffi_converter,
			"type": describe(self.type),
		}


@dataclass(frozen=True)
class BindingPlan:
	namespace: str
	type_refs: Tuple[TypeRef, ...]
	helpers: Tuple[HelperSpec, ...]
	imports: Tuple[TypeImport, ...]
	fingerprint: str

	def helper(self, canonical: str) -> HelperSpec | None:
		for h in self.helpers:
			if h.canonical == canonical:
				return h
		return None

	def to_json(self) -> Dict[str, Any]:
		return {
			"namespace": self.namespace,
			"fingerprint": self.fingerprint,
			"imports": [imp.render() for imp in self.imports],
			"helpers": [h.to_json() for h in self.helpers],
			"type_refs": [r.to_json() for r in self.type_refs],
		}


_Use = Tuple[str, str, str, TypeDesc]  # owner, role, name, type


def _signature_uses(owner: str, arguments: Tuple[Argument, ...], return_type: TypeDesc | None, throws: TypeDesc | None) -> Iterator[_Use]:
	for arg in arguments:
		yield (owner, "argument", arg.name, arg.type)
	if return_type is not None:
		yield (owner, "return", "", return_type)
	if throws is not None:
		yield (owner, "throws", "", throws)


def _declaration_uses(iface: Interface, decl: Declaration) -> List[_Use]:
	"""Every type a declaration defines or mentions, in source order."""
	uses: List[_Use] = []
	if isinstance(decl, Function):
		uses.extend(_signature_uses(f"function {decl.name}", decl.arguments, decl.return_type, decl.throws))
		return uses

	declared = iface.type_for(decl.name)
	if declared is None:
		raise ValueError(f"declaration '{decl.name}' is missing from the interface type table")
	kind = describe(declared).split(" ", 1)[0]
	owner = f"{kind} {decl.name}"
	uses.append((owner, "declaration", decl.name, declared))

	if isinstance(decl, Record):
		uses.extend((owner, "field", f.name, f.type) for f in decl.fields)
	elif isinstance(decl, ErrorDecl):
		if not decl.flat:
			for v in decl.variants:
				uses.extend((f"{owner}.{v.name}", "field", f.name, f.type) for f in v.fields)
	elif isinstance(decl, Enum):
		for v in decl.variants:
			uses.extend((f"{owner}.{v.name}", "field", f.name, f.type) for f in v.fields)
	elif isinstance(decl, Object):
		for ctor in decl.constructors:
			uses.extend(_signature_uses(f"{owner}.{ctor.name}", ctor.arguments, None, ctor.throws))
		for m in decl.methods:
			uses.extend(_signature_uses(f"{owner}.{m.name}", m.arguments, m.return_type, m.throws))
	elif isinstance(decl, CallbackInterface):
		for m in decl.methods:
			uses.extend(_signature_uses(f"{owner}.{m.name}", m.arguments, m.return_type, m.throws))
	elif isinstance(decl, CustomType):
		uses.append((owner, "builtin", "", decl.builtin))
	elif not isinstance(decl, ExternalType):
		raise TypeError(f"unknown declaration {decl!r}")
	return uses


def _resolve_declaration(oracle: TypeOracle, iface: Interface, decl: Declaration) -> List[TypeRef]:
	refs: List[TypeRef] = []
	for owner, role, name, desc in _declaration_uses(iface, decl):
		resolved = oracle.resolve(desc)
		refs.append(
			TypeRef(owner=owner, role=role, name=name, type=desc, rendered=resolved.rendered, canonical=resolved.canonical)
		)
	return refs


def walk_interface(iface: Interface, oracle: TypeOracle, *, jobs: int | None = None) -> BindingPlan:
	"""
	Resolve every type reference of `iface` and build the binding plan.

	`jobs` defaults to the oracle context's configured worker count.
	"""
	if jobs is None:
		jobs = oracle.ctx.config.jobs
	decls = list(iface.declarations())
	if jobs > 1 and len(decls) > 1:
		with ThreadPoolExecutor(max_workers=jobs) as pool:
			per_decl = list(pool.map(lambda d: _resolve_declaration(oracle, iface, d), decls))
	else:
		per_decl = [_resolve_declaration(oracle, iface, d) for d in decls]
	refs = tuple(ref for chunk in per_decl for ref in chunk)

	helpers: List[HelperSpec] = []
	seen: set[str] = set()
	for ref in refs:
		for node in reversed(list(iter_type_tree(ref.type))):
			canonical = oracle.canonical_name(node)
			if canonical in seen:
				continue
			seen.add(canonical)
			helpers.append(
				HelperSpec(
					canonical=canonical,
					rendered=oracle.render(node),
					ffi_converter=oracle.ffi_converter_name(node),
					type=node,
				)
			)

	return BindingPlan(
		namespace=iface.namespace,
		type_refs=refs,
		helpers=tuple(helpers),
		imports=tuple(oracle.imports()),
		fingerprint=oracle.ctx.registry.fingerprint(),
	)


__all__ = ["BindingPlan", "HelperSpec", "TypeRef", "walk_interface"]

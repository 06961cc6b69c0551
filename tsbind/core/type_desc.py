# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Type descriptors: the closed set of shapes a type can take in an interface.

Every type reference the emitter meets (argument, return value, record field,
enum payload, nested generic argument) is one of the variants below. Composite
variants own their inner descriptors, so a descriptor is a finite tree; user
types are referenced by name and never embedded, which keeps recursive user
types from producing cycles.

Variants are frozen dataclasses, so equality and hashing are structural: two
independently built `TSequence(TOptional(TPrimitive(INT32)))` compare equal.
That is the notion of "structurally identical" the canonical name registry
relies on.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Tuple


class PrimitiveKind(Enum):
	"""Primitive kinds; the value is the primitive's canonical tag."""

	UINT8 = "UInt8"
	INT8 = "Int8"
	UINT16 = "UInt16"
	INT16 = "Int16"
	UINT32 = "UInt32"
	INT32 = "Int32"
	UINT64 = "UInt64"
	INT64 = "Int64"
	FLOAT32 = "Float32"
	FLOAT64 = "Float64"
	BOOLEAN = "Boolean"
	STRING = "String"
	BYTES = "Bytes"


class MiscKind(Enum):
	"""
	Builtin scalar kinds outside the user-declared type universe.

	Values are builtin ids. Canonical tags and renderings live in
	`tsbind.oracle.miscellany`; adding a member here requires a table row there.
	"""

	TIMESTAMP = "timestamp"
	DURATION = "duration"


class TypeDesc:
	"""Base class for all type descriptors."""

	__slots__ = ()


@dataclass(frozen=True)
class TPrimitive(TypeDesc):
	kind: PrimitiveKind


@dataclass(frozen=True)
class TOptional(TypeDesc):
	inner: TypeDesc


@dataclass(frozen=True)
class TSequence(TypeDesc):
	inner: TypeDesc


@dataclass(frozen=True)
class TMap(TypeDesc):
	"""
	Map<key, value>.

	The front end restricts keys to hashable primitives; descriptors do not
	re-check that and any key shape is representable.
	"""

	key: TypeDesc
	value: TypeDesc


@dataclass(frozen=True)
class TRecord(TypeDesc):
	name: str


@dataclass(frozen=True)
class TEnum(TypeDesc):
	name: str


@dataclass(frozen=True)
class TObject(TypeDesc):
	name: str


@dataclass(frozen=True)
class TError(TypeDesc):
	name: str


@dataclass(frozen=True)
class TCallbackInterface(TypeDesc):
	name: str


@dataclass(frozen=True)
class TExternal(TypeDesc):
	"""A declaration imported from another module's bindings."""

	module: str
	name: str


@dataclass(frozen=True)
class TCustom(TypeDesc):
	"""A user-declared newtype over a builtin (`builtin` is the wire shape)."""

	name: str
	builtin: TypeDesc


@dataclass(frozen=True)
class TMiscellany(TypeDesc):
	builtin_id: MiscKind


# Every variant; the oracle checks it has a handler for each of these.
ALL_VARIANTS: Tuple[type, ...] = (
	TPrimitive,
	TOptional,
	TSequence,
	TMap,
	TRecord,
	TEnum,
	TObject,
	TError,
	TCallbackInterface,
	TExternal,
	TCustom,
	TMiscellany,
)

# Variants that name a user declaration of the interface being generated.
USER_DECL_VARIANTS: Tuple[type, ...] = (TRecord, TEnum, TObject, TError, TCallbackInterface)


def primitive(tag: str) -> TPrimitive:
	"""Convenience constructor from a canonical tag (`"Int32"`)."""
	return TPrimitive(PrimitiveKind(tag))


def inner_types(desc: TypeDesc) -> Tuple[TypeDesc, ...]:
	"""Direct children of `desc`, in naming order."""
	if isinstance(desc, (TOptional, TSequence)):
		return (desc.inner,)
	if isinstance(desc, TMap):
		return (desc.key, desc.value)
	if isinstance(desc, TCustom):
		return (desc.builtin,)
	return ()


def iter_type_tree(desc: TypeDesc) -> Iterator[TypeDesc]:
	"""Yield `desc` and every nested descriptor, pre-order."""
	yield desc
	for child in inner_types(desc):
		yield from iter_type_tree(child)


def describe(desc: TypeDesc) -> str:
	"""
	Debug spelling used in diagnostics (`Map<String, Sequence<Int32>>`).

	This is not a canonical name and is never used as a helper key.
	"""
	if isinstance(desc, TPrimitive):
		return desc.kind.value
	if isinstance(desc, TOptional):
		return f"Optional<{describe(desc.inner)}>"
	if isinstance(desc, TSequence):
		return f"Sequence<{describe(desc.inner)}>"
	if isinstance(desc, TMap):
		return f"Map<{describe(desc.key)}, {describe(desc.value)}>"
	if isinstance(desc, TExternal):
		return f"external {desc.module}::{desc.name}"
	if isinstance(desc, TCustom):
		return f"custom {desc.name}({describe(desc.builtin)})"
	if isinstance(desc, TMiscellany):
		return f"builtin {desc.builtin_id.value}"
	if isinstance(desc, USER_DECL_VARIANTS):
		kind = type(desc).__name__[1:].lower()
		return f"{kind} {desc.name}"  # type: ignore[attr-defined]
	raise TypeError(f"not a type descriptor: {desc!r}")


__all__ = [
	"PrimitiveKind",
	"MiscKind",
	"TypeDesc",
	"TPrimitive",
	"TOptional",
	"TSequence",
	"TMap",
	"TRecord",
	"TEnum",
	"TObject",
	"TError",
	"TCallbackInterface",
	"TExternal",
	"TCustom",
	"TMiscellany",
	"ALL_VARIANTS",
	"USER_DECL_VARIANTS",
	"primitive",
	"inner_types",
	"iter_type_tree",
	"describe",
]

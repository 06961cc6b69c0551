# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
In-memory interface model: the exported surface of one native module.

The model is immutable and already validated by the time the oracle sees it
(see `loader_v0`). Every type reference is a `TypeDesc`; user types refer to
each other by name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Tuple, Union

from tsbind.core.type_desc import (
	TCallbackInterface,
	TCustom,
	TEnum,
	TError,
	TExternal,
	TObject,
	TRecord,
	TypeDesc,
)


@dataclass(frozen=True)
class Field:
	name: str
	type: TypeDesc


@dataclass(frozen=True)
class Argument:
	name: str
	type: TypeDesc


@dataclass(frozen=True)
class Function:
	name: str
	arguments: Tuple[Argument, ...] = ()
	return_type: Optional[TypeDesc] = None
	throws: Optional[TypeDesc] = None


@dataclass(frozen=True)
class Constructor:
	name: str
	arguments: Tuple[Argument, ...] = ()
	throws: Optional[TypeDesc] = None


@dataclass(frozen=True)
class Method:
	name: str
	arguments: Tuple[Argument, ...] = ()
	return_type: Optional[TypeDesc] = None
	throws: Optional[TypeDesc] = None


@dataclass(frozen=True)
class Record:
	name: str
	fields: Tuple[Field, ...] = ()


@dataclass(frozen=True)
class EnumVariant:
	name: str
	fields: Tuple[Field, ...] = ()


@dataclass(frozen=True)
class Enum:
	name: str
	variants: Tuple[EnumVariant, ...] = ()


@dataclass(frozen=True)
class ErrorDecl:
	"""
	An error enum. Flat errors carry only a message per variant, so their
	variant fields are never lowered.
	"""

	name: str
	variants: Tuple[EnumVariant, ...] = ()
	flat: bool = False


@dataclass(frozen=True)
class Object:
	name: str
	constructors: Tuple[Constructor, ...] = ()
	methods: Tuple[Method, ...] = ()


@dataclass(frozen=True)
class CallbackInterface:
	name: str
	methods: Tuple[Method, ...] = ()


@dataclass(frozen=True)
class ExternalType:
	"""A type declared in another module and used by this one."""

	name: str
	module: str


@dataclass(frozen=True)
class CustomType:
	name: str
	builtin: TypeDesc


Declaration = Union[Function, Record, Enum, ErrorDecl, Object, CallbackInterface, ExternalType, CustomType]


@dataclass(frozen=True)
class Interface:
	namespace: str
	functions: Tuple[Function, ...] = ()
	records: Tuple[Record, ...] = ()
	enums: Tuple[Enum, ...] = ()
	errors: Tuple[ErrorDecl, ...] = ()
	objects: Tuple[Object, ...] = ()
	callback_interfaces: Tuple[CallbackInterface, ...] = ()
	external_types: Tuple[ExternalType, ...] = ()
	custom_types: Tuple[CustomType, ...] = ()
	_types_by_name: Dict[str, TypeDesc] = field(default_factory=dict, init=False, repr=False, compare=False)

	def __post_init__(self) -> None:
		types = self._types_by_name
		for r in self.records:
			types[r.name] = TRecord(r.name)
		for e in self.enums:
			types[e.name] = TEnum(e.name)
		for err in self.errors:
			types[err.name] = TError(err.name)
		for o in self.objects:
			types[o.name] = TObject(o.name)
		for cb in self.callback_interfaces:
			types[cb.name] = TCallbackInterface(cb.name)
		for ext in self.external_types:
			types[ext.name] = TExternal(module=ext.module, name=ext.name)
		for c in self.custom_types:
			types[c.name] = TCustom(name=c.name, builtin=c.builtin)

	def declarations(self) -> Iterator[Declaration]:
		"""All declarations, types first, in a stable order."""
		yield from self.records
		yield from self.enums
		yield from self.errors
		yield from self.objects
		yield from self.callback_interfaces
		yield from self.custom_types
		yield from self.external_types
		yield from self.functions

	def user_types(self) -> Dict[str, TypeDesc]:
		"""Declared type name -> descriptor referring to it."""
		return dict(self._types_by_name)

	def type_for(self, name: str) -> Optional[TypeDesc]:
		return self._types_by_name.get(name)


__all__ = [
	"Field",
	"Argument",
	"Function",
	"Constructor",
	"Method",
	"Record",
	"EnumVariant",
	"Enum",
	"ErrorDecl",
	"Object",
	"CallbackInterface",
	"ExternalType",
	"CustomType",
	"Declaration",
	"Interface",
]

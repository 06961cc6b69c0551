# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Interface documents (v0): JSON -> `Interface`.

Format (pinned for v0):
{
  "format": "tsbind-interface",
  "version": 0,
  "namespace": "<module namespace>",
  "records":   [ {"name": "...", "fields": [ {"name": "...", "type": "<type expr>"} ]} ],
  "enums":     [ {"name": "...", "variants": [ {"name": "...", "fields": [...]} ]} ],
  "errors":    [ {"name": "...", "flat": true, "variants": [...]} ],
  "objects":   [ {"name": "...", "constructors": [<ctor>], "methods": [<method>]} ],
  "callback_interfaces": [ {"name": "...", "methods": [<method>]} ],
  "external_types": [ {"name": "...", "module": "..."} ],
  "custom_types":   [ {"name": "...", "builtin": "<type expr>"} ],
  "functions": [ {"name": "...", "arguments": [...], "return_type": "<type expr>",
                  "throws": "<error name>"} ]
}

Every list is optional. Every name (and every external module) must be an
identifier a type expression can spell. Declared type names must be unique
across all kinds and may not reuse a builtin spelling; decoding happens in two passes so
declarations may refer to each other in any order.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, TypeVar

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

from .interface import (
	Argument,
	CallbackInterface,
	Constructor,
	CustomType,
	Enum,
	EnumVariant,
	ErrorDecl,
	ExternalType,
	Field,
	Function,
	Interface,
	Method,
	Object,
	Record,
)
from .type_parser import BUILTIN_SPELLINGS, TypeExprError, TypeNamespace, parse_type_expr

_T = TypeVar("_T")

# Same shape as NAME in type_expr.lark, with at least one letter or digit so
# casing can derive an identifier from it.
_IDENT_RE = re.compile(r"^(?=.*[A-Za-z0-9])[A-Za-z_][A-Za-z0-9_]*$")

_TYPE_KINDS: Tuple[Tuple[str, Callable[[dict], TypeDesc]], ...] = (
	("records", lambda o: TRecord(o["name"])),
	("enums", lambda o: TEnum(o["name"])),
	("errors", lambda o: TError(o["name"])),
	("objects", lambda o: TObject(o["name"])),
	("callback_interfaces", lambda o: TCallbackInterface(o["name"])),
	("external_types", lambda o: TExternal(module=o["module"], name=o["name"])),
)


def _list(obj: Mapping[str, Any], key: str, where: str) -> List[Any]:
	value = obj.get(key)
	if value is None:
		return []
	if not isinstance(value, list):
		raise ValueError(f"{where}.{key} must be a list")
	return value


def _identifier(value: Any, where: str) -> str:
	if not isinstance(value, str) or not value:
		raise ValueError(f"{where} must be a non-empty string")
	if not _IDENT_RE.match(value):
		raise ValueError(f"{where}: '{value}' is not a valid identifier")
	return value


def _entry(obj: Any, where: str) -> Dict[str, Any]:
	if not isinstance(obj, dict):
		raise ValueError(f"{where} must be a JSON object")
	_identifier(obj.get("name"), f"{where}.name")
	return obj


class _Decoder:
	def __init__(self, namespace: TypeNamespace) -> None:
		self.ns = namespace

	def type_expr(self, text: Any, where: str) -> TypeDesc:
		if not isinstance(text, str):
			raise ValueError(f"{where} must be a type expression string")
		try:
			return parse_type_expr(text, self.ns)
		except TypeExprError as err:
			raise TypeExprError(f"{where}: {err}", text=err.text, loc=err.span) from err

	def opt_type_expr(self, text: Any, where: str) -> Optional[TypeDesc]:
		if text is None:
			return None
		return self.type_expr(text, where)

	def throws(self, text: Any, where: str) -> Optional[TypeDesc]:
		desc = self.opt_type_expr(text, where)
		if desc is not None and not isinstance(desc, TError):
			raise ValueError(f"{where} must name an error type")
		return desc

	def many(self, obj: Mapping[str, Any], key: str, where: str, fn: Callable[[Dict[str, Any], str], _T]) -> Tuple[_T, ...]:
		out: List[_T] = []
		for i, item in enumerate(_list(obj, key, where)):
			item_where = f"{where}.{key}[{i}]"
			out.append(fn(_entry(item, item_where), item_where))
		return tuple(out)

	def field(self, obj: Dict[str, Any], where: str) -> Field:
		return Field(name=obj["name"], type=self.type_expr(obj.get("type"), f"{where}.type"))

	def argument(self, obj: Dict[str, Any], where: str) -> Argument:
		return Argument(name=obj["name"], type=self.type_expr(obj.get("type"), f"{where}.type"))

	def variant(self, obj: Dict[str, Any], where: str) -> EnumVariant:
		return EnumVariant(name=obj["name"], fields=self.many(obj, "fields", where, self.field))

	def method(self, obj: Dict[str, Any], where: str) -> Method:
		return Method(
			name=obj["name"],
			arguments=self.many(obj, "arguments", where, self.argument),
			return_type=self.opt_type_expr(obj.get("return_type"), f"{where}.return_type"),
			throws=self.throws(obj.get("throws"), f"{where}.throws"),
		)

	def constructor(self, obj: Dict[str, Any], where: str) -> Constructor:
		return Constructor(
			name=obj["name"],
			arguments=self.many(obj, "arguments", where, self.argument),
			throws=self.throws(obj.get("throws"), f"{where}.throws"),
		)

	def function(self, obj: Dict[str, Any], where: str) -> Function:
		return Function(
			name=obj["name"],
			arguments=self.many(obj, "arguments", where, self.argument),
			return_type=self.opt_type_expr(obj.get("return_type"), f"{where}.return_type"),
			throws=self.throws(obj.get("throws"), f"{where}.throws"),
		)

	def record(self, obj: Dict[str, Any], where: str) -> Record:
		return Record(name=obj["name"], fields=self.many(obj, "fields", where, self.field))

	def enum(self, obj: Dict[str, Any], where: str) -> Enum:
		return Enum(name=obj["name"], variants=self.many(obj, "variants", where, self.variant))

	def error(self, obj: Dict[str, Any], where: str) -> ErrorDecl:
		return ErrorDecl(
			name=obj["name"],
			variants=self.many(obj, "variants", where, self.variant),
			flat=bool(obj.get("flat", False)),
		)

	def object(self, obj: Dict[str, Any], where: str) -> Object:
		return Object(
			name=obj["name"],
			constructors=self.many(obj, "constructors", where, self.constructor),
			methods=self.many(obj, "methods", where, self.method),
		)

	def callback_interface(self, obj: Dict[str, Any], where: str) -> CallbackInterface:
		return CallbackInterface(name=obj["name"], methods=self.many(obj, "methods", where, self.method))

	def external_type(self, obj: Dict[str, Any], where: str) -> ExternalType:
		return ExternalType(name=obj["name"], module=obj["module"])


def _collect_type_names(obj: Mapping[str, Any]) -> Dict[str, TypeDesc]:
	"""
	First pass: every declared type name -> descriptor, rejecting clashes.

	Custom types resolve their builtin here too; builtins never refer to user
	types, so they need no second pass.
	"""
	names: Dict[str, TypeDesc] = {}
	where_by_name: Dict[str, str] = {}

	def _declare(name: str, desc: TypeDesc, where: str) -> None:
		if name in BUILTIN_SPELLINGS:
			raise ValueError(f"{where}: '{name}' shadows a builtin type")
		prev = where_by_name.get(name)
		if prev is not None:
			raise ValueError(f"{where}: type '{name}' is already declared at {prev}")
		names[name] = desc
		where_by_name[name] = where

	for key, make in _TYPE_KINDS:
		for i, item in enumerate(_list(obj, key, "interface")):
			where = f"interface.{key}[{i}]"
			entry = _entry(item, where)
			if key == "external_types":
				_identifier(entry.get("module"), f"{where}.module")
			_declare(entry["name"], make(entry), where)
	builtins = _Decoder(TypeNamespace())
	for i, item in enumerate(_list(obj, "custom_types", "interface")):
		where = f"interface.custom_types[{i}]"
		entry = _entry(item, where)
		builtin = builtins.type_expr(entry.get("builtin"), f"{where}.builtin")
		_declare(entry["name"], TCustom(name=entry["name"], builtin=builtin), where)
	return names


def interface_from_obj(obj: Any) -> Interface:
	"""Validate a decoded interface document and build the model."""
	if not isinstance(obj, dict):
		raise ValueError("interface document must be a JSON object")
	if obj.get("format") != "tsbind-interface" or obj.get("version") != 0:
		raise ValueError("unsupported interface format/version")
	namespace = obj.get("namespace")
	if not isinstance(namespace, str) or not namespace:
		raise ValueError("interface.namespace must be a non-empty string")

	names = _collect_type_names(obj)
	customs = tuple(
		CustomType(name=d.name, builtin=d.builtin) for d in names.values() if isinstance(d, TCustom)
	)
	dec = _Decoder(TypeNamespace(user_types=names))
	return Interface(
		namespace=namespace,
		functions=dec.many(obj, "functions", "interface", dec.function),
		records=dec.many(obj, "records", "interface", dec.record),
		enums=dec.many(obj, "enums", "interface", dec.enum),
		errors=dec.many(obj, "errors", "interface", dec.error),
		objects=dec.many(obj, "objects", "interface", dec.object),
		callback_interfaces=dec.many(obj, "callback_interfaces", "interface", dec.callback_interface),
		external_types=dec.many(obj, "external_types", "interface", dec.external_type),
		custom_types=customs,
	)


def load_interface_json(path: Path) -> Interface:
	try:
		obj = json.loads(path.read_text(encoding="utf-8"))
	except json.JSONDecodeError as err:
		raise ValueError(f"interface is not valid JSON: {err}") from err
	return interface_from_obj(obj)


__all__ = ["interface_from_obj", "load_interface_json"]

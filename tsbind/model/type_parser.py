# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Parse type expressions from interface documents into descriptors.

The grammar (`type_expr.lark`) accepts interface-definition spellings
(`i32`, `sequence<T>`, `record<K, V>`), canonical tags (`Int32`,
`Sequence<T>`, `Map<K, V>`), and two sugars: `T?` for Optional and `[T]` for
Sequence. `module::Name` names a type from another module's bindings.

Bare names are resolved against a `TypeNamespace`: builtin spellings first,
then the interface's own declarations. Builtin spellings cannot be shadowed;
the interface loader rejects declarations that try.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedInput

from tsbind.core.span import Span
from tsbind.core.type_desc import (
	MiscKind,
	PrimitiveKind,
	TExternal,
	TMap,
	TMiscellany,
	TOptional,
	TPrimitive,
	TSequence,
	TypeDesc,
)

_GRAMMAR_PATH = Path(__file__).with_name("type_expr.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start="type_expr",
	propagate_positions=True,
	maybe_placeholders=False,
)

_UDL_PRIMITIVES: Dict[str, PrimitiveKind] = {
	"u8": PrimitiveKind.UINT8,
	"i8": PrimitiveKind.INT8,
	"u16": PrimitiveKind.UINT16,
	"i16": PrimitiveKind.INT16,
	"u32": PrimitiveKind.UINT32,
	"i32": PrimitiveKind.INT32,
	"u64": PrimitiveKind.UINT64,
	"i64": PrimitiveKind.INT64,
	"f32": PrimitiveKind.FLOAT32,
	"f64": PrimitiveKind.FLOAT64,
	"boolean": PrimitiveKind.BOOLEAN,
	"string": PrimitiveKind.STRING,
	"bytes": PrimitiveKind.BYTES,
}

BUILTIN_SPELLINGS: Dict[str, TypeDesc] = {
	**{spelling: TPrimitive(kind) for spelling, kind in _UDL_PRIMITIVES.items()},
	**{kind.value: TPrimitive(kind) for kind in PrimitiveKind},
	**{kind.value: TMiscellany(kind) for kind in MiscKind},
}

_OPTIONAL_HEADS = {"Optional", "optional"}
_SEQUENCE_HEADS = {"Sequence", "sequence"}
_MAP_HEADS = {"Map", "record"}


class TypeExprError(ValueError):
	"""A type expression that does not parse or names an unknown type."""

	def __init__(self, message: str, *, text: str, loc: object | None = None) -> None:
		super().__init__(message)
		self.text = text
		self.span = Span.from_loc(loc)


@dataclass(frozen=True)
class TypeNamespace:
	"""Names a bare identifier may refer to, besides builtins."""

	user_types: Mapping[str, TypeDesc] = field(default_factory=dict)

	def lookup(self, name: str) -> Optional[TypeDesc]:
		builtin = BUILTIN_SPELLINGS.get(name)
		if builtin is not None:
			return builtin
		return self.user_types.get(name)


def parse_type_expr(text: str, namespace: TypeNamespace | None = None) -> TypeDesc:
	"""Parse `text` into a descriptor, raising TypeExprError on failure."""
	try:
		tree = _PARSER.parse(text)
	except UnexpectedInput as err:
		raise TypeExprError(f"invalid type expression '{text}'", text=text, loc=err) from err
	return _build_type(tree, namespace or TypeNamespace(), text)


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	return node.type


def _subtrees(tree: Tree) -> List[Tree]:
	return [c for c in tree.children if isinstance(c, Tree)]


def _build_type(tree: Tree, ns: TypeNamespace, text: str) -> TypeDesc:
	kind = _name(tree)
	if kind == "type_expr":
		base = _build_type(_subtrees(tree)[0], ns, text)
		for child in tree.children:
			if isinstance(child, Token) and child.type == "QMARK":
				base = TOptional(base)
		return base
	if kind == "list_type":
		return TSequence(_build_type(_subtrees(tree)[0], ns, text))
	if kind == "external_type":
		module_tok, name_tok = [c for c in tree.children if isinstance(c, Token)]
		return TExternal(module=module_tok.value, name=name_tok.value)
	if kind == "named_type":
		name_tok = tree.children[0]
		desc = ns.lookup(name_tok.value)
		if desc is None:
			raise TypeExprError(f"unknown type '{name_tok.value}'", text=text, loc=name_tok)
		return desc
	if kind == "generic_type":
		return _build_generic(tree, ns, text)
	raise TypeExprError(f"unexpected '{kind}' node in type expression", text=text)


def _build_generic(tree: Tree, ns: TypeNamespace, text: str) -> TypeDesc:
	head = tree.children[0]
	args = [_build_type(t, ns, text) for t in _subtrees(tree)]

	def _arity(n: int) -> None:
		if len(args) != n:
			raise TypeExprError(
				f"'{head.value}' takes {n} type argument{'s' if n != 1 else ''}, got {len(args)}",
				text=text,
				loc=head,
			)

	if head.value in _OPTIONAL_HEADS:
		_arity(1)
		return TOptional(args[0])
	if head.value in _SEQUENCE_HEADS:
		_arity(1)
		return TSequence(args[0])
	if head.value in _MAP_HEADS:
		_arity(2)
		return TMap(key=args[0], value=args[1])
	raise TypeExprError(f"unknown generic type '{head.value}'", text=text, loc=head)


__all__ = ["BUILTIN_SPELLINGS", "TypeExprError", "TypeNamespace", "parse_type_expr"]

# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from tsbind.core.type_desc import (
	MiscKind,
	TExternal,
	TMap,
	TMiscellany,
	TOptional,
	TRecord,
	TSequence,
	primitive,
)
from tsbind.model import TypeExprError, TypeNamespace, parse_type_expr


@pytest.mark.parametrize(
	"text, expected",
	[
		("i32", primitive("Int32")),
		("Int32", primitive("Int32")),
		("u64", primitive("UInt64")),
		("bytes", primitive("Bytes")),
		("string?", TOptional(primitive("String"))),
		("optional<f64>", TOptional(primitive("Float64"))),
		("[u8]", TSequence(primitive("UInt8"))),
		("sequence<boolean>", TSequence(primitive("Boolean"))),
		("Sequence<Boolean>", TSequence(primitive("Boolean"))),
		("record<string, i64>", TMap(key=primitive("String"), value=primitive("Int64"))),
		("timestamp", TMiscellany(MiscKind.TIMESTAMP)),
		("duration?", TOptional(TMiscellany(MiscKind.DURATION))),
		("geometry::Point", TExternal(module="geometry", name="Point")),
	],
)
def test_parse_builtin_spellings(text: str, expected: object) -> None:
	assert parse_type_expr(text) == expected


def test_nested_generics_and_sugars_agree() -> None:
	expected = TMap(key=primitive("String"), value=TSequence(TOptional(primitive("Int32"))))
	assert parse_type_expr("Map<string, sequence<i32?>>") == expected
	assert parse_type_expr("record< string , [ Optional<i32> ] >") == expected


def test_optional_suffix_binds_to_the_whole_base() -> None:
	assert parse_type_expr("[i32]?") == TOptional(TSequence(primitive("Int32")))
	assert parse_type_expr("[i32?]") == TSequence(TOptional(primitive("Int32")))
	assert parse_type_expr("(i32)?") == TOptional(primitive("Int32"))
	assert parse_type_expr("i32??") == TOptional(TOptional(primitive("Int32")))


def test_user_types_resolve_through_the_namespace() -> None:
	ns = TypeNamespace(user_types={"Point": TRecord("Point")})
	assert parse_type_expr("Point?", ns) == TOptional(TRecord("Point"))
	assert parse_type_expr("Map<string, [Point]>", ns) == TMap(key=primitive("String"), value=TSequence(TRecord("Point")))


def test_builtins_win_over_user_types() -> None:
	ns = TypeNamespace(user_types={"i32": TRecord("i32")})
	assert parse_type_expr("i32", ns) == primitive("Int32")


def test_unknown_name() -> None:
	with pytest.raises(TypeExprError, match="unknown type 'Nope'") as excinfo:
		parse_type_expr("sequence<Nope>")
	assert excinfo.value.text == "sequence<Nope>"
	assert excinfo.value.span.column == 10


def test_unknown_generic() -> None:
	with pytest.raises(TypeExprError, match="unknown generic type 'Set'"):
		parse_type_expr("Set<i32>")


@pytest.mark.parametrize(
	"text, message",
	[
		("Optional<i32, i32>", "'Optional' takes 1 type argument, got 2"),
		("sequence<i32, string>", "'sequence' takes 1 type argument, got 2"),
		("Map<string>", "'Map' takes 2 type arguments, got 1"),
	],
)
def test_generic_arity(text: str, message: str) -> None:
	with pytest.raises(TypeExprError, match=message):
		parse_type_expr(text)


@pytest.mark.parametrize("text", ["", "Map<", "[i32", "i32 string", "i32!", "::Point", "<i32>"])
def test_syntax_errors(text: str) -> None:
	with pytest.raises(TypeExprError, match="invalid type expression"):
		parse_type_expr(text)


def test_type_expr_error_is_a_value_error() -> None:
	with pytest.raises(ValueError):
		parse_type_expr("nope")

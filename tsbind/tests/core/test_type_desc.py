# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from tsbind.core.type_desc import (
	ALL_VARIANTS,
	MiscKind,
	PrimitiveKind,
	TCustom,
	TExternal,
	TMap,
	TMiscellany,
	TOptional,
	TPrimitive,
	TRecord,
	TSequence,
	describe,
	inner_types,
	iter_type_tree,
	primitive,
)


def test_structurally_equal_descriptors_compare_and_hash_equal() -> None:
	a = TSequence(TOptional(TPrimitive(PrimitiveKind.INT32)))
	b = TSequence(TOptional(primitive("Int32")))
	assert a == b
	assert hash(a) == hash(b)
	assert a != TOptional(TSequence(primitive("Int32")))


def test_user_types_compare_by_kind_and_name() -> None:
	assert TRecord("Point") == TRecord("Point")
	assert TRecord("Point") != TRecord("Pointe")
	assert TExternal(module="geo", name="Point") != TExternal(module="geo2", name="Point")


def test_primitive_rejects_unknown_tag() -> None:
	with pytest.raises(ValueError):
		primitive("Int128")


def test_inner_types_in_naming_order() -> None:
	m = TMap(key=primitive("String"), value=TSequence(primitive("Boolean")))
	assert inner_types(m) == (primitive("String"), TSequence(primitive("Boolean")))
	assert inner_types(TCustom(name="Url", builtin=primitive("String"))) == (primitive("String"),)
	assert inner_types(TRecord("Point")) == ()


def test_iter_type_tree_is_preorder() -> None:
	d = TMap(key=primitive("String"), value=TSequence(TOptional(primitive("Int32"))))
	assert list(iter_type_tree(d)) == [
		d,
		primitive("String"),
		TSequence(TOptional(primitive("Int32"))),
		TOptional(primitive("Int32")),
		primitive("Int32"),
	]


def test_describe_spellings() -> None:
	assert describe(TMap(key=primitive("String"), value=TSequence(primitive("Int32")))) == "Map<String, Sequence<Int32>>"
	assert describe(TOptional(TRecord("Point"))) == "Optional<record Point>"
	assert describe(TExternal(module="geo", name="Point")) == "external geo::Point"
	assert describe(TCustom(name="Url", builtin=primitive("String"))) == "custom Url(String)"
	assert describe(TMiscellany(MiscKind.TIMESTAMP)) == "builtin timestamp"


def test_describe_rejects_non_descriptors() -> None:
	with pytest.raises(TypeError, match="not a type descriptor"):
		describe("Int32")  # type: ignore[arg-type]


def test_variant_set_is_closed() -> None:
	assert len(ALL_VARIANTS) == len(set(ALL_VARIANTS)) == 12

# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import dataclasses

import pytest

from tsbind.core.errors import (
	CanonicalNameCollisionError,
	OracleError,
	UnresolvedReferenceError,
	UnregisteredMiscellanyError,
)
from tsbind.core.type_desc import MiscKind, TMiscellany, TOptional, TRecord, primitive


def test_reason_codes_are_distinct() -> None:
	codes = {
		OracleError.reason_code,
		UnresolvedReferenceError.reason_code,
		CanonicalNameCollisionError.reason_code,
		UnregisteredMiscellanyError.reason_code,
	}
	assert len(codes) == 4


def test_collision_to_dict_names_both_shapes() -> None:
	err = CanonicalNameCollisionError(
		message="clash",
		canonical_name="OptionalInt32",
		descriptor=TRecord("OptionalInt32"),
		other_descriptor=TOptional(primitive("Int32")),
	)
	assert err.to_dict() == {
		"reason_code": "E-CANONICAL-COLLISION",
		"message": "clash",
		"canonical_name": "OptionalInt32",
		"descriptor": "record OptionalInt32",
		"other_descriptor": "Optional<Int32>",
		"module": None,
	}
	assert str(err).startswith("[E-CANONICAL-COLLISION] clash canonical_name=OptionalInt32")


def test_errors_are_immutable_exceptions() -> None:
	err = UnresolvedReferenceError(message="missing", module="geo")
	assert isinstance(err, OracleError)
	assert isinstance(err, Exception)
	with pytest.raises(dataclasses.FrozenInstanceError):
		err.module = "other"  # type: ignore[misc]


def test_to_diagnostic_carries_code_and_notes() -> None:
	err = UnregisteredMiscellanyError(message="no row", descriptor=TMiscellany(MiscKind.DURATION))
	diag = err.to_diagnostic()
	assert diag.code == "E-UNREGISTERED-MISC"
	assert diag.phase == "oracle"
	assert diag.notes == ["type: builtin duration"]
	assert diag.format_human(default_file="demo.json") == (
		"demo.json:?:?: error: no row\n  note: type: builtin duration"
	)
	assert diag.to_json(default_file="demo.json")["file"] == "demo.json"

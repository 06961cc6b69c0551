# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from tsbind.core.errors import UnregisteredMiscellanyError
from tsbind.core.type_desc import MiscKind, TMiscellany
from tsbind.oracle import OracleContext, TypeOracle
from tsbind.oracle.miscellany import (
	MISCELLANY_BY_ID,
	MISCELLANY_TABLE,
	MiscellanyEntry,
	lookup_miscellany,
	validate_miscellany_table,
)
from tsbind.oracle.primitives import PRIMITIVE_TAGS


def test_every_builtin_has_exactly_one_row() -> None:
	ids = [e.builtin_id for e in MISCELLANY_TABLE]
	assert sorted(ids, key=lambda k: k.value) == sorted(MiscKind, key=lambda k: k.value)
	assert set(MISCELLANY_BY_ID) == set(MiscKind)


def test_tags_are_unique_and_disjoint_from_primitives() -> None:
	tags = [e.canonical_tag for e in MISCELLANY_TABLE]
	assert len(tags) == len(set(tags))
	assert not set(tags) & PRIMITIVE_TAGS
	assert all(e.rendered_name for e in MISCELLANY_TABLE)


def test_tag_and_rendering_are_separate_columns() -> None:
	ts = lookup_miscellany(MiscKind.TIMESTAMP)
	assert (ts.canonical_tag, ts.rendered_name, ts.runtime_type) == ("Timestamp", "Date", False)
	dur = lookup_miscellany(MiscKind.DURATION)
	assert (dur.canonical_tag, dur.rendered_name, dur.runtime_type) == ("Duration", "UniffiDuration", True)


def test_missing_row_fails_validation() -> None:
	partial = [e for e in MISCELLANY_TABLE if e.builtin_id is not MiscKind.DURATION]
	with pytest.raises(UnregisteredMiscellanyError, match="duration") as excinfo:
		validate_miscellany_table(partial)
	assert excinfo.value.descriptor == TMiscellany(MiscKind.DURATION)


def test_duplicate_row_fails_validation() -> None:
	table = [*MISCELLANY_TABLE, MiscellanyEntry(MiscKind.TIMESTAMP, canonical_tag="Instant", rendered_name="Date")]
	with pytest.raises(ValueError, match="duplicate miscellany row"):
		validate_miscellany_table(table)


def test_duplicate_tag_fails_validation() -> None:
	table = [
		MiscellanyEntry(MiscKind.TIMESTAMP, canonical_tag="Time", rendered_name="Date"),
		MiscellanyEntry(MiscKind.DURATION, canonical_tag="Time", rendered_name="UniffiDuration"),
	]
	with pytest.raises(ValueError, match="used by both"):
		validate_miscellany_table(table)


def test_primitive_tag_fails_validation() -> None:
	table = [
		MiscellanyEntry(MiscKind.TIMESTAMP, canonical_tag="Int64", rendered_name="Date"),
		MiscellanyEntry(MiscKind.DURATION, canonical_tag="Duration", rendered_name="UniffiDuration"),
	]
	with pytest.raises(ValueError, match="collides with a primitive tag"):
		validate_miscellany_table(table)


def test_empty_name_fails_validation() -> None:
	table = [MiscellanyEntry(MiscKind.TIMESTAMP, canonical_tag="Timestamp", rendered_name="")]
	with pytest.raises(ValueError, match="empty name"):
		validate_miscellany_table(table)


def test_oracle_reports_unregistered_builtin() -> None:
	partial = {MiscKind.TIMESTAMP: MISCELLANY_BY_ID[MiscKind.TIMESTAMP]}
	oracle = TypeOracle(OracleContext(miscellany=partial))
	assert oracle.render(TMiscellany(MiscKind.TIMESTAMP)) == "Date"
	with pytest.raises(UnregisteredMiscellanyError):
		oracle.canonical_name(TMiscellany(MiscKind.DURATION))
	with pytest.raises(UnregisteredMiscellanyError):
		oracle.render(TMiscellany(MiscKind.DURATION))

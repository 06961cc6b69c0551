# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Builtin "miscellany" catalog: scalar types outside the user-declared universe.

Timestamps and durations have no primitive in the interface description but
are rendered and serialized like any other type. Each builtin is one row of
`MISCELLANY_TABLE`; the oracle consults it through `lookup_miscellany` and has
no per-builtin code.

Adding a builtin
----------------
1) add a `MiscKind` member,
2) add one `MiscellanyEntry` row below.

The table is validated at import time, so a missing or clashing row fails the
import rather than a generation run.

Canonical tags and rendered names are separate namespaces. A tag keys helper
functions (`FfiConverterTimestamp`); a rendered name is TypeScript surface
syntax (`Date`). They may coincide in value but are never read from each
other.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping

from tsbind.core.errors import UnregisteredMiscellanyError
from tsbind.core.type_desc import MiscKind, TMiscellany

from .primitives import PRIMITIVE_TAGS


@dataclass(frozen=True)
class MiscellanyEntry:
	builtin_id: MiscKind
	canonical_tag: str
	rendered_name: str
	# Set when the rendered name is a runtime-provided type that must be
	# imported from the runtime module; global types (`Date`) leave it False.
	runtime_type: bool = False


MISCELLANY_TABLE: tuple[MiscellanyEntry, ...] = (
	MiscellanyEntry(MiscKind.TIMESTAMP, canonical_tag="Timestamp", rendered_name="Date"),
	MiscellanyEntry(MiscKind.DURATION, canonical_tag="Duration", rendered_name="UniffiDuration", runtime_type=True),
)


def validate_miscellany_table(table: Iterable[MiscellanyEntry]) -> Dict[MiscKind, MiscellanyEntry]:
	"""
	Check a catalog and index it by builtin id.

	Rules:
	- exactly one row per `MiscKind`,
	- non-empty canonical tag and rendered name,
	- canonical tags unique and disjoint from primitive tags.
	"""
	by_id: Dict[MiscKind, MiscellanyEntry] = {}
	tags: Dict[str, MiscKind] = {}
	for entry in table:
		if entry.builtin_id in by_id:
			raise ValueError(f"duplicate miscellany row for '{entry.builtin_id.value}'")
		if not entry.canonical_tag or not entry.rendered_name:
			raise ValueError(f"miscellany row for '{entry.builtin_id.value}' has an empty name")
		if entry.canonical_tag in PRIMITIVE_TAGS:
			raise ValueError(f"miscellany tag '{entry.canonical_tag}' collides with a primitive tag")
		prev = tags.get(entry.canonical_tag)
		if prev is not None:
			raise ValueError(
				f"miscellany tag '{entry.canonical_tag}' used by both '{prev.value}' and '{entry.builtin_id.value}'"
			)
		by_id[entry.builtin_id] = entry
		tags[entry.canonical_tag] = entry.builtin_id
	for kind in MiscKind:
		if kind not in by_id:
			raise UnregisteredMiscellanyError(
				message=f"builtin '{kind.value}' has no miscellany registry entry",
				descriptor=TMiscellany(kind),
			)
	return by_id


MISCELLANY_BY_ID: Mapping[MiscKind, MiscellanyEntry] = validate_miscellany_table(MISCELLANY_TABLE)


def lookup_miscellany(
	builtin_id: MiscKind,
	table: Mapping[MiscKind, MiscellanyEntry] = MISCELLANY_BY_ID,
) -> MiscellanyEntry:
	"""Return the catalog row for `builtin_id`; a missing row is a build defect."""
	entry = table.get(builtin_id)
	if entry is None:
		raise UnregisteredMiscellanyError(
			message=f"builtin '{builtin_id.value}' has no miscellany registry entry",
			descriptor=TMiscellany(builtin_id),
		)
	return entry


__all__ = [
	"MiscellanyEntry",
	"MISCELLANY_TABLE",
	"MISCELLANY_BY_ID",
	"validate_miscellany_table",
	"lookup_miscellany",
]

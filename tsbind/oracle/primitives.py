# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Primitive kinds in TypeScript.

Canonical tags are the `PrimitiveKind` values themselves. Renderings are not
unique: every integer up to 32 bits and both float widths share `number`, while
64-bit integers need `bigint` to stay exact.
"""

from __future__ import annotations

from typing import Dict

from tsbind.core.type_desc import PrimitiveKind

PRIMITIVE_RENDERINGS: Dict[PrimitiveKind, str] = {
	PrimitiveKind.UINT8: "number",
	PrimitiveKind.INT8: "number",
	PrimitiveKind.UINT16: "number",
	PrimitiveKind.INT16: "number",
	PrimitiveKind.UINT32: "number",
	PrimitiveKind.INT32: "number",
	PrimitiveKind.UINT64: "bigint",
	PrimitiveKind.INT64: "bigint",
	PrimitiveKind.FLOAT32: "number",
	PrimitiveKind.FLOAT64: "number",
	PrimitiveKind.BOOLEAN: "boolean",
	PrimitiveKind.STRING: "string",
	PrimitiveKind.BYTES: "ArrayBuffer",
}

PRIMITIVE_TAGS = frozenset(k.value for k in PrimitiveKind)

if set(PRIMITIVE_RENDERINGS) != set(PrimitiveKind):
	raise RuntimeError("PRIMITIVE_RENDERINGS must cover every PrimitiveKind")


__all__ = ["PRIMITIVE_RENDERINGS", "PRIMITIVE_TAGS"]

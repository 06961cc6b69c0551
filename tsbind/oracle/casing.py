# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Identifier casing for generated TypeScript.

Declared names are split on anything that is not a letter or digit; each word
keeps its own inner casing and only its first letter changes. This keeps names
that are already UpperCamelCase (`HTTPClient`) stable.
"""

from __future__ import annotations

import re
from typing import List

_SPLIT_RE = re.compile(r"[^A-Za-z0-9]+")


def _words(name: str) -> List[str]:
	return [w for w in _SPLIT_RE.split(name) if w]


def upper_camel(name: str) -> str:
	"""`my_record` -> `MyRecord`, `fooBar` -> `FooBar`."""
	out = "".join(w[0].upper() + w[1:] for w in _words(name))
	if not out:
		raise ValueError(f"cannot derive an identifier from '{name}'")
	if out[0].isdigit():
		out = "_" + out
	return out


def lower_camel(name: str) -> str:
	"""`my_module` -> `myModule`, `crate-b` -> `crateB`."""
	words = _words(name)
	if not words:
		raise ValueError(f"cannot derive an identifier from '{name}'")
	first = words[0][0].lower() + words[0][1:]
	out = first + "".join(w[0].upper() + w[1:] for w in words[1:])
	if out[0].isdigit():
		out = "_" + out
	return out


__all__ = ["upper_camel", "lower_camel"]

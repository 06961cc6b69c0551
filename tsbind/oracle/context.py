# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from tsbind.config import BindgenConfig
from tsbind.core.type_desc import MiscKind

from .canonical_registry import CanonicalNameRegistry
from .miscellany import MISCELLANY_BY_ID, MiscellanyEntry


@dataclass
class OracleContext:
	"""
	Everything one generation run owns.

	Create one per run and pass it explicitly; nothing here is module-global, so
	repeated or concurrent runs in one process cannot see each other's names.
	"""

	config: BindgenConfig = field(default_factory=BindgenConfig)
	registry: CanonicalNameRegistry = field(default_factory=CanonicalNameRegistry)
	miscellany: Mapping[MiscKind, MiscellanyEntry] = field(default_factory=lambda: MISCELLANY_BY_ID)


__all__ = ["OracleContext"]

# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Generation-run configuration (v0).

The only knowledge the oracle needs beyond the interface itself is where the
bindings of *other* modules live, so External type references can be rendered
as module-qualified names. Everything else here tunes the walker.

File format (pinned for v0, JSON):
{
  "format": "tsbind-config",
  "version": 0,
  "external_modules": { "<module>": "<typescript import path>" },
  "external_aliases": { "<module>": "<import alias>" },   // optional
  "runtime_module": "uniffi-bindgen-react-native",          // optional
  "jobs": 1                                                 // optional
}
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Mapping

DEFAULT_RUNTIME_MODULE = "uniffi-bindgen-react-native"

_IDENT_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


@dataclass(frozen=True)
class BindgenConfig:
	"""
	Resolved configuration for one generation run.

	- `external_modules` maps a module name to the import path of its bindings.
	- `external_aliases` overrides the namespace alias used for a module.
	- `runtime_module` is where runtime-provided types (e.g. durations) come from.
	"""

	external_modules: Mapping[str, str] = field(default_factory=dict)
	external_aliases: Mapping[str, str] = field(default_factory=dict)
	runtime_module: str = DEFAULT_RUNTIME_MODULE
	jobs: int = 1

	def __post_init__(self) -> None:
		if self.jobs < 1:
			raise ValueError("jobs must be >= 1")
		for module, alias in self.external_aliases.items():
			if module not in self.external_modules:
				raise ValueError(f"alias given for unknown external module '{module}'")
			if not _IDENT_RE.match(alias):
				raise ValueError(f"invalid import alias '{alias}' for module '{module}'")

	def with_overrides(
		self,
		*,
		external_modules: Mapping[str, str] | None = None,
		jobs: int | None = None,
	) -> "BindgenConfig":
		"""Return a copy with CLI overrides applied (extra modules are merged in)."""
		merged = dict(self.external_modules)
		merged.update(external_modules or {})
		return replace(self, external_modules=merged, jobs=jobs if jobs is not None else self.jobs)


def _str_map(obj: Any, what: str) -> dict[str, str]:
	if obj is None:
		return {}
	if not isinstance(obj, dict):
		raise ValueError(f"{what} must be a JSON object")
	out: dict[str, str] = {}
	for k, v in obj.items():
		if not isinstance(k, str) or not k:
			raise ValueError(f"invalid key in {what}")
		if not isinstance(v, str) or not v:
			raise ValueError(f"{what}['{k}'] must be a non-empty string")
		out[k] = v
	return out


def config_from_obj(obj: Any) -> BindgenConfig:
	"""Validate a decoded config document and build a BindgenConfig."""
	if not isinstance(obj, dict):
		raise ValueError("config must be a JSON object")
	if obj.get("format") != "tsbind-config" or obj.get("version") != 0:
		raise ValueError("unsupported config format/version")
	runtime_module = obj.get("runtime_module", DEFAULT_RUNTIME_MODULE)
	if not isinstance(runtime_module, str) or not runtime_module:
		raise ValueError("runtime_module must be a non-empty string")
	jobs = obj.get("jobs", 1)
	if not isinstance(jobs, int) or isinstance(jobs, bool):
		raise ValueError("jobs must be an integer")
	return BindgenConfig(
		external_modules=_str_map(obj.get("external_modules"), "external_modules"),
		external_aliases=_str_map(obj.get("external_aliases"), "external_aliases"),
		runtime_module=runtime_module,
		jobs=jobs,
	)


def load_config_json(path: Path) -> BindgenConfig:
	try:
		obj = json.loads(path.read_text(encoding="utf-8"))
	except json.JSONDecodeError as err:
		raise ValueError(f"config is not valid JSON: {err}") from err
	return config_from_obj(obj)


def parse_external_flag(text: str) -> tuple[str, str]:
	"""Parse a `--external module=path` CLI value."""
	module, sep, path = text.partition("=")
	if not sep or not module or not path:
		raise ValueError(f"expected MODULE=PATH, got '{text}'")
	return module, path


__all__ = [
	"BindgenConfig",
	"DEFAULT_RUNTIME_MODULE",
	"config_from_obj",
	"load_config_json",
	"parse_external_flag",
]

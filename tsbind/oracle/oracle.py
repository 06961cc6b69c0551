# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Type Oracle: rendered TypeScript names and canonical names for descriptors.

For any descriptor the oracle answers two questions:

- `render(d)`: how the type is spelled in emitted TypeScript. Not unique;
  `Int32` and `Float64` both render as `number`.
- `canonical_name(d)`: a stable identifier for the type *shape*, used to key
  generated helpers (`FfiConverter<canonical>`) and to detect symbol clashes.
  Structurally equal descriptors always get the same name.

Composite names are built from their constituents, inner first:

  Sequence<Optional<Int32>>   -> SequenceOptionalInt32
  Map<String, Sequence<Boolean>> -> MapStringSequenceBoolean

Dispatch is one `_canonical_<Variant>` and one `_render_<Variant>` method per
descriptor class. The set of variants is closed; constructing an oracle checks
every variant has both handlers, so there is no runtime "unknown type" path.

`resolve(d)` is what the walker calls: it computes both names and registers
every constituent canonical name with the run's registry, which is where
collisions surface.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Callable, List, Set

from tsbind.core.errors import UnresolvedReferenceError
from tsbind.core.type_desc import (
	ALL_VARIANTS,
	TCallbackInterface,
	TCustom,
	TEnum,
	TError,
	TExternal,
	TMap,
	TMiscellany,
	TObject,
	TOptional,
	TPrimitive,
	TRecord,
	TSequence,
	TypeDesc,
	iter_type_tree,
)

from .casing import lower_camel, upper_camel
from .context import OracleContext
from .miscellany import MiscellanyEntry, lookup_miscellany
from .primitives import PRIMITIVE_RENDERINGS

FFI_CONVERTER_PREFIX = "FfiConverter"


@dataclass(frozen=True)
class ResolvedType:
	"""What the emitter needs for one type reference."""

	rendered: str
	canonical: str

	@property
	def ffi_converter(self) -> str:
		return FFI_CONVERTER_PREFIX + self.canonical


@dataclass(frozen=True, order=True)
class TypeImport:
	"""
	An import the generated module needs for the names the oracle rendered.

	`namespace=True` is `import * as <symbol> from "<module_path>"`; otherwise
	`import { type <symbol> } from "<module_path>"`.
	"""

	module_path: str
	symbol: str
	namespace: bool = False

	def render(self) -> str:
		if self.namespace:
			return f'import * as {self.symbol} from "{self.module_path}";'
		return f'import {{ type {self.symbol} }} from "{self.module_path}";'


def _check_total(cls: type) -> None:
	missing: List[str] = []
	for variant in ALL_VARIANTS:
		for prefix in ("_canonical_", "_render_"):
			if not callable(getattr(cls, f"{prefix}{variant.__name__}", None)):
				missing.append(f"{prefix}{variant.__name__}")
	if missing:
		raise TypeError(f"{cls.__name__} is missing descriptor handlers: {', '.join(missing)}")


class TypeOracle:
	"""
	Renderer/namer over the closed descriptor set.

	The oracle keeps no per-type state: names are pure functions of the
	descriptor and the run's configuration. The only mutable pieces are the
	context's registry (locked) and the set of imports rendering required.
	"""

	def __init__(self, ctx: OracleContext | None = None) -> None:
		_check_total(type(self))
		self.ctx = ctx if ctx is not None else OracleContext()
		self._imports: Set[TypeImport] = set()
		self._imports_lock = threading.Lock()

	# --- Public API ---

	def canonical_name(self, desc: TypeDesc) -> str:
		return self._handler("_canonical_", desc)(desc)

	def render(self, desc: TypeDesc) -> str:
		return self._handler("_render_", desc)(desc)

	def resolve(self, desc: TypeDesc) -> ResolvedType:
		"""
		Render and name `desc`, registering every constituent shape.

		Inner shapes are registered before the types containing them so a
		collision is reported at the innermost offending shape.
		"""
		for node in reversed(list(iter_type_tree(desc))):
			self.ctx.registry.register(self.canonical_name(node), node)
		return ResolvedType(rendered=self.render(desc), canonical=self.canonical_name(desc))

	def ffi_converter_name(self, desc: TypeDesc) -> str:
		return FFI_CONVERTER_PREFIX + self.canonical_name(desc)

	def imports(self) -> List[TypeImport]:
		"""Imports needed by everything rendered so far, sorted."""
		with self._imports_lock:
			return sorted(self._imports)

	def _add_import(self, imp: TypeImport) -> None:
		with self._imports_lock:
			self._imports.add(imp)

	def _handler(self, prefix: str, desc: TypeDesc) -> Callable[[TypeDesc], str]:
		if not isinstance(desc, TypeDesc):
			raise TypeError(f"not a type descriptor: {desc!r}")
		return getattr(self, f"{prefix}{type(desc).__name__}")

	# --- Primitives ---

	def _canonical_TPrimitive(self, desc: TPrimitive) -> str:
		return desc.kind.value

	def _render_TPrimitive(self, desc: TPrimitive) -> str:
		return PRIMITIVE_RENDERINGS[desc.kind]

	# --- Composites ---

	def _canonical_TOptional(self, desc: TOptional) -> str:
		return "Optional" + self.canonical_name(desc.inner)

	def _render_TOptional(self, desc: TOptional) -> str:
		return f"{self.render(desc.inner)} | undefined"

	def _canonical_TSequence(self, desc: TSequence) -> str:
		return "Sequence" + self.canonical_name(desc.inner)

	def _render_TSequence(self, desc: TSequence) -> str:
		return f"Array<{self.render(desc.inner)}>"

	def _canonical_TMap(self, desc: TMap) -> str:
		return "Map" + self.canonical_name(desc.key) + self.canonical_name(desc.value)

	def _render_TMap(self, desc: TMap) -> str:
		return f"Map<{self.render(desc.key)}, {self.render(desc.value)}>"

	# --- User declarations ---
	# Declared names are unique within an interface, so they are used verbatim
	# as canonical names; rendering only applies the casing convention.

	def _canonical_TRecord(self, desc: TRecord) -> str:
		return desc.name

	def _render_TRecord(self, desc: TRecord) -> str:
		return upper_camel(desc.name)

	def _canonical_TEnum(self, desc: TEnum) -> str:
		return desc.name

	def _render_TEnum(self, desc: TEnum) -> str:
		return upper_camel(desc.name)

	def _canonical_TObject(self, desc: TObject) -> str:
		return desc.name

	def _render_TObject(self, desc: TObject) -> str:
		return upper_camel(desc.name)

	def _canonical_TError(self, desc: TError) -> str:
		return desc.name

	def _render_TError(self, desc: TError) -> str:
		return upper_camel(desc.name)

	def _canonical_TCallbackInterface(self, desc: TCallbackInterface) -> str:
		return desc.name

	def _render_TCallbackInterface(self, desc: TCallbackInterface) -> str:
		return upper_camel(desc.name)

	def _canonical_TCustom(self, desc: TCustom) -> str:
		return desc.name

	def _render_TCustom(self, desc: TCustom) -> str:
		# The emitter declares `type <Name> = <render(builtin)>` once.
		return upper_camel(desc.name)

	# --- External declarations ---

	def _external_module_path(self, desc: TExternal) -> str:
		path = self.ctx.config.external_modules.get(desc.module)
		if path is None:
			raise UnresolvedReferenceError(
				message=f"type '{desc.name}' refers to module '{desc.module}', which was not supplied",
				descriptor=desc,
				module=desc.module,
			)
		return path

	def _canonical_TExternal(self, desc: TExternal) -> str:
		self._external_module_path(desc)
		return f"{desc.module}_{desc.name}"

	def _render_TExternal(self, desc: TExternal) -> str:
		path = self._external_module_path(desc)
		alias = self.ctx.config.external_aliases.get(desc.module) or lower_camel(desc.module)
		self._add_import(TypeImport(module_path=path, symbol=alias, namespace=True))
		return f"{alias}.{upper_camel(desc.name)}"

	# --- Builtin miscellany ---

	def _miscellany(self, desc: TMiscellany) -> MiscellanyEntry:
		return lookup_miscellany(desc.builtin_id, self.ctx.miscellany)

	def _canonical_TMiscellany(self, desc: TMiscellany) -> str:
		return self._miscellany(desc).canonical_tag

	def _render_TMiscellany(self, desc: TMiscellany) -> str:
		entry = self._miscellany(desc)
		if entry.runtime_type:
			self._add_import(TypeImport(module_path=self.ctx.config.runtime_module, symbol=entry.rendered_name))
		return entry.rendered_name


__all__ = ["FFI_CONVERTER_PREFIX", "ResolvedType", "TypeImport", "TypeOracle"]

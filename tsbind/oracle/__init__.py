"""
tsbind.oracle: the Type Oracle and the tables/registries it consults.

Modules:
  - primitives: fixed primitive -> TypeScript mapping
  - miscellany: fixed builtin scalar catalog (timestamps, durations)
  - casing: identifier casing transforms
  - canonical_registry: run-scoped canonical name collision detection
  - context: per-run OracleContext
  - oracle: TypeOracle dispatch
"""

from .context import OracleContext
from .oracle import ResolvedType, TypeImport, TypeOracle

__all__ = ["OracleContext", "ResolvedType", "TypeImport", "TypeOracle"]

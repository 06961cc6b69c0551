"""
tsbind.core: shared descriptor/diagnostic/error types used across the oracle.

Modules:
  - span: best-effort source locations
  - diagnostics: Diagnostic record reported by the CLI
  - errors: structured oracle errors
  - type_desc: the closed TypeDesc variant set
"""

__all__ = [
	"span",
	"diagnostics",
	"errors",
	"type_desc",
]

"""
Diagnostic records produced by a generation run.

The oracle itself raises structured errors; the CLI converts them into
Diagnostics so human and JSON output share one shape.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .span import Span


@dataclass
class Diagnostic:
	"""A single error/warning reported to the user."""

	message: str
	code: str | None = None
	# Which part of the run produced it: "config", "interface", "type-expr",
	# "oracle".
	phase: str | None = None
	severity: str = "error"
	span: Span = field(default_factory=Span)  # Span() denotes unknown.
	notes: list[str] = field(default_factory=list)

	def __post_init__(self) -> None:
		if self.span is None:  # type: ignore[unreachable]
			self.span = Span()

	def to_json(self, *, default_file: str | None = None) -> dict[str, Any]:
		return {
			"phase": self.phase,
			"code": self.code,
			"message": self.message,
			"severity": self.severity,
			"file": self.span.file or default_file,
			"line": self.span.line,
			"column": self.span.column,
			"notes": list(self.notes),
		}

	def format_human(self, *, default_file: str | None = None) -> str:
		file = self.span.file or default_file or "?"
		head = f"{file}:{self.span.label()}: {self.severity}: {self.message}"
		return "\n".join([head, *(f"  note: {n}" for n in self.notes)])


__all__ = ["Diagnostic"]

# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Source locations attached to diagnostics.

Interface documents are JSON and type expressions are short strings, so a span
is mostly a file plus, for type-expression syntax errors, a line/column inside
the expression text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Best-effort file/line/column, plus the raw parser object when there is one."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	raw: Any = None

	@classmethod
	def from_loc(cls, loc: Any, *, file: Optional[str] = None) -> "Span":
		"""
		Build a Span from a lark token/exception (anything with line/column).

		A Span is returned unchanged; `None` yields the unknown span.
		"""
		if loc is None:
			return cls(file=file)
		if isinstance(loc, cls):
			return loc
		return cls(
			file=file,
			line=getattr(loc, "line", None),
			column=getattr(loc, "column", None),
			raw=loc,
		)

	def label(self) -> str:
		line = self.line if self.line is not None else "?"
		column = self.column if self.column is not None else "?"
		return f"{line}:{column}"


__all__ = ["Span"]

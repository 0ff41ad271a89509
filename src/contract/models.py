"""Search result and search method models shared across grepdef.

This module contains the value types handed between the scanner, the
worker pool and the output layer.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SearchMethod(str, Enum):
    """Pre-scan strategy used before the line-by-line pass.

    A pre-scan quickly skips files that cannot contain a match, which should
    be most files. The method never changes which lines are reported.
    """

    PRESCAN_REGEX = "prescan-regex"
    PRESCAN_LITERAL = "prescan-literal"
    NO_PRESCAN = "no-prescan"


class SearchResult(BaseModel):
    """One line of a file that looks like the definition of the query."""

    model_config = ConfigDict(frozen=True)

    file_path: str = Field(description="Path to the file, joined onto its root")
    line_number: int | None = Field(
        default=None,
        description="1-based line number (only set when line numbers are on)",
    )
    text: str = Field(description="The matching line, stripped of whitespace")

    def to_grep(self) -> str:
        """Return the result in grep format.

        Either ``path:text`` or, when a line number is present,
        ``path:line:text``.
        """
        if self.line_number is None:
            return f"{self.file_path}:{self.text}"
        return f"{self.file_path}:{self.line_number}:{self.text}"


__all__ = ["SearchMethod", "SearchResult"]

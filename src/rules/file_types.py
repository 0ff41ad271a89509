"""Per-language rules for selecting files and matching symbol definitions.

Each FileType owns an extension pattern (which paths belong to it) and an
ordered list of definition forms. A query pattern is the alternation of
those forms with the symbol name substituted in.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import TYPE_CHECKING

from scan.files import TraversalError, walk_files

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)


class FileType(str, Enum):
    """The supported source language families."""

    JS = "js"
    PHP = "php"
    RS = "rs"

    @classmethod
    def from_string(cls, name: str) -> FileType:
        """Turn a type name or editor alias into a FileType.

        Aliases such as ``javascriptreact`` or ``typescript.tsx`` are
        accepted alongside the short names.
        """
        try:
            return FILE_TYPE_ALIASES[name]
        except KeyError:
            msg = f"Invalid file type '{name}'"
            raise ValueError(msg) from None


FILE_TYPE_ALIASES: dict[str, FileType] = {
    "js": FileType.JS,
    "ts": FileType.JS,
    "jsx": FileType.JS,
    "tsx": FileType.JS,
    "javascript": FileType.JS,
    "javascript.jsx": FileType.JS,
    "javascriptreact": FileType.JS,
    "typescript": FileType.JS,
    "typescript.tsx": FileType.JS,
    "typescriptreact": FileType.JS,
    "php": FileType.PHP,
    "rs": FileType.RS,
    "rust": FileType.RS,
}

EXTENSION_PATTERNS: dict[FileType, str] = {
    FileType.JS: r"\.(js|jsx|ts|tsx|mjs|cjs)$",
    FileType.PHP: r"\.php$",
    FileType.RS: r"\.rs$",
}

# Definition forms per language. ``{query}`` is replaced verbatim.
DEFINITION_FORMS: dict[FileType, tuple[str, ...]] = {
    FileType.JS: (
        r"\b(function|var|let|const|class|interface|type)\s+{query}\b",
        # method shorthand or call-like brace open, with optional TS return type
        r"\b{query}\([^)]*\)\s*(:[^{{]+)?\{{",
        r"\b{query}:",
        r"@typedef\s*(\{{[^}}]+\}})?\s*{query}\b",
    ),
    FileType.PHP: (r"\b(function|class|trait|interface|enum) {query}\b",),
    FileType.RS: (
        r"\b(fn|struct|enum|trait|union|mod|type|const|static)\s+{query}\b",
        r"\bmacro_rules!\s*{query}\b",
    ),
}


class QueryPatternError(Exception):
    """Raised when a query produces a pattern that does not compile."""


def extension_pattern(file_type: FileType) -> re.Pattern[str]:
    """Return the pattern matching paths that belong to file_type."""
    return re.compile(EXTENSION_PATTERNS[file_type])


def query_pattern(query: str, file_type: FileType) -> re.Pattern[str]:
    """Compile the pattern matching lines that define query in file_type.

    The query is embedded without escaping, so callers must pass a plain
    identifier.

    Raises:
        QueryPatternError: If the generated pattern is malformed.
    """
    forms = [form.format(query=query) for form in DEFINITION_FORMS[file_type]]
    source = "(" + "|".join(forms) + ")"
    try:
        return re.compile(source)
    except re.error as exc:
        msg = f"Could not create pattern for query '{query}': {exc}"
        raise QueryPatternError(msg) from exc


def guess_file_type(file_paths: Iterable[str]) -> FileType:
    """Guess the FileType from the first recognizable file under file_paths.

    Traversal errors are skipped here; the search itself reports them.

    Raises:
        ValueError: If no file under any path has a known extension.
    """
    patterns = [(file_type, extension_pattern(file_type)) for file_type in FileType]
    for root in file_paths:
        try:
            for path in walk_files(root):
                for file_type, pattern in patterns:
                    if pattern.search(path):
                        logger.debug("Guessed file type %s from %s", file_type.value, path)
                        return file_type
        except TraversalError as exc:
            logger.debug("Skipping %s while guessing file type: %s", root, exc)
            continue
    msg = "Could not guess file type; please specify one with --type"
    raise ValueError(msg)


__all__ = [
    "DEFINITION_FORMS",
    "EXTENSION_PATTERNS",
    "FILE_TYPE_ALIASES",
    "FileType",
    "QueryPatternError",
    "extension_pattern",
    "guess_file_type",
    "query_pattern",
]

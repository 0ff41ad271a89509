"""Cheap whole-file checks that decide whether a line-by-line pass is needed."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import re
    from typing import BinaryIO

PRESCAN_CHUNK_SIZE = 2048


def matches_pattern(handle: BinaryIO, pattern: re.Pattern[str]) -> bool:
    """Read the whole file and search it with the query pattern in one pass.

    Bytes that are not valid UTF-8 are replaced rather than rejected, so a
    single bad line does not hide valid matching lines elsewhere.
    """
    data = handle.read()
    if not data:
        return False
    return pattern.search(data.decode("utf-8", errors="replace")) is not None


def contains_literal(
    handle: BinaryIO,
    query: str,
    chunk_size: int = PRESCAN_CHUNK_SIZE,
) -> bool:
    """Stream the file in chunks until the raw query text is found.

    The window carried between reads keeps the last ``len(query) - 1`` bytes,
    which is exactly enough for an occurrence split across two chunks.
    """
    needle = query.encode("utf-8")
    overlap = len(needle) - 1
    window = b""
    while True:
        chunk = handle.read(chunk_size)
        if not chunk:
            return False
        window = (window[-overlap:] if overlap else b"") + chunk
        if needle in window:
            return True


__all__ = ["PRESCAN_CHUNK_SIZE", "contains_literal", "matches_pattern"]

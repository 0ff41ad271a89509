"""Two-phase search of a single file: pre-scan, then line-by-line."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from contract.models import SearchMethod, SearchResult
from scan.prescan import contains_literal, matches_pattern

if TYPE_CHECKING:
    import re
    from typing import BinaryIO

    from rules.config import SearchConfiguration

logger = logging.getLogger(__name__)


def _prescan(
    handle: BinaryIO,
    pattern: re.Pattern[str],
    config: SearchConfiguration,
) -> bool:
    """Return False only when the file certainly has no match."""
    if config.search_method == SearchMethod.PRESCAN_REGEX:
        return matches_pattern(handle, pattern)
    if config.search_method == SearchMethod.PRESCAN_LITERAL:
        return contains_literal(handle, config.query)
    return True


def _search_lines(
    handle: BinaryIO,
    file_path: str,
    pattern: re.Pattern[str],
    line_number: bool,
) -> list[SearchResult]:
    results: list[SearchResult] = []
    for number, raw_line in enumerate(handle, start=1):
        try:
            line = raw_line.decode("utf-8")
        except UnicodeDecodeError:
            # Undecodable lines never match.
            continue
        if pattern.search(line) is None:
            continue
        results.append(
            SearchResult(
                file_path=file_path,
                line_number=number if line_number else None,
                text=line.strip(),
            )
        )
    return results


def scan_file(
    file_path: str,
    pattern: re.Pattern[str],
    config: SearchConfiguration,
) -> list[SearchResult]:
    """Find the lines of one file that look like a definition of the query.

    The file is first checked with the configured pre-scan; most files have
    no match and are skipped without the line-by-line pass. Files that
    cannot be opened, read or rewound yield no results.

    Args:
        file_path: Path of the file to scan, reported as given.
        pattern: Compiled query pattern for the configured file type.
        config: Search configuration (search method and line numbers).

    Returns:
        One SearchResult per matching line, in file order.
    """
    logger.debug("Scanning file %s using %s", file_path, config.search_method.value)
    try:
        with open(file_path, "rb") as handle:
            if not _prescan(handle, pattern, config):
                logger.debug("Pre-scan found no match in %s; skipping", file_path)
                return []
            handle.seek(0)
            logger.debug("Pre-scan matched %s; searching for line", file_path)
            return _search_lines(handle, file_path, pattern, config.line_number)
    except OSError as exc:
        logger.debug("Could not scan %s: %s", file_path, exc)
        return []


__all__ = ["scan_file"]

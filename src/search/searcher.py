"""Search orchestration: walk the roots, scan candidates in parallel, collect."""

from __future__ import annotations

import logging
import threading
import time
from functools import partial
from typing import TYPE_CHECKING

from rules.config import build_config
from rules.file_types import extension_pattern, query_pattern
from scan.files import TraversalError, walk_files
from scan.scanner import scan_file
from search.collector import ResultCollector
from search.pool import WorkerPool

if TYPE_CHECKING:
    from collections.abc import Iterator

    from contract.models import SearchMethod, SearchResult
    from rules.config import SearchConfiguration

logger = logging.getLogger(__name__)


class Searcher:
    """Find symbol definitions under a set of roots.

    This is the main library entry point::

        config = build_config("parseQuery", ["./src"], "js", line_number=True)
        for result in Searcher(config).search():
            print(result.to_grep())

    The query pattern is compiled on construction, so a malformed query
    fails before any file is touched.
    """

    def __init__(self, config: SearchConfiguration) -> None:
        self.config = config
        self._pattern = query_pattern(config.query, config.file_type)
        self._file_type_pattern = extension_pattern(config.file_type)
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        """Stop the running search after the files already being scanned.

        Results found before cancellation are still returned by
        :meth:`search`. Cancelling before a search starts makes that search
        return without scanning; the flag is reset once it finishes.
        """
        self._cancelled.set()

    def _iter_candidates(self) -> Iterator[str]:
        for root in self.config.file_paths:
            for path in walk_files(root):
                if self._file_type_pattern.search(path):
                    yield path

    def _scan_job(self, file_path: str, collector: ResultCollector) -> None:
        if self._cancelled.is_set():
            return
        collector.extend(scan_file(file_path, self._pattern, self.config))

    def search(self) -> list[SearchResult]:
        """Run the search and return every matching line.

        Results from one file keep their line order; the order of files is
        whatever order the workers finished in.

        Raises:
            TraversalError: If a root cannot be walked.
        """
        start = time.perf_counter()
        collector = ResultCollector()
        searched_file_count = 0

        logger.debug("Starting searchers")
        try:
            with WorkerPool(self.config.threads) as pool:
                try:
                    for file_path in self._iter_candidates():
                        if self._cancelled.is_set():
                            logger.debug("Search cancelled; not queueing more files")
                            break
                        searched_file_count += 1
                        pool.submit(partial(self._scan_job, file_path, collector))
                except TraversalError:
                    self._cancelled.set()
                    raise
                logger.debug("Waiting for searchers to complete")
        finally:
            # Workers are joined here, so no job still reads the flag.
            self._cancelled.clear()
        logger.debug("Searchers complete")

        if pool.failed_jobs:
            logger.debug("%d search jobs failed", pool.failed_jobs)
        logger.debug(
            "Scanned %d files in %d ms",
            searched_file_count,
            (time.perf_counter() - start) * 1000,
        )
        return collector.drain()


def search(
    query: str,
    file_paths: list[str] | None = None,
    file_type: str | None = None,
    *,
    line_number: bool = False,
    search_method: SearchMethod | str | None = None,
    threads: int | None = None,
) -> list[SearchResult]:
    """Build a configuration and run a single search with it."""
    config = build_config(
        query,
        file_paths,
        file_type,
        line_number=line_number,
        search_method=search_method,
        threads=threads,
    )
    return Searcher(config).search()


__all__ = ["Searcher", "search"]

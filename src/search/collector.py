"""Thread-safe sink for per-file search results."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from contract.models import SearchResult


class ResultCollector:
    """Append-only list of results guarded by a single lock."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._results: list[SearchResult] = []

    def extend(self, results: Iterable[SearchResult]) -> None:
        results = list(results)
        if not results:
            return
        with self._lock:
            self._results.extend(results)

    def drain(self) -> list[SearchResult]:
        """Return everything collected so far in insertion order and reset."""
        with self._lock:
            results, self._results = self._results, []
        return results

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)


__all__ = ["ResultCollector"]

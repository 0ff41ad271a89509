"""Concurrent definition search for grepdef."""

from search.collector import ResultCollector
from search.pool import PoolClosedError, WorkerPool
from search.searcher import Searcher, search

__all__ = [
    "PoolClosedError",
    "ResultCollector",
    "Searcher",
    "WorkerPool",
    "search",
]

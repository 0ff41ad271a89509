"""Stable value types exposed by grepdef.

Treat these exports as the boundary between the search engine and its
consumers (the CLI, output formatting and library callers).
"""

from contract.models import SearchMethod, SearchResult

__all__ = [
    "SearchMethod",
    "SearchResult",
]

"""File-type rules and search configuration for grepdef."""

from rules.config import (
    ConfigError,
    GrepdefDefaults,
    SearchConfiguration,
    build_config,
    load_config,
)
from rules.file_types import (
    FileType,
    QueryPatternError,
    extension_pattern,
    guess_file_type,
    query_pattern,
)

__all__ = [
    "ConfigError",
    "FileType",
    "GrepdefDefaults",
    "QueryPatternError",
    "SearchConfiguration",
    "build_config",
    "extension_pattern",
    "guess_file_type",
    "load_config",
    "query_pattern",
]

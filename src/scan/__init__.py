"""File discovery and per-file scanning for grepdef."""

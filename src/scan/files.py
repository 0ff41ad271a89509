"""File discovery for grepdef, respecting .gitignore and .ignore files."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

from gitignore_parser import parse_gitignore  # type: ignore[import-untyped]

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

logger = logging.getLogger(__name__)

IGNORE_FILENAMES = (".gitignore", ".ignore")


class TraversalError(OSError):
    """Raised when a search root cannot be walked."""


def _ensure_utf8(path: str) -> str:
    """Return path unchanged, or raise if it holds undecodable bytes."""
    try:
        path.encode("utf-8")
    except UnicodeEncodeError as exc:
        msg = f"Error getting string from path {path!r}"
        raise TraversalError(msg) from exc
    return path


def _is_hidden(name: str) -> bool:
    return name.startswith(".")


def _raise_traversal_error(exc: OSError) -> None:
    msg = f"Could not read {exc.filename or 'directory'}: {exc.strerror or exc}"
    raise TraversalError(msg) from exc


def _load_ignore_matchers(directory: str) -> list[Callable[[str], bool]]:
    """Parse the ignore files that live directly in directory."""
    matchers: list[Callable[[str], bool]] = []
    for filename in IGNORE_FILENAMES:
        ignore_path = os.path.join(directory, filename)
        if not os.path.isfile(ignore_path) or os.path.islink(ignore_path):
            continue
        try:
            matchers.append(parse_gitignore(ignore_path))
        except OSError as exc:
            _raise_traversal_error(exc)
        logger.debug("Loaded ignore rules from %s", ignore_path)
    return matchers


def _is_ignored(path: str, matchers: list[Callable[[str], bool]]) -> bool:
    for matcher in matchers:
        try:
            if matcher(path):
                return True
        except ValueError:
            continue
    return False


def walk_files(root: str) -> Iterator[str]:
    """Yield every searchable file below root.

    A root that is itself a file is yielded as given. Directories are walked
    top-down without following symlinked directories; symlinks to files are
    yielded like regular files. Hidden entries and anything matched by a
    ``.gitignore`` or ``.ignore`` at or below root are skipped. Ignore rules
    apply to the descendants of the directory that holds them.

    Args:
        root: File or directory to walk. Yielded paths are joined onto it
            verbatim, so ``./src`` yields ``./src/a.js``.

    Yields:
        File paths, in sorted order within each directory.

    Raises:
        TraversalError: If a directory cannot be read, root does not exist,
            or a yielded path is not valid UTF-8.
    """
    _ensure_utf8(root)
    if os.path.isfile(root):
        yield root
        return

    inherited: dict[str, list[Callable[[str], bool]]] = {
        root: _load_ignore_matchers(root)
    }

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_traversal_error):
        matchers = inherited.pop(dirpath, [])

        kept_dirs: list[str] = []
        for name in sorted(dirnames):
            child = os.path.join(dirpath, name)
            if _is_hidden(name) or _is_ignored(child, matchers):
                continue
            inherited[child] = [*matchers, *_load_ignore_matchers(child)]
            kept_dirs.append(name)
        dirnames[:] = kept_dirs

        for name in sorted(filenames):
            path = os.path.join(dirpath, name)
            if _is_hidden(name) or _is_ignored(path, matchers):
                continue
            yield _ensure_utf8(path)


__all__ = ["TraversalError", "walk_files"]

"""Output formatting: grep-style lines, optional color, or JSON lines."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import orjson
from rich.console import COLOR_SYSTEMS, Console
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rich.color import ColorSystem

    from contract.models import SearchResult


def make_console(*, no_color: bool = False, stderr: bool = False) -> Console:
    """Build a console that never wraps lines or highlights text.

    Color is dropped automatically when the stream is not a terminal or when
    ``NO_COLOR`` is set.
    """
    return Console(
        stderr=stderr,
        no_color=no_color,
        highlight=False,
        soft_wrap=True,
        emoji=False,
    )


PATH_STYLE = Style(color="magenta")
LINE_NUMBER_STYLE = Style(color="green")


def format_result(result: SearchResult, color_system: ColorSystem | None = None) -> str:
    """Render a result as ``path[:line]:text``.

    With a color system the path and line number are wrapped in ANSI
    styles. The matched text is never touched, so tabs survive.
    """
    if color_system is None:
        return result.to_grep()
    parts = [PATH_STYLE.render(result.file_path, color_system=color_system), ":"]
    if result.line_number is not None:
        line_number = LINE_NUMBER_STYLE.render(
            str(result.line_number), color_system=color_system
        )
        parts.extend([line_number, ":"])
    parts.append(result.text)
    return "".join(parts)


def print_results(results: Iterable[SearchResult], *, no_color: bool = False) -> None:
    """Print results in grep format, styled only when stdout is a terminal."""
    console = make_console(no_color=no_color)
    color_system = None
    if console.is_terminal and not console.no_color and console.color_system:
        color_system = COLOR_SYSTEMS[console.color_system]
    # Written directly instead of through console.print, which expands tabs.
    for result in results:
        sys.stdout.write(format_result(result, color_system))
        sys.stdout.write("\n")

def print_results_json(results: Iterable[SearchResult]) -> None:
    """Write one JSON object per result to stdout."""
    for result in results:
        sys.stdout.write(orjson.dumps(result.model_dump()).decode("utf-8"))
        sys.stdout.write("\n")


def error(msg: str) -> None:
    make_console(stderr=True).print(Text.assemble(("Error:", "red"), " ", msg))


def configure_logging(*, debug: bool = False, no_color: bool = False) -> None:
    """Send log records to stderr; DEBUG level when debug is set."""
    handler = RichHandler(
        console=make_console(no_color=no_color, stderr=True),
        show_path=False,
        markup=False,
    )
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )

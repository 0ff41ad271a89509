"""Command-line interface for grepdef."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from contract.models import SearchMethod
from output import configure_logging, error, print_results, print_results_json
from rules.config import ConfigError, build_config, load_config
from rules.file_types import QueryPatternError
from scan.files import TraversalError
from search.searcher import Searcher

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grepdef",
        description="Quick search for symbol definitions in various languages.",
    )
    parser.add_argument(
        "query",
        help="The symbol name (function, class, etc.) to search for",
    )
    parser.add_argument(
        "file_path",
        nargs="*",
        help=(
            "The file path(s) to search; recursively searches directories "
            "and respects .gitignore (default: .)"
        ),
    )
    parser.add_argument(
        "-t",
        "--type",
        dest="file_type",
        default=None,
        help="The file type to search (js, php, rs); guessed if not set but slower",
    )
    parser.add_argument(
        "-n",
        "--line-number",
        action="store_true",
        default=None,
        help="Show line numbers of matches",
    )
    parser.add_argument(
        "-j",
        "--threads",
        type=int,
        default=None,
        help="(Advanced) The number of threads to use",
    )
    parser.add_argument(
        "--search-method",
        choices=[method.value for method in SearchMethod],
        default=None,
        help="(Advanced) The searching method",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        default=None,
        help="Disable color (also supports NO_COLOR env)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print one JSON object per result",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="(Advanced) Print debugging information",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_intermixed_args(argv)

    configure_logging(debug=args.debug, no_color=bool(args.no_color))
    logger.debug("Creating config with args %r", args)

    try:
        defaults = load_config(Path.cwd())
        config = build_config(
            args.query,
            args.file_path,
            args.file_type,
            line_number=args.line_number,
            search_method=args.search_method,
            threads=args.threads,
            debug=args.debug,
            no_color=args.no_color,
            defaults=defaults,
        )
        searcher = Searcher(config)
    except (ConfigError, QueryPatternError) as exc:
        error(str(exc))
        return 2

    try:
        results = searcher.search()
    except TraversalError as exc:
        error(str(exc))
        return 1

    if args.json:
        print_results_json(results)
    else:
        print_results(results, no_color=config.no_color)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

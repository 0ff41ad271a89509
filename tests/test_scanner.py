from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from contract.models import SearchMethod, SearchResult
from rules.config import SearchConfiguration
from rules.file_types import FileType, query_pattern
from scan.scanner import scan_file

if TYPE_CHECKING:
    from pathlib import Path


def _config(
    query: str,
    file_type: FileType = FileType.JS,
    *,
    search_method: SearchMethod = SearchMethod.PRESCAN_REGEX,
    line_number: bool = True,
) -> SearchConfiguration:
    return SearchConfiguration(
        query=query,
        file_type=file_type,
        search_method=search_method,
        line_number=line_number,
    )


def _scan(path: Path, config: SearchConfiguration) -> list[SearchResult]:
    pattern = query_pattern(config.query, config.file_type)
    return scan_file(str(path), pattern, config)


def _write_js(tmp_path: Path) -> Path:
    path = tmp_path / "a.js"
    lines = ["// helpers"] * 6 + ["  function parseQuery() {  ", "}", ""]
    path.write_text("\n".join(lines), encoding="utf-8")
    return path


@pytest.mark.parametrize("search_method", list(SearchMethod))
def test_scan_file_reports_trimmed_line_and_number(
    tmp_path: Path, search_method: SearchMethod
) -> None:
    path = _write_js(tmp_path)

    results = _scan(path, _config("parseQuery", search_method=search_method))

    assert results == [
        SearchResult(
            file_path=str(path),
            line_number=7,
            text="function parseQuery() {",
        )
    ]


def test_scan_file_omits_line_numbers_when_disabled(tmp_path: Path) -> None:
    path = _write_js(tmp_path)

    results = _scan(path, _config("parseQuery", line_number=False))

    assert results == [
        SearchResult(file_path=str(path), line_number=None, text="function parseQuery() {")
    ]


@pytest.mark.parametrize("search_method", list(SearchMethod))
def test_scan_file_keeps_line_order(tmp_path: Path, search_method: SearchMethod) -> None:
    path = tmp_path / "a.ts"
    path.write_text(
        "type Options = {\n  query: string;\n};\nconst query = 'x';\nquery(q) {\n",
        encoding="utf-8",
    )

    results = _scan(path, _config("query", search_method=search_method))

    assert [result.line_number for result in results] == [2, 4, 5]


@pytest.mark.parametrize("search_method", list(SearchMethod))
def test_scan_file_literal_only_match_yields_nothing(
    tmp_path: Path, search_method: SearchMethod
) -> None:
    path = tmp_path / "a.js"
    path.write_text("return parseQuery();\n", encoding="utf-8")

    assert _scan(path, _config("parseQuery", search_method=search_method)) == []


@pytest.mark.parametrize("search_method", list(SearchMethod))
def test_scan_file_skips_undecodable_lines(
    tmp_path: Path, search_method: SearchMethod
) -> None:
    path = tmp_path / "a.php"
    path.write_bytes(
        b"<?php\nfunction parseQuery\xff() {}\nfunction parseQuery() {}\n"
    )

    results = _scan(path, _config("parseQuery", FileType.PHP, search_method=search_method))

    assert results == [
        SearchResult(file_path=str(path), line_number=3, text="function parseQuery() {}")
    ]


@pytest.mark.parametrize("search_method", list(SearchMethod))
def test_scan_file_missing_file_yields_nothing(
    tmp_path: Path, search_method: SearchMethod
) -> None:
    config = _config("parseQuery", search_method=search_method)

    assert _scan(tmp_path / "missing.js", config) == []


@pytest.mark.parametrize("search_method", list(SearchMethod))
def test_scan_file_empty_file_yields_nothing(
    tmp_path: Path, search_method: SearchMethod
) -> None:
    path = tmp_path / "empty.js"
    path.write_bytes(b"")

    assert _scan(path, _config("parseQuery", search_method=search_method)) == []


def test_scan_file_handles_crlf_line_endings(tmp_path: Path) -> None:
    path = tmp_path / "a.js"
    path.write_bytes(b"const a = 1;\r\nfunction parseQuery() {\r\n}\r\n")

    results = _scan(path, _config("parseQuery"))

    assert results == [
        SearchResult(file_path=str(path), line_number=2, text="function parseQuery() {")
    ]

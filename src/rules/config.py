from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import tomllib
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveInt,
    ValidationError,
    field_validator,
)

from contract.models import SearchMethod
from rules.file_types import FileType, guess_file_type

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "grepdef.toml"

DEFAULT_THREADS = 5


class ConfigError(Exception):
    """Raised when a search cannot be configured."""


class GrepdefDefaults(BaseModel):
    """Defaults read from grepdef.toml; every key is optional."""

    model_config = ConfigDict(extra="forbid")

    file_type: str | None = Field(
        default=None,
        description="File type to search when --type is not given",
    )
    line_number: bool = Field(default=False, description="Show line numbers")
    search_method: SearchMethod = Field(
        default=SearchMethod.PRESCAN_REGEX,
        description="Pre-scan strategy",
    )
    threads: PositiveInt = Field(
        default=DEFAULT_THREADS,
        description="Number of worker threads",
    )
    no_color: bool = Field(default=False, description="Disable colored output")

    @field_validator("file_type")
    @classmethod
    def validate_file_type(cls, v: str | None) -> str | None:
        if v is not None:
            FileType.from_string(v)
        return v


class SearchConfiguration(BaseModel):
    """Immutable, validated settings for one search.

    Built once per invocation with :func:`build_config` and shared read-only
    by every worker thread.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    query: str = Field(min_length=1, description="The symbol name to search for")
    file_paths: tuple[str, ...] = Field(
        default=(".",),
        min_length=1,
        description="Files or directories to search recursively",
    )
    file_type: FileType = Field(description="The type of files to scan")
    line_number: bool = Field(default=False, description="Include line numbers")
    search_method: SearchMethod = Field(
        default=SearchMethod.PRESCAN_REGEX,
        description="Pre-scan strategy",
    )
    threads: PositiveInt = Field(
        default=DEFAULT_THREADS,
        description="Number of worker threads",
    )
    debug: bool = Field(default=False, description="Log debugging information")
    no_color: bool = Field(default=False, description="Disable colored output")


def load_config(root: Path) -> GrepdefDefaults:
    """Load defaults from grepdef.toml in root if it exists."""
    config_path = Path(root) / CONFIG_FILENAME

    if not config_path.is_file():
        return GrepdefDefaults()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        defaults = GrepdefDefaults.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e

    logger.debug("Loaded defaults from %s", config_path)
    return defaults


def build_config(
    query: str,
    file_paths: list[str] | None = None,
    file_type: str | None = None,
    *,
    line_number: bool | None = None,
    search_method: SearchMethod | str | None = None,
    threads: int | None = None,
    debug: bool = False,
    no_color: bool | None = None,
    defaults: GrepdefDefaults | None = None,
) -> SearchConfiguration:
    """Validate raw search input into a SearchConfiguration.

    Explicit arguments win over ``defaults``, which win over the built-in
    defaults. When no file type is given anywhere it is guessed from the
    first recognizable file under ``file_paths``.

    Raises:
        ConfigError: If any value is invalid or the file type cannot be
            determined.
    """
    if defaults is None:
        defaults = GrepdefDefaults()

    paths = tuple(file_paths) if file_paths else (".",)

    type_name = file_type if file_type is not None else defaults.file_type
    try:
        resolved_type = (
            FileType.from_string(type_name)
            if type_name is not None
            else guess_file_type(paths)
        )
    except ValueError as e:
        raise ConfigError(str(e)) from e

    values: dict[str, Any] = {
        "query": query,
        "file_paths": paths,
        "file_type": resolved_type,
        "line_number": defaults.line_number if line_number is None else line_number,
        "search_method": (
            defaults.search_method if search_method is None else search_method
        ),
        "threads": defaults.threads if threads is None else threads,
        "debug": debug,
        "no_color": defaults.no_color if no_color is None else no_color,
    }

    try:
        config = SearchConfiguration.model_validate(values)
    except ValidationError as e:
        msg = f"Invalid search configuration: {e}"
        raise ConfigError(msg) from e

    logger.debug("Created config %r", config)
    return config

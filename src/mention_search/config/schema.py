"""Pydantic models for mention-search configuration."""

from collections.abc import Iterable
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mention_search.utils.files import normalize_extension

# Common binary/generated file extensions hidden from suggestions
DEFAULT_EXCLUDED_EXTENSIONS = frozenset(
    {
        "exe",
        "dll",
        "so",
        "dylib",
        "a",
        "o",
        "obj",
        "bin",
        "class",
        "jar",
        "war",
        "pyc",
        "pyo",
        "pyd",
    }
)


class OutputFormat(str, Enum):
    """Supported output formats."""

    RICH = "rich"
    PLAIN = "plain"
    JSON = "json"


def _normalize_extensions(value: Any) -> set[str]:
    if value is None:
        return set()
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, Iterable):
        raise ValueError("extensions must be a list of strings")
    return {normalize_extension(str(ext)) for ext in value if str(ext).strip()}


class SearchConfig(BaseModel):
    """Configuration for file search behavior."""

    model_config = ConfigDict(validate_assignment=True)

    max_depth: int = Field(default=10, ge=0)
    max_results: int = Field(default=50, ge=0)
    include_extensions: set[str] = Field(default_factory=set)
    exclude_extensions: set[str] = Field(
        default_factory=lambda: set(DEFAULT_EXCLUDED_EXTENSIONS)
    )
    respect_gitignore: bool = True
    include_hidden: bool = False
    min_score_threshold: float = Field(default=0.1, ge=0.0, le=1.0)
    enable_caching: bool = True
    cache_refresh_interval: float = Field(default=5.0, ge=0.0)  # seconds

    @field_validator("include_extensions", "exclude_extensions", mode="before")
    @classmethod
    def _clean_extensions(cls, value: Any) -> set[str]:
        return _normalize_extensions(value)

    def _replace(self, **changes: Any) -> "SearchConfig":
        return type(self).model_validate({**self.model_dump(), **changes})

    def with_max_depth(self, depth: int) -> "SearchConfig":
        """Return a copy with a different walk depth limit."""
        return self._replace(max_depth=depth)

    def with_max_results(self, maximum: int) -> "SearchConfig":
        """Return a copy with a different result cap."""
        return self._replace(max_results=maximum)

    def with_extensions(self, extensions: Iterable[str]) -> "SearchConfig":
        """Return a copy that only includes the given extensions."""
        return self._replace(include_extensions=list(extensions))

    def with_excluded_extensions(self, extensions: Iterable[str]) -> "SearchConfig":
        """Return a copy that excludes exactly the given extensions."""
        return self._replace(exclude_extensions=list(extensions))

    def with_gitignore(self, respect: bool) -> "SearchConfig":
        """Return a copy with .gitignore handling switched on or off."""
        return self._replace(respect_gitignore=respect)

    def with_hidden_files(self, include: bool) -> "SearchConfig":
        """Return a copy that includes or hides dot-files."""
        return self._replace(include_hidden=include)

    def with_min_score(self, threshold: float) -> "SearchConfig":
        """Return a copy with a different minimum score."""
        return self._replace(min_score_threshold=threshold)


class OutputConfig(BaseModel):
    """Output configuration."""

    default_format: OutputFormat = OutputFormat.RICH
    color: bool = True
    show_scores: bool = True


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    file: Path | None = None  # Default: no file logging
    json_format: bool = False


class MentionSearchConfig(BaseModel):
    """Root configuration for mention-search."""

    search: SearchConfig = Field(default_factory=SearchConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

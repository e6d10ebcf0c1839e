"""Output formatter protocol and base classes."""

import sys
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, TextIO

from mention_search.config.schema import OutputFormat
from mention_search.search.provider import FileSearchResult

RESULT_COLUMNS = ["path", "type", "score"]


def result_rows(
    results: Sequence[FileSearchResult],
    show_scores: bool = True,
    verbose: bool = False,
) -> list[dict[str, Any]]:
    """Flatten suggestion rows into dictionaries for rendering.

    Args:
        results: Suggestions, best first.
        show_scores: Include the rounded score column.
        verbose: Include the absolute insertion path.

    Returns:
        One dictionary per result, in input order.
    """
    rows = []
    for result in results:
        row: dict[str, Any] = {
            "path": result.display_name,
            "type": "dir" if result.is_directory else "file",
        }
        if show_scores:
            row["score"] = round(result.score, 3)
        if verbose:
            row["absolute_path"] = result.insertion_path
        rows.append(row)
    return rows


class OutputFormatter(ABC):
    """Abstract base class for output formatters.

    Formatters render suggestion lists, reference sets and cache
    statistics in one of the supported output formats.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        verbose: bool = False,
    ) -> None:
        """Initialize the formatter.

        Args:
            stream: Output stream (defaults to stdout).
            verbose: Whether to show verbose output.
        """
        self._stream = stream or sys.stdout
        self._verbose = verbose

    @property
    def stream(self) -> TextIO:
        """Get the output stream."""
        return self._stream

    @property
    def verbose(self) -> bool:
        """Whether verbose output is enabled."""
        return self._verbose

    @property
    @abstractmethod
    def format_type(self) -> OutputFormat:
        """Get the format type of this formatter."""
        pass

    @abstractmethod
    def format_results(
        self,
        results: Sequence[FileSearchResult],
        title: str | None = None,
        show_scores: bool = True,
    ) -> str:
        """Format ranked suggestions.

        Args:
            results: Suggestions, best first.
            title: Optional title.
            show_scores: Whether to include scores.

        Returns:
            Formatted string representation.
        """
        pass

    @abstractmethod
    def format_list(self, items: list[str], title: str | None = None) -> str:
        """Format a list of items."""
        pass

    @abstractmethod
    def format_mapping(self, data: dict[str, Any], title: str | None = None) -> str:
        """Format key-value pairs."""
        pass

    def print(self, text: str) -> None:
        """Print formatted text to the output stream."""
        if text:
            print(text, file=self._stream)

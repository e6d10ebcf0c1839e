"""JSON output formatter."""

import json
from collections.abc import Sequence
from typing import Any, TextIO

from mention_search.config.schema import OutputFormat
from mention_search.output.base import OutputFormatter, result_rows
from mention_search.search.provider import FileSearchResult


class JSONFormatter(OutputFormatter):
    """JSON output formatter.

    Produces structured JSON output for editor plugins and scripts.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        verbose: bool = False,
        indent: int | None = 2,
        ensure_ascii: bool = False,
    ) -> None:
        """Initialize JSON formatter.

        Args:
            stream: Output stream.
            verbose: Whether to show verbose output.
            indent: JSON indentation (None for compact).
            ensure_ascii: Whether to escape non-ASCII characters.
        """
        super().__init__(stream, verbose)
        self._indent = indent
        self._ensure_ascii = ensure_ascii

    @property
    def format_type(self) -> OutputFormat:
        return OutputFormat.JSON

    def _to_json(self, data: Any) -> str:
        return json.dumps(
            data,
            indent=self._indent,
            ensure_ascii=self._ensure_ascii,
            default=str,  # Paths, datetimes
        )

    def format_results(
        self,
        results: Sequence[FileSearchResult],
        title: str | None = None,
        show_scores: bool = True,
    ) -> str:
        """Format suggestions as a JSON document."""
        output: dict[str, Any] = {
            "success": True,
            "results": [
                {**row, "insertion_path": result.insertion_path}
                for row, result in zip(
                    result_rows(results, show_scores=show_scores), results
                )
            ],
            "count": len(results),
        }
        if title:
            output["title"] = title
        return self._to_json(output)

    def format_list(self, items: list[str], title: str | None = None) -> str:
        """Format a list of items as JSON."""
        output: dict[str, Any] = {
            "success": True,
            "items": items,
            "count": len(items),
        }
        if title:
            output["title"] = title
        return self._to_json(output)

    def format_mapping(self, data: dict[str, Any], title: str | None = None) -> str:
        """Format key-value pairs as a JSON object."""
        output: dict[str, Any] = {"success": True, "data": data}
        if title:
            output["title"] = title
        return self._to_json(output)

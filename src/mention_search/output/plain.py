"""Plain text output formatter."""

from collections.abc import Sequence
from typing import Any

from mention_search.config.schema import OutputFormat
from mention_search.output.base import OutputFormatter, result_rows
from mention_search.search.provider import FileSearchResult


class PlainFormatter(OutputFormatter):
    """Plain text output formatter.

    Produces simple, unformatted text suitable for piping to other
    commands. Without scores each result is just its path on one line.
    """

    @property
    def format_type(self) -> OutputFormat:
        return OutputFormat.PLAIN

    def format_results(
        self,
        results: Sequence[FileSearchResult],
        title: str | None = None,
        show_scores: bool = True,
    ) -> str:
        """Format suggestions as a plain text table."""
        if not results:
            return ""
        if not show_scores and not self._verbose:
            return "\n".join(result.display_name for result in results)
        rows = result_rows(results, show_scores=show_scores, verbose=self._verbose)
        return self._format_table(rows, title)

    def format_list(self, items: list[str], title: str | None = None) -> str:
        """Format a list of items as plain text."""
        lines: list[str] = []

        if title:
            lines.append(title)
            lines.append("-" * len(title))
            lines.append("")

        for item in items:
            lines.append(f"  {item}")

        return "\n".join(lines)

    def format_mapping(self, data: dict[str, Any], title: str | None = None) -> str:
        """Format key-value pairs as plain text."""
        lines: list[str] = []

        if title:
            lines.append(title)
            lines.append("-" * len(title))
            lines.append("")

        for key, value in data.items():
            lines.append(f"{key}: {value}")

        return "\n".join(lines)

    def _format_table(self, rows: list[dict[str, Any]], title: str | None) -> str:
        columns = list(rows[0].keys())

        # Calculate column widths
        widths: dict[str, int] = {}
        for col in columns:
            widths[col] = len(col)
            for row in rows:
                widths[col] = max(widths[col], len(str(row.get(col, ""))))

        lines: list[str] = []

        if title:
            lines.append(title)
            lines.append("")

        lines.append("  ".join(col.ljust(widths[col]) for col in columns).rstrip())
        lines.append("  ".join("-" * widths[col] for col in columns))

        for row in rows:
            lines.append(
                "  ".join(
                    str(row.get(col, "")).ljust(widths[col]) for col in columns
                ).rstrip()
            )

        return "\n".join(lines)

"""Rich terminal output formatter."""

from collections.abc import Sequence
from io import StringIO
from typing import Any, TextIO

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from mention_search.config.schema import OutputFormat
from mention_search.output.base import OutputFormatter
from mention_search.search.provider import FileSearchResult


class RichFormatter(OutputFormatter):
    """Rich terminal output formatter.

    Renders suggestions as a table with directories highlighted and
    scores right-aligned.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        verbose: bool = False,
        width: int | None = None,
        color: bool = True,
    ) -> None:
        """Initialize rich formatter.

        Args:
            stream: Output stream.
            verbose: Whether to show verbose output.
            width: Console width (None for auto-detect).
            color: Whether to emit ANSI styles.
        """
        super().__init__(stream, verbose)
        self._width = width
        self._color = color

    @property
    def format_type(self) -> OutputFormat:
        return OutputFormat.RICH

    def _render(self, renderable: Any) -> str:
        # Render to a string so print() stays stream-agnostic
        string_io = StringIO()
        console = Console(
            file=string_io,
            width=self._width,
            force_terminal=self._color and self._stream.isatty(),
            no_color=not self._color,
        )
        console.print(renderable)
        return string_io.getvalue().rstrip()

    def format_results(
        self,
        results: Sequence[FileSearchResult],
        title: str | None = None,
        show_scores: bool = True,
    ) -> str:
        """Format suggestions as a Rich table."""
        if not results:
            return self._render(Text("No matching files", style="dim"))

        table = Table(title=title)
        table.add_column("Path", style="cyan", no_wrap=True)
        if show_scores:
            table.add_column("Score", justify="right")
        if self._verbose:
            table.add_column("Absolute path", style="dim")

        for result in results:
            path = Text(result.display_name, style="bold blue" if result.is_directory else "")
            cells: list[Any] = [path]
            if show_scores:
                cells.append(f"{result.score:.3f}")
            if self._verbose:
                cells.append(result.insertion_path)
            table.add_row(*cells)

        return self._render(table)

    def format_list(self, items: list[str], title: str | None = None) -> str:
        """Format a list with Rich formatting."""
        table = Table(show_header=False, box=None)
        table.add_column("Item")
        for item in items:
            table.add_row(f"• {item}")

        if title:
            return self._render(Panel(table, title=title))
        return self._render(table)

    def format_mapping(self, data: dict[str, Any], title: str | None = None) -> str:
        """Format key-value pairs as a two-column table."""
        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column("Key", style="bold cyan")
        table.add_column("Value")
        for key, value in data.items():
            table.add_row(str(key), str(value))

        if title:
            return self._render(Panel(table, title=title))
        return self._render(table)

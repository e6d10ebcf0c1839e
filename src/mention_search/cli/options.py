"""Shared CLI options for mention-search commands.

This module provides reusable Typer options that are shared across
multiple commands.
"""

from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from mention_search.config.schema import OutputFormat


class FormatChoice(str, Enum):
    """Output format choices for CLI."""

    PLAIN = "plain"
    JSON = "json"
    RICH = "rich"


# Type aliases for common CLI options
FormatOption = Annotated[
    FormatChoice | None,
    typer.Option(
        "--format",
        "-f",
        help="Output format (plain, json, rich). Defaults to config setting.",
        case_sensitive=False,
    ),
]

RootOption = Annotated[
    Path,
    typer.Option(
        "--root",
        "-r",
        help="Project root to search.",
    ),
]

LimitOption = Annotated[
    int | None,
    typer.Option(
        "--limit",
        "-n",
        min=0,
        help="Maximum number of results. Defaults to config setting.",
    ),
]

HiddenOption = Annotated[
    bool,
    typer.Option(
        "--hidden",
        "-H",
        help="Include dot-files and dot-directories.",
    ),
]

NoGitignoreOption = Annotated[
    bool,
    typer.Option(
        "--no-gitignore",
        help="Ignore .gitignore and the built-in ignore patterns.",
    ),
]

VerboseOption = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        help="Show verbose output including absolute paths.",
    ),
]


def get_output_format(
    format_choice: FormatChoice | None, default: OutputFormat = OutputFormat.RICH
) -> OutputFormat:
    """Convert CLI format choice to OutputFormat.

    Args:
        format_choice: CLI format choice or None.
        default: Format to use if none specified.

    Returns:
        OutputFormat enum value.
    """
    if format_choice is None:
        return default
    return OutputFormat(format_choice.value)

"""Main CLI application for mention-search."""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from mention_search import __version__
from mention_search.cli.options import (
    FormatChoice,
    FormatOption,
    HiddenOption,
    LimitOption,
    NoGitignoreOption,
    RootOption,
    VerboseOption,
    get_output_format,
)
from mention_search.config import get_config
from mention_search.config.defaults import get_config_path
from mention_search.config.schema import OutputFormat, SearchConfig
from mention_search.exceptions import InvalidArgumentError, MentionSearchError
from mention_search.output import OutputFormatter, get_formatter
from mention_search.search import (
    FileSearchResult,
    SearchSystem,
    extract_references,
    extract_search_query,
)
from mention_search.utils.logging import setup_logging

# Create Typer app
app = typer.Typer(
    name="mention-search",
    help="Ranked @file suggestions for a project",
    add_completion=True,
    no_args_is_help=True,
)

# Rich console for output
console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"mention-search version {__version__}")
        raise typer.Exit()


def _fail(error: MentionSearchError) -> typer.Exit:
    err_console.print(f"[red]Error:[/red] {escape(str(error))}")
    return typer.Exit(error.exit_code)


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Ranked @file suggestions for a project."""
    try:
        config = get_config()
    except MentionSearchError as e:
        raise _fail(e) from None

    setup_logging(
        level=config.logging.level,
        log_file=config.logging.file,
        json_format=config.logging.json_format,
        use_color=config.output.color,
    )


def _search_config(
    limit: int | None = None,
    hidden: bool = False,
    no_gitignore: bool = False,
) -> SearchConfig:
    """Apply command-line overrides on top of the configured search settings."""
    search_config = get_config().search
    if limit is not None:
        search_config = search_config.with_max_results(limit)
    if hidden:
        search_config = search_config.with_hidden_files(True)
    if no_gitignore:
        search_config = search_config.with_gitignore(False)
    return search_config


def _formatter(format_choice: FormatChoice | None, verbose: bool) -> OutputFormatter:
    output_config = get_config().output
    output_format = get_output_format(format_choice, output_config.default_format)
    if output_format == OutputFormat.RICH:
        return get_formatter(output_format, verbose=verbose, color=output_config.color)
    return get_formatter(output_format, verbose=verbose)


def _print_results(
    results: list[FileSearchResult],
    formatter: OutputFormatter,
    title: str | None = None,
) -> None:
    show_scores = get_config().output.show_scores
    formatter.print(formatter.format_results(results, title=title, show_scores=show_scores))


@app.command()
def find(
    query: str = typer.Argument("", help="Text typed after @. Empty lists everything."),
    root: RootOption = Path("."),
    exclude: list[str] | None = typer.Option(
        None,
        "--exclude",
        "-x",
        help="Path to leave out (repeatable).",
    ),
    text: str | None = typer.Option(
        None,
        "--text",
        "-t",
        help="Composer text; paths it already mentions are left out.",
    ),
    limit: LimitOption = None,
    hidden: HiddenOption = False,
    no_gitignore: NoGitignoreOption = False,
    format: FormatOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Rank project files against a query."""
    excluded = set(exclude or [])
    if text is not None:
        excluded |= extract_references(text)

    try:
        system = SearchSystem(root, _search_config(limit, hidden, no_gitignore))
        results = system.search_with_exclusions(query, excluded)
    except MentionSearchError as e:
        raise _fail(e) from None

    rows = [FileSearchResult.from_search_result(result) for result in results]
    _print_results(rows, _formatter(format, verbose), title=f"@{query}" if query else None)


@app.command()
def ls(
    root: RootOption = Path("."),
    limit: LimitOption = None,
    hidden: HiddenOption = False,
    no_gitignore: NoGitignoreOption = False,
    format: FormatOption = None,
    verbose: VerboseOption = False,
) -> None:
    """List what a bare @ would suggest: directories first, then by name."""
    try:
        system = SearchSystem(root, _search_config(limit, hidden, no_gitignore))
        results = system.get_all_files()
    except MentionSearchError as e:
        raise _fail(e) from None

    rows = [FileSearchResult.from_search_result(result) for result in results]
    _print_results(rows, _formatter(format, verbose))


@app.command()
def refs(
    text: str = typer.Argument(..., help="Composer text to scan for @mentions."),
    cursor: int | None = typer.Option(
        None,
        "--cursor",
        "-c",
        min=0,
        help="Cursor offset. Defaults to the end of the text.",
    ),
    format: FormatOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Show the paths a message already mentions."""
    if cursor is not None and cursor > len(text):
        raise _fail(
            InvalidArgumentError(f"Cursor {cursor} is past the end of the text ({len(text)})")
        )

    formatter = _formatter(format, verbose)
    references = sorted(extract_references(text, cursor))

    if verbose:
        query = extract_search_query(text, cursor)
        formatter.print(
            formatter.format_mapping(
                {
                    "references": ", ".join(references) or "-",
                    "active query": "-" if query is None else f"@{query}",
                },
                title="Mentions",
            )
        )
        return

    formatter.print(formatter.format_list(references))


@app.command()
def stats(
    root: RootOption = Path("."),
    hidden: HiddenOption = False,
    no_gitignore: NoGitignoreOption = False,
    format: FormatOption = None,
) -> None:
    """Index the project and show cache statistics."""
    try:
        system = SearchSystem(root, _search_config(hidden=hidden, no_gitignore=no_gitignore))
        system.refresh()
    except MentionSearchError as e:
        raise _fail(e) from None

    cache_stats = system.cache_stats()
    formatter = _formatter(format, verbose=False)
    formatter.print(
        formatter.format_mapping(
            {
                "project root": str(system.project_root),
                "files": cache_stats.total_files,
                "directories": cache_stats.total_directories,
                "cache age (s)": round(cache_stats.cache_age, 3),
                "valid": cache_stats.is_valid,
                "skipped directories": ", ".join(cache_stats.skipped_directories) or "-",
            },
            title="Cache",
        )
    )


@app.command("config")
def config_cmd(
    show_path: bool = typer.Option(
        False,
        "--path",
        "-p",
        help="Show config file path.",
    ),
) -> None:
    """Show current configuration."""
    if show_path:
        console.print(str(get_config_path()))
        return

    config = get_config()
    search_config = config.search
    console.print("[bold]mention-search configuration[/bold]\n")
    console.print(f"Config file: {escape(str(get_config_path()))}")
    console.print(f"Max results: {search_config.max_results}")
    console.print(f"Max depth: {search_config.max_depth}")
    console.print(f"Min score: {search_config.min_score_threshold}")
    console.print(f"Respect .gitignore: {search_config.respect_gitignore}")
    console.print(f"Include hidden: {search_config.include_hidden}")
    console.print(
        f"Caching: {'enabled' if search_config.enable_caching else 'disabled'}"
        f" (refresh every {search_config.cache_refresh_interval}s)"
    )
    console.print(f"Output format: {config.output.default_format.value}")
    console.print(f"Log level: {config.logging.level}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

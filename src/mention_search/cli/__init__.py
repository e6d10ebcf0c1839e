"""Command-line interface for mention-search."""

from mention_search.cli.app import app, main

__all__ = ["app", "main"]

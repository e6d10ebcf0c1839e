"""mention-search: ranked ``@file`` suggestions for chat composers."""

from mention_search.config.schema import SearchConfig
from mention_search.search import (
    SearchResult,
    SearchSystem,
    extract_references,
    extract_search_query,
    should_show_file_search,
)

__version__ = "0.1.0"

__all__ = [
    "SearchConfig",
    "SearchResult",
    "SearchSystem",
    "__version__",
    "extract_references",
    "extract_search_query",
    "should_show_file_search",
]

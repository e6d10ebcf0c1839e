"""File mention search.

This module provides the search core used by a chat composer: a cached
walk of the project tree, fuzzy ranking of files, and parsing of ``@path``
mentions in free text.
"""

from mention_search.search.cache import CachedEntry, CacheSnapshot, CacheStats, FileCache
from mention_search.search.engine import SearchEngine, SearchResult
from mention_search.search.fuzzy import FuzzyScorer, MatchScore, MatchType
from mention_search.search.ignore import ExclusionFilter, ExclusionPattern
from mention_search.search.provider import (
    DefaultFileSearchProvider,
    FileSearchProvider,
    FileSearchResult,
    MockFileSearchProvider,
)
from mention_search.search.references import (
    extract_references,
    extract_search_query,
    should_show_file_search,
)
from mention_search.search.refresher import BackgroundRefresher
from mention_search.search.system import SearchSystem

__all__ = [
    # Facade
    "SearchSystem",
    "BackgroundRefresher",
    # Engine
    "SearchEngine",
    "SearchResult",
    # Cache
    "FileCache",
    "CachedEntry",
    "CacheSnapshot",
    "CacheStats",
    # Scoring
    "FuzzyScorer",
    "MatchScore",
    "MatchType",
    # Ignore rules
    "ExclusionFilter",
    "ExclusionPattern",
    # Input parsing
    "extract_references",
    "extract_search_query",
    "should_show_file_search",
    # Providers
    "FileSearchProvider",
    "FileSearchResult",
    "DefaultFileSearchProvider",
    "MockFileSearchProvider",
]

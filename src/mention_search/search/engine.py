"""Core file search engine.

The engine owns the file cache for one project, keeps it fresh, and ranks
cached entries against a query with the fuzzy scorer.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from mention_search.config.schema import SearchConfig
from mention_search.search.cache import CachedEntry, CacheSnapshot, CacheStats, FileCache
from mention_search.search.fuzzy import FuzzyScorer, MatchType, result_sort_key
from mention_search.search.ignore import ExclusionFilter
from mention_search.utils.files import file_extension, is_hidden_name, relative_posix
from mention_search.utils.logging import get_logger

logger = get_logger(__name__)

# Score given to every entry when listing without a query
NEUTRAL_SCORE = 1.0


@dataclass
class SearchResult:
    """A ranked cache entry."""

    entry: CachedEntry
    score: float  # 0-1
    match_type: MatchType = MatchType.EXACT
    matched_positions: list[int] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        return self.entry.display_name

    @property
    def insertion_text(self) -> str:
        return self.entry.insertion_text


class SearchEngine:
    """Ranks project files for ``@`` mentions.

    The engine is synchronous: a stale cache is rebuilt inline before the
    query runs. Callers that cannot afford the rebuild on their own thread
    can build a snapshot elsewhere and hand it over with
    :meth:`publish_snapshot`.
    """

    def __init__(
        self,
        project_root: Path,
        config: SearchConfig | None = None,
        exclusion_filter: ExclusionFilter | None = None,
    ) -> None:
        """Initialize the search engine.

        Args:
            project_root: Directory to search.
            config: Search configuration. Defaults to ``SearchConfig()``.
            exclusion_filter: Ignore rules to use instead of loading the
                project's ``.gitignore``.

        Raises:
            IgnoreFileError: If the project ignore file cannot be read.
        """
        self.project_root = Path(project_root)
        self.config = config or SearchConfig()
        self.scorer = FuzzyScorer()
        self.cache = FileCache(
            self.project_root,
            ttl=self.config.cache_refresh_interval,
            max_depth=self.config.max_depth,
        )

        self.exclusion_filter: ExclusionFilter | None = None
        if self.config.respect_gitignore:
            self.exclusion_filter = exclusion_filter or ExclusionFilter.build(
                self.project_root
            )

    # -------------------------------------------------------------------------
    # Cache lifecycle
    # -------------------------------------------------------------------------

    def should_include(self, path: Path) -> bool:
        """Inclusion predicate used while walking the project."""
        if path == self.project_root:
            return True
        if self.exclusion_filter is not None and self.exclusion_filter.should_ignore(path):
            return False
        if not self.config.include_hidden and is_hidden_name(path.name):
            return False
        return True

    def ensure_fresh(self) -> None:
        """Rebuild the cache if it is stale or caching is disabled."""
        if not self.config.enable_caching or not self.cache.is_valid():
            self.refresh()

    def refresh(self) -> None:
        """Rebuild the cache unconditionally."""
        self.cache.rebuild(self.should_include)

    def build_snapshot(self) -> CacheSnapshot:
        """Walk the project and return a snapshot without publishing it."""
        return self.cache.build_snapshot(self.should_include)

    def publish_snapshot(self, snapshot: CacheSnapshot) -> None:
        """Make a snapshot from :meth:`build_snapshot` the current one."""
        self.cache.publish(snapshot)

    def get_cache_stats(self) -> CacheStats:
        return self.cache.stats()

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def search(self, query: str) -> list[SearchResult]:
        """Search for files matching the query."""
        return self.search_with_exclusions(query, ())

    def search_with_exclusions(
        self, query: str, exclude_paths: Iterable[str]
    ) -> list[SearchResult]:
        """Search for files, skipping already referenced paths.

        Args:
            query: Text typed after ``@``. Absolute paths inside the
                project are matched as relative paths.
            exclude_paths: Relative or absolute paths to leave out.

        Returns:
            Results sorted best first, at most ``max_results`` long. An
            empty query lists all files instead.
        """
        self.ensure_fresh()
        excluded = _normalize_exclusions(exclude_paths)

        query = self._relativize_query(query.strip())
        if not query:
            return self._list_entries(excluded)

        query = query.lower()
        threshold = self.config.min_score_threshold
        results: list[SearchResult] = []

        for entry in self.cache.get_entries():
            if not self._passes_filters(entry) or _is_excluded(entry, excluded):
                continue

            match = self.scorer.match_candidate(
                query, entry.name_lowercase, entry.relative_path_lowercase
            )
            if match is None or match.score < threshold:
                continue

            results.append(
                SearchResult(
                    entry=entry,
                    score=match.score,
                    match_type=match.match_type,
                    matched_positions=match.matched_positions,
                )
            )

        results.sort(key=lambda r: result_sort_key(r.score, r.entry.relative_path))
        return results[: self.config.max_results]

    def get_all_files(self) -> list[SearchResult]:
        """List every file (for a bare ``@``)."""
        return self.get_all_files_with_exclusions(())

    def get_all_files_with_exclusions(
        self, exclude_paths: Iterable[str]
    ) -> list[SearchResult]:
        """List every file except the excluded paths."""
        self.ensure_fresh()
        return self._list_entries(_normalize_exclusions(exclude_paths))

    def _list_entries(self, excluded: frozenset[str]) -> list[SearchResult]:
        results = [
            SearchResult(entry=entry, score=NEUTRAL_SCORE)
            for entry in self.cache.get_entries()
            if self._passes_filters(entry) and not _is_excluded(entry, excluded)
        ]
        # Directories first, then alphabetically
        results.sort(
            key=lambda r: (not r.entry.is_directory, r.entry.name, r.entry.relative_path)
        )
        return results[: self.config.max_results]

    def _passes_filters(self, entry: CachedEntry) -> bool:
        extension = file_extension(entry.name)

        if self.config.include_extensions and extension not in self.config.include_extensions:
            return False

        return not (extension and extension in self.config.exclude_extensions)

    def _relativize_query(self, query: str) -> str:
        if not Path(query).is_absolute():
            return query

        relative = relative_posix(Path(query), self.project_root)
        if relative is None:
            # Absolute path outside the project, match it as typed
            return query
        return "" if relative == "." else relative


def _normalize_exclusions(exclude_paths: Iterable[str]) -> frozenset[str]:
    normalized = set()
    for path in exclude_paths:
        if not path:
            continue
        normalized.add(path)
        stripped = path.rstrip("/")
        if stripped:
            normalized.add(stripped)
    return frozenset(normalized)


def _is_excluded(entry: CachedEntry, excluded: frozenset[str]) -> bool:
    if not excluded:
        return False
    return entry.relative_path in excluded or str(entry.absolute_path) in excluded

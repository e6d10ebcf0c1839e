"""Public entry point for file mention search."""

from collections.abc import Iterable
from pathlib import Path

from mention_search.config.schema import SearchConfig
from mention_search.exceptions import ProjectRootError
from mention_search.search.cache import CacheSnapshot, CacheStats
from mention_search.search.engine import SearchEngine, SearchResult


class SearchSystem:
    """Facade over the search engine for one project.

    This is the only type UI callers need. The file cache is built lazily
    on the first query and rebuilt whenever it outlives the configured
    refresh interval.

    Example:
        system = SearchSystem(Path("."))
        refs = extract_references(buffer, cursor)
        results = system.search_with_exclusions(query, refs)
    """

    def __init__(
        self,
        project_root: Path | str,
        config: SearchConfig | None = None,
    ) -> None:
        """Create a search system.

        Args:
            project_root: Project directory; must exist and be readable.
            config: Search configuration. Defaults to ``SearchConfig()``.

        Raises:
            ProjectRootError: If the root is missing or not a directory.
            IgnoreFileError: If the project ignore file cannot be read.
        """
        root = Path(project_root).expanduser()
        try:
            root = root.resolve(strict=True)
        except OSError as e:
            raise ProjectRootError(f"Project root not found: {root}") from e
        if not root.is_dir():
            raise ProjectRootError(f"Project root is not a directory: {root}")

        self._config = config or SearchConfig()
        self._engine = SearchEngine(root, self._config)

    @property
    def project_root(self) -> Path:
        return self._engine.project_root

    @property
    def config(self) -> SearchConfig:
        return self._config

    @property
    def engine(self) -> SearchEngine:
        return self._engine

    def search(self, query: str) -> list[SearchResult]:
        """Search for files matching the query."""
        return self._engine.search(query)

    def search_with_exclusions(
        self, query: str, exclude_paths: Iterable[str]
    ) -> list[SearchResult]:
        """Search for files matching the query, excluding specified paths."""
        return self._engine.search_with_exclusions(query, exclude_paths)

    def get_all_files(self) -> list[SearchResult]:
        """Get all files (for ``@`` without a query)."""
        return self._engine.get_all_files()

    def get_all_files_with_exclusions(
        self, exclude_paths: Iterable[str]
    ) -> list[SearchResult]:
        """Get all files excluding specified paths."""
        return self._engine.get_all_files_with_exclusions(exclude_paths)

    def refresh(self) -> None:
        """Rebuild the file cache now, regardless of its age."""
        self._engine.refresh()

    def build_snapshot(self) -> CacheSnapshot:
        """Walk the project without touching the published cache."""
        return self._engine.build_snapshot()

    def publish_snapshot(self, snapshot: CacheSnapshot) -> None:
        """Swap in a snapshot produced by :meth:`build_snapshot`."""
        self._engine.publish_snapshot(snapshot)

    def cache_stats(self) -> CacheStats:
        """Get statistics about the file cache."""
        return self._engine.get_cache_stats()

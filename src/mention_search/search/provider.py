"""File search providers for UI components.

Providers decouple the composer from a concrete search implementation
and hand back display-ready rows.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from mention_search.config.schema import SearchConfig
from mention_search.search.engine import SearchResult
from mention_search.search.system import SearchSystem


@dataclass
class FileSearchResult:
    """A suggestion row as shown in the composer."""

    display_name: str  # relative path, "/" suffix for directories
    insertion_path: str  # absolute path inserted when selected
    score: float  # 0-1
    is_directory: bool

    @classmethod
    def from_search_result(cls, result: SearchResult) -> "FileSearchResult":
        return cls(
            display_name=result.display_name,
            insertion_path=result.insertion_text,
            score=result.score,
            is_directory=result.entry.is_directory,
        )


class FileSearchProvider(ABC):
    """Abstract source of file suggestions."""

    @abstractmethod
    def search(self, query: str) -> list[FileSearchResult]:
        """Search for files, best matches first."""
        ...

    @abstractmethod
    def search_with_exclusions(
        self, query: str, exclude_paths: Iterable[str]
    ) -> list[FileSearchResult]:
        """Search for files, leaving out the given paths."""
        ...

    @abstractmethod
    def get_all_files(self) -> list[FileSearchResult]:
        """All available files, for an empty query."""
        ...

    @abstractmethod
    def get_all_files_with_exclusions(
        self, exclude_paths: Iterable[str]
    ) -> list[FileSearchResult]:
        """All available files except the given paths."""
        ...

    @abstractmethod
    def refresh(self) -> None:
        """Refresh the underlying file list, if there is one."""
        ...


class DefaultFileSearchProvider(FileSearchProvider):
    """Provider backed by a :class:`SearchSystem`."""

    def __init__(
        self,
        project_root: Path | str,
        config: SearchConfig | None = None,
    ) -> None:
        self._system = SearchSystem(project_root, config)

    @property
    def system(self) -> SearchSystem:
        return self._system

    def search(self, query: str) -> list[FileSearchResult]:
        return _to_rows(self._system.search(query))

    def search_with_exclusions(
        self, query: str, exclude_paths: Iterable[str]
    ) -> list[FileSearchResult]:
        return _to_rows(self._system.search_with_exclusions(query, exclude_paths))

    def get_all_files(self) -> list[FileSearchResult]:
        return _to_rows(self._system.get_all_files())

    def get_all_files_with_exclusions(
        self, exclude_paths: Iterable[str]
    ) -> list[FileSearchResult]:
        return _to_rows(self._system.get_all_files_with_exclusions(exclude_paths))

    def refresh(self) -> None:
        self._system.refresh()


class MockFileSearchProvider(FileSearchProvider):
    """Provider serving a fixed list of rows, for UI tests.

    Matching is a plain case-insensitive substring test on the display
    name.
    """

    def __init__(self, files: list[FileSearchResult] | None = None) -> None:
        self._files = list(files or [])
        self._refresh_count = 0

    @property
    def refresh_count(self) -> int:
        """Number of times refresh() was called."""
        return self._refresh_count

    def search(self, query: str) -> list[FileSearchResult]:
        return self.search_with_exclusions(query, ())

    def search_with_exclusions(
        self, query: str, exclude_paths: Iterable[str]
    ) -> list[FileSearchResult]:
        needle = query.lower()
        return [
            row
            for row in self.get_all_files_with_exclusions(exclude_paths)
            if needle in row.display_name.lower()
        ]

    def get_all_files(self) -> list[FileSearchResult]:
        return list(self._files)

    def get_all_files_with_exclusions(
        self, exclude_paths: Iterable[str]
    ) -> list[FileSearchResult]:
        excluded = set(exclude_paths)
        return [
            row
            for row in self._files
            if row.display_name not in excluded and row.insertion_path not in excluded
        ]

    def refresh(self) -> None:
        self._refresh_count += 1


def _to_rows(results: list[SearchResult]) -> list[FileSearchResult]:
    return [FileSearchResult.from_search_result(result) for result in results]

"""Time-bounded snapshot cache of the project tree.

The cache walks the project once, records every surviving file and
directory, and serves that snapshot until its TTL runs out. A rebuild
produces a brand-new immutable snapshot which replaces the previous one
in a single assignment, so readers never see a half-built tree.
"""

import os
import stat
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from types import MappingProxyType

from mention_search.utils.logging import get_logger, log_duration

logger = get_logger(__name__)

InclusionPredicate = Callable[[Path], bool]


@dataclass(frozen=True)
class CachedEntry:
    """Cached information about one file or directory.

    Build instances with :meth:`create` so the lowercase search keys always
    match their source fields.
    """

    absolute_path: Path
    relative_path: str
    name: str
    is_directory: bool
    size: int | None
    modified: datetime | None
    name_lowercase: str
    relative_path_lowercase: str

    @classmethod
    def create(
        cls,
        absolute_path: Path,
        relative_path: str,
        is_directory: bool,
        size: int | None = None,
        modified: datetime | None = None,
    ) -> "CachedEntry":
        name = relative_path.rsplit("/", 1)[-1]
        return cls(
            absolute_path=absolute_path,
            relative_path=relative_path,
            name=name,
            is_directory=is_directory,
            size=None if is_directory else size,
            modified=modified,
            name_lowercase=name.lower(),
            relative_path_lowercase=relative_path.lower(),
        )

    @property
    def display_name(self) -> str:
        """Relative path, with a trailing slash for directories."""
        if self.is_directory:
            return f"{self.relative_path}/"
        return self.relative_path

    @property
    def insertion_text(self) -> str:
        """Text inserted into the composer when the entry is picked."""
        return str(self.absolute_path)


@dataclass(frozen=True)
class CacheSnapshot:
    """The complete, immutable result of one cache rebuild."""

    entries: Mapping[str, CachedEntry]
    built_at: float
    skipped_directories: tuple[str, ...] = ()

    @classmethod
    def empty(cls, built_at: float) -> "CacheSnapshot":
        return cls(entries=MappingProxyType({}), built_at=built_at)


@dataclass
class CacheStats:
    """Statistics about the current snapshot."""

    total_files: int = 0
    total_directories: int = 0
    cache_age: float = 0.0  # seconds
    is_valid: bool = False
    skipped_directories: list[str] = field(default_factory=list)


class FileCache:
    """High-performance file cache for one project root."""

    def __init__(
        self,
        project_root: Path,
        ttl: float,
        max_depth: int = 10,
    ) -> None:
        """Initialize an empty cache that is already stale.

        Args:
            project_root: Directory to walk.
            ttl: Seconds a snapshot stays valid.
            max_depth: Deepest level recorded; top-level entries are 1.
        """
        self.project_root = Path(project_root)
        self.ttl = ttl
        self.max_depth = max_depth
        # Backdated so the first validity check fails and forces a build
        self._snapshot = CacheSnapshot.empty(time.monotonic() - ttl)

    @property
    def snapshot(self) -> CacheSnapshot:
        """The currently published snapshot."""
        return self._snapshot

    def is_valid(self) -> bool:
        """Check if the snapshot is younger than the TTL."""
        return time.monotonic() - self._snapshot.built_at < self.ttl

    def get_entries(self) -> list[CachedEntry]:
        """Get all cached entries."""
        return list(self._snapshot.entries.values())

    def get_entries_filtered(
        self, predicate: Callable[[CachedEntry], bool]
    ) -> list[CachedEntry]:
        """Get cached entries matching a predicate."""
        return [entry for entry in self._snapshot.entries.values() if predicate(entry)]

    def rebuild(self, should_include: InclusionPredicate) -> None:
        """Walk the project again and publish the new snapshot.

        Args:
            should_include: Called with each candidate path; returning False
                skips the entry and, for directories, its whole subtree.
        """
        self.publish(self.build_snapshot(should_include))

    def publish(self, snapshot: CacheSnapshot) -> None:
        """Install a snapshot built by :meth:`build_snapshot`."""
        self._snapshot = snapshot

    def build_snapshot(self, should_include: InclusionPredicate) -> CacheSnapshot:
        """Walk the project and return a snapshot without publishing it.

        Unreadable directories and entries that vanish mid-walk are
        skipped; they never abort the walk.
        """
        entries: dict[str, CachedEntry] = {}
        skipped: list[str] = []

        with log_duration(logger, "File cache rebuilt", root=str(self.project_root)) as context:
            if should_include(self.project_root):
                self._walk(should_include, entries, skipped)
            context.update(entries=len(entries), skipped=len(skipped))

        return CacheSnapshot(
            entries=MappingProxyType(entries),
            built_at=time.monotonic(),
            skipped_directories=tuple(skipped),
        )

    def _walk(
        self,
        should_include: InclusionPredicate,
        entries: dict[str, CachedEntry],
        skipped: list[str],
    ) -> None:
        # Explicit stack of (directory, relative prefix, depth of its children)
        stack: list[tuple[Path, str, int]] = [(self.project_root, "", 1)]

        while stack:
            directory, prefix, depth = stack.pop()
            if depth > self.max_depth:
                continue

            try:
                with os.scandir(directory) as listing:
                    children = list(listing)
            except OSError as e:
                logger.debug("Skipping unreadable directory %s: %s", directory, e)
                skipped.append(prefix or ".")
                continue

            for child in children:
                path = Path(child.path)
                if not should_include(path):
                    continue

                try:
                    info = child.stat(follow_symlinks=False)
                except OSError:
                    # Removed between listing and stat
                    continue

                is_directory = stat.S_ISDIR(info.st_mode)
                relative_path = f"{prefix}/{child.name}" if prefix else child.name
                entries[relative_path] = CachedEntry.create(
                    absolute_path=path,
                    relative_path=relative_path,
                    is_directory=is_directory,
                    size=info.st_size,
                    modified=datetime.fromtimestamp(info.st_mtime),
                )

                if is_directory:
                    stack.append((path, relative_path, depth + 1))

    def stats(self) -> CacheStats:
        """Get cache statistics."""
        snapshot = self._snapshot
        directories = sum(1 for e in snapshot.entries.values() if e.is_directory)
        return CacheStats(
            total_files=len(snapshot.entries) - directories,
            total_directories=directories,
            cache_age=time.monotonic() - snapshot.built_at,
            is_valid=self.is_valid(),
            skipped_directories=list(snapshot.skipped_directories),
        )

"""Ignore rules for the project file walk.

Patterns come from the project's root ``.gitignore`` followed by a fixed
set of built-in defaults. Only a practical subset of gitignore syntax is
understood: comments, blank lines, ``!`` negation, a leading ``/`` that
must fall on a path component boundary, a trailing ``/`` for directories
and ``*`` as the single wildcard.

Patterns are evaluated in declaration order and the first match decides.
This differs from git, where the last matching pattern wins.
"""

from dataclasses import dataclass
from pathlib import Path

from mention_search.exceptions import IgnoreFileError
from mention_search.utils.files import relative_posix
from mention_search.utils.logging import get_logger

logger = get_logger(__name__)

IGNORE_FILE_NAME = ".gitignore"
VCS_DIR_NAME = ".git"

DEFAULT_PATTERNS = (
    # Version control
    ".git/",
    ".svn/",
    ".hg/",
    # Build outputs
    "target/",
    "build/",
    "dist/",
    "out/",
    "bin/",
    "obj/",
    # Dependencies
    "node_modules/",
    "vendor/",
    ".cargo/",
    # IDE files
    ".vscode/",
    ".idea/",
    "*.swp",
    "*.swo",
    "*~",
    # OS files
    ".DS_Store",
    "Thumbs.db",
    "desktop.ini",
)


@dataclass(frozen=True)
class ExclusionPattern:
    """A single parsed ignore rule."""

    pattern: str
    directory_only: bool = False
    negated: bool = False

    @classmethod
    def parse(cls, line: str) -> "ExclusionPattern | None":
        """Parse one ignore-file line.

        Returns None for blank lines, comments and lines that are empty
        once the ``!`` and trailing ``/`` markers are removed.
        """
        line = line.strip()
        if not line or line.startswith("#"):
            return None

        negated = line.startswith("!")
        if negated:
            line = line[1:]

        directory_only = line.endswith("/")
        if directory_only:
            line = line.rstrip("/")

        if not line:
            return None
        return cls(pattern=line, directory_only=directory_only, negated=negated)

    def matches(self, path_text: str, name: str) -> bool:
        """Check the pattern against a path's text and its base name.

        The path text is tested with a leading ``/`` so lines such as
        ``/target`` match a top-level ``target`` and everything below it.
        """
        rooted = path_text if path_text.startswith("/") else "/" + path_text
        if "*" in self.pattern:
            return (
                match_wildcard(self.pattern, path_text)
                or match_wildcard(self.pattern, rooted)
                or match_wildcard(self.pattern, name)
            )
        return self.pattern in rooted or name == self.pattern


def match_wildcard(pattern: str, text: str) -> bool:
    """Match ``text`` against a pattern where ``*`` spans any run of chars.

    The literal before the first ``*`` must start the text and the literal
    after the last ``*`` must end it; literals in between are found in
    order.
    """
    if "*" not in pattern:
        return text == pattern

    parts = pattern.split("*")
    last = len(parts) - 1
    pos = 0

    for index, part in enumerate(parts):
        if not part:
            continue
        if index == 0:
            if not text.startswith(part):
                return False
            pos = len(part)
        elif index == last:
            return text[pos:].endswith(part)
        else:
            found = text.find(part, pos)
            if found == -1:
                return False
            pos = found + len(part)

    return True


class ExclusionFilter:
    """Decides which paths are hidden from the file cache."""

    def __init__(
        self,
        patterns: list[ExclusionPattern],
        project_root: Path | None = None,
    ) -> None:
        self._patterns = list(patterns)
        self._project_root = project_root

    @classmethod
    def build(cls, project_root: Path) -> "ExclusionFilter":
        """Load the root ignore file (if any) and append the defaults.

        Args:
            project_root: Project directory whose ``.gitignore`` is read.

        Returns:
            A filter with ignore-file patterns first, defaults after.

        Raises:
            IgnoreFileError: If the ignore file exists but cannot be read.
        """
        project_root = Path(project_root)
        patterns: list[ExclusionPattern] = []

        ignore_file = project_root / IGNORE_FILE_NAME
        if ignore_file.is_file():
            try:
                content = ignore_file.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                raise IgnoreFileError(f"Failed to read {ignore_file}: {e}") from e
            patterns.extend(parse_patterns(content.splitlines()))
            logger.debug("Loaded %d patterns from %s", len(patterns), ignore_file)

        patterns.extend(default_patterns())
        return cls(patterns, project_root=project_root)

    @classmethod
    def defaults(cls, project_root: Path | None = None) -> "ExclusionFilter":
        """Build a filter containing only the built-in patterns."""
        return cls(default_patterns(), project_root=project_root)

    @property
    def patterns(self) -> list[ExclusionPattern]:
        """The ordered pattern list."""
        return list(self._patterns)

    def should_ignore(self, path: Path) -> bool:
        """Check whether a path should be hidden.

        Args:
            path: Absolute path, or a path relative to the project root.

        Returns:
            True if the first matching pattern is a plain (non-negated)
            pattern, or if the path is a version-control directory.
        """
        path = Path(path)
        name = path.name
        if name == VCS_DIR_NAME:
            return True

        path_text = self._path_text(path)
        for pattern in self._patterns:
            if pattern.matches(path_text, name):
                return not pattern.negated
        return False

    def __call__(self, path: Path) -> bool:
        return self.should_ignore(path)

    def _path_text(self, path: Path) -> str:
        # Relative text keeps the root's own ancestors out of substring checks
        if self._project_root is not None and path.is_absolute():
            relative = relative_posix(path, self._project_root)
            if relative is not None:
                return relative
        return path.as_posix()


def parse_patterns(lines: list[str]) -> list[ExclusionPattern]:
    """Parse ignore-file lines, skipping anything that is not a pattern."""
    patterns = []
    for line in lines:
        pattern = ExclusionPattern.parse(line)
        if pattern is not None:
            patterns.append(pattern)
    return patterns


def default_patterns() -> list[ExclusionPattern]:
    """The built-in patterns for VCS, build, dependency, IDE and OS files."""
    return parse_patterns(list(DEFAULT_PATTERNS))

"""Filesystem path helpers."""

from pathlib import Path, PurePath


def is_hidden_name(name: str) -> bool:
    """Check if a file or directory name is hidden (starts with .)."""
    return name.startswith(".")


def file_extension(name: str) -> str:
    """Return the lowercase extension of a file name without the dot.

    Dotfiles such as ``.bashrc`` have no extension.

    Args:
        name: Base name of the file.

    Returns:
        Extension string, or an empty string when there is none.
    """
    return PurePath(name).suffix[1:].lower()


def normalize_extension(extension: str) -> str:
    """Normalize a user-supplied extension (".PY" -> "py")."""
    return extension.strip().lstrip(".").lower()


def relative_posix(path: Path, root: Path) -> str | None:
    """Express a path relative to a root in POSIX form.

    Args:
        path: Path to convert.
        root: Directory the result is relative to.

    Returns:
        The relative POSIX path ("." for the root itself), or None when
        ``path`` lies outside ``root``.
    """
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return None

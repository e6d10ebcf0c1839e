"""Parsing of ``@path`` mentions in the composer input.

A mention is ``@`` followed by a run of non-whitespace characters. The
mention the user is still typing (the last whitespace-separated segment
before the cursor) is the live search query; every other mention is an existing
reference whose file should not be suggested again.
"""

import re

MENTION_MARKER = "@"

# A marker followed by at least one non-whitespace character
_MENTION_RE = re.compile(re.escape(MENTION_MARKER) + r"(\S+)")


def _clamp(text: str, cursor_pos: int | None) -> int:
    if cursor_pos is None:
        return len(text)
    return max(0, min(cursor_pos, len(text)))


def _segment_before_cursor(text: str, cursor_pos: int | None) -> tuple[int, str]:
    """Start offset and text of the last whitespace-separated segment before the cursor."""
    end = _clamp(text, cursor_pos)
    start = end
    while start > 0 and not text[start - 1].isspace():
        start -= 1
    return start, text[start:end]


def should_show_file_search(text: str, cursor_pos: int | None = None) -> bool:
    """Check whether the input should open the file suggestion list.

    True when the last whitespace-separated segment before the cursor starts
    with ``@``, including a bare ``@``.
    """
    if not text:
        return False
    _, segment = _segment_before_cursor(text, cursor_pos)
    return segment.startswith(MENTION_MARKER)


def extract_search_query(text: str, cursor_pos: int | None = None) -> str | None:
    """Extract the query typed after the active ``@``.

    Returns:
        The text between the ``@`` and the cursor, an empty string for a
        bare ``@``, or None when no mention is being typed.
    """
    if not text:
        return None
    _, segment = _segment_before_cursor(text, cursor_pos)
    if not segment.startswith(MENTION_MARKER):
        return None
    return segment[len(MENTION_MARKER):]


def extract_references(text: str, cursor_pos: int | None = None) -> set[str]:
    """Collect paths already mentioned in the text.

    Args:
        text: Raw composer input.
        cursor_pos: Cursor offset; defaults to the end of the text.

    Returns:
        The set of mentioned paths, without the ``@`` and excluding the
        mention currently being typed. A bare ``@`` contributes nothing.
    """
    references: set[str] = set()
    if MENTION_MARKER not in text:
        return references

    active_start = -1
    if should_show_file_search(text, cursor_pos):
        active_start, _ = _segment_before_cursor(text, cursor_pos)

    for match in _MENTION_RE.finditer(text):
        if match.start() != active_start:
            references.add(match.group(1))

    return references

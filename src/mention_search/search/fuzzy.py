"""Fuzzy matching for file names and paths.

Queries match case-insensitively as subsequences of the candidate. Better
shaped matches score higher: an exact hit beats a contiguous run, which
beats a hit on word starts, which beats a scattered subsequence.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import IntEnum

WORD_SEPARATORS = frozenset("_-/.")
PATH_SEPARATOR = "/"


class MatchType(IntEnum):
    """Kind of match, ordered from best to worst."""

    EXACT = 0
    PREFIX = 1
    CONTINUOUS = 2
    WORD_START = 3
    FUZZY = 4


@dataclass
class MatchScore:
    """Score of one query against one string."""

    score: float  # 0-1
    match_type: MatchType
    matched_positions: list[int] = field(default_factory=list)


class FuzzyScorer:
    """Scores candidates for a query.

    Scoring is pure: the same query and candidate always give the same
    score.
    """

    def __init__(self, case_sensitive: bool = False) -> None:
        self.case_sensitive = case_sensitive

    def score(self, query: str, candidate_name: str, candidate_relative_path: str) -> float:
        """Relevance of a candidate in [0, 1]; 0 means no match."""
        best = self.match_candidate(query, candidate_name, candidate_relative_path)
        return best.score if best else 0.0

    def match_candidate(
        self, query: str, candidate_name: str, candidate_relative_path: str
    ) -> MatchScore | None:
        """Best match of the query against a candidate's name or path."""
        name_match = self.match(query, candidate_name)
        path_match = self.match(query, candidate_relative_path)
        if name_match is None:
            return path_match
        if path_match is None or name_match.score >= path_match.score:
            return name_match
        return path_match

    def match(self, query: str, target: str) -> MatchScore | None:
        """Match a query against a single string.

        Returns:
            MatchScore, or None when the query is not a subsequence.
        """
        if not query:
            return MatchScore(score=1.0, match_type=MatchType.EXACT)
        if not target:
            return None

        if not self.case_sensitive:
            query = query.lower()
            target = target.lower()

        if query == target:
            return MatchScore(
                score=1.0,
                match_type=MatchType.EXACT,
                matched_positions=list(range(len(target))),
            )

        start = target.find(query)
        if start != -1:
            return MatchScore(
                score=self._continuous_score(query, target, start),
                match_type=MatchType.PREFIX if start == 0 else MatchType.CONTINUOUS,
                matched_positions=list(range(start, start + len(query))),
            )

        word_start = self._word_start_match(query, target)
        if word_start is not None:
            return word_start

        return self._fuzzy_match(query, target)

    def _continuous_score(self, query: str, target: str, start: int) -> float:
        base = len(query) / len(target)
        if start == 0:
            position_bonus = 0.3
        elif target[start - 1] == PATH_SEPARATOR:
            position_bonus = 0.25
        else:
            position_bonus = 0.1
        # Contiguous runs always rank above scattered matches
        return max(min(base + position_bonus, 1.0), 0.8)

    def _word_start_match(self, query: str, target: str) -> MatchScore | None:
        positions: list[int] = []
        query_index = 0
        consecutive = 0
        longest = 0

        for index, char in enumerate(target):
            if query_index == len(query):
                break
            if char != query[query_index]:
                continue
            if not _is_word_start(target, index):
                # A matching char off a word boundary rules this tier out
                return None
            if positions and positions[-1] == index - 1:
                consecutive += 1
            else:
                consecutive = 1
            longest = max(longest, consecutive)
            positions.append(index)
            query_index += 1

        if query_index != len(query):
            return None

        score = 0.8 * len(positions) / len(target) + 0.2 * longest / len(query)
        return MatchScore(
            score=min(score, 1.0),
            match_type=MatchType.WORD_START,
            matched_positions=positions,
        )

    def _fuzzy_match(self, query: str, target: str) -> MatchScore | None:
        positions: list[int] = []
        query_index = 0
        consecutive = 0
        longest = 0

        for index, char in enumerate(target):
            if query_index == len(query):
                break
            if char == query[query_index]:
                positions.append(index)
                query_index += 1
                consecutive += 1
                longest = max(longest, consecutive)
            else:
                consecutive = 0

        if query_index != len(query):
            return None

        match_ratio = len(query) / len(target)
        run_bonus = 0.3 * longest / len(query)
        first = positions[0]
        boundary_bonus = 0.1 if first < 3 or target[first - 1] == PATH_SEPARATOR else 0.0
        gap_penalty = 0.1 * _gap_total(positions) / len(target)

        score = match_ratio * 0.6 + run_bonus + boundary_bonus - gap_penalty
        return MatchScore(
            score=min(max(score, 0.0), 1.0),
            match_type=MatchType.FUZZY,
            matched_positions=positions,
        )


def _is_word_start(target: str, index: int) -> bool:
    if index == 0:
        return True
    return target[index - 1] in WORD_SEPARATORS


def _gap_total(positions: Sequence[int]) -> int:
    return sum(b - a - 1 for a, b in zip(positions, positions[1:]))


def result_sort_key(score: float, relative_path: str) -> tuple[float, int, str]:
    """Sort key: best score first, then shorter path, then path order."""
    return (-score, len(relative_path), relative_path)

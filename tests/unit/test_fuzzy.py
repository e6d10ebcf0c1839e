"""Unit tests for fuzzy scoring."""

import pytest

from mention_search.search.fuzzy import FuzzyScorer, MatchType, result_sort_key


@pytest.fixture
def scorer() -> FuzzyScorer:
    return FuzzyScorer()


class TestMatch:
    """Tests for matching a query against one string."""

    def test_exact(self, scorer: FuzzyScorer) -> None:
        """Test an exact match scores 1.0."""
        match = scorer.match("main.py", "main.py")
        assert match is not None
        assert match.score == 1.0
        assert match.match_type == MatchType.EXACT

    def test_case_insensitive(self, scorer: FuzzyScorer) -> None:
        """Test case is ignored by default."""
        match = scorer.match("README", "readme")
        assert match is not None
        assert match.match_type == MatchType.EXACT

    def test_case_sensitive(self) -> None:
        """Test case-sensitive scorers keep case."""
        scorer = FuzzyScorer(case_sensitive=True)
        assert scorer.match("README", "readme") is None

    def test_prefix(self, scorer: FuzzyScorer) -> None:
        """Test a prefix match."""
        match = scorer.match("mai", "main.py")
        assert match is not None
        assert match.match_type == MatchType.PREFIX
        assert match.matched_positions == [0, 1, 2]
        assert 0.8 <= match.score <= 1.0

    def test_continuous_after_separator(self, scorer: FuzzyScorer) -> None:
        """Test a contiguous match right after a path separator."""
        match = scorer.match("main", "src/main.py")
        assert match is not None
        assert match.match_type == MatchType.CONTINUOUS
        assert match.matched_positions == [4, 5, 6, 7]

    def test_prefix_beats_inner_run(self, scorer: FuzzyScorer) -> None:
        """Test a prefix outranks the same run inside a longer name."""
        prefix = scorer.match("config", "config.py")
        inner = scorer.match("config", "myconfig.py")
        assert prefix is not None and inner is not None
        assert prefix.score > inner.score

    def test_word_start(self, scorer: FuzzyScorer) -> None:
        """Test matching the first letters of words."""
        match = scorer.match("fb", "foo_bar")
        assert match is not None
        assert match.match_type == MatchType.WORD_START
        assert match.matched_positions == [0, 4]

    def test_word_starts_follow_separators_only(self, scorer: FuzzyScorer) -> None:
        """Test case changes are not word boundaries once case is folded."""
        separated = scorer.match("fb", "foo_bar")
        camel = scorer.match("fb", "FooBar")
        assert separated is not None and camel is not None
        assert separated.match_type == MatchType.WORD_START
        assert camel.match_type == MatchType.FUZZY

    def test_fuzzy(self, scorer: FuzzyScorer) -> None:
        """Test a scattered subsequence match."""
        match = scorer.match("mpy", "main.py")
        assert match is not None
        assert match.match_type == MatchType.FUZZY
        assert match.matched_positions == [0, 5, 6]
        assert 0.0 <= match.score < 0.8

    def test_no_match(self, scorer: FuzzyScorer) -> None:
        """Test a query that is not a subsequence."""
        assert scorer.match("xyz", "main.py") is None

    def test_empty_query(self, scorer: FuzzyScorer) -> None:
        """Test that an empty query matches everything."""
        match = scorer.match("", "anything")
        assert match is not None
        assert match.score == 1.0

    def test_empty_target(self, scorer: FuzzyScorer) -> None:
        """Test that an empty target never matches."""
        assert scorer.match("a", "") is None

    def test_contiguous_beats_scattered(self, scorer: FuzzyScorer) -> None:
        """Test the tier ordering holds for similar-length targets."""
        contiguous = scorer.match("abc", "xxabcxx")
        scattered = scorer.match("abc", "axbxcxx")
        assert contiguous is not None and scattered is not None
        assert contiguous.score > scattered.score


class TestScore:
    """Tests for candidate scoring."""

    def test_best_of_name_and_path(self, scorer: FuzzyScorer) -> None:
        """Test the better of the name and path match is used."""
        assert scorer.score("main.x", "main.x", "src/main.x") == 1.0

    def test_path_only_match(self, scorer: FuzzyScorer) -> None:
        """Test queries spanning directories match the path."""
        score = scorer.score("src/ma", "main.x", "src/main.x")
        assert score >= 0.8

    def test_no_match_is_zero(self, scorer: FuzzyScorer) -> None:
        """Test a non-matching candidate scores zero."""
        assert scorer.score("zzz", "main.x", "src/main.x") == 0.0

    @pytest.mark.parametrize(
        ("query", "name", "path"),
        [
            ("m", "main.x", "src/main.x"),
            ("sx", "lib.x", "src/lib.x"),
            ("helpers", "helpers.py", "src/utils/helpers.py"),
            ("q", "a", "b/a"),
        ],
    )
    def test_score_in_unit_range(
        self, scorer: FuzzyScorer, query: str, name: str, path: str
    ) -> None:
        """Test every score lies in [0, 1]."""
        assert 0.0 <= scorer.score(query, name, path) <= 1.0

    def test_deterministic(self, scorer: FuzzyScorer) -> None:
        """Test repeated scoring gives the same value."""
        first = scorer.score("mn", "main.x", "src/main.x")
        assert scorer.score("mn", "main.x", "src/main.x") == first


class TestSortKey:
    """Tests for the result ordering."""

    def test_higher_score_first(self) -> None:
        """Test descending score order."""
        keys = [result_sort_key(0.5, "a"), result_sort_key(0.9, "bbbb")]
        assert sorted(keys)[0] == result_sort_key(0.9, "bbbb")

    def test_shorter_path_breaks_ties(self) -> None:
        """Test equal scores prefer the shorter path, then path order."""
        paths = ["eeeee/q.x", "a/q.x", "cc/q.x", "bb/q.x"]
        ordered = sorted(paths, key=lambda p: result_sort_key(1.0, p))
        assert ordered == ["a/q.x", "bb/q.x", "cc/q.x", "eeeee/q.x"]

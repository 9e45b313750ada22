"""Tests for fuzzy matching."""

from itertools import combinations

from promptline.core.fuzzy import (
    BASE_SCORE,
    START_BONUS,
    best_score,
    filter_options,
    matches,
    score,
)
from promptline.core.options import Option, normalize_options


class TestMatches:
    """Tests for the subsequence gate."""

    def test_empty_query_matches_everything(self) -> None:
        """An empty query matches any candidate, even an empty one."""
        assert matches("", "anything") is True
        assert matches("", "") is True

    def test_subsequence(self) -> None:
        """Characters must appear in order but need not be adjacent."""
        assert matches("fb", "foobar") is True
        assert matches("bf", "foobar") is False

    def test_case_insensitive(self) -> None:
        """Matching ignores case on both sides."""
        assert matches("FB", "foobar") is True
        assert matches("fb", "FooBar") is True

    def test_suffix_keeps_match(self) -> None:
        """Appending text to a matching candidate keeps it matching."""
        for query, candidate in [("ae", "apple"), ("ch", "cherry"), ("", "x")]:
            assert matches(query, candidate)
            assert matches(query, candidate + "-suffix")

    def test_query_longer_than_candidate(self) -> None:
        """A query cannot match a shorter candidate."""
        assert matches("abcd", "abc") is False


class TestScore:
    """Tests for relevance scoring."""

    def test_no_match_scores_zero(self) -> None:
        """A non-matching query scores zero."""
        assert score("zz", "apple") == 0
        assert score("", "apple") == 0

    def test_start_bonus(self) -> None:
        """A match at index 0 earns the start bonus."""
        assert score("a", "abc") == BASE_SCORE + START_BONUS
        assert score("b", "xbc") == BASE_SCORE

    def test_consecutive_beats_scattered(self) -> None:
        """For equal-length candidates a consecutive run outranks scattered hits."""
        assert score("ab", "abxx") > score("ab", "axbx")
        assert score("ab", "abxx") > score("ab", "a-bx")
        assert score("bc", "xbcx") > score("bc", "xbxc")

    def test_any_run_outranks_any_gapped_match(self) -> None:
        """A mid-word run beats a gapped match that starts the candidate and hits separators."""
        assert score("ab", "xxxab") > score("ab", "x-a-b")
        assert score("ab", "xab---") > score("ab", "a-b---")

        length = 6
        for query in ("ab", "abc"):
            runs = [
                "x" * p + query + "x" * (length - p - len(query))
                for p in range(1, length - len(query) + 1)
            ]
            gapped = []
            for positions in combinations(range(length), len(query)):
                if positions[-1] - positions[0] == len(query) - 1:
                    continue
                chars = ["-"] * length
                for pos, ch in zip(positions, query):
                    chars[pos] = ch
                gapped.append("".join(chars))

            assert min(score(query, c) for c in runs) > max(score(query, c) for c in gapped)

    def test_boundary_bonus(self) -> None:
        """A match right after a separator scores above a mid-word match."""
        assert score("b", "foo-bar") > score("b", "foobar")

    def test_best_score_uses_label_value_and_hint(self) -> None:
        """The best of label, value and hint counts."""
        option = Option(value="pkg-mgr", label="Package manager", hint="npm yarn")

        assert best_score("yarn", option) > 0
        assert best_score("pkgm", option) > 0
        assert best_score("zzz", option) == 0


class TestFilterOptions:
    """Tests for filter_options."""

    def test_only_matching_options_kept(self) -> None:
        """Querying 'ae' over fruit keeps only apple."""
        options = normalize_options(["apple", "banana", "cherry"])

        result = filter_options(options, "ae")

        assert [o.value for o in result] == ["apple"]

    def test_empty_query_keeps_order(self) -> None:
        """An empty query returns every option in input order."""
        options = normalize_options(["c", "a", "b"])

        assert filter_options(options, "") == options

    def test_ranked_by_score(self) -> None:
        """Better matches come first."""
        options = normalize_options(["bfoo", "foobar", "fb"])

        result = filter_options(options, "fb")

        assert [o.value for o in result] == ["fb", "foobar"]

    def test_stable_for_ties(self) -> None:
        """Equal scores keep their original relative order."""
        options = normalize_options(["xa1", "xa2", "xa3"])

        result = filter_options(options, "a")

        assert [o.value for o in result] == ["xa1", "xa2", "xa3"]

    def test_matches_hint(self) -> None:
        """Options can be found through their hint."""
        options = [Option("a", hint="needle"), Option("b", hint="hay")]

        assert [o.value for o in filter_options(options, "ndl")] == ["a"]

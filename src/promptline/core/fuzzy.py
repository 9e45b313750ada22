"""
Scored fuzzy matching.

A query matches a candidate when every query character appears in the
candidate, in order, ignoring case.  :func:`score` turns a match into a
ranking signal: consecutive runs, a match at the very start, and matches
right after a separator all earn bonuses.

>>> matches("fb", "foobar")
True
>>> matches("zz", "foobar")
False
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from promptline.core.options import Option

# Base score per matched character
BASE_SCORE = 1
# Bonus when the first candidate character is matched
START_BONUS = 3
# Bonus for a match directly after the previous match; above START_BONUS +
# BOUNDARY_BONUS so a run always outranks a gapped match of the same query
CONSECUTIVE_BONUS = 6
# Bonus for a match right after a non-alphanumeric separator
BOUNDARY_BONUS = 2


def matches(query: str, candidate: str) -> bool:
    """Return ``True`` if *query* is a case-insensitive subsequence of *candidate*."""
    if not query:
        return True
    it = iter(candidate.lower())
    return all(ch in it for ch in query.lower())


def score(query: str, candidate: str) -> int:
    """
    Score how well *query* matches *candidate*.  Higher is better.

    Returns ``0`` when the query does not match (and for an empty query,
    which matches everything equally).
    """
    if not query:
        return 0

    q = query.lower()
    text = candidate.lower()
    qi = 0
    total = 0
    prev_match = -2  # so a first match at 0 is not "consecutive"

    for ti, ch in enumerate(text):
        if qi >= len(q):
            break
        if ch != q[qi]:
            continue

        total += BASE_SCORE
        if ti == 0:
            total += START_BONUS
        if ti == prev_match + 1:
            total += CONSECUTIVE_BONUS
        if ti > 0 and not text[ti - 1].isalnum():
            total += BOUNDARY_BONUS

        prev_match = ti
        qi += 1

    return total if qi >= len(q) else 0


def best_score(query: str, option: Option) -> int:
    """Best score of *query* against an option's label, value and hint."""
    candidates = [option.label, str(option.value)]
    if option.hint:
        candidates.append(option.hint)
    return max(score(query, c) for c in candidates)


def filter_options(options: Sequence[Option] | Iterable[Option], query: str) -> list[Option]:
    """
    Keep the options matching *query* and sort them by relevance.

    An empty query returns the options in their original order.  Ties keep
    their original relative order.
    """
    options = list(options)
    if not query:
        return options

    scored = [(opt, best_score(query, opt)) for opt in options]
    kept = [(opt, s) for opt, s in scored if s > 0]
    kept.sort(key=lambda pair: -pair[1])
    return [opt for opt, _ in kept]

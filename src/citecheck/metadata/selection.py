# ABOUTME: Version-aware best-candidate selection among a provider's top results.
# ABOUTME: Combines title similarity with year and venue bonuses to separate preprint/published twins.

import logging

from citecheck.metadata.strings import (
    best_window_similarity,
    contains_normalized,
    extract_years,
    similarity,
)
from citecheck.metadata.types import Candidate

logger = logging.getLogger(__name__)

_TITLE_WEIGHT = 3
_YEAR_EXACT_BONUS = 40
# A preprint and its journal-of-record version usually land a year apart.
_YEAR_ADJACENT_BONUS = 10
_JOURNAL_BONUS_DIVISOR = 10


def title_match_score(query: str, title: str) -> int:
    """How well a candidate title matches a query, 0-100.

    A title pasted verbatim inside the query scores 100; otherwise the
    whole-string similarity is used. This is the score the acceptance gate
    sees, so a near-miss title inside a longer citation stays low.
    """
    if not title:
        return 0
    if contains_normalized(query, title):
        return 100
    return similarity(query, title)


def reference_year(query: str, expected_year: int | None) -> int | None:
    """The year to prefer: the caller's expected year, else the first year in the query."""
    if expected_year is not None:
        return expected_year
    years = extract_years(query)
    return years[0] if years else None


def selection_score(
    candidate: Candidate,
    query: str,
    year: int | None = None,
    expected_journal: str | None = None,
) -> float:
    """Combined ranking score for one candidate (higher is better)."""
    score = float(_TITLE_WEIGHT * title_match_score(query, candidate.title))

    if year is not None and candidate.year is not None:
        delta = abs(candidate.year - year)
        if delta == 0:
            score += _YEAR_EXACT_BONUS
        elif delta == 1:
            score += _YEAR_ADJACENT_BONUS

    if expected_journal and candidate.journal:
        score += similarity(expected_journal, candidate.journal) / _JOURNAL_BONUS_DIVISOR

    return score


def select_best_candidate(
    candidates: list[Candidate],
    query: str,
    expected_year: int | None = None,
    expected_journal: str | None = None,
) -> Candidate | None:
    """Pick the candidate with the highest combined score.

    Equal scores fall back to word-window title similarity, then to the
    provider's own ranking order. Returns None for an empty list.
    """
    if not candidates:
        return None

    year = reference_year(query, expected_year)

    def rank(candidate: Candidate) -> tuple[float, int]:
        return (
            selection_score(candidate, query, year, expected_journal),
            best_window_similarity(query, candidate.title),
        )

    best = candidates[0]
    best_rank = rank(best)
    for candidate in candidates[1:]:
        candidate_rank = rank(candidate)
        if candidate_rank > best_rank:
            best, best_rank = candidate, candidate_rank

    logger.debug(
        "Selected %r (%s) from %d candidate(s), score %.1f",
        best.title,
        best.source,
        len(candidates),
        best_rank[0],
    )
    return best

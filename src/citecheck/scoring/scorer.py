# ABOUTME: MatchScorer front door: picks the structured or free-text strategy and applies
# ABOUTME: the acceptance gate that turns weak title matches into not-found results.

import logging

from citecheck.metadata.types import Candidate, ExpectedMetadata
from citecheck.scoring.base import ACCEPTANCE_THRESHOLD, ScoringStrategy
from citecheck.scoring.freetext import FreeTextScorer
from citecheck.scoring.result import SOURCE_LABELS, Issue, IssueKind, MatchResult
from citecheck.scoring.structured import StructuredScorer

logger = logging.getLogger(__name__)


class MatchScorer:
    """Scores a candidate for a citation; a pure function of its inputs.

    Structured mode is used whenever the caller supplies ExpectedMetadata
    with a title, free-text mode otherwise.
    """

    def __init__(
        self,
        structured: ScoringStrategy | None = None,
        free_text: ScoringStrategy | None = None,
    ) -> None:
        self._structured = structured or StructuredScorer()
        self._free_text = free_text or FreeTextScorer()

    def strategy_for(self, expected: ExpectedMetadata | None) -> ScoringStrategy:
        if expected is not None and expected.is_structured:
            return self._structured
        return self._free_text

    def score(
        self,
        query: str,
        candidate: Candidate | None,
        expected: ExpectedMetadata | None = None,
    ) -> MatchResult:
        """Score the candidate, or report not-found when there is nothing acceptable."""
        if candidate is None:
            return MatchResult.not_found(
                Issue(IssueKind.SOURCE, "No results returned by the metadata source")
            )

        result = self.strategy_for(expected).score(query, candidate, expected)
        if result.title_score < ACCEPTANCE_THRESHOLD:
            label = SOURCE_LABELS.get(candidate.source, candidate.source)
            logger.debug(
                "Rejected %r from %s: title score %d below %d",
                candidate.title,
                label,
                result.title_score,
                ACCEPTANCE_THRESHOLD,
            )
            return MatchResult.not_found(
                Issue(
                    IssueKind.TITLE,
                    f'No sufficiently similar result found in {label} (closest: "{candidate.title}", '
                    f"{result.title_score}% title similarity)",
                )
            )
        return result

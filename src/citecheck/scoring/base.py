# ABOUTME: Shared scoring contract and thresholds for the structured and free-text strategies.
# ABOUTME: Holds the acceptance gate and the title-mismatch penalty applied by both modes.

from typing import Protocol

from citecheck.metadata.types import Candidate, ExpectedMetadata
from citecheck.scoring.result import Issue, IssueKind, MatchResult

# Below this title score the best candidate is reported as not found.
ACCEPTANCE_THRESHOLD = 55

# Confidence below this (or any issue) makes the orchestrator consult fallbacks.
CONFIDENCE_THRESHOLD = 70

_TITLE_MISMATCH_THRESHOLD = 70
_TITLE_MISMATCH_PENALTY = 20


class ScoringStrategy(Protocol):
    """Scores one candidate against a citation and assembles the issues list."""

    def score(
        self,
        query: str,
        candidate: Candidate,
        expected: ExpectedMetadata | None = None,
    ) -> MatchResult: ...


def apply_title_penalty(overall: float, title_score: float, issues: list[Issue]) -> float:
    """Flat penalty (with an issue) when the matched title is only a loose fit."""
    if title_score < _TITLE_MISMATCH_THRESHOLD:
        issues.append(
            Issue(IssueKind.TITLE, f"Title mismatch: record title only {round(title_score)}% similar")
        )
        return overall - _TITLE_MISMATCH_PENALTY
    return overall

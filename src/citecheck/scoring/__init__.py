# ABOUTME: Scoring package: match strategies, the MatchScorer front, and the MatchResult contract.
# ABOUTME: Structured mode compares against ExpectedMetadata; free-text mode against the raw query.

from citecheck.scoring.base import ACCEPTANCE_THRESHOLD, CONFIDENCE_THRESHOLD
from citecheck.scoring.freetext import FreeTextScorer
from citecheck.scoring.result import NOT_FOUND, Issue, IssueKind, MatchResult
from citecheck.scoring.scorer import MatchScorer
from citecheck.scoring.structured import StructuredScorer

__all__ = [
    "ACCEPTANCE_THRESHOLD",
    "CONFIDENCE_THRESHOLD",
    "NOT_FOUND",
    "FreeTextScorer",
    "Issue",
    "IssueKind",
    "MatchResult",
    "MatchScorer",
    "StructuredScorer",
]

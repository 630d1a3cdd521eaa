# ABOUTME: MatchResult, the output contract of a verification, and the Issue records it carries.
# ABOUTME: Scores are clamped to [0, 100]; not-found results carry zeroed scores and empty fields.

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from citecheck.formats.apa import format_apa
from citecheck.formats.bibtex import format_bibtex
from citecheck.metadata.types import Candidate

NOT_FOUND = "not_found"

SOURCE_LABELS = {
    "crossref": "CrossRef",
    "semantic_scholar": "Semantic Scholar",
    "openalex": "OpenAlex",
    NOT_FOUND: "Not found",
}


class IssueKind(Enum):
    """What part of the citation an issue is about."""

    TITLE = "title"
    AUTHOR = "author"
    JOURNAL = "journal"
    YEAR = "year"
    VERSION = "version"
    SOURCE = "source"


@dataclass(frozen=True)
class Issue:
    """A detected discrepancy between the citation and the matched record.

    Informational issues note a benign difference (e.g. preprint vs
    published version) rather than a hard mismatch.
    """

    kind: IssueKind
    message: str
    informational: bool = False

    def __str__(self) -> str:
        return self.message


def clamp_score(value: float) -> int:
    """Round half up and clamp into [0, 100]."""
    return max(0, min(100, int(math.floor(value + 0.5))))


@dataclass
class MatchResult:
    """Outcome of verifying one citation.

    Created fresh per verification and never cached. When a fallback source
    supplies a better citation, it is recorded in the corrected_* fields and
    tagged with fallback_source.
    """

    exists: bool
    source: str = NOT_FOUND
    title: str = ""
    authors: str = ""
    year: int | None = None
    journal: str = ""
    url: str = ""
    doi: str = ""
    apa: str = ""
    bibtex: str = ""
    title_score: int = 0
    author_score: int = 0
    journal_score: int = 0
    year_score: int | None = None
    confidence: int = 0
    issues: list[Issue] = field(default_factory=list)
    candidate: Candidate | None = None
    relevance: float | None = None
    corrected_apa: str | None = None
    corrected_bibtex: str | None = None
    fallback_source: str | None = None

    def __post_init__(self) -> None:
        for name in ("title_score", "author_score", "journal_score", "confidence"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                msg = f"{name} must be between 0 and 100, got {value}"
                raise ValueError(msg)
        if self.year_score is not None and not 0 <= self.year_score <= 100:
            msg = f"year_score must be between 0 and 100, got {self.year_score}"
            raise ValueError(msg)

    @classmethod
    def not_found(cls, *issues: Issue) -> "MatchResult":
        """A result for a citation that no source could match."""
        return cls(exists=False, issues=list(issues))

    @classmethod
    def from_candidate(
        cls,
        candidate: Candidate,
        *,
        title_score: float,
        author_score: float,
        journal_score: float,
        confidence: float,
        issues: list[Issue],
        year_score: float | None = None,
    ) -> "MatchResult":
        """Build a found result for a scored candidate, clamping every score."""
        return cls(
            exists=True,
            source=candidate.source,
            title=candidate.title,
            authors=candidate.author_display,
            year=candidate.year,
            journal=candidate.journal,
            url=candidate.link,
            doi=candidate.doi,
            apa=format_apa(candidate),
            bibtex=format_bibtex(candidate),
            title_score=clamp_score(title_score),
            author_score=clamp_score(author_score),
            journal_score=clamp_score(journal_score),
            year_score=None if year_score is None else clamp_score(year_score),
            confidence=clamp_score(confidence),
            issues=list(issues),
            candidate=candidate,
            relevance=candidate.relevance,
        )

    @property
    def issue_messages(self) -> list[str]:
        return [issue.message for issue in self.issues]

    @property
    def source_label(self) -> str:
        return SOURCE_LABELS.get(self.source, self.source)

    def has_issue(self, *kinds: IssueKind, hard_only: bool = False) -> bool:
        """Whether any issue of the given kinds was detected."""
        return any(
            issue.kind in kinds and not (hard_only and issue.informational)
            for issue in self.issues
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "exists": self.exists,
            "source": self.source,
            "title": self.title,
            "authors": self.authors,
            "year": self.year,
            "journal": self.journal,
            "url": self.url,
            "doi": self.doi,
            "apa": self.apa,
            "bibtex": self.bibtex,
            "title_score": self.title_score,
            "author_score": self.author_score,
            "journal_score": self.journal_score,
            "year_score": self.year_score,
            "confidence": self.confidence,
            "issues": self.issue_messages,
            "corrected_apa": self.corrected_apa,
            "corrected_bibtex": self.corrected_bibtex,
            "fallback_source": self.fallback_source,
        }

# ABOUTME: Reconciliation orchestrator: verifies a citation against CrossRef first, then consults
# ABOUTME: Semantic Scholar and OpenAlex to recover, confirm, or correct doubtful results.

import logging
from collections.abc import Sequence
from dataclasses import replace

from citecheck.formats.apa import format_apa
from citecheck.formats.bibtex import format_bibtex
from citecheck.metadata.crossref import CrossRefAdapter
from citecheck.metadata.http import HttpClient
from citecheck.metadata.openalex import OpenAlexAdapter
from citecheck.metadata.provider import SourceAdapter
from citecheck.metadata.selection import reference_year, title_match_score
from citecheck.metadata.semantic_scholar import SemanticScholarAdapter
from citecheck.metadata.types import Author, Candidate, ExpectedMetadata
from citecheck.scoring.authors import author_overlap
from citecheck.scoring.base import ACCEPTANCE_THRESHOLD, CONFIDENCE_THRESHOLD
from citecheck.scoring.result import SOURCE_LABELS, Issue, IssueKind, MatchResult
from citecheck.scoring.scorer import MatchScorer

logger = logging.getLogger(__name__)

# A fallback-only match was validated against less than CrossRef's record.
_SECONDARY_CONFIDENCE_CAP = 85
_CORROBORATION_BOOST = 15
_AUTHOR_CONFIRM_OVERLAP = 0.5


def _label(source: str) -> str:
    return SOURCE_LABELS.get(source, source)


class CitationVerifier:
    """Verifies citations against a primary source with ordered fallbacks.

    Sources are queried strictly one after another. The primary result is
    returned as is when it exists, scores at least CONFIDENCE_THRESHOLD, and
    has no issues. Otherwise the fallbacks are consulted in order:

    1. Primary not found: the first fallback candidate that clears the
       acceptance gate becomes the result, with capped confidence.
    2. Author issue: a fallback whose authors fit the citation better
       replaces the primary output; one that agrees with the primary's
       authors confirms them instead.
    3. Year/version issue: a fallback reporting exactly the cited year
       attaches its citation as the corrected output and boosts confidence.

    The author check runs before the year check for each fallback.
    """

    def __init__(
        self,
        primary: SourceAdapter,
        fallbacks: Sequence[SourceAdapter] = (),
        scorer: MatchScorer | None = None,
    ) -> None:
        self._primary = primary
        self._fallbacks = list(fallbacks)
        self._scorer = scorer or MatchScorer()

    @classmethod
    def with_default_sources(
        cls,
        http_client: HttpClient,
        *,
        mailto: str | None = None,
        semantic_scholar_api_key: str | None = None,
    ) -> "CitationVerifier":
        """CrossRef as primary, then Semantic Scholar, then OpenAlex."""
        return cls(
            primary=CrossRefAdapter(http_client, mailto=mailto),
            fallbacks=[
                SemanticScholarAdapter(http_client, api_key=semantic_scholar_api_key),
                OpenAlexAdapter(http_client, mailto=mailto),
            ],
        )

    @property
    def sources(self) -> list[SourceAdapter]:
        return [self._primary, *self._fallbacks]

    def verify(self, query: str, expected: ExpectedMetadata | None = None) -> MatchResult:
        """Verify one citation and return a fresh MatchResult."""
        year = reference_year(query, expected.year if expected else None)
        journal = expected.journal if expected else None

        candidate = self._primary.search(query, year, journal)
        primary = self._scorer.score(query, candidate, expected)

        if primary.exists and primary.confidence >= CONFIDENCE_THRESHOLD and not primary.issues:
            return primary

        if not primary.exists:
            return self._recover(query, expected, year, journal, primary)
        return self._reconcile(query, expected, year, journal, primary)

    def _fallback_query(
        self, query: str, expected: ExpectedMetadata | None, primary: MatchResult
    ) -> str:
        """Fallback sources search by title: the cited one, else the primary's record title."""
        if expected is not None and expected.is_structured:
            return expected.title or query
        if primary.exists and primary.title:
            return primary.title
        return query

    def _recover(
        self,
        query: str,
        expected: ExpectedMetadata | None,
        year: int | None,
        journal: str | None,
        primary: MatchResult,
    ) -> MatchResult:
        search_text = self._fallback_query(query, expected, primary)
        primary_label = _label(self._primary.name)

        for adapter in self._fallbacks:
            candidate = adapter.search(search_text, year, journal)
            if candidate is None:
                continue
            result = self._scorer.score(query, candidate, expected)
            if not result.exists:
                continue

            logger.info(
                "Recovered %r from %s after %s found nothing",
                candidate.title,
                _label(adapter.name),
                primary_label,
            )
            note = Issue(
                IssueKind.SOURCE,
                f"Not found in {primary_label}; matched in {_label(adapter.name)}",
                informational=True,
            )
            return replace(
                result,
                confidence=min(result.title_score, _SECONDARY_CONFIDENCE_CAP),
                issues=[note, *result.issues],
                fallback_source=adapter.name,
            )

        searched = ", ".join(_label(a.name) for a in self.sources)
        return MatchResult.not_found(
            *primary.issues,
            Issue(IssueKind.SOURCE, f"Not found in any source (searched {searched})"),
        )

    def _reconcile(
        self,
        query: str,
        expected: ExpectedMetadata | None,
        year: int | None,
        journal: str | None,
        primary: MatchResult,
    ) -> MatchResult:
        author_pending = primary.has_issue(IssueKind.AUTHOR)
        year_pending = year is not None and primary.has_issue(IssueKind.YEAR, IssueKind.VERSION)
        if not (author_pending or year_pending):
            logger.debug("No author or year discrepancy to reconcile for %r", primary.title)
            return primary

        search_text = self._fallback_query(query, expected, primary)
        result = primary

        for adapter in self._fallbacks:
            if not (author_pending or year_pending):
                break
            candidate = adapter.search(search_text, year, journal)
            if candidate is None or not self._same_work(primary, candidate):
                continue

            if author_pending:
                secondary = self._scorer.score(query, candidate, expected)
                if secondary.exists and secondary.author_score > primary.author_score:
                    logger.info("Authors corrected from %s for %r", _label(adapter.name), primary.title)
                    return self._substitute(primary, secondary, adapter.name)
                if author_overlap(candidate.authors, self._primary_authors(primary)) >= _AUTHOR_CONFIRM_OVERLAP:
                    author_pending = False
                    result = replace(
                        result,
                        issues=[
                            *result.issues,
                            Issue(
                                IssueKind.SOURCE,
                                f"{_label(adapter.name)} lists the same authors as "
                                f"{_label(primary.source)}",
                                informational=True,
                            ),
                        ],
                    )

            if year_pending and candidate.year == year:
                logger.info("%s corroborates cited year %s for %r", _label(adapter.name), year, primary.title)
                year_pending = False
                result = replace(
                    result,
                    corrected_apa=format_apa(candidate),
                    corrected_bibtex=format_bibtex(candidate),
                    fallback_source=adapter.name,
                    confidence=min(100, result.confidence + _CORROBORATION_BOOST),
                    issues=[
                        *result.issues,
                        Issue(
                            IssueKind.VERSION,
                            f"{_label(adapter.name)} lists the {year} version; "
                            "corrected citation attached",
                            informational=True,
                        ),
                    ],
                )
        return result

    @staticmethod
    def _primary_authors(primary: MatchResult) -> tuple[Author, ...]:
        return primary.candidate.authors if primary.candidate is not None else ()

    @staticmethod
    def _same_work(primary: MatchResult, candidate: Candidate) -> bool:
        """Whether a fallback candidate describes the work the primary matched."""
        return title_match_score(primary.title, candidate.title) >= ACCEPTANCE_THRESHOLD

    @staticmethod
    def _substitute(primary: MatchResult, secondary: MatchResult, source: str) -> MatchResult:
        note = Issue(
            IssueKind.SOURCE,
            f"Authors corrected using {_label(source)}; {_label(primary.source)} lists "
            f"{primary.authors or 'no authors'}",
            informational=True,
        )
        return replace(
            secondary,
            issues=[note, *secondary.issues],
            corrected_apa=secondary.apa,
            corrected_bibtex=secondary.bibtex,
            fallback_source=source,
        )

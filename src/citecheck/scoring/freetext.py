# ABOUTME: Free-text scoring for a raw pasted citation: looks for the record's title, authors,
# ABOUTME: venue, and year inside the query text and flags capitalized names the record lacks.

import re

from citecheck.metadata.selection import title_match_score
from citecheck.metadata.strings import (
    decode_latex_accents,
    extract_years,
    normalize_name,
)
from citecheck.metadata.types import Candidate, ExpectedMetadata
from citecheck.scoring.authors import family_matches, given_name_matches, is_truncated
from citecheck.scoring.base import apply_title_penalty
from citecheck.scoring.result import Issue, IssueKind, MatchResult
from citecheck.scoring.vocab import GENERIC_VENUE_WORDS, STOP_WORDS, is_preprint_venue

_AUTHOR_ISSUE_TITLE_THRESHOLD = 80
_MISSING_AUTHOR_TITLE_THRESHOLD = 70
_HIGH_AUTHOR_SCORE = 90
_AUTHOR_SHORTFALL_WEIGHT = 0.5
_STRONG_TITLE_THRESHOLD = 80

# Fake-author heuristic knobs.
_FAKE_AUTHOR_PENALTY = 10
_MAX_FAKE_AUTHOR_TOKENS = 5
_MIN_NAME_TOKEN_LENGTH = 3
_MAX_ACRONYM_LENGTH = 4

_NO_RECORD_JOURNAL_SCORE = 50
_PREPRINT_JOURNAL_SCORE = 60
_MIN_JOURNAL_WORD_LENGTH = 4
_JOURNAL_ISSUE_TITLE_THRESHOLD = 70
_JOURNAL_MISSING_PENALTY = 15
_JOURNAL_PENALTY_TITLE_THRESHOLD = 60

_PREPRINT_YEAR_PENALTY_PER_YEAR = 5
_PREPRINT_YEAR_MAX_DELTA = 2
_YEAR_MISMATCH_PENALTY = 25

_TOKEN_SPLIT_RE = re.compile(r"[\s,.;:()\[\]{}\"/&|!?*+=<>]+")


class FreeTextScorer:
    """Scores a candidate against an unstructured citation string.

    Each record field is searched for inside the normalized query. Year
    mismatches cost confidence directly rather than through a sub-score.
    """

    def score(
        self,
        query: str,
        candidate: Candidate,
        expected: ExpectedMetadata | None = None,
    ) -> MatchResult:
        issues: list[Issue] = []
        plain_query = decode_latex_accents(query)
        normalized_query = normalize_name(query)

        title_score = float(title_match_score(plain_query, candidate.title))

        author_score = self._author_score(plain_query, normalized_query, candidate, title_score, issues)
        author_score = self._penalize_fake_authors(plain_query, candidate, author_score, issues)
        journal_score = self._journal_score(normalized_query, candidate, title_score, issues)

        if title_score > _STRONG_TITLE_THRESHOLD:
            if author_score >= _HIGH_AUTHOR_SCORE:
                overall = title_score
            else:
                overall = title_score - (100 - author_score) * _AUTHOR_SHORTFALL_WEIGHT
        else:
            overall = (title_score + author_score) / 2

        if journal_score == 0 and title_score > _JOURNAL_PENALTY_TITLE_THRESHOLD:
            overall -= _JOURNAL_MISSING_PENALTY

        overall -= self._year_penalty(plain_query, candidate, expected, issues)
        confidence = apply_title_penalty(overall, title_score, issues)

        return MatchResult.from_candidate(
            candidate,
            title_score=title_score,
            author_score=author_score,
            journal_score=journal_score,
            confidence=confidence,
            issues=issues,
        )

    def _author_score(
        self,
        query: str,
        normalized_query: str,
        candidate: Candidate,
        title_score: float,
        issues: list[Issue],
    ) -> float:
        query_words = set(normalized_query.split())
        families = [
            (name, normalize_name(name)) for name in candidate.family_names if normalize_name(name)
        ]
        if not families:
            return 100

        found = [
            name
            for name, norm in families
            if (norm in query_words if len(norm) < 3 else norm in normalized_query)
        ]
        missing = [name for name, _ in families if name not in found]

        if not found:
            if title_score > _AUTHOR_ISSUE_TITLE_THRESHOLD:
                issues.append(
                    Issue(
                        IssueKind.AUTHOR,
                        "Author mismatch: none of the record's authors "
                        f"({', '.join(name for name, _ in families)}) appear in the citation",
                    )
                )
            return 0

        if missing and title_score > _MISSING_AUTHOR_TITLE_THRESHOLD and not is_truncated(query):
            issues.append(Issue(IssueKind.AUTHOR, f"Missing authors: {', '.join(missing)}"))
        return 100 * len(found) / len(families)

    def _penalize_fake_authors(
        self, query: str, candidate: Candidate, author_score: float, issues: list[Issue]
    ) -> float:
        suspects = self._suspect_name_tokens(query, candidate)
        if not suspects or len(suspects) > _MAX_FAKE_AUTHOR_TOKENS:
            return author_score
        issues.append(
            Issue(
                IssueKind.AUTHOR,
                f"Possible extra or fake author(s) not in the record: {', '.join(suspects)}",
            )
        )
        return max(0.0, author_score - _FAKE_AUTHOR_PENALTY * len(suspects))

    def _suspect_name_tokens(self, query: str, candidate: Candidate) -> list[str]:
        """Capitalized query words that look like names but match no record author.

        Words belonging to the record's title, venue, or year, stop words,
        and short all-caps acronyms are ignored.
        """
        title = normalize_name(candidate.title)
        journal = normalize_name(candidate.journal)
        year = str(candidate.year) if candidate.year else ""

        suspects: list[str] = []
        seen: set[str] = set()
        for raw in _TOKEN_SPLIT_RE.split(query):
            token = raw.strip("-'")
            if len(token) < _MIN_NAME_TOKEN_LENGTH or not token[0].isupper():
                continue
            if not token.replace("-", "").replace("'", "").isalpha():
                continue
            if token.isupper() and len(token) <= _MAX_ACRONYM_LENGTH:
                continue
            lowered = normalize_name(token)
            if not lowered or lowered in STOP_WORDS or lowered in seen:
                continue
            if lowered in title or lowered in journal or (year and lowered in year):
                continue
            if any(
                family_matches(token, a.family) or given_name_matches(token, a)
                for a in candidate.authors
            ):
                continue
            seen.add(lowered)
            suspects.append(token)
        return suspects

    def _journal_score(
        self,
        normalized_query: str,
        candidate: Candidate,
        title_score: float,
        issues: list[Issue],
    ) -> float:
        journal = normalize_name(candidate.journal)
        if len(journal) <= 3:
            return 100 if journal and journal in normalized_query.split() else _NO_RECORD_JOURNAL_SCORE

        words = [w for w in journal.split() if len(w) >= _MIN_JOURNAL_WORD_LENGTH]
        significant = [w for w in words if w not in GENERIC_VENUE_WORDS] or words
        if not significant:
            significant = [journal]
        if any(word in normalized_query for word in significant):
            return 100

        if is_preprint_venue(candidate.journal):
            issues.append(
                Issue(
                    IssueKind.VERSION,
                    f'Record is the "{candidate.journal}" preprint; the citation names another venue',
                    informational=True,
                )
            )
            return _PREPRINT_JOURNAL_SCORE

        if title_score > _JOURNAL_ISSUE_TITLE_THRESHOLD:
            issues.append(
                Issue(IssueKind.JOURNAL, f'Journal mismatch: actual venue is "{candidate.journal}"')
            )
        return 0

    def _year_penalty(
        self,
        query: str,
        candidate: Candidate,
        expected: ExpectedMetadata | None,
        issues: list[Issue],
    ) -> float:
        if candidate.year is None:
            return 0
        if expected is not None and expected.year is not None:
            cited_years = [expected.year]
        else:
            cited_years = extract_years(query)
        if not cited_years or candidate.year in cited_years:
            return 0

        cited = min(cited_years, key=lambda y: abs(y - candidate.year))
        delta = abs(cited - candidate.year)
        preprint = is_preprint_venue(candidate.journal) or is_preprint_venue(query)
        if preprint and delta <= _PREPRINT_YEAR_MAX_DELTA:
            issues.append(
                Issue(
                    IssueKind.VERSION,
                    f"Year differs: you wrote {cited}, record says {candidate.year} "
                    "(likely a preprint/published version difference)",
                    informational=True,
                )
            )
            return _PREPRINT_YEAR_PENALTY_PER_YEAR * delta

        issues.append(
            Issue(
                IssueKind.YEAR,
                f"Year mismatch: you wrote {cited}, actual is {candidate.year}",
            )
        )
        return _YEAR_MISMATCH_PENALTY

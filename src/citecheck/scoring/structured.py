# ABOUTME: Structured-mode scoring: compares a candidate field by field against ExpectedMetadata.
# ABOUTME: Detects extra cited authors and treats preprint/published drift as a version difference.

import re

from citecheck.metadata.strings import decode_latex_accents, normalize_name, similarity
from citecheck.metadata.types import Candidate, ExpectedMetadata
from citecheck.scoring.authors import find_extra_authors, is_truncated, split_author_list
from citecheck.scoring.base import apply_title_penalty
from citecheck.scoring.result import Issue, IssueKind, MatchResult
from citecheck.scoring.vocab import is_preprint_venue

_EXTRA_AUTHOR_PENALTY = 20
_AUTHOR_MISMATCH_THRESHOLD = 50
_AUTHOR_MISMATCH_PENALTY = 20

_VERSION_JOURNAL_THRESHOLD = 50
_VERSION_JOURNAL_SCORE = 70
_ABBREVIATION_JOURNAL_SCORE = 90
_JOURNAL_MISMATCH_THRESHOLD = 40
_JOURNAL_MISMATCH_PENALTY = 20
_JOURNAL_DIFFERS_THRESHOLD = 70
_JOURNAL_DIFFERS_PENALTY = 10
_NO_RECORD_JOURNAL_SCORE = 50

_PREPRINT_YEAR_SCORES = {1: 85, 2: 80}
_ADJACENT_YEAR_SCORE = 75
_ADJACENT_YEAR_TITLE_THRESHOLD = 80

_ABBREV_WORD_RE = re.compile(r"[A-Za-z]+")


def _is_abbreviation(short: str, full: str) -> bool:
    """Whether 'J. Mach. Learn. Res.' abbreviates 'Journal of Machine Learning Research'.

    Every word of the short form must be a prefix of a later word of the
    full form, in order; small connecting words of the full form may be skipped.
    """
    short_words = [w.lower() for w in _ABBREV_WORD_RE.findall(short)]
    full_words = [w.lower() for w in _ABBREV_WORD_RE.findall(full)]
    if not short_words or len(short_words) > len(full_words) or "." not in short:
        return False
    i = 0
    for word in short_words:
        while i < len(full_words) and not full_words[i].startswith(word):
            i += 1
        if i == len(full_words):
            return False
        i += 1
    return True


class StructuredScorer:
    """Scores a candidate against known title, authors, journal, and year.

    Overall is the average of the four sub-scores; hard author and journal
    mismatches and a weak title then cost extra confidence.
    """

    def score(
        self,
        query: str,
        candidate: Candidate,
        expected: ExpectedMetadata | None = None,
    ) -> MatchResult:
        if expected is None or not expected.is_structured:
            msg = "StructuredScorer needs ExpectedMetadata with a title"
            raise ValueError(msg)

        issues: list[Issue] = []
        title_score = similarity(expected.title or "", candidate.title)
        author_score = self._author_score(expected.author, candidate, issues)
        journal_score, journal_penalty = self._journal_score(expected.journal, candidate, issues)
        year_score = self._year_score(expected, candidate, title_score, issues)

        confidence = (title_score + author_score + journal_score + year_score) / 4

        if expected.author and author_score < _AUTHOR_MISMATCH_THRESHOLD:
            issues.append(
                Issue(
                    IssueKind.AUTHOR,
                    f'Authors mismatch: cited "{expected.author}", record lists '
                    f'"{candidate.author_display or "no authors"}"',
                )
            )
            confidence -= _AUTHOR_MISMATCH_PENALTY

        confidence -= journal_penalty
        confidence = apply_title_penalty(confidence, title_score, issues)

        return MatchResult.from_candidate(
            candidate,
            title_score=title_score,
            author_score=author_score,
            journal_score=journal_score,
            year_score=year_score,
            confidence=confidence,
            issues=issues,
        )

    def _author_score(
        self, expected_author: str | None, candidate: Candidate, issues: list[Issue]
    ) -> float:
        if not expected_author:
            return 100

        cited = normalize_name(expected_author)
        cited_words = cited.split()
        families = [f for f in (normalize_name(n) for n in candidate.family_names) if f]
        matched = sum(
            1 for f in families if (f in cited_words if len(f) < 3 else f in cited)
        )

        if families and matched:
            denominator = len(families)
            if is_truncated(expected_author):
                # "Smith and others" only promises the names it lists.
                denominator = min(denominator, max(1, len(split_author_list(expected_author))))
            score = min(100.0, 100 * matched / denominator)
        else:
            score = float(similarity(decode_latex_accents(expected_author), candidate.author_display))

        extras = find_extra_authors(expected_author, candidate.authors)
        if extras:
            issues.append(
                Issue(
                    IssueKind.AUTHOR,
                    f"Possible extra or fabricated author(s) not in the record: {', '.join(extras)}",
                )
            )
            score -= _EXTRA_AUTHOR_PENALTY * len(extras)
        return max(0.0, score)

    def _journal_score(
        self, expected_journal: str | None, candidate: Candidate, issues: list[Issue]
    ) -> tuple[float, float]:
        """Journal sub-score and the confidence penalty that goes with it."""
        if not expected_journal:
            return 100, 0
        if not candidate.journal:
            return _NO_RECORD_JOURNAL_SCORE, 0

        score = similarity(expected_journal, candidate.journal)
        if score < _ABBREVIATION_JOURNAL_SCORE and (
            _is_abbreviation(expected_journal, candidate.journal)
            or _is_abbreviation(candidate.journal, expected_journal)
        ):
            return _ABBREVIATION_JOURNAL_SCORE, 0

        cited_preprint = is_preprint_venue(expected_journal)
        record_preprint = is_preprint_venue(candidate.journal)
        if score < _VERSION_JOURNAL_THRESHOLD and cited_preprint != record_preprint:
            issues.append(
                Issue(
                    IssueKind.VERSION,
                    f'Version difference: cited venue "{expected_journal}", record venue '
                    f'"{candidate.journal}" (preprint vs published)',
                    informational=True,
                )
            )
            return _VERSION_JOURNAL_SCORE, 0

        if score < _JOURNAL_MISMATCH_THRESHOLD:
            issues.append(
                Issue(
                    IssueKind.JOURNAL,
                    f'Journal mismatch: "{expected_journal}" vs "{candidate.journal}"',
                )
            )
            return score, _JOURNAL_MISMATCH_PENALTY
        if score < _JOURNAL_DIFFERS_THRESHOLD:
            issues.append(
                Issue(
                    IssueKind.JOURNAL,
                    f'Journal differs: "{expected_journal}" vs "{candidate.journal}"',
                    informational=True,
                )
            )
            return score, _JOURNAL_DIFFERS_PENALTY
        return score, 0

    def _year_score(
        self,
        expected: ExpectedMetadata,
        candidate: Candidate,
        title_score: float,
        issues: list[Issue],
    ) -> float:
        if expected.year is None or candidate.year is None:
            return 100
        delta = abs(expected.year - candidate.year)
        if delta == 0:
            return 100

        preprint = is_preprint_venue(expected.journal) or is_preprint_venue(candidate.journal)
        if preprint and delta in _PREPRINT_YEAR_SCORES:
            score = _PREPRINT_YEAR_SCORES[delta]
        elif delta == 1 and title_score > _ADJACENT_YEAR_TITLE_THRESHOLD:
            score = _ADJACENT_YEAR_SCORE
        else:
            issues.append(
                Issue(
                    IssueKind.YEAR,
                    f"Year mismatch: expected {expected.year}, found {candidate.year}",
                )
            )
            return 0

        issues.append(
            Issue(
                IssueKind.VERSION,
                f"Year differs by {delta} (expected {expected.year}, found {candidate.year}); "
                "likely a preprint/published version difference",
                informational=True,
            )
        )
        return score

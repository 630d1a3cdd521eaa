# ABOUTME: Unit tests for the MatchScorer front door and the MatchResult contract.
# ABOUTME: Tests strategy selection, the acceptance gate, score validation, and serialization.

import pytest

from citecheck.metadata.types import Author, Candidate, ExpectedMetadata
from citecheck.scoring import (
    NOT_FOUND,
    FreeTextScorer,
    Issue,
    IssueKind,
    MatchResult,
    MatchScorer,
    StructuredScorer,
)
from citecheck.scoring.result import clamp_score


class TestMatchScorer:
    """Tests for MatchScorer."""

    def test_strategy_selection(self) -> None:
        """A cited title selects structured mode; anything else is free text."""
        scorer = MatchScorer()
        assert isinstance(scorer.strategy_for(ExpectedMetadata(title="Deep learning")), StructuredScorer)
        assert isinstance(scorer.strategy_for(ExpectedMetadata(author="LeCun")), FreeTextScorer)
        assert isinstance(scorer.strategy_for(None), FreeTextScorer)

    def test_no_candidate(self) -> None:
        """No candidate gives a not-found result."""
        result = MatchScorer().score("Deep learning", None)
        assert not result.exists
        assert result.source == NOT_FOUND
        assert result.issue_messages == ["No results returned by the metadata source"]

    def test_weak_title_is_not_found(self, deep_learning_candidate: Candidate) -> None:
        """A candidate below the acceptance gate is reported as not found."""
        query = "Quantum chromodynamics of heavy ion collisions at high energies"
        result = MatchScorer().score(query, deep_learning_candidate)
        assert not result.exists
        assert result.confidence == 0
        assert result.title == ""
        assert len(result.issues) == 1
        assert result.issues[0].kind is IssueKind.TITLE
        assert "No sufficiently similar result found in CrossRef" in result.issues[0].message

    def test_unrelated_record_sharing_title_words_is_not_found(self) -> None:
        """A different paper whose title echoes words of the citation is not accepted."""
        query = "Smith J. Deep Learning Advances. Journal of AI. 2021"
        candidate = Candidate(
            title="Learning Advantages",
            source="crossref",
            authors=(Author("Kowalski", "Jan"),),
            year=2019,
            journal="Pattern Letters",
        )
        result = MatchScorer().score(query, candidate)
        assert not result.exists
        assert result.issues[0].kind is IssueKind.TITLE

    def test_gate_applies_in_structured_mode(self, deep_learning_candidate: Candidate) -> None:
        """The acceptance gate also applies to structured scoring."""
        expected = ExpectedMetadata(title="Quantum chromodynamics of heavy ion collisions")
        result = MatchScorer().score("anything", deep_learning_candidate, expected)
        assert not result.exists

    def test_accepted_candidate(self, deep_learning_candidate: Candidate) -> None:
        """An accepted candidate carries formatted citations."""
        query = "LeCun, Y., Bengio, Y., & Hinton, G. (2015). Deep learning. Nature, 521, 436-444."
        result = MatchScorer().score(query, deep_learning_candidate)
        assert result.exists
        assert result.source == "crossref"
        assert result.confidence == 100
        assert result.issues == []
        assert result.apa.startswith("LeCun, Y., Bengio, Y., & Hinton, G. (2015).")
        assert result.bibtex.startswith("@article{LeCun2015Deep,")

    def test_pure_function(self, deep_learning_candidate: Candidate) -> None:
        """Scoring the same input twice gives equal, separate results."""
        query = "LeCun Y. Deep learning. Nature 2014"
        first = MatchScorer().score(query, deep_learning_candidate)
        second = MatchScorer().score(query, deep_learning_candidate)
        assert first == second
        assert first is not second


class TestMatchResult:
    """Tests for MatchResult validation and helpers."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(100.5, 100), (-3, 0), (54.5, 55), (54.49, 54), (0, 0)],
    )
    def test_clamp_score(self, value: float, expected: int) -> None:
        """Scores are rounded half up and clamped to 0-100."""
        assert clamp_score(value) == expected

    @pytest.mark.parametrize("field", ["title_score", "author_score", "journal_score", "confidence"])
    def test_out_of_range_score_rejected(self, field: str) -> None:
        """Sub-scores above 100 are rejected."""
        with pytest.raises(ValueError, match=field):
            MatchResult(exists=True, **{field: 101})

    def test_out_of_range_year_score_rejected(self) -> None:
        """A negative year score is rejected."""
        with pytest.raises(ValueError, match="year_score"):
            MatchResult(exists=True, year_score=-1)

    def test_not_found_is_zeroed(self) -> None:
        """A not-found result has zeroed scores and empty fields."""
        result = MatchResult.not_found(Issue(IssueKind.SOURCE, "gone"))
        assert result.to_dict() == {
            "exists": False,
            "source": NOT_FOUND,
            "title": "",
            "authors": "",
            "year": None,
            "journal": "",
            "url": "",
            "doi": "",
            "apa": "",
            "bibtex": "",
            "title_score": 0,
            "author_score": 0,
            "journal_score": 0,
            "year_score": None,
            "confidence": 0,
            "issues": ["gone"],
            "corrected_apa": None,
            "corrected_bibtex": None,
            "fallback_source": None,
        }

    def test_has_issue_hard_only(self) -> None:
        """hard_only ignores informational issues."""
        result = MatchResult(
            exists=True,
            issues=[Issue(IssueKind.VERSION, "preprint", informational=True)],
        )
        assert result.has_issue(IssueKind.VERSION)
        assert not result.has_issue(IssueKind.VERSION, hard_only=True)
        assert not result.has_issue(IssueKind.YEAR)

    def test_source_label(self) -> None:
        """Source names map to display labels."""
        assert MatchResult(exists=True, source="semantic_scholar").source_label == "Semantic Scholar"
        assert MatchResult(exists=False).source_label == "Not found"

    def test_issue_str(self) -> None:
        """An issue prints as its message."""
        assert str(Issue(IssueKind.TITLE, "Title mismatch")) == "Title mismatch"

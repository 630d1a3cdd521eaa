# ABOUTME: Unit tests for the SourceAdapter protocol.
# ABOUTME: Validates the protocol contract and runtime_checkable behavior.

from citecheck.metadata import CrossRefAdapter, OpenAlexAdapter, SemanticScholarAdapter
from citecheck.metadata.provider import SourceAdapter
from citecheck.metadata.types import Candidate
from tests.fixtures.http import FakeHttpClient


class FakeSource:
    """Minimal implementation of SourceAdapter for testing."""

    @property
    def name(self) -> str:
        return "fake"

    def search(
        self,
        query: str,
        expected_year: int | None = None,
        expected_journal: str | None = None,
    ) -> Candidate | None:
        if query == "missing":
            return None
        return Candidate(title=query, source="fake", year=expected_year)


class NotASource:
    """Missing the search method, so it should not satisfy the protocol."""

    @property
    def name(self) -> str:
        return "broken"


class TestSourceAdapter:
    """Tests for SourceAdapter protocol."""

    def test_valid_implementation_is_instance(self) -> None:
        """A class with name and search satisfies the protocol."""
        assert isinstance(FakeSource(), SourceAdapter)

    def test_invalid_implementation_is_not_instance(self) -> None:
        """A class without search does not satisfy the protocol."""
        assert not isinstance(NotASource(), SourceAdapter)

    def test_search_returns_candidate_or_none(self) -> None:
        """search returns a Candidate, or None when nothing matches."""
        source = FakeSource()
        assert source.search("Deep learning", 2015).year == 2015
        assert source.search("missing") is None

    def test_bundled_adapters_satisfy_protocol(self) -> None:
        """All three bundled adapters satisfy the protocol."""
        client = FakeHttpClient()
        for adapter in (
            CrossRefAdapter(client),
            SemanticScholarAdapter(client),
            OpenAlexAdapter(client),
        ):
            assert isinstance(adapter, SourceAdapter)

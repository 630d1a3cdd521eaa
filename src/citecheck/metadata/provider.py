# ABOUTME: SourceAdapter protocol defining the contract for scholarly metadata sources.
# ABOUTME: CrossRef, Semantic Scholar, and OpenAlex each implement this.

from typing import Protocol, runtime_checkable

from citecheck.metadata.types import Candidate


@runtime_checkable
class SourceAdapter(Protocol):
    """Protocol for metadata lookup services.

    `search` fetches the provider's top results for the query and returns the
    single best candidate, or None when the provider fails, rate-limits, or
    has nothing. Implementations never raise for transport problems.
    """

    @property
    def name(self) -> str: ...

    def search(
        self,
        query: str,
        expected_year: int | None = None,
        expected_journal: str | None = None,
    ) -> Candidate | None: ...

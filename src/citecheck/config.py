# ABOUTME: Runtime settings for citecheck and the factory that wires sources into a verifier.
# ABOUTME: Values come from CLI options and their environment variables; defaults need no setup.

from dataclasses import dataclass

import httpx

from citecheck.core.batch import DEFAULT_BATCH_DELAY
from citecheck.core.reconcile import CitationVerifier
from citecheck.metadata.http import CitecheckHttpClient, HttpClient

MAILTO_ENVVAR = "CITECHECK_MAILTO"
SEMANTIC_SCHOLAR_KEY_ENVVAR = "SEMANTIC_SCHOLAR_API_KEY"


@dataclass(frozen=True)
class Settings:
    """Network and batch settings.

    `mailto` is sent to CrossRef and OpenAlex so requests land in their
    polite pools. The Semantic Scholar key is optional and raises that
    API's rate limit.
    """

    timeout: float = 30.0
    mailto: str | None = None
    semantic_scholar_api_key: str | None = None
    max_retries: int = 0
    batch_delay: float = DEFAULT_BATCH_DELAY

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            msg = f"timeout must be positive, got {self.timeout}"
            raise ValueError(msg)
        if self.max_retries < 0:
            msg = f"max_retries must not be negative, got {self.max_retries}"
            raise ValueError(msg)
        if self.batch_delay < 0:
            msg = f"batch_delay must not be negative, got {self.batch_delay}"
            raise ValueError(msg)

    def create_http_client(self, transport: httpx.BaseTransport | None = None) -> CitecheckHttpClient:
        return CitecheckHttpClient(
            timeout=self.timeout,
            mailto=self.mailto,
            max_retries=self.max_retries,
            transport=transport,
        )

    def create_verifier(self, http_client: HttpClient) -> CitationVerifier:
        """CrossRef-first verifier over the given client."""
        return CitationVerifier.with_default_sources(
            http_client,
            mailto=self.mailto,
            semantic_scholar_api_key=self.semantic_scholar_api_key,
        )

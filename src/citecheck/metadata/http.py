# ABOUTME: HTTP client abstraction for scholarly metadata API calls.
# ABOUTME: Optional pacing and retry with backoff, plus an injectable transport for testing.

import logging
import time
from typing import Any, Protocol, runtime_checkable

import httpx

from citecheck import __version__

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}

USER_AGENT = f"citecheck/{__version__}"


class MetadataFetchError(Exception):
    """Raised when an HTTP request to a metadata provider fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def rate_limited(self) -> bool:
        return self.status_code == 429


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for HTTP GET operations against metadata APIs."""

    def get(
        self,
        url: str,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]: ...


class CitecheckHttpClient:
    """HTTP client for metadata API calls.

    Wraps httpx.Client. Pacing between requests and retries of transient
    failures (429, 5xx) are both off by default: scheduling against provider
    rate limits belongs to the caller, and a failed lookup simply means no
    candidate from that source.
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        mailto: str | None = None,
        min_request_interval: float = 0.0,
        max_retries: int = 0,
        retry_delay: float = 1.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        user_agent = USER_AGENT
        if mailto:
            user_agent = f"{USER_AGENT} (mailto:{mailto})"
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": user_agent, "Accept": "application/json"},
            "timeout": timeout,
            "follow_redirects": True,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.Client(**client_kwargs)
        self._min_interval = min_request_interval
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._last_request_time: float = 0.0

    def get(
        self,
        url: str,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Send a GET request, retrying transient failures if configured.

        Args:
            url: The URL to request.
            params: Optional query parameters.
            headers: Optional per-request headers (e.g. an API key).

        Returns:
            Parsed JSON response body.

        Raises:
            MetadataFetchError: On transport errors, non-success statuses,
                exhausted retries, or a body that is not JSON.
        """
        self._pace()

        attempts = 1 + self._max_retries
        last_status = 0
        for attempt in range(attempts):
            try:
                response = self._client.get(url, params=params, headers=headers)
                last_status = response.status_code
            except httpx.HTTPError as exc:
                raise MetadataFetchError(f"Request failed: {url}: {exc}") from exc

            if response.status_code == 200:
                try:
                    return response.json()
                except ValueError as exc:
                    raise MetadataFetchError(f"Invalid JSON from {url}") from exc

            if response.status_code not in _RETRYABLE_STATUS_CODES:
                raise MetadataFetchError(
                    f"HTTP {response.status_code} from {url}",
                    status_code=response.status_code,
                )

            if attempt < attempts - 1:
                delay = self._retry_delay * (2**attempt)
                logger.warning(
                    "HTTP %d from %s, retrying in %.1fs (attempt %d/%d)",
                    response.status_code,
                    url,
                    delay,
                    attempt + 1,
                    self._max_retries,
                )
                time.sleep(delay)

        raise MetadataFetchError(
            f"HTTP {last_status} from {url} after {attempts} attempt(s)",
            status_code=last_status,
        )

    def close(self) -> None:
        self._client.close()

    def _pace(self) -> None:
        """Sleep if needed to maintain the minimum interval between requests."""
        if self._min_interval <= 0:
            return
        now = time.monotonic()
        elapsed = now - self._last_request_time
        if elapsed < self._min_interval and self._last_request_time > 0:
            time.sleep(self._min_interval - elapsed)
        self._last_request_time = time.monotonic()

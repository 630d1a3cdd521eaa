# ABOUTME: Semantic Scholar source adapter (Academic Graph API paper search).
# ABOUTME: Used as the first fallback when CrossRef finds nothing or looks doubtful.

import logging

from citecheck.metadata.http import HttpClient, MetadataFetchError
from citecheck.metadata.parsers import parse_semantic_scholar_response
from citecheck.metadata.selection import select_best_candidate
from citecheck.metadata.types import Candidate

logger = logging.getLogger(__name__)

_S2_SEARCH_URL = "https://api.semanticscholar.org/graph/v1/paper/search"
_S2_FIELDS = "paperId,title,authors,year,venue,journal,externalIds,url"
_SEARCH_LIMIT = 3


class SemanticScholarAdapter:
    """Source adapter backed by the Semantic Scholar Graph API.

    Anonymous access is heavily rate limited (HTTP 429); an API key raises
    the limit and is sent in the x-api-key header.
    """

    def __init__(self, http_client: HttpClient, *, api_key: str | None = None) -> None:
        self._http = http_client
        self._api_key = api_key

    @property
    def name(self) -> str:
        return "semantic_scholar"

    def search(
        self,
        query: str,
        expected_year: int | None = None,
        expected_journal: str | None = None,
    ) -> Candidate | None:
        """Search Semantic Scholar and return the best-matching paper, or None."""
        query = query.strip()
        if not query:
            return None

        params = {"query": query, "limit": str(_SEARCH_LIMIT), "fields": _S2_FIELDS}
        headers = {"x-api-key": self._api_key} if self._api_key else None

        try:
            data = self._http.get(_S2_SEARCH_URL, params=params, headers=headers)
        except MetadataFetchError as exc:
            if exc.rate_limited:
                logger.warning("Semantic Scholar rate limit reached for %r", query)
            else:
                logger.warning("Semantic Scholar search failed for %r: %s", query, exc)
            return None

        candidates = parse_semantic_scholar_response(data)
        if not candidates:
            logger.debug("Semantic Scholar returned no results for %r", query)
            return None
        return select_best_candidate(candidates, query, expected_year, expected_journal)

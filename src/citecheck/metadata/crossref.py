# ABOUTME: CrossRef source adapter, the primary source for reference verification.
# ABOUTME: Searches api.crossref.org/works and returns the best of the top results.

import logging

from citecheck.metadata.http import HttpClient, MetadataFetchError
from citecheck.metadata.parsers import parse_crossref_response
from citecheck.metadata.selection import select_best_candidate
from citecheck.metadata.types import Candidate

logger = logging.getLogger(__name__)

_CROSSREF_WORKS_URL = "https://api.crossref.org/works"
# The intended work is not always ranked first when the query carries a wrong
# author or venue, so look at a few results.
_SEARCH_ROWS = 3


class CrossRefAdapter:
    """Source adapter backed by the CrossRef REST API.

    The whole citation text goes into CrossRef's bibliographic query, which
    weighs title, authors, venue, and year together.
    """

    def __init__(self, http_client: HttpClient, *, mailto: str | None = None) -> None:
        self._http = http_client
        self._mailto = mailto

    @property
    def name(self) -> str:
        return "crossref"

    def search(
        self,
        query: str,
        expected_year: int | None = None,
        expected_journal: str | None = None,
    ) -> Candidate | None:
        """Search CrossRef and return the best-matching work, or None."""
        query = query.strip()
        if not query:
            return None

        params = {"query": query, "rows": str(_SEARCH_ROWS)}
        if self._mailto:
            params["mailto"] = self._mailto

        try:
            data = self._http.get(_CROSSREF_WORKS_URL, params=params)
        except MetadataFetchError as exc:
            if exc.rate_limited:
                logger.warning("CrossRef rate limit reached for %r", query)
            else:
                logger.warning("CrossRef search failed for %r: %s", query, exc)
            return None

        candidates = parse_crossref_response(data)
        if not candidates:
            logger.debug("CrossRef returned no results for %r", query)
            return None
        return select_best_candidate(candidates, query, expected_year, expected_journal)

# ABOUTME: OpenAlex source adapter using the title.search filter on /works.
# ABOUTME: Second fallback source; fetches a few more results to separate work versions.

import logging
import re

from citecheck.metadata.http import HttpClient, MetadataFetchError
from citecheck.metadata.parsers import parse_openalex_response
from citecheck.metadata.selection import select_best_candidate
from citecheck.metadata.types import Candidate

logger = logging.getLogger(__name__)

_OPENALEX_WORKS_URL = "https://api.openalex.org/works"
_PER_PAGE = 5

# Commas separate filters and pipes mean OR in OpenAlex filter syntax.
_FILTER_SYNTAX_RE = re.compile(r"[,|:]+")


def _filter_value(query: str) -> str:
    return " ".join(_FILTER_SYNTAX_RE.sub(" ", query).split())


class OpenAlexAdapter:
    """Source adapter backed by the OpenAlex API.

    No key is needed; a contact address puts requests in the "polite pool".
    """

    def __init__(self, http_client: HttpClient, *, mailto: str | None = None) -> None:
        self._http = http_client
        self._mailto = mailto

    @property
    def name(self) -> str:
        return "openalex"

    def search(
        self,
        query: str,
        expected_year: int | None = None,
        expected_journal: str | None = None,
    ) -> Candidate | None:
        """Search OpenAlex works by title and return the best match, or None."""
        value = _filter_value(query)
        if not value:
            return None

        params = {"filter": f"title.search:{value}", "per_page": str(_PER_PAGE)}
        if self._mailto:
            params["mailto"] = self._mailto

        try:
            data = self._http.get(_OPENALEX_WORKS_URL, params=params)
        except MetadataFetchError as exc:
            logger.warning("OpenAlex search failed for %r: %s", query, exc)
            return None

        candidates = parse_openalex_response(data)
        if not candidates:
            logger.debug("OpenAlex returned no results for %r", query)
            return None
        return select_best_candidate(candidates, query, expected_year, expected_journal)

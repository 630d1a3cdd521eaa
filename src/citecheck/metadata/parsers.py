# ABOUTME: Parsing functions for CrossRef, Semantic Scholar, and OpenAlex JSON responses.
# ABOUTME: Maps each provider's schema onto Candidate, tolerating missing or mistyped fields.

from typing import Any

from citecheck.metadata.types import Author, Candidate, parse_year

_DOI_PREFIXES = ("https://doi.org/", "http://doi.org/", "http://dx.doi.org/", "doi:")
_CROSSREF_DATE_FIELDS = ("published", "issued", "published-print", "published-online", "created")
_S2_PAPER_URL = "https://www.semanticscholar.org/paper/"


def strip_doi_prefix(doi: str | None) -> str:
    """Reduce a DOI URL or 'doi:' form to the bare '10.x/...' identifier."""
    if not doi:
        return ""
    doi = doi.strip()
    lowered = doi.lower()
    for prefix in _DOI_PREFIXES:
        if lowered.startswith(prefix):
            return doi[len(prefix) :]
    return doi


def parse_person_name(name: str) -> Author:
    """Split a display name into family and given parts.

    Handles "Family, Given" as well as "Given Middle Family". A single-word
    name becomes a family name with no given name.
    """
    name = " ".join(name.split())
    if "," in name:
        family, given = (part.strip() for part in name.split(",", 1))
        return Author(family=family, given=given or None)
    parts = name.split(" ")
    if len(parts) == 1:
        return Author(family=parts[0])
    return Author(family=parts[-1], given=" ".join(parts[:-1]))


def _mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _entries(value: Any) -> list[dict[str, Any]]:
    """The dict elements of a JSON array; anything else in it is dropped."""
    if not isinstance(value, list):
        return []
    return [entry for entry in value if isinstance(entry, dict)]


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _first(values: Any) -> str:
    """CrossRef wraps most strings in single-element lists."""
    if isinstance(values, list):
        return _text(values[0]) if values else ""
    return _text(values)


def _number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _crossref_year(item: dict[str, Any]) -> int | None:
    for field in _CROSSREF_DATE_FIELDS:
        parts = _mapping(item.get(field)).get("date-parts")
        if isinstance(parts, list) and parts and isinstance(parts[0], list) and parts[0]:
            year = parse_year(parts[0][0])
            if year is not None:
                return year
    return None


def _crossref_authors(item: dict[str, Any]) -> tuple[Author, ...]:
    authors = []
    for entry in _entries(item.get("author")):
        family = _text(entry.get("family"))
        given = _text(entry.get("given")) or None
        if not family:
            # Consortium authors only carry a "name".
            family = _text(entry.get("name"))
        if family:
            authors.append(Author(family=family, given=given))
    return tuple(authors)


def _named_authors(names: list[str]) -> tuple[Author, ...]:
    return tuple(parse_person_name(name) for name in names if name)


def parse_crossref_response(data: Any) -> list[Candidate]:
    """Parse a CrossRef /works search response into candidates.

    Items that are not JSON objects are skipped; fields of the wrong type
    are treated as missing.
    """
    items = _entries(_mapping(_mapping(data).get("message")).get("items"))
    results: list[Candidate] = []
    for item in items:
        doi = _text(item.get("DOI"))
        results.append(
            Candidate(
                title=_first(item.get("title")),
                source="crossref",
                authors=_crossref_authors(item),
                year=_crossref_year(item),
                journal=_first(item.get("container-title")),
                identifier=doi,
                url=_text(item.get("URL")) or (f"https://doi.org/{doi}" if doi else ""),
                doi=doi,
                relevance=_number(item.get("score")),
            )
        )
    return results


def parse_semantic_scholar_response(data: Any) -> list[Candidate]:
    """Parse a Semantic Scholar Graph API paper/search response into candidates."""
    results: list[Candidate] = []
    for paper in _entries(_mapping(data).get("data")):
        paper_id = _text(paper.get("paperId"))
        doi = strip_doi_prefix(_text(_mapping(paper.get("externalIds")).get("DOI")))
        venue = _text(paper.get("venue")) or _text(_mapping(paper.get("journal")).get("name"))
        authors = _named_authors([_text(a.get("name")) for a in _entries(paper.get("authors"))])
        results.append(
            Candidate(
                title=_text(paper.get("title")),
                source="semantic_scholar",
                authors=authors,
                year=parse_year(paper.get("year")),
                journal=venue,
                identifier=doi or paper_id,
                url=_text(paper.get("url")) or (f"{_S2_PAPER_URL}{paper_id}" if paper_id else ""),
                doi=doi,
            )
        )
    return results


def parse_openalex_response(data: Any) -> list[Candidate]:
    """Parse an OpenAlex /works response into candidates."""
    results: list[Candidate] = []
    for work in _entries(_mapping(data).get("results")):
        authors = _named_authors(
            [
                _text(_mapping(authorship.get("author")).get("display_name"))
                for authorship in _entries(work.get("authorships"))
            ]
        )
        venue = _mapping(_mapping(work.get("primary_location")).get("source"))
        raw_doi = _text(work.get("doi"))
        work_id = _text(work.get("id"))
        results.append(
            Candidate(
                title=_text(work.get("title")) or _text(work.get("display_name")),
                source="openalex",
                authors=authors,
                year=parse_year(work.get("publication_year")),
                journal=_text(venue.get("display_name")),
                identifier=strip_doi_prefix(raw_doi) or work_id,
                url=raw_doi or work_id,
                doi=strip_doi_prefix(raw_doi),
            )
        )
    return results

# ABOUTME: Core bibliographic data structures shared by adapters, scorers, and formatters.
# ABOUTME: Candidate is the interchange format between source lookup, scoring, and export.

import re
from dataclasses import dataclass, field

_YEAR_RE = re.compile(r"\d{4}")


@dataclass(frozen=True)
class Author:
    """One author of a work, split into family and (optional) given name."""

    family: str
    given: str | None = None

    @property
    def display_name(self) -> str:
        """'Family, Given' when a given name is known, else just the family name."""
        return f"{self.family}, {self.given}" if self.given else self.family


@dataclass(frozen=True)
class Candidate:
    """A single work record returned by a metadata source.

    Frozen so that scoring and reconciliation can never mutate what an
    adapter fetched. Every field except title may be empty because the
    providers do not guarantee authors, venue, year, or DOI.
    """

    title: str
    source: str
    authors: tuple[Author, ...] = ()
    year: int | None = None
    journal: str = ""
    identifier: str = ""
    url: str = ""
    doi: str = ""
    relevance: float | None = None

    @property
    def family_names(self) -> list[str]:
        return [a.family for a in self.authors if a.family]

    @property
    def author_display(self) -> str:
        """Family names joined for display, e.g. 'Smith, Doe'."""
        return ", ".join(self.family_names)

    @property
    def link(self) -> str:
        """Best link to the work: the DOI resolver URL, else the canonical URL."""
        if self.doi:
            return f"https://doi.org/{self.doi}"
        return self.url


@dataclass(frozen=True)
class ExpectedMetadata:
    """Structured hints about the cited work, usually from a parsed BibTeX entry.

    `author` is the free-form author string as written by the citer
    (e.g. "Smith, John and Doe, Jane"); it is never pre-split so that the
    scorer can match family names against the whole string.
    """

    title: str | None = None
    author: str | None = None
    journal: str | None = None
    year: int | None = None
    citation_key: str | None = None
    extra: dict[str, str] = field(default_factory=dict, compare=False)

    @property
    def is_structured(self) -> bool:
        """Structured scoring needs at least a title to compare against."""
        return bool(self.title and self.title.strip())


def parse_year(value: object) -> int | None:
    """Pull a four-digit year out of an int, date string, or BibTeX value."""
    if value is None:
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    match = _YEAR_RE.search(str(value))
    return int(match.group(0)) if match else None

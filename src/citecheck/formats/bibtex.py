# ABOUTME: BibTeX support: record formatting, structured-entry parsing, and batch .bib assembly.
# ABOUTME: Built on bibtexparser; parse failures yield an empty entry list, never an exception.

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import bibtexparser
from bibtexparser.bibdatabase import BibDatabase
from bibtexparser.bparser import BibTexParser
from bibtexparser.bwriter import BibTexWriter

from citecheck.metadata.strings import decode_latex_accents
from citecheck.metadata.types import Candidate, ExpectedMetadata, parse_year

if TYPE_CHECKING:
    from citecheck.scoring.result import MatchResult

logger = logging.getLogger(__name__)

_DISPLAY_ORDER = ["title", "author", "year", "journal", "doi", "url"]
_KEY_STRIP_RE = re.compile(r"[^A-Za-z0-9]")
_WHITESPACE_RE = re.compile(r"\s+")


def citation_key(candidate: Candidate) -> str:
    """'{firstAuthorFamily}{year}{firstTitleWord}', e.g. 'Smith2021Deep'."""
    family = candidate.authors[0].family if candidate.authors else "Unknown"
    family = _KEY_STRIP_RE.sub("", decode_latex_accents(family)) or "Unknown"
    year = candidate.year or "nd"
    words = (candidate.title or "Untitled").split()
    first_word = _KEY_STRIP_RE.sub("", words[0]) if words else ""
    return f"{family}{year}{first_word}"


def format_bibtex(candidate: Candidate, entry_type: str = "article") -> str:
    """Render a candidate as a single BibTeX record."""
    entry = {
        "ENTRYTYPE": entry_type,
        "ID": citation_key(candidate),
        "title": candidate.title or "Untitled",
        "author": " and ".join(a.display_name for a in candidate.authors),
        "year": str(candidate.year) if candidate.year else "n.d.",
    }
    if not entry["author"]:
        del entry["author"]
    if candidate.journal:
        entry["journal"] = candidate.journal
    if candidate.doi:
        entry["doi"] = candidate.doi
    elif candidate.url:
        entry["url"] = candidate.url

    db = BibDatabase()
    db.entries = [entry]
    writer = BibTexWriter()
    writer.indent = "  "
    writer.display_order = _DISPLAY_ORDER
    writer.order_entries_by = None
    return writer.write(db).strip()


def generate_bib_file_content(results: Iterable["MatchResult"]) -> str:
    """Concatenate the BibTeX records of all found results into one .bib text.

    A corrected record from a fallback source takes the place of the
    primary one. Not-found results are skipped.
    """
    records = []
    for result in results:
        if not result.exists:
            continue
        record = result.corrected_bibtex or result.bibtex
        if record:
            records.append(record)
    return "\n\n".join(records)


def _clean(value: str | None) -> str | None:
    if not value:
        return None
    return _WHITESPACE_RE.sub(" ", value).strip() or None


@dataclass
class BibEntry:
    """One parsed BibTeX entry with its lowercase field map."""

    citation_key: str
    entry_type: str
    fields: dict[str, str] = field(default_factory=dict)

    @property
    def title(self) -> str | None:
        return _clean(self.fields.get("title"))

    @property
    def author(self) -> str | None:
        return _clean(self.fields.get("author"))

    def to_expected(self) -> ExpectedMetadata:
        """Turn the entry into scoring hints, stripping LaTeX markup from text fields."""
        title = self.title
        journal = _clean(self.fields.get("journal") or self.fields.get("booktitle"))
        return ExpectedMetadata(
            title=decode_latex_accents(title) if title else None,
            author=self.author,
            journal=decode_latex_accents(journal) if journal else None,
            year=parse_year(self.fields.get("year")),
            citation_key=self.citation_key,
            extra={k: v for k, v in self.fields.items() if k in ("doi", "url")},
        )


def parse_bibtex(text: str) -> list[BibEntry]:
    """Parse BibTeX text into entries.

    Returns an empty list for text that is not BibTeX or cannot be parsed,
    so callers can fall back to treating the input as free text.
    """
    if "@" not in text:
        return []

    parser = BibTexParser(common_strings=True)
    parser.ignore_nonstandard_types = False
    try:
        db = bibtexparser.loads(text, parser=parser)
    except Exception as exc:  # bibtexparser surfaces assorted pyparsing errors
        logger.warning("BibTeX parsing failed: %s", exc)
        return []

    entries = []
    for raw in db.entries:
        fields = {k: v for k, v in raw.items() if k not in ("ID", "ENTRYTYPE")}
        entries.append(
            BibEntry(
                citation_key=raw.get("ID", ""),
                entry_type=raw.get("ENTRYTYPE", "misc"),
                fields=fields,
            )
        )
    return entries

# ABOUTME: Citation output and input formats: APA text and BibTeX records.
# ABOUTME: Also hosts the BibTeX structured-entry parser used for batch input.

from citecheck.formats.apa import format_apa
from citecheck.formats.bibtex import (
    BibEntry,
    format_bibtex,
    generate_bib_file_content,
    parse_bibtex,
)

__all__ = [
    "BibEntry",
    "format_apa",
    "format_bibtex",
    "generate_bib_file_content",
    "parse_bibtex",
]

# ABOUTME: Unit tests for BibTeX formatting, parsing, and .bib assembly.
# ABOUTME: Includes the format-then-parse round trip through bibtexparser.

from pathlib import Path

import pytest

from citecheck.formats.bibtex import (
    BibEntry,
    citation_key,
    format_bibtex,
    generate_bib_file_content,
    parse_bibtex,
)
from citecheck.metadata.types import Author, Candidate
from citecheck.scoring.authors import split_author_list
from citecheck.scoring.result import Issue, IssueKind, MatchResult


def _found(candidate: Candidate) -> MatchResult:
    return MatchResult.from_candidate(
        candidate,
        title_score=100,
        author_score=100,
        journal_score=100,
        confidence=100,
        issues=[],
    )


class TestCitationKey:
    """Tests for citation_key()."""

    def test_family_year_first_word(self, deep_learning_candidate: Candidate) -> None:
        """Key is first family name, year, and first title word."""
        assert citation_key(deep_learning_candidate) == "LeCun2015Deep"

    def test_latex_family_and_punctuation(self) -> None:
        """LaTeX accents and punctuation are stripped from the key."""
        candidate = Candidate(
            title="3D-printed widgets",
            source="crossref",
            authors=(Author(r"M{\"u}ller", "Anna"),),
            year=2020,
        )
        assert citation_key(candidate) == "Muller20203Dprinted"

    def test_missing_author_and_year(self) -> None:
        """Missing author and year use placeholders."""
        assert citation_key(Candidate(title="Widget folklore", source="openalex")) == "UnknownndWidget"


class TestFormatBibtex:
    """Tests for format_bibtex()."""

    def test_record_fields(self, deep_learning_candidate: Candidate) -> None:
        """The record carries title, authors, year, journal, and DOI."""
        record = format_bibtex(deep_learning_candidate)
        assert record.startswith("@article{LeCun2015Deep,")
        assert "title = {Deep learning}" in record
        assert "author = {LeCun, Yann and Bengio, Yoshua and Hinton, Geoffrey}" in record
        assert "year = {2015}" in record
        assert "journal = {Nature}" in record
        assert "doi = {10.1038/nature14539}" in record
        assert "url" not in record
        assert record.endswith("}")

    def test_field_order(self, deep_learning_candidate: Candidate) -> None:
        """Fields are written in display order."""
        record = format_bibtex(deep_learning_candidate)
        positions = [record.index(f"{name} = ") for name in ("title", "author", "year", "journal")]
        assert positions == sorted(positions)

    def test_url_without_doi(self) -> None:
        """Without a DOI the URL is written; missing fields are handled."""
        candidate = Candidate(title="Widget folklore", source="openalex", url="https://openalex.org/W99")
        record = format_bibtex(candidate)
        assert "url = {https://openalex.org/W99}" in record
        assert "author" not in record
        assert "year = {n.d.}" in record

    def test_entry_type(self, deep_learning_candidate: Candidate) -> None:
        """The entry type can be overridden."""
        assert format_bibtex(deep_learning_candidate, entry_type="misc").startswith("@misc{")

    def test_round_trip(self, deep_learning_candidate: Candidate) -> None:
        """Formatting then parsing recovers title, authors, and year."""
        entries = parse_bibtex(format_bibtex(deep_learning_candidate))
        assert len(entries) == 1
        entry = entries[0]
        assert entry.citation_key == "LeCun2015Deep"
        assert entry.title == "Deep learning"
        assert [a.family for a in split_author_list(entry.author or "")] == [
            "LeCun",
            "Bengio",
            "Hinton",
        ]
        assert entry.to_expected().year == 2015


class TestGenerateBibFileContent:
    """Tests for generate_bib_file_content()."""

    def test_joins_found_records(self, deep_learning_candidate: Candidate) -> None:
        """Found records are joined by blank lines; not-found ones are skipped."""
        other = Candidate(title="Widget folklore", source="openalex", year=2001)
        content = generate_bib_file_content(
            [
                _found(deep_learning_candidate),
                MatchResult.not_found(Issue(IssueKind.SOURCE, "nothing")),
                _found(other),
            ]
        )
        records = content.split("\n\n")
        assert len(records) == 2
        assert records[0].startswith("@article{LeCun2015Deep")
        assert records[1].startswith("@article{Unknown2001Widget")

    def test_prefers_corrected_record(self, deep_learning_candidate: Candidate) -> None:
        """A corrected record replaces the primary one."""
        result = _found(deep_learning_candidate)
        result.corrected_bibtex = "@article{Corrected2015, title = {Deep learning}}"
        assert generate_bib_file_content([result]) == result.corrected_bibtex

    def test_nothing_found(self) -> None:
        """No found results give empty content."""
        assert generate_bib_file_content([MatchResult.not_found()]) == ""


class TestParseBibtex:
    """Tests for parse_bibtex() and BibEntry."""

    def test_not_bibtex(self) -> None:
        """Plain reference text is not BibTeX."""
        assert parse_bibtex("LeCun, Y. (2015). Deep learning. Nature.") == []

    def test_parses_file(self, sample_bib: Path) -> None:
        """Entries keep their keys, types, and fields."""
        entries = parse_bibtex(sample_bib.read_text(encoding="utf-8"))
        assert [e.citation_key for e in entries] == ["lecun2015deep", "smith2022neural"]
        assert [e.entry_type for e in entries] == ["article", "inproceedings"]
        assert entries[0].fields["journal"] == "Nature"

    def test_booktitle_becomes_journal(self, sample_bib: Path) -> None:
        """booktitle stands in for journal in the expected fields."""
        entry = parse_bibtex(sample_bib.read_text(encoding="utf-8"))[1]
        expected = entry.to_expected()
        assert expected.journal == "Computational Linguistics"
        assert expected.year == 2022
        assert expected.author == "Smith, John and Doe, Jane"
        assert expected.citation_key == "smith2022neural"

    def test_to_expected_decodes_latex_and_keeps_links(self) -> None:
        """LaTeX markup and whitespace are cleaned; only links are kept as extras."""
        entry = BibEntry(
            citation_key="k",
            entry_type="article",
            fields={
                "title": "Widgets   of\n  {M}{\\\"u}nchen",
                "journal": "J. Widg{\\'e}t Res.",
                "year": "{2019}",
                "doi": "10.1/x",
                "pages": "1--2",
            },
        )
        expected = entry.to_expected()
        assert expected.title == "Widgets of Munchen"
        assert expected.journal == "J. Widget Res."
        assert expected.year == 2019
        assert expected.extra == {"doi": "10.1/x"}

    @pytest.mark.parametrize("field", ["title", "author"])
    def test_blank_fields_are_none(self, field: str) -> None:
        """Blank title and author read as None."""
        entry = BibEntry(citation_key="k", entry_type="misc", fields={field: "  "})
        assert getattr(entry, field) is None

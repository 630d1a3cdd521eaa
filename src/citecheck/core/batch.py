# ABOUTME: Batch verification: cleans pasted LaTeX, splits input into citations (BibTeX entries or
# ABOUTME: one reference per line), and verifies them one at a time with a polite delay.

import logging
import time
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Protocol

from citecheck.formats.bibtex import generate_bib_file_content, parse_bibtex
from citecheck.metadata.types import ExpectedMetadata
from citecheck.scoring.result import Issue, IssueKind, MatchResult

logger = logging.getLogger(__name__)

DEFAULT_BATCH_DELAY = 0.8
MIN_REFERENCE_LENGTH = 10

# Layout and preamble commands that never start a reference line.
_LATEX_LAYOUT_COMMANDS = (
    "\\vspace",
    "\\hspace",
    "\\newpage",
    "\\pagebreak",
    "\\clearpage",
    "\\noindent",
    "\\indent",
    "\\bigskip",
    "\\medskip",
    "\\smallskip",
    "\\vfill",
    "\\hfill",
    "\\linebreak",
    "\\newline",
    "\\par",
    "\\begin{",
    "\\end{",
    "\\setlength",
    "\\addtolength",
    "\\documentclass",
    "\\usepackage",
    "\\input",
    "\\include",
)


class Verifier(Protocol):
    def verify(self, query: str, expected: ExpectedMetadata | None = None) -> MatchResult: ...


@dataclass(frozen=True)
class BatchItem:
    """One citation to verify: the search query plus any structured fields."""

    reference: str
    query: str
    expected: ExpectedMetadata | None = None


@dataclass
class BatchReport:
    """Aggregated results from a batch verification run."""

    results: list[tuple[BatchItem, MatchResult]] = field(default_factory=list)

    @property
    def found(self) -> int:
        return sum(1 for _, result in self.results if result.exists)

    @property
    def not_found(self) -> int:
        return len(self.results) - self.found

    @property
    def with_issues(self) -> int:
        """Found citations carrying at least one hard issue."""
        return sum(
            1
            for _, result in self.results
            if result.exists and any(not issue.informational for issue in result.issues)
        )

    def bib_content(self) -> str:
        return generate_bib_file_content(result for _, result in self.results)


def clean_latex_input(text: str) -> str:
    """Drop blank lines and LaTeX layout commands from pasted bibliography text."""
    kept = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith(_LATEX_LAYOUT_COMMANDS):
            continue
        kept.append(stripped)
    return "\n".join(kept)


def build_batch_items(text: str) -> list[BatchItem]:
    """Split pasted input into citations.

    BibTeX input yields one item per entry, verified in structured mode.
    Anything else is read as one reference per line; lines of
    MIN_REFERENCE_LENGTH characters or fewer are skipped.
    """
    entries = parse_bibtex(text)
    if entries:
        items = []
        for entry in entries:
            query = " ".join(part for part in (entry.title, entry.author) if part)
            if not query:
                logger.warning("Skipping BibTeX entry %s with no title or author", entry.citation_key)
                continue
            items.append(BatchItem(reference=entry.citation_key, query=query, expected=entry.to_expected()))
        return items

    return [
        BatchItem(reference=line, query=line)
        for line in clean_latex_input(text).splitlines()
        if len(line) > MIN_REFERENCE_LENGTH
    ]


def iter_batch(
    verifier: Verifier,
    items: Iterable[BatchItem],
    *,
    delay: float = DEFAULT_BATCH_DELAY,
    sleep: Callable[[float], None] = time.sleep,
) -> Iterator[tuple[BatchItem, MatchResult]]:
    """Verify items one after another, pausing `delay` seconds between them.

    A citation whose lookup blows up on malformed provider data is reported
    as not found and the batch carries on.
    """
    for index, item in enumerate(items):
        if index and delay > 0:
            sleep(delay)
        try:
            result = verifier.verify(item.query, item.expected)
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            logger.exception("Verification failed for %r", item.reference)
            result = MatchResult.not_found(Issue(IssueKind.SOURCE, f"Verification failed: {exc}"))
        yield item, result


def run_batch(
    verifier: Verifier,
    items: Iterable[BatchItem],
    *,
    delay: float = DEFAULT_BATCH_DELAY,
    sleep: Callable[[float], None] = time.sleep,
) -> BatchReport:
    """Verify every item and collect the results in input order."""
    return BatchReport(results=list(iter_batch(verifier, items, delay=delay, sleep=sleep)))

# ABOUTME: Rich rendering of verification results for the terminal.
# ABOUTME: Detail tables for single checks and a summary table for batches.

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from citecheck.core.batch import BatchReport
from citecheck.scoring.base import CONFIDENCE_THRESHOLD
from citecheck.scoring.result import SOURCE_LABELS, MatchResult


def _confidence_style(result: MatchResult) -> str:
    if not result.exists:
        return "red"
    if result.confidence >= CONFIDENCE_THRESHOLD:
        return "green"
    return "yellow"


def _status(result: MatchResult) -> str:
    if not result.exists:
        return "[red]not found[/red]"
    if any(not issue.informational for issue in result.issues):
        return "[yellow]issues[/yellow]"
    return "[green]verified[/green]"


def render_result(console: Console, result: MatchResult) -> None:
    """Print every field of a single verification."""
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=14)
    table.add_column("Value")

    table.add_row("Status", _status(result))
    table.add_row("Source", result.source_label)
    if result.exists:
        table.add_row("Title", escape(result.title))
        table.add_row("Authors", escape(result.authors or "unknown"))
        table.add_row("Year", str(result.year) if result.year else "n.d.")
        if result.journal:
            table.add_row("Journal", escape(result.journal))
        if result.url:
            table.add_row("Link", result.url)
        scores = (
            f"title {result.title_score}  authors {result.author_score}  "
            f"journal {result.journal_score}"
        )
        if result.year_score is not None:
            scores += f"  year {result.year_score}"
        table.add_row("Scores", scores)
        style = _confidence_style(result)
        table.add_row("Confidence", f"[{style}]{result.confidence}%[/{style}]")
    console.print(table)

    for issue in result.issues:
        style = "dim" if issue.informational else "yellow"
        console.print(f"  [{style}]- {escape(issue.message)}[/{style}]")

    if result.exists:
        console.print("\n[bold]APA[/bold]")
        console.print(result.corrected_apa or result.apa, markup=False)
        console.print("\n[bold]BibTeX[/bold]")
        console.print(result.corrected_bibtex or result.bibtex, markup=False)
        if result.fallback_source:
            label = SOURCE_LABELS.get(result.fallback_source, result.fallback_source)
            console.print(f"[dim]Citation taken from {label}.[/dim]")


def render_batch_summary(console: Console, report: BatchReport) -> None:
    """Print one row per citation and the totals."""
    table = Table()
    table.add_column("#", style="dim", width=4)
    table.add_column("Reference", style="bold", max_width=50)
    table.add_column("Status")
    table.add_column("Source")
    table.add_column("Conf.", justify="right")
    table.add_column("Issues")

    for index, (item, result) in enumerate(report.results, start=1):
        style = _confidence_style(result)
        table.add_row(
            str(index),
            escape(item.reference),
            _status(result),
            result.source_label,
            f"[{style}]{result.confidence}[/{style}]",
            escape("\n".join(result.issue_messages)),
        )

    console.print(table)
    console.print(
        f"\n{report.found} found, {report.with_issues} with issues, "
        f"{report.not_found} not found."
    )

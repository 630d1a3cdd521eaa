# ABOUTME: The `citecheck batch` command for verifying a whole bibliography.
# ABOUTME: Reads a .bib file or one reference per line, shows progress, and can export a .bib.

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeRemainingColumn,
)

from citecheck.cli.render import render_batch_summary
from citecheck.config import Settings
from citecheck.core.batch import BatchReport, build_batch_items, iter_batch
from citecheck.core.reconcile import CitationVerifier
from citecheck.metadata.http import HttpClient

logger = logging.getLogger(__name__)


def _create_verifier(settings: Settings, http_client: HttpClient) -> CitationVerifier:
    """Create the default CrossRef-first verifier."""
    return settings.create_verifier(http_client)


def _make_progress(console: Console) -> Progress:
    """Create a Rich progress bar for batch processing."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[bold]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeRemainingColumn(),
        console=console,
    )


@click.command("batch")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the BibTeX of every found citation to this .bib file.",
)
@click.option(
    "--delay",
    type=click.FloatRange(min=0.0),
    default=None,
    help="Seconds to wait between citations (default 0.8).",
)
@click.pass_obj
def batch(settings: Settings, path: Path, output: Path | None, delay: float | None) -> None:
    """Verify every citation in PATH (a .bib file or one reference per line)."""
    console = Console()

    items = build_batch_items(path.read_text(encoding="utf-8"))
    if not items:
        console.print("[yellow]No citations found.[/yellow]")
        return

    report = BatchReport()
    http_client = settings.create_http_client()
    try:
        verifier = _create_verifier(settings, http_client)
        progress = _make_progress(console)
        task_id = progress.add_task("Verifying", total=len(items))
        with progress:
            for item, result in iter_batch(
                verifier,
                items,
                delay=settings.batch_delay if delay is None else delay,
            ):
                report.results.append((item, result))
                progress.update(task_id, advance=1, description=item.reference[:40])
    finally:
        http_client.close()

    render_batch_summary(console, report)

    if output is not None:
        content = report.bib_content()
        output.write_text(content + "\n" if content else "", encoding="utf-8")
        logger.info("Wrote %d record(s) to %s", report.found, output)
        console.print(f"[green]Wrote {output}[/green]")

    if report.not_found:
        raise SystemExit(1)

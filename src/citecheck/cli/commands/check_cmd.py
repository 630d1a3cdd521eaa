# ABOUTME: The `citecheck check` command for verifying a single citation.
# ABOUTME: Free-text by default; --title and friends switch to structured matching.

import click
from rich.console import Console

from citecheck.cli.options import citation_field_options
from citecheck.cli.render import render_result
from citecheck.config import Settings
from citecheck.core.reconcile import CitationVerifier
from citecheck.metadata.http import HttpClient
from citecheck.metadata.types import ExpectedMetadata


def _create_verifier(settings: Settings, http_client: HttpClient) -> CitationVerifier:
    """Create the default CrossRef-first verifier."""
    return settings.create_verifier(http_client)


@click.command("check")
@click.argument("query", required=False)
@citation_field_options
@click.pass_obj
def check(
    settings: Settings,
    query: str | None,
    title: str | None,
    author: str | None,
    journal: str | None,
    year: int | None,
) -> None:
    """Verify one citation QUERY (or the --title/--author/--journal/--year fields)."""
    console = Console()

    expected = None
    if title:
        expected = ExpectedMetadata(title=title, author=author, journal=journal, year=year)
    if not query:
        query = " ".join(part for part in (title, author) if part)
    if not query:
        raise click.UsageError("Give a citation QUERY or at least --title.")

    http_client = settings.create_http_client()
    try:
        verifier = _create_verifier(settings, http_client)
        result = verifier.verify(query, expected)
    finally:
        http_client.close()

    render_result(console, result)
    if not result.exists:
        raise SystemExit(1)

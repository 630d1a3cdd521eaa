# ABOUTME: Shared Click options for citecheck CLI commands.
# ABOUTME: Network settings read from flags or environment, and the structured citation fields.

from collections.abc import Callable
from typing import TypeVar

import click

from citecheck.config import MAILTO_ENVVAR, SEMANTIC_SCHOLAR_KEY_ENVVAR

F = TypeVar("F", bound=Callable[..., object])

mailto_option = click.option(
    "--mailto",
    envvar=MAILTO_ENVVAR,
    default=None,
    help=f"Contact email for CrossRef/OpenAlex polite pools (env: {MAILTO_ENVVAR}).",
)

semantic_scholar_key_option = click.option(
    "--s2-api-key",
    "semantic_scholar_api_key",
    envvar=SEMANTIC_SCHOLAR_KEY_ENVVAR,
    default=None,
    help=f"Semantic Scholar API key (env: {SEMANTIC_SCHOLAR_KEY_ENVVAR}).",
)

timeout_option = click.option(
    "--timeout",
    type=click.FloatRange(min=0.1),
    default=30.0,
    show_default=True,
    help="Per-request timeout in seconds.",
)

retries_option = click.option(
    "--retries",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Retries for rate-limited or failing requests.",
)


def network_options(func: F) -> F:
    for option in (retries_option, timeout_option, semantic_scholar_key_option, mailto_option):
        func = option(func)
    return func


def citation_field_options(func: F) -> F:
    """--title/--author/--journal/--year: switch verification to structured mode."""
    func = click.option("--year", type=int, default=None, help="Cited year.")(func)
    func = click.option("--journal", default=None, help="Cited journal or venue.")(func)
    func = click.option("--author", default=None, help='Cited authors, e.g. "Smith, J. and Doe, A."')(func)
    func = click.option("--title", default=None, help="Cited title (enables structured matching).")(func)
    return func

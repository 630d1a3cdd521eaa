# ABOUTME: CLI package for citecheck, built on Click.
# ABOUTME: Defines the root command group, shared network settings, and logging setup.

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from citecheck.cli.commands import batch_cmd, check_cmd
from citecheck.cli.options import network_options
from citecheck.config import Settings


def configure_logging(verbosity: int) -> None:
    """Warnings only by default; -v adds progress, -vv adds scoring detail."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(package_name="citecheck")
@click.option("-v", "--verbose", count=True, help="Increase log output (-v info, -vv debug).")
@network_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    mailto: str | None,
    semantic_scholar_api_key: str | None,
    timeout: float,
    retries: int,
) -> None:
    """citecheck - verify bibliographic references against scholarly indexes."""
    configure_logging(verbose)
    ctx.obj = Settings(
        timeout=timeout,
        mailto=mailto,
        semantic_scholar_api_key=semantic_scholar_api_key,
        max_retries=retries,
    )


cli.add_command(check_cmd.check)
cli.add_command(batch_cmd.batch)

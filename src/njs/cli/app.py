"""CLI application setup."""

from __future__ import annotations

import logging
import os
import sys
from typing import Annotated

import typer

from njs import __version__
from njs.config import get_settings
from njs.log import log_info, set_log_context
from njs.logging_config import setup_logging

from .shared import console


app = typer.Typer(
    help="Collect job listings from jobs.nvoids.com into a spreadsheet",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]nvoids Job Scraper[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    _version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-V", help="Enable verbose logging"),
    ] = False,
) -> None:
    """nvoids Job Scraper - paginated job listings to .xlsx and .json."""
    settings = get_settings()
    level = logging.DEBUG if verbose else logging.INFO
    setup_logging(level=level, log_dir=settings.log_dir)

    set_log_context(run_id=settings.run_id, pid=os.getpid())
    log_info(
        logging.getLogger("njs.cli"),
        "cli.start",
        argv=" ".join(sys.argv),
        verbose=verbose,
        headless=settings.headless,
        log_dir=settings.log_dir,
    )

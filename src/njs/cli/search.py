"""CLI command: search."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from njs.config import Settings, get_settings
from njs.log import bind_log_context, log_info
from njs.logging_config import get_logger
from njs.models.job import JobRecord, SearchSession
from njs.scrapers.navigator import JobSearchNavigator
from njs.storage.export import export_results

from .app import app
from .shared import USAGE, console, fail


logger = get_logger(__name__)


async def _search_and_export(
    settings: Settings,
    query: str,
    pages: int,
) -> tuple[list[JobRecord], SearchSession | None, dict[str, Any]]:
    navigator = JobSearchNavigator(settings)
    records = await navigator.run(query=query, max_pages=pages)
    exported = await export_results(records, query, settings.output_dir)
    return records, navigator.session, exported


@app.command()
def search(
    query: Annotated[str, typer.Argument(help="Job title to search for")] = "",
    pages: Annotated[
        int | None,
        typer.Argument(help="Number of result pages to read (default: 3)"),
    ] = None,
    headless: Annotated[
        bool,
        typer.Option("--headless", "-H", help="Run browser in headless mode"),
    ] = False,
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", "-o", help="Directory for the .xlsx and .json files"),
    ] = None,
) -> None:
    """
    Search jobs.nvoids.com and save the listings.

    Submits the query, reads up to PAGES result pages, and writes
    <query>_jobs.xlsx plus a <query>_jobs.json backup.

    Example:
        njs search "software engineer" 3
    """
    if not query.strip():
        console.print("Please provide a job title to search for.")
        fail(USAGE)

    settings = get_settings()
    if pages is None:
        pages = settings.default_max_pages
    if pages < 1:
        fail("PAGES must be >= 1")

    if headless:
        settings.headless = True
    if output_dir is not None:
        settings.output_dir = output_dir

    with bind_log_context(op="cli.search"):
        log_info(
            logger,
            "cli.search.start",
            query=query,
            max_pages=pages,
            headless=settings.headless,
        )

    console.print(
        Panel(
            f"[bold]Searching for:[/bold] {escape(query)}\n"
            f"[bold]Max pages:[/bold] {pages}\n"
            f"[bold]Output:[/bold] {settings.output_dir}",
            title="Job Search",
            border_style="blue",
        )
    )

    records, session, exported = asyncio.run(_search_and_export(settings, query, pages))

    table = Table(title="Search Results", show_header=True, header_style="bold green")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Query", escape(query))
    table.add_row("Jobs Found", str(len(records)))
    if session is not None:
        table.add_row("Pages Read", str(session.pages_processed))
        table.add_row("Stopped Because", str(session.stop_reason or "-"))
    table.add_row("Spreadsheet", exported["workbook_file"])
    table.add_row("JSON Backup", exported["backup_file"])
    console.print(table)

    with bind_log_context(op="cli.search"):
        log_info(logger, "cli.search.complete", total=len(records))

    if session is not None and session.aborted:
        console.print(
            f"\n[yellow]![/yellow] Search failed ({session.stop_reason}); wrote empty files"
        )
    else:
        console.print(f"\n[green]✓[/green] Saved {len(records)} jobs")

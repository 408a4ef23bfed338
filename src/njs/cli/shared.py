"""Shared CLI helpers."""

from __future__ import annotations

from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape


console = Console()

USAGE = (
    'Usage: njs search "job title" [PAGES]\n'
    'Example: njs search "software engineer" 3'
)


def fail(message: str) -> NoReturn:
    """Print an error in red and exit with status 1."""
    console.print(escape(message), style="red")
    raise typer.Exit(1)

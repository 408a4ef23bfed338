"""CLI entry point for the nvoids Job Scraper."""

from . import search as _search  # noqa: F401
from .app import app


__all__ = ["app"]

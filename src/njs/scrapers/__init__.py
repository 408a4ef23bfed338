"""Scrapers for jobs.nvoids.com search results."""

from njs.scrapers.base import BaseScraper
from njs.scrapers.extractor import ResultsTableExtractor
from njs.scrapers.navigator import JobSearchNavigator


__all__ = [
    "BaseScraper",
    "JobSearchNavigator",
    "ResultsTableExtractor",
]

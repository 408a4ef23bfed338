"""Persistence of search results."""

from .backup import write_json_backup
from .export import export_results, output_stem
from .report import write_jobs_workbook


__all__ = [
    "export_results",
    "output_stem",
    "write_jobs_workbook",
    "write_json_backup",
]

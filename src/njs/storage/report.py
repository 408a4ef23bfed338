"""Spreadsheet report of job records."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill

from njs.models.job import NOT_AVAILABLE, JobRecord


__all__ = ["COLUMNS", "LINK_LABEL", "SHEET_TITLE", "write_jobs_workbook"]

SHEET_TITLE = "Job Listings"
LINK_LABEL = "View Job"

# (header, record field, column width)
COLUMNS: tuple[tuple[str, str, int], ...] = (
    ("Job Title", "title", 40),
    ("Company", "company", 30),
    ("Location", "location", 30),
    ("Date Posted", "date_posted", 20),
    ("Description", "description", 50),
    ("Link", "link", 50),
)

_HEADER_FONT = Font(bold=True)
_HEADER_FILL = PatternFill(fill_type="solid", fgColor="FFD3D3D3")
_LINK_FONT = Font(color="FF0000FF", underline="single")


def write_jobs_workbook(records: Sequence[JobRecord], path: Path) -> Path:
    """
    Write one row per record to an ``.xlsx`` file.

    The header row is bold on grey with an auto-filter, and each link is shown
    as a clickable "View Job" label. Empty values are written as "N/A".
    """
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = SHEET_TITLE

    sheet.append([header for header, _, _ in COLUMNS])
    for col_idx, (_, _, width) in enumerate(COLUMNS, start=1):
        header_cell = sheet.cell(row=1, column=col_idx)
        header_cell.font = _HEADER_FONT
        header_cell.fill = _HEADER_FILL
        sheet.column_dimensions[header_cell.column_letter].width = width

    link_col = len(COLUMNS)
    for record in records:
        sheet.append([getattr(record, field) or NOT_AVAILABLE for _, field, _ in COLUMNS])
        if record.link:
            cell = sheet.cell(row=sheet.max_row, column=link_col)
            cell.value = LINK_LABEL
            cell.hyperlink = record.link
            cell.font = _LINK_FONT

    sheet.auto_filter.ref = f"A1:{sheet.cell(row=1, column=link_col).column_letter}1"

    path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(path)
    return path

"""Write a run's records to the spreadsheet report and the JSON backup."""

from __future__ import annotations

import asyncio
import re
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from njs.log import log_info, timed
from njs.logging_config import get_logger
from njs.models.job import JobRecord

from .backup import write_json_backup
from .report import write_jobs_workbook


__all__ = ["export_results", "output_stem"]

logger = get_logger(__name__)

_WHITESPACE = re.compile(r"\s+")


def output_stem(query: str) -> str:
    """File stem for a query: whitespace runs become underscores ("a b" -> "a_b_jobs")."""
    return _WHITESPACE.sub("_", query.strip()) + "_jobs"


async def export_results(
    records: Sequence[JobRecord],
    query: str,
    output_dir: Path,
) -> dict[str, Any]:
    """
    Write ``<stem>.xlsx`` and ``<stem>.json`` into ``output_dir``.

    Both files are written even when ``records`` is empty.
    """
    stem = output_stem(query)
    workbook_path = output_dir / f"{stem}.xlsx"
    backup_path = output_dir / f"{stem}.json"

    with timed(logger, "export.workbook", path=workbook_path, count=len(records)):
        # openpyxl is synchronous; keep the event loop free while it saves.
        await asyncio.to_thread(write_jobs_workbook, records, workbook_path)
    with timed(logger, "export.backup", path=backup_path, count=len(records)):
        await write_json_backup(records, backup_path)

    log_info(logger, "export.saved", count=len(records), path=output_dir)
    return {
        "record_count": len(records),
        "workbook_file": str(workbook_path),
        "backup_file": str(backup_path),
    }

"""Raw JSON backup of job records."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

import aiofiles

from njs.models.job import JobRecord


__all__ = ["atomic_write_text", "write_json_backup"]


async def atomic_write_text(path: Path, text: str) -> None:
    """Write text to a file atomically (best-effort) to avoid partial writes."""
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")

    async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
        await f.write(text)

    tmp_path.replace(path)


async def write_json_backup(records: Sequence[JobRecord], path: Path) -> Path:
    """Dump records as a pretty-printed JSON array."""
    data = [record.model_dump(mode="json", by_alias=True) for record in records]
    await atomic_write_text(path, json.dumps(data, indent=2, ensure_ascii=False) + "\n")
    return path

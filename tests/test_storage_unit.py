"""Tests for the spreadsheet report, JSON backup and export step."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from openpyxl import load_workbook

from njs.models.job import NOT_AVAILABLE, JobRecord
from njs.storage import export_results, output_stem, write_jobs_workbook, write_json_backup
from njs.storage.backup import atomic_write_text
from njs.storage.report import LINK_LABEL, SHEET_TITLE


class TestWorkbook:
    """Tests for write_jobs_workbook."""

    def test_header_row_is_styled_and_filtered(self, tmp_path: Path, sample_records) -> None:
        path = write_jobs_workbook(sample_records, tmp_path / "jobs.xlsx")

        sheet = load_workbook(path)[SHEET_TITLE]
        headers = [cell.value for cell in sheet[1]]
        assert headers == [
            "Job Title",
            "Company",
            "Location",
            "Date Posted",
            "Description",
            "Link",
        ]
        assert all(cell.font.bold for cell in sheet[1])
        assert sheet["A1"].fill.fgColor.rgb == "FFD3D3D3"
        assert sheet.auto_filter.ref == "A1:F1"
        assert sheet.column_dimensions["A"].width == 40
        assert sheet.column_dimensions["D"].width == 20
        assert sheet.column_dimensions["F"].width == 50

    def test_one_row_per_record_with_clickable_links(self, tmp_path: Path, sample_records) -> None:
        path = write_jobs_workbook(sample_records, tmp_path / "jobs.xlsx")

        sheet = load_workbook(path)[SHEET_TITLE]
        assert sheet.max_row == 1 + len(sample_records)

        first = [cell.value for cell in sheet[2]]
        assert first[:5] == [
            "Python Developer",
            NOT_AVAILABLE,
            "Austin, TX",
            "2024-05-01",
            NOT_AVAILABLE,
        ]
        link_cell = sheet["F2"]
        assert link_cell.value == LINK_LABEL
        assert link_cell.hyperlink.target == sample_records[0].link
        assert link_cell.font.underline == "single"
        assert link_cell.font.color.rgb == "FF0000FF"

    def test_missing_link_is_written_as_not_available(
        self, tmp_path: Path, sample_records
    ) -> None:
        path = write_jobs_workbook(sample_records, tmp_path / "jobs.xlsx")

        sheet = load_workbook(path)[SHEET_TITLE]
        assert sheet["F3"].value == NOT_AVAILABLE
        assert sheet["F3"].hyperlink is None

    def test_empty_run_writes_header_only(self, tmp_path: Path) -> None:
        path = write_jobs_workbook([], tmp_path / "nested" / "empty.xlsx")

        assert path.exists()
        sheet = load_workbook(path)[SHEET_TITLE]
        assert sheet.max_row == 1


class TestBackup:
    """Tests for the JSON backup."""

    @pytest.mark.asyncio
    async def test_backup_round_trips_records(self, tmp_path: Path, sample_records) -> None:
        path = await write_json_backup(sample_records, tmp_path / "jobs.json")

        data = json.loads(path.read_text(encoding="utf-8"))
        assert [JobRecord.model_validate(item) for item in data] == sample_records
        assert data[0]["datePosted"] == "2024-05-01"
        assert "date_posted" not in data[0]
        assert path.read_text(encoding="utf-8").startswith("[\n  {")

    @pytest.mark.asyncio
    async def test_backup_of_empty_run_is_empty_array(self, tmp_path: Path) -> None:
        path = await write_json_backup([], tmp_path / "jobs.json")

        assert json.loads(path.read_text(encoding="utf-8")) == []

    @pytest.mark.asyncio
    async def test_atomic_write_leaves_no_temp_file(self, tmp_path: Path) -> None:
        target = tmp_path / "sub" / "out.json"

        await atomic_write_text(target, "first")
        await atomic_write_text(target, "second")

        assert target.read_text(encoding="utf-8") == "second"
        assert sorted(p.name for p in target.parent.iterdir()) == ["out.json"]


class TestExport:
    """Tests for export_results naming and output."""

    @pytest.mark.parametrize(
        ("query", "stem"),
        [
            ("software engineer", "software_engineer_jobs"),
            ("  data \t  engineer ", "data_engineer_jobs"),
            ("python", "python_jobs"),
        ],
    )
    def test_output_stem(self, query: str, stem: str) -> None:
        assert output_stem(query) == stem

    @pytest.mark.asyncio
    async def test_export_writes_workbook_and_backup(self, tmp_path: Path, sample_records) -> None:
        result = await export_results(sample_records, "software engineer", tmp_path)

        assert result == {
            "record_count": 2,
            "workbook_file": str(tmp_path / "software_engineer_jobs.xlsx"),
            "backup_file": str(tmp_path / "software_engineer_jobs.json"),
        }
        assert (tmp_path / "software_engineer_jobs.xlsx").exists()
        assert len(json.loads((tmp_path / "software_engineer_jobs.json").read_text())) == 2

    @pytest.mark.asyncio
    async def test_export_of_failed_run_still_writes_files(self, tmp_path: Path) -> None:
        result = await export_results([], "java", tmp_path / "out")

        assert result["record_count"] == 0
        assert Path(result["workbook_file"]).exists()
        assert json.loads(Path(result["backup_file"]).read_text()) == []

"""Pytest configuration and shared fixtures."""

from collections.abc import Generator
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from njs.config import Settings
from njs.models.job import JobRecord
from tests.test_fakes import settings_for_tests


@pytest.fixture
def temp_data_dir() -> Generator[Path]:
    """Create a temporary directory for test data."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_settings(temp_data_dir: Path) -> Settings:
    """Create test settings with temporary directories and no real waits."""
    return settings_for_tests(temp_data_dir)


@pytest.fixture
def sample_records() -> list[JobRecord]:
    """A couple of extracted job records."""
    return [
        JobRecord(
            title="Python Developer",
            link="https://jobs.nvoids.com/job_details.jsp?id=101",
            location="Austin, TX",
            date_posted="2024-05-01",
        ),
        JobRecord(title="Data Engineer", location="Remote"),
    ]

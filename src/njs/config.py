"""Configuration management using Pydantic settings."""

import functools
import uuid
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


__all__ = ["DEFAULT_USER_AGENT", "Settings", "get_settings"]

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/96.0.4664.110 Safari/537.36"
)


def _new_run_id() -> str:
    return f"{datetime.now():%Y%m%d_%H%M%S}_{uuid.uuid4().hex[:6]}"


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    if TYPE_CHECKING:
        # Pydantic dynamically generates a rich `__init__` for settings models.
        # Some type checkers miss those parameters; declare the ones we rely on in tests.
        def __init__(self, *, _env_file: Any | None = None, **values: Any) -> None: ...

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="NVOIDS_SCRAPER_",
        extra="ignore",
    )

    # Browser settings
    headless: bool = Field(default=False, description="Run browser in headless mode")
    slow_mo: int = Field(default=0, ge=0, le=500, description="Slow down operations by ms")
    browser_type: Literal["chromium", "firefox", "webkit"] = Field(
        default="chromium", description="Browser engine to use"
    )
    disable_browser_sandbox: bool = Field(
        default=False,
        description=(
            "Disable the Chromium sandbox (unsafe). "
            "Only enable this in hardened containers where the sandbox is unavailable."
        ),
    )
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="Browser user agent")

    # Search settings
    search_url: str = Field(
        default="https://jobs.nvoids.com/search.jsp",
        description="Search entry point",
    )
    default_max_pages: int = Field(default=3, ge=1, description="Result pages to walk per run")
    entry_load_timeout_ms: int = Field(
        default=60000, ge=0, description="Bound on the entry page becoming idle"
    )
    input_wait_timeout_ms: int = Field(
        default=5000, ge=0, description="Wait per query-input selector"
    )
    submit_navigation_timeout_ms: int = Field(
        default=10000, ge=0, description="Wait for navigation after submitting the query"
    )
    next_navigation_timeout_ms: int = Field(
        default=30000, ge=0, description="Wait for navigation after clicking 'Next'"
    )
    settle_delay_ms: int = Field(
        default=2000, ge=0, description="Pause before the first extraction"
    )

    # Storage paths
    data_dir: Path = Field(default=Path("data"), description="Data storage directory")
    log_dir: Path = Field(default=Path("logs"), description="Log directory")
    output_dir: Path = Field(default=Path("."), description="Spreadsheet/backup directory")

    run_id: str = Field(default_factory=_new_run_id, description="Identifier for this run")

    @property
    def screenshots_dir(self) -> Path:
        """Directory for storing screenshots (debugging)."""
        return self.data_dir / "screenshots"

    def ensure_directories(self) -> None:
        """Create all required directories."""
        for directory in [
            self.data_dir,
            self.screenshots_dir,
            self.log_dir,
            self.output_dir,
        ]:
            directory.mkdir(parents=True, exist_ok=True)


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    settings = Settings()
    settings.ensure_directories()
    return settings

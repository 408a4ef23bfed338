"""Base scraper class with common functionality."""

import asyncio
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeout

from njs.browser.context import BrowserManager
from njs.browser.locate import WaitUntil
from njs.config import Settings, get_settings
from njs.log import log_debug, log_error, log_exception, log_info, log_warning, timed
from njs.logging_config import get_logger


__all__ = ["BaseScraper"]

logger = get_logger(__name__)


class BaseScraper(ABC):
    """Abstract base class for all scrapers."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._browser_manager = BrowserManager(self._settings)

    @abstractmethod
    async def run(self, **kwargs: Any) -> Any:
        """Execute the scraper's main functionality."""
        ...

    async def _safe_goto(
        self,
        page: Page,
        url: str,
        *,
        timeout_ms: int,
        wait_until: WaitUntil = "networkidle",
    ) -> bool:
        """
        Navigate to a URL and wait until the page is interactive.

        Returns True if navigation succeeded.
        """
        try:
            log_info(logger, "nav.goto", url=url)
            with timed(logger, "nav.goto", url=url, timeout_ms=timeout_ms):
                response = await page.goto(url, wait_until=wait_until, timeout=timeout_ms)
        except PlaywrightTimeout:
            log_error(logger, "nav.goto.timeout", url=url, timeout_ms=timeout_ms)
            return False
        except PlaywrightError:
            log_exception(logger, "nav.goto.error", url=url)
            return False

        if response and response.status >= 400:
            log_error(logger, "nav.goto.http_error", url=url, http_status=response.status)
            return False

        log_debug(
            logger,
            "nav.goto.ok",
            url=url,
            http_status=(response.status if response else None),
        )
        return True

    async def _settle(self, delay_ms: int) -> None:
        """Give client-side rendering a moment to finish."""
        if delay_ms <= 0:
            return
        log_debug(logger, "settle.sleep", delay_ms=delay_ms)
        await asyncio.sleep(delay_ms / 1000)

    async def _take_debug_screenshot(self, page: Page, name: str) -> Path | None:
        """Take a screenshot for debugging purposes. Failures are only logged."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = self._settings.screenshots_dir / f"{name}_{timestamp}.png"
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            await page.screenshot(path=str(path))
        except (PlaywrightError, OSError) as e:
            log_warning(logger, "screenshot.failed", path=path, error=str(e))
            return None
        log_info(logger, "screenshot.saved", path=path, name=name)
        return path

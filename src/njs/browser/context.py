"""Browser lifecycle management for a single search session."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from playwright.async_api import Browser, BrowserContext, Page, async_playwright

from njs.config import Settings, get_settings
from njs.log import log_debug, log_info, log_warning, timed
from njs.logging_config import get_logger


__all__ = ["BrowserManager"]

logger = get_logger(__name__)


class BrowserManager:
    """Owns the Playwright browser, its context and the page handed to scrapers."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._browser: Browser | None = None
        self._context: BrowserContext | None = None

    def _get_launch_options(self) -> dict[str, Any]:
        """Build Playwright launch options based on current settings."""
        args: list[str] = []
        if self._settings.browser_type == "chromium" and self._settings.disable_browser_sandbox:
            log_warning(
                logger,
                "browser.sandbox.disabled",
                browser_type=self._settings.browser_type,
                note="Chromium sandbox disabled (unsafe).",
            )
            args = ["--no-sandbox", "--disable-setuid-sandbox"]

        return {
            "headless": self._settings.headless,
            "slow_mo": self._settings.slow_mo,
            "args": args,
        }

    def _get_context_options(self) -> dict[str, Any]:
        # A visible browser uses the full window instead of a fixed viewport.
        return {
            "user_agent": self._settings.user_agent,
            "no_viewport": not self._settings.headless,
        }

    @asynccontextmanager
    async def launch(self) -> AsyncIterator[BrowserContext]:
        """
        Launch the browser and yield a fresh context.

        The context and browser are closed on every exit path.
        """
        async with async_playwright() as playwright:
            log_info(
                logger,
                "browser.launch",
                browser_type=self._settings.browser_type,
                headless=self._settings.headless,
            )
            browser_type = getattr(playwright, self._settings.browser_type)
            with timed(logger, "browser.launch", browser_type=self._settings.browser_type):
                self._browser = await browser_type.launch(**self._get_launch_options())

            try:
                with timed(logger, "browser.new_context"):
                    self._context = await self._browser.new_context(
                        **self._get_context_options()
                    )
                log_info(logger, "browser.ready", browser_type=self._settings.browser_type)
                yield self._context
            finally:
                await self._cleanup()

    async def _cleanup(self) -> None:
        """Clean up browser resources."""
        if self._context:
            log_debug(logger, "browser.context.close")
            await self._context.close()
            self._context = None

        if self._browser:
            log_info(logger, "browser.close")
            await self._browser.close()
            self._browser = None
            log_info(logger, "browser.closed")

    @asynccontextmanager
    async def new_page(self) -> AsyncIterator[Page]:
        """
        Launch a browser and yield a single page.

        Usage:
            async with browser_manager.new_page() as page:
                await page.goto("https://jobs.nvoids.com/search.jsp")
        """
        async with self.launch() as context:
            with timed(logger, "browser.new_page"):
                page = await context.new_page()

            page.set_default_timeout(self._settings.entry_load_timeout_ms)
            page.set_default_navigation_timeout(self._settings.entry_load_timeout_ms)

            try:
                yield page
            finally:
                # Some unit tests stub `Page` objects without a `url` attribute.
                log_debug(logger, "browser.page.close", url=getattr(page, "url", None))
                await page.close()

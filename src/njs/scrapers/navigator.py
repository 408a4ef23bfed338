"""Search submission and result-page traversal for jobs.nvoids.com."""

from __future__ import annotations

import re
from datetime import datetime
from functools import partial
from typing import Any

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page

from njs.browser.locate import locate_first, race_navigation
from njs.log import bind_log_context, log_exception, log_info, log_warning, timed
from njs.logging_config import get_logger
from njs.models.job import JobRecord, SearchSession, StopReason
from njs.scrapers.base import BaseScraper
from njs.scrapers.extractor import ResultsTableExtractor


__all__ = ["JobSearchNavigator"]

logger = get_logger(__name__)


class JobSearchNavigator(BaseScraper):
    """
    Submit a query and walk up to ``max_pages`` result pages.

    Entry-page load failures and a missing query input abort the run with an
    empty result. Anything that goes wrong between result pages only ends the
    walk early; the records collected so far are returned.
    """

    # The site names its search box after a sample query.
    INPUT_SELECTORS = ('input[name="mechanical engineer"]', 'input[type="text"]')
    SUBMIT_SELECTORS = ('input[type="submit"]', 'button[type="submit"]')
    NEXT_LINK_TEXT = re.compile("Next")
    SCREENSHOT_NAME = "site-screenshot"

    def __init__(
        self, *args: Any, extractor: ResultsTableExtractor | None = None, **kwargs: Any
    ) -> None:
        super().__init__(*args, **kwargs)
        self._extractor = extractor or ResultsTableExtractor()
        self._session: SearchSession | None = None

    @property
    def session(self) -> SearchSession | None:
        """State of the most recent run."""
        return self._session

    async def run(
        self,
        *,
        query: str | None = None,
        max_pages: int | None = None,
        **kwargs: Any,
    ) -> list[JobRecord]:
        """
        Search for ``query`` and collect job records page by page.

        Args:
            query: Search text (e.g., "software engineer")
            max_pages: Maximum number of result pages to read

        Returns:
            Records from every page read, in page order
        """
        _ = kwargs

        if not isinstance(query, str) or not query.strip():
            raise ValueError("query must be a non-empty string")
        if max_pages is None:
            max_pages = self._settings.default_max_pages
        if not isinstance(max_pages, int) or max_pages < 1:
            raise ValueError("max_pages must be an integer >= 1")

        session = SearchSession(query=query, max_pages=max_pages)
        self._session = session

        with bind_log_context(op="search", query=query):
            log_info(logger, "search.run", max_pages=max_pages)
            try:
                async with self._browser_manager.new_page() as page:
                    await self._search(page, session)
            except Exception:
                # Failure outside the page walk: the run reports nothing rather than half a page.
                log_exception(logger, "search.driver_error", page=session.current_page)
                session.records = []
                session.stop_reason = StopReason.DRIVER_ERROR

            session.ended_at = datetime.now()
            log_info(
                logger,
                "search.complete",
                total=len(session.records),
                pages=session.pages_processed,
                reason=session.stop_reason,
            )
        return list(session.records)

    async def _search(self, page: Page, session: SearchSession) -> None:
        if not await self._safe_goto(
            page,
            self._settings.search_url,
            timeout_ms=self._settings.entry_load_timeout_ms,
        ):
            session.stop_reason = StopReason.ENTRY_LOAD_FAILED
            return

        await self._take_debug_screenshot(page, self.SCREENSHOT_NAME)

        if not await self._submit_query(page, session.query):
            session.stop_reason = StopReason.INPUT_NOT_FOUND
            return

        await self._settle(self._settings.settle_delay_ms)
        session.stop_reason = await self._walk_pages(page, session)

    async def _submit_query(self, page: Page, query: str) -> bool:
        """Fill the search box and submit. Returns False when no input exists."""
        field = await locate_first(
            page,
            self.INPUT_SELECTORS,
            timeout_ms=self._settings.input_wait_timeout_ms,
        )
        if field is None:
            log_warning(logger, "search.input.not_found")
            return False

        # Triple-click selects whatever the box was pre-filled with.
        await field.click(click_count=3)
        await field.fill(query)

        submit = await locate_first(page, self.SUBMIT_SELECTORS)
        submit_action = submit.click if submit is not None else partial(field.press, "Enter")

        log_info(logger, "search.submit")
        navigated = await race_navigation(
            page,
            submit_action,
            timeout_ms=self._settings.submit_navigation_timeout_ms,
        )
        if not navigated:
            log_info(logger, "search.submit.no_navigation", note="continuing on current page")
        return True

    async def _walk_pages(self, page: Page, session: SearchSession) -> StopReason:
        while session.current_page <= session.max_pages:
            try:
                with timed(logger, "search.extract", page=session.current_page):
                    records = await self._extractor.extract(page)
            except PlaywrightError as e:
                # A late navigation can destroy the page mid-read; keep earlier pages.
                log_warning(logger, "search.page.error", page=session.current_page, error=str(e))
                return StopReason.NAVIGATION_FAILED
            session.records.extend(records)
            session.pages_processed += 1
            log_info(
                logger,
                "search.page.done",
                page=session.current_page,
                count=len(records),
                total=len(session.records),
            )

            try:
                next_link = await self._find_next_link(page)
            except PlaywrightError as e:
                log_warning(logger, "search.next.lookup_error", error=str(e))
                return StopReason.NAVIGATION_FAILED
            if next_link is None:
                log_info(logger, "search.end_reached", page=session.current_page)
                return StopReason.NO_NEXT_PAGE
            if session.current_page >= session.max_pages:
                log_info(logger, "search.page_limit", page=session.current_page)
                return StopReason.PAGE_LIMIT

            if not await self._go_next(page, next_link):
                return StopReason.NAVIGATION_FAILED
            session.current_page += 1

        return StopReason.PAGE_LIMIT

    async def _find_next_link(self, page: Page) -> Locator | None:
        link = page.locator("a").filter(has_text=self.NEXT_LINK_TEXT).first
        if await link.count() == 0:
            return None
        return link

    async def _go_next(self, page: Page, next_link: Locator) -> bool:
        log_info(logger, "search.next")
        try:
            navigated = await race_navigation(
                page,
                next_link.click,
                timeout_ms=self._settings.next_navigation_timeout_ms,
            )
        except PlaywrightError as e:
            log_warning(logger, "search.next.error", error=str(e))
            return False
        if not navigated:
            log_warning(
                logger,
                "search.next.timeout",
                timeout_ms=self._settings.next_navigation_timeout_ms,
            )
        return navigated

"""Element lookup with fallback selectors, and navigation waits with a deadline."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from typing import Literal

from playwright.async_api import Locator, Page
from playwright.async_api import TimeoutError as PlaywrightTimeout

from njs.log import log_debug, log_warning
from njs.logging_config import get_logger


__all__ = ["WaitUntil", "locate_first", "race_navigation"]

logger = get_logger(__name__)

WaitUntil = Literal["commit", "domcontentloaded", "load", "networkidle"]


async def locate_first(
    page: Page,
    selectors: Sequence[str],
    *,
    timeout_ms: int | None = None,
) -> Locator | None:
    """
    Return the first element matched by the earliest selector that matches.

    Selectors are tried in order. With ``timeout_ms`` each one is waited for
    (until visible) up to that bound; without it only elements already on
    the page count. Returns None when every selector comes up empty.
    """
    for selector in selectors:
        if timeout_ms is None:
            locator = page.locator(selector).first
            if await locator.count() > 0:
                log_debug(logger, "locate.found", selector=selector)
                return locator
            continue

        try:
            await page.wait_for_selector(selector, state="visible", timeout=timeout_ms)
        except PlaywrightTimeout:
            log_debug(logger, "locate.timeout", selector=selector, timeout_ms=timeout_ms)
            continue
        log_debug(logger, "locate.found", selector=selector)
        return page.locator(selector).first

    log_warning(logger, "locate.exhausted", selectors=list(selectors))
    return None


async def race_navigation(
    page: Page,
    action: Callable[[], Awaitable[None]],
    *,
    timeout_ms: int,
    wait_until: WaitUntil = "networkidle",
) -> bool:
    """
    Run ``action`` while waiting for the navigation it should trigger.

    Returns True when the navigation completes within ``timeout_ms`` and False
    when the deadline wins. Errors other than the timeout propagate.
    """
    try:
        async with page.expect_navigation(wait_until=wait_until, timeout=timeout_ms):
            await action()
    except PlaywrightTimeout:
        log_debug(logger, "nav.wait.timeout", timeout_ms=timeout_ms)
        return False
    log_debug(logger, "nav.wait.ok", url=page.url)
    return True

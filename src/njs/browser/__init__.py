"""Browser session and page-interaction helpers."""

from njs.browser.context import BrowserManager
from njs.browser.locate import locate_first, race_navigation


__all__ = [
    "BrowserManager",
    "locate_first",
    "race_navigation",
]

"""Turn a rendered results page into job records."""

from __future__ import annotations

import urllib.parse

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page

from njs.log import log_debug
from njs.logging_config import get_logger
from njs.models.job import NO_DATE, NO_LOCATION, NO_TITLE, JobRecord


__all__ = ["ResultsTableExtractor"]

logger = get_logger(__name__)


async def _cell_text(cell: Locator) -> str | None:
    text = await cell.text_content()
    if text is None:
        return None
    return text.strip() or None


class ResultsTableExtractor:
    """
    Reads job rows out of the results table.

    The first row is the header. Every later row with at least three cells
    becomes a record: title and link from the anchor in cell 0, location from
    cell 1, date posted from cell 2. Shorter rows are layout filler and are
    skipped. Missing values fall back to the sentinels in `njs.models.job`.
    """

    ROW_SELECTOR = "table tr"
    CELL_SELECTOR = "td"
    MIN_CELLS = 3

    async def extract(self, page: Page) -> list[JobRecord]:
        rows = page.locator(self.ROW_SELECTOR)
        row_count = await rows.count()

        records: list[JobRecord] = []
        skipped = 0
        for i in range(1, row_count):
            try:
                record = await self._extract_row(rows.nth(i), base_url=page.url)
            except PlaywrightError as e:
                log_debug(logger, "extract.row.error", row=i, error=str(e))
                record = None
            if record is None:
                skipped += 1
                continue
            records.append(record)

        log_debug(
            logger,
            "extract.page",
            url=page.url,
            rows=row_count,
            count=len(records),
            skipped=skipped,
        )
        return records

    async def _extract_row(self, row: Locator, *, base_url: str) -> JobRecord | None:
        cells = row.locator(self.CELL_SELECTOR)
        if await cells.count() < self.MIN_CELLS:
            return None

        title = NO_TITLE
        link = ""
        anchor = cells.nth(0).locator("a").first
        if await anchor.count() > 0:
            title = await _cell_text(anchor) or NO_TITLE
            href = await anchor.get_attribute("href")
            if href:
                link = urllib.parse.urljoin(base_url, href.strip())

        return JobRecord(
            title=title,
            link=link,
            location=await _cell_text(cells.nth(1)) or NO_LOCATION,
            date_posted=await _cell_text(cells.nth(2)) or NO_DATE,
        )

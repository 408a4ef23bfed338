"""Pydantic models for job listings and search runs."""

from datetime import datetime
from enum import StrEnum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


__all__ = [
    "NOT_AVAILABLE",
    "NO_DATE",
    "NO_LOCATION",
    "NO_TITLE",
    "JobRecord",
    "SearchSession",
    "StopReason",
]

NO_TITLE = "No Title"
NO_LOCATION = "No Location"
NO_DATE = "No Date"
# The result list never shows company or description.
NOT_AVAILABLE = "N/A"


class StopReason(StrEnum):
    """Why a search run stopped walking result pages."""

    PAGE_LIMIT = "page_limit"
    NO_NEXT_PAGE = "no_next_page"
    NAVIGATION_FAILED = "navigation_failed"
    ENTRY_LOAD_FAILED = "entry_load_failed"
    INPUT_NOT_FOUND = "input_not_found"
    DRIVER_ERROR = "driver_error"


class JobRecord(BaseModel):
    """One job listing row from a results page."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(default=NO_TITLE)
    link: str = Field(default="", description="Absolute URL of the posting")
    location: str = Field(default=NO_LOCATION)
    date_posted: str = Field(
        default=NO_DATE,
        validation_alias=AliasChoices("date_posted", "datePosted"),
        serialization_alias="datePosted",
    )
    company: str = Field(default=NOT_AVAILABLE)
    description: str = Field(default=NOT_AVAILABLE)


class SearchSession(BaseModel):
    """State of one search run."""

    query: str
    max_pages: int = Field(ge=1)
    current_page: int = Field(default=1)
    pages_processed: int = Field(default=0)
    records: list[JobRecord] = Field(default_factory=list)
    stop_reason: StopReason | None = Field(default=None)
    started_at: datetime = Field(default_factory=datetime.now)
    ended_at: datetime | None = Field(default=None)

    @property
    def aborted(self) -> bool:
        """True when the run ended early with an empty result."""
        return self.stop_reason in (
            StopReason.ENTRY_LOAD_FAILED,
            StopReason.INPUT_NOT_FOUND,
            StopReason.DRIVER_ERROR,
        )

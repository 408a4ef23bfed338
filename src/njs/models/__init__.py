"""Data models for job listings."""

from njs.models.job import (
    NOT_AVAILABLE,
    NO_DATE,
    NO_LOCATION,
    NO_TITLE,
    JobRecord,
    SearchSession,
    StopReason,
)


__all__ = [
    "NOT_AVAILABLE",
    "NO_DATE",
    "NO_LOCATION",
    "NO_TITLE",
    "JobRecord",
    "SearchSession",
    "StopReason",
]

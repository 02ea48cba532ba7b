"""
Typed DTOs returned by the url/check repositories.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class LatestCheckSummary:
    """
    Status and time of the most recent check for one url.
    """

    url_id: int
    status_code: int
    created_at: datetime


@dataclass(frozen=True)
class UrlListing:
    """
    One row of the url listing, annotated with its latest check if any.
    """

    id: int
    name: str
    created_at: datetime
    last_check_status_code: int | None = None
    last_check_at: datetime | None = None

    @property
    def has_checks(self) -> bool:
        return self.last_check_at is not None

"""
Repository for url check persistence and history lookup.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from db.base import utc_now
from db.models.url_check import UrlCheck
from db.repositories.types import LatestCheckSummary


class UrlCheckRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def create(
        self,
        *,
        url_id: int,
        status_code: int,
        h1: str | None = None,
        title: str | None = None,
        description: str | None = None,
        created_at: datetime | None = None,
    ) -> UrlCheck:
        check = UrlCheck(
            url_id=url_id,
            status_code=status_code,
            h1=h1,
            title=title,
            description=description,
            created_at=created_at or utc_now(),
        )
        self._session.add(check)
        self._session.flush()
        return check

    def list_for_url(self, url_id: int) -> list[UrlCheck]:
        """
        Check history for one url, most recent first.
        """

        stmt: Select[tuple[UrlCheck]] = (
            select(UrlCheck)
            .where(UrlCheck.url_id == url_id)
            .order_by(UrlCheck.created_at.desc(), UrlCheck.id.desc())
        )
        return list(self._session.scalars(stmt).all())

    def latest_per_url(self) -> dict[int, LatestCheckSummary]:
        """
        Map url id to its most recent check. Urls without checks are absent.
        """

        ranked = select(
            UrlCheck.url_id,
            UrlCheck.status_code,
            UrlCheck.created_at,
            func.row_number()
            .over(
                partition_by=UrlCheck.url_id,
                order_by=(UrlCheck.created_at.desc(), UrlCheck.id.desc()),
            )
            .label("row_rank"),
        ).subquery()

        stmt = select(ranked.c.url_id, ranked.c.status_code, ranked.c.created_at).where(
            ranked.c.row_rank == 1
        )

        return {
            row.url_id: LatestCheckSummary(
                url_id=row.url_id,
                status_code=row.status_code,
                created_at=row.created_at,
            )
            for row in self._session.execute(stmt)
        }

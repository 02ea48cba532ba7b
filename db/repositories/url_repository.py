"""
Repository for url identities: dedupe-on-create, lookup and listing.
"""

from __future__ import annotations

from sqlalchemy import Select, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from db.base import utc_now
from db.models.url import Url
from db.repositories.errors import UrlNotFoundError
from db.repositories.types import UrlListing
from db.repositories.url_check_repository import UrlCheckRepository


class UrlRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, url_id: int) -> Url | None:
        return self._session.get(Url, url_id)

    def get_or_raise(self, url_id: int) -> Url:
        url = self.get(url_id)
        if url is None:
            raise UrlNotFoundError(url_id)
        return url

    def get_by_name(self, name: str) -> Url | None:
        stmt: Select[tuple[Url]] = select(Url).where(Url.name == name)
        return self._session.scalars(stmt).one_or_none()

    def find_or_create(self, name: str) -> tuple[Url, bool]:
        """
        Return the url registered under `name`, creating it on first sight.

        The insert runs inside a SAVEPOINT: if a concurrent request wins the
        race, the unique constraint fires, only the savepoint is rolled back,
        and the row committed by the other request is returned instead.
        """

        existing = self.get_by_name(name)
        if existing is not None:
            return existing, False

        url = Url(name=name, created_at=utc_now())
        try:
            with self._session.begin_nested():
                self._session.add(url)
                self._session.flush()
        except IntegrityError:
            existing = self.get_by_name(name)
            if existing is None:
                raise
            return existing, False

        return url, True

    def list_with_latest_check(self) -> list[UrlListing]:
        """
        All urls, newest id first, each annotated with its latest check.
        """

        latest = UrlCheckRepository(self._session).latest_per_url()
        stmt: Select[tuple[Url]] = select(Url).order_by(Url.id.desc())

        listings: list[UrlListing] = []
        for url in self._session.scalars(stmt):
            summary = latest.get(url.id)
            listings.append(
                UrlListing(
                    id=url.id,
                    name=url.name,
                    created_at=url.created_at,
                    last_check_status_code=summary.status_code if summary else None,
                    last_check_at=summary.created_at if summary else None,
                )
            )
        return listings

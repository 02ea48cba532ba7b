"""
app/services/url_service.py

Service orchestration for url registration, listing and checks.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from functools import lru_cache

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.checks import CheckExecutor, PageFetcher
from app.config import get_check_http_settings
from app.domain.url_check import (
    CheckRunResult,
    FlashMessage,
    RegistrationResult,
    Severity,
    UrlDetail,
)
from app.logging_utils import log_event
from app.validators.url_validator import normalize_url
from db.repositories import (
    PersistenceError,
    UrlCheckRepository,
    UrlListing,
    UrlRepository,
)

logger = logging.getLogger(__name__)

URL_ADDED_MESSAGE = "Page successfully added"
URL_EXISTS_MESSAGE = "Page already exists"


@contextmanager
def _persistence_guard(db: Session, operation: str) -> Iterator[None]:
    """
    Roll back and re-raise store failures as PersistenceError.
    """

    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        log_event(
            logger,
            logging.ERROR,
            "persistence_failed",
            operation=operation,
            error=str(exc),
        )
        raise PersistenceError(f"Failed to {operation}.") from exc


class UrlService:
    """
    Entry point for the presentation layer.

    Each method is one unit of work on the given session and commits it.
    """

    def __init__(self, *, executor: CheckExecutor | None = None) -> None:
        if executor is None:
            executor = CheckExecutor(fetcher=PageFetcher(settings=get_check_http_settings()))
        self._executor = executor

    def register_url(self, *, db: Session, raw_url: str | None) -> RegistrationResult:
        """
        Validate, normalize and dedupe a submitted url.

        Raises UrlValidationError before touching the store.
        """

        name = normalize_url(raw_url)

        with _persistence_guard(db, "register url"):
            url, created = UrlRepository(db).find_or_create(name)
            db.commit()

        log_event(
            logger,
            logging.INFO,
            "url_registered",
            url_id=url.id,
            name=url.name,
            created=created,
        )
        message = URL_ADDED_MESSAGE if created else URL_EXISTS_MESSAGE
        return RegistrationResult(
            url_id=url.id,
            created=created,
            flash=FlashMessage(severity=Severity.SUCCESS, message=message),
        )

    def get_url_detail(self, *, db: Session, url_id: int) -> UrlDetail:
        with _persistence_guard(db, "load url detail"):
            url = UrlRepository(db).get_or_raise(url_id)
            checks = UrlCheckRepository(db).list_for_url(url.id)
        return UrlDetail(url=url, checks=checks)

    def list_urls(self, *, db: Session) -> list[UrlListing]:
        with _persistence_guard(db, "list urls"):
            return UrlRepository(db).list_with_latest_check()

    def run_check(self, *, db: Session, url_id: int) -> CheckRunResult:
        """
        Fetch the url once and store a check when a response was received.

        Raises UrlNotFoundError for an unknown id. Network failures are
        reported through the returned flash, never raised.
        """

        with _persistence_guard(db, "load url"):
            url = UrlRepository(db).get_or_raise(url_id)
            # release the connection before the outbound fetch
            db.commit()

        outcome = self._executor.run(url.name, url_id=url.id)

        check = None
        if outcome.persistable:
            with _persistence_guard(db, "store url check"):
                check = UrlCheckRepository(db).create(
                    url_id=url.id,
                    status_code=outcome.status_code,
                    h1=outcome.metadata.h1,
                    title=outcome.metadata.title,
                    description=outcome.metadata.description,
                )
                db.commit()

        return CheckRunResult(
            flash=outcome.flash,
            redirect_target_id=url.id,
            outcome_kind=outcome.kind,
            check=check,
        )


@lru_cache(maxsize=1)
def get_url_service() -> UrlService:
    """
    Build and cache the url service.
    """

    return UrlService()

"""
tests/test_url_service.py

UrlService operations end to end against an in-memory database.

Coverage
--------
- Registration: normalization, dedupe, validation failures
- Detail lookup and not-found handling
- Listing annotations before and after a check
- Check runs for every outcome kind and their persistence effects
- Store failures surfacing as PersistenceError
"""

from __future__ import annotations

from unittest.mock import Mock

import pytest
import requests
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.checks import CheckExecutor, PageFetcher
from app.config import CheckHTTPSettings
from app.domain.url_check import CheckOutcome, CheckOutcomeKind, PageMetadata, Severity
from app.services.url_service import URL_ADDED_MESSAGE, URL_EXISTS_MESSAGE, UrlService
from app.validators.url_validator import EMPTY_URL, MALFORMED_URL, TOO_LONG, UrlValidationError
from db.models.url_check import UrlCheck
from db.repositories import PersistenceError, UrlNotFoundError


@pytest.fixture()
def http() -> Mock:
    return Mock()


@pytest.fixture()
def service(http: Mock) -> UrlService:
    fetcher = PageFetcher(settings=CheckHTTPSettings(timeout_seconds=2.0), session=http)
    return UrlService(executor=CheckExecutor(fetcher=fetcher))


def _check_count(db: Session, url_id: int) -> int:
    return db.scalar(select(func.count()).select_from(UrlCheck).where(UrlCheck.url_id == url_id))


# ---------------------------------------------------------------------------
# register_url
# ---------------------------------------------------------------------------


class TestRegisterUrl:
    def test_new_then_existing(self, service: UrlService, db: Session) -> None:
        first = service.register_url(db=db, raw_url="HTTPS://Example.com/page?x=1")
        second = service.register_url(db=db, raw_url="https://example.com/other")

        assert first.created is True
        assert first.flash.severity is Severity.SUCCESS
        assert first.flash.message == URL_ADDED_MESSAGE
        assert second.created is False
        assert second.flash.severity is Severity.SUCCESS
        assert second.flash.message == URL_EXISTS_MESSAGE
        assert first.url_id == second.url_id

        detail = service.get_url_detail(db=db, url_id=first.url_id)
        assert detail.url.name == "https://example.com"

    @pytest.mark.parametrize(
        "raw, code",
        [
            ("", EMPTY_URL),
            ("x" * 300, TOO_LONG),
            ("not a url", MALFORMED_URL),
        ],
    )
    def test_invalid_input_changes_nothing(
        self, service: UrlService, db: Session, raw: str, code: str
    ) -> None:
        with pytest.raises(UrlValidationError) as exc_info:
            service.register_url(db=db, raw_url=raw)

        assert code in exc_info.value.codes
        assert service.list_urls(db=db) == []


# ---------------------------------------------------------------------------
# get_url_detail / list_urls
# ---------------------------------------------------------------------------


class TestReads:
    def test_unknown_url(self, service: UrlService, db: Session) -> None:
        with pytest.raises(UrlNotFoundError):
            service.get_url_detail(db=db, url_id=999)

    def test_listing_annotation_appears_after_first_check(
        self, service: UrlService, db: Session, http: Mock, html_response
    ) -> None:
        url_id = service.register_url(db=db, raw_url="https://example.com").url_id

        [before] = service.list_urls(db=db)
        assert before.id == url_id
        assert before.last_check_status_code is None
        assert before.last_check_at is None

        http.get.return_value = html_response(200, "<title>Home</title>")
        result = service.run_check(db=db, url_id=url_id)

        [after] = service.list_urls(db=db)
        assert after.last_check_status_code == 200
        assert after.last_check_at is not None
        assert result.check is not None
        assert after.last_check_at.replace(tzinfo=None) == result.check.created_at.replace(tzinfo=None)

    def test_detail_history_is_most_recent_first(
        self, service: UrlService, db: Session, http: Mock, html_response
    ) -> None:
        url_id = service.register_url(db=db, raw_url="https://example.com").url_id
        for status_code in (200, 404, 503):
            http.get.return_value = html_response(status_code)
            service.run_check(db=db, url_id=url_id)

        detail = service.get_url_detail(db=db, url_id=url_id)

        assert [check.status_code for check in detail.checks] == [503, 404, 200]


# ---------------------------------------------------------------------------
# run_check
# ---------------------------------------------------------------------------


class TestRunCheck:
    def test_success_persists_metadata(
        self, service: UrlService, db: Session, http: Mock, html_response
    ) -> None:
        url_id = service.register_url(db=db, raw_url="https://example.com").url_id
        http.get.return_value = html_response(
            200,
            '<meta name="description" content="About us"><h1>Welcome</h1>',
        )

        result = service.run_check(db=db, url_id=url_id)

        http.get.assert_called_once()
        assert http.get.call_args.args[0] == "https://example.com"
        assert result.outcome_kind is CheckOutcomeKind.SUCCESS
        assert result.flash.severity is Severity.SUCCESS
        assert result.redirect_target_id == url_id
        assert result.check is not None
        assert result.check.status_code == 200
        assert result.check.h1 == "Welcome"
        assert result.check.title is None
        assert result.check.description == "About us"
        assert _check_count(db, url_id) == 1

    def test_client_error_is_stored_with_warning(
        self, service: UrlService, db: Session, http: Mock, html_response
    ) -> None:
        url_id = service.register_url(db=db, raw_url="https://example.com").url_id
        http.get.return_value = html_response(404, "<h1>Oops</h1><title>Not Found</title>")

        result = service.run_check(db=db, url_id=url_id)

        assert result.outcome_kind is CheckOutcomeKind.CLIENT_HTTP_ERROR
        assert result.flash.severity is Severity.WARNING
        assert result.check is not None
        assert result.check.status_code == 404
        assert result.check.h1 == "Oops"
        assert result.check.title == "Not Found"
        assert result.check.description is None
        assert _check_count(db, url_id) == 1

    def test_connection_refused_stores_nothing(self, service: UrlService, db: Session, http: Mock) -> None:
        url_id = service.register_url(db=db, raw_url="https://example.com").url_id
        http.get.side_effect = requests.ConnectionError("[Errno 111] Connection refused")

        result = service.run_check(db=db, url_id=url_id)

        assert result.outcome_kind is CheckOutcomeKind.CONNECTION_FAILURE
        assert result.flash.severity is Severity.DANGER
        assert result.redirect_target_id == url_id
        assert result.check is None
        assert _check_count(db, url_id) == 0

    def test_request_failure_stores_nothing(self, service: UrlService, db: Session, http: Mock) -> None:
        url_id = service.register_url(db=db, raw_url="https://example.com").url_id
        http.get.side_effect = requests.TooManyRedirects("Exceeded 5 redirects.")

        result = service.run_check(db=db, url_id=url_id)

        assert result.outcome_kind is CheckOutcomeKind.REQUEST_FAILURE
        assert result.flash.severity is Severity.WARNING
        assert result.check is None
        assert _check_count(db, url_id) == 0

    def test_unknown_url_makes_no_request(self, service: UrlService, db: Session, http: Mock) -> None:
        with pytest.raises(UrlNotFoundError):
            service.run_check(db=db, url_id=12345)
        http.get.assert_not_called()

    def test_every_run_appends(self, service: UrlService, db: Session, http: Mock, html_response) -> None:
        url_id = service.register_url(db=db, raw_url="https://example.com").url_id
        http.get.side_effect = lambda *args, **kwargs: html_response(200)

        service.run_check(db=db, url_id=url_id)
        service.run_check(db=db, url_id=url_id)

        assert _check_count(db, url_id) == 2

    def test_no_transaction_is_open_during_fetch(self, db: Session) -> None:
        in_transaction_during_fetch = []

        def fetch(url_name: str, *, url_id: int | None = None) -> CheckOutcome:
            in_transaction_during_fetch.append(db.in_transaction())
            return CheckOutcome(
                kind=CheckOutcomeKind.SUCCESS,
                severity=Severity.SUCCESS,
                message="ok",
                status_code=200,
                metadata=PageMetadata(h1="Hi"),
            )

        executor = Mock(spec=CheckExecutor)
        executor.run.side_effect = fetch
        service = UrlService(executor=executor)
        url_id = service.register_url(db=db, raw_url="https://example.com").url_id

        result = service.run_check(db=db, url_id=url_id)

        assert in_transaction_during_fetch == [False]
        assert result.check is not None
        assert result.check.h1 == "Hi"


# ---------------------------------------------------------------------------
# Persistence failures
# ---------------------------------------------------------------------------


def test_store_failure_is_wrapped(service: UrlService) -> None:
    broken = Mock(spec=Session)
    gone = OperationalError("SELECT", {}, Exception("database is gone"))
    broken.execute.side_effect = gone
    broken.scalars.side_effect = gone

    with pytest.raises(PersistenceError) as exc_info:
        service.list_urls(db=broken)

    assert isinstance(exc_info.value.__cause__, OperationalError)
    broken.rollback.assert_called_once()

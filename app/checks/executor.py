"""
Url check executor: fetch once, classify, extract metadata.
"""

from __future__ import annotations

import logging

from app.checks.fetcher import CheckConnectionError, CheckRequestError, PageFetcher
from app.checks.html_parser import extract_page_metadata
from app.domain.url_check import CheckOutcome, CheckOutcomeKind, Severity
from app.logging_utils import log_event

logger = logging.getLogger(__name__)

CHECK_SUCCEEDED_MESSAGE = "Page successfully checked"
CHECK_SERVER_ERROR_MESSAGE = "Check completed, but the server responded with an error"
CHECK_CONNECTION_FAILED_MESSAGE = "Check failed: could not connect to the server"


def is_client_error(status_code: int) -> bool:
    return 400 <= status_code < 500


class CheckExecutor:
    """
    Runs one check against a canonical url name and classifies the outcome.

    Priority: connection failure, client (4xx) error, other request failure,
    success. Only client errors and successes carry a status code.
    """

    def __init__(self, *, fetcher: PageFetcher) -> None:
        self._fetcher = fetcher

    def run(self, url_name: str, *, url_id: int | None = None) -> CheckOutcome:
        try:
            page = self._fetcher.fetch(url_name)
        except CheckConnectionError as exc:
            log_event(
                logger,
                logging.WARNING,
                "url_check_connection_failed",
                url_id=url_id,
                url=url_name,
                error=str(exc),
            )
            return CheckOutcome(
                kind=CheckOutcomeKind.CONNECTION_FAILURE,
                severity=Severity.DANGER,
                message=CHECK_CONNECTION_FAILED_MESSAGE,
                error=str(exc),
            )
        except CheckRequestError as exc:
            log_event(
                logger,
                logging.WARNING,
                "url_check_request_failed",
                url_id=url_id,
                url=url_name,
                error=str(exc),
            )
            return CheckOutcome(
                kind=CheckOutcomeKind.REQUEST_FAILURE,
                severity=Severity.WARNING,
                message=CHECK_SERVER_ERROR_MESSAGE,
                error=str(exc),
            )

        metadata = extract_page_metadata(page.content)
        if is_client_error(page.status_code):
            kind, severity, message = (
                CheckOutcomeKind.CLIENT_HTTP_ERROR,
                Severity.WARNING,
                CHECK_SERVER_ERROR_MESSAGE,
            )
        else:
            kind, severity, message = (
                CheckOutcomeKind.SUCCESS,
                Severity.SUCCESS,
                CHECK_SUCCEEDED_MESSAGE,
            )

        log_event(
            logger,
            logging.INFO,
            "url_check_completed",
            url_id=url_id,
            url=url_name,
            final_url=page.final_url,
            status_code=page.status_code,
            outcome=kind.value,
        )
        return CheckOutcome(
            kind=kind,
            severity=severity,
            message=message,
            status_code=page.status_code,
            metadata=metadata,
        )

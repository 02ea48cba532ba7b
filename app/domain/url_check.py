"""
app/domain/url_check.py

Domain models for url registration and check execution.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from db.models.url import Url
from db.models.url_check import UrlCheck


class Severity(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    DANGER = "danger"


class CheckOutcomeKind(str, Enum):
    """
    Mutually exclusive classification of one check attempt.
    """

    SUCCESS = "success"
    CLIENT_HTTP_ERROR = "client_http_error"
    CONNECTION_FAILURE = "connection_failure"
    REQUEST_FAILURE = "request_failure"

    @property
    def persistable(self) -> bool:
        return self in (CheckOutcomeKind.SUCCESS, CheckOutcomeKind.CLIENT_HTTP_ERROR)


@dataclass(frozen=True)
class FlashMessage:
    """
    User-facing message returned to the presentation layer.
    """

    severity: Severity
    message: str


@dataclass(frozen=True)
class PageMetadata:
    h1: str | None = None
    title: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class CheckOutcome:
    """
    Result of one check attempt, ready for persistence when `persistable`.
    """

    kind: CheckOutcomeKind
    severity: Severity
    message: str
    status_code: int | None = None
    metadata: PageMetadata = field(default_factory=PageMetadata)
    error: str | None = None

    @property
    def persistable(self) -> bool:
        return self.kind.persistable and self.status_code is not None

    @property
    def flash(self) -> FlashMessage:
        return FlashMessage(severity=self.severity, message=self.message)


@dataclass(frozen=True)
class RegistrationResult:
    url_id: int
    created: bool
    flash: FlashMessage


@dataclass(frozen=True)
class CheckRunResult:
    """
    What `run_check` hands back to the caller.

    `redirect_target_id` is the url whose detail view should be shown next;
    `check` is None when no record was written.
    """

    flash: FlashMessage
    redirect_target_id: int
    outcome_kind: CheckOutcomeKind
    check: UrlCheck | None = None


@dataclass(frozen=True)
class UrlDetail:
    url: Url
    checks: list[UrlCheck] = field(default_factory=list)

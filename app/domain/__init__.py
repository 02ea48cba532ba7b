"""
app/domain package marker.
"""

from app.domain.url_check import (
    CheckOutcome,
    CheckOutcomeKind,
    CheckRunResult,
    FlashMessage,
    PageMetadata,
    RegistrationResult,
    Severity,
    UrlDetail,
)

__all__ = [
    "CheckOutcome",
    "CheckOutcomeKind",
    "CheckRunResult",
    "FlashMessage",
    "PageMetadata",
    "RegistrationResult",
    "Severity",
    "UrlDetail",
]

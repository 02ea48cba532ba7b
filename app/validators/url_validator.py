"""
app/validators/url_validator.py

Validation and canonicalisation of user-submitted urls.

A url identity is the lowercase `scheme://authority` of the input with any
userinfo removed; path, query and fragment never take part in identity, so
`HTTPS://Example.com/page?x=1` and `https://example.com/other` both map to
`https://example.com`.
"""

from __future__ import annotations

import ipaddress
import re
from dataclasses import dataclass
from typing import Any, Sequence
from urllib.parse import SplitResult, urlsplit

from db.models.url import URL_NAME_MAX_LENGTH

ALLOWED_SCHEMES = frozenset({"http", "https"})

_HOST_LABEL = re.compile(r"^(?!-)[a-z0-9-]{1,63}(?<!-)$")

EMPTY_URL = "empty_url"
MALFORMED_URL = "malformed_url"
TOO_LONG = "too_long"

_MESSAGES = {
    EMPTY_URL: "URL must not be empty",
    MALFORMED_URL: "Invalid URL",
    TOO_LONG: f"URL exceeds {URL_NAME_MAX_LENGTH} characters",
}


@dataclass(frozen=True)
class UrlErrorDetail:
    """
    One violated validation rule.
    """

    code: str
    message: str

    @classmethod
    def for_code(cls, code: str) -> "UrlErrorDetail":
        return cls(code=code, message=_MESSAGES[code])


class UrlValidationError(ValueError):
    """
    Raised when a submitted url fails one or more validation rules.
    """

    def __init__(self, *, errors: Sequence[UrlErrorDetail], value: str | None = None) -> None:
        message = "; ".join(error.message for error in errors) or "Invalid URL"
        super().__init__(message)
        self.message = message
        self.errors = tuple(errors)
        self.value = value

    @property
    def codes(self) -> tuple[str, ...]:
        return tuple(error.code for error in self.errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "errors": [{"code": error.code, "message": error.message} for error in self.errors],
        }


def validate_url(raw: str | None) -> list[UrlErrorDetail]:
    """
    Return every violated rule for `raw`; an empty list means valid.

    An empty value short-circuits the remaining rules.
    """

    value = (raw or "").strip()
    if not value:
        return [UrlErrorDetail.for_code(EMPTY_URL)]

    errors: list[UrlErrorDetail] = []
    if not _is_well_formed(value):
        errors.append(UrlErrorDetail.for_code(MALFORMED_URL))
    if len(value) > URL_NAME_MAX_LENGTH:
        errors.append(UrlErrorDetail.for_code(TOO_LONG))
    return errors


def normalize_url(raw: str | None) -> str:
    """
    Validate `raw` and return its canonical identity.

    Raises UrlValidationError carrying all violated rules.
    """

    errors = validate_url(raw)
    if errors:
        raise UrlValidationError(errors=errors, value=raw)

    parts = urlsplit((raw or "").strip().lower())
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    authority = host if port is None else f"{host}:{port}"
    return f"{parts.scheme}://{authority}"


def _is_well_formed(value: str) -> bool:
    if any(char.isspace() for char in value):
        return False

    try:
        parts = urlsplit(value)
    except ValueError:
        return False

    if parts.scheme.lower() not in ALLOWED_SCHEMES or not parts.netloc:
        return False
    return _has_valid_authority(parts)


def _has_valid_authority(parts: SplitResult) -> bool:
    try:
        parts.port
    except ValueError:
        return False

    hostname = parts.hostname
    if not hostname:
        return False
    return _is_valid_host(hostname)


def _is_valid_host(hostname: str) -> bool:
    try:
        ipaddress.ip_address(hostname)
        return True
    except ValueError:
        pass

    try:
        ascii_host = hostname.encode("idna").decode("ascii")
    except UnicodeError:
        return False

    labels = ascii_host.rstrip(".").split(".")
    return all(_HOST_LABEL.match(label) for label in labels)

"""
app/validators package marker.
"""

from app.validators.url_validator import (
    UrlErrorDetail,
    UrlValidationError,
    normalize_url,
    validate_url,
)

__all__ = [
    "UrlErrorDetail",
    "UrlValidationError",
    "normalize_url",
    "validate_url",
]

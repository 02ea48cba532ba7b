"""
app/schemas package marker.
"""

from app.schemas.urls import (
    CheckRunResponse,
    FlashMessageResponse,
    UrlCheckResponse,
    UrlCreateRequest,
    UrlDetailResponse,
    UrlListItemResponse,
    UrlRegisteredResponse,
    UrlResponse,
)

__all__ = [
    "CheckRunResponse",
    "FlashMessageResponse",
    "UrlCheckResponse",
    "UrlCreateRequest",
    "UrlDetailResponse",
    "UrlListItemResponse",
    "UrlRegisteredResponse",
    "UrlResponse",
]

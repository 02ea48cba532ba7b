"""
app/services package marker.
"""

from app.services.url_service import UrlService, get_url_service

__all__ = [
    "UrlService",
    "get_url_service",
]

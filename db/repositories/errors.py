"""
Repository-layer exceptions for url and check persistence.
"""

from __future__ import annotations


class UrlRepositoryError(Exception):
    """Base exception for url/check repository failures."""


class UrlNotFoundError(UrlRepositoryError):
    """Raised when a referenced url id does not exist."""

    def __init__(self, url_id: int) -> None:
        super().__init__(f"Url {url_id} was not found.")
        self.url_id = url_id


class PersistenceError(UrlRepositoryError):
    """Raised when the store is unavailable or rejects a write unexpectedly."""

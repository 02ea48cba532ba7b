"""
Repository layer exports.
"""

from db.repositories.errors import PersistenceError, UrlNotFoundError, UrlRepositoryError
from db.repositories.types import LatestCheckSummary, UrlListing
from db.repositories.url_check_repository import UrlCheckRepository
from db.repositories.url_repository import UrlRepository

__all__ = [
    "UrlRepository",
    "UrlCheckRepository",
    "LatestCheckSummary",
    "UrlListing",
    "UrlRepositoryError",
    "UrlNotFoundError",
    "PersistenceError",
]

"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.url import Url
from db.models.url_check import UrlCheck

__all__ = [
    "Url",
    "UrlCheck",
]

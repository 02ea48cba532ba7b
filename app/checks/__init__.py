"""
Url check execution: fetching, outcome classification and metadata extraction.
"""

from app.checks.executor import CheckExecutor, is_client_error
from app.checks.fetcher import (
    CheckConnectionError,
    CheckFetchError,
    CheckRequestError,
    FetchedPage,
    PageFetcher,
)
from app.checks.html_parser import extract_page_metadata

__all__ = [
    "CheckConnectionError",
    "CheckExecutor",
    "CheckFetchError",
    "CheckRequestError",
    "FetchedPage",
    "PageFetcher",
    "extract_page_metadata",
    "is_client_error",
]

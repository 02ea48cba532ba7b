"""
Single-shot page fetcher used by url checks.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import requests
from urllib3.exceptions import HTTPError, ProtocolError, ReadTimeoutError

from app.config import CheckHTTPSettings

logger = logging.getLogger(__name__)

BODY_CHUNK_BYTES = 16 * 1024
MAX_BODY_BYTES = 5 * 1024 * 1024


class CheckFetchError(RuntimeError):
    """
    Base error for a fetch that produced no usable HTTP response.
    """


class CheckConnectionError(CheckFetchError):
    """
    The host could not be reached: DNS, refused connection, timeout or TLS.
    """


class CheckRequestError(CheckFetchError):
    """
    The exchange started but failed at the response layer
    (redirect loop, aborted transfer, undecodable body, invalid url).
    """


@dataclass(frozen=True)
class FetchedPage:
    url: str
    final_url: str
    status_code: int
    content: bytes


class PageFetcher:
    """
    Performs exactly one GET per call. No retries.

    `timeout_seconds` bounds every socket operation and also the whole fetch:
    the body is streamed and abandoned once the deadline passes. Bodies larger
    than MAX_BODY_BYTES are truncated.
    """

    def __init__(
        self,
        *,
        settings: CheckHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        self._settings = settings
        self._session = session or requests.Session()
        self._session.max_redirects = settings.max_redirects
        self._headers = {"User-Agent": settings.user_agent}

    def fetch(self, url: str) -> FetchedPage:
        deadline = time.monotonic() + self._settings.timeout_seconds
        try:
            response = self._session.get(
                url,
                headers=self._headers,
                timeout=self._settings.timeout_seconds,
                allow_redirects=True,
                stream=True,
            )
        except requests.Timeout as exc:
            raise CheckConnectionError(f"Timed out fetching {url}: {exc}") from exc
        except requests.ConnectionError as exc:
            if _is_aborted_exchange(exc):
                raise CheckRequestError(f"Connection aborted fetching {url}: {exc}") from exc
            raise CheckConnectionError(f"Could not connect to {url}: {exc}") from exc
        except requests.RequestException as exc:
            raise CheckRequestError(f"Request to {url} failed: {exc}") from exc

        try:
            return FetchedPage(
                url=url,
                final_url=response.url or url,
                status_code=response.status_code,
                content=self._read_body(response, url=url, deadline=deadline),
            )
        finally:
            response.close()

    def _read_body(self, response: requests.Response, *, url: str, deadline: float) -> bytes:
        body = bytearray()
        try:
            while len(body) < MAX_BODY_BYTES:
                if time.monotonic() >= deadline:
                    raise CheckConnectionError(
                        f"Timed out reading {url} after {self._settings.timeout_seconds}s"
                    )
                # read1 returns as soon as any bytes arrive
                chunk = response.raw.read1(BODY_CHUNK_BYTES, decode_content=True)
                if not chunk:
                    break
                body.extend(chunk)
        except ReadTimeoutError as exc:
            raise CheckConnectionError(f"Timed out reading {url}: {exc}") from exc
        except HTTPError as exc:
            raise CheckRequestError(f"Reading {url} failed: {exc}") from exc

        if len(body) > MAX_BODY_BYTES:
            logger.info("Truncated body of %s to %d bytes", url, MAX_BODY_BYTES)
        return bytes(body[:MAX_BODY_BYTES])


def _is_aborted_exchange(exc: requests.ConnectionError) -> bool:
    # requests wraps urllib3 ProtocolError (peer hung up mid-exchange) in
    # ConnectionError; the socket was open, so it is not a reachability failure.
    return bool(exc.args) and isinstance(exc.args[0], ProtocolError)

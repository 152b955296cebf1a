"""
Default key fetcher: downloads Google's published signing keys over HTTPS.

The freshness deadline comes from the response's ``Cache-Control: max-age``
directive. Google always sends one; a response without it is treated as an
error rather than guessing a TTL.
"""

from __future__ import annotations

import io
import logging
import time
from typing import BinaryIO, Callable

import requests

logger = logging.getLogger(__name__)

GOOGLE_CERTS_URL = "https://www.googleapis.com/oauth2/v3/certs"
DEFAULT_TIMEOUT_SECONDS = 10.0


class KeyFetchError(Exception):
    """The key-set endpoint answered, but not with something we can cache."""


def extract_max_age(cache_control: str) -> int:
    """Return the ``max-age`` value (seconds) from a Cache-Control header value."""
    for directive in cache_control.split(","):
        name, _, value = directive.strip().partition("=")
        if name.strip().lower() != "max-age":
            continue
        try:
            return int(value.strip())
        except ValueError as e:
            raise KeyFetchError(f"invalid max-age value {value!r}") from e
    raise KeyFetchError(f"max-age not found in {cache_control!r}")


class HttpKeyFetcher:
    """
    Callable satisfying ``KeyFetcher``: GET the JWKS URL and return its body.

    Every call is independent, so one instance can be shared by many threads.
    ``timeout`` bounds the whole request, not just each socket read: a server
    trickling the body byte by byte is cut off with ``KeyFetchError`` once the
    deadline passes.
    """

    chunk_size = 16 * 1024

    def __init__(
        self,
        url: str = GOOGLE_CERTS_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
        clock: Callable[[], float] = time.time,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._session = session
        self._clock = clock
        self._timer = timer

    def _read_body(self, resp: requests.Response, deadline: float) -> bytes:
        body = bytearray()
        for chunk in resp.iter_content(chunk_size=self.chunk_size):
            if self._timer() >= deadline:
                raise KeyFetchError(f"key set download exceeded {self.timeout}s")
            body.extend(chunk)
        return bytes(body)

    def __call__(self) -> tuple[BinaryIO, float]:
        deadline = self._timer() + self.timeout
        getter = self._session.get if self._session is not None else requests.get
        resp = getter(self.url, timeout=self.timeout, stream=True)
        try:
            resp.raise_for_status()
            max_age = extract_max_age(resp.headers.get("Cache-Control", ""))
            body = self._read_body(resp, deadline)
        finally:
            resp.close()
        logger.debug("Fetched key set url=%s max_age=%d bytes=%d", self.url, max_age, len(body))
        return io.BytesIO(body), self._clock() + max_age

"""Configuration from environment variables. No hardcoded client ids."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .fetcher import DEFAULT_TIMEOUT_SECONDS, GOOGLE_CERTS_URL
from .verifier import GOOGLE_ISSUER


def _getenv(key: str, default: str | None = None) -> str | None:
    return os.environ.get(key, default)


def _getenv_int(key: str, default: int) -> int:
    raw = os.environ.get(key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _getenv_float(key: str, default: float) -> float:
    raw = os.environ.get(key)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class VerifierConfig:
    """
    Google ID token verification settings from environment.

    Required:
        GOOGLE_CLIENT_ID: OAuth client id of this service; tokens must name it as ``aud``.

    Optional:
        ID_TOKEN_ISSUER: Expected ``iss`` (default https://accounts.google.com).
        ID_TOKEN_CERTS_URL: JWKS endpoint (default Google's v3 certs URL).
        ID_TOKEN_FETCH_TIMEOUT_SECONDS: Timeout for the key-set fetch (default 10).
        CLOCK_SKEW_SECONDS: Seconds of tolerance for exp/iat (default 0).
        ID_TOKEN_HOSTED_DOMAIN: If set, the ``hd`` claim must equal it.
    """

    client_id: str
    issuer: str = GOOGLE_ISSUER
    certs_url: str = GOOGLE_CERTS_URL
    fetch_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    clock_skew_seconds: int = 0
    hosted_domain: str | None = None

    @classmethod
    def from_environ(cls) -> VerifierConfig:
        client = _strip_or_none(_getenv("GOOGLE_CLIENT_ID"))
        if not client:
            raise _config_error("GOOGLE_CLIENT_ID must be set")
        return cls(
            client_id=client,
            issuer=_strip_or_none(_getenv("ID_TOKEN_ISSUER")) or GOOGLE_ISSUER,
            certs_url=_strip_or_none(_getenv("ID_TOKEN_CERTS_URL")) or GOOGLE_CERTS_URL,
            fetch_timeout_seconds=_getenv_float("ID_TOKEN_FETCH_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS),
            clock_skew_seconds=_getenv_int("CLOCK_SKEW_SECONDS", 0),
            hosted_domain=_strip_or_none(_getenv("ID_TOKEN_HOSTED_DOMAIN")),
        )


def _strip_or_none(s: str | None) -> str | None:
    if s is None:
        return None
    t = s.strip()
    return t if t else None


def _config_error(msg: str) -> Exception:
    return ValueError(msg)

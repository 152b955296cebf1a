"""
Pytest fixtures for the test suite.

Tokens are signed with real RSA keys (generated once per session) through
PyJWT, and the key set is served by an in-memory fetcher, so no test touches
the network. Time is controlled with ``FakeClock`` where a test needs exact
``exp``/``iat`` boundaries.
"""
from __future__ import annotations

import io
import json
import threading
from typing import Any

import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa
from jwt.algorithms import RSAAlgorithm

NOW = 1_700_000_000
CLIENT_ID = "client-123"
ISSUER = "https://accounts.google.com"


class FakeClock:
    def __init__(self, now: float = NOW) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class FakeFetcher:
    """In-memory ``KeyFetcher``: serves ``document`` with a deadline ``ttl`` seconds after ``clock()``."""

    def __init__(self, document: bytes, clock, ttl: float = 3600) -> None:
        self.document = document
        self.clock = clock
        self.ttl = ttl
        self.error: Exception | None = None
        self.calls = 0
        self.streams: list[io.BytesIO] = []
        self._lock = threading.Lock()

    def __call__(self) -> tuple[io.BytesIO, float]:
        with self._lock:
            self.calls += 1
        if self.error is not None:
            raise self.error
        stream = io.BytesIO(self.document)
        self.streams.append(stream)
        return stream, self.clock() + self.ttl


def jwk_for(private_key: rsa.RSAPrivateKey, kid: str) -> dict[str, Any]:
    jwk = RSAAlgorithm.to_jwk(private_key.public_key(), as_dict=True)
    jwk["kid"] = kid
    jwk["alg"] = "RS256"
    jwk["use"] = "sig"
    return jwk


def jwks_document(*jwks: dict[str, Any]) -> bytes:
    return json.dumps({"keys": list(jwks)}).encode()


@pytest.fixture(scope="session")
def private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def other_private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def key_document(private_key) -> bytes:
    return jwks_document(jwk_for(private_key, "k1"))


@pytest.fixture
def fetcher(key_document, clock) -> FakeFetcher:
    return FakeFetcher(key_document, clock)


@pytest.fixture
def claims() -> dict[str, Any]:
    """A valid claim set relative to ``NOW``."""
    return {
        "iss": ISSUER,
        "azp": CLIENT_ID,
        "aud": CLIENT_ID,
        "sub": "110169484474386276334",
        "email": "1234@gmail.com",
        "email_verified": True,
        "at_hash": "HK6E_P6Dh8Y93mRNtsDB1Q",
        "name": "Foo Bar",
        "picture": "https://lh3.googleusercontent.com/a-/1234",
        "given_name": "Foo",
        "family_name": "Bar",
        "locale": "en",
        "iat": NOW - 10,
        "exp": NOW + 3600,
    }


@pytest.fixture
def make_token(private_key):
    """Return ``sign(claims, kid="k1", key=None, algorithm="RS256")`` producing a compact token."""

    def sign(payload: dict[str, Any], kid: str = "k1", key=None, algorithm: str = "RS256") -> str:
        return jwt.encode(payload, key or private_key, algorithm=algorithm, headers={"kid": kid})

    return sign

"""
Verify Google-issued ID tokens and return their decoded claims.

Background for newcomers:
    A client that signed in with Google hands us an ID token: three base64url
    segments ``header.claims.signature`` where the signature is RS256 over the
    first two segments. Before trusting **anything** in it we must:

    1. Check the header names RS256, the only algorithm Google uses here.
    2. Find the public key named by the header's ``kid`` in Google's key set.
    3. Verify the **signature** over the raw header and claims segments.
    4. Check the **issuer** (``iss``) is Google.
    5. Check the **audience** (``aud``) is our own OAuth client id.
    6. Check it hasn't **expired** (``exp``) and wasn't issued in the future
       (``iat``).

    The checks run in exactly this order and stop at the first failure, so a
    token that is wrong in several ways always reports the same reason.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, Callable

from .codec import DecodedToken, decode
from .errors import (
    AudienceMismatch,
    HostedDomainMismatch,
    InvalidIssuer,
    KeyNotFound,
    KeyRefreshFailed,
    KeyResolutionFailed,
    TokenExpired,
    TokenNotYetValid,
    UnsupportedAlgorithm,
    VerificationError,
)
from .fetcher import HttpKeyFetcher
from .keycache import KeyCache, KeyFetcher
from .signature import verify_signature

if TYPE_CHECKING:
    from .config import VerifierConfig

logger = logging.getLogger(__name__)

GOOGLE_ISSUER = "https://accounts.google.com"
SUPPORTED_ALGORITHM = "RS256"


class Verifier:
    """
    Verifies ID tokens for one OAuth client.

    A single instance is meant to be shared by every request handler for the
    life of the process; the only mutable state is inside its ``KeyCache``.
    """

    def __init__(
        self,
        key_cache: KeyCache,
        client_id: str,
        *,
        issuer: str = GOOGLE_ISSUER,
        leeway: int = 0,
        hosted_domain: str | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.key_cache = key_cache
        self.client_id = client_id
        self.issuer = issuer
        self.leeway = leeway
        self.hosted_domain = hosted_domain
        self._clock = clock

    @classmethod
    def from_fetcher(cls, fetcher: KeyFetcher, client_id: str, **kwargs: Any) -> Verifier:
        """Build the key cache from ``fetcher``; raises ``KeyRefreshFailed`` if the first fetch fails."""
        clock = kwargs.get("clock", time.time)
        return cls(KeyCache(fetcher, clock=clock), client_id, **kwargs)

    @classmethod
    def from_config(cls, config: VerifierConfig) -> Verifier:
        fetcher = HttpKeyFetcher(config.certs_url, timeout=config.fetch_timeout_seconds)
        return cls.from_fetcher(
            fetcher,
            config.client_id,
            issuer=config.issuer,
            leeway=config.clock_skew_seconds,
            hosted_domain=config.hosted_domain,
        )

    def verify(self, token: str) -> DecodedToken:
        """
        Verify ``token`` and return it decoded.

        Raises a ``VerificationError`` subclass naming the first check that
        failed. Never returns a partially verified token.
        """
        try:
            return self._verify(token)
        except VerificationError as e:
            logger.debug("Token rejected kind=%s", e.kind.value)
            raise

    def _verify(self, token: str) -> DecodedToken:
        parsed = decode(token)

        if parsed.header.alg != SUPPORTED_ALGORITHM:
            raise UnsupportedAlgorithm(f"expected alg {SUPPORTED_ALGORITHM}, token alg is {parsed.header.alg!r}")

        try:
            key = self.key_cache.resolve_key(parsed.header.kid)
        except KeyRefreshFailed as e:
            raise KeyResolutionFailed(f"retrieve key: {e}") from e
        if key is None:
            raise KeyNotFound(f"no key matching kid {parsed.header.kid!r}")

        verify_signature(parsed.signing_input, parsed.signature, key)

        claims = parsed.claims
        if claims.iss != self.issuer:
            raise InvalidIssuer(f"invalid issuer {claims.iss!r}")
        if claims.aud != self.client_id:
            raise AudienceMismatch("audience does not match client id")

        now = int(self._clock())
        if claims.exp <= now - self.leeway:
            raise TokenExpired("token expired")
        if claims.iat > now + self.leeway:
            raise TokenNotYetValid("token issued in the future")

        if self.hosted_domain is not None and claims.hd != self.hosted_domain:
            raise HostedDomainMismatch("hosted domain does not match")

        return parsed

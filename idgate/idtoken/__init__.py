"""
Standalone verifier for Google-issued ID tokens.

This package has no dependency on other idgate packages (idgate.security, etc.).
Build one ``Verifier`` per process and call ``verify()`` with the compact token
string to get a ``DecodedToken`` or a ``VerificationError`` naming the cause.
"""

from .codec import DecodedToken, IdTokenClaims, TokenHeader, decode
from .config import VerifierConfig
from .errors import ErrorKind, VerificationError
from .fetcher import HttpKeyFetcher, KeyFetchError
from .keycache import KeyCache, KeyFetcher
from .keyset import PublicKey, decode_key_set
from .verifier import GOOGLE_ISSUER, Verifier

__all__ = [
    "DecodedToken",
    "IdTokenClaims",
    "TokenHeader",
    "decode",
    "VerifierConfig",
    "ErrorKind",
    "VerificationError",
    "HttpKeyFetcher",
    "KeyFetchError",
    "KeyCache",
    "KeyFetcher",
    "PublicKey",
    "decode_key_set",
    "GOOGLE_ISSUER",
    "Verifier",
]

"""
Error types raised while verifying ID tokens.

Every failure is a ``VerificationError`` carrying an ``ErrorKind`` so callers
can branch on the cause (``err.kind``) without parsing messages. Messages never
include the raw token.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    MALFORMED_DOCUMENT = "malformed_document"
    MALFORMED_KEY_ENTRY = "malformed_key_entry"
    EMPTY_KEY_SET = "empty_key_set"
    KEY_REFRESH_FAILED = "key_refresh_failed"
    MALFORMED_TOKEN = "malformed_token"
    UNSUPPORTED_ALGORITHM = "unsupported_algorithm"
    KEY_NOT_FOUND = "key_not_found"
    KEY_RESOLUTION_FAILED = "key_resolution_failed"
    SIGNATURE_INVALID = "signature_invalid"
    MALFORMED_SIGNATURE = "malformed_signature"
    INVALID_ISSUER = "invalid_issuer"
    AUDIENCE_MISMATCH = "audience_mismatch"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_NOT_YET_VALID = "token_not_yet_valid"
    HOSTED_DOMAIN_MISMATCH = "hosted_domain_mismatch"


class VerificationError(Exception):
    """Base class for every verification failure."""

    kind: ErrorKind

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.kind.value.replace("_", " "))

    @property
    def message(self) -> str:
        return str(self)


# Key set decoding


class KeySetError(VerificationError):
    """The key-set document is unusable."""


class MalformedDocument(KeySetError):
    kind = ErrorKind.MALFORMED_DOCUMENT


class MalformedKeyEntry(KeySetError):
    kind = ErrorKind.MALFORMED_KEY_ENTRY


class EmptyKeySet(KeySetError):
    kind = ErrorKind.EMPTY_KEY_SET


# Key cache


class KeyRefreshFailed(VerificationError):
    """Fetching or decoding a new key set failed; the cached keys are untouched."""

    kind = ErrorKind.KEY_REFRESH_FAILED


# Token structure


class MalformedToken(VerificationError):
    kind = ErrorKind.MALFORMED_TOKEN


class UnsupportedAlgorithm(VerificationError):
    kind = ErrorKind.UNSUPPORTED_ALGORITHM


class KeyNotFound(VerificationError):
    kind = ErrorKind.KEY_NOT_FOUND


class KeyResolutionFailed(VerificationError):
    """Raised by the verifier when the key cache could not refresh (see ``__cause__``)."""

    kind = ErrorKind.KEY_RESOLUTION_FAILED


class SignatureInvalid(VerificationError):
    kind = ErrorKind.SIGNATURE_INVALID


class MalformedSignature(VerificationError):
    kind = ErrorKind.MALFORMED_SIGNATURE


# Claims


class InvalidIssuer(VerificationError):
    kind = ErrorKind.INVALID_ISSUER


class AudienceMismatch(VerificationError):
    kind = ErrorKind.AUDIENCE_MISMATCH


class TokenExpired(VerificationError):
    kind = ErrorKind.TOKEN_EXPIRED


class TokenNotYetValid(VerificationError):
    kind = ErrorKind.TOKEN_NOT_YET_VALID


class HostedDomainMismatch(VerificationError):
    kind = ErrorKind.HOSTED_DOMAIN_MISMATCH

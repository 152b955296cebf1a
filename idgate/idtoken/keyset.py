"""
Decoding of a published JSON Web Key Set into RSA public keys.

Only the fields needed for RS256 verification are read from each entry
(``kid``, ``n``, ``e``); anything else the provider publishes (``alg``,
``kty``, ``use``...) is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from cryptography.hazmat.primitives.asymmetric import rsa
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from .encoding import b64url_uint
from .errors import EmptyKeySet, MalformedDocument, MalformedKeyEntry

# The public exponent must fit in a signed machine word.
_MAX_EXPONENT_BITS = 63

KeySet = Mapping[str, "PublicKey"]


@dataclass(frozen=True)
class PublicKey:
    """An RSA public key as published in the key set."""

    modulus: int
    exponent: int
    rsa_key: rsa.RSAPublicKey = field(repr=False, compare=False)

    @classmethod
    def from_numbers(cls, modulus: int, exponent: int) -> PublicKey:
        if exponent.bit_length() > _MAX_EXPONENT_BITS:
            raise MalformedKeyEntry("public exponent does not fit in a machine word")
        try:
            key = rsa.RSAPublicNumbers(exponent, modulus).public_key()
        except ValueError as e:
            raise MalformedKeyEntry(f"invalid RSA public numbers: {e}") from e
        return cls(modulus=modulus, exponent=exponent, rsa_key=key)


@dataclass(frozen=True)
class KeyMaterial:
    """
    A key set together with the deadline after which it must be refreshed.

    Instances are replaced as a whole, never mutated, so a reader holding one
    always sees a consistent pair.
    """

    keys: KeySet
    expires_at: float


class _JWK(BaseModel):
    model_config = ConfigDict(extra="ignore", strict=True)

    kid: str = ""
    n: str = ""
    e: str = ""


class _JWKS(BaseModel):
    model_config = ConfigDict(extra="ignore", strict=True)

    keys: list[_JWK | None] | None = None


def _decode_entry(entry: _JWK | None) -> PublicKey:
    if entry is None:
        raise MalformedKeyEntry("null key entry")
    if not entry.kid or not entry.n or not entry.e:
        raise MalformedKeyEntry(f"key entry missing kid, n or e (kid={entry.kid!r})")
    try:
        modulus = b64url_uint(entry.n)
        exponent = b64url_uint(entry.e)
    except ValueError as e:
        raise MalformedKeyEntry(f"key entry {entry.kid!r} is not valid base64url") from e
    return PublicKey.from_numbers(modulus, exponent)


def decode_key_set(data: bytes | str) -> KeySet:
    """
    Parse a JWKS document into a read-only ``kid -> PublicKey`` mapping.

    Raises ``MalformedDocument`` when the document is not a JSON object of the
    expected shape, ``EmptyKeySet`` when it lists no keys (an empty set must
    never be cached), and ``MalformedKeyEntry`` for an incomplete or
    undecodable entry.
    """
    try:
        document = _JWKS.model_validate_json(data)
    except PydanticValidationError as e:
        raise MalformedDocument(f"unable to parse key set: {e.error_count()} error(s)") from e

    if not document.keys:
        raise EmptyKeySet("key set contains no keys")

    keys: dict[str, PublicKey] = {}
    for entry in document.keys:
        key = _decode_entry(entry)
        keys[entry.kid] = key
    return MappingProxyType(keys)

"""Decoding of compact ``header.claims.signature`` ID tokens."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from .encoding import b64url_decode
from .errors import MalformedToken


class TokenHeader(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, strict=True)

    alg: str = ""
    kid: str = ""
    typ: str = ""


class IdTokenClaims(BaseModel):
    """
    Claims carried by a Google ID token.

    Absent claims take empty defaults; a claim of the wrong type (for example
    an ``aud`` list) makes the token malformed.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, strict=True)

    iss: str = ""
    azp: str = ""
    aud: str = ""
    sub: str = ""
    email: str = ""
    email_verified: bool = False
    at_hash: str = ""
    name: str = ""
    picture: str = ""
    given_name: str = ""
    family_name: str = ""
    locale: str = ""
    nonce: str = ""
    profile: str = ""
    hd: str = ""
    iat: int = 0
    exp: int = 0


@dataclass(frozen=True)
class DecodedToken:
    header: TokenHeader
    claims: IdTokenClaims
    signature: str
    """Raw base64url signature segment, exactly as received."""

    signing_input: str
    """Raw ``header.claims`` segments, exactly as received; the signature covers these bytes."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "header": self.header.model_dump(),
            "claims": self.claims.model_dump(),
        }


def split_token(token: str) -> tuple[str, str, str]:
    parts = token.split(".")
    if len(parts) != 3:
        raise MalformedToken(f"expected 3 token segments, got {len(parts)}")
    return parts[0], parts[1], parts[2]


def _decode_segment(segment: str, name: str, model: type[BaseModel]) -> Any:
    try:
        raw = b64url_decode(segment)
    except ValueError as e:
        raise MalformedToken(f"unable to base64url decode {name} segment") from e
    try:
        return model.model_validate_json(raw)
    except PydanticValidationError as e:
        raise MalformedToken(f"unable to parse {name} segment") from e


def decode(token: str) -> DecodedToken:
    """
    Split and decode a compact token without verifying it.

    Raises ``MalformedToken`` if the token does not have three segments, if
    the header or claims segment is not base64url-encoded JSON of the
    expected shape, or if the signature segment is empty.
    """
    header_segment, claims_segment, signature = split_token(token)
    header = _decode_segment(header_segment, "header", TokenHeader)
    claims = _decode_segment(claims_segment, "claims", IdTokenClaims)
    if not signature:
        raise MalformedToken("empty signature segment")
    return DecodedToken(
        header=header,
        claims=claims,
        signature=signature,
        signing_input=f"{header_segment}.{claims_segment}",
    )

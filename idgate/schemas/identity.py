from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from idgate.idtoken import DecodedToken


class IdentityOut(BaseModel):
    subject: str
    email: str
    email_verified: bool
    name: str
    picture: str
    locale: str
    hosted_domain: str | None = None
    issued_at: int
    expires_at: int

    @classmethod
    def from_token(cls, token: DecodedToken) -> IdentityOut:
        claims = token.claims
        return cls(
            subject=claims.sub,
            email=claims.email,
            email_verified=claims.email_verified,
            name=claims.name,
            picture=claims.picture,
            locale=claims.locale,
            hosted_domain=claims.hd or None,
            issued_at=claims.iat,
            expires_at=claims.exp,
        )


class VerifyRequest(BaseModel):
    token: str


class VerifyResponse(BaseModel):
    valid: bool
    kind: str | None = None
    claims: dict[str, Any] | None = None


class HealthOut(BaseModel):
    status: str
    keys: int
    keys_expire_at: float

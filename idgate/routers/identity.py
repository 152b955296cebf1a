from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from idgate.idtoken import DecodedToken, VerificationError, Verifier
from idgate.idtoken.errors import KeyResolutionFailed
from idgate.schemas.identity import IdentityOut, VerifyRequest, VerifyResponse
from idgate.security.dependencies import get_verifier, require_id_token

logger = logging.getLogger(__name__)

router = APIRouter(tags=["identity"])


@router.get("/me", response_model=IdentityOut)
def me(token: DecodedToken = Depends(require_id_token)) -> IdentityOut:
    return IdentityOut.from_token(token)


@router.post("/verify", response_model=VerifyResponse)
def verify(body: VerifyRequest, verifier: Verifier = Depends(get_verifier)) -> VerifyResponse:
    """
    Introspection for internal callers: report whether a token is valid and why not.

    A token being invalid is a normal answer (200); only an unavailable key
    set is an error, since we cannot give an answer at all.
    """
    try:
        decoded = verifier.verify(body.token)
    except KeyResolutionFailed as exc:
        logger.error("Signing keys unavailable: %s", exc)
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=exc.kind.value) from exc
    except VerificationError as exc:
        return VerifyResponse(valid=False, kind=exc.kind.value)
    return VerifyResponse(valid=True, claims=decoded.claims.model_dump())

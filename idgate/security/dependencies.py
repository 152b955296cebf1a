from __future__ import annotations

import logging

from fastapi import Depends, HTTPException, Request, status

from idgate.idtoken import DecodedToken, Verifier, VerificationError
from idgate.idtoken.errors import KeyResolutionFailed
from idgate.security.auth import extract_bearer_token
from idgate.settings import Settings, get_settings

logger = logging.getLogger(__name__)

_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def get_verifier(request: Request) -> Verifier:
    verifier = getattr(request.app.state, "verifier", None)
    if verifier is None:
        raise RuntimeError("Verifier not configured. Did app startup run?")
    return verifier


def verify_or_raise(verifier: Verifier, token: str) -> DecodedToken:
    """
    Verify ``token`` and translate failures into HTTP errors.

    - Key-set refresh failures are our problem, not the caller's: 503.
    - Every other rejection is a 401 whose detail is the error kind.
    """

    try:
        return verifier.verify(token)
    except KeyResolutionFailed as exc:
        logger.error("Signing keys unavailable: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=exc.kind.value,
        ) from exc
    except VerificationError as exc:
        logger.info("ID token rejected kind=%s", exc.kind.value)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=exc.kind.value,
            headers=_BEARER_CHALLENGE,
        ) from exc


def require_id_token(
    request: Request,
    verifier: Verifier = Depends(get_verifier),
    settings: Settings = Depends(get_settings),
) -> DecodedToken:
    """
    Route dependency: authenticate the caller by its Google ID token.

    The verified token is also attached to ``request.state.id_token`` for
    handlers that prefer reading it from the request.
    """

    token = extract_bearer_token(request, settings)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers=_BEARER_CHALLENGE,
        )

    decoded = verify_or_raise(verifier, token)
    request.state.id_token = decoded
    return decoded

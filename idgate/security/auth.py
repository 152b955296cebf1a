from __future__ import annotations

import logging

from fastapi import HTTPException, Request, status

from idgate.settings import Settings

logger = logging.getLogger(__name__)


def extract_bearer_token(request: Request, settings: Settings) -> str | None:
    """
    Extract the raw ID token from the bearer authorization header.

    - Input: `Authorization: Bearer <id token>`
    - Returns None when the header is absent; malformed headers are a 400.
    - The token itself is never logged.
    """

    header_name = settings.authorization_header
    bearer_prefix = settings.bearer_prefix

    raw = request.headers.get(header_name)
    if not raw:
        logger.info("Missing Authorization header path=%s method=%s", request.url.path, request.method)
        return None

    prefix = f"{bearer_prefix} "
    if not raw.startswith(prefix):
        logger.warning("Invalid Authorization header format path=%s method=%s", request.url.path, request.method)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {header_name}. Expected '{bearer_prefix} <token>'.",
        )

    token = raw[len(prefix) :].strip()
    if not token:
        logger.warning("Empty bearer token path=%s method=%s", request.url.path, request.method)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {header_name}. Missing token after '{bearer_prefix}'.",
        )

    return token

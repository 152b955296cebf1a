from __future__ import annotations

from fastapi import APIRouter, Depends

from idgate.idtoken import Verifier
from idgate.schemas.identity import HealthOut
from idgate.security.dependencies import get_verifier

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthOut)
def health(verifier: Verifier = Depends(get_verifier)) -> HealthOut:
    cache = verifier.key_cache
    return HealthOut(status="ok", keys=len(cache.key_ids()), keys_expire_at=cache.expires_at)

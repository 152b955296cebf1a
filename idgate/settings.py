from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Service settings.

    Notes:
    - Verifier settings (client id, issuer, certs URL) live in ``VerifierConfig``
      and are read from their own environment variables.
    - Everything here is overridable via ``APP_*`` env vars.
    """

    model_config = SettingsConfigDict(env_prefix="APP_", extra="ignore")

    log_level: str = "INFO"
    idtoken_log_level: str | None = None
    authorization_header: str = "Authorization"
    bearer_prefix: str = "Bearer"


@lru_cache
def get_settings() -> Settings:
    return Settings()

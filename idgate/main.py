from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from idgate.idtoken import Verifier, VerifierConfig
from idgate.logging_config import configure_app_logging
from idgate.routers import health, identity
from idgate.settings import get_settings


def create_app(verifier: Verifier | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        settings = get_settings()
        configure_app_logging(settings.log_level, settings.idtoken_log_level)

        logger = logging.getLogger(__name__)
        logger.info("App startup beginning")

        if verifier is None:
            # Performs the initial key-set fetch; a failure here aborts startup.
            config = VerifierConfig.from_environ()
            app.state.verifier = Verifier.from_config(config)
            logger.info("Verifier ready client_id=%s certs_url=%s", config.client_id, config.certs_url)
        else:
            app.state.verifier = verifier
            logger.info("Using injected verifier client_id=%s", verifier.client_id)

        yield
        # Shutdown (nothing to clean up; the key cache lives with the process)

    app = FastAPI(lifespan=lifespan)

    app.include_router(health.router)
    app.include_router(identity.router)

    return app


app = create_app()

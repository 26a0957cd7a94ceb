"""Main FastAPI application for Clinic Records.

This module builds the application: logging, middleware, error handlers,
routers, and the lifespan that opens and closes the store connections.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from clinic_records import __version__
from clinic_records.adapters.storage import MongoConnections
from clinic_records.api.errors import register_error_handlers
from clinic_records.api.logging_config import setup_logging
from clinic_records.api.middleware import setup_middleware
from clinic_records.api.routes import auth, clinical, health, patients
from clinic_records.infrastructure.settings import APP_NAME, Settings

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create the FastAPI application.

    Parameters:
        settings: Application settings; read from the environment when omitted
    """
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"{APP_NAME} {__version__} starting up...")
        connections = MongoConnections.from_config(settings.store)
        app.state.connections = connections
        app.state.patient_store = connections.patient_store()
        app.state.user_store = connections.user_store()
        app.state.clinical_store = connections.clinical_store()
        try:
            yield
        finally:
            connections.close()
            logger.info(f"{APP_NAME} shutting down...")

    app = FastAPI(
        title=APP_NAME,
        description="Patients, clinical measurements and login over MongoDB",
        version=__version__,
        lifespan=lifespan,
    )

    register_error_handlers(app)
    setup_middleware(app)

    app.include_router(patients.router)
    app.include_router(auth.router)
    app.include_router(clinical.router)
    app.include_router(health.router)

    @app.get("/", include_in_schema=False)
    def root():
        return {
            "message": APP_NAME,
            "version": __version__,
            "health": "/api/health",
        }

    return app


def build_app() -> FastAPI:
    """Application factory used by uvicorn (``--factory``): configures logging first."""
    settings = Settings()
    setup_logging(use_json=settings.api.json_logs, log_level=settings.api.log_level)
    return create_app(settings)

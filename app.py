"""
app.py — FastAPI application factory and startup lifecycle.

This is the ASGI application object imported by uvicorn.
It wires the repository and analysis service, registers routers, and loads
reference data during startup.

Usage (via launcher):
    python main.py

Usage (direct uvicorn):
    uvicorn app:app --reload
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from backend.controllers.analysis_controller import router as analysis_router
from backend.repository.reference_data import ReferenceDataRepository
from backend.services.analysis_service import EnclosureAllocationAnalyzer
from backend.utils.config import get_settings
from backend.utils.logger import get_logger


logger = get_logger(__name__)


def create_app() -> FastAPI:
    """
    Build and wire the FastAPI application.

    The analysis service is created during startup, once the reference data
    has been loaded; until then the endpoints answer 503.
    """
    settings = get_settings()
    repository = ReferenceDataRepository(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Load reference data before accepting requests."""
        _startup(app)
        yield

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.include_router(analysis_router)

    app.state.settings = settings
    app.state.repository = repository
    app.state.analysis_service = None

    return app


def _startup(app: FastAPI) -> None:
    """Load the enclosure and species tables and publish the analyzer on app.state."""
    repository: ReferenceDataRepository = app.state.repository

    logger.info("Startup: loading enclosure and species reference data")
    reference_data = repository.load_reference_data()

    app.state.analysis_service = EnclosureAllocationAnalyzer(
        reference_data=reference_data,
        settings=app.state.settings,
    )
    logger.info("Startup complete — system ready")


# Module-level app object for uvicorn
app = create_app()

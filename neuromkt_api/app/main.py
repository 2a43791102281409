"""
Main entrypoint for the Neuromkt API.

This module assembles the FastAPI application, sets up logging,
registers the error handlers shared by every router and includes the
versioned routers.  ``create_app`` builds and configures the app, which
is then instantiated at module import time as ``app``, e.g.::

    uvicorn neuromkt_api.app.main:app --reload

Errors coming out of the service layer are mapped once, here:

* ``ConflictError`` (a manually supplied code already exists) -> 409
* ``ValueError`` (local validation) -> 400
* ``psycopg2.Error`` (rejected by a stored function) -> 400 carrying
  the database's primary message
* pydantic ``ValidationError`` raised while mapping rows -> 500; it
  subclasses ``ValueError`` but is a server-side fault
"""

import asyncio
import logging

import psycopg2
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import check_connection, close_pool
from .core.errors import ConflictError, store_message
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Logging first so that router imports can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    app.include_router(v1_router, prefix="/api/v1")

    @app.exception_handler(ConflictError)
    async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})

    @app.exception_handler(ValueError)
    async def validation_handler(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})

    @app.exception_handler(ValidationError)
    async def mapping_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        logger.error("Could not map database row: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal Server Error"},
        )

    @app.exception_handler(psycopg2.Error)
    async def store_error_handler(request: Request, exc: psycopg2.Error) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": store_message(exc)})

    @app.get("/health/db", tags=["health"])
    async def health_db():
        """Report whether the database answers a trivial query."""
        if await asyncio.to_thread(check_connection):
            return {"status": "ok"}
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"status": "fail"})

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        close_pool()

    logger.info("%s %s ready", settings.project_name, settings.api_version)
    return app


app = create_app()

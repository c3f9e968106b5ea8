"""FastAPI application factory."""

from __future__ import annotations

import logging
import os

from sky_ranker_api.config import settings

# Propagate DB URL so sky_ranker_db.database picks it up via os.getenv.
os.environ.setdefault("DATABASE_URL", settings.database_url)

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sky_ranker_api.routers import health, recommendations
from sky_ranker_api.schemas.common import ErrorResponse
from sky_ranker_ml.exceptions import InvalidInput

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


async def _invalid_input_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
    body = ErrorResponse(detail=str(exc), code="invalid_input")
    return JSONResponse(
        status_code=422,
        content=body.model_dump(),
    )


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    configure_logging(settings.log_level)
    app = FastAPI(
        title="Sky Ranker API",
        version="0.1.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(InvalidInput, _invalid_input_handler)

    # Routers
    _prefix = "/api/v1"
    app.include_router(recommendations.router, prefix=_prefix)
    app.include_router(health.router, prefix=_prefix)

    return app


app = create_app()

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from app.api.health import router as health_router
from app.api.router import api_router
from app.config import get_settings
from app.db import dispose_engine
from app.exceptions import setup_exception_handlers
from app.logging_config import configure_logging
from app.middleware import setup_middleware

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)

OPENAPI_TAGS = [
    {"name": "leaves", "description": "Evaluate, submit and decide leave applications."},
    {"name": "balances", "description": "Leave and comp-off balances, HR adjustments and per-employee rates."},
    {"name": "leave-rates", "description": "Default monthly leave rate per employment term."},
    {"name": "accruals", "description": "Monthly crediting of leave rates to balances."},
    {"name": "health", "description": "Liveness and database connectivity."},
]


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager for startup and shutdown."""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Starting %s v%s [%s]", settings.app_name, settings.app_version, settings.environment)
    yield
    await dispose_engine()
    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """Application factory."""
    settings = get_settings()

    application = FastAPI(
        title=settings.app_name,
        description="Evaluates leave requests: duplicate detection, special-leave rules and loss-of-pay proration.",
        version=settings.app_version,
        openapi_tags=OPENAPI_TAGS,
        debug=settings.debug,
        lifespan=lifespan,
        docs_url="/docs" if settings.environment != "production" else None,
        redoc_url="/redoc" if settings.environment != "production" else None,
    )

    setup_middleware(application, settings)
    setup_exception_handlers(application)

    application.include_router(health_router)
    application.include_router(api_router)

    return application


app = create_app()

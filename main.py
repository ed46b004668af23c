"""
MealMinder FastAPI Application
Main entry point wiring routers, middleware, exception handlers and configuration
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import uvicorn
from contextlib import asynccontextmanager
import anyio
from typing import Optional

from api.routes import recipes, meal_plans, suppliers, products, shopping, auth, health

import domain.models as db_models

from app.config import settings

from api.middleware import (
    RequestLoggingMiddleware,
    validation_exception_handler,
    http_exception_handler,
    domain_exception_handler,
    integrity_exception_handler,
    general_exception_handler,
)
from app.exceptions import MealMinderError

# Setup logging with configured level and format
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()), format=settings.log_format
)
_logger = logging.getLogger("mealminder.main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for application startup and shutdown.
    Creates the schema, retrying while the database is still coming up.
    """
    last_exc: Optional[Exception] = None

    _logger.info(f"Starting MealMinder in {settings.environment.value} mode")

    for attempt in range(1, settings.db_init_attempts + 1):
        try:
            # Run blocking init in a thread to avoid blocking the event loop
            await anyio.to_thread.run_sync(db_models.init_database)
            _logger.info("Database initialization succeeded")
            break
        except Exception as exc:
            last_exc = exc
            _logger.warning(
                "Database init attempt %d/%d failed: %s",
                attempt,
                settings.db_init_attempts,
                exc,
            )
            if attempt < settings.db_init_attempts:
                await anyio.sleep(settings.db_init_delay_sec)
            else:
                _logger.error(
                    "Database initialization failed after %d attempts", attempt
                )
                raise last_exc

    try:
        yield
    finally:
        _logger.info("Shutting down MealMinder")
        db_models.engine.dispose()
        _logger.info("Database connections closed")


def create_app() -> FastAPI:
    """Build the FastAPI application"""
    application = FastAPI(
        title=settings.api_title,
        version=settings.app_version,
        description=settings.api_description,
        lifespan=lifespan,
        debug=settings.debug,
        openapi_url=(
            f"{settings.api_prefix}/openapi.json" if not settings.is_production() else None
        ),
        docs_url=f"{settings.api_prefix}/docs" if not settings.is_production() else None,
        redoc_url=f"{settings.api_prefix}/redoc" if not settings.is_production() else None,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    application.add_middleware(RequestLoggingMiddleware)

    application.add_exception_handler(RequestValidationError, validation_exception_handler)
    application.add_exception_handler(StarletteHTTPException, http_exception_handler)
    application.add_exception_handler(MealMinderError, domain_exception_handler)
    application.add_exception_handler(IntegrityError, integrity_exception_handler)
    application.add_exception_handler(Exception, general_exception_handler)

    application.include_router(health.router)
    for module in (recipes, meal_plans, suppliers, products, shopping, auth):
        application.include_router(module.router, prefix=settings.api_prefix)

    return application


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development(),
        log_level=settings.log_level.lower(),
    )

"""
Consolidated middleware for the MealMinder API
"""

import time
import logging
from uuid import uuid4
from decimal import Decimal

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from api.responses import error_response
from app.exceptions import MealMinderError

logger = logging.getLogger("mealminder.middleware")


# ============================================================================
# Helper Functions
# ============================================================================


def make_serializable(obj):
    """Convert objects to JSON-serializable format"""
    if isinstance(obj, Decimal):
        return float(obj)
    elif isinstance(obj, Exception):
        return str(obj)
    elif isinstance(obj, dict):
        return {k: make_serializable(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [make_serializable(item) for item in obj]
    return obj


def field_errors(exc: RequestValidationError) -> list:
    """Flatten pydantic errors to {field, message, type} entries"""
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        errors.append(
            {
                "field": ".".join(loc),
                "message": err.get("msg", ""),
                "type": err.get("type", ""),
            }
        )
    return errors


# ============================================================================
# Request Logging Middleware
# ============================================================================


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all HTTP requests and responses"""

    async def dispatch(self, request: Request, call_next):
        # Generate unique request ID
        request_id = str(uuid4())
        request.state.request_id = request_id

        logger.info(
            "Request started",
            extra={
                "request_id": request_id,
                "method": request.method,
                "url": str(request.url),
                "client": request.client.host if request.client else None,
            },
        )

        start_time = time.time()

        try:
            response: Response = await call_next(request)
            process_time = time.time() - start_time

            logger.info(
                "Request completed",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "url": str(request.url),
                    "status_code": response.status_code,
                    "process_time": f"{process_time:.4f}s",
                },
            )

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Process-Time"] = f"{process_time:.4f}"

            return response

        except Exception as exc:
            process_time = time.time() - start_time
            logger.error(
                "Request failed",
                extra={
                    "request_id": request_id,
                    "method": request.method,
                    "url": str(request.url),
                    "error": str(exc),
                    "process_time": f"{process_time:.4f}s",
                },
                exc_info=True,
            )
            raise


# ============================================================================
# Error Handlers
# ============================================================================


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors as 400 with field-level details"""
    errors = make_serializable(field_errors(exc))
    logger.warning(f"Validation error on {request.url}: {errors}")

    return error_response(
        kind="validation_error",
        message="Request validation failed",
        status_code=status.HTTP_400_BAD_REQUEST,
        details={"errors": errors},
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions"""
    logger.warning(f"HTTP {exc.status_code} on {request.url}: {exc.detail}")

    kind = "not_found" if exc.status_code == 404 else "http_error"
    return error_response(
        kind=kind,
        message=str(exc.detail),
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def domain_exception_handler(request: Request, exc: MealMinderError):
    """Handle errors raised by services (validation, not found, conflict, media type)"""
    logger.warning(f"{exc.kind} on {request.url}: {exc.message}")

    return error_response(
        kind=exc.kind,
        message=exc.message,
        status_code=exc.http_status,
        details=jsonable_encoder(make_serializable(exc.details)) if exc.details else None,
    )


async def integrity_exception_handler(request: Request, exc: IntegrityError):
    """Handle constraint violations no service translated"""
    logger.warning(f"Integrity error on {request.url}: {exc.orig}")

    return error_response(
        kind="conflict",
        message="The request conflicts with existing data",
        status_code=status.HTTP_409_CONFLICT,
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.exception(f"Unexpected error on {request.url}: {str(exc)}")

    return error_response(
        kind="internal_error",
        message="An unexpected error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )

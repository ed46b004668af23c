"""
Standardized API error envelope.
Every failing request is answered with the same {kind, message, details?} body.
"""

from typing import Any, Optional

from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field


class ErrorEnvelope(BaseModel):
    """Standardized error response"""

    kind: str = Field(..., description="Machine-readable error kind")
    message: str = Field(..., description="Human-readable message")
    details: Optional[Any] = Field(None, description="Field errors or extra context")


def error_response(
    kind: str,
    message: str,
    status_code: int,
    details: Any = None,
    headers: Optional[dict] = None,
) -> JSONResponse:
    """Create a standardized error response"""
    content: dict = {"kind": kind, "message": message}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


# Documented on routers so the OpenAPI schema shows the envelope
ERROR_RESPONSES = {
    400: {"model": ErrorEnvelope, "description": "Validation error"},
    404: {"model": ErrorEnvelope, "description": "Resource not found"},
    409: {"model": ErrorEnvelope, "description": "Conflict"},
    500: {"model": ErrorEnvelope, "description": "Unexpected error"},
}

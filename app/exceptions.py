from typing import Any, Mapping, Optional


class MealMinderError(Exception):
    """Base class for errors raised by services and mapped to HTTP responses.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, ids involved)
        kind: machine-readable error kind rendered in the error envelope
        http_status: HTTP status code the exception handlers respond with
    """

    http_status = 500
    kind = "internal_error"

    def __init__(self, message: str = "Internal error", details: Optional[Mapping[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"kind": self.kind, "message": self.message}
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(MealMinderError):
    """Raised when input data is invalid or a precondition for a service call is not met."""

    http_status = 400
    kind = "validation_error"

    def __init__(self, message: str = "Invalid input", details: Optional[Mapping[str, Any]] = None):
        super().__init__(message, details)


class NotFoundError(MealMinderError):
    """Raised when a requested resource was not found."""

    http_status = 404
    kind = "not_found"

    def __init__(self, message: str = "Not found", details: Optional[Mapping[str, Any]] = None):
        super().__init__(message, details)


class ConflictError(MealMinderError):
    """Raised when a resource conflict occurs (duplicate name, date already planned, wrong status)."""

    http_status = 409
    kind = "conflict"

    def __init__(self, message: str = "Conflict", details: Optional[Mapping[str, Any]] = None):
        super().__init__(message, details)


class UnsupportedMediaTypeError(MealMinderError):
    """Raised when a write request does not carry a JSON body."""

    http_status = 415
    kind = "unsupported_media_type"

    def __init__(self, message: str = "Content-Type must be application/json", details: Optional[Mapping[str, Any]] = None):
        super().__init__(message, details)


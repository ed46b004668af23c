"""
API dependencies for dependency injection
"""

from typing import Generator

from fastapi import Request
from sqlalchemy.orm import Session

from app.exceptions import UnsupportedMediaTypeError
from domain.models import get_db_session


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session()


def require_json(request: Request) -> None:
    """
    Reject write requests whose body is not declared as JSON.

    Usage:
        @router.post("", dependencies=[Depends(require_json)])
    """
    content_type = request.headers.get("content-type", "")
    if "application/json" not in content_type.lower():
        raise UnsupportedMediaTypeError(
            details={"contentType": content_type or None}
        )

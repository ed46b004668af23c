"""Health check and utility routes"""

from fastapi import APIRouter
import logging

from api.responses import error_response
from app.config import settings
from domain.models import ping_database

router = APIRouter(tags=["Health"])
logger = logging.getLogger("mealminder.api.health")


@router.get("/health-check")
def health_check():
    """Basic health check endpoint"""
    return {"status": "ok", "service": settings.app_name}


@router.get("/health-check/db")
def database_health():
    """Confirm the database answers a trivial query"""
    try:
        ping_database()
        return {"database": "ok"}
    except Exception as e:
        logger.exception("Database health check failed")
        return error_response(
            kind="service_unavailable",
            message="Database is not reachable",
            status_code=503,
            details={"error": type(e).__name__},
        )

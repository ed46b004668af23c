"""
Mock supplier OAuth handshake.

Stand-in for a real provider integration: the start call stores a pending
state row keyed by a random value, and the callback trades that state for
fabricated tokens written onto the supplier.
"""

import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple
from urllib.parse import urlencode

from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import ServiceValidationError
from domain.models import OAuthState, Supplier
from repositories import OAuthStateRepository
from services.supplier_service import SupplierService

logger = logging.getLogger("mealminder.auth")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    """SQLite hands timestamps back naive; they are stored as UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class AuthService:
    """Business logic for the mocked supplier OAuth flow."""

    @staticmethod
    def _check_provider(provider: str) -> str:
        provider = provider.lower()
        if provider not in settings.oauth_providers:
            raise ServiceValidationError(
                f"Unsupported OAuth provider '{provider}'",
                details={"supported": settings.oauth_providers},
            )
        return provider

    @staticmethod
    def start(db: Session, provider: str, supplier_id: int) -> Tuple[str, str]:
        """
        Begin a handshake for a supplier.

        Returns:
            (state, auth_url) where auth_url is the callback the client follows
        """
        provider = AuthService._check_provider(provider)
        SupplierService.get_supplier(db, supplier_id)

        repo = OAuthStateRepository(db)
        now = _utcnow()
        purged = repo.purge_expired(now)

        state = secrets.token_urlsafe(24)
        db.add(
            OAuthState(
                state=state,
                supplier_id=supplier_id,
                provider=provider,
                expires_at=now + timedelta(seconds=settings.oauth_state_ttl_sec),
            )
        )
        db.commit()

        query = urlencode({"state": state, "code": f"mock-{secrets.token_hex(8)}"})
        auth_url = f"{settings.api_prefix}/auth/{provider}/callback?{query}"
        logger.info(
            f"oauth_started supplier_id={supplier_id} provider={provider} purged={purged}"
        )
        return state, auth_url

    @staticmethod
    def complete(
        db: Session, provider: str, state: str, code: Optional[str] = None
    ) -> Supplier:
        """Consume a pending state and store fabricated tokens on its supplier"""
        provider = AuthService._check_provider(provider)
        repo = OAuthStateRepository(db)
        pending = repo.get_by_id(state) if state else None

        if pending is None:
            raise ServiceValidationError("Unknown or already used OAuth state")
        if pending.provider != provider:
            raise ServiceValidationError(
                "OAuth state was issued for a different provider",
                details={"expected": pending.provider, "received": provider},
            )

        now = _utcnow()
        if _as_utc(pending.expires_at) < now:
            db.delete(pending)
            db.commit()
            raise ServiceValidationError("OAuth state has expired")

        supplier = SupplierService.get_supplier(db, pending.supplier_id)
        supplier.oauth_provider = provider
        supplier.access_token = f"mock_access_{secrets.token_urlsafe(24)}"
        supplier.refresh_token = f"mock_refresh_{secrets.token_urlsafe(24)}"
        supplier.token_expires_at = now + timedelta(seconds=settings.oauth_token_ttl_sec)
        db.delete(pending)
        db.commit()
        db.refresh(supplier)

        logger.info(
            f"oauth_completed supplier_id={supplier.id} provider={provider} "
            f"code_present={bool(code)}"
        )
        return supplier

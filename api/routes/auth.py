"""
Mock supplier OAuth routes.

Placeholder for a real provider integration; only the request/response shape
used by the supplier dialog is kept.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from api.dependencies import get_db
from api.responses import ERROR_RESPONSES
from domain.schemas.auth_schemas import OAuthCallbackResponse, OAuthStartResponse
from services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Supplier OAuth (mock)"], responses=ERROR_RESPONSES)
logger = logging.getLogger("mealminder.api.auth")


@router.get("/{provider}", response_model=OAuthStartResponse)
def start_oauth(
    provider: str,
    supplier_id: int = Query(..., alias="supplierId"),
    db: Session = Depends(get_db),
):
    """Start linking a supplier with a provider; returns the callback URL to follow"""
    state, auth_url = AuthService.start(db, provider, supplier_id)
    return OAuthStartResponse(
        message=f"OAuth flow initiated for {provider}",
        auth_url=auth_url,
        state=state,
    )


@router.get("/{provider}/callback", response_model=OAuthCallbackResponse)
def oauth_callback(
    provider: str,
    state: str = Query(..., min_length=1),
    code: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
):
    """Complete the handshake started for the supplier bound to **state**"""
    supplier = AuthService.complete(db, provider, state, code)
    return OAuthCallbackResponse(
        message=f"Successfully authenticated with {provider}",
        supplier_id=supplier.id,
        provider=supplier.oauth_provider,
        code=code,
    )

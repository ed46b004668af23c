"""Response shapes of the mocked OAuth handshake."""

from typing import Optional

from domain.schemas.base import CamelModel


class OAuthStartResponse(CamelModel):
    status: str = "success"
    message: str
    auth_url: str
    state: str


class OAuthCallbackResponse(CamelModel):
    status: str = "success"
    message: str
    supplier_id: int
    provider: str
    code: Optional[str] = None

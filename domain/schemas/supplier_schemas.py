"""Pydantic schemas for suppliers and their products."""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from domain.schemas.base import CamelModel


class SupplierCreate(CamelModel):
    """
    Canonical supplier payload. Fields sent by older clients (location,
    deliveryRadius, affiliate settings) are ignored.
    """

    name: str
    description: str = ""
    website: Optional[str] = None
    active: bool = True

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Supplier name must not be empty")
        return v

    @field_validator("description")
    @classmethod
    def strip_description(cls, v: str) -> str:
        return v.strip()

    @field_validator("website")
    @classmethod
    def blank_website_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None


class SupplierResponse(CamelModel):
    id: int
    name: str
    description: str
    website: Optional[str] = None
    active: bool
    oauth_provider: Optional[str] = None
    is_authenticated: bool = False
    token_expires_at: Optional[datetime] = None
    commission_rate: float
    total_revenue: int
    total_commission: int
    created_at: Optional[datetime] = None


class ProductCreate(CamelModel):
    supplier_id: int
    name: str = Field(..., min_length=1)
    price: int = Field(..., ge=0, description="Price in cents")
    stock_level: int = Field(default=0, ge=0)
    category: Optional[str] = None
    unit: Optional[str] = None
    description: Optional[str] = None


class ProductUpdate(CamelModel):
    price: Optional[int] = Field(default=None, ge=0)
    stock_level: Optional[int] = Field(default=None, ge=0)
    category: Optional[str] = None
    description: Optional[str] = None


class ProductResponse(CamelModel):
    id: int
    supplier_id: int
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    unit: Optional[str] = None
    price: int
    stock_level: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PriceComparisonEntry(CamelModel):
    """One supplier's offer for a product in a price comparison."""

    product_id: int
    supplier_id: int
    supplier_name: str
    name: str
    price: int
    stock_level: int
    in_stock: bool
    previous_price: Optional[int] = None
    price_change_percent: Optional[float] = None
    is_lowest_price: bool = False


class StockStatus(CamelModel):
    product_id: int
    supplier_id: int
    in_stock: bool
    quantity: int


class PriceHistoryEntry(CamelModel):
    """A price a product carried before it was changed."""

    id: int
    product_id: int
    supplier_id: int
    price: int
    recorded_at: datetime

"""Pydantic schemas for shopping lists."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from domain.enums import ShoppingListStatus
from domain.schemas.base import CamelModel


class ShoppingListItem(CamelModel):
    product_id: int
    quantity: int = Field(..., ge=1)
    supplier_id: int


class ShoppingListCreate(CamelModel):
    items: List[ShoppingListItem] = Field(default_factory=list)
    user_id: Optional[int] = None


class ShoppingListUpdate(CamelModel):
    items: Optional[List[ShoppingListItem]] = None
    status: Optional[ShoppingListStatus] = None


class ShoppingListResponse(CamelModel):
    id: int
    user_id: Optional[int] = None
    items: List[ShoppingListItem]
    status: ShoppingListStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SummaryLine(CamelModel):
    """
    One costed item. Items whose product is gone or no longer sold by the
    named supplier are reported with available=False and no prices.
    """

    product_id: int
    supplier_id: int
    name: Optional[str] = None
    quantity: int
    available: bool = True
    unit_price: Optional[int] = None
    line_total: int = 0
    in_stock: bool = False
    cheapest_supplier_id: Optional[int] = None
    cheapest_unit_price: Optional[int] = None
    potential_savings: int = 0


class ShoppingListSummary(CamelModel):
    """Costed view of a shopping list against current supplier prices."""

    shopping_list_id: int
    status: ShoppingListStatus
    lines: List[SummaryLine]
    total: int
    cheapest_total: int
    potential_savings: int
    out_of_stock_count: int
    unavailable_count: int = 0


class TransactionResponse(CamelModel):
    id: int
    supplier_id: int
    user_id: Optional[int] = None
    shopping_list_id: Optional[int] = None
    amount: int
    commission: int
    created_at: Optional[datetime] = None


class SubmitResponse(CamelModel):
    shopping_list: ShoppingListResponse
    transactions: List[TransactionResponse]

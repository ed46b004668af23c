"""Product, price comparison and stock routes"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from api.dependencies import get_db, require_json
from api.responses import ERROR_RESPONSES
from domain.schemas.supplier_schemas import (
    PriceComparisonEntry,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
    StockStatus,
    PriceHistoryEntry,
)
from services.supplier_service import SupplierService

router = APIRouter(prefix="/products", tags=["Products"], responses=ERROR_RESPONSES)
logger = logging.getLogger("mealminder.api.products")


@router.get("", response_model=List[ProductResponse])
def list_products(
    category: Optional[str] = Query(default=None, description="Category filter"),
    db: Session = Depends(get_db),
):
    """List all products"""
    products = SupplierService.list_products(db, category=category)
    return [ProductResponse.model_validate(p) for p in products]


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_json)],
)
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    """Add a product to a supplier's catalogue (price in cents)"""
    return ProductResponse.model_validate(SupplierService.create_product(db, payload))


@router.patch(
    "/{product_id}",
    response_model=ProductResponse,
    dependencies=[Depends(require_json)],
)
def update_product(product_id: int, update: ProductUpdate, db: Session = Depends(get_db)):
    """Update price, stock level, category or description; price changes are recorded in the price history"""
    product = SupplierService.update_product(db, product_id, update)
    return ProductResponse.model_validate(product)


@router.get("/{product_id}/compare-prices", response_model=List[PriceComparisonEntry])
def compare_prices(product_id: int, db: Session = Depends(get_db)):
    """
    Compare a product across every active supplier selling it.

    Rows are ordered by price. **priceChangePercent** is measured against the
    most recent price history entry; exactly one row has **isLowestPrice**.
    """
    return SupplierService.compare_prices(db, product_id)


@router.get("/{product_id}/stock", response_model=StockStatus)
def check_stock(
    product_id: int,
    supplier_id: int = Query(..., alias="supplierId"),
    db: Session = Depends(get_db),
):
    """Stock level of a product at a given supplier"""
    return SupplierService.check_stock(db, product_id, supplier_id)


@router.get("/{product_id}/price-history", response_model=List[PriceHistoryEntry])
def price_history(product_id: int, db: Session = Depends(get_db)):
    """Previous prices of a product, oldest first; one entry per price change"""
    entries = SupplierService.price_history(db, product_id)
    return [PriceHistoryEntry.model_validate(h) for h in entries]

"""Supplier routes"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from api.dependencies import get_db, require_json
from api.responses import ERROR_RESPONSES
from domain.schemas.supplier_schemas import (
    ProductResponse,
    SupplierCreate,
    SupplierResponse,
)
from services.supplier_service import SupplierService

router = APIRouter(prefix="/suppliers", tags=["Suppliers"], responses=ERROR_RESPONSES)
logger = logging.getLogger("mealminder.api.suppliers")


@router.get("", response_model=List[SupplierResponse])
def list_suppliers(db: Session = Depends(get_db)):
    """List all suppliers"""
    return [SupplierResponse.model_validate(s) for s in SupplierService.list_suppliers(db)]


@router.post(
    "",
    response_model=SupplierResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_json)],
    responses={415: {"description": "Body is not JSON"}},
)
def create_supplier(payload: SupplierCreate, db: Session = Depends(get_db)):
    """
    Add a supplier.

    Accepts **name** (required, trimmed, must not be blank), **description**,
    **website** and **active**. Fields sent by older clients such as
    location or deliveryRadius are ignored.
    """
    supplier = SupplierService.create_supplier(db, payload)
    return SupplierResponse.model_validate(supplier)


@router.get("/{supplier_id}/products", response_model=List[ProductResponse])
def list_supplier_products(supplier_id: int, db: Session = Depends(get_db)):
    """List the products a supplier sells"""
    products = SupplierService.list_supplier_products(db, supplier_id)
    return [ProductResponse.model_validate(p) for p in products]

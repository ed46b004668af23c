"""Shopping list routes"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from api.dependencies import get_db, require_json
from api.responses import ERROR_RESPONSES
from domain.schemas.shopping_schemas import (
    ShoppingListCreate,
    ShoppingListResponse,
    ShoppingListSummary,
    ShoppingListUpdate,
    SubmitResponse,
    TransactionResponse,
)
from services.shopping_service import ShoppingService

router = APIRouter(prefix="/shopping-list", tags=["Shopping List"], responses=ERROR_RESPONSES)
logger = logging.getLogger("mealminder.api.shopping")


@router.get("", response_model=List[ShoppingListResponse])
def list_shopping_lists(
    user_id: Optional[int] = Query(default=None, alias="userId"),
    db: Session = Depends(get_db),
):
    """List shopping lists, newest first"""
    lists = ShoppingService.list_shopping_lists(db, user_id=user_id)
    return [ShoppingListResponse.model_validate(sl) for sl in lists]


@router.post(
    "",
    response_model=ShoppingListResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_json)],
)
def create_shopping_list(payload: ShoppingListCreate, db: Session = Depends(get_db)):
    """Create a draft shopping list from {productId, quantity, supplierId} items"""
    shopping_list = ShoppingService.create_shopping_list(db, payload)
    return ShoppingListResponse.model_validate(shopping_list)


@router.patch(
    "/{list_id}",
    response_model=ShoppingListResponse,
    dependencies=[Depends(require_json)],
)
def update_shopping_list(
    list_id: int, update: ShoppingListUpdate, db: Session = Depends(get_db)
):
    """Replace the items of a draft shopping list; status changes only through submit"""
    shopping_list = ShoppingService.update_shopping_list(db, list_id, update)
    return ShoppingListResponse.model_validate(shopping_list)


@router.get("/{list_id}/summary", response_model=ShoppingListSummary)
def shopping_list_summary(list_id: int, db: Session = Depends(get_db)):
    """
    Cost a shopping list at current prices.

    Each line shows the chosen supplier's price and stock alongside the
    cheapest supplier for the same product.
    """
    return ShoppingService.summarize(db, list_id)


@router.post("/{list_id}/submit", response_model=SubmitResponse)
def submit_shopping_list(list_id: int, db: Session = Depends(get_db)):
    """
    Submit a draft list: records one transaction per supplier and moves the
    list to pending.
    """
    shopping_list, transactions = ShoppingService.submit(db, list_id)
    return SubmitResponse(
        shopping_list=ShoppingListResponse.model_validate(shopping_list),
        transactions=[TransactionResponse.model_validate(t) for t in transactions],
    )


@router.get("/{list_id}/transactions", response_model=List[TransactionResponse])
def list_shopping_list_transactions(list_id: int, db: Session = Depends(get_db)):
    """Transactions recorded when the list was submitted, one per supplier"""
    transactions = ShoppingService.list_transactions(db, list_id)
    return [TransactionResponse.model_validate(t) for t in transactions]

"""Shopping list service"""

import logging
from collections import OrderedDict
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from app.exceptions import ConflictError, NotFoundError, ServiceValidationError
from domain.enums import ShoppingListStatus
from domain.models import Product, ShoppingList, Supplier, Transaction
from domain.schemas.shopping_schemas import (
    ShoppingListCreate,
    ShoppingListItem,
    ShoppingListSummary,
    ShoppingListUpdate,
    SummaryLine,
)
from repositories import (
    ProductRepository,
    ShoppingListRepository,
    SupplierRepository,
    TransactionRepository,
)
from services.supplier_service import SupplierService

logger = logging.getLogger("mealminder.shopping")


def commission_for(amount: int, rate) -> int:
    """Commission in cents, rounded half up"""
    value = Decimal(amount) * Decimal(str(rate))
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class ShoppingService:
    """Business logic for shopping lists, their costing and submission."""

    @staticmethod
    def _resolve_items(
        db: Session, items: List[ShoppingListItem]
    ) -> List[Tuple[ShoppingListItem, Product]]:
        """
        Check every item references a product sold by the named supplier.

        Raises:
            ServiceValidationError: listing every offending item index
        """
        repo = ProductRepository(db)
        resolved = []
        errors = []
        for index, item in enumerate(items):
            product = repo.get_by_id_and_supplier(item.product_id, item.supplier_id)
            if not product:
                errors.append(
                    {
                        "index": index,
                        "productId": item.product_id,
                        "supplierId": item.supplier_id,
                        "message": "product is not sold by this supplier",
                    }
                )
                continue
            resolved.append((item, product))

        if errors:
            raise ServiceValidationError(
                "Shopping list contains unknown products", details={"errors": errors}
            )
        return resolved

    @staticmethod
    def _dump_items(items: List[ShoppingListItem]) -> List[Dict[str, int]]:
        return [item.model_dump(by_alias=True) for item in items]

    @staticmethod
    def list_shopping_lists(db: Session, user_id: Optional[int] = None) -> List[ShoppingList]:
        return ShoppingListRepository(db).get_all(user_id=user_id)

    @staticmethod
    def get_shopping_list(db: Session, list_id: int) -> ShoppingList:
        shopping_list = ShoppingListRepository(db).get_by_id(list_id)
        if not shopping_list:
            raise NotFoundError(f"Shopping list {list_id} not found")
        return shopping_list

    @staticmethod
    def create_shopping_list(db: Session, payload: ShoppingListCreate) -> ShoppingList:
        ShoppingService._resolve_items(db, payload.items)
        shopping_list = ShoppingListRepository(db).create(
            ShoppingList(
                user_id=payload.user_id,
                items=ShoppingService._dump_items(payload.items),
                status=ShoppingListStatus.DRAFT.value,
            )
        )
        logger.info(
            f"shopping_list_created list_id={shopping_list.id} items={len(payload.items)}"
        )
        return shopping_list

    @staticmethod
    def update_shopping_list(
        db: Session, list_id: int, update: ShoppingListUpdate
    ) -> ShoppingList:
        """
        Replace the items of a draft list.

        Status only moves forward through submit: a PATCH may restate the
        current status but never change it, and a submitted list is frozen.
        """
        shopping_list = ShoppingService.get_shopping_list(db, list_id)

        if update.status is not None and update.status.value != shopping_list.status:
            raise ConflictError(
                "Shopping list status can only change through submit",
                details={"status": shopping_list.status, "requested": update.status.value},
            )
        if update.items is not None:
            if shopping_list.status != ShoppingListStatus.DRAFT.value:
                raise ConflictError(
                    f"Shopping list {list_id} has already been submitted",
                    details={"status": shopping_list.status},
                )
            ShoppingService._resolve_items(db, update.items)
            shopping_list.items = ShoppingService._dump_items(update.items)

        ShoppingListRepository(db).update(shopping_list)
        logger.info(
            f"shopping_list_updated list_id={list_id} status={shopping_list.status}"
        )
        return shopping_list

    @staticmethod
    def summarize(db: Session, list_id: int) -> ShoppingListSummary:
        """
        Cost a shopping list at current prices and point out, per item, the
        cheapest supplier offering the same product.

        Items that no longer resolve (product removed or moved to another
        supplier) are listed as unavailable and left out of the totals.
        """
        shopping_list = ShoppingService.get_shopping_list(db, list_id)
        items = [ShoppingListItem.model_validate(i) for i in shopping_list.items]
        repo = ProductRepository(db)

        lines = []
        for item in items:
            product = repo.get_by_id_and_supplier(item.product_id, item.supplier_id)
            if not product:
                lines.append(
                    SummaryLine(
                        product_id=item.product_id,
                        supplier_id=item.supplier_id,
                        quantity=item.quantity,
                        available=False,
                    )
                )
                continue

            offers = SupplierService.compare_prices(db, product.id)
            best = next((o for o in offers if o.is_lowest_price), None)
            if best and best.price < product.price:
                cheapest_supplier_id, cheapest_price = best.supplier_id, best.price
            else:
                cheapest_supplier_id, cheapest_price = product.supplier_id, product.price
            lines.append(
                SummaryLine(
                    product_id=product.id,
                    supplier_id=product.supplier_id,
                    name=product.name,
                    quantity=item.quantity,
                    unit_price=product.price,
                    line_total=product.price * item.quantity,
                    in_stock=product.stock_level >= item.quantity,
                    cheapest_supplier_id=cheapest_supplier_id,
                    cheapest_unit_price=cheapest_price,
                    potential_savings=(product.price - cheapest_price) * item.quantity,
                )
            )

        available = [line for line in lines if line.available]
        total = sum(line.line_total for line in available)
        cheapest_total = sum(line.cheapest_unit_price * line.quantity for line in available)
        return ShoppingListSummary(
            shopping_list_id=shopping_list.id,
            status=shopping_list.status,
            lines=lines,
            total=total,
            cheapest_total=cheapest_total,
            potential_savings=total - cheapest_total,
            out_of_stock_count=sum(1 for line in available if not line.in_stock),
            unavailable_count=len(lines) - len(available),
        )

    @staticmethod
    def submit(db: Session, list_id: int) -> Tuple[ShoppingList, List[Transaction]]:
        """
        Submit a draft list: one transaction per supplier, supplier revenue and
        commission counters bumped, status moved to pending. All of it is
        committed together or not at all.
        """
        shopping_list = ShoppingService.get_shopping_list(db, list_id)
        if shopping_list.status != ShoppingListStatus.DRAFT.value:
            raise ConflictError(
                f"Shopping list {list_id} has already been submitted",
                details={"status": shopping_list.status},
            )

        items = [ShoppingListItem.model_validate(i) for i in shopping_list.items]
        if not items:
            raise ServiceValidationError(f"Shopping list {list_id} is empty")
        resolved = ShoppingService._resolve_items(db, items)

        amounts: "OrderedDict[int, int]" = OrderedDict()
        for item, product in resolved:
            amounts[product.supplier_id] = (
                amounts.get(product.supplier_id, 0) + product.price * item.quantity
            )

        suppliers = SupplierRepository(db)
        transactions = []
        try:
            for supplier_id, amount in amounts.items():
                supplier: Supplier = suppliers.get_by_id(supplier_id)
                commission = commission_for(amount, supplier.commission_rate)
                supplier.total_revenue = (supplier.total_revenue or 0) + amount
                supplier.total_commission = (supplier.total_commission or 0) + commission
                transaction = Transaction(
                    supplier_id=supplier_id,
                    user_id=shopping_list.user_id,
                    shopping_list_id=shopping_list.id,
                    amount=amount,
                    commission=commission,
                )
                db.add(transaction)
                transactions.append(transaction)

            shopping_list.status = ShoppingListStatus.PENDING.value
            db.commit()
        except Exception:
            db.rollback()
            logger.exception(f"shopping_list_submit_failed list_id={list_id}")
            raise

        db.refresh(shopping_list)
        for transaction in transactions:
            db.refresh(transaction)

        logger.info(
            f"shopping_list_submitted list_id={list_id} "
            f"suppliers={len(transactions)} total={sum(amounts.values())}"
        )
        return shopping_list, transactions

    @staticmethod
    def list_transactions(db: Session, list_id: int) -> List[Transaction]:
        ShoppingService.get_shopping_list(db, list_id)
        return TransactionRepository(db).get_by_shopping_list(list_id)

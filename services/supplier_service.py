"""Supplier and product catalogue service"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import ConflictError, NotFoundError, ServiceValidationError
from domain.models import Supplier, Product, PriceHistory
from domain.schemas.supplier_schemas import (
    SupplierCreate,
    ProductCreate,
    ProductUpdate,
    PriceComparisonEntry,
    StockStatus,
)
from repositories import (
    SupplierRepository,
    ProductRepository,
    PriceHistoryRepository,
)

logger = logging.getLogger("mealminder.suppliers")


def percent_change(current: int, previous: Optional[int]) -> Optional[float]:
    """Percentage change from previous to current, None when undefined"""
    if previous is None or previous == 0:
        return None
    return round((current - previous) / previous * 100, 2)


class SupplierService:
    """Business logic for suppliers and the products they sell."""

    # ------------------------------------------------------------------
    # Suppliers
    # ------------------------------------------------------------------

    @staticmethod
    def list_suppliers(db: Session) -> List[Supplier]:
        return SupplierRepository(db).get_all()

    @staticmethod
    def get_supplier(db: Session, supplier_id: int) -> Supplier:
        supplier = SupplierRepository(db).get_by_id(supplier_id)
        if not supplier:
            raise NotFoundError(f"Supplier {supplier_id} not found")
        return supplier

    @staticmethod
    def create_supplier(db: Session, payload: SupplierCreate) -> Supplier:
        repo = SupplierRepository(db)
        if repo.get_by_name(payload.name):
            raise ConflictError(
                "A supplier with this name already exists",
                details={"name": payload.name},
            )

        supplier = Supplier(
            name=payload.name,
            description=payload.description,
            website=payload.website,
            active=payload.active,
        )
        try:
            repo.create(supplier)
        except IntegrityError:
            db.rollback()
            raise ConflictError(
                "A supplier with this name already exists",
                details={"name": payload.name},
            )

        logger.info(f"supplier_created supplier_id={supplier.id} name={supplier.name!r}")
        return supplier

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    @staticmethod
    def list_products(db: Session, category: Optional[str] = None) -> List[Product]:
        return ProductRepository(db).get_all(category=category)

    @staticmethod
    def list_supplier_products(db: Session, supplier_id: int) -> List[Product]:
        SupplierService.get_supplier(db, supplier_id)
        return ProductRepository(db).get_by_supplier(supplier_id)

    @staticmethod
    def get_product(db: Session, product_id: int) -> Product:
        product = ProductRepository(db).get_by_id(product_id)
        if not product:
            raise NotFoundError(f"Product {product_id} not found")
        return product

    @staticmethod
    def create_product(db: Session, payload: ProductCreate) -> Product:
        if not SupplierRepository(db).exists(payload.supplier_id):
            raise ServiceValidationError(
                f"Supplier {payload.supplier_id} does not exist",
                details={"supplierId": payload.supplier_id},
            )

        product = ProductRepository(db).create(
            Product(
                supplier_id=payload.supplier_id,
                name=payload.name.strip(),
                description=payload.description,
                category=payload.category,
                unit=payload.unit,
                price=payload.price,
                stock_level=payload.stock_level,
            )
        )
        logger.info(
            f"product_created product_id={product.id} supplier_id={product.supplier_id} "
            f"price={product.price}"
        )
        return product

    @staticmethod
    def update_product(db: Session, product_id: int, update: ProductUpdate) -> Product:
        """
        Update price, stock or descriptive fields of a product.

        When the price changes the old price is appended to the price history
        so comparisons can report the change.
        """
        product = SupplierService.get_product(db, product_id)

        if update.price is not None and update.price != product.price:
            db.add(
                PriceHistory(
                    product_id=product.id,
                    supplier_id=product.supplier_id,
                    price=product.price,
                    recorded_at=datetime.now(timezone.utc),
                )
            )
            logger.info(
                f"price_changed product_id={product.id} "
                f"old={product.price} new={update.price}"
            )
            product.price = update.price

        if update.stock_level is not None:
            product.stock_level = update.stock_level
        if update.category is not None:
            product.category = update.category
        if update.description is not None:
            product.description = update.description

        return ProductRepository(db).update(product)

    # ------------------------------------------------------------------
    # Price comparison and stock
    # ------------------------------------------------------------------

    @staticmethod
    def compare_prices(db: Session, product_id: int) -> List[PriceComparisonEntry]:
        """
        Compare a product across every active supplier selling it.

        Offers are matched by product name. Each entry reports the percentage
        change against the product's most recent history entry, and exactly
        one entry (lowest price, then lowest product id) is flagged as the
        lowest price.
        """
        product = SupplierService.get_product(db, product_id)
        offers = ProductRepository(db).get_offers_for_name(product.name)
        history = PriceHistoryRepository(db)

        entries = []
        for offer, supplier in offers:
            previous = history.latest_for_product(offer.id)
            previous_price = previous.price if previous else None
            entries.append(
                PriceComparisonEntry(
                    product_id=offer.id,
                    supplier_id=supplier.id,
                    supplier_name=supplier.name,
                    name=offer.name,
                    price=offer.price,
                    stock_level=offer.stock_level,
                    in_stock=offer.stock_level > 0,
                    previous_price=previous_price,
                    price_change_percent=percent_change(offer.price, previous_price),
                )
            )

        if entries:
            lowest = min(entries, key=lambda e: (e.price, e.product_id))
            lowest.is_lowest_price = True

        logger.info(
            f"prices_compared product_id={product_id} offers={len(entries)}"
        )
        return entries

    @staticmethod
    def price_history(db: Session, product_id: int) -> List[PriceHistory]:
        """Previous prices of a product, oldest first"""
        SupplierService.get_product(db, product_id)
        return PriceHistoryRepository(db).get_by_product(product_id)

    @staticmethod
    def check_stock(db: Session, product_id: int, supplier_id: int) -> StockStatus:
        product = ProductRepository(db).get_by_id_and_supplier(product_id, supplier_id)
        if not product:
            raise NotFoundError(
                f"Product {product_id} is not sold by supplier {supplier_id}",
                details={"productId": product_id, "supplierId": supplier_id},
            )
        return StockStatus(
            product_id=product.id,
            supplier_id=product.supplier_id,
            in_stock=product.stock_level > 0,
            quantity=product.stock_level,
        )

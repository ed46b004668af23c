"""
Supplier Repository - Data access layer for suppliers, products, price history,
transactions and pending OAuth states
"""

from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import delete, func
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Supplier, Product, PriceHistory, Transaction, OAuthState


class SupplierRepository(BaseRepository[Supplier]):
    """Repository for supplier data access"""

    def __init__(self, db: Session):
        super().__init__(db, Supplier)

    def get_by_name(self, name: str) -> Optional[Supplier]:
        return self.db.query(Supplier).filter(Supplier.name == name).first()


class ProductRepository(BaseRepository[Product]):
    """Repository for product data access"""

    def __init__(self, db: Session):
        super().__init__(db, Product)

    def get_all(self, category: Optional[str] = None) -> List[Product]:
        query = self.db.query(Product)
        if category:
            query = query.filter(Product.category == category)
        return query.order_by(Product.id).all()

    def get_by_supplier(self, supplier_id: int) -> List[Product]:
        """Get all products sold by a supplier"""
        return (
            self.db.query(Product)
            .filter(Product.supplier_id == supplier_id)
            .order_by(Product.id)
            .all()
        )

    def get_by_id_and_supplier(
        self, product_id: int, supplier_id: int
    ) -> Optional[Product]:
        return (
            self.db.query(Product)
            .filter(Product.id == product_id, Product.supplier_id == supplier_id)
            .first()
        )

    def get_offers_for_name(self, name: str) -> List[Tuple[Product, Supplier]]:
        """
        Every (product, supplier) row selling a product with this name.

        Names are matched case-insensitively; inactive suppliers are left out.
        """
        return (
            self.db.query(Product, Supplier)
            .join(Supplier, Supplier.id == Product.supplier_id)
            .filter(func.lower(Product.name) == name.lower())
            .filter(Supplier.active.is_(True))
            .order_by(Product.price, Product.id)
            .all()
        )


class PriceHistoryRepository(BaseRepository[PriceHistory]):
    """Repository for append-only price history"""

    def __init__(self, db: Session):
        super().__init__(db, PriceHistory)

    def latest_for_product(self, product_id: int) -> Optional[PriceHistory]:
        """Most recent history entry for a product"""
        return (
            self.db.query(PriceHistory)
            .filter(PriceHistory.product_id == product_id)
            .order_by(PriceHistory.recorded_at.desc(), PriceHistory.id.desc())
            .first()
        )

    def get_by_product(self, product_id: int) -> List[PriceHistory]:
        return (
            self.db.query(PriceHistory)
            .filter(PriceHistory.product_id == product_id)
            .order_by(PriceHistory.recorded_at, PriceHistory.id)
            .all()
        )


class TransactionRepository(BaseRepository[Transaction]):
    """Repository for append-only supplier transactions"""

    def __init__(self, db: Session):
        super().__init__(db, Transaction)

    def get_by_shopping_list(self, shopping_list_id: int) -> List[Transaction]:
        return (
            self.db.query(Transaction)
            .filter(Transaction.shopping_list_id == shopping_list_id)
            .order_by(Transaction.id)
            .all()
        )


class OAuthStateRepository(BaseRepository[OAuthState]):
    """Repository for pending OAuth handshakes"""

    def __init__(self, db: Session):
        super().__init__(db, OAuthState)

    def get_by_id(self, state: str) -> Optional[OAuthState]:
        return self.db.get(OAuthState, state)

    def purge_expired(self, now: datetime) -> int:
        """Remove expired states (not committed; the caller owns the transaction)"""
        result = self.db.execute(
            delete(OAuthState).where(OAuthState.expires_at < now),
            execution_options={"synchronize_session": "fetch"},
        )
        return result.rowcount or 0

"""
Supplier catalogue models: suppliers, their products, price history,
transactions and pending OAuth handshakes.
"""

from sqlalchemy import (
    Column,
    Integer,
    Text,
    Boolean,
    Numeric,
    TIMESTAMP,
    ForeignKey,
    CheckConstraint,
    Index,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from domain.models.database import Base


class Supplier(Base):
    """A vendor offering products, optionally linked through OAuth"""

    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, unique=True, nullable=False)
    description = Column(Text, nullable=False, default="")
    website = Column(Text)
    active = Column(Boolean, nullable=False, default=True)
    oauth_provider = Column(Text)
    access_token = Column(Text)
    refresh_token = Column(Text)
    token_expires_at = Column(TIMESTAMP(timezone=True))
    commission_rate = Column(Numeric(5, 4), nullable=False, default=0.05)
    total_revenue = Column(Integer, nullable=False, default=0)  # cents
    total_commission = Column(Integer, nullable=False, default=0)  # cents
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    products = relationship(
        "Product", back_populates="supplier", cascade="all, delete-orphan"
    )
    transactions = relationship("Transaction", back_populates="supplier")

    @property
    def is_authenticated(self) -> bool:
        return bool(self.access_token)


class Product(Base):
    """An item a single supplier sells, priced in integer cents"""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    supplier_id = Column(
        Integer, ForeignKey("suppliers.id", ondelete="CASCADE"), nullable=False
    )
    name = Column(Text, nullable=False)
    description = Column(Text)
    category = Column(Text)
    unit = Column(Text)
    price = Column(Integer, nullable=False)
    stock_level = Column(Integer, nullable=False, default=0)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    supplier = relationship("Supplier", back_populates="products")
    price_history = relationship(
        "PriceHistory", back_populates="product", cascade="all, delete-orphan"
    )

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_product_price_nonneg"),
        CheckConstraint("stock_level >= 0", name="ck_product_stock_nonneg"),
        Index("ix_products_name", "name"),
    )


class PriceHistory(Base):
    """Previous price of a product, appended whenever the price changes"""

    __tablename__ = "price_history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(
        Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    supplier_id = Column(
        Integer, ForeignKey("suppliers.id", ondelete="CASCADE"), nullable=False
    )
    price = Column(Integer, nullable=False)
    recorded_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), nullable=False
    )

    product = relationship("Product", back_populates="price_history")


class Transaction(Base):
    """Order placed with one supplier when a shopping list is submitted"""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    supplier_id = Column(
        Integer, ForeignKey("suppliers.id", ondelete="CASCADE"), nullable=False
    )
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    shopping_list_id = Column(
        Integer, ForeignKey("shopping_lists.id", ondelete="SET NULL"), nullable=True
    )
    amount = Column(Integer, nullable=False)  # cents
    commission = Column(Integer, nullable=False, default=0)  # cents
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    supplier = relationship("Supplier", back_populates="transactions")


class OAuthState(Base):
    """Pending OAuth handshake keyed by the random state value"""

    __tablename__ = "oauth_states"

    state = Column(Text, primary_key=True)
    supplier_id = Column(
        Integer, ForeignKey("suppliers.id", ondelete="CASCADE"), nullable=False
    )
    provider = Column(Text, nullable=False)
    expires_at = Column(TIMESTAMP(timezone=True), nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

"""
Shopping list model.
"""

from sqlalchemy import Column, Integer, Text, TIMESTAMP, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from domain.enums import ShoppingListStatus
from domain.models.database import Base


class ShoppingList(Base):
    """A user's pending purchases as an ordered list of product/supplier items"""

    __tablename__ = "shopping_lists"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True
    )
    items = Column(JSON, nullable=False, default=list)  # [{productId, quantity, supplierId}]
    status = Column(Text, nullable=False, default=ShoppingListStatus.DRAFT.value)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    user = relationship("User", back_populates="shopping_lists")

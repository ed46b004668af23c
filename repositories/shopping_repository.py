"""
Shopping List Repository - Data access layer for shopping list operations
"""

from typing import List, Optional
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import ShoppingList


class ShoppingListRepository(BaseRepository[ShoppingList]):
    """Repository for shopping list data access"""

    def __init__(self, db: Session):
        super().__init__(db, ShoppingList)

    def get_all(self, user_id: Optional[int] = None) -> List[ShoppingList]:
        """Get all shopping lists, newest first, optionally for one user"""
        query = self.db.query(ShoppingList)
        if user_id is not None:
            query = query.filter(ShoppingList.user_id == user_id)
        return query.order_by(ShoppingList.id.desc()).all()

"""
Recipe Repository - Data access layer for recipe operations
"""

from sqlalchemy import delete
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Recipe


class RecipeRepository(BaseRepository[Recipe]):
    """Repository for recipe data access"""

    def __init__(self, db: Session):
        super().__init__(db, Recipe)

    def delete_by_id(self, recipe_id: int) -> int:
        """Delete without an existence check; returns the number of rows removed"""
        result = self.db.execute(delete(Recipe).where(Recipe.id == recipe_id))
        self.db.commit()
        return result.rowcount or 0

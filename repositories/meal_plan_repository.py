"""
Meal Plan Repository - Data access layer for meal plan operations
"""

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import MealPlan


class MealPlanRepository(BaseRepository[MealPlan]):
    """Repository for meal plan data access"""

    def __init__(self, db: Session):
        super().__init__(db, MealPlan)

    def get_by_user_and_date(
        self, user_id: Optional[int], plan_date: date
    ) -> Optional[MealPlan]:
        """Get the plan for a (user, date) pair; a null user is matched with IS NULL"""
        query = self.db.query(MealPlan).filter(MealPlan.date == plan_date)
        if user_id is None:
            query = query.filter(MealPlan.user_id.is_(None))
        else:
            query = query.filter(MealPlan.user_id == user_id)
        return query.first()

    def search(
        self,
        user_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> List[MealPlan]:
        """List plans ordered by date, optionally filtered by user and date range"""
        query = self.db.query(MealPlan)
        if user_id is not None:
            query = query.filter(MealPlan.user_id == user_id)
        if date_from is not None:
            query = query.filter(MealPlan.date >= date_from)
        if date_to is not None:
            query = query.filter(MealPlan.date <= date_to)
        return query.order_by(MealPlan.date, MealPlan.id).all()

"""
Meal planning models.
"""

from sqlalchemy import (
    Column,
    Integer,
    Date,
    TIMESTAMP,
    ForeignKey,
    JSON,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from domain.models.database import Base


class MealPlan(Base):
    """Recipes assigned to the breakfast, lunch and dinner slots of one day"""

    __tablename__ = "meal_plans"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True
    )
    date = Column(Date, nullable=False)
    recipes = Column(JSON, nullable=False, default=dict)  # {breakfast, lunch, dinner}
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="meal_plans")

    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_meal_plan_user_date"),
    )

from __future__ import annotations

from datetime import date as Date, datetime
from typing import Optional

from pydantic import Field

from domain.schemas.base import CamelModel


class MealSlots(CamelModel):
    """Recipe id per meal slot; 0 or null leaves the slot empty."""

    breakfast: Optional[int] = None
    lunch: Optional[int] = None
    dinner: Optional[int] = None


class MealPlanCreate(CamelModel):
    date: Date
    recipes: MealSlots = Field(default_factory=MealSlots)
    user_id: Optional[int] = None


class MealPlanUpdate(CamelModel):
    """Allow-listed PATCH body: only the date and the slot assignments are mutable."""

    date: Optional[Date] = None
    recipes: Optional[MealSlots] = None


class MealPlanResponse(CamelModel):
    id: int
    user_id: Optional[int] = None
    date: Date
    recipes: MealSlots
    created_at: Optional[datetime] = None

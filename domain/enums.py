"""
Domain enums for MealMinder application.
Contains all enumeration types used across the domain models.
"""

import enum


class MealSlot(str, enum.Enum):
    """Meal slots a plan can assign a recipe to"""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


class ShoppingListStatus(str, enum.Enum):
    """Shopping list lifecycle"""

    DRAFT = "draft"
    PENDING = "pending"

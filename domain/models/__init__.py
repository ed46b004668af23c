"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    ping_database,
    get_db_session,
)
from domain.models.user import User
from domain.models.recipe import Recipe
from domain.models.meal_plan import MealPlan
from domain.models.supplier import (
    Supplier,
    Product,
    PriceHistory,
    Transaction,
    OAuthState,
)
from domain.models.shopping import ShoppingList

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "ping_database",
    "get_db_session",
    # User models
    "User",
    # Recipe models
    "Recipe",
    # Meal plan models
    "MealPlan",
    # Supplier catalogue models
    "Supplier",
    "Product",
    "PriceHistory",
    "Transaction",
    "OAuthState",
    # Shopping models
    "ShoppingList",
]

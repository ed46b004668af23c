"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.recipe_repository import RecipeRepository
from repositories.meal_plan_repository import MealPlanRepository
from repositories.supplier_repository import (
    SupplierRepository,
    ProductRepository,
    PriceHistoryRepository,
    TransactionRepository,
    OAuthStateRepository,
)
from repositories.shopping_repository import ShoppingListRepository

__all__ = [
    "BaseRepository",
    "RecipeRepository",
    "MealPlanRepository",
    "SupplierRepository",
    "ProductRepository",
    "PriceHistoryRepository",
    "TransactionRepository",
    "OAuthStateRepository",
    "ShoppingListRepository",
]

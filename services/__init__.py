"""Services package - Business logic layer"""

from services.recipe_service import RecipeService
from services.planner_service import PlannerService
from services.supplier_service import SupplierService
from services.shopping_service import ShoppingService
from services.auth_service import AuthService

# Note: scraper contains module-level functions, not a class

__all__ = [
    "RecipeService",
    "PlannerService",
    "SupplierService",
    "ShoppingService",
    "AuthService",
]

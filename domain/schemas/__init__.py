"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.recipe_schemas import (
    Ingredient,
    InstructionStep,
    NutritionInfo,
    RecipeCreate,
    RecipeResponse,
)
from domain.schemas.plan_schemas import (
    MealSlots,
    MealPlanCreate,
    MealPlanUpdate,
    MealPlanResponse,
)
from domain.schemas.supplier_schemas import (
    SupplierCreate,
    SupplierResponse,
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    PriceComparisonEntry,
    StockStatus,
    PriceHistoryEntry,
)
from domain.schemas.shopping_schemas import (
    ShoppingListItem,
    ShoppingListCreate,
    ShoppingListUpdate,
    ShoppingListResponse,
    ShoppingListSummary,
    SummaryLine,
    SubmitResponse,
    TransactionResponse,
)
from domain.schemas.auth_schemas import OAuthStartResponse, OAuthCallbackResponse

__all__ = [
    # Recipe schemas
    "Ingredient",
    "InstructionStep",
    "NutritionInfo",
    "RecipeCreate",
    "RecipeResponse",
    # Meal plan schemas
    "MealSlots",
    "MealPlanCreate",
    "MealPlanUpdate",
    "MealPlanResponse",
    # Supplier and product schemas
    "SupplierCreate",
    "SupplierResponse",
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "PriceComparisonEntry",
    "StockStatus",
    "PriceHistoryEntry",
    # Shopping list schemas
    "ShoppingListItem",
    "ShoppingListCreate",
    "ShoppingListUpdate",
    "ShoppingListResponse",
    "ShoppingListSummary",
    "SummaryLine",
    "SubmitResponse",
    "TransactionResponse",
    # OAuth schemas
    "OAuthStartResponse",
    "OAuthCallbackResponse",
]

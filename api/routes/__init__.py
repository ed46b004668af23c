"""API routes package"""

from . import recipes, meal_plans, suppliers, products, shopping, auth, health

__all__ = ["recipes", "meal_plans", "suppliers", "products", "shopping", "auth", "health"]

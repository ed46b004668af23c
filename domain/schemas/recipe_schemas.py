"""Pydantic schemas for recipes."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field

from domain.schemas.base import CamelModel


class Ingredient(CamelModel):
    """Embedded ingredient in a recipe."""

    name: str
    amount: float
    unit: str


class InstructionStep(CamelModel):
    """Embedded step in a recipe."""

    step_number: int
    content: str
    rich_text: str = ""


class NutritionInfo(CamelModel):
    """Macros plus optional vitamin and mineral maps."""

    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    vitamins: Dict[str, float] = Field(default_factory=dict)
    minerals: Dict[str, float] = Field(default_factory=dict)


class RecipeCreate(CamelModel):
    """
    Recipe payload as sent by the recipe form or the scraper.

    Only name and description are checked strictly; the remaining fields are
    accepted loosely and normalised by RecipeService.normalize_payload.
    """

    name: str = Field(..., min_length=1)
    description: str
    ingredients: Optional[Any] = None
    instructions: Optional[Any] = None
    nutrition_info: Optional[Any] = None
    prep_time: Optional[Any] = None
    cook_time: Optional[Any] = None
    total_time: Optional[Any] = None
    image_url: Optional[str] = None
    user_id: Optional[int] = None


class RecipeResponse(CamelModel):
    id: int
    name: str
    description: str
    ingredients: List[Ingredient]
    instructions: List[InstructionStep]
    nutrition_info: NutritionInfo
    image_url: Optional[str] = None
    prep_time: int
    cook_time: int
    total_time: int
    user_id: Optional[int] = None
    created_at: Optional[datetime] = None

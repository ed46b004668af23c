"""Recipe service"""

import logging
import math
from typing import Any, Dict, List, Mapping

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.exceptions import MealMinderError, NotFoundError, ServiceValidationError
from domain.models import Recipe
from domain.schemas.recipe_schemas import RecipeCreate
from repositories import RecipeRepository

logger = logging.getLogger("mealminder.recipes")

MACROS = ("calories", "protein", "carbs", "fat")


def _to_number(value: Any, default: float = 0) -> float:
    """Coerce loosely typed input to a finite number, falling back to default."""
    if value is None or value == "" or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return int(number) if number.is_integer() else number


def _to_int(value: Any, default: int = 0) -> int:
    number = _to_number(value, default)
    return int(number) if number else default


def _to_text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    return str(value)


def _numeric_map(value: Any) -> Dict[str, float]:
    """Keep only entries whose values can be read as numbers"""
    if not isinstance(value, Mapping):
        return {}
    result = {}
    for key, raw in value.items():
        number = _to_number(raw, default=None)
        if number is not None:
            result[str(key)] = number
    return result


class RecipeService:
    """Business logic for recipes."""

    @staticmethod
    def normalize_ingredients(raw: Any) -> List[Dict[str, Any]]:
        if not isinstance(raw, list):
            return []
        return [
            {
                "name": _to_text(item.get("name")),
                "amount": _to_number(item.get("amount")),
                "unit": _to_text(item.get("unit")) or "g",
            }
            for item in raw
            if isinstance(item, Mapping)
        ]

    @staticmethod
    def normalize_instructions(raw: Any) -> List[Dict[str, Any]]:
        if not isinstance(raw, list):
            return []
        steps = []
        for index, item in enumerate(raw):
            if isinstance(item, str):
                item = {"content": item}
            if not isinstance(item, Mapping):
                continue
            steps.append(
                {
                    "stepNumber": _to_int(item.get("stepNumber"), default=index + 1),
                    "content": _to_text(item.get("content")),
                    "richText": _to_text(item.get("richText")),
                }
            )
        return steps

    @staticmethod
    def normalize_nutrition(raw: Any) -> Dict[str, Any]:
        raw = raw if isinstance(raw, Mapping) else {}
        nutrition: Dict[str, Any] = {macro: _to_number(raw.get(macro)) for macro in MACROS}
        nutrition["vitamins"] = _numeric_map(raw.get("vitamins"))
        nutrition["minerals"] = _numeric_map(raw.get("minerals"))
        return nutrition

    @staticmethod
    def normalize_payload(payload: RecipeCreate) -> Dict[str, Any]:
        """
        Turn a loosely typed recipe payload into column values.

        Every nutrition field ends up numeric (0 when missing), step numbers
        fall back to their position, and totalTime defaults to prep + cook.
        """
        prep_time = max(_to_int(payload.prep_time), 0)
        cook_time = max(_to_int(payload.cook_time), 0)
        total_time = max(_to_int(payload.total_time), 0) or prep_time + cook_time

        return {
            "name": payload.name.strip(),
            "description": payload.description,
            "ingredients": RecipeService.normalize_ingredients(payload.ingredients),
            "instructions": RecipeService.normalize_instructions(payload.instructions),
            "nutrition_info": RecipeService.normalize_nutrition(payload.nutrition_info),
            "prep_time": prep_time,
            "cook_time": cook_time,
            "total_time": total_time,
            "image_url": payload.image_url or None,
            "user_id": payload.user_id or None,
        }

    @staticmethod
    def list_recipes(db: Session) -> List[Recipe]:
        return RecipeRepository(db).get_all()

    @staticmethod
    def get_recipe(db: Session, recipe_id: int) -> Recipe:
        recipe = RecipeRepository(db).get_by_id(recipe_id)
        if not recipe:
            raise NotFoundError(f"Recipe {recipe_id} not found")
        return recipe

    @staticmethod
    def create_recipe(db: Session, payload: RecipeCreate) -> Recipe:
        values = RecipeService.normalize_payload(payload)
        if not values["name"]:
            raise ServiceValidationError(
                "Invalid recipe data",
                details={"errors": [{"field": "name", "message": "must not be blank"}]},
            )
        try:
            recipe = RecipeRepository(db).create(Recipe(**values))
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"recipe_create_failed name={values['name']!r} error={e}")
            raise MealMinderError("Failed to save recipe") from e

        logger.info(
            f"recipe_created recipe_id={recipe.id} "
            f"ingredients={len(values['ingredients'])} "
            f"steps={len(values['instructions'])}"
        )
        return recipe

    @staticmethod
    def delete_recipe(db: Session, recipe_id: int) -> int:
        """Delete by id; a missing id is not an error"""
        removed = RecipeRepository(db).delete_by_id(recipe_id)
        logger.info(f"recipe_deleted recipe_id={recipe_id} removed={removed}")
        return removed

"""
Recipe routes - list, create and delete recipes.
"""

from typing import List
import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from api.dependencies import get_db, require_json
from api.responses import ERROR_RESPONSES
from domain.schemas.recipe_schemas import RecipeCreate, RecipeResponse
from services.recipe_service import RecipeService

router = APIRouter(prefix="/recipes", tags=["Recipes"], responses=ERROR_RESPONSES)
logger = logging.getLogger("mealminder.api.recipes")


@router.get("", response_model=List[RecipeResponse])
def list_recipes(db: Session = Depends(get_db)):
    """List all recipes"""
    return [RecipeResponse.model_validate(r) for r in RecipeService.list_recipes(db)]


@router.get("/{recipe_id}", response_model=RecipeResponse)
def get_recipe(recipe_id: int, db: Session = Depends(get_db)):
    """Get a single recipe by ID"""
    return RecipeResponse.model_validate(RecipeService.get_recipe(db, recipe_id))


@router.post(
    "",
    response_model=RecipeResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_json)],
)
def create_recipe(payload: RecipeCreate, db: Session = Depends(get_db)):
    """
    Create a recipe from the recipe form or the recipe scraper.

    - **name**, **description**: required
    - **ingredients**: list of {name, amount, unit}; amounts coerced to numbers
    - **instructions**: list of {stepNumber, content, richText}; missing step numbers follow list order
    - **nutritionInfo**: macros default to 0, vitamin/mineral maps keep numeric values only
    - **prepTime**, **cookTime**, **totalTime**: minutes; totalTime defaults to prep + cook
    """
    logger.info("Creating recipe %r", payload.name)
    recipe = RecipeService.create_recipe(db, payload)
    return RecipeResponse.model_validate(recipe)


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recipe(recipe_id: int, db: Session = Depends(get_db)):
    """Delete a recipe. Deleting an id that does not exist also answers 204."""
    RecipeService.delete_recipe(db, recipe_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

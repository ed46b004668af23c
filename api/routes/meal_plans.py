from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from api.dependencies import get_db, require_json
from api.responses import ERROR_RESPONSES
from app.config import settings
from domain.schemas.plan_schemas import MealPlanCreate, MealPlanResponse, MealPlanUpdate
from services.planner_service import PlannerService

router = APIRouter(prefix="/meal-plans", tags=["Meal Planning"], responses=ERROR_RESPONSES)
logger = logging.getLogger("mealminder.api.meal_plans")


@router.get("", response_model=List[MealPlanResponse])
def list_meal_plans(
    user_id: Optional[int] = Query(default=None, alias="userId"),
    date_from: Optional[date] = Query(default=None, alias="from"),
    date_to: Optional[date] = Query(default=None, alias="to"),
    db: Session = Depends(get_db),
):
    """
    List meal plans ordered by date.

    Optional filters: **userId**, and an inclusive **from**/**to** date range
    for calendar views.
    """
    plans = PlannerService.list_plans(db, user_id, date_from, date_to)
    return [MealPlanResponse.model_validate(p) for p in plans]


@router.post(
    "",
    response_model=MealPlanResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_json)],
)
def create_meal_plan(
    payload: MealPlanCreate, response: Response, db: Session = Depends(get_db)
):
    """
    Assign recipes to a day.

    There is one plan per user and date: posting for a date that already has
    a plan merges the given slots into it and answers 200 instead of 201.
    """
    plan, created = PlannerService.upsert_plan(db, payload)
    if not created:
        response.status_code = status.HTTP_200_OK
    else:
        response.headers["Location"] = f"{settings.api_prefix}{router.prefix}/{plan.id}"
    return MealPlanResponse.model_validate(plan)


@router.patch(
    "/{plan_id}",
    response_model=MealPlanResponse,
    dependencies=[Depends(require_json)],
)
def update_meal_plan(plan_id: int, update: MealPlanUpdate, db: Session = Depends(get_db)):
    """
    Update a plan's **date** and/or **recipes** slots. Other fields in the
    body are ignored; an explicit null clears a slot.
    """
    plan = PlannerService.update_plan(db, plan_id, update)
    return MealPlanResponse.model_validate(plan)


@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_meal_plan(plan_id: int, db: Session = Depends(get_db)):
    """Delete a meal plan"""
    PlannerService.delete_plan(db, plan_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

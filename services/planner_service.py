"""Meal plan service"""

import logging
from datetime import date
from typing import Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import ConflictError, NotFoundError, ServiceValidationError
from domain.enums import MealSlot
from domain.models import MealPlan, User
from domain.schemas.plan_schemas import MealPlanCreate, MealPlanUpdate, MealSlots
from repositories import MealPlanRepository

logger = logging.getLogger("mealminder.planner")


def _empty_slots() -> Dict[str, Optional[int]]:
    return {slot.value: None for slot in MealSlot}


def _merge_slots(
    current: Optional[Dict[str, Optional[int]]], update: MealSlots
) -> Dict[str, Optional[int]]:
    """
    Merge the slots present in the update into the current assignment.

    Slots the client did not send are kept; an explicit null or 0 clears one.
    """
    merged = _empty_slots()
    merged.update({k: v for k, v in (current or {}).items() if k in merged})
    for slot in update.model_fields_set:
        merged[slot] = getattr(update, slot) or None
    return merged


class PlannerService:
    """Business logic for per-day meal plans."""

    @staticmethod
    def list_plans(
        db: Session,
        user_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> List[MealPlan]:
        return MealPlanRepository(db).search(user_id, date_from, date_to)

    @staticmethod
    def upsert_plan(db: Session, payload: MealPlanCreate) -> Tuple[MealPlan, bool]:
        """
        Assign recipes to a day. There is at most one plan per (user, date):
        an existing plan gets the provided slots merged in.

        Returns a tuple of (MealPlan, created_flag).
        """
        if payload.user_id is not None and db.get(User, payload.user_id) is None:
            raise ServiceValidationError(
                f"User {payload.user_id} does not exist",
                details={"userId": payload.user_id},
            )

        repo = MealPlanRepository(db)
        plan = repo.get_by_user_and_date(payload.user_id, payload.date)

        if plan:
            plan.recipes = _merge_slots(plan.recipes, payload.recipes)
            repo.update(plan)
            logger.info(f"meal_plan_merged plan_id={plan.id} date={plan.date}")
            return plan, False

        plan = MealPlan(
            user_id=payload.user_id,
            date=payload.date,
            recipes=_merge_slots(None, payload.recipes),
        )
        try:
            repo.create(plan)
        except IntegrityError:
            db.rollback()
            raise ConflictError(
                f"A meal plan already exists for {payload.date}",
                details={"date": payload.date.isoformat(), "userId": payload.user_id},
            )
        logger.info(f"meal_plan_created plan_id={plan.id} date={plan.date}")
        return plan, True

    @staticmethod
    def update_plan(db: Session, plan_id: int, update: MealPlanUpdate) -> MealPlan:
        """Apply an allow-listed partial update (date and/or recipe slots)"""
        repo = MealPlanRepository(db)
        plan = repo.get_by_id(plan_id)
        if not plan:
            raise NotFoundError(f"Meal plan {plan_id} not found")

        if update.date is not None and update.date != plan.date:
            clash = repo.get_by_user_and_date(plan.user_id, update.date)
            if clash:
                raise ConflictError(
                    f"A meal plan already exists for {update.date}",
                    details={"conflictingPlanId": clash.id},
                )
            plan.date = update.date

        if update.recipes is not None:
            plan.recipes = _merge_slots(plan.recipes, update.recipes)

        repo.update(plan)
        logger.info(
            f"meal_plan_updated plan_id={plan_id} fields={sorted(update.model_fields_set)}"
        )
        return plan

    @staticmethod
    def delete_plan(db: Session, plan_id: int) -> None:
        if not MealPlanRepository(db).delete(plan_id):
            raise NotFoundError(f"Meal plan {plan_id} not found")
        logger.info(f"meal_plan_deleted plan_id={plan_id}")

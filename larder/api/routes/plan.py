from datetime import date
from typing import Optional

from fastapi import APIRouter, Query

from larder.infra.Plan_Repository import PlanRepository
from larder.utilities.validators import PlanMealInput

router = APIRouter(prefix="/api/plan", tags=["plan"])


@router.post("/meal")
def plan_meal(payload: PlanMealInput):
    repo = PlanRepository()
    if payload.additional:
        meal = repo.add_additional_item(payload.day, payload.slot, payload.recipe_id)
    else:
        meal = repo.add_meal(payload.day, payload.slot, payload.recipe_id, payload.user_id)
    return {"ok": True, "meal": meal.to_dict()}


@router.get("/meals")
def list_meals(start: date, end: date, user_id: Optional[int] = Query(default=None, alias="userId")):
    if end < start:
        raise ValueError("end date must not be before start date")
    meals = PlanRepository().get_meals(start, end, user_id)
    return {"ok": True, "meals": [m.to_dict() for m in meals]}

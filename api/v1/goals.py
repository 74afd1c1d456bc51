from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from core.nutrition_calc import InvalidProfile, NutritionGoalCalculator
from api.v1.schemas import GoalSetOut, ProfileIn

router = APIRouter()
_calc = NutritionGoalCalculator()
_LOG = logging.getLogger(__name__)


@router.post(
    "",
    response_model=GoalSetOut,
    status_code=status.HTTP_200_OK,
    summary="Compute daily calorie + macro goals for a profile",
)
async def compute(body: ProfileIn) -> GoalSetOut:
    try:
        goals = _calc.goals(body.to_profile())
    except InvalidProfile as exc:
        _LOG.info("rejected profile: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return GoalSetOut.from_goals(goals)

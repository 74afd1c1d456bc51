# api/v1/dashboard.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status

from core.dashboard import DashboardSummary, build_summary
from core.nutrition_calc import InvalidProfile, NutritionGoalCalculator
from services.onboarding import (
    OnboardingClient,
    OnboardingUnavailable,
    get_onboarding_client,
)

router = APIRouter()
_calc = NutritionGoalCalculator()


def _bearer(token: str | None, authorization: str | None) -> str | None:
    """`?token=` (login redirect) wins over the Authorization header."""
    if token:
        return token
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[7:].strip() or None
    return None


@router.get(
    "/me",
    response_model=DashboardSummary,
    status_code=status.HTTP_200_OK,
    summary="Goals and today's counters for the signed-in user",
)
async def my_dashboard(
    token: str | None = Query(None),
    authorization: str | None = Header(None),
    client: OnboardingClient = Depends(get_onboarding_client),
) -> DashboardSummary:
    try:
        record = await client.fetch_me(_bearer(token, authorization))
    except OnboardingUnavailable as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    try:
        goals = _calc.goals(record.to_profile())
    except InvalidProfile as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    name = (record.user.name if record.user else None) or "User"
    return build_summary(goals, name=name)

"""
core/dashboard.py
────────────────────────────────────────────────────────────────────────
Everything the dashboard shows on first load, built around a GoalSet.

Nothing is tracked yet, so every "current" counter starts at zero. The
weekly calorie chart is a placeholder series jittered ±10 % around the goal.
"""

from __future__ import annotations

import logging

import numpy as np
from pydantic import BaseModel

from core.nutrition_calc import GoalSet, round_half_away

_LOG = logging.getLogger(__name__)

WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
WATER_GOAL_GLASSES = 8
STEPS_GOAL = 10_000


class Progress(BaseModel):
    current: int = 0
    goal: int


class Macros(BaseModel):
    protein: Progress
    carbs: Progress
    fat: Progress
    fiber: Progress


class DayCalories(BaseModel):
    day: str
    calories: int


class Sleep(BaseModel):
    hours: float = 0
    quality: str = ""


class HeartRate(BaseModel):
    current: int = 0
    min: int = 0
    max: int = 0


class DashboardSummary(BaseModel):
    name: str
    calorie_goal: int
    current_calories: int = 0
    macros: Macros
    weekly_calories: list[DayCalories]
    activities: list[dict] = []
    water: Progress
    sleep: Sleep = Sleep()
    heart_rate: HeartRate = HeartRate()
    steps: Progress


def mock_weekly_calories(
    calorie_goal: int, rng: np.random.Generator | None = None
) -> list[DayCalories]:
    rng = rng if rng is not None else np.random.default_rng()
    factors = rng.uniform(0.9, 1.1, size=len(WEEKDAYS))
    return [
        DayCalories(day=day, calories=round_half_away(calorie_goal * f))
        for day, f in zip(WEEKDAYS, factors)
    ]


def build_summary(
    goals: GoalSet,
    name: str = "User",
    rng: np.random.Generator | None = None,
) -> DashboardSummary:
    _LOG.debug("building dashboard summary for %s", name)
    return DashboardSummary(
        name=name,
        calorie_goal=goals.calorie_goal,
        macros=Macros(
            protein=Progress(goal=goals.protein_goal_g),
            carbs=Progress(goal=goals.carbs_goal_g),
            fat=Progress(goal=goals.fat_goal_g),
            fiber=Progress(goal=goals.fiber_goal_g),
        ),
        weekly_calories=mock_weekly_calories(goals.calorie_goal, rng),
        water=Progress(goal=WATER_GOAL_GLASSES),
        steps=Progress(goal=STEPS_GOAL),
    )

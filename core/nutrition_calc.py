"""
core/nutrition_calc.py
────────────────────────────────────────────────────────────────────────
Turns onboarding answers into daily calorie + macro goals:

1. Unit normalisation (inches → cm, lbs → kg)
2. Age resolution   (explicit age → date of birth → 30)
3. BMR  (Mifflin–St Jeor)
4. TDEE (activity multiplier) + goal adjustment
5. Calorie goal (floor 1200 kcal) and protein / fat / carbs / fiber grams

Macros are derived one after another from the *already rounded* values:
carbs take whatever calories protein and fat leave behind.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date
from enum import Enum

_LOG = logging.getLogger(__name__)

CM_PER_INCH = 2.54
LBS_PER_KG = 2.20462

DEFAULT_AGE = 30
MIN_CALORIES = 1200

KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9
FAT_SHARE = 0.25
FIBER_G_PER_1000_KCAL = 14


class InvalidProfile(ValueError):
    """Height or weight is not a positive finite number after conversion."""


# ──────────────────────────────────────────────────────────────────────
#  Enums (values are the strings stored by the onboarding service)
# ──────────────────────────────────────────────────────────────────────
class _TotalEnum(str, Enum):
    """str-Enum whose `parse()` never fails: unknown input → default member."""

    @classmethod
    def default(cls) -> "_TotalEnum":
        """Fallback member; every subclass must override this."""
        raise NotImplementedError

    @classmethod
    def parse(cls, value: object):
        if isinstance(value, cls):
            return value
        for member in cls:
            if member.value == value:
                return member
        return cls.default()


class HeightUnit(_TotalEnum):
    cm = "cm"
    inches = "inches"

    @classmethod
    def default(cls) -> "HeightUnit":
        return cls.cm


class WeightUnit(_TotalEnum):
    kg = "kg"
    lbs = "lbs"

    @classmethod
    def default(cls) -> "WeightUnit":
        return cls.kg


class Gender(_TotalEnum):
    male = "Male"
    female = "Female"
    other = "Other"

    @classmethod
    def default(cls) -> "Gender":
        return cls.male


class ActivityLevel(_TotalEnum):
    sedentary = "Sedentary"
    lightly_active = "Lightly Active"
    moderately_active = "Moderately Active"
    very_active = "Very Active"

    @classmethod
    def default(cls) -> "ActivityLevel":
        return cls.sedentary


class HealthGoal(_TotalEnum):
    weight_loss = "Weight Loss"
    weight_gain = "Weight Gain"
    improve_fitness = "Improve Fitness"
    maintain = "Maintain"

    @classmethod
    def default(cls) -> "HealthGoal":
        return cls.maintain


ACTIVITY_FACTORS: dict[ActivityLevel, float] = {
    ActivityLevel.sedentary: 1.2,
    ActivityLevel.lightly_active: 1.375,
    ActivityLevel.moderately_active: 1.55,
    ActivityLevel.very_active: 1.725,
}

GOAL_KCAL_ADJUSTMENT: dict[HealthGoal, float] = {
    HealthGoal.weight_loss: -500,
    HealthGoal.weight_gain: 500,
    HealthGoal.improve_fitness: 250,
}

PROTEIN_G_PER_KG: dict[HealthGoal, float] = {
    HealthGoal.weight_loss: 2.0,
    HealthGoal.weight_gain: 1.8,
}
DEFAULT_PROTEIN_G_PER_KG = 1.6


# ──────────────────────────────────────────────────────────────────────
#  Input / output
# ──────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class Profile:
    height_value: float
    weight_value: float
    height_unit: HeightUnit = HeightUnit.cm
    weight_unit: WeightUnit = WeightUnit.kg
    date_of_birth: date | None = None
    age_years: int | None = None     # wins over date_of_birth when non-zero
    gender: Gender = Gender.male
    activity_level: ActivityLevel = ActivityLevel.sedentary
    health_goal: HealthGoal = HealthGoal.maintain


@dataclass(frozen=True)
class GoalSet:
    calorie_goal: int
    protein_goal_g: int
    carbs_goal_g: int
    fat_goal_g: int
    fiber_goal_g: int

    def as_dict(self) -> dict[str, int]:
        return {
            "calorie_goal": self.calorie_goal,
            "protein_goal_g": self.protein_goal_g,
            "carbs_goal_g": self.carbs_goal_g,
            "fat_goal_g": self.fat_goal_g,
            "fiber_goal_g": self.fiber_goal_g,
        }


def round_half_away(x: float) -> int:
    """Arithmetic rounding: 2.5 → 3, -2.5 → -3 (unlike built-in round())."""
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def age_from_dob(dob: date, today: date | None = None) -> int:
    """Whole calendar years between `dob` and `today`, in either direction."""
    today = today or date.today()
    start, end = (dob, today) if dob <= today else (today, dob)
    years = end.year - start.year
    if (end.month, end.day) < (start.month, start.day):
        years -= 1
    return years


# ──────────────────────────────────────────────────────────────────────
#  Calculator
# ──────────────────────────────────────────────────────────────────────
class NutritionGoalCalculator:
    """Pure and stateless; one instance can serve any number of callers."""

    # --------------- public entrypoint --------------------------------
    def goals(self, p: Profile, today: date | None = None) -> GoalSet:
        weight_kg = self.weight_kg(p)
        try:
            tdee_val = self.adjusted_tdee(p, today)
        except OverflowError as exc:
            raise InvalidProfile(f"profile out of range: {exc}") from exc
        kcal = max(MIN_CALORIES, round_half_away(_finite("energy expenditure", tdee_val)))

        per_kg = PROTEIN_G_PER_KG.get(p.health_goal, DEFAULT_PROTEIN_G_PER_KG)
        protein_g = round_half_away(_finite("protein", per_kg * weight_kg))
        fat_g = round_half_away(FAT_SHARE * kcal / KCAL_PER_G_FAT)

        # remainder method on the rounded protein / fat grams
        left = kcal - (protein_g * KCAL_PER_G_PROTEIN + fat_g * KCAL_PER_G_FAT)
        carbs_g = max(0, round_half_away(left / KCAL_PER_G_CARBS))

        fiber_g = round_half_away(kcal / 1000 * FIBER_G_PER_1000_KCAL)

        goals = GoalSet(
            calorie_goal=kcal,
            protein_goal_g=protein_g,
            carbs_goal_g=carbs_g,
            fat_goal_g=fat_g,
            fiber_goal_g=fiber_g,
        )
        _LOG.debug("goals %s", goals)
        return goals

    # --------------- units / age --------------------------------------
    def height_cm(self, p: Profile) -> float:
        h = p.height_value * CM_PER_INCH if p.height_unit == HeightUnit.inches else p.height_value
        return _positive("height", h)

    def weight_kg(self, p: Profile) -> float:
        w = p.weight_value / LBS_PER_KG if p.weight_unit == WeightUnit.lbs else p.weight_value
        return _positive("weight", w)

    def age(self, p: Profile, today: date | None = None) -> int:
        if p.age_years:
            return p.age_years
        if p.date_of_birth is not None:
            resolved = age_from_dob(p.date_of_birth, today)
            if resolved:
                return resolved
        return DEFAULT_AGE

    # --------------- BMR / TDEE ---------------------------------------
    def bmr(self, p: Profile, today: date | None = None) -> float:
        base = 10 * self.weight_kg(p) + 6.25 * self.height_cm(p) - 5 * self.age(p, today)
        # "Other" shares the male constant
        return base + (-161 if p.gender == Gender.female else 5)

    def tdee(self, p: Profile, today: date | None = None) -> float:
        factor = ACTIVITY_FACTORS.get(p.activity_level, 1.2)
        return self.bmr(p, today) * factor

    def adjusted_tdee(self, p: Profile, today: date | None = None) -> float:
        tdee_val = self.tdee(p, today)
        adjusted = tdee_val + GOAL_KCAL_ADJUSTMENT.get(p.health_goal, 0)
        _LOG.debug("tdee=%.2f goal=%s adjusted=%.2f", tdee_val, p.health_goal.value, adjusted)
        return adjusted


def _positive(name: str, value: float) -> float:
    if not math.isfinite(value) or value <= 0:
        raise InvalidProfile(f"{name} must be a positive number, got {value!r}")
    return value


def _finite(name: str, value: float) -> float:
    # huge but finite inputs can still overflow the formula
    if not math.isfinite(value):
        raise InvalidProfile(f"{name} overflowed for this profile")
    return value


_CALC = NutritionGoalCalculator()


def compute_goals(profile: Profile, today: date | None = None) -> GoalSet:
    return _CALC.goals(profile, today)

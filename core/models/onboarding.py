from __future__ import annotations

import math
from datetime import date

from pydantic import BaseModel, ConfigDict, field_validator

from core.nutrition_calc import (
    ActivityLevel,
    Gender,
    HealthGoal,
    HeightUnit,
    Profile,
    WeightUnit,
)


# ───────── best-effort coercions (bad values degrade, never reject) ───
def _lenient_number(v) -> float | None:
    if v is None or isinstance(v, bool):
        return None
    try:
        return float(v)
    except (TypeError, ValueError):
        return float("nan")      # rejected later as InvalidProfile


def _lenient_text(v) -> str | None:
    # non-strings can never name an enum member → default
    return v if isinstance(v, str) else None


class OnboardingAnswers(BaseModel):
    height: float | None = None
    heightUnit: str | None = None        # "cm" | "inches"
    weight: float | None = None
    weightUnit: str | None = None        # "kg" | "lbs"
    dob: date | None = None
    activityLevel: str | None = None
    healthGoal: str | None = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("height", "weight", mode="before")
    @classmethod
    def _number(cls, v):
        return _lenient_number(v)

    @field_validator("heightUnit", "weightUnit", "activityLevel", "healthGoal", mode="before")
    @classmethod
    def _text(cls, v):
        return _lenient_text(v)

    @field_validator("dob", mode="before")
    @classmethod
    def _date_part(cls, v):
        if isinstance(v, date):
            return v
        if not isinstance(v, str):
            return None
        # the profile service stores full ISO timestamps
        try:
            return date.fromisoformat(v.strip()[:10])
        except ValueError:
            return None


class OnboardingUser(BaseModel):
    name: str | None = None
    age: int | None = None
    gender: str | None = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("age", mode="before")
    @classmethod
    def _whole_years(cls, v):
        n = _lenient_number(v)
        if n is None or not math.isfinite(n):
            return None
        return int(n)

    @field_validator("name", "gender", mode="before")
    @classmethod
    def _text(cls, v):
        return _lenient_text(v)


class OnboardingRecord(BaseModel):
    """Body of `GET /onboarding/me` on the profile service."""

    onboarding: OnboardingAnswers
    user: OnboardingUser | None = None

    model_config = ConfigDict(extra="ignore")

    def to_profile(self) -> Profile:
        ob, usr = self.onboarding, self.user or OnboardingUser()
        return Profile(
            # missing numbers surface as InvalidProfile in the calculator
            height_value=ob.height if ob.height is not None else float("nan"),
            weight_value=ob.weight if ob.weight is not None else float("nan"),
            height_unit=HeightUnit.parse(ob.heightUnit),
            weight_unit=WeightUnit.parse(ob.weightUnit),
            date_of_birth=ob.dob,
            age_years=usr.age,
            gender=Gender.parse(usr.gender),
            activity_level=ActivityLevel.parse(ob.activityLevel),
            health_goal=HealthGoal.parse(ob.healthGoal),
        )

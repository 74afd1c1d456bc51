from __future__ import annotations
from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from core.nutrition_calc import (
    ActivityLevel,
    Gender,
    GoalSet,
    HealthGoal,
    HeightUnit,
    Profile,
    WeightUnit,
)


class ProfileIn(BaseModel):
    height_value: float
    height_unit: str = Field("cm", examples=["cm", "inches"])
    weight_value: float
    weight_unit: str = Field("kg", examples=["kg", "lbs"])
    date_of_birth: date | None = None
    age_years: int | None = None
    gender: str = Field("Male", examples=["Male", "Female", "Other"])
    activity_level: str = Field(
        "Sedentary",
        examples=["Sedentary", "Lightly Active", "Moderately Active", "Very Active"],
    )
    health_goal: str = Field(
        "Maintain",
        examples=["Weight Loss", "Weight Gain", "Improve Fitness", "Maintain"],
    )

    def to_profile(self) -> Profile:
        """Unknown enum strings fall back to their defaults."""
        return Profile(
            height_value=self.height_value,
            weight_value=self.weight_value,
            height_unit=HeightUnit.parse(self.height_unit),
            weight_unit=WeightUnit.parse(self.weight_unit),
            date_of_birth=self.date_of_birth,
            age_years=self.age_years,
            gender=Gender.parse(self.gender),
            activity_level=ActivityLevel.parse(self.activity_level),
            health_goal=HealthGoal.parse(self.health_goal),
        )


class GoalSetOut(BaseModel):
    calorie_goal: int
    protein_goal_g: int
    carbs_goal_g: int
    fat_goal_g: int
    fiber_goal_g: int

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_goals(cls, goals: GoalSet) -> "GoalSetOut":
        return cls.model_validate(goals, from_attributes=True)

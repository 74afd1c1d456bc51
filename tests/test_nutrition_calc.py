# tests/test_nutrition_calc.py
from __future__ import annotations

import math
from dataclasses import replace
from datetime import date

import pytest

from core.nutrition_calc import (
    ActivityLevel,
    Gender,
    GoalSet,
    HealthGoal,
    HeightUnit,
    InvalidProfile,
    NutritionGoalCalculator,
    Profile,
    WeightUnit,
    compute_goals,
    round_half_away,
)

calc = NutritionGoalCalculator()
TODAY = date(2026, 10, 19)

MALE_70KG = Profile(
    height_value=175,
    weight_value=70,
    age_years=30,
    gender=Gender.male,
    activity_level=ActivityLevel.moderately_active,
    health_goal=HealthGoal.maintain,
)


# ── BMR / TDEE ───────────────────────────────────────────────────────
def test_bmr_mifflin_male():
    expected = 10 * 70 + 6.25 * 175 - 5 * 30 + 5   # 1648.75
    assert math.isclose(calc.bmr(MALE_70KG), expected, rel_tol=1e-9)


def test_bmr_female_constant():
    female = replace(MALE_70KG, gender=Gender.female)
    assert math.isclose(calc.bmr(female), 1648.75 - 166, rel_tol=1e-9)


def test_other_gender_uses_male_constant():
    other = replace(MALE_70KG, gender=Gender.other)
    assert calc.bmr(other) == calc.bmr(MALE_70KG)
    assert compute_goals(other) == compute_goals(MALE_70KG)


def test_tdee_activity_multiplier():
    assert math.isclose(calc.tdee(MALE_70KG), 1648.75 * 1.55, rel_tol=1e-9)


# ── worked scenarios ─────────────────────────────────────────────────
def test_maintain_scenario():
    assert compute_goals(MALE_70KG) == GoalSet(
        calorie_goal=2556,
        protein_goal_g=112,
        carbs_goal_g=367,
        fat_goal_g=71,
        fiber_goal_g=36,
    )


def test_weight_loss_scenario():
    g = compute_goals(replace(MALE_70KG, health_goal=HealthGoal.weight_loss))
    assert g.calorie_goal == 2056
    assert g.protein_goal_g == 140
    assert g.fat_goal_g == 57          # 514 / 9 = 57.1
    assert g.carbs_goal_g == 246       # (2056 - 560 - 513) / 4 = 245.75
    assert g.fiber_goal_g == 29        # 28.784


@pytest.mark.parametrize(
    "goal, delta, per_kg",
    [
        (HealthGoal.weight_gain, 500, 1.8),
        (HealthGoal.improve_fitness, 250, 1.6),
        (HealthGoal.maintain, 0, 1.6),
    ],
)
def test_goal_adjustment_and_protein(goal, delta, per_kg):
    p = replace(MALE_70KG, health_goal=goal)
    assert math.isclose(calc.adjusted_tdee(p), 2555.5625 + delta, rel_tol=1e-9)
    assert compute_goals(p).protein_goal_g == round_half_away(per_kg * 70)


# ── floors ───────────────────────────────────────────────────────────
def test_calorie_floor():
    tiny = Profile(
        height_value=150,
        weight_value=40,
        age_years=80,
        gender=Gender.female,
        health_goal=HealthGoal.weight_loss,
    )
    g = compute_goals(tiny)
    assert g.calorie_goal == 1200
    assert g.protein_goal_g == 80
    assert g.fat_goal_g == 33
    assert g.carbs_goal_g == 146
    assert g.fiber_goal_g == 17


def test_carbs_never_negative():
    # protein alone eats more calories than the goal leaves after fat
    heavy = Profile(
        height_value=50,
        weight_value=300,
        age_years=100,
        health_goal=HealthGoal.weight_loss,
    )
    g = compute_goals(heavy)
    assert g.calorie_goal == 2881
    assert g.protein_goal_g == 600
    assert g.carbs_goal_g == 0


# ── units ────────────────────────────────────────────────────────────
def test_imperial_matches_metric():
    imperial = replace(
        MALE_70KG,
        height_value=175 / 2.54,
        height_unit=HeightUnit.inches,
        weight_value=70 * 2.20462,
        weight_unit=WeightUnit.lbs,
    )
    assert math.isclose(calc.height_cm(imperial), 175, rel_tol=1e-9)
    assert math.isclose(calc.weight_kg(imperial), 70, rel_tol=1e-9)
    assert abs(compute_goals(imperial).calorie_goal - 2556) <= 1


def test_lbs_conversion_factor():
    p = replace(MALE_70KG, weight_value=220.462, weight_unit=WeightUnit.lbs)
    assert math.isclose(calc.weight_kg(p), 100, rel_tol=1e-9)


# ── age resolution ───────────────────────────────────────────────────
def test_explicit_age_wins_over_dob():
    p = replace(MALE_70KG, age_years=40, date_of_birth=date(2000, 1, 1))
    assert calc.age(p, TODAY) == 40


def test_age_from_dob_whole_years():
    before_birthday = replace(MALE_70KG, age_years=None, date_of_birth=date(1996, 10, 20))
    on_birthday = replace(MALE_70KG, age_years=None, date_of_birth=date(1996, 10, 19))
    assert calc.age(before_birthday, TODAY) == 29
    assert calc.age(on_birthday, TODAY) == 30
    assert compute_goals(on_birthday, TODAY) == compute_goals(MALE_70KG)


def test_missing_age_defaults_to_30():
    assert calc.age(replace(MALE_70KG, age_years=None)) == 30
    # zero counts as "not given"
    assert calc.age(replace(MALE_70KG, age_years=0)) == 30


def test_future_dob_counts_years_until_it():
    p = replace(MALE_70KG, age_years=None, date_of_birth=date(2027, 10, 20))
    assert calc.age(p, TODAY) == 1


# ── permissive enums ─────────────────────────────────────────────────
def test_unknown_strings_fall_back_to_defaults():
    assert ActivityLevel.parse("Extremely Active") is ActivityLevel.sedentary
    assert ActivityLevel.parse(None) is ActivityLevel.sedentary
    assert HealthGoal.parse("Bulk") is HealthGoal.maintain
    assert Gender.parse(None) is Gender.male
    assert HeightUnit.parse("feet") is HeightUnit.cm
    assert WeightUnit.parse("stone") is WeightUnit.kg
    assert ActivityLevel.parse("Very Active") is ActivityLevel.very_active


def test_enum_match_is_exact():
    assert Gender.parse("female") is Gender.male
    assert Gender.parse("Female") is Gender.female


# ── invalid input ────────────────────────────────────────────────────
@pytest.mark.parametrize(
    "field, value",
    [
        ("weight_value", -1),
        ("weight_value", 0),
        ("weight_value", float("nan")),
        ("height_value", 0),
        ("height_value", float("inf")),
    ],
)
def test_invalid_body_measures_raise(field, value):
    with pytest.raises(InvalidProfile):
        compute_goals(replace(MALE_70KG, **{field: value}))


@pytest.mark.parametrize("field", ["weight_value", "height_value"])
def test_overflowing_body_measures_raise(field):
    # finite input, but the energy formula overflows to infinity
    with pytest.raises(InvalidProfile):
        compute_goals(replace(MALE_70KG, **{field: 1e308}))


# ── purity ───────────────────────────────────────────────────────────
def test_idempotent():
    assert compute_goals(MALE_70KG) == compute_goals(MALE_70KG)


def test_round_half_away_from_zero():
    assert round_half_away(0.5) == 1
    assert round_half_away(2.5) == 3
    assert round_half_away(-2.5) == -3
    assert round_half_away(367.25) == 367
    assert round_half_away(35.784) == 36

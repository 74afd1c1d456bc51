"""
scripts/compute_goals.py
────────────────────────────────────────────────────────────────────────
Print daily goals for one profile without running the API:

    python -m scripts.compute_goals --height 175 --weight 70 --age 30 \
        --activity "Moderately Active" --goal Maintain

or straight from a saved `/onboarding/me` response:

    python -m scripts.compute_goals --onboarding me.json
"""
from __future__ import annotations

import json
import sys
from argparse import ArgumentParser
from datetime import date
from pathlib import Path
from typing import Sequence

from dotenv import load_dotenv
load_dotenv()

from core.models.onboarding import OnboardingRecord
from core.nutrition_calc import (
    ActivityLevel,
    Gender,
    HealthGoal,
    HeightUnit,
    InvalidProfile,
    Profile,
    WeightUnit,
    compute_goals,
)


def _parser() -> ArgumentParser:
    ap = ArgumentParser(description="Compute daily calorie + macro goals")
    ap.add_argument("--onboarding", type=Path, help="JSON body of /onboarding/me")
    ap.add_argument("--height", type=float)
    ap.add_argument("--height-unit", default="cm", choices=[u.value for u in HeightUnit])
    ap.add_argument("--weight", type=float)
    ap.add_argument("--weight-unit", default="kg", choices=[u.value for u in WeightUnit])
    ap.add_argument("--age", type=int)
    ap.add_argument("--dob", type=date.fromisoformat, help="YYYY-MM-DD")
    ap.add_argument("--gender", default="Male")
    ap.add_argument("--activity", default="Sedentary")
    ap.add_argument("--goal", default="Maintain")
    return ap


def _profile(args) -> Profile:
    if args.onboarding:
        raw = json.loads(args.onboarding.read_text(encoding="utf-8"))
        return OnboardingRecord.model_validate(raw).to_profile()

    return Profile(
        height_value=args.height if args.height is not None else float("nan"),
        weight_value=args.weight if args.weight is not None else float("nan"),
        height_unit=HeightUnit.parse(args.height_unit),
        weight_unit=WeightUnit.parse(args.weight_unit),
        date_of_birth=args.dob,
        age_years=args.age,
        gender=Gender.parse(args.gender),
        activity_level=ActivityLevel.parse(args.activity),
        health_goal=HealthGoal.parse(args.goal),
    )


def main(argv: Sequence[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    try:
        goals = compute_goals(_profile(args))
    except InvalidProfile as exc:
        print(f"✗ invalid profile: {exc}", file=sys.stderr)
        return 2
    print(json.dumps(goals.as_dict(), indent=2))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())

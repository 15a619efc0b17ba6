# -*- coding: utf-8 -*-
"""Nutrition goals from a profile.

BMR uses the Mifflin-St Jeor equation::

    male:   10 * weight(kg) + 6.25 * height(cm) - 5 * age + 5
    female: 10 * weight(kg) + 6.25 * height(cm) - 5 * age - 161

TDEE multiplies BMR by the activity factor; the daily calorie goal then
applies the goal adjustment (-500 to lose, +300 to gain) and is split into
macros with 4 kcal/g for protein and carbs, 9 kcal/g for fat.
"""

from __future__ import annotations

import math
from typing import Dict

from ..utils import utc_now_iso
from .models import NutritionGoals, NutritionProgress, UserProfile

ACTIVITY_MULTIPLIERS: Dict[str, float] = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "very_active": 1.9,
}

GOAL_ADJUSTMENTS: Dict[str, int] = {
    "lose_weight": -500,
    "maintain": 0,
    "gain_weight": 300,
}

MACRO_RATIOS: Dict[str, Dict[str, float]] = {
    "balanced": {"carbs": 0.40, "protein": 0.30, "fat": 0.30},
    "keto": {"carbs": 0.05, "protein": 0.25, "fat": 0.70},
    "high_protein": {"carbs": 0.30, "protein": 0.40, "fat": 0.30},
}


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_bmr(weight: float, height: float, age: int, sex: str) -> float:
    base = 10 * weight + 6.25 * height - 5 * age
    return base + 5 if sex == "male" else base - 161


def calculate_tdee(bmr: float, activity_level: str) -> int:
    return round_half_up(bmr * ACTIVITY_MULTIPLIERS[activity_level])


def calculate_daily_calories(tdee: int, goal_type: str) -> int:
    return round_half_up(tdee + GOAL_ADJUSTMENTS[goal_type])


def calculate_macros(daily_calories: float, diet_type: str) -> Dict[str, int]:
    ratio = MACRO_RATIOS[diet_type]
    return {
        "protein": round_half_up(daily_calories * ratio["protein"] / 4),
        "carbs": round_half_up(daily_calories * ratio["carbs"] / 4),
        "fat": round_half_up(daily_calories * ratio["fat"] / 9),
    }


def calculate_nutrition_goals(profile: UserProfile) -> NutritionGoals:
    bmr = calculate_bmr(profile.weight, profile.height, profile.age, profile.sex)
    tdee = calculate_tdee(bmr, profile.activity_level)
    calories = calculate_daily_calories(tdee, profile.goal_type)
    macros = calculate_macros(calories, profile.diet_type)
    return NutritionGoals(
        user_id=profile.user_id,
        bmr=round_half_up(bmr),
        tdee=tdee,
        daily_calories=calories,
        daily_protein=macros["protein"],
        daily_carbs=macros["carbs"],
        daily_fat=macros["fat"],
        calculated_date=utc_now_iso(),
    )


def calculate_progress(consumed: float, goal: float) -> NutritionProgress:
    return NutritionProgress(
        consumed=consumed,
        goal=goal,
        remaining=max(0.0, goal - consumed),
        percentage=min(100, round_half_up(consumed / goal * 100)) if goal > 0 else 0,
    )

# -*- coding: utf-8 -*-
"""Meals — per-user meal log storage and daily totals."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from .. import blobstore
from ..recipes import storage as recipe_store
from ..utils import DayLike, day_str, new_id, utc_now_iso
from .models import DailyNutrition, MealLog, MealLogCreateRequest, MealLogUpdateRequest, NutritionTotals

ENTITY = "meal_logs"


def _load(user_id: str) -> List[MealLog]:
    return blobstore.load_models(user_id, ENTITY, MealLog)


def _save(user_id: str, meals: List[MealLog]) -> None:
    blobstore.save_models(user_id, ENTITY, meals, MealLog)


def create(user_id: str, req: MealLogCreateRequest) -> MealLog:
    meals = _load(user_id)
    meal = MealLog(
        id=new_id("meal"),
        user_id=user_id,
        date=day_str(req.date),
        meal_type=req.meal_type,
        recipe_id=req.recipe_id,
        custom_food=req.custom_food,
        servings=req.servings,
        notes=req.notes,
        created_at=utc_now_iso(),
    )
    meals.append(meal)
    _save(user_id, meals)
    return meal


def get_all(user_id: str) -> List[MealLog]:
    return _load(user_id)


def get_by_id(user_id: str, meal_id: str) -> Optional[MealLog]:
    for meal in _load(user_id):
        if meal.id == meal_id:
            return meal
    return None


def get_by_date(user_id: str, day: DayLike) -> List[MealLog]:
    target = day_str(day)
    return [m for m in _load(user_id) if m.date == target]


def get_by_date_range(user_id: str, start: DayLike, end: DayLike) -> List[MealLog]:
    lo, hi = day_str(start), day_str(end)
    return [m for m in _load(user_id) if lo <= m.date <= hi]


def update(user_id: str, meal_id: str, req: MealLogUpdateRequest) -> Optional[MealLog]:
    meals = _load(user_id)
    for idx, meal in enumerate(meals):
        if meal.id != meal_id:
            continue
        patch = {k: v for k, v in req.model_dump(exclude_unset=True).items() if k != "servings" or v is not None}
        updated = meal.model_copy(update=patch)
        meals[idx] = updated
        _save(user_id, meals)
        return updated
    return None


def delete(user_id: str, meal_id: str) -> bool:
    meals = _load(user_id)
    kept = [m for m in meals if m.id != meal_id]
    if len(kept) == len(meals):
        return False
    _save(user_id, kept)
    return True


def delete_all(user_id: str) -> None:
    blobstore.remove_item(user_id, ENTITY)


def get_recent(user_id: str, limit: int = 10) -> List[MealLog]:
    return sorted(_load(user_id), key=lambda m: m.created_at, reverse=True)[:limit]


def meal_nutrition(user_id: str, meal: MealLog) -> NutritionTotals:
    """Nutrition of one logged meal: recipe nutrition per serving, else the custom food, times servings."""
    if meal.custom_food is not None:
        src = meal.custom_food
        base = NutritionTotals(
            calories=src.calories, protein=src.protein, carbs=src.carbs, fat=src.fat, fiber=src.fiber or 0.0
        )
    else:
        recipe = recipe_store.get_by_id(user_id, meal.recipe_id) if meal.recipe_id else None
        if recipe is None:
            return NutritionTotals()
        info = recipe.nutrition_info
        base = NutritionTotals(
            calories=info.calories, protein=info.protein, carbs=info.carbs, fat=info.fat, fiber=info.fiber or 0.0
        )
    return NutritionTotals(**{k: v * meal.servings for k, v in base.model_dump().items()})


def get_daily_nutrition(user_id: str, day: Optional[DayLike] = None) -> DailyNutrition:
    target = day_str(day or date.today())
    meals = get_by_date(user_id, target)
    totals = {"calories": 0.0, "protein": 0.0, "carbs": 0.0, "fat": 0.0, "fiber": 0.0}
    for meal in meals:
        for key, value in meal_nutrition(user_id, meal).model_dump().items():
            totals[key] += value
    return DailyNutrition(
        date=target,
        meal_count=len(meals),
        totals=NutritionTotals(**{k: round(v, 1) for k, v in totals.items()}),
        meals=meals,
    )

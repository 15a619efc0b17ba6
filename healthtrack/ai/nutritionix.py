# -*- coding: utf-8 -*-
"""Nutritionix natural-language nutrient lookup with an offline fallback table."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from ..config import settings
from .models import FoodNutrition

log = logging.getLogger(__name__)

# Per 100 g or per standard serving.
COMMON_FOODS: Dict[str, FoodNutrition] = {
    "apple": FoodNutrition(name="Pomme", calories=52, protein=0.3, carbs=14, fat=0.2, fiber=2.4),
    "banana": FoodNutrition(name="Banane", calories=89, protein=1.1, carbs=23, fat=0.3, fiber=2.6),
    "egg": FoodNutrition(name="Œuf", calories=155, protein=13, carbs=1.1, fat=11, fiber=0),
    "milk": FoodNutrition(name="Lait", calories=42, protein=3.4, carbs=5, fat=1, fiber=0),
    "chicken": FoodNutrition(name="Poulet", calories=165, protein=31, carbs=0, fat=3.6, fiber=0),
    "rice": FoodNutrition(name="Riz", calories=130, protein=2.7, carbs=28, fat=0.3, fiber=0.4),
    "bread": FoodNutrition(name="Pain", calories=265, protein=9, carbs=49, fat=3.2, fiber=2.7),
    "pasta": FoodNutrition(name="Pâtes", calories=131, protein=5, carbs=25, fat=1.1, fiber=1.8),
    "salmon": FoodNutrition(name="Saumon", calories=208, protein=20, carbs=0, fat=13, fiber=0),
    "avocado": FoodNutrition(name="Avocat", calories=160, protein=2, carbs=9, fat=15, fiber=7),
}


def fallback_nutrition(query: str) -> FoodNutrition:
    lowered = query.lower()
    for key, food in COMMON_FOODS.items():
        if key in lowered:
            return food.model_copy()
    return FoodNutrition(name=query, calories=100, protein=5, carbs=15, fat=3, fiber=2)


def _num(food: Dict[str, Any], key: str) -> float:
    value = food.get(key)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(round(value))
    return 0.0


def _first_food(data: object) -> Optional[FoodNutrition]:
    if not isinstance(data, dict):
        return None
    foods = data.get("foods")
    if not isinstance(foods, list) or not foods or not isinstance(foods[0], dict):
        return None
    food = foods[0]
    return FoodNutrition(
        name=str(food.get("food_name") or ""),
        calories=_num(food, "nf_calories"),
        protein=_num(food, "nf_protein"),
        carbs=_num(food, "nf_total_carbohydrate"),
        fat=_num(food, "nf_total_fat"),
        fiber=_num(food, "nf_dietary_fiber"),
    )


def search_natural_language(query: str, client: Optional[httpx.Client] = None) -> FoodNutrition:
    """Nutrients of e.g. ``"2 eggs"``; falls back to the built-in table on any failure."""
    app_id = settings.nutritionix_app_id
    app_key = settings.nutritionix_app_key
    if not app_id or not app_key:
        log.warning("Nutritionix credentials not configured; using fallback for %r", query)
        return fallback_nutrition(query)

    url = f"{settings.nutritionix_base_url.rstrip('/')}/natural/nutrients"
    headers = {"Content-Type": "application/json", "x-app-id": app_id, "x-app-key": app_key}
    try:
        if client is not None:
            resp = client.post(url, headers=headers, json={"query": query})
        else:
            with httpx.Client(timeout=settings.nutritionix_timeout) as own:
                resp = own.post(url, headers=headers, json={"query": query})
        resp.raise_for_status()
        data = resp.json()
    except (httpx.HTTPError, ValueError) as exc:
        log.warning("Nutritionix lookup failed for %r: %s", query, exc, exc_info=True)
        return fallback_nutrition(query)

    food = _first_food(data)
    if food is None:
        return fallback_nutrition(query)
    return food


def search_multiple(queries: List[str]) -> List[FoodNutrition]:
    if not settings.nutritionix_app_id or not settings.nutritionix_app_key:
        return [search_natural_language(q) for q in queries]
    with httpx.Client(timeout=settings.nutritionix_timeout) as client:
        return [search_natural_language(q, client=client) for q in queries]

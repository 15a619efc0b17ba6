# -*- coding: utf-8 -*-
"""Recipes — AI generation from a list of ingredients."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Tuple

from pydantic import ValidationError

from ..ai import gemini
from ..fridge import storage as fridge_store
from . import storage as recipe_store
from .models import (
    IngredientAlternative,
    Recipe,
    RecipeCreateRequest,
    RecipeGenerationRequest,
    RecipeIngredient,
)

log = logging.getLogger(__name__)

_DIFFICULTIES = {"easy", "medium", "hard"}
_MEAL_TYPES = {"breakfast", "lunch", "dinner", "snack", "dessert"}

RESPONSE_FORMAT = """{
  "name": "Recipe name",
  "description": "Brief description of the dish (2-3 sentences)",
  "ingredients": [
    {
      "name": "ingredient name",
      "quantity": 200,
      "unit": "g",
      "optional": false,
      "alternative": "optional alternative if ingredient is hard to find"
    }
  ],
  "steps": [
    "Step 1 instruction",
    "Step 2 instruction"
  ],
  "prepTime": 30,
  "cookTime": 20,
  "servings": 4,
  "difficulty": "easy",
  "cuisineType": "french",
  "mealType": ["lunch", "dinner"],
  "nutritionInfo": {
    "calories": 450,
    "protein": 25,
    "carbs": 40,
    "fat": 15,
    "fiber": 8
  },
  "tags": ["quick", "healthy"],
  "alternatives": [
    {
      "original": "ingredient name",
      "alternatives": ["alternative 1", "alternative 2"],
      "reason": "why these alternatives work"
    }
  ]
}"""

INSTRUCTIONS = [
    "Return ONLY valid JSON, no additional text",
    "Include accurate nutritional information per serving",
    "Provide ingredient alternatives when applicable",
    "Ensure all measurements are precise and realistic",
    "Steps should be clear, detailed, and numbered",
    'Difficulty should be: "easy", "medium", or "hard"',
    'Cuisine type should be lowercase (e.g., "french", "italian", "asian")',
    'Meal type should be array with: "breakfast", "lunch", "dinner", "snack", or "dessert"',
    "Include helpful cooking tips in the steps when relevant",
]


def resolve_ingredients(user_id: str, req: RecipeGenerationRequest) -> List[str]:
    """Requested ingredient names plus the names of the selected fridge items, deduplicated."""
    names: List[str] = []
    seen = set()
    fridge_names = []
    for item_id in req.fridge_item_ids:
        item = fridge_store.get_by_id(user_id, item_id)
        if item is not None:
            fridge_names.append(item.name)
    for raw in [*req.ingredients, *fridge_names]:
        name = (raw or "").strip()
        if name and name.lower() not in seen:
            seen.add(name.lower())
            names.append(name)
    return names


def _bullets(items: List[str]) -> str:
    return "\n".join(f"- {i}" for i in items)


def build_prompt(ingredients: List[str], req: RecipeGenerationRequest) -> str:
    prompt = "You are a professional chef and nutritionist. Generate a detailed recipe based on the following requirements:\n\n"
    prompt += "INGREDIENTS TO USE:\n" + _bullets(ingredients) + "\n\n"

    if req.zero_waste_mode:
        prompt += "ZERO WASTE MODE: Prioritize using ALL provided ingredients to minimize food waste.\n\n"

    f = req.filters
    if f is not None:
        prompt += "REQUIREMENTS:\n"
        if f.prep_time:
            prompt += f"- Maximum preparation time: {f.prep_time} minutes\n"
        if f.difficulty:
            prompt += f"- Difficulty level: {f.difficulty}\n"
        if f.cuisine_type:
            prompt += f"- Cuisine type: {f.cuisine_type}\n"
        if f.meal_type:
            prompt += f"- Meal type: {f.meal_type}\n"
        if f.equipment:
            prompt += f"- Available equipment: {', '.join(f.equipment)}\n"
        if f.batch_cooking:
            prompt += "- Batch cooking: large quantities suitable for meal prep\n"
        prompt += "\n"

    prefs = req.user_preferences
    if prefs is not None:
        if prefs.dietary_restrictions:
            prompt += "DIETARY RESTRICTIONS:\n" + _bullets(prefs.dietary_restrictions) + "\n\n"
        if prefs.allergies:
            prompt += "ALLERGIES (MUST EXCLUDE):\n" + _bullets(prefs.allergies) + "\n\n"
        if prefs.disliked_ingredients:
            prompt += "DISLIKED INGREDIENTS (AVOID IF POSSIBLE):\n" + _bullets(prefs.disliked_ingredients) + "\n\n"

    prompt += "Please provide the recipe in the following JSON format:\n\n" + RESPONSE_FORMAT + "\n\n"
    prompt += "IMPORTANT INSTRUCTIONS:\n" + _bullets(INSTRUCTIONS) + "\n"
    return prompt


def _as_int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return max(0, int(round(value)))
    if isinstance(value, str):
        digits = "".join(ch for ch in value if ch.isdigit())
        return int(digits) if digits else default
    return default


def _ingredients(raw: Any) -> List[RecipeIngredient]:
    out: List[RecipeIngredient] = []
    if not isinstance(raw, list):
        return out
    for item in raw:
        if isinstance(item, str) and item.strip():
            out.append(RecipeIngredient(name=item.strip()))
        elif isinstance(item, dict) and str(item.get("name") or "").strip():
            quantity = item.get("quantity")
            out.append(
                RecipeIngredient(
                    name=str(item["name"]).strip(),
                    quantity=float(quantity) if isinstance(quantity, (int, float)) and quantity >= 0 else 0.0,
                    unit=str(item.get("unit") or ""),
                    optional=item.get("optional") if isinstance(item.get("optional"), bool) else None,
                    alternative=str(item["alternative"]) if item.get("alternative") else None,
                )
            )
    return out


def _meal_types(raw: Any) -> List[str]:
    values = raw if isinstance(raw, list) else [raw]
    return [v for v in (str(x).lower().strip() for x in values if x) if v in _MEAL_TYPES]


def _nutrition(raw: Any) -> Dict[str, float]:
    if not isinstance(raw, dict):
        return {}
    out: Dict[str, float] = {}
    for key in ("calories", "protein", "carbs", "fat", "fiber"):
        value = raw.get(key)
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value >= 0:
            out[key] = float(value)
    return out


def _alternatives(raw: Any) -> List[IngredientAlternative]:
    out: List[IngredientAlternative] = []
    if not isinstance(raw, list):
        return out
    for item in raw:
        if isinstance(item, dict) and item.get("original"):
            alts = item.get("alternatives")
            out.append(
                IngredientAlternative(
                    original=str(item["original"]),
                    alternatives=[str(a) for a in alts] if isinstance(alts, list) else [],
                    reason=str(item.get("reason") or ""),
                )
            )
    return out


def parse_generated_recipe(
    parsed: Dict[str, Any], fridge_item_ids: List[str]
) -> Tuple[RecipeCreateRequest, List[IngredientAlternative], List[str]]:
    """Map the model's JSON onto a create request. Raises ``ValueError`` when required parts are missing."""
    name = str(parsed.get("name") or parsed.get("title") or "").strip()
    ingredients = _ingredients(parsed.get("ingredients"))
    steps_raw = parsed.get("steps") or parsed.get("instructions")
    steps = [str(s).strip() for s in steps_raw if str(s).strip()] if isinstance(steps_raw, list) else []
    if not name or not ingredients or not steps:
        raise ValueError("Invalid recipe format received from AI")

    difficulty = str(parsed.get("difficulty") or "").lower().strip()
    tags = parsed.get("tags")
    tips = parsed.get("tips")
    req = RecipeCreateRequest(
        name=name[:200],
        description=str(parsed.get("description") or ""),
        ingredients=ingredients,
        steps=steps,
        prep_time=_as_int(parsed.get("prepTime")),
        cook_time=_as_int(parsed.get("cookTime")),
        servings=max(1, _as_int(parsed.get("servings"), 1)),
        difficulty=difficulty if difficulty in _DIFFICULTIES else "medium",
        cuisine_type=str(parsed.get("cuisineType") or "other").lower(),
        meal_type=_meal_types(parsed.get("mealType")),
        tags=[str(t) for t in tags] if isinstance(tags, list) else [],
        nutrition_info=_nutrition(parsed.get("nutritionInfo")) or None,
        is_generated=True,
        used_fridge_items=list(fridge_item_ids),
    )
    tip_list = [str(t) for t in tips] if isinstance(tips, list) else []
    return req, _alternatives(parsed.get("alternatives")), tip_list


def generate_recipe(
    user_id: str, req: RecipeGenerationRequest
) -> Tuple[Recipe, List[str], List[IngredientAlternative], List[str]]:
    """Generate (and optionally save) a recipe.

    Returns ``(recipe, used_ingredients, alternatives, tips)``. Raises
    ``ValueError`` when no ingredient is given or the output is unusable and
    ``RuntimeError`` when the model call fails.
    """
    ingredients = resolve_ingredients(user_id, req)
    if not ingredients:
        raise ValueError("At least one ingredient is required")

    parsed = gemini.generate_json(build_prompt(ingredients, req))
    try:
        create_req, alternatives, tips = parse_generated_recipe(parsed, req.fridge_item_ids)
    except ValidationError as exc:
        log.warning("generated recipe failed validation: %s", exc)
        raise ValueError("Invalid recipe format received from AI") from exc

    if req.save:
        recipe = recipe_store.create(user_id, create_req)
    else:
        recipe = recipe_store.build_recipe(user_id, create_req)
    return recipe, ingredients, alternatives, tips

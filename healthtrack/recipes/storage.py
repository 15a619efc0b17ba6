# -*- coding: utf-8 -*-
"""Recipes — per-user recipe library storage and in-memory querying."""

from __future__ import annotations

from collections import Counter
from typing import List, Optional

from .. import blobstore
from ..utils import drop_nulls, new_id, utc_now_iso
from .models import (
    NutritionInfo,
    NutritionInfoPatch,
    Recipe,
    RecipeCreateRequest,
    RecipeSearchFilters,
    RecipeStats,
    RecipeUpdateRequest,
)

ENTITY = "recipes"
_REQUIRED = (
    "name",
    "description",
    "ingredients",
    "steps",
    "prep_time",
    "cook_time",
    "servings",
    "difficulty",
    "cuisine_type",
    "meal_type",
    "tags",
)


def _load(user_id: str) -> List[Recipe]:
    return blobstore.load_models(user_id, ENTITY, Recipe)


def _save(user_id: str, recipes: List[Recipe]) -> None:
    blobstore.save_models(user_id, ENTITY, recipes, Recipe)


def _nutrition(patch: Optional[NutritionInfoPatch], base: Optional[NutritionInfo] = None) -> NutritionInfo:
    current = base or NutritionInfo()
    if patch is None:
        return current
    data = current.model_dump()
    data.update(patch.model_dump(exclude_none=True))
    return NutritionInfo.model_validate(data)


def build_recipe(user_id: str, req: RecipeCreateRequest) -> Recipe:
    """Turn a create request into a Recipe without persisting it."""
    now = utc_now_iso()
    return Recipe(
        id=new_id("recipe"),
        user_id=user_id,
        name=req.name,
        description=req.description,
        ingredients=req.ingredients,
        steps=req.steps,
        prep_time=req.prep_time,
        cook_time=req.cook_time,
        servings=req.servings,
        difficulty=req.difficulty,
        cuisine_type=req.cuisine_type,
        meal_type=req.meal_type,
        tags=req.tags or [],
        nutrition_info=_nutrition(req.nutrition_info),
        is_favorite=False,
        is_generated=req.is_generated,
        generated_date=now if req.is_generated else None,
        created_date=now,
        personal_notes=req.personal_notes,
        image_url=req.image_url,
        used_fridge_items=req.used_fridge_items or [],
    )


def add(user_id: str, recipe: Recipe) -> Recipe:
    recipes = _load(user_id)
    recipes.append(recipe)
    _save(user_id, recipes)
    return recipe


def create(user_id: str, req: RecipeCreateRequest) -> Recipe:
    return add(user_id, build_recipe(user_id, req))


def get_all(user_id: str) -> List[Recipe]:
    return _load(user_id)


def get_by_id(user_id: str, recipe_id: str) -> Optional[Recipe]:
    for r in _load(user_id):
        if r.id == recipe_id:
            return r
    return None


def update(user_id: str, recipe_id: str, req: RecipeUpdateRequest) -> Optional[Recipe]:
    recipes = _load(user_id)
    for idx, r in enumerate(recipes):
        if r.id != recipe_id:
            continue
        patch = drop_nulls(req.model_dump(exclude_unset=True, exclude={"nutrition_info"}), _REQUIRED)
        data = {**r.model_dump(), **patch, "last_modified_date": utc_now_iso()}
        if req.nutrition_info is not None:
            data["nutrition_info"] = _nutrition(req.nutrition_info, r.nutrition_info).model_dump()
        updated = Recipe.model_validate(data)
        recipes[idx] = updated
        _save(user_id, recipes)
        return updated
    return None


def delete(user_id: str, recipe_id: str) -> bool:
    recipes = _load(user_id)
    kept = [r for r in recipes if r.id != recipe_id]
    if len(kept) == len(recipes):
        return False
    _save(user_id, kept)
    return True


def toggle_favorite(user_id: str, recipe_id: str) -> Optional[Recipe]:
    recipes = _load(user_id)
    for idx, r in enumerate(recipes):
        if r.id == recipe_id:
            updated = r.model_copy(update={"is_favorite": not r.is_favorite, "last_modified_date": utc_now_iso()})
            recipes[idx] = updated
            _save(user_id, recipes)
            return updated
    return None


def _matches_query(r: Recipe, q: str) -> bool:
    if q in r.name.lower() or q in r.description.lower():
        return True
    if any(q in tag.lower() for tag in r.tags):
        return True
    return any(q in ing.name.lower() for ing in r.ingredients)


def search(user_id: str, filters: Optional[RecipeSearchFilters] = None) -> List[Recipe]:
    f = filters or RecipeSearchFilters()
    recipes = _load(user_id)

    if f.query:
        q = f.query.lower()
        recipes = [r for r in recipes if _matches_query(r, q)]
    if f.difficulty:
        recipes = [r for r in recipes if r.difficulty == f.difficulty]
    if f.cuisine_type:
        recipes = [r for r in recipes if r.cuisine_type == f.cuisine_type]
    if f.meal_type:
        recipes = [r for r in recipes if f.meal_type in r.meal_type]
    if f.tags:
        wanted = set(f.tags)
        recipes = [r for r in recipes if wanted.intersection(r.tags)]
    if f.is_favorite is not None:
        recipes = [r for r in recipes if r.is_favorite == f.is_favorite]
    if f.is_generated is not None:
        recipes = [r for r in recipes if r.is_generated == f.is_generated]
    if f.max_prep_time:
        recipes = [r for r in recipes if r.prep_time <= f.max_prep_time]
    return recipes


_SORT_KEYS = {
    "name": lambda r: r.name.lower(),
    "created_date": lambda r: r.created_date,
    "prep_time": lambda r: r.prep_time,
    "cook_time": lambda r: r.cook_time,
}


def sort(recipes: List[Recipe], sort_by: str = "created_date", sort_order: str = "desc") -> List[Recipe]:
    key = _SORT_KEYS.get(sort_by)
    if key is None:
        return list(recipes)
    return sorted(recipes, key=key, reverse=sort_order == "desc")


def get_stats(user_id: str) -> RecipeStats:
    recipes = _load(user_id)
    total = len(recipes)
    prep = sum(r.prep_time for r in recipes)
    generated = sum(1 for r in recipes if r.is_generated)
    return RecipeStats(
        total_recipes=total,
        favorite_count=sum(1 for r in recipes if r.is_favorite),
        generated_count=generated,
        manual_count=total - generated,
        average_prep_time=round(prep / total) if total else 0,
        recipes_by_difficulty=dict(Counter(r.difficulty for r in recipes)),
        recipes_by_cuisine=dict(Counter(r.cuisine_type for r in recipes)),
    )


def get_recent(user_id: str, limit: int = 5) -> List[Recipe]:
    return sort(_load(user_id), "created_date", "desc")[:limit]


def get_favorites(user_id: str) -> List[Recipe]:
    return [r for r in _load(user_id) if r.is_favorite]


def get_all_tags(user_id: str) -> List[str]:
    return sorted({tag for r in _load(user_id) for tag in r.tags})


def delete_all(user_id: str) -> None:
    blobstore.remove_item(user_id, ENTITY)

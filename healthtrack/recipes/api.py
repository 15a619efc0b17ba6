# -*- coding: utf-8 -*-
"""Recipes — API endpoints (library and AI generation)."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..ai.gemini import GeminiConfigError
from ..auth.security import get_current_user
from ..health import user_stats
from . import generator
from . import storage as recipe_store
from .models import (
    Recipe,
    RecipeCreateRequest,
    RecipeDifficulty,
    RecipeGenerationRequest,
    RecipeGenerationResponse,
    RecipeMealType,
    RecipeSearchFilters,
    RecipeSortBy,
    RecipeStats,
    RecipeUpdateRequest,
    SortOrder,
)

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/recipes", tags=["Recipes"])


def _recipe_or_404(recipe: Optional[Recipe]) -> Recipe:
    if recipe is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe


@router.get("", response_model=List[Recipe], summary="List or search recipes")
def list_recipes(
    q: Optional[str] = Query(default=None, description="Search over name/description/ingredients/tags"),
    difficulty: Optional[RecipeDifficulty] = Query(default=None),
    cuisine_type: Optional[str] = Query(default=None),
    meal_type: Optional[RecipeMealType] = Query(default=None),
    tags: Optional[List[str]] = Query(default=None),
    is_favorite: Optional[bool] = Query(default=None),
    is_generated: Optional[bool] = Query(default=None),
    max_prep_time: Optional[int] = Query(default=None, ge=0),
    sort_by: RecipeSortBy = Query(default="created_date"),
    sort_order: SortOrder = Query(default="desc"),
    user: dict = Depends(get_current_user),
):
    filters = RecipeSearchFilters(
        query=q,
        difficulty=difficulty,
        cuisine_type=cuisine_type,
        meal_type=meal_type,
        tags=tags,
        is_favorite=is_favorite,
        is_generated=is_generated,
        max_prep_time=max_prep_time,
    )
    return recipe_store.sort(recipe_store.search(user["id"], filters), sort_by, sort_order)


@router.post("", response_model=Recipe, status_code=201, summary="Save a recipe")
def create_recipe(request: RecipeCreateRequest, user: dict = Depends(get_current_user)):
    return recipe_store.create(user["id"], request)


@router.get("/stats", response_model=RecipeStats)
def stats(user: dict = Depends(get_current_user)):
    return recipe_store.get_stats(user["id"])


@router.get("/tags", response_model=List[str])
def tags(user: dict = Depends(get_current_user)):
    return recipe_store.get_all_tags(user["id"])


@router.get("/favorites", response_model=List[Recipe])
def favorites(user: dict = Depends(get_current_user)):
    return recipe_store.get_favorites(user["id"])


@router.get("/recent", response_model=List[Recipe])
def recent(limit: int = Query(default=5, ge=1, le=100), user: dict = Depends(get_current_user)):
    return recipe_store.get_recent(user["id"], limit=limit)


@router.post("/generate", response_model=RecipeGenerationResponse, summary="Generate a recipe with Gemini")
def generate(request: RecipeGenerationRequest, user: dict = Depends(get_current_user)):
    user_id = user["id"]
    if not generator.resolve_ingredients(user_id, request):
        raise HTTPException(status_code=400, detail="At least one ingredient is required")
    try:
        recipe, used, alternatives, tips = generator.generate_recipe(user_id, request)
    except GeminiConfigError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    except ValueError as exc:
        log.warning("recipe generation output unusable: %s", exc, exc_info=True)
        raise HTTPException(status_code=502, detail=f"Recipe generation failed: {exc}") from exc
    except RuntimeError as exc:
        log.warning("recipe generation failed: %s", exc, exc_info=True)
        raise HTTPException(status_code=502, detail=f"Recipe generation failed: {exc}") from exc
    user_stats.increment_recipes(user_id)
    return RecipeGenerationResponse(
        recipe=recipe,
        saved=request.save,
        used_ingredients=used,
        fridge_item_ids=request.fridge_item_ids,
        alternatives=alternatives,
        tips=tips,
    )


@router.delete("", summary="Delete every recipe")
def delete_all(user: dict = Depends(get_current_user)):
    recipe_store.delete_all(user["id"])
    return {"ok": True}


@router.get("/{recipe_id}", response_model=Recipe)
def get_recipe(recipe_id: str, user: dict = Depends(get_current_user)):
    return _recipe_or_404(recipe_store.get_by_id(user["id"], recipe_id))


@router.patch("/{recipe_id}", response_model=Recipe)
def update_recipe(recipe_id: str, request: RecipeUpdateRequest, user: dict = Depends(get_current_user)):
    return _recipe_or_404(recipe_store.update(user["id"], recipe_id, request))


@router.delete("/{recipe_id}")
def delete_recipe(recipe_id: str, user: dict = Depends(get_current_user)):
    if not recipe_store.delete(user["id"], recipe_id):
        raise HTTPException(status_code=404, detail="Recipe not found")
    return {"ok": True}


@router.post("/{recipe_id}/favorite", response_model=Recipe, summary="Toggle favorite")
def toggle_favorite(recipe_id: str, user: dict = Depends(get_current_user)):
    return _recipe_or_404(recipe_store.toggle_favorite(user["id"], recipe_id))

# -*- coding: utf-8 -*-
"""Recipes — Pydantic models."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

RecipeDifficulty = Literal["easy", "medium", "hard"]
RecipeMealType = Literal["breakfast", "lunch", "dinner", "snack", "dessert"]
RecipeSortBy = Literal["name", "created_date", "prep_time", "cook_time"]
SortOrder = Literal["asc", "desc"]


class RecipeIngredient(BaseModel):
    name: str = Field(..., min_length=1)
    quantity: float = Field(0.0, ge=0)
    unit: str = ""
    optional: Optional[bool] = None
    alternative: Optional[str] = None


class NutritionInfo(BaseModel):
    calories: float = Field(0.0, ge=0)
    protein: float = Field(0.0, ge=0, description="grams")
    carbs: float = Field(0.0, ge=0, description="grams")
    fat: float = Field(0.0, ge=0, description="grams")
    fiber: Optional[float] = Field(None, ge=0, description="grams")


class NutritionInfoPatch(BaseModel):
    calories: Optional[float] = Field(None, ge=0)
    protein: Optional[float] = Field(None, ge=0)
    carbs: Optional[float] = Field(None, ge=0)
    fat: Optional[float] = Field(None, ge=0)
    fiber: Optional[float] = Field(None, ge=0)


class Recipe(BaseModel):
    id: str
    user_id: str
    name: str
    description: str = ""
    ingredients: List[RecipeIngredient] = Field(default_factory=list)
    steps: List[str] = Field(default_factory=list)
    prep_time: int = Field(0, ge=0, description="minutes")
    cook_time: int = Field(0, ge=0, description="minutes")
    servings: int = Field(1, ge=1)
    difficulty: RecipeDifficulty = "easy"
    cuisine_type: str = "other"
    meal_type: List[RecipeMealType] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    nutrition_info: NutritionInfo = Field(default_factory=NutritionInfo)
    is_favorite: bool = False
    is_generated: bool = False
    generated_date: Optional[str] = None
    created_date: str
    last_modified_date: Optional[str] = None
    personal_notes: Optional[str] = None
    image_url: Optional[str] = None
    used_fridge_items: List[str] = Field(default_factory=list)


class RecipeCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    ingredients: List[RecipeIngredient] = Field(default_factory=list)
    steps: List[str] = Field(default_factory=list)
    prep_time: int = Field(0, ge=0)
    cook_time: int = Field(0, ge=0)
    servings: int = Field(1, ge=1)
    difficulty: RecipeDifficulty = "easy"
    cuisine_type: str = "other"
    meal_type: List[RecipeMealType] = Field(default_factory=list)
    tags: Optional[List[str]] = None
    nutrition_info: Optional[NutritionInfoPatch] = None
    personal_notes: Optional[str] = None
    image_url: Optional[str] = None
    is_generated: bool = False
    used_fridge_items: Optional[List[str]] = None


class RecipeUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    ingredients: Optional[List[RecipeIngredient]] = None
    steps: Optional[List[str]] = None
    prep_time: Optional[int] = Field(None, ge=0)
    cook_time: Optional[int] = Field(None, ge=0)
    servings: Optional[int] = Field(None, ge=1)
    difficulty: Optional[RecipeDifficulty] = None
    cuisine_type: Optional[str] = None
    meal_type: Optional[List[RecipeMealType]] = None
    tags: Optional[List[str]] = None
    nutrition_info: Optional[NutritionInfoPatch] = None
    personal_notes: Optional[str] = None
    image_url: Optional[str] = None


class RecipeSearchFilters(BaseModel):
    query: Optional[str] = None
    difficulty: Optional[RecipeDifficulty] = None
    cuisine_type: Optional[str] = None
    meal_type: Optional[RecipeMealType] = None
    tags: Optional[List[str]] = None
    is_favorite: Optional[bool] = None
    is_generated: Optional[bool] = None
    max_prep_time: Optional[int] = Field(None, ge=0)


class RecipeStats(BaseModel):
    total_recipes: int
    favorite_count: int
    generated_count: int
    manual_count: int
    average_prep_time: int
    recipes_by_difficulty: Dict[str, int]
    recipes_by_cuisine: Dict[str, int]


class RecipeFilters(BaseModel):
    prep_time: Optional[int] = Field(None, ge=0, description="Maximum preparation time in minutes")
    difficulty: Optional[RecipeDifficulty] = None
    cuisine_type: Optional[str] = None
    meal_type: Optional[RecipeMealType] = None
    equipment: Optional[List[str]] = None
    batch_cooking: Optional[bool] = None


class UserPreferences(BaseModel):
    dietary_restrictions: List[str] = Field(default_factory=list)
    allergies: List[str] = Field(default_factory=list)
    disliked_ingredients: List[str] = Field(default_factory=list)


class RecipeGenerationRequest(BaseModel):
    ingredients: List[str] = Field(default_factory=list)
    fridge_item_ids: List[str] = Field(default_factory=list)
    filters: Optional[RecipeFilters] = None
    zero_waste_mode: bool = False
    user_preferences: Optional[UserPreferences] = None
    save: bool = Field(False, description="Persist the generated recipe in the library")


class IngredientAlternative(BaseModel):
    original: str
    alternatives: List[str] = Field(default_factory=list)
    reason: str = ""


class RecipeGenerationResponse(BaseModel):
    recipe: Recipe
    saved: bool
    used_ingredients: List[str]
    fridge_item_ids: List[str]
    alternatives: List[IngredientAlternative] = Field(default_factory=list)
    tips: List[str] = Field(default_factory=list)

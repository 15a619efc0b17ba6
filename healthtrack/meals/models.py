# -*- coding: utf-8 -*-
"""Meals — Pydantic models."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

MealType = Literal["breakfast", "lunch", "dinner", "snack"]


class CustomFood(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    calories: float = Field(0.0, ge=0)
    protein: float = Field(0.0, ge=0)
    carbs: float = Field(0.0, ge=0)
    fat: float = Field(0.0, ge=0)
    fiber: Optional[float] = Field(None, ge=0)


class MealLog(BaseModel):
    id: str
    user_id: str
    date: str = Field(..., description="YYYY-MM-DD")
    meal_type: MealType
    recipe_id: Optional[str] = None
    custom_food: Optional[CustomFood] = None
    servings: float = Field(1.0, gt=0)
    notes: Optional[str] = None
    created_at: str


class MealLogCreateRequest(BaseModel):
    date: str = Field(..., description="YYYY-MM-DD")
    meal_type: MealType
    recipe_id: Optional[str] = None
    custom_food: Optional[CustomFood] = None
    servings: float = Field(..., gt=0)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def require_food(self) -> "MealLogCreateRequest":
        if not self.recipe_id and self.custom_food is None:
            raise ValueError("Either recipe_id or custom_food must be provided")
        return self


class MealLogUpdateRequest(BaseModel):
    servings: Optional[float] = Field(None, gt=0)
    notes: Optional[str] = None


class NutritionTotals(BaseModel):
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0


class DailyNutrition(BaseModel):
    date: str
    meal_count: int
    totals: NutritionTotals
    meals: List[MealLog]

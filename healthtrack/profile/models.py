# -*- coding: utf-8 -*-
"""Profile — Pydantic models."""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

Sex = Literal["male", "female"]
ActivityLevel = Literal["sedentary", "light", "moderate", "active", "very_active"]
GoalType = Literal["lose_weight", "maintain", "gain_weight"]
DietType = Literal["balanced", "keto", "high_protein"]


class UserProfile(BaseModel):
    user_id: str
    weight: float = Field(..., gt=0, description="kg")
    height: float = Field(..., gt=0, description="cm")
    age: int = Field(..., ge=1, le=130)
    sex: Sex
    activity_level: ActivityLevel = "moderate"
    goal_type: GoalType = "maintain"
    diet_type: DietType = "balanced"
    goal_weight: Optional[float] = Field(None, gt=0, description="kg")
    created_at: str
    updated_at: str


class ProfileCreateRequest(BaseModel):
    weight: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    age: int = Field(..., ge=1, le=130)
    sex: Sex
    activity_level: ActivityLevel = "moderate"
    goal_type: GoalType = "maintain"
    diet_type: DietType = "balanced"
    goal_weight: Optional[float] = Field(None, gt=0)


class ProfileUpdateRequest(BaseModel):
    weight: Optional[float] = Field(None, gt=0)
    height: Optional[float] = Field(None, gt=0)
    age: Optional[int] = Field(None, ge=1, le=130)
    sex: Optional[Sex] = None
    activity_level: Optional[ActivityLevel] = None
    goal_type: Optional[GoalType] = None
    diet_type: Optional[DietType] = None
    goal_weight: Optional[float] = Field(None, gt=0)


class NutritionGoals(BaseModel):
    user_id: str
    bmr: int
    tdee: int
    daily_calories: int
    daily_protein: int
    daily_carbs: int
    daily_fat: int
    calculated_date: str


class NutritionProgress(BaseModel):
    consumed: float
    goal: float
    remaining: float
    percentage: int


class ProfileResponse(BaseModel):
    profile: UserProfile
    goals: NutritionGoals

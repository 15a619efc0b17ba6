# -*- coding: utf-8 -*-
"""AI — request / response models."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

DeficiencyType = Literal["protein", "fiber", "vegetables"]
Severity = Literal["low", "medium", "high"]


class ChatContext(BaseModel):
    current_weight: Optional[float] = None
    goal_weight: Optional[float] = None
    today_calories: Optional[float] = None
    goal_calories: Optional[float] = None
    today_protein: Optional[float] = None
    goal_protein: Optional[float] = None
    weekly_workouts: Optional[int] = None
    diet_type: Optional[str] = None
    goal_type: Optional[str] = None


class ChatTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=4000)
    context: Optional[ChatContext] = None
    history: Optional[List[ChatTurn]] = Field(
        default=None, description="Previous turns; stored history is used when omitted"
    )


class ChatResponse(BaseModel):
    reply: str
    message_id: str


class IdentifiedFood(BaseModel):
    name: str
    portion: str = ""
    confidence: float = Field(0.0, ge=0, le=1)
    estimated_calories: float = 0.0
    estimated_protein: float = 0.0
    estimated_carbs: float = 0.0
    estimated_fat: float = 0.0


class TotalEstimated(BaseModel):
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0


class PhotoAnalysis(BaseModel):
    identified_foods: List[IdentifiedFood] = Field(default_factory=list)
    total_estimated: TotalEstimated = Field(default_factory=TotalEstimated)
    overall_assessment: str = ""


class PhotoAnalysisRequest(BaseModel):
    image_base64: str = Field(..., min_length=1)
    image_mime: str = Field("image/jpeg", description="e.g. image/jpeg, image/png")


class WeeklyAnalysisData(BaseModel):
    start_date: str = Field(..., description="YYYY-MM-DD")
    end_date: str = Field(..., description="YYYY-MM-DD")
    avg_calories: float = 0.0
    goal_calories: float = 0.0
    avg_protein: float = 0.0
    goal_protein: float = 0.0
    avg_carbs: float = 0.0
    goal_carbs: float = 0.0
    avg_fat: float = 0.0
    goal_fat: float = 0.0
    workouts_done: int = Field(0, ge=0)
    days_tracked: int = Field(0, ge=0, le=7)


class Improvement(BaseModel):
    issue: str
    action: str


class WeeklyAnalysisResult(BaseModel):
    compliance_score: int = Field(0, ge=0, le=100)
    positives: List[str] = Field(default_factory=list)
    improvements: List[Improvement] = Field(default_factory=list)
    insight: str = ""
    motivational_message: str = ""


class MealInsightRequest(BaseModel):
    meal_calories: float = Field(..., ge=0)
    meal_protein: float = Field(0.0, ge=0)
    daily_goal_calories: float = Field(..., gt=0)
    current_calories_today: float = Field(0.0, ge=0)
    avg_meal_calories: float = Field(..., gt=0)


class MealInsightResponse(BaseModel):
    message: str


class DeficiencyData(BaseModel):
    avg_protein: float
    goal_protein: float
    avg_fiber: float
    goal_fiber: float
    days_low: int = Field(0, ge=0)


class DeficiencyAlert(BaseModel):
    title: str
    message: str
    severity: Severity


class DeficiencyRecipesRequest(BaseModel):
    deficiency_type: DeficiencyType
    current_avg: float
    goal: float


class SuggestionsResponse(BaseModel):
    suggestions: List[str]


class WeeklyInsightsData(BaseModel):
    period: str
    avg_calories: float = 0.0
    avg_protein: float = 0.0
    workouts_done: int = Field(0, ge=0)
    compliance: float = Field(0.0, ge=0, le=100)
    weight_change: float = 0.0


class WeeklyInsights(BaseModel):
    period: str
    summary: str
    highlights: List[str] = Field(default_factory=list)
    concerns: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    motivational_message: str = ""


class NutritionAdviceRequest(BaseModel):
    avg_calories: float
    goal_calories: float
    avg_protein: float
    goal_protein: float


class AdviceResponse(BaseModel):
    advice: List[str]


class WorkoutMotivationResponse(BaseModel):
    message: str


class FoodNutrition(BaseModel):
    name: str
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: Optional[float] = None


class NutritionSearchRequest(BaseModel):
    queries: List[str] = Field(..., min_length=1, max_length=20)

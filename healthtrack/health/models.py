# -*- coding: utf-8 -*-
"""Health — Pydantic models."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

GoalStatus = Literal["active", "completed", "paused", "abandoned"]
GoalCategory = Literal["weight", "nutrition", "fitness", "health"]
TrendPeriod = Literal["week", "month", "quarter", "year"]

MEASUREMENT_FIELDS = ("chest", "waist", "hips", "arms", "thighs", "calves", "neck")
MeasurementType = Literal["chest", "waist", "hips", "arms", "thighs", "calves", "neck"]


# ---- Body measurements ----


class BodyMeasurements(BaseModel):
    id: str
    user_id: str
    date: str = Field(..., description="YYYY-MM-DD")
    chest: Optional[float] = Field(None, gt=0, description="cm")
    waist: Optional[float] = Field(None, gt=0)
    hips: Optional[float] = Field(None, gt=0)
    arms: Optional[float] = Field(None, gt=0)
    thighs: Optional[float] = Field(None, gt=0)
    calves: Optional[float] = Field(None, gt=0)
    neck: Optional[float] = Field(None, gt=0)
    notes: Optional[str] = None
    created_at: str


class MeasurementsCreateRequest(BaseModel):
    date: Optional[str] = Field(None, description="YYYY-MM-DD, defaults to today")
    chest: Optional[float] = Field(None, gt=0, le=300)
    waist: Optional[float] = Field(None, gt=0, le=300)
    hips: Optional[float] = Field(None, gt=0, le=300)
    arms: Optional[float] = Field(None, gt=0, le=300)
    thighs: Optional[float] = Field(None, gt=0, le=300)
    calves: Optional[float] = Field(None, gt=0, le=300)
    neck: Optional[float] = Field(None, gt=0, le=300)
    notes: Optional[str] = None


class MeasurementsUpdateRequest(MeasurementsCreateRequest):
    pass


class MeasurementChange(BaseModel):
    measurement: MeasurementType
    start: str
    end: str
    change: Optional[float] = None


# ---- Health goals ----


class Milestone(BaseModel):
    id: str
    goal_id: str
    title: str
    target_value: float
    achieved: bool = False
    achieved_at: Optional[str] = None
    reward: Optional[str] = None


class MilestoneRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    target_value: float
    reward: Optional[str] = None


class HealthGoal(BaseModel):
    id: str
    user_id: str
    category: GoalCategory
    title: str
    description: Optional[str] = None
    start_value: float
    target_value: float
    current_value: float
    unit: str
    start_date: str
    target_date: str = Field(..., description="YYYY-MM-DD")
    status: GoalStatus = "active"
    milestones: List[Milestone] = Field(default_factory=list)
    created_at: str
    updated_at: str
    completed_at: Optional[str] = None


class HealthGoalCreateRequest(BaseModel):
    category: GoalCategory
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    target_value: float
    current_value: float
    unit: str = Field(..., min_length=1, max_length=20)
    target_date: str = Field(..., description="YYYY-MM-DD")
    milestones: List[MilestoneRequest] = Field(default_factory=list)


class HealthGoalUpdateRequest(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    target_value: Optional[float] = None
    current_value: Optional[float] = None
    target_date: Optional[str] = None
    status: Optional[GoalStatus] = None


class GoalProgressRequest(BaseModel):
    current_value: float


class HealthGoalDetails(BaseModel):
    goal: HealthGoal
    progress_percentage: float
    days_remaining: int


# ---- Hydration ----


class WaterIntake(BaseModel):
    date: str
    amount_ml: int = Field(0, ge=0)


class WaterRequest(BaseModel):
    amount_ml: int = Field(..., gt=0, le=10000)
    date: Optional[str] = Field(None, description="YYYY-MM-DD, defaults to today")


class HydrationStatus(BaseModel):
    date: str
    current: int
    goal: int
    percentage: float


# ---- User stats ----


class UserStats(BaseModel):
    user_id: str
    current_streak: int = 0
    longest_streak: int = 0
    total_workouts: int = 0
    total_recipes_generated: int = 0
    total_meals_logged: int = 0
    member_since: str
    last_activity_date: Optional[str] = None
    badges: List[str] = Field(default_factory=list)
    updated_at: str


class Badge(BaseModel):
    id: str
    title: str
    description: str
    icon: str
    requirement: int


class UserStatsResponse(BaseModel):
    stats: UserStats
    unlocked: List[Badge]
    locked: List[Badge]


# ---- Dashboard and analytics ----


class CaloriesSummary(BaseModel):
    consumed: float
    goal: float
    remaining: float
    percentage: float


class MacroSummary(BaseModel):
    consumed: float
    goal: float
    percentage: float


class TodayWorkout(BaseModel):
    id: str
    name: str
    completed: bool = True
    duration: int


class FavoriteRecipe(BaseModel):
    id: str
    name: str
    times_cooked: int


class DashboardSummary(BaseModel):
    date: str
    calories: CaloriesSummary
    macros: Dict[str, MacroSummary]
    hydration: HydrationStatus
    today_workout: Optional[TodayWorkout] = None
    current_weight: Optional[float] = None
    week_weight_change: float = 0.0
    current_streak: int = 0
    favorite_recipes: List[FavoriteRecipe] = Field(default_factory=list)


class ComplianceDay(BaseModel):
    date: str
    calories_goal_met: bool
    protein_goal_met: bool
    workout_completed: bool
    meals_logged: int
    overall_compliance: int = Field(..., ge=0, le=100)


class NutritionTrend(BaseModel):
    labels: List[str] = Field(default_factory=list)
    calories: List[int] = Field(default_factory=list)
    protein: List[int] = Field(default_factory=list)
    carbs: List[int] = Field(default_factory=list)
    fat: List[int] = Field(default_factory=list)


class WeightTrend(BaseModel):
    labels: List[str] = Field(default_factory=list)
    weight: List[float] = Field(default_factory=list)
    bmi: List[float] = Field(default_factory=list)
    predicted_weight: List[float] = Field(default_factory=list)


class WorkoutTrend(BaseModel):
    labels: List[str] = Field(default_factory=list)
    workouts: List[int] = Field(default_factory=list)
    avg_duration: List[int] = Field(default_factory=list)


class ComplianceTrend(BaseModel):
    labels: List[str] = Field(default_factory=list)
    compliance_rate: List[int] = Field(default_factory=list)


class Correlations(BaseModel):
    weight_vs_calories: float = 0.0


class AnalyticsTrends(BaseModel):
    period: TrendPeriod
    nutrition_trends: NutritionTrend
    weight_trends: WeightTrend
    workout_consistency: WorkoutTrend
    compliance: ComplianceTrend
    correlations: Correlations


# ---- Weekly summaries ----


class WeeklySummary(BaseModel):
    id: str
    user_id: str
    week_start: str = Field(..., description="Monday, YYYY-MM-DD")
    week_end: str = Field(..., description="Sunday, YYYY-MM-DD")
    avg_calories: float = 0.0
    avg_protein: float = 0.0
    avg_carbs: float = 0.0
    avg_fat: float = 0.0
    workouts_done: int = 0
    compliance_days: int = Field(0, ge=0, le=7)
    weight_change: float = 0.0
    insights: List[str] = Field(default_factory=list)
    created_at: str


class SummaryTrend(BaseModel):
    labels: List[str] = Field(default_factory=list)
    calories: List[int] = Field(default_factory=list)
    protein: List[int] = Field(default_factory=list)
    workouts: List[int] = Field(default_factory=list)
    compliance: List[int] = Field(default_factory=list)

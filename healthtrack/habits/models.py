# -*- coding: utf-8 -*-
"""Habits — Pydantic models."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

HabitType = Literal["boolean", "number"]
HabitFrequency = Literal["daily", "weekly"]
HabitCategory = Literal["health", "fitness", "productivity", "mindfulness", "other"]
RoutineType = Literal["morning", "evening", "custom"]

_HHMM = r"^([01]\d|2[0-3]):[0-5]\d$"


def _check_weekdays(value: Optional[List[int]]) -> Optional[List[int]]:
    if value is None:
        return None
    for d in value:
        if d < 0 or d > 6:
            raise ValueError("specific_days must be within 0-6 (Sunday-Saturday)")
    return sorted(set(value))


class Habit(BaseModel):
    id: str
    user_id: str
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    type: HabitType = "boolean"
    target: Optional[float] = Field(None, ge=0, description="Target value for number habits, e.g. 2000 (ml)")
    unit: Optional[str] = Field(None, description="e.g. ml, steps, minutes")
    frequency: HabitFrequency = "daily"
    specific_days: Optional[List[int]] = Field(None, description="0-6 (Sunday-Saturday) for weekly habits")
    reminder_enabled: bool = False
    reminder_time: Optional[str] = Field(None, pattern=_HHMM)
    category: HabitCategory = "other"
    icon_emoji: Optional[str] = None
    color: Optional[str] = None
    created_date: str = Field(..., description="ISO8601 timestamp")
    is_active: bool = True

    @field_validator("specific_days")
    @classmethod
    def validate_days(cls, v: Optional[List[int]]) -> Optional[List[int]]:
        return _check_weekdays(v)


class HabitCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    type: HabitType = "boolean"
    target: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = None
    frequency: HabitFrequency = "daily"
    specific_days: Optional[List[int]] = None
    reminder_enabled: bool = False
    reminder_time: Optional[str] = Field(None, pattern=_HHMM)
    category: HabitCategory = "other"
    icon_emoji: Optional[str] = None
    color: Optional[str] = None

    @field_validator("specific_days")
    @classmethod
    def validate_days(cls, v: Optional[List[int]]) -> Optional[List[int]]:
        return _check_weekdays(v)


class HabitUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    target: Optional[float] = Field(None, ge=0)
    unit: Optional[str] = None
    frequency: Optional[HabitFrequency] = None
    specific_days: Optional[List[int]] = None
    reminder_enabled: Optional[bool] = None
    reminder_time: Optional[str] = Field(None, pattern=_HHMM)
    category: Optional[HabitCategory] = None
    icon_emoji: Optional[str] = None
    color: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("specific_days")
    @classmethod
    def validate_days(cls, v: Optional[List[int]]) -> Optional[List[int]]:
        return _check_weekdays(v)


class HabitLog(BaseModel):
    id: str
    user_id: str
    habit_id: str
    date: str = Field(..., description="YYYY-MM-DD")
    completed: bool
    value: Optional[float] = None
    notes: Optional[str] = None
    logged_at: str = Field(..., description="ISO8601 timestamp of the last write")


class HabitLogRequest(BaseModel):
    habit_id: str = Field(..., min_length=1)
    date: str = Field(..., description="YYYY-MM-DD or ISO8601 timestamp")
    completed: bool
    value: Optional[float] = None
    notes: Optional[str] = Field(None, max_length=2000)


class StreakPoint(BaseModel):
    date: str
    streak: int = Field(0, ge=0)


class HabitStats(BaseModel):
    habit_id: str
    current_streak: int = Field(0, ge=0)
    longest_streak: int = Field(0, ge=0)
    total_completions: int = Field(0, ge=0)
    completion_rate: float = Field(0.0, ge=0, le=100)
    average_value: Optional[float] = None
    last_completed_date: Optional[str] = None
    streak_history: List[StreakPoint] = Field(default_factory=list)


class HabitStatsResponse(BaseModel):
    habit: Habit
    stats: HabitStats


class TodayHabit(BaseModel):
    habit: Habit
    log: Optional[HabitLog] = None
    is_scheduled_today: bool = True


class TodayHabitsResponse(BaseModel):
    date: str
    habits: List[TodayHabit]
    completion_rate: float
    streak: int


class Routine(BaseModel):
    id: str
    user_id: str
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    type: RoutineType = "custom"
    habit_ids: List[str] = Field(default_factory=list)
    reminder_time: Optional[str] = Field(None, pattern=_HHMM)
    is_active: bool = True
    created_date: str
    updated_date: str


class RoutineCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    type: RoutineType = "custom"
    habit_ids: List[str] = Field(default_factory=list)
    reminder_time: Optional[str] = Field(None, pattern=_HHMM)
    is_active: bool = True


class RoutineUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    habit_ids: Optional[List[str]] = None
    reminder_time: Optional[str] = Field(None, pattern=_HHMM)
    is_active: Optional[bool] = None


class RoutineWithHabits(Routine):
    habits: List[Habit] = Field(default_factory=list)


class DailyCheckIn(BaseModel):
    id: str
    user_id: str
    date: str = Field(..., description="YYYY-MM-DD")
    mood: int = Field(..., ge=1, le=5)
    energy: int = Field(..., ge=1, le=5)
    sleep_hours: float = Field(..., ge=0, le=24)
    sleep_quality: int = Field(..., ge=1, le=5)
    notes: Optional[str] = None
    created_at: str


class CheckInRequest(BaseModel):
    date: str = Field(..., description="YYYY-MM-DD")
    mood: int = Field(..., ge=1, le=5)
    energy: int = Field(..., ge=1, le=5)
    sleep_hours: float = Field(..., ge=0, le=24)
    sleep_quality: int = Field(..., ge=1, le=5)
    notes: Optional[str] = Field(None, max_length=2000)


class CheckInAverages(BaseModel):
    days: int
    mood: Optional[float] = None
    energy: Optional[float] = None
    sleep_hours: Optional[float] = None
    sleep_quality: Optional[float] = None
    checked_in_today: bool = False

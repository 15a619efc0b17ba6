# -*- coding: utf-8 -*-
"""Workouts — Pydantic models."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

WorkoutMood = Literal["great", "good", "okay", "tired"]


class WorkoutSet(BaseModel):
    reps: Optional[int] = Field(None, ge=0)
    weight: Optional[float] = Field(None, ge=0, description="kg")
    duration: Optional[int] = Field(None, ge=0, description="seconds")
    completed: bool = False


class WorkoutExercise(BaseModel):
    exercise_id: str = Field(..., min_length=1)
    exercise_name: Optional[str] = None
    sets: List[WorkoutSet] = Field(default_factory=list)
    notes: Optional[str] = None


class WorkoutLog(BaseModel):
    id: str
    user_id: str
    date: str = Field(..., description="YYYY-MM-DD")
    routine_id: Optional[str] = None
    routine_name: Optional[str] = None
    exercises: List[WorkoutExercise] = Field(default_factory=list)
    total_duration: int = Field(0, ge=0, description="minutes")
    total_calories: int = Field(0, ge=0)
    mood: Optional[WorkoutMood] = None
    notes: Optional[str] = None
    created_at: str


class WorkoutCreateRequest(BaseModel):
    date: Optional[str] = Field(None, description="YYYY-MM-DD, defaults to today")
    routine_id: Optional[str] = None
    routine_name: Optional[str] = None
    exercises: List[WorkoutExercise] = Field(default_factory=list)
    total_duration: int = Field(0, ge=0)
    total_calories: int = Field(0, ge=0)
    mood: Optional[WorkoutMood] = None
    notes: Optional[str] = None


class WorkoutUpdateRequest(BaseModel):
    exercises: Optional[List[WorkoutExercise]] = None
    total_duration: Optional[int] = Field(None, ge=0)
    total_calories: Optional[int] = Field(None, ge=0)
    mood: Optional[WorkoutMood] = None
    notes: Optional[str] = None


class WorkoutStats(BaseModel):
    total_workouts: int
    total_duration: int
    total_calories: int
    current_streak: int
    longest_streak: int
    average_workout_duration: int
    average_calories_per_workout: int
    workouts_by_category: Dict[str, int] = Field(default_factory=dict)
    recent_workouts: List[WorkoutLog]


class PersonalRecords(BaseModel):
    max_weight: Optional[float] = None
    max_reps: Optional[int] = None
    max_duration: Optional[int] = None
    date: Optional[str] = None


class VolumePoint(BaseModel):
    date: str
    total_volume: float


class ExerciseProgress(BaseModel):
    exercise_id: str
    exercise_name: str
    personal_records: PersonalRecords
    volume_history: List[VolumePoint]
    last_performed: Optional[str] = None
    times_performed: int


class CalendarDay(BaseModel):
    date: str
    has_workout: bool
    total_calories: int
    total_duration: int


class RoutineExercise(BaseModel):
    exercise_id: str = Field(..., min_length=1)
    order: int = Field(0, ge=0)
    sets: int = Field(..., ge=1, le=50)
    reps: Optional[int] = Field(None, ge=0)
    duration: Optional[int] = Field(None, ge=0, description="seconds per set")
    rest_between_sets: int = Field(60, ge=0, description="seconds")
    notes: Optional[str] = None


class WorkoutRoutine(BaseModel):
    id: str
    user_id: str
    name: str
    description: Optional[str] = None
    exercises: List[RoutineExercise] = Field(default_factory=list)
    estimated_duration: int = Field(0, ge=0, description="minutes")
    estimated_calories: int = Field(0, ge=0)
    is_template: bool = False
    created_at: str
    updated_at: str


class WorkoutRoutineCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    description: Optional[str] = None
    exercises: List[RoutineExercise] = Field(default_factory=list)
    is_template: bool = False


class WorkoutRoutineUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=120)
    description: Optional[str] = None
    exercises: Optional[List[RoutineExercise]] = None


class DuplicateRoutineRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=120)

# -*- coding: utf-8 -*-
"""Exercises — Pydantic models."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

ExerciseCategory = Literal["cardio", "strength", "flexibility", "sport"]
ExerciseDifficulty = Literal["beginner", "intermediate", "advanced"]


class Exercise(BaseModel):
    id: str
    name: str
    description: str = ""
    category: ExerciseCategory
    muscle_group: Optional[str] = None
    equipment: List[str] = Field(default_factory=list)
    difficulty: ExerciseDifficulty = "beginner"
    calories_per_minute: float = Field(0.0, ge=0)
    video_url: Optional[str] = None
    image_url: Optional[str] = None
    is_custom: bool = False
    user_id: Optional[str] = None
    created_at: str = ""


class ExerciseCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    description: str = ""
    category: ExerciseCategory
    muscle_group: Optional[str] = None
    equipment: List[str] = Field(default_factory=list)
    difficulty: ExerciseDifficulty = "beginner"
    calories_per_minute: float = Field(0.0, ge=0, le=50)
    video_url: Optional[str] = None
    image_url: Optional[str] = None


class ExerciseUpdateRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=120)
    description: Optional[str] = None
    category: Optional[ExerciseCategory] = None
    muscle_group: Optional[str] = None
    equipment: Optional[List[str]] = None
    difficulty: Optional[ExerciseDifficulty] = None
    calories_per_minute: Optional[float] = Field(None, ge=0, le=50)
    video_url: Optional[str] = None
    image_url: Optional[str] = None


class ExerciseFilter(BaseModel):
    category: Optional[ExerciseCategory] = None
    difficulty: Optional[ExerciseDifficulty] = None
    muscle_group: Optional[str] = None
    equipment: Optional[str] = None
    search_term: Optional[str] = None


class ExerciseMetadata(BaseModel):
    equipment: List[str]
    muscle_groups: List[str]

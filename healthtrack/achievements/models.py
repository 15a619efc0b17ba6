# -*- coding: utf-8 -*-
"""Achievements — Pydantic models."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

AchievementCategory = Literal["streak", "milestone", "routine", "special"]


class Achievement(BaseModel):
    id: str
    name: str
    description: str
    icon_emoji: str
    requirement: str = Field(..., description="Predicate key evaluated by the unlock engine")
    points: int = Field(..., ge=0)
    category: AchievementCategory


class UnlockedAchievement(BaseModel):
    achievement_id: str
    unlocked_date: str = Field(..., description="ISO8601 timestamp")
    habit_id: Optional[str] = None


class UserAchievement(BaseModel):
    user_id: str
    achievements: List[UnlockedAchievement] = Field(default_factory=list)
    total_points: int = Field(0, ge=0)
    level: int = Field(1, ge=1)


class AchievementProgress(BaseModel):
    achievement: Achievement
    unlocked: bool
    unlocked_date: Optional[str] = None
    progress: float = Field(0.0, ge=0, le=100)
    progress_details: str = ""


class AchievementSummary(BaseModel):
    total_points: int
    level: int
    points_for_next_level: int
    unlocked_count: int
    total_count: int
    achievements: List[AchievementProgress]


class CheckAchievementsRequest(BaseModel):
    habit_id: Optional[str] = None


class CheckAchievementsResponse(BaseModel):
    newly_unlocked: List[Achievement]
    total_points: int
    level: int

# -*- coding: utf-8 -*-
"""Weight — Pydantic models."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class WeightLog(BaseModel):
    id: str
    user_id: str
    date: str = Field(..., description="YYYY-MM-DD")
    weight: float = Field(..., gt=0, description="kg")
    bmi: float = Field(0.0, ge=0)
    body_fat: Optional[float] = Field(None, ge=0, le=100)
    notes: Optional[str] = None
    created_at: str


class WeightLogCreateRequest(BaseModel):
    date: Optional[str] = Field(None, description="YYYY-MM-DD, defaults to today")
    weight: float = Field(..., gt=0, le=700)
    body_fat: Optional[float] = Field(None, ge=0, le=100)
    notes: Optional[str] = None


class WeightLogUpdateRequest(BaseModel):
    weight: Optional[float] = Field(None, gt=0, le=700)
    body_fat: Optional[float] = Field(None, ge=0, le=100)
    notes: Optional[str] = None


class WeightHistoryResponse(BaseModel):
    logs: List[WeightLog]
    latest: Optional[WeightLog] = None
    average_weight: float
    weight_change: float
    predicted_weight: Optional[float] = None
    days_to_goal: Optional[int] = None

# -*- coding: utf-8 -*-
"""Insights — Pydantic models."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

InsightType = Literal["alert", "suggestion", "achievement", "tip"]
InsightPriority = Literal["low", "medium", "high"]


class Insight(BaseModel):
    id: str
    user_id: str
    type: InsightType
    priority: InsightPriority
    title: str
    message: str
    actionable: Optional[str] = None
    action_link: Optional[str] = None
    created_at: str
    read: bool = False


class InsightCreateRequest(BaseModel):
    type: InsightType
    priority: InsightPriority
    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    actionable: Optional[str] = None
    action_link: Optional[str] = None


class UnreadCount(BaseModel):
    unread: int


class AutoInsightsResult(BaseModel):
    ran: bool
    created: List[Insight] = Field(default_factory=list)

# -*- coding: utf-8 -*-
"""Health — API endpoints (measurements, goals, hydration, stats, analytics, weekly reports)."""

from __future__ import annotations

from datetime import date as date_cls
from datetime import timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from ..ai.models import WeeklyInsightsData
from ..auth.security import get_current_user
from ..utils import parse_day
from . import analytics, user_stats, water
from . import goals as goal_store
from . import measurements as measurement_store
from . import summaries as summary_store
from .models import (
    AnalyticsTrends,
    BodyMeasurements,
    ComplianceDay,
    DashboardSummary,
    GoalCategory,
    GoalProgressRequest,
    GoalStatus,
    HealthGoal,
    HealthGoalCreateRequest,
    HealthGoalDetails,
    HealthGoalUpdateRequest,
    HydrationStatus,
    MeasurementChange,
    MeasurementsCreateRequest,
    MeasurementsUpdateRequest,
    MeasurementType,
    MilestoneRequest,
    SummaryTrend,
    TrendPeriod,
    UserStatsResponse,
    WaterRequest,
    WeeklySummary,
)

measurements_router = APIRouter(prefix="/api/measurements", tags=["Measurements"])
goals_router = APIRouter(prefix="/api/goals", tags=["Health goals"])
water_router = APIRouter(prefix="/api/water", tags=["Hydration"])
stats_router = APIRouter(prefix="/api/stats", tags=["User stats"])
analytics_router = APIRouter(prefix="/api/analytics", tags=["Analytics"])
reports_router = APIRouter(prefix="/api/reports", tags=["Reports"])


class AverageComplianceResponse(BaseModel):
    weeks: int
    compliance: int


def _day_or_400(value: Optional[str]) -> date_cls:
    day = parse_day(value)
    if day is None:
        raise HTTPException(status_code=400, detail=f"Invalid date: {value}")
    return day


def _optional_day(value: Optional[str]) -> Optional[date_cls]:
    return _day_or_400(value) if value else None


# ---- Body measurements ----


@measurements_router.get("", response_model=List[BodyMeasurements], summary="List body measurements")
def list_measurements(
    start: Optional[str] = Query(default=None),
    end: Optional[str] = Query(default=None),
    user: dict = Depends(get_current_user),
):
    if start and end:
        return measurement_store.get_by_date_range(user["id"], _day_or_400(start), _day_or_400(end))
    return measurement_store.get_all(user["id"])


@measurements_router.post("", response_model=BodyMeasurements, status_code=201, summary="Log body measurements")
def create_measurements(request: MeasurementsCreateRequest, user: dict = Depends(get_current_user)):
    _optional_day(request.date)
    return measurement_store.create(user["id"], request)


@measurements_router.get("/latest", response_model=Optional[BodyMeasurements])
def latest_measurements(user: dict = Depends(get_current_user)):
    return measurement_store.get_latest(user["id"])


@measurements_router.get("/change", response_model=MeasurementChange)
def measurement_change(
    measurement: MeasurementType = Query(...),
    start: str = Query(...),
    end: str = Query(...),
    user: dict = Depends(get_current_user),
):
    lo, hi = _day_or_400(start), _day_or_400(end)
    change = measurement_store.get_measurement_change(user["id"], measurement, lo, hi)
    return MeasurementChange(measurement=measurement, start=lo.isoformat(), end=hi.isoformat(), change=change)


@measurements_router.get("/{entry_id}", response_model=BodyMeasurements)
def get_measurements(entry_id: str, user: dict = Depends(get_current_user)):
    entry = measurement_store.get_by_id(user["id"], entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Measurements not found")
    return entry


@measurements_router.patch("/{entry_id}", response_model=BodyMeasurements)
def update_measurements(entry_id: str, request: MeasurementsUpdateRequest, user: dict = Depends(get_current_user)):
    _optional_day(request.date)
    entry = measurement_store.update(user["id"], entry_id, request)
    if entry is None:
        raise HTTPException(status_code=404, detail="Measurements not found")
    return entry


@measurements_router.delete("/{entry_id}")
def delete_measurements(entry_id: str, user: dict = Depends(get_current_user)):
    if not measurement_store.delete(user["id"], entry_id):
        raise HTTPException(status_code=404, detail="Measurements not found")
    return {"ok": True}


# ---- Health goals ----


def _goal_or_404(user_id: str, goal_id: str) -> HealthGoal:
    goal = goal_store.get_by_id(user_id, goal_id)
    if goal is None:
        raise HTTPException(status_code=404, detail="Goal not found")
    return goal


@goals_router.get("", response_model=List[HealthGoal], summary="List health goals, newest first")
def list_goals(
    status: Optional[GoalStatus] = Query(default=None),
    category: Optional[GoalCategory] = Query(default=None),
    user: dict = Depends(get_current_user),
):
    goals = goal_store.get_all(user["id"])
    if status:
        goals = [g for g in goals if g.status == status]
    if category:
        goals = [g for g in goals if g.category == category]
    return goals


@goals_router.post("", response_model=HealthGoal, status_code=201, summary="Create a health goal")
def create_goal(request: HealthGoalCreateRequest, user: dict = Depends(get_current_user)):
    _day_or_400(request.target_date)
    return goal_store.create(user["id"], request)


@goals_router.get("/{goal_id}", response_model=HealthGoalDetails)
def get_goal(goal_id: str, user: dict = Depends(get_current_user)):
    goal = _goal_or_404(user["id"], goal_id)
    return HealthGoalDetails(
        goal=goal,
        progress_percentage=goal_store.progress_percentage(goal),
        days_remaining=goal_store.days_remaining(goal),
    )


@goals_router.patch("/{goal_id}", response_model=HealthGoal)
def update_goal(goal_id: str, request: HealthGoalUpdateRequest, user: dict = Depends(get_current_user)):
    _optional_day(request.target_date)
    goal = goal_store.update(user["id"], goal_id, request)
    if goal is None:
        raise HTTPException(status_code=404, detail="Goal not found")
    return goal


@goals_router.post("/{goal_id}/progress", response_model=HealthGoal, summary="Record the current value")
def update_goal_progress(goal_id: str, request: GoalProgressRequest, user: dict = Depends(get_current_user)):
    goal = goal_store.update_progress(user["id"], goal_id, request.current_value)
    if goal is None:
        raise HTTPException(status_code=404, detail="Goal not found")
    return goal


@goals_router.post("/{goal_id}/milestones", response_model=HealthGoal, status_code=201)
def add_goal_milestone(goal_id: str, request: MilestoneRequest, user: dict = Depends(get_current_user)):
    goal = goal_store.add_milestone(user["id"], goal_id, request)
    if goal is None:
        raise HTTPException(status_code=404, detail="Goal not found")
    return goal


@goals_router.delete("/{goal_id}")
def delete_goal(goal_id: str, user: dict = Depends(get_current_user)):
    if not goal_store.delete(user["id"], goal_id):
        raise HTTPException(status_code=404, detail="Goal not found")
    return {"ok": True}


# ---- Hydration ----


@water_router.get("", response_model=HydrationStatus, summary="Water intake for one day")
def get_water(date: Optional[str] = Query(default=None), user: dict = Depends(get_current_user)):
    return water.get_status(user["id"], _optional_day(date))


@water_router.post("", response_model=HydrationStatus, summary="Add water to a day")
def add_water(request: WaterRequest, user: dict = Depends(get_current_user)):
    day = _optional_day(request.date)
    water.add(user["id"], request.amount_ml, day)
    return water.get_status(user["id"], day)


@water_router.put("", response_model=HydrationStatus, summary="Set the water total of a day")
def set_water(request: WaterRequest, user: dict = Depends(get_current_user)):
    day = _optional_day(request.date)
    water.set_amount(user["id"], request.amount_ml, day)
    return water.get_status(user["id"], day)


# ---- User stats ----


def _stats_response(user_id: str) -> UserStatsResponse:
    return UserStatsResponse(
        stats=user_stats.get(user_id),
        unlocked=user_stats.get_unlocked_badges(user_id),
        locked=user_stats.get_locked_badges(user_id),
    )


@stats_router.get("", response_model=UserStatsResponse, summary="Activity counters, streak and badges")
def get_stats(user: dict = Depends(get_current_user)):
    return _stats_response(user["id"])


@stats_router.post("/activity", response_model=UserStatsResponse, summary="Record activity for today")
def record_activity(user: dict = Depends(get_current_user)):
    user_stats.record_activity(user["id"])
    return _stats_response(user["id"])


# ---- Analytics ----


@analytics_router.get("/dashboard", response_model=DashboardSummary, summary="Today at a glance")
def dashboard(user: dict = Depends(get_current_user)):
    return analytics.get_dashboard_summary(user["id"])


@analytics_router.get("/trends", response_model=AnalyticsTrends)
def trends(period: TrendPeriod = Query(default="month"), user: dict = Depends(get_current_user)):
    return analytics.get_trends(user["id"], period)


@analytics_router.get("/compliance", response_model=List[ComplianceDay], summary="Daily compliance scores")
def compliance(
    start: Optional[str] = Query(default=None, description="YYYY-MM-DD, defaults to 6 days before end"),
    end: Optional[str] = Query(default=None, description="YYYY-MM-DD, defaults to today"),
    user: dict = Depends(get_current_user),
):
    hi = _optional_day(end) or date_cls.today()
    lo = _optional_day(start) or hi - timedelta(days=6)
    if lo > hi:
        raise HTTPException(status_code=400, detail="start must not be after end")
    return analytics.get_compliance_days(user["id"], lo, hi)


@analytics_router.get("/weekly-data", response_model=WeeklyInsightsData, summary="Input for the weekly AI insights")
def weekly_data(date: Optional[str] = Query(default=None), user: dict = Depends(get_current_user)):
    monday, sunday = summary_store.week_bounds(_optional_day(date) or date_cls.today())
    return analytics.get_weekly_insights_data(user["id"], monday, sunday)


# ---- Weekly reports ----


@reports_router.get("/weekly", response_model=List[WeeklySummary], summary="Stored weekly summaries, newest first")
def list_weekly(weeks: Optional[int] = Query(default=None, ge=1, le=520), user: dict = Depends(get_current_user)):
    if weeks:
        return summary_store.get_last_n_weeks(user["id"], weeks)
    return summary_store.get_all(user["id"])


@reports_router.post("/weekly", response_model=WeeklySummary, summary="Build the summary of a week")
def generate_weekly(date: Optional[str] = Query(default=None), user: dict = Depends(get_current_user)):
    return summary_store.generate(user["id"], _optional_day(date))


@reports_router.get("/weekly/trends", response_model=SummaryTrend)
def weekly_trends(weeks: int = Query(default=8, ge=1, le=520), user: dict = Depends(get_current_user)):
    return summary_store.get_trend_data(user["id"], weeks)


@reports_router.get("/weekly/compliance", response_model=AverageComplianceResponse)
def weekly_compliance(weeks: int = Query(default=4, ge=1, le=520), user: dict = Depends(get_current_user)):
    return AverageComplianceResponse(weeks=weeks, compliance=summary_store.get_average_compliance(user["id"], weeks))


@reports_router.delete("/weekly/{summary_id}")
def delete_weekly(summary_id: str, user: dict = Depends(get_current_user)):
    if not summary_store.delete(user["id"], summary_id):
        raise HTTPException(status_code=404, detail="Summary not found")
    return {"ok": True}

# -*- coding: utf-8 -*-
"""Health — stored weekly summaries (Monday to Sunday) with AI insight lines."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import List, Optional

from .. import blobstore
from ..ai import insights as ai_insights
from ..utils import DayLike, new_id, to_day, utc_now_iso
from . import analytics
from .models import SummaryTrend, WeeklySummary

log = logging.getLogger(__name__)

ENTITY = "weekly_summaries"


def _load(user_id: str) -> List[WeeklySummary]:
    return blobstore.load_models(user_id, ENTITY, WeeklySummary)


def _save(user_id: str, summaries: List[WeeklySummary]) -> None:
    blobstore.save_models(user_id, ENTITY, summaries, WeeklySummary)


def week_bounds(day: DayLike) -> tuple:
    monday = to_day(day) - timedelta(days=to_day(day).weekday())
    return monday, monday + timedelta(days=6)


def get_all(user_id: str) -> List[WeeklySummary]:
    """Newest week first."""
    return sorted(_load(user_id), key=lambda s: s.week_start, reverse=True)


def get_by_id(user_id: str, summary_id: str) -> Optional[WeeklySummary]:
    for summary in _load(user_id):
        if summary.id == summary_id:
            return summary
    return None


def get_by_week(user_id: str, day: DayLike) -> Optional[WeeklySummary]:
    monday, _ = week_bounds(day)
    for summary in _load(user_id):
        if summary.week_start == monday.isoformat():
            return summary
    return None


def get_latest(user_id: str) -> Optional[WeeklySummary]:
    summaries = get_all(user_id)
    return summaries[0] if summaries else None


def get_last_n_weeks(user_id: str, n: int) -> List[WeeklySummary]:
    return get_all(user_id)[:n]


def delete(user_id: str, summary_id: str) -> bool:
    summaries = _load(user_id)
    kept = [s for s in summaries if s.id != summary_id]
    if len(kept) == len(summaries):
        return False
    _save(user_id, kept)
    return True


def generate(user_id: str, day: Optional[DayLike] = None) -> WeeklySummary:
    """Build (or rebuild) the summary of the week containing ``day``."""
    monday, sunday = week_bounds(day or date.today())
    data = analytics.get_weekly_insights_data(user_id, monday, sunday)
    totals = list(analytics.daily_totals(user_id, monday, sunday).values())
    compliant = analytics.count_compliant(analytics.get_compliance_days(user_id, monday, sunday))
    insights = ai_insights.generate_weekly_insights(data)

    summaries = _load(user_id)
    existing = next((s for s in summaries if s.week_start == monday.isoformat()), None)
    summary = WeeklySummary(
        id=existing.id if existing else new_id("summary"),
        user_id=user_id,
        week_start=monday.isoformat(),
        week_end=sunday.isoformat(),
        avg_calories=data.avg_calories,
        avg_protein=data.avg_protein,
        avg_carbs=round(sum(t.carbs for t in totals) / len(totals)) if totals else 0,
        avg_fat=round(sum(t.fat for t in totals) / len(totals)) if totals else 0,
        workouts_done=data.workouts_done,
        compliance_days=compliant,
        weight_change=data.weight_change,
        insights=[insights.summary] + insights.highlights + insights.suggestions,
        created_at=utc_now_iso(),
    )
    kept = [s for s in summaries if s.week_start != summary.week_start]
    _save(user_id, kept + [summary])
    log.info("weekly summary %s for user %s", summary.week_start, user_id)
    return summary


def get_average_compliance(user_id: str, weeks: int = 4) -> int:
    """Compliant days over the last ``weeks`` summaries, as a percentage of their days."""
    summaries = get_last_n_weeks(user_id, weeks)
    if not summaries:
        return 0
    return round(sum(s.compliance_days for s in summaries) / (len(summaries) * 7) * 100)


def get_trend_data(user_id: str, weeks: int = 8) -> SummaryTrend:
    summaries = list(reversed(get_last_n_weeks(user_id, weeks)))
    return SummaryTrend(
        labels=[s.week_start for s in summaries],
        calories=[round(s.avg_calories) for s in summaries],
        protein=[round(s.avg_protein) for s in summaries],
        workouts=[s.workouts_done for s in summaries],
        compliance=[round(s.compliance_days / 7 * 100) for s in summaries],
    )


def exists_for_week(user_id: str, day: Optional[DayLike] = None) -> bool:
    return get_by_week(user_id, day or date.today()) is not None

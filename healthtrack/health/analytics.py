# -*- coding: utf-8 -*-
"""Health — dashboard summary, compliance scoring, trends and correlations.

Daily nutrition is derived from the meal log; a day "has nutrition data"
when at least one meal was logged on it. Goals come from the profile
(Mifflin-St Jeor) and fall back to fixed defaults for the dashboard.
"""

from __future__ import annotations

import math
from collections import Counter
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence

from ..ai.models import WeeklyInsightsData
from ..meals import storage as meal_store
from ..meals.models import NutritionTotals
from ..profile import goals as profile_goals
from ..profile import storage as profile_store
from ..profile.models import NutritionGoals
from ..recipes import storage as recipe_store
from ..utils import DayLike, day_str, iter_days, to_day
from ..weight import storage as weight_store
from ..workouts import storage as workout_store
from . import user_stats, water
from .models import (
    AnalyticsTrends,
    CaloriesSummary,
    ComplianceDay,
    ComplianceTrend,
    Correlations,
    DashboardSummary,
    FavoriteRecipe,
    MacroSummary,
    NutritionTrend,
    TodayWorkout,
    WeightTrend,
    WorkoutTrend,
)

DEFAULT_CALORIES = 2000
DEFAULT_PROTEIN = 150
DEFAULT_CARBS = 200
DEFAULT_FAT = 60

PERIOD_DAYS = {"week": 7, "month": 30, "quarter": 90, "year": 365}
COMPLIANT_SCORE = 70
PREDICTION_DAYS = 30


def nutrition_goals(user_id: str) -> Optional[NutritionGoals]:
    profile = profile_store.get(user_id)
    if profile is None:
        return None
    return profile_goals.calculate_nutrition_goals(profile)


def daily_totals(user_id: str, start: DayLike, end: DayLike) -> Dict[str, NutritionTotals]:
    """Nutrition per day for days with at least one logged meal."""
    sums: Dict[str, Dict[str, float]] = {}
    for meal in meal_store.get_by_date_range(user_id, start, end):
        day = sums.setdefault(meal.date, {"calories": 0.0, "protein": 0.0, "carbs": 0.0, "fat": 0.0, "fiber": 0.0})
        for key, value in meal_store.meal_nutrition(user_id, meal).model_dump().items():
            day[key] += value
    return {d: NutritionTotals(**values) for d, values in sums.items()}


def _percentage(consumed: float, goal: float) -> float:
    if goal <= 0:
        return 0.0
    return round(min(100.0, consumed / goal * 100), 1)


def _monday(day: date) -> date:
    return day - timedelta(days=day.weekday())


def _favorite_recipes(user_id: str, start: date, end: date, limit: int = 3) -> List[FavoriteRecipe]:
    counts = Counter(m.recipe_id for m in meal_store.get_by_date_range(user_id, start, end) if m.recipe_id)
    favorites: List[FavoriteRecipe] = []
    for recipe_id, times in counts.most_common(limit):
        recipe = recipe_store.get_by_id(user_id, recipe_id)
        if recipe is not None:
            favorites.append(FavoriteRecipe(id=recipe.id, name=recipe.name, times_cooked=times))
    return favorites


def get_dashboard_summary(user_id: str, today: Optional[date] = None) -> DashboardSummary:
    today = today or date.today()
    totals = daily_totals(user_id, today, today).get(today.isoformat(), NutritionTotals())
    goals = nutrition_goals(user_id)
    goal_calories = goals.daily_calories if goals else DEFAULT_CALORIES
    macro_goals = {
        "protein": goals.daily_protein if goals else DEFAULT_PROTEIN,
        "carbs": goals.daily_carbs if goals else DEFAULT_CARBS,
        "fat": goals.daily_fat if goals else DEFAULT_FAT,
    }

    workouts = workout_store.get_by_date(user_id, today)
    today_workout = None
    if workouts:
        first = workouts[0]
        today_workout = TodayWorkout(id=first.id, name=first.routine_name or "Workout", duration=first.total_duration)

    latest = weight_store.get_latest(user_id)
    return DashboardSummary(
        date=today.isoformat(),
        calories=CaloriesSummary(
            consumed=totals.calories,
            goal=goal_calories,
            remaining=max(0.0, goal_calories - totals.calories),
            percentage=_percentage(totals.calories, goal_calories),
        ),
        macros={
            key: MacroSummary(
                consumed=getattr(totals, key), goal=goal, percentage=_percentage(getattr(totals, key), goal)
            )
            for key, goal in macro_goals.items()
        },
        hydration=water.get_status(user_id, today),
        today_workout=today_workout,
        current_weight=latest.weight if latest else None,
        week_weight_change=weight_store.get_weight_change(user_id, today - timedelta(days=7), today),
        current_streak=user_stats.get(user_id).current_streak,
        favorite_recipes=_favorite_recipes(user_id, _monday(today), today),
    )


def get_compliance_days(user_id: str, start: DayLike, end: DayLike) -> List[ComplianceDay]:
    """Daily score: calories within 10% of goal (40), protein at 90% of goal (30),
    a workout (20), three or more meals (10)."""
    lo, hi = to_day(start), to_day(end)
    goals = nutrition_goals(user_id)
    totals = daily_totals(user_id, lo, hi)
    workout_days = {w.date for w in workout_store.get_by_date_range(user_id, lo, hi)}
    meal_counts = Counter(m.date for m in meal_store.get_by_date_range(user_id, lo, hi))

    days: List[ComplianceDay] = []
    for day in iter_days(lo, hi):
        key = day.isoformat()
        nutrition = totals.get(key)
        calories_met = protein_met = False
        if nutrition is not None and goals is not None:
            calories_met = abs(nutrition.calories - goals.daily_calories) <= goals.daily_calories * 0.1
            protein_met = nutrition.protein >= goals.daily_protein * 0.9
        has_workout = key in workout_days
        meals = meal_counts.get(key, 0)

        score = 0
        if calories_met:
            score += 40
        if protein_met:
            score += 30
        if has_workout:
            score += 20
        if meals >= 3:
            score += 10
        days.append(
            ComplianceDay(
                date=key,
                calories_goal_met=calories_met,
                protein_goal_met=protein_met,
                workout_completed=has_workout,
                meals_logged=meals,
                overall_compliance=score,
            )
        )
    return days


def count_compliant(days: Sequence[ComplianceDay]) -> int:
    return sum(1 for d in days if d.overall_compliance >= COMPLIANT_SCORE)


def _nutrition_trend(user_id: str, start: date, end: date, days: int) -> NutritionTrend:
    interval = 7 if days > 90 else 3 if days > 30 else 1
    totals = daily_totals(user_id, start, end)
    trend = NutritionTrend()
    for offset in range(0, days, interval):
        bucket_start = start + timedelta(days=offset)
        bucket = [
            totals[d.isoformat()]
            for d in iter_days(bucket_start, min(end, bucket_start + timedelta(days=interval - 1)))
            if d.isoformat() in totals
        ]
        if not bucket:
            continue
        trend.labels.append(bucket_start.isoformat())
        trend.calories.append(round(sum(t.calories for t in bucket) / len(bucket)))
        trend.protein.append(round(sum(t.protein for t in bucket) / len(bucket)))
        trend.carbs.append(round(sum(t.carbs for t in bucket) / len(bucket)))
        trend.fat.append(round(sum(t.fat for t in bucket) / len(bucket)))
    return trend


def _weight_trend(user_id: str, start: date, end: date) -> WeightTrend:
    logs = sorted(weight_store.get_by_date_range(user_id, start, end), key=lambda e: (e.date, e.created_at))
    trend = WeightTrend(
        labels=[e.date for e in logs],
        weight=[e.weight for e in logs],
        bmi=[e.bmi for e in logs],
    )
    trend.predicted_weight = list(trend.weight)
    prediction = weight_store.predict_weight(user_id, PREDICTION_DAYS, today=end)
    if prediction is not None:
        trend.predicted_weight.append(prediction)
    return trend


def _workout_trend(user_id: str, start: date, end: date) -> WorkoutTrend:
    weeks: Dict[str, List[int]] = {}
    for w in workout_store.get_by_date_range(user_id, start, end):
        weeks.setdefault(_monday(to_day(w.date)).isoformat(), []).append(w.total_duration)
    trend = WorkoutTrend()
    for monday in sorted(weeks):
        durations = weeks[monday]
        trend.labels.append(monday)
        trend.workouts.append(len(durations))
        trend.avg_duration.append(round(sum(durations) / len(durations)))
    return trend


def _compliance_trend(user_id: str, end: date, days: int) -> ComplianceTrend:
    trend = ComplianceTrend()
    for i in range(math.ceil(days / 7)):
        week_end = end - timedelta(days=7 * i)
        week_start = week_end - timedelta(days=6)
        compliant = count_compliant(get_compliance_days(user_id, week_start, week_end))
        trend.labels.insert(0, week_start.isoformat())
        trend.compliance_rate.insert(0, round(compliant / 7 * 100))
    return trend


def pearson_correlation(xs: Sequence[float], ys: Sequence[float]) -> float:
    """Pearson coefficient; 0 for empty or constant series."""
    n = min(len(xs), len(ys))
    if n == 0:
        return 0.0
    xs, ys = xs[:n], ys[:n]
    sum_x, sum_y = sum(xs), sum(ys)
    sum_xy = sum(x * y for x, y in zip(xs, ys))
    sum_x2 = sum(x * x for x in xs)
    sum_y2 = sum(y * y for y in ys)
    numerator = n * sum_xy - sum_x * sum_y
    denominator = math.sqrt(max(0.0, (n * sum_x2 - sum_x * sum_x) * (n * sum_y2 - sum_y * sum_y)))
    if denominator == 0:
        return 0.0
    return numerator / denominator


def _correlations(user_id: str, start: date, end: date) -> Correlations:
    logs = weight_store.get_by_date_range(user_id, start, end)
    totals = daily_totals(user_id, start, end)
    weights = [e.weight for e in logs]
    calories = [totals[e.date].calories if e.date in totals else 0.0 for e in logs]
    return Correlations(weight_vs_calories=round(pearson_correlation(weights, calories), 2))


def get_trends(user_id: str, period: str = "month", today: Optional[date] = None) -> AnalyticsTrends:
    """Trends over the last 7/30/90/365 days, today included."""
    end = today or date.today()
    days = PERIOD_DAYS[period]
    start = end - timedelta(days=days - 1)
    return AnalyticsTrends(
        period=period,
        nutrition_trends=_nutrition_trend(user_id, start, end, days),
        weight_trends=_weight_trend(user_id, start, end),
        workout_consistency=_workout_trend(user_id, start, end),
        compliance=_compliance_trend(user_id, end, days),
        correlations=_correlations(user_id, start, end),
    )


def get_weekly_insights_data(user_id: str, week_start: DayLike, week_end: DayLike) -> WeeklyInsightsData:
    lo, hi = to_day(week_start), to_day(week_end)
    totals = list(daily_totals(user_id, lo, hi).values())
    avg_calories = round(sum(t.calories for t in totals) / len(totals)) if totals else 0
    avg_protein = round(sum(t.protein for t in totals) / len(totals)) if totals else 0
    compliant = count_compliant(get_compliance_days(user_id, lo, hi))
    return WeeklyInsightsData(
        period=f"{day_str(lo)} - {day_str(hi)}",
        avg_calories=avg_calories,
        avg_protein=avg_protein,
        workouts_done=len(workout_store.get_by_date_range(user_id, lo, hi)),
        compliance=min(100, round(compliant / 7 * 100)),
        weight_change=weight_store.get_weight_change(user_id, lo, hi),
    )

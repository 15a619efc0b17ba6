# -*- coding: utf-8 -*-
"""Insights — rule-based insights over the last 7 days, at most once a day.

Rules (need 3+ days with meals and a profile for goals):
  protein under 70% of goal on average and on 3+ days -> high alert
  fiber under 20 g/day -> suggestion
  calories more than 300 off goal -> alert (over) or suggestion (under)
  5+ workouts -> achievement; 0-1 workouts with 5+ tracked days -> suggestion
  6+ tracked days -> achievement
  protein under 20% of calories -> tip
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional

from .. import blobstore
from ..health import analytics
from ..utils import parse_timestamp
from ..workouts import storage as workout_store
from . import storage as insight_store
from .models import AutoInsightsResult, Insight, InsightCreateRequest

log = logging.getLogger(__name__)

STATE_ENTITY = "auto_insights_state"
CHECK_INTERVAL = timedelta(hours=24)
WINDOW_DAYS = 7
MIN_TRACKED_DAYS = 3


def last_check(user_id: str) -> Optional[datetime]:
    state = blobstore.load_object(user_id, STATE_ENTITY) or {}
    return parse_timestamp(state.get("last_check"))


def should_run(user_id: str, now: Optional[datetime] = None) -> bool:
    previous = last_check(user_id)
    if previous is None:
        return True
    return (now or datetime.now(timezone.utc)) - previous >= CHECK_INTERVAL


def _mark_run(user_id: str, now: datetime) -> None:
    blobstore.save_object(user_id, STATE_ENTITY, {"last_check": now.isoformat(timespec="seconds")})


def build_insights(user_id: str, today: date) -> Optional[List[InsightCreateRequest]]:
    """Insights for the week ending ``today``; None when there is too little data."""
    start = today - timedelta(days=WINDOW_DAYS - 1)
    days = list(analytics.daily_totals(user_id, start, today).values())
    if len(days) < MIN_TRACKED_DAYS:
        return None
    goals = analytics.nutrition_goals(user_id)
    if goals is None:
        return None

    n = len(days)
    avg_calories = sum(d.calories for d in days) / n
    avg_protein = sum(d.protein for d in days) / n
    avg_fiber = sum(d.fiber for d in days) / n
    out: List[InsightCreateRequest] = []

    low_protein = goals.daily_protein * 0.7
    if avg_protein < low_protein and sum(1 for d in days if d.protein < low_protein) >= 3:
        out.append(
            InsightCreateRequest(
                type="alert",
                priority="high",
                title="Protéines insuffisantes",
                message=(
                    f"Votre apport protéique moyen est de {round(avg_protein)}g/jour, en-dessous de votre objectif "
                    f"de {goals.daily_protein}g. Augmentez votre consommation de viandes, poissons, œufs ou légumineuses."
                ),
                actionable="Voir des recettes riches en protéines",
                action_link="/recipes?filter=high-protein",
            )
        )

    if avg_fiber < 20:
        out.append(
            InsightCreateRequest(
                type="suggestion",
                priority="medium",
                title="Augmentez vos fibres",
                message=(
                    f"Votre apport en fibres est faible ({round(avg_fiber)}g/jour). Visez au moins 25g par jour "
                    "en ajoutant plus de légumes, fruits et céréales complètes."
                ),
                actionable="Recettes riches en fibres",
                action_link="/recipes",
            )
        )

    deviation = avg_calories - goals.daily_calories
    if abs(deviation) > 300:
        over = deviation > 0
        out.append(
            InsightCreateRequest(
                type="alert" if over else "suggestion",
                priority="high" if abs(deviation) > 500 else "medium",
                title="Calories au-dessus de l'objectif" if over else "Calories en-dessous de l'objectif",
                message=(
                    f"Vous consommez en moyenne {round(abs(deviation))} calories de "
                    f"{'plus' if over else 'moins'} que votre objectif quotidien."
                ),
                actionable="Voir mes objectifs",
                action_link="/nutrition",
            )
        )

    workouts = len(workout_store.get_by_date_range(user_id, start, today))
    if workouts >= 5:
        out.append(
            InsightCreateRequest(
                type="achievement",
                priority="low",
                title="Streak d'entraînement !",
                message=f"Incroyable ! Vous avez fait {workouts} entraînements cette semaine. Continuez comme ça !",
            )
        )
    elif workouts <= 1 and n >= 5:
        out.append(
            InsightCreateRequest(
                type="suggestion",
                priority="medium",
                title="Manque d'activité physique",
                message=(
                    f"Vous n'avez fait que {workouts} entraînement(s) cette semaine. "
                    "L'exercice régulier est important pour atteindre vos objectifs."
                ),
                actionable="Voir les entraînements",
                action_link="/fitness",
            )
        )

    if n >= 6:
        out.append(
            InsightCreateRequest(
                type="achievement",
                priority="low",
                title="Excellent suivi !",
                message=(
                    f"Bravo ! Vous avez tracké vos repas {n} jours sur 7 cette semaine. "
                    "La constance est la clé du succès !"
                ),
            )
        )

    if avg_calories > 0 and avg_protein * 4 / avg_calories < 0.2:
        out.append(
            InsightCreateRequest(
                type="tip",
                priority="low",
                title="Conseil nutritionnel",
                message=(
                    "Vos protéines représentent moins de 20% de vos calories. Essayez d'inclure une source de "
                    "protéines à chaque repas pour plus de satiété et de récupération musculaire."
                ),
                actionable="En savoir plus",
                action_link="/nutrition",
            )
        )
    return out


def run_auto_insights(
    user_id: str, now: Optional[datetime] = None, today: Optional[date] = None, force: bool = False
) -> AutoInsightsResult:
    now = now or datetime.now(timezone.utc)
    if not force and not should_run(user_id, now):
        return AutoInsightsResult(ran=False)
    requests = build_insights(user_id, today or date.today())
    if requests is None:
        return AutoInsightsResult(ran=True)
    created: List[Insight] = [insight_store.create(user_id, req) for req in requests]
    _mark_run(user_id, now)
    if created:
        log.info("user %s: created %d insights", user_id, len(created))
    return AutoInsightsResult(ran=True, created=created)

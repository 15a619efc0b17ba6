# -*- coding: utf-8 -*-
"""Static catalog of the achievements a user can unlock."""

from __future__ import annotations

from typing import List, Optional

from .models import Achievement


def _a(key: str, name: str, description: str, icon: str, points: int, category: str) -> Achievement:
    return Achievement(
        id=key,
        name=name,
        description=description,
        icon_emoji=icon,
        requirement=key,
        points=points,
        category=category,
    )


PREDEFINED_ACHIEVEMENTS: List[Achievement] = [
    _a("first_habit", "Premier pas", "Complète ta première habitude", "🎯", 10, "milestone"),
    _a("7_day_streak", "Semaine parfaite", "7 jours consécutifs sur une habitude", "🔥", 50, "streak"),
    _a("30_day_streak", "Marathonien", "30 jours consécutifs sur une habitude", "🏆", 200, "streak"),
    _a("100_day_streak", "Centenaire", "100 jours consécutifs sur une habitude", "💎", 500, "streak"),
    _a("morning_routine_7", "Lève-tôt", "Routine du matin complétée 7 jours consécutifs", "🌅", 30, "routine"),
    _a("evening_routine_7", "Couche-tôt", "Routine du soir complétée 7 jours consécutifs", "🌙", 30, "routine"),
    _a(
        "perfect_week",
        "Perfectionniste",
        "100% de compliance sur toutes les habitudes pendant 7 jours",
        "⭐",
        100,
        "special",
    ),
    _a("water_goal_7", "Hydraté", "Objectif d'eau atteint 7 jours consécutifs", "💧", 30, "streak"),
    _a("all_habits_today", "Jour parfait", "Toutes les habitudes complétées en un jour", "✨", 20, "milestone"),
    _a("10_habits_created", "Architecte", "Créer 10 habitudes", "🏗️", 25, "milestone"),
    _a("100_completions", "Centurion", "Compléter 100 habitudes au total", "🎖️", 75, "milestone"),
    _a("500_completions", "Légendaire", "Compléter 500 habitudes au total", "👑", 300, "milestone"),
    _a("early_bird", "Early Bird", "Compléter une habitude avant 6h du matin", "🐦", 15, "special"),
    _a("night_owl", "Oiseau de nuit", "Compléter une habitude après 22h", "🦉", 15, "special"),
    _a("comeback", "Retour en force", "Reprendre une habitude après une pause de 7 jours", "💪", 40, "special"),
]


def get_all() -> List[Achievement]:
    return list(PREDEFINED_ACHIEVEMENTS)


def get_by_id(achievement_id: str) -> Optional[Achievement]:
    for a in PREDEFINED_ACHIEVEMENTS:
        if a.id == achievement_id:
            return a
    return None


def get_by_category(category: str) -> List[Achievement]:
    return [a for a in PREDEFINED_ACHIEVEMENTS if a.category == category]


def get_by_requirement(requirement: str) -> List[Achievement]:
    return [a for a in PREDEFINED_ACHIEVEMENTS if a.requirement == requirement]

# -*- coding: utf-8 -*-
"""AI insights: weekly summary, nutrition advice, workout motivation."""

from __future__ import annotations

import logging
from typing import List

from pydantic import ValidationError

from ..utils import fmt_number
from . import gemini
from .models import NutritionAdviceRequest, WeeklyInsights, WeeklyInsightsData

log = logging.getLogger(__name__)


def _str_list(value: object) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(v).strip() for v in value if v is not None and str(v).strip()]


def build_weekly_insights_prompt(data: WeeklyInsightsData) -> str:
    sign = "+" if data.weight_change > 0 else ""
    return f"""
Analyse ces données utilisateur de la semaine ({data.period}):

- Calories moyennes: {fmt_number(data.avg_calories)} cal/jour
- Protéines moyennes: {fmt_number(data.avg_protein)}g/jour
- Entraînements complétés: {data.workouts_done} fois
- Conformité aux objectifs: {fmt_number(data.compliance)}%
- Changement de poids: {sign}{fmt_number(data.weight_change)} kg

Génère une analyse JSON avec cette structure exacte:
{{
  "summary": "Un résumé de la semaine en 1 phrase",
  "highlights": ["3 points positifs"],
  "concerns": ["2 points à améliorer"],
  "suggestions": ["3 suggestions concrètes"],
  "motivationalMessage": "Un message motivant personnalisé"
}}

Règles:
- Ton encourageant et personnalisé
- Suggestions concrètes et actionnables
- Pas de jargon médical compliqué
- Si les données sont excellentes, félicite l'utilisateur
- Si les données sont faibles, sois encourageant et constructif
- Retourne UNIQUEMENT le JSON, sans texte avant ou après
"""


def fallback_weekly_insights(data: WeeklyInsightsData) -> WeeklyInsights:
    highlights: List[str] = []
    concerns: List[str] = []
    suggestions: List[str] = []
    compliance = fmt_number(data.compliance)

    if data.compliance >= 80:
        highlights.append(f"Excellente conformité de {compliance}% cette semaine !")
    elif data.compliance >= 60:
        highlights.append(f"Bonne conformité de {compliance}%")
    else:
        concerns.append(f"Conformité de {compliance}% - il y a de la marge d'amélioration")
        suggestions.append("Essayez de logger vos repas plus régulièrement")

    if data.workouts_done >= 4:
        highlights.append(f"{data.workouts_done} entraînements cette semaine - excellent !")
    elif data.workouts_done >= 2:
        highlights.append(f"{data.workouts_done} entraînements complétés")
    else:
        concerns.append(f"Seulement {data.workouts_done} entraînement(s) cette semaine")
        suggestions.append("Visez au moins 3 sessions d'entraînement par semaine")

    protein = fmt_number(data.avg_protein)
    if data.avg_protein >= 100:
        highlights.append(f"Apport protéique solide: {protein}g/jour en moyenne")
    elif data.avg_protein < 80:
        concerns.append(f"Apport protéique un peu faible: {protein}g/jour")
        suggestions.append("Augmentez votre consommation de protéines (viandes, poissons, légumineuses)")

    change = data.weight_change
    if abs(change) < 0.1:
        highlights.append("Poids stable cette semaine")
    elif -1 < change < -0.5:
        highlights.append(f"Perte de poids saine: {fmt_number(abs(change))}kg")
    elif change < -1:
        concerns.append(f"Perte de poids rapide: {fmt_number(abs(change))}kg")
        suggestions.append("Assurez-vous de ne pas trop restreindre vos calories")

    if not suggestions:
        suggestions.append("Continuez vos bonnes habitudes !")
        suggestions.append("Pensez à bien vous hydrater (2L d'eau/jour)")

    if data.compliance >= 70 and data.workouts_done >= 3:
        summary = "Excellente semaine avec une bonne conformité et de l'activité régulière !"
    elif data.compliance >= 50:
        summary = "Semaine correcte avec quelques opportunités d'amélioration"
    else:
        summary = "Semaine difficile, mais chaque jour est une nouvelle opportunité"

    if data.compliance >= 80:
        motivation = "🎉 Incroyable ! Vous êtes sur la bonne voie. Continuez ainsi !"
    elif data.compliance >= 60:
        motivation = "💪 Bon travail ! Quelques ajustements et vous serez au top !"
    else:
        motivation = "🌟 Ne vous découragez pas ! Chaque petit progrès compte. Vous pouvez le faire !"

    return WeeklyInsights(
        period=data.period,
        summary=summary,
        highlights=highlights[:3],
        concerns=concerns[:2],
        suggestions=suggestions[:3],
        motivational_message=motivation,
    )


def generate_weekly_insights(data: WeeklyInsightsData) -> WeeklyInsights:
    try:
        parsed = gemini.generate_json(build_weekly_insights_prompt(data))
        return WeeklyInsights(
            period=data.period,
            summary=str(parsed.get("summary") or "Semaine complétée"),
            highlights=_str_list(parsed.get("highlights")),
            concerns=_str_list(parsed.get("concerns")),
            suggestions=_str_list(parsed.get("suggestions")),
            motivational_message=str(parsed.get("motivationalMessage") or "Continue comme ça !"),
        )
    except (RuntimeError, ValueError, ValidationError) as exc:
        log.warning("weekly insights failed, using fallback: %s", exc, exc_info=True)
        return fallback_weekly_insights(data)


def fallback_nutrition_advice(data: NutritionAdviceRequest) -> List[str]:
    advice: List[str] = []
    if data.avg_calories < data.goal_calories * 0.9:
        advice.append("Ajoutez une collation saine entre les repas")
    elif data.avg_calories > data.goal_calories * 1.1:
        advice.append("Contrôlez vos portions et limitez les snacks")
    if data.avg_protein < data.goal_protein * 0.9:
        advice.append("Incluez une source de protéine à chaque repas")
    advice.append("Variez votre alimentation pour plus de nutriments")
    return advice


def generate_nutrition_advice(data: NutritionAdviceRequest) -> List[str]:
    prompt = f"""
Données nutritionnelles:
- Calories actuelles: {fmt_number(data.avg_calories)} cal/jour (objectif: {fmt_number(data.goal_calories)})
- Protéines actuelles: {fmt_number(data.avg_protein)}g/jour (objectif: {fmt_number(data.goal_protein)}g)

Génère 3 conseils nutritionnels concrets et actionnables en format JSON:
{{
  "advice": ["conseil 1", "conseil 2", "conseil 3"]
}}

Les conseils doivent être:
- Spécifiques et actionnables
- Adaptés aux écarts constatés
- Positifs et encourageants
- Courts (max 15 mots par conseil)

Retourne UNIQUEMENT le JSON.
"""
    try:
        return _str_list(gemini.generate_json(prompt).get("advice"))
    except (RuntimeError, ValueError) as exc:
        log.warning("nutrition advice failed, using fallback: %s", exc, exc_info=True)
        return fallback_nutrition_advice(data)


def fallback_workout_motivation(workouts_this_week: int) -> str:
    if workouts_this_week >= 4:
        return "🔥 Incroyable ! Vous écrasez vos objectifs cette semaine !"
    if workouts_this_week >= 2:
        return "💪 Bon rythme ! Encore un effort et la semaine est parfaite !"
    return "🌟 Il n'est jamais trop tard ! Planifiez votre prochain workout !"


def generate_workout_motivation(workouts_this_week: int) -> str:
    prompt = f"""
L'utilisateur a fait {workouts_this_week} entraînement(s) cette semaine.

Génère UN message motivationnel court (max 20 mots) pour l'encourager à continuer ou à se dépasser.
Le message doit être:
- Positif et énergique
- Adapté au nombre d'entraînements
- Avec un emoji pertinent au début

Réponds UNIQUEMENT avec le message, sans guillemets ni formatage JSON.
"""
    try:
        return gemini.generate_content(prompt).strip()
    except (RuntimeError, ValueError) as exc:
        log.warning("workout motivation failed, using fallback: %s", exc, exc_info=True)
        return fallback_workout_motivation(workouts_this_week)

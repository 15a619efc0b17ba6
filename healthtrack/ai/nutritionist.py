# -*- coding: utf-8 -*-
"""AI nutritionist: chat, meal photo analysis, weekly review and nutrition alerts.

Every call goes through ``gemini.generate_content``. Failures (no key, HTTP
error, unparsable output) are logged and replaced by hand-written fallbacks,
except for the chat endpoint which reports a missing configuration.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from ..utils import fmt_number
from . import gemini
from .models import (
    ChatContext,
    ChatTurn,
    DeficiencyAlert,
    DeficiencyData,
    IdentifiedFood,
    Improvement,
    PhotoAnalysis,
    TotalEstimated,
    WeeklyAnalysisData,
    WeeklyAnalysisResult,
)

log = logging.getLogger(__name__)

CHAT_HISTORY_TURNS = 4
CHAT_FALLBACK_REPLY = "Désolé, je rencontre un problème technique. Pouvez-vous reformuler votre question ?"
CHAT_NOT_CONFIGURED = "Service de chat IA non configuré. Veuillez contacter l'administrateur."
PHOTO_FALLBACK_ASSESSMENT = "Impossible d'analyser cette image pour le moment."

_DEFICIENCY_LABELS = {"protein": "protéines", "fiber": "fibres", "vegetables": "légumes"}
_DEFICIENCY_FALLBACKS = {
    "protein": ["Poulet grillé avec quinoa", "Omelette aux légumes", "Salade de thon et haricots"],
    "fiber": ["Salade de lentilles", "Bowl de légumes rôtis", "Smoothie aux fruits et graines de chia"],
}


def _context_lines(ctx: ChatContext) -> List[str]:
    lines: List[str] = []
    if ctx.current_weight:
        lines.append(f"Poids actuel: {fmt_number(ctx.current_weight)} kg")
    if ctx.goal_weight:
        lines.append(f"Objectif de poids: {fmt_number(ctx.goal_weight)} kg")
    if ctx.goal_calories:
        lines.append(f"Objectif calorique: {fmt_number(ctx.goal_calories)} cal/jour")
    if ctx.today_calories is not None:
        lines.append(f"Calories aujourd'hui: {fmt_number(ctx.today_calories)} cal")
    if ctx.goal_protein:
        lines.append(f"Objectif protéines: {fmt_number(ctx.goal_protein)}g/jour")
    if ctx.today_protein is not None:
        lines.append(f"Protéines aujourd'hui: {fmt_number(ctx.today_protein)}g")
    if ctx.weekly_workouts is not None:
        lines.append(f"Entraînements cette semaine: {ctx.weekly_workouts}")
    if ctx.diet_type:
        lines.append(f"Type de diète: {ctx.diet_type}")
    if ctx.goal_type:
        lines.append(f"Objectif: {ctx.goal_type}")
    return lines


def build_chat_prompt(message: str, ctx: ChatContext, history: Sequence[ChatTurn]) -> str:
    recent = list(history)[-CHAT_HISTORY_TURNS:]
    transcript = "\n".join(
        f"{'User' if turn.role == 'user' else 'Assistant'}: {turn.content}" for turn in recent
    )
    return (
        "Tu es un nutritionniste expert IA. Voici le profil de l'utilisateur:\n\n"
        + "\n".join(_context_lines(ctx))
        + "\n\nHistorique récent de conversation:\n"
        + transcript
        + f'\n\nL\'utilisateur demande: "{message}"\n\n'
        "Réponds de manière personnalisée, encourageante et basée sur ses données.\n"
        "Sois concis (max 150 mots) et actionnable.\n"
        "Si la question concerne la nutrition, donne des conseils spécifiques.\n"
        "Si l'utilisateur partage un succès, félicite-le chaleureusement.\n"
        "Si l'utilisateur rencontre des difficultés, sois empathique et constructif."
    )


def generate_chat_response(
    message: str, ctx: Optional[ChatContext] = None, history: Sequence[ChatTurn] = ()
) -> str:
    """Reply to ``message``.

    Raises ``GeminiConfigError`` (with a user-facing message) when no API key
    is configured; any other failure returns a generic apology.
    """
    prompt = build_chat_prompt(message, ctx or ChatContext(), history)
    try:
        return gemini.generate_content(prompt).strip()
    except gemini.GeminiConfigError as exc:
        log.warning("chat unavailable: %s", exc)
        raise gemini.GeminiConfigError(CHAT_NOT_CONFIGURED) from exc
    except (RuntimeError, ValueError) as exc:
        log.warning("chat generation failed: %s", exc, exc_info=True)
        return CHAT_FALLBACK_REPLY


PHOTO_PROMPT = """Analyse cette photo de repas.
Identifie chaque aliment visible avec:
- Nom de l'aliment
- Portion estimée (ex: "150g", "1 tasse", "1 unité")
- Calories approximatives
- Protéines approximatives (en grammes)
- Glucides approximatifs (en grammes)
- Lipides approximatifs (en grammes)
- Niveau de confiance (0.0 à 1.0)

Ensuite, donne une évaluation globale du repas (équilibré, trop riche, etc.)

Format ta réponse UNIQUEMENT en JSON avec cette structure exacte:
{
  "foods": [
    {
      "name": "nom de l'aliment",
      "portion": "quantité estimée",
      "confidence": 0.8,
      "estimatedCalories": 200,
      "estimatedProtein": 15,
      "estimatedCarbs": 25,
      "estimatedFat": 8
    }
  ],
  "totalEstimated": {
    "calories": 500,
    "protein": 30,
    "carbs": 60,
    "fat": 20
  },
  "overallAssessment": "phrase courte sur l'équilibre du repas"
}

Retourne UNIQUEMENT le JSON, sans texte avant ou après."""


def _as_float(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip().replace(",", "."))
        except ValueError:
            return 0.0
    return 0.0


def _normalize_foods(raw: Any) -> List[IdentifiedFood]:
    if not isinstance(raw, list):
        return []
    out: List[IdentifiedFood] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        confidence = _as_float(item.get("confidence"))
        if 1 < confidence <= 100:
            confidence = confidence / 100.0
        out.append(
            IdentifiedFood(
                name=str(item.get("name") or "inconnu").strip() or "inconnu",
                portion=str(item.get("portion") or ""),
                confidence=max(0.0, min(1.0, confidence)),
                estimated_calories=max(0.0, _as_float(item.get("estimatedCalories"))),
                estimated_protein=max(0.0, _as_float(item.get("estimatedProtein"))),
                estimated_carbs=max(0.0, _as_float(item.get("estimatedCarbs"))),
                estimated_fat=max(0.0, _as_float(item.get("estimatedFat"))),
            )
        )
    return out


def analyze_photo_food(image_base64: str, image_mime: str = "image/jpeg") -> PhotoAnalysis:
    try:
        parsed = gemini.generate_json(PHOTO_PROMPT, image_base64=image_base64, image_mime=image_mime)
    except (RuntimeError, ValueError) as exc:
        log.warning("photo analysis failed: %s", exc, exc_info=True)
        return PhotoAnalysis(overall_assessment=PHOTO_FALLBACK_ASSESSMENT)

    totals_raw = parsed.get("totalEstimated")
    totals = TotalEstimated()
    if isinstance(totals_raw, dict):
        totals = TotalEstimated(**{k: _as_float(totals_raw.get(k)) for k in ("calories", "protein", "carbs", "fat")})
    return PhotoAnalysis(
        identified_foods=_normalize_foods(parsed.get("foods")),
        total_estimated=totals,
        overall_assessment=str(parsed.get("overallAssessment") or "Repas analysé"),
    )


def build_weekly_prompt(data: WeeklyAnalysisData) -> str:
    n = fmt_number
    return f"""Analyse la semaine nutritionnelle de cet utilisateur:

Période: {data.start_date} - {data.end_date}

Objectifs quotidiens:
- Calories: {n(data.goal_calories)} cal/jour
- Protéines: {n(data.goal_protein)}g/jour
- Glucides: {n(data.goal_carbs)}g/jour
- Lipides: {n(data.goal_fat)}g/jour

Réalité cette semaine:
- Calories moyennes: {n(data.avg_calories)} cal/jour
- Protéines moyennes: {n(data.avg_protein)}g/jour
- Glucides moyens: {n(data.avg_carbs)}g/jour
- Lipides moyens: {n(data.avg_fat)}g/jour
- Entraînements: {data.workouts_done} fois
- Jours trackés: {data.days_tracked}/7

Génère une analyse JSON avec cette structure exacte:
{{
  "complianceScore": 85,
  "positives": ["point positif 1", "point positif 2", "point positif 3"],
  "improvements": [
    {{"issue": "problème identifié", "action": "action concrète à prendre"}},
    {{"issue": "problème identifié 2", "action": "action concrète à prendre 2"}}
  ],
  "insight": "un insight nutritionnel surprenant ou intéressant basé sur les données",
  "motivationalMessage": "message motivant personnalisé"
}}

Règles:
- Le complianceScore doit être entre 0 et 100
- Exactement 3 points positifs
- Exactement 2 axes d'amélioration avec actions concrètes
- 1 insight intéressant ou surprenant
- Message motivationnel adapté aux résultats
- Ton encourageant et constructif
- Retourne UNIQUEMENT le JSON"""


def fallback_weekly_analysis(data: WeeklyAnalysisData) -> WeeklyAnalysisResult:
    calorie_diff = data.avg_calories - data.goal_calories
    protein_diff = data.avg_protein - data.goal_protein

    positives: List[str] = []
    improvements: List[Improvement] = []

    if data.days_tracked >= 6:
        positives.append(f"Excellent suivi: {data.days_tracked} jours sur 7 trackés !")
    if abs(calorie_diff) < 100:
        positives.append("Calories parfaitement maîtrisées cette semaine")
    if data.workouts_done >= 3:
        positives.append(f"{data.workouts_done} entraînements complétés - super !")

    score = 50
    score += data.days_tracked * 5
    score += min(data.workouts_done * 5, 15)
    if abs(calorie_diff) < 200:
        score += 10
    if abs(protein_diff) < 20:
        score += 10

    if calorie_diff > 200:
        improvements.append(
            Improvement(issue="Calories au-dessus de l'objectif", action="Réduisez les portions ou limitez les snacks")
        )
    elif calorie_diff < -200:
        improvements.append(
            Improvement(issue="Calories en-dessous de l'objectif", action="Ajoutez une collation saine dans la journée")
        )
    if protein_diff < -10:
        improvements.append(
            Improvement(issue="Apport protéique insuffisant", action="Incluez une source de protéines à chaque repas")
        )

    if len(positives) < 3:
        positives.append("Vous continuez à tracker vos repas régulièrement")
    if len(improvements) < 2:
        improvements.append(
            Improvement(issue="Continuez sur cette lancée", action="Maintenez vos bonnes habitudes alimentaires")
        )

    if score >= 80:
        motivation = "🎉 Excellente semaine ! Vous êtes sur la bonne voie !"
    elif score >= 60:
        motivation = "💪 Bon travail ! Quelques ajustements et ce sera parfait !"
    else:
        motivation = "🌟 Chaque jour est une opportunité de progression !"

    direction = "supérieur" if calorie_diff > 0 else "inférieur"
    return WeeklyAnalysisResult(
        compliance_score=min(max(score, 0), 100),
        positives=positives[:3],
        improvements=improvements[:2],
        insight=(
            f"Votre apport calorique moyen est {direction} de {abs(round(calorie_diff))} "
            "calories par jour à votre objectif"
        ),
        motivational_message=motivation,
    )


def _str_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(v).strip() for v in value if v is not None and str(v).strip()]


def _improvements(value: Any) -> List[Improvement]:
    if not isinstance(value, list):
        return []
    out: List[Improvement] = []
    for item in value:
        if isinstance(item, dict) and item.get("issue") and item.get("action"):
            out.append(Improvement(issue=str(item["issue"]), action=str(item["action"])))
    return out


def generate_weekly_analysis(data: WeeklyAnalysisData) -> WeeklyAnalysisResult:
    try:
        parsed = gemini.generate_json(build_weekly_prompt(data))
        score = int(round(_as_float(parsed.get("complianceScore"))))
        return WeeklyAnalysisResult(
            compliance_score=min(max(score, 0), 100),
            positives=_str_list(parsed.get("positives")),
            improvements=_improvements(parsed.get("improvements")),
            insight=str(parsed.get("insight") or ""),
            motivational_message=str(parsed.get("motivationalMessage") or "Continuez vos efforts !"),
        )
    except (RuntimeError, ValueError, ValidationError) as exc:
        log.warning("weekly analysis failed, using fallback: %s", exc, exc_info=True)
        return fallback_weekly_analysis(data)


def generate_meal_insight_before(
    meal_calories: float,
    meal_protein: float,
    daily_goal_calories: float,
    current_calories_today: float,
    avg_meal_calories: float,
) -> str:
    percentage = f"{meal_calories / daily_goal_calories * 100:.0f}"
    comparison = (meal_calories - avg_meal_calories) / avg_meal_calories * 100
    sign = "+" if comparison > 0 else ""
    prompt = (
        "Ce repas:\n"
        f"- {fmt_number(meal_calories)} calories\n"
        f"- {fmt_number(meal_protein)}g de protéines\n\n"
        "Contexte utilisateur:\n"
        f"- Objectif quotidien: {fmt_number(daily_goal_calories)} cal\n"
        f"- Consommé aujourd'hui: {fmt_number(current_calories_today)} cal\n"
        f"- Moyenne par repas: {fmt_number(avg_meal_calories)} cal\n\n"
        f"Ce repas représente {percentage}% de l'objectif quotidien.\n"
        f"Il est {sign}{comparison:.0f}% par rapport à la moyenne.\n\n"
        "Génère UN message court (max 30 mots) pour informer l'utilisateur AVANT qu'il mange.\n"
        "Le message doit être:\n"
        "- Informatif et utile\n"
        "- Ni moralisateur ni négatif\n"
        "- Adapté au contexte (si proche de l'objectif, si le repas est plus/moins calorique que d'habitude)\n\n"
        "Réponds UNIQUEMENT avec le message, sans guillemets."
    )
    try:
        return gemini.generate_content(prompt).strip()
    except (RuntimeError, ValueError) as exc:
        log.warning("meal insight failed: %s", exc, exc_info=True)
        return f"Ce repas représente {percentage}% de votre objectif quotidien."


def detect_deficiencies(data: DeficiencyData) -> List[DeficiencyAlert]:
    alerts: List[DeficiencyAlert] = []

    if data.avg_protein < data.goal_protein * 0.7 and data.days_low >= 3:
        alerts.append(
            DeficiencyAlert(
                title="Alerte: Protéines insuffisantes",
                message=(
                    f"Vos protéines sont en-dessous de {fmt_number(data.goal_protein)}g depuis {data.days_low} jours. "
                    "Augmentez votre consommation de viandes, poissons, œufs ou légumineuses."
                ),
                severity="high",
            )
        )
    elif data.avg_protein < data.goal_protein * 0.85 and data.days_low >= 5:
        alerts.append(
            DeficiencyAlert(
                title="Protéines un peu faibles",
                message=f"Essayez d'atteindre votre objectif de {fmt_number(data.goal_protein)}g de protéines par jour.",
                severity="medium",
            )
        )

    if data.avg_fiber < data.goal_fiber * 0.5 and data.days_low >= 5:
        alerts.append(
            DeficiencyAlert(
                title="Alerte: Fibres insuffisantes",
                message="Vos fibres sont très faibles. Ajoutez plus de légumes, fruits et céréales complètes à vos repas.",
                severity="high",
            )
        )
    return alerts


def suggest_recipes_for_deficiency(deficiency_type: str, current_avg: float, goal: float) -> List[str]:
    label = _DEFICIENCY_LABELS.get(deficiency_type, deficiency_type)
    prompt = (
        f"L'utilisateur manque de {label}.\n"
        f"Moyenne actuelle: {fmt_number(current_avg)}g/jour\n"
        f"Objectif: {fmt_number(goal)}g/jour\n\n"
        "Suggère 3 recettes ou aliments simples pour combler cette carence.\n"
        "Format JSON:\n"
        "{\n"
        '  "suggestions": ["suggestion 1", "suggestion 2", "suggestion 3"]\n'
        "}\n\n"
        "Chaque suggestion doit être:\n"
        "- Concrète et facile à intégrer\n"
        f"- Riche en {label}\n"
        "- Variée (pas 3x la même chose)\n"
        "- Max 10 mots\n\n"
        "Retourne UNIQUEMENT le JSON."
    )
    try:
        parsed: Dict[str, Any] = gemini.generate_json(prompt)
        return _str_list(parsed.get("suggestions"))
    except (RuntimeError, ValueError) as exc:
        log.warning("deficiency suggestions failed: %s", exc, exc_info=True)
        return list(_DEFICIENCY_FALLBACKS.get(deficiency_type, []))

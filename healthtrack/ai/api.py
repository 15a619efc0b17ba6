# -*- coding: utf-8 -*-
"""AI — API endpoints (nutritionist chat, photo analysis, insights, nutrient lookup)."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user
from ..chat import storage as chat_store
from ..chat.models import ChatHistoryResponse
from ..meals import storage as meal_store
from ..profile import goals as profile_goals
from ..profile import storage as profile_store
from ..utils import js_weekday
from ..workouts import storage as workout_store
from . import insights, nutritionist, nutritionix
from .gemini import GeminiConfigError, resolve_gemini_settings
from .models import (
    AdviceResponse,
    ChatContext,
    ChatRequest,
    ChatResponse,
    ChatTurn,
    DeficiencyAlert,
    DeficiencyData,
    DeficiencyRecipesRequest,
    FoodNutrition,
    MealInsightRequest,
    MealInsightResponse,
    NutritionAdviceRequest,
    NutritionSearchRequest,
    PhotoAnalysis,
    PhotoAnalysisRequest,
    SuggestionsResponse,
    WeeklyAnalysisData,
    WeeklyAnalysisResult,
    WeeklyInsights,
    WeeklyInsightsData,
    WorkoutMotivationResponse,
)

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["AI"])

CHAT_HISTORY_LIMIT = 8
CHAT_HISTORY_PAGE = 100


def _workouts_this_week(user_id: str, today: Optional[date] = None) -> int:
    """Workouts since the start of the current Sunday-based week."""
    today = today or date.today()
    week_start = today - timedelta(days=js_weekday(today))
    return len(workout_store.get_by_date_range(user_id, week_start, week_start + timedelta(days=6)))


def build_chat_context(user_id: str, today: Optional[date] = None) -> ChatContext:
    ctx = ChatContext(weekly_workouts=_workouts_this_week(user_id, today))
    profile = profile_store.get(user_id)
    if profile is not None:
        target = profile_goals.calculate_nutrition_goals(profile)
        ctx.current_weight = profile.weight
        ctx.goal_weight = profile.goal_weight
        ctx.diet_type = profile.diet_type
        ctx.goal_type = profile.goal_type
        ctx.goal_calories = target.daily_calories
        ctx.goal_protein = target.daily_protein
    daily = meal_store.get_daily_nutrition(user_id, today)
    if daily.meal_count:
        ctx.today_calories = daily.totals.calories
        ctx.today_protein = daily.totals.protein
    return ctx


@router.post("/chat", response_model=ChatResponse, summary="Ask the AI nutritionist")
def chat(request: ChatRequest, user: dict = Depends(get_current_user)):
    user_id = user["id"]
    message = request.message.strip()
    if not message:
        raise HTTPException(status_code=400, detail="Message is required")
    try:
        resolve_gemini_settings()
    except GeminiConfigError as exc:
        raise HTTPException(status_code=500, detail=nutritionist.CHAT_NOT_CONFIGURED) from exc

    context = build_chat_context(user_id)
    if request.context is not None:
        context = context.model_copy(update=request.context.model_dump(exclude_none=True))

    if request.history is not None:
        history = request.history
    else:
        history = [
            ChatTurn(role=m.role, content=m.content)
            for m in chat_store.get_history(user_id, limit=CHAT_HISTORY_LIMIT)
        ]

    chat_store.create(user_id, "user", message, context=context)
    try:
        reply = nutritionist.generate_chat_response(message, context, history)
    except GeminiConfigError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    saved = chat_store.create(user_id, "assistant", reply)
    return ChatResponse(reply=reply, message_id=saved.id)


@router.get("/chat/history", response_model=ChatHistoryResponse)
def chat_history(
    limit: int = Query(default=CHAT_HISTORY_PAGE, ge=1, le=1000),
    user: dict = Depends(get_current_user),
):
    return ChatHistoryResponse(messages=chat_store.get_recent(user["id"], limit=limit))


@router.delete("/chat/history", summary="Clear chat history")
def clear_chat_history(
    older_than_days: Optional[int] = Query(default=None, ge=0),
    user: dict = Depends(get_current_user),
):
    if older_than_days is None:
        chat_store.clear_all(user["id"])
        return {"ok": True}
    return {"ok": True, "deleted": chat_store.delete_older_than(user["id"], older_than_days)}


@router.post("/analyze-photo", response_model=PhotoAnalysis, summary="Identify foods on a meal photo")
def analyze_photo(request: PhotoAnalysisRequest, user: dict = Depends(get_current_user)):
    return nutritionist.analyze_photo_food(request.image_base64, image_mime=request.image_mime)


@router.post("/weekly-analysis", response_model=WeeklyAnalysisResult)
def weekly_analysis(request: WeeklyAnalysisData, user: dict = Depends(get_current_user)):
    return nutritionist.generate_weekly_analysis(request)


@router.post("/meal-insight", response_model=MealInsightResponse, summary="Comment on a meal before eating it")
def meal_insight(request: MealInsightRequest, user: dict = Depends(get_current_user)):
    message = nutritionist.generate_meal_insight_before(
        request.meal_calories,
        request.meal_protein,
        request.daily_goal_calories,
        request.current_calories_today,
        request.avg_meal_calories,
    )
    return MealInsightResponse(message=message)


@router.post("/deficiencies", response_model=List[DeficiencyAlert])
def deficiencies(request: DeficiencyData, user: dict = Depends(get_current_user)):
    return nutritionist.detect_deficiencies(request)


@router.post("/deficiency-recipes", response_model=SuggestionsResponse)
def deficiency_recipes(request: DeficiencyRecipesRequest, user: dict = Depends(get_current_user)):
    suggestions = nutritionist.suggest_recipes_for_deficiency(
        request.deficiency_type, request.current_avg, request.goal
    )
    return SuggestionsResponse(suggestions=suggestions)


@router.post("/weekly-insights", response_model=WeeklyInsights)
def weekly_insights(request: WeeklyInsightsData, user: dict = Depends(get_current_user)):
    return insights.generate_weekly_insights(request)


@router.post("/nutrition-advice", response_model=AdviceResponse)
def nutrition_advice(request: NutritionAdviceRequest, user: dict = Depends(get_current_user)):
    return AdviceResponse(advice=insights.generate_nutrition_advice(request))


@router.get("/workout-motivation", response_model=WorkoutMotivationResponse)
def workout_motivation(
    workouts: Optional[int] = Query(default=None, ge=0, description="Defaults to this week's logged workouts"),
    user: dict = Depends(get_current_user),
):
    count = workouts if workouts is not None else _workouts_this_week(user["id"])
    return WorkoutMotivationResponse(message=insights.generate_workout_motivation(count))


@router.post("/nutrition/search", response_model=List[FoodNutrition], summary="Nutrient lookup by food description")
def nutrition_search(request: NutritionSearchRequest, user: dict = Depends(get_current_user)):
    queries = [q.strip() for q in request.queries if q.strip()]
    if not queries:
        raise HTTPException(status_code=400, detail="At least one query is required")
    return nutritionix.search_multiple(queries)

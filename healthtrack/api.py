# -*- coding: utf-8 -*-
"""
HealthTrack API

Habits, achievements, nutrition, fridge, weight, workouts, health goals and
analytics with an AI nutritionist. Data is stored per user under ``settings.data_root``.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import settings
from .achievements.api import router as achievements_router
from .ai.api import router as ai_router
from .exercises.api import router as exercises_router
from .fridge.api import router as fridge_router
from .habits.api import checkins_router, routines_router
from .habits.api import router as habits_router
from .health.api import (
    analytics_router,
    goals_router,
    measurements_router,
    reports_router,
    stats_router,
    water_router,
)
from .insights.api import router as insights_router
from .meals.api import router as meals_router
from .profile.api import router as profile_router
from .recipes.api import router as recipes_router
from .weight.api import router as weight_router
from .workouts.api import router as workouts_router
from .workouts.api import routines_router as workout_routines_router

app = FastAPI(
    title="HealthTrack",
    description="Habit tracking, gamification, nutrition and fitness with an AI nutritionist",
    version=__version__,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(habits_router)
app.include_router(routines_router)
app.include_router(checkins_router)
app.include_router(achievements_router)
app.include_router(recipes_router)
app.include_router(fridge_router)
app.include_router(meals_router)
app.include_router(weight_router)
app.include_router(profile_router)
app.include_router(workouts_router)
app.include_router(workout_routines_router)
app.include_router(exercises_router)
app.include_router(measurements_router)
app.include_router(goals_router)
app.include_router(water_router)
app.include_router(stats_router)
app.include_router(analytics_router)
app.include_router(reports_router)
app.include_router(insights_router)
app.include_router(ai_router)


@app.get("/api/health")
def health():
    return {"status": "ok", "version": __version__}


def run() -> None:
    """Console entry point (used by pyproject [project.scripts])."""
    import uvicorn

    uvicorn.run("healthtrack.api:app", host=settings.host, port=settings.port, reload=False)

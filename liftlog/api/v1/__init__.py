"""API v1 router aggregation."""

from fastapi import APIRouter

from liftlog.api.v1.endpoints import exercises, health, sessions, tools, workout_plans

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(exercises.router, prefix="/exercises", tags=["exercises"])
api_router.include_router(workout_plans.router, prefix="/workout-plans", tags=["workout-plans"])
api_router.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
api_router.include_router(tools.router, prefix="/tools", tags=["tools"])

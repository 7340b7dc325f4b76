from fastapi import APIRouter

from app.api.v1 import (
    dashboard,
    diet,
    exercise,
    goals,
    profile,
    sleep,
    statistics,
    users,
    weight,
)

api_router = APIRouter()

api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])
api_router.include_router(diet.router, prefix="/diet", tags=["diet"])
api_router.include_router(exercise.router, prefix="/exercise", tags=["exercise"])
api_router.include_router(sleep.router, prefix="/sleep", tags=["sleep"])
api_router.include_router(weight.router, prefix="/weight", tags=["weight"])
api_router.include_router(goals.router, prefix="/goals", tags=["goals"])
api_router.include_router(statistics.router, prefix="/statistics", tags=["statistics"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])

from pydantic import BaseModel

from app.schemas.enums import ActivityKind


class RecentActivity(BaseModel):
    title: str
    time: str  # "YYYY-MM-DD HH:MM"
    kind: ActivityKind


class DashboardResponse(BaseModel):
    calories: float
    exercise_minutes: int
    sleep_hours: float
    weight_kg: float | None = None
    recent_activities: list[RecentActivity]

from datetime import datetime

from fastapi import APIRouter
from sqlalchemy import select

from app.api.deps import CurrentUser, DbSession
from app.models import DietEntry, ExerciseEntry, SleepEntry, WeightEntry
from app.schemas.dashboard import DashboardResponse, RecentActivity
from app.schemas.enums import ActivityKind
from app.services.record_store import RecordStore
from app.services.statistics_config import get_statistics_config

router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    current_user: CurrentUser,
    db: DbSession,
) -> DashboardResponse:
    """Today's totals, latest weight and the most recent activities."""
    config = get_statistics_config().dashboard
    today = datetime.utcnow().date()
    store = RecordStore(db, current_user.id)

    today_diet = await store.find_on(DietEntry, today)
    today_exercise = await store.find_on(ExerciseEntry, today)
    today_sleep = await store.find_on(SleepEntry, today)

    calories = sum(entry.calories for entry in today_diet)
    exercise_minutes = sum(entry.duration_minutes for entry in today_exercise)
    # Last sleep entry logged for today
    sleep_hours = round(today_sleep[-1].duration_hours, 1) if today_sleep else 0.0

    weight_result = await db.execute(
        select(WeightEntry)
        .where(WeightEntry.user_id == current_user.id)
        .order_by(WeightEntry.date.desc(), WeightEntry.time.desc())
        .limit(1)
    )
    latest_weight = weight_result.scalar_one_or_none()

    recent_diet = await db.execute(
        select(DietEntry)
        .where(DietEntry.user_id == current_user.id)
        .order_by(DietEntry.created_at.desc(), DietEntry.id.desc())
        .limit(config.recent_diet_limit)
    )
    recent_exercise = await db.execute(
        select(ExerciseEntry)
        .where(ExerciseEntry.user_id == current_user.id)
        .order_by(ExerciseEntry.created_at.desc(), ExerciseEntry.id.desc())
        .limit(config.recent_exercise_limit)
    )

    activities = [
        RecentActivity(
            title=f"{entry.food} - {entry.calories:g} kcal",
            time=f"{entry.date.isoformat()} {entry.time}",
            kind=ActivityKind.DIET,
        )
        for entry in recent_diet.scalars().all()
    ]
    activities.extend(
        RecentActivity(
            title=f"{entry.exercise_type} - {entry.duration_minutes} min",
            time=f"{entry.date.isoformat()} {entry.time}",
            kind=ActivityKind.EXERCISE,
        )
        for entry in recent_exercise.scalars().all()
    )
    # "YYYY-MM-DD HH:MM" sorts chronologically as a string
    activities.sort(key=lambda activity: activity.time, reverse=True)

    return DashboardResponse(
        calories=calories,
        exercise_minutes=exercise_minutes,
        sleep_hours=sleep_hours,
        weight_kg=latest_weight.weight_kg if latest_weight else None,
        recent_activities=activities[: config.recent_activity_limit],
    )

"""
Statistics Service - Loads records from the store and runs the aggregation engine.
"""
import logging
from datetime import datetime
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.models import DietEntry, ExerciseEntry, Goal, SleepEntry
from app.services.record_store import RecordStore
from app.services.statistics_config import StatisticsConfig, get_statistics_config
from app.stats.aggregator import PeriodSummary, summarize_period
from app.stats.goal_progress import calculate_progress, progress_window
from app.stats.periods import Period, resolve_period

logger = logging.getLogger(__name__)


class StatisticsService:
    """Statistics and goal progress for one user."""

    def __init__(
        self,
        db: AsyncSession,
        user_id: int,
        config: Optional[StatisticsConfig] = None,
    ):
        self.db = db
        self.user_id = user_id
        self.store = RecordStore(db, user_id)
        self.config = config or get_statistics_config()

    async def build_statistics(self, period: Any, now: Optional[datetime] = None) -> PeriodSummary:
        """Period-bucketed calorie, exercise and sleep statistics."""
        now = now or datetime.utcnow()
        resolved = Period.parse(period)
        date_range = resolve_period(resolved, now, self.config)

        # One AsyncSession cannot run statements concurrently
        diet = await self.store.find(DietEntry, date_range)
        exercise = await self.store.find(ExerciseEntry, date_range)
        sleep = await self.store.find(SleepEntry, date_range)

        summary = summarize_period(
            resolved,
            now,
            diet,
            exercise,
            sleep,
            owner_id=self.user_id,
            config=self.config,
        )

        logger.info(
            "Statistics built",
            extra={
                "user_id": self.user_id,
                "period": resolved.value,
                "start_date": date_range.start.isoformat(),
                "end_date": date_range.end.isoformat(),
                "diet_count": summary.calories.count,
                "exercise_count": summary.exercise.count,
                "sleep_count": summary.sleep.count,
            },
        )
        return summary

    async def goal_progress(self, goal: Goal, now: Optional[datetime] = None) -> int:
        """Derived completion percentage of a goal (0-100)."""
        now = now or datetime.utcnow()
        try:
            window = progress_window(goal, now, self.config)
        except ValueError:
            return 0

        records = await self.store.find_for_goal(goal.goal_type, window)
        return calculate_progress(goal, records, now, self.config)

    async def goals_with_progress(
        self,
        goals: list[Goal],
        now: Optional[datetime] = None,
    ) -> list[tuple[Goal, int]]:
        now = now or datetime.utcnow()
        return [(goal, await self.goal_progress(goal, now)) for goal in goals]

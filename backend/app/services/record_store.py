"""
Record Store - Reads a user's health records for the statistics engine.

Rows are returned in insertion order (primary key ascending). The sleep
"last record wins" rule for day buckets depends on this order.
"""
from datetime import date
from typing import Optional, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import DietEntry, ExerciseEntry, SleepEntry, WeightEntry
from app.schemas.enums import GoalType
from app.stats.periods import DateRange

RecordModel = TypeVar("RecordModel", DietEntry, ExerciseEntry, SleepEntry, WeightEntry)

# Record table feeding each goal type
GOAL_RECORD_MODELS: dict[GoalType, type] = {
    GoalType.WEIGHT: WeightEntry,
    GoalType.CALORIES: DietEntry,
    GoalType.EXERCISE: ExerciseEntry,
    GoalType.SLEEP: SleepEntry,
}


class RecordStore:
    """Per-user, date-ranged access to record tables."""

    def __init__(self, db: AsyncSession, user_id: int):
        self.db = db
        self.user_id = user_id

    async def find(
        self,
        model: type[RecordModel],
        date_range: Optional[DateRange] = None,
    ) -> list[RecordModel]:
        """Records of ``model`` for this user, optionally limited to a date range."""
        query = select(model).where(model.user_id == self.user_id)

        if date_range is not None:
            query = query.where(
                model.date >= date_range.start,
                model.date <= date_range.end,
            )

        result = await self.db.execute(query.order_by(model.id.asc()))
        return list(result.scalars().all())

    async def find_on(self, model: type[RecordModel], day: date) -> list[RecordModel]:
        """Records of ``model`` booked on a single calendar day."""
        return await self.find(model, DateRange(start=day, end=day))

    async def find_for_goal(self, goal_type: GoalType, date_range: DateRange) -> list:
        """Records relevant to a goal of the given type."""
        return await self.find(GOAL_RECORD_MODELS[GoalType(goal_type)], date_range)

from fastapi import APIRouter, Query

from app.api.deps import CurrentUser, DbSession
from app.schemas.statistics import StatisticsResponse
from app.services.statistics_service import StatisticsService

router = APIRouter()


@router.get("", response_model=StatisticsResponse)
async def get_statistics(
    current_user: CurrentUser,
    db: DbSession,
    period: str | None = Query(
        None,
        description="week, month, quarter or year; anything else is treated as month",
    ),
) -> StatisticsResponse:
    """Calorie, exercise and sleep statistics bucketed over the requested period."""
    service = StatisticsService(db, current_user.id)
    summary = await service.build_statistics(period)
    return StatisticsResponse.model_validate(summary.to_dict())

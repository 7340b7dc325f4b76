import logging
from datetime import datetime

from fastapi import APIRouter, HTTPException, status
from sqlalchemy import select

from app.api.deps import CurrentUser, DbSession
from app.models import Goal
from app.schemas.enums import GOAL_UNITS, GoalType
from app.schemas.goal import GoalCreate, GoalListResponse, GoalResponse, GoalUpdate
from app.services.statistics_service import StatisticsService

logger = logging.getLogger(__name__)
router = APIRouter()


def _goal_response(goal: Goal, progress: int) -> GoalResponse:
    goal_type = GoalType(goal.goal_type)
    return GoalResponse(
        id=goal.id,
        user_id=goal.user_id,
        goal_type=goal_type,
        target=goal.target,
        deadline=goal.deadline,
        description=goal.description or "",
        completed=goal.completed,
        unit=GOAL_UNITS[goal_type],
        progress=progress,
        created_at=goal.created_at,
    )


async def _get_goal(db: DbSession, goal_id: int, user_id: int) -> Goal:
    result = await db.execute(
        select(Goal).where(
            Goal.id == goal_id,
            Goal.user_id == user_id,
        )
    )
    goal = result.scalar_one_or_none()

    if not goal:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Goal not found",
        )
    return goal


@router.post("", response_model=GoalResponse, status_code=status.HTTP_201_CREATED)
async def create_goal(
    goal_in: GoalCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> GoalResponse:
    """Create a health goal."""
    goal = Goal(
        user_id=current_user.id,
        goal_type=goal_in.goal_type.value,
        target=goal_in.target,
        deadline=goal_in.deadline,
        description=goal_in.description,
    )
    db.add(goal)
    await db.commit()
    await db.refresh(goal)

    logger.info(
        "Goal created",
        extra={"user_id": current_user.id, "goal_id": goal.id, "goal_type": goal.goal_type},
    )

    progress = await StatisticsService(db, current_user.id).goal_progress(goal)
    return _goal_response(goal, progress)


@router.get("", response_model=GoalListResponse)
async def list_goals(
    current_user: CurrentUser,
    db: DbSession,
    completed: bool | None = None,
) -> GoalListResponse:
    """List the user's goals by deadline, each with its current progress."""
    query = select(Goal).where(Goal.user_id == current_user.id)

    if completed is not None:
        query = query.where(Goal.completed == completed)

    result = await db.execute(query.order_by(Goal.deadline.asc(), Goal.id.asc()))
    goals = list(result.scalars().all())

    service = StatisticsService(db, current_user.id)
    now = datetime.utcnow()
    with_progress = await service.goals_with_progress(goals, now)

    return GoalListResponse(
        goals=[_goal_response(goal, progress) for goal, progress in with_progress],
        total=len(goals),
    )


@router.get("/{goal_id}", response_model=GoalResponse)
async def get_goal(
    goal_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> GoalResponse:
    """Get a goal with its current progress."""
    goal = await _get_goal(db, goal_id, current_user.id)
    progress = await StatisticsService(db, current_user.id).goal_progress(goal)
    return _goal_response(goal, progress)


@router.put("/{goal_id}", response_model=GoalResponse)
async def update_goal(
    goal_id: int,
    goal_update: GoalUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> GoalResponse:
    """Update the provided fields of a goal."""
    goal = await _get_goal(db, goal_id, current_user.id)

    update_data = goal_update.model_dump(exclude_unset=True, exclude_none=True)

    for field, value in update_data.items():
        if field == "goal_type":
            setattr(goal, field, value.value)
        else:
            setattr(goal, field, value)

    await db.commit()
    await db.refresh(goal)

    progress = await StatisticsService(db, current_user.id).goal_progress(goal)
    return _goal_response(goal, progress)


@router.delete("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_goal(
    goal_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> None:
    """Delete a goal."""
    goal = await _get_goal(db, goal_id, current_user.id)

    await db.delete(goal)
    await db.commit()

    logger.info("Goal deleted", extra={"user_id": current_user.id, "goal_id": goal_id})

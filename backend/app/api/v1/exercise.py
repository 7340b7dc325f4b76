import logging
from datetime import date

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy import func, select

from app.api.deps import CurrentUser, DbSession
from app.models import ExerciseEntry
from app.schemas.exercise import (
    ExerciseEntryCreate,
    ExerciseEntryListResponse,
    ExerciseEntryResponse,
    ExerciseEntryUpdate,
)

logger = logging.getLogger(__name__)
router = APIRouter()


async def _get_entry(db: DbSession, entry_id: int, user_id: int) -> ExerciseEntry:
    result = await db.execute(
        select(ExerciseEntry).where(
            ExerciseEntry.id == entry_id,
            ExerciseEntry.user_id == user_id,
        )
    )
    entry = result.scalar_one_or_none()

    if not entry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Record not found",
        )
    return entry


@router.post("", response_model=ExerciseEntryResponse, status_code=status.HTTP_201_CREATED)
async def create_exercise_entry(
    entry_in: ExerciseEntryCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> ExerciseEntry:
    """Log an exercise session."""
    entry = ExerciseEntry(
        user_id=current_user.id,
        exercise_type=entry_in.exercise_type.value,
        duration_minutes=entry_in.duration_minutes,
        intensity=entry_in.intensity.value,
        date=entry_in.date,
        time=entry_in.time,
    )
    db.add(entry)
    await db.commit()
    await db.refresh(entry)

    logger.info(
        "Exercise entry created",
        extra={
            "user_id": current_user.id,
            "entry_id": entry.id,
            "duration_minutes": entry.duration_minutes,
        },
    )
    return entry


@router.get("", response_model=ExerciseEntryListResponse)
async def list_exercise_entries(
    current_user: CurrentUser,
    db: DbSession,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    start_date: date | None = None,
    end_date: date | None = None,
) -> ExerciseEntryListResponse:
    """List the user's exercise sessions, newest first."""
    filters = [ExerciseEntry.user_id == current_user.id]
    if start_date:
        filters.append(ExerciseEntry.date >= start_date)
    if end_date:
        filters.append(ExerciseEntry.date <= end_date)

    query = (
        select(ExerciseEntry)
        .where(*filters)
        .order_by(ExerciseEntry.date.desc(), ExerciseEntry.time.desc())
        .offset(offset)
        .limit(limit)
    )
    result = await db.execute(query)
    entries = result.scalars().all()

    count_result = await db.execute(select(func.count()).select_from(ExerciseEntry).where(*filters))
    total = count_result.scalar_one()

    return ExerciseEntryListResponse(entries=list(entries), total=total)


@router.get("/{entry_id}", response_model=ExerciseEntryResponse)
async def get_exercise_entry(
    entry_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> ExerciseEntry:
    """Get a specific exercise session."""
    return await _get_entry(db, entry_id, current_user.id)


@router.put("/{entry_id}", response_model=ExerciseEntryResponse)
async def update_exercise_entry(
    entry_id: int,
    entry_update: ExerciseEntryUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> ExerciseEntry:
    """Update the provided fields of an exercise session."""
    entry = await _get_entry(db, entry_id, current_user.id)

    update_data = entry_update.model_dump(exclude_unset=True, exclude_none=True)

    for field, value in update_data.items():
        if field in ("exercise_type", "intensity"):
            setattr(entry, field, value.value)
        else:
            setattr(entry, field, value)

    await db.commit()
    await db.refresh(entry)
    return entry


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_exercise_entry(
    entry_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> None:
    """Delete an exercise session."""
    entry = await _get_entry(db, entry_id, current_user.id)

    await db.delete(entry)
    await db.commit()

    logger.info("Exercise entry deleted", extra={"user_id": current_user.id, "entry_id": entry_id})

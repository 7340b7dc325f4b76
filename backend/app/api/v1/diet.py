import logging
from datetime import date

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy import func, select

from app.api.deps import CurrentUser, DbSession
from app.models import DietEntry
from app.schemas.diet import (
    DietEntryCreate,
    DietEntryListResponse,
    DietEntryResponse,
    DietEntryUpdate,
)

logger = logging.getLogger(__name__)
router = APIRouter()


async def _get_entry(db: DbSession, entry_id: int, user_id: int) -> DietEntry:
    result = await db.execute(
        select(DietEntry).where(
            DietEntry.id == entry_id,
            DietEntry.user_id == user_id,
        )
    )
    entry = result.scalar_one_or_none()

    if not entry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Record not found",
        )
    return entry


@router.post("", response_model=DietEntryResponse, status_code=status.HTTP_201_CREATED)
async def create_diet_entry(
    entry_in: DietEntryCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> DietEntry:
    """Log a meal."""
    entry = DietEntry(
        user_id=current_user.id,
        meal=entry_in.meal.value,
        food=entry_in.food.strip(),
        calories=entry_in.calories,
        date=entry_in.date,
        time=entry_in.time,
    )
    db.add(entry)
    await db.commit()
    await db.refresh(entry)

    logger.info(
        "Diet entry created",
        extra={"user_id": current_user.id, "entry_id": entry.id, "date": entry.date.isoformat()},
    )
    return entry


@router.get("", response_model=DietEntryListResponse)
async def list_diet_entries(
    current_user: CurrentUser,
    db: DbSession,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    start_date: date | None = None,
    end_date: date | None = None,
) -> DietEntryListResponse:
    """List the user's meals, newest first, with optional date filtering."""
    filters = [DietEntry.user_id == current_user.id]
    if start_date:
        filters.append(DietEntry.date >= start_date)
    if end_date:
        filters.append(DietEntry.date <= end_date)

    query = (
        select(DietEntry)
        .where(*filters)
        .order_by(DietEntry.date.desc(), DietEntry.time.desc())
        .offset(offset)
        .limit(limit)
    )
    result = await db.execute(query)
    entries = result.scalars().all()

    count_result = await db.execute(select(func.count()).select_from(DietEntry).where(*filters))
    total = count_result.scalar_one()

    return DietEntryListResponse(entries=list(entries), total=total)


@router.get("/{entry_id}", response_model=DietEntryResponse)
async def get_diet_entry(
    entry_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> DietEntry:
    """Get a specific meal."""
    return await _get_entry(db, entry_id, current_user.id)


@router.put("/{entry_id}", response_model=DietEntryResponse)
async def update_diet_entry(
    entry_id: int,
    entry_update: DietEntryUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> DietEntry:
    """Update the provided fields of a meal."""
    entry = await _get_entry(db, entry_id, current_user.id)

    update_data = entry_update.model_dump(exclude_unset=True, exclude_none=True)

    for field, value in update_data.items():
        if field == "meal":
            setattr(entry, field, value.value)
        elif field == "food":
            setattr(entry, field, value.strip())
        else:
            setattr(entry, field, value)

    await db.commit()
    await db.refresh(entry)
    return entry


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_diet_entry(
    entry_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> None:
    """Delete a meal."""
    entry = await _get_entry(db, entry_id, current_user.id)

    await db.delete(entry)
    await db.commit()

    logger.info("Diet entry deleted", extra={"user_id": current_user.id, "entry_id": entry_id})

import logging
from datetime import date

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy import func, select

from app.api.deps import CurrentUser, DbSession
from app.models import WeightEntry
from app.schemas.weight import (
    WeightEntryCreate,
    WeightEntryListResponse,
    WeightEntryResponse,
    WeightEntryUpdate,
)

logger = logging.getLogger(__name__)
router = APIRouter()


async def _get_entry(db: DbSession, entry_id: int, user_id: int) -> WeightEntry:
    result = await db.execute(
        select(WeightEntry).where(
            WeightEntry.id == entry_id,
            WeightEntry.user_id == user_id,
        )
    )
    entry = result.scalar_one_or_none()

    if not entry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Record not found",
        )
    return entry


@router.post("", response_model=WeightEntryResponse, status_code=status.HTTP_201_CREATED)
async def create_weight_entry(
    entry_in: WeightEntryCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> WeightEntry:
    """Log a weigh-in."""
    entry = WeightEntry(
        user_id=current_user.id,
        weight_kg=entry_in.weight_kg,
        date=entry_in.date,
        time=entry_in.time,
    )
    db.add(entry)
    await db.commit()
    await db.refresh(entry)

    logger.info("Weight entry created", extra={"user_id": current_user.id, "entry_id": entry.id})
    return entry


@router.get("", response_model=WeightEntryListResponse)
async def list_weight_entries(
    current_user: CurrentUser,
    db: DbSession,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    start_date: date | None = None,
    end_date: date | None = None,
) -> WeightEntryListResponse:
    """List the user's weigh-ins, newest first."""
    filters = [WeightEntry.user_id == current_user.id]
    if start_date:
        filters.append(WeightEntry.date >= start_date)
    if end_date:
        filters.append(WeightEntry.date <= end_date)

    query = (
        select(WeightEntry)
        .where(*filters)
        .order_by(WeightEntry.date.desc(), WeightEntry.time.desc())
        .offset(offset)
        .limit(limit)
    )
    result = await db.execute(query)
    entries = result.scalars().all()

    count_result = await db.execute(select(func.count()).select_from(WeightEntry).where(*filters))
    total = count_result.scalar_one()

    return WeightEntryListResponse(entries=list(entries), total=total)


@router.get("/{entry_id}", response_model=WeightEntryResponse)
async def get_weight_entry(
    entry_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> WeightEntry:
    """Get a specific weigh-in."""
    return await _get_entry(db, entry_id, current_user.id)


@router.put("/{entry_id}", response_model=WeightEntryResponse)
async def update_weight_entry(
    entry_id: int,
    entry_update: WeightEntryUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> WeightEntry:
    """Update the provided fields of a weigh-in."""
    entry = await _get_entry(db, entry_id, current_user.id)

    update_data = entry_update.model_dump(exclude_unset=True, exclude_none=True)

    for field, value in update_data.items():
        setattr(entry, field, value)

    await db.commit()
    await db.refresh(entry)
    return entry


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_weight_entry(
    entry_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> None:
    """Delete a weigh-in."""
    entry = await _get_entry(db, entry_id, current_user.id)

    await db.delete(entry)
    await db.commit()

    logger.info("Weight entry deleted", extra={"user_id": current_user.id, "entry_id": entry_id})

import logging
from datetime import date

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy import func, select

from app.api.deps import CurrentUser, DbSession
from app.models import SleepEntry
from app.schemas.sleep import (
    SleepEntryCreate,
    SleepEntryListResponse,
    SleepEntryResponse,
    SleepEntryUpdate,
)

logger = logging.getLogger(__name__)
router = APIRouter()


async def _get_entry(db: DbSession, entry_id: int, user_id: int) -> SleepEntry:
    result = await db.execute(
        select(SleepEntry).where(
            SleepEntry.id == entry_id,
            SleepEntry.user_id == user_id,
        )
    )
    entry = result.scalar_one_or_none()

    if not entry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Record not found",
        )
    return entry


@router.post("", response_model=SleepEntryResponse, status_code=status.HTTP_201_CREATED)
async def create_sleep_entry(
    entry_in: SleepEntryCreate,
    current_user: CurrentUser,
    db: DbSession,
) -> SleepEntry:
    """Log a night of sleep."""
    entry = SleepEntry(
        user_id=current_user.id,
        bedtime=entry_in.bedtime,
        waketime=entry_in.waketime,
        quality=entry_in.quality.value,
        notes=entry_in.notes,
        date=entry_in.date,
    )
    db.add(entry)
    await db.commit()
    await db.refresh(entry)

    logger.info(
        "Sleep entry created",
        extra={
            "user_id": current_user.id,
            "entry_id": entry.id,
            "duration_hours": round(entry.duration_hours, 2),
        },
    )
    return entry


@router.get("", response_model=SleepEntryListResponse)
async def list_sleep_entries(
    current_user: CurrentUser,
    db: DbSession,
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    start_date: date | None = None,
    end_date: date | None = None,
) -> SleepEntryListResponse:
    """List the user's sleep entries, newest first."""
    filters = [SleepEntry.user_id == current_user.id]
    if start_date:
        filters.append(SleepEntry.date >= start_date)
    if end_date:
        filters.append(SleepEntry.date <= end_date)

    query = (
        select(SleepEntry)
        .where(*filters)
        .order_by(SleepEntry.date.desc(), SleepEntry.id.desc())
        .offset(offset)
        .limit(limit)
    )
    result = await db.execute(query)
    entries = result.scalars().all()

    count_result = await db.execute(select(func.count()).select_from(SleepEntry).where(*filters))
    total = count_result.scalar_one()

    return SleepEntryListResponse(entries=list(entries), total=total)


@router.get("/{entry_id}", response_model=SleepEntryResponse)
async def get_sleep_entry(
    entry_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> SleepEntry:
    """Get a specific sleep entry."""
    return await _get_entry(db, entry_id, current_user.id)


@router.put("/{entry_id}", response_model=SleepEntryResponse)
async def update_sleep_entry(
    entry_id: int,
    entry_update: SleepEntryUpdate,
    current_user: CurrentUser,
    db: DbSession,
) -> SleepEntry:
    """Update the provided fields of a sleep entry."""
    entry = await _get_entry(db, entry_id, current_user.id)

    update_data = entry_update.model_dump(exclude_unset=True, exclude_none=True)

    bedtime = update_data.get("bedtime", entry.bedtime)
    waketime = update_data.get("waketime", entry.waketime)
    if waketime <= bedtime:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Wake time must be after bedtime",
        )

    for field, value in update_data.items():
        if field == "quality":
            setattr(entry, field, value.value)
        else:
            setattr(entry, field, value)

    await db.commit()
    await db.refresh(entry)
    return entry


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_sleep_entry(
    entry_id: int,
    current_user: CurrentUser,
    db: DbSession,
) -> None:
    """Delete a sleep entry."""
    entry = await _get_entry(db, entry_id, current_user.id)

    await db.delete(entry)
    await db.commit()

    logger.info("Sleep entry deleted", extra={"user_id": current_user.id, "entry_id": entry_id})

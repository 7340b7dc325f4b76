import datetime as dt

from pydantic import BaseModel, Field

from app.schemas.diet import TIME_PATTERN


class WeightEntryBase(BaseModel):
    weight_kg: float = Field(..., gt=0, le=500)
    date: dt.date
    time: str = Field(..., pattern=TIME_PATTERN)


class WeightEntryCreate(WeightEntryBase):
    pass


class WeightEntryUpdate(BaseModel):
    weight_kg: float | None = Field(None, gt=0, le=500)
    date: dt.date | None = None
    time: str | None = Field(None, pattern=TIME_PATTERN)


class WeightEntryResponse(WeightEntryBase):
    id: int
    user_id: int
    created_at: dt.datetime

    class Config:
        from_attributes = True


class WeightEntryListResponse(BaseModel):
    entries: list[WeightEntryResponse]
    total: int

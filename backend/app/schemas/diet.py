import datetime as dt

from pydantic import BaseModel, Field

from app.schemas.enums import MealType

TIME_PATTERN = r"^\d{2}:\d{2}$"


class DietEntryBase(BaseModel):
    meal: MealType
    food: str = Field(..., min_length=1, max_length=200)
    calories: float = Field(..., ge=0, le=10000)
    date: dt.date
    time: str = Field(..., pattern=TIME_PATTERN)


class DietEntryCreate(DietEntryBase):
    pass


class DietEntryUpdate(BaseModel):
    meal: MealType | None = None
    food: str | None = Field(None, min_length=1, max_length=200)
    calories: float | None = Field(None, ge=0, le=10000)
    date: dt.date | None = None
    time: str | None = Field(None, pattern=TIME_PATTERN)


class DietEntryResponse(DietEntryBase):
    id: int
    user_id: int
    created_at: dt.datetime

    class Config:
        from_attributes = True


class DietEntryListResponse(BaseModel):
    entries: list[DietEntryResponse]
    total: int

import datetime as dt

from pydantic import BaseModel, Field

from app.schemas.diet import TIME_PATTERN
from app.schemas.enums import ExerciseIntensity, ExerciseType


class ExerciseEntryBase(BaseModel):
    exercise_type: ExerciseType
    duration_minutes: int = Field(..., ge=1, le=1440)
    intensity: ExerciseIntensity
    date: dt.date
    time: str = Field(..., pattern=TIME_PATTERN)


class ExerciseEntryCreate(ExerciseEntryBase):
    pass


class ExerciseEntryUpdate(BaseModel):
    exercise_type: ExerciseType | None = None
    duration_minutes: int | None = Field(None, ge=1, le=1440)
    intensity: ExerciseIntensity | None = None
    date: dt.date | None = None
    time: str | None = Field(None, pattern=TIME_PATTERN)


class ExerciseEntryResponse(ExerciseEntryBase):
    id: int
    user_id: int
    created_at: dt.datetime

    class Config:
        from_attributes = True


class ExerciseEntryListResponse(BaseModel):
    entries: list[ExerciseEntryResponse]
    total: int

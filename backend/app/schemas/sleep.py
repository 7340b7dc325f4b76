import datetime as dt

from pydantic import BaseModel, Field, field_validator, model_validator

from app.schemas.enums import SleepQuality


def to_naive_utc(value: dt.datetime | None) -> dt.datetime | None:
    """Store instants as naive UTC, like every other timestamp column."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(dt.timezone.utc).replace(tzinfo=None)
    return value


class SleepEntryBase(BaseModel):
    bedtime: dt.datetime
    waketime: dt.datetime
    quality: SleepQuality
    notes: str = Field("", max_length=500)
    date: dt.date


class SleepEntryCreate(SleepEntryBase):
    @field_validator("bedtime", "waketime")
    @classmethod
    def normalize_instants(cls, value: dt.datetime | None) -> dt.datetime | None:
        return to_naive_utc(value)

    @model_validator(mode="after")
    def check_interval(self) -> "SleepEntryCreate":
        if self.waketime <= self.bedtime:
            raise ValueError("Wake time must be after bedtime")
        return self


class SleepEntryUpdate(BaseModel):
    bedtime: dt.datetime | None = None
    waketime: dt.datetime | None = None
    quality: SleepQuality | None = None
    notes: str | None = Field(None, max_length=500)
    date: dt.date | None = None

    @field_validator("bedtime", "waketime")
    @classmethod
    def normalize_instants(cls, value: dt.datetime | None) -> dt.datetime | None:
        return to_naive_utc(value)


class SleepEntryResponse(SleepEntryBase):
    id: int
    user_id: int
    duration_hours: float  # Derived from bedtime/waketime
    created_at: dt.datetime

    class Config:
        from_attributes = True


class SleepEntryListResponse(BaseModel):
    entries: list[SleepEntryResponse]
    total: int

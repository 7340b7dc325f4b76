from datetime import datetime

from pydantic import BaseModel, Field

from app.schemas.enums import ActivityLevel, Gender


class ProfileBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    age: int = Field(..., ge=1, le=150)
    gender: Gender
    height_cm: float = Field(..., ge=0, le=300)
    activity_level: ActivityLevel


class ProfileUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    age: int | None = Field(None, ge=1, le=150)
    gender: Gender | None = None
    height_cm: float | None = Field(None, ge=0, le=300)
    activity_level: ActivityLevel | None = None


class ProfileResponse(ProfileBase):
    id: int
    user_id: int
    username: str
    email: str
    created_at: datetime
    updated_at: datetime

from datetime import date, datetime

from pydantic import BaseModel, Field

from app.schemas.enums import GoalType


class GoalBase(BaseModel):
    goal_type: GoalType
    target: float = Field(..., ge=0.1)
    deadline: date
    description: str = Field("", max_length=500)


class GoalCreate(GoalBase):
    pass


class GoalUpdate(BaseModel):
    goal_type: GoalType | None = None
    target: float | None = Field(None, ge=0.1)
    deadline: date | None = None
    description: str | None = Field(None, max_length=500)
    completed: bool | None = None


class GoalResponse(GoalBase):
    id: int
    user_id: int
    completed: bool
    unit: str
    progress: int = Field(..., ge=0, le=100)  # Derived on read, not stored
    created_at: datetime


class GoalListResponse(BaseModel):
    goals: list[GoalResponse]
    total: int

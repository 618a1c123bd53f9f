from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.goal import Pagination


class HabitCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    target_frequency: int = Field(..., ge=1, le=7)  # days per week


class HabitUpdate(BaseModel):
    """Schema for updating a habit (all fields optional)."""

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    archived: Optional[bool] = None

    # Be lenient with extra fields from clients
    model_config = ConfigDict(extra="ignore")


class HabitRead(BaseModel):
    id: UUID
    title: str
    target_frequency: int
    archived: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class HabitWithStats(HabitRead):
    total_logs: int = 0
    completed_logs: int = 0
    completion_rate: float = 0.0
    last_logged: Optional[date] = None


class HabitListResponse(BaseModel):
    habits: list[HabitWithStats]
    total: int
    pagination: Pagination


class HabitLogCreate(BaseModel):
    log_date: date
    completed: bool = False
    count: Optional[int] = Field(None, ge=0)


class HabitLogRead(BaseModel):
    id: UUID
    habit_id: UUID
    log_date: date
    completed: bool
    count: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class HabitLogListResponse(BaseModel):
    logs: list[HabitLogRead]
    total: int
    pagination: Pagination


class StreakRead(BaseModel):
    current_streak: int
    longest_streak: int
    last_completed_date: Optional[date] = None

    model_config = ConfigDict(from_attributes=True)


class HabitStatsRead(BaseModel):
    habit_id: UUID
    total_completions: int
    completion_rate: float
    weekly_completions: int
    streak: StreakRead

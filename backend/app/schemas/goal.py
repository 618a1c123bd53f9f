from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class GoalBase(BaseModel):
    target_protein: float
    start_date: date
    end_date: Optional[date] = None


class GoalCreate(GoalBase):
    """Schema for creating a new goal. Closes the goal(s) it replaces."""

    target_protein: float = Field(..., gt=0)


class GoalRead(GoalBase):
    id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class GoalHistoryItem(GoalRead):
    is_active: bool = False


class Pagination(BaseModel):
    limit: int
    offset: int = 0
    has_more: bool = False


class GoalHistoryResponse(BaseModel):
    goals: list[GoalHistoryItem]
    total: int
    pagination: Pagination

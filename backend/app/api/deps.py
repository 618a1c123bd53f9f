from uuid import UUID

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.time_utils import Clock
from app.db import get_db
from app.stores.goal_store import GoalIntervalStore
from app.stores.habit_store import HabitLogStore, HabitStore


def get_current_user_id(x_user_id: UUID = Header(...)) -> UUID:
    """Acting owner, as authenticated by the upstream auth layer."""
    return x_user_id


def get_clock() -> Clock:
    return Clock(settings.timezone)


def get_goal_store(
    request: Request,
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> GoalIntervalStore:
    return GoalIntervalStore(db, clock, request.app.state.owner_locks)


def get_habit_store(db: Session = Depends(get_db)) -> HabitStore:
    return HabitStore(db)


def get_habit_log_store(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> HabitLogStore:
    return HabitLogStore(db, clock)

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Optional

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from app.core.config import Settings, settings as default_settings
from app.core.constants import (
    HABIT_TITLE_MAX_LEN,
    MAX_TARGET_FREQUENCY,
    MIN_TARGET_FREQUENCY,
    RATE_DECIMALS,
)
from app.core.errors import NotFound, ValidationError
from app.core.query import RangeQuery
from app.core.time_utils import Clock, to_date_key
from app.models.habit import Habit
from app.models.habit_log import HabitLog
from app.stores.uow import unit_of_work

logger = logging.getLogger(__name__)


@dataclass
class HabitSummary:
    habit: Habit
    total_logs: int = 0
    completed_logs: int = 0
    completion_rate: float = 0.0
    last_logged: Optional[date] = None


def _clean_title(title) -> str:
    t = (title or "").strip()
    if not t:
        raise ValidationError("Habit title is required")
    if len(t) > HABIT_TITLE_MAX_LEN:
        raise ValidationError("Habit title too long")
    return t


class HabitStore:
    """Habit CRUD scoped to the owning user."""

    def __init__(self, db: Session, config: Settings = default_settings):
        self.db = db
        self.config = config

    def create_habit(self, owner, title, target_frequency: int) -> Habit:
        title = _clean_title(title)
        if isinstance(target_frequency, bool) or not isinstance(target_frequency, int):
            raise ValidationError("target_frequency must be a whole number")
        if not MIN_TARGET_FREQUENCY <= target_frequency <= MAX_TARGET_FREQUENCY:
            raise ValidationError(
                f"target_frequency must be between {MIN_TARGET_FREQUENCY} "
                f"and {MAX_TARGET_FREQUENCY} days per week"
            )

        habit = Habit(user_id=owner, title=title, target_frequency=target_frequency)
        with unit_of_work(self.db, "create habit"):
            self.db.add(habit)
        self.db.refresh(habit)
        logger.info("habit created owner=%s habit=%s", owner, habit.id)
        return habit

    def find_habit(self, habit_id, owner) -> Habit:
        with unit_of_work(self.db, "find habit", commit=False):
            habit = (
                self.db.query(Habit)
                .filter(Habit.id == habit_id, Habit.user_id == owner)
                .first()
            )
        if habit is None:
            raise NotFound("Habit not found")
        return habit

    def list_habits(
        self,
        owner,
        archived: Optional[bool] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> list[HabitSummary]:
        """Owner's habits, newest first, with log counts and completion rate."""
        limit = self.config.habit_list_default_limit if limit is None else limit
        if limit <= 0 or limit > self.config.max_page_limit:
            raise ValidationError(
                f"limit must be between 1 and {self.config.max_page_limit}"
            )
        if offset < 0:
            raise ValidationError("offset cannot be negative")

        completed = func.coalesce(
            func.sum(case((HabitLog.completed.is_(True), 1), else_=0)), 0
        )
        q = (
            self.db.query(
                Habit,
                func.count(HabitLog.id),
                completed,
                func.max(HabitLog.log_date),
            )
            .outerjoin(HabitLog, HabitLog.habit_id == Habit.id)
            .filter(Habit.user_id == owner)
        )
        if archived is not None:
            q = q.filter(Habit.archived == archived)
        q = q.group_by(Habit.id).order_by(Habit.created_at.desc(), Habit.id.desc())
        q = q.limit(limit)
        if offset:
            q = q.offset(offset)

        with unit_of_work(self.db, "list habits", commit=False):
            rows = q.all()

        results: list[HabitSummary] = []
        for habit, total, done, last in rows:
            total = int(total or 0)
            done = int(done or 0)
            rate = round(done * 100 / total, RATE_DECIMALS) if total else 0.0
            results.append(
                HabitSummary(
                    habit=habit,
                    total_logs=total,
                    completed_logs=done,
                    completion_rate=rate,
                    last_logged=last,
                )
            )
        return results

    def update_habit(self, habit_id, owner, title=None, archived=None) -> Habit:
        if title is None and archived is None:
            raise ValidationError("No valid fields to update")
        habit = self.find_habit(habit_id, owner)
        with unit_of_work(self.db, "update habit"):
            if title is not None:
                habit.title = _clean_title(title)
            if archived is not None:
                habit.archived = bool(archived)
        self.db.refresh(habit)
        return habit

    def delete_habit(self, habit_id, owner) -> None:
        """Delete the habit and, through the cascade, all of its logs."""
        habit = self.find_habit(habit_id, owner)
        with unit_of_work(self.db, "delete habit"):
            self.db.delete(habit)
        logger.info("habit deleted owner=%s habit=%s", owner, habit_id)


class HabitLogStore:
    """One completion record per (habit, day), last write wins."""

    def __init__(
        self,
        db: Session,
        clock: Clock,
        config: Settings = default_settings,
    ):
        self.db = db
        self.clock = clock
        self.config = config
        self.habits = HabitStore(db, config)

    def _insert_stmt(self):
        dialect = self.db.get_bind().dialect.name
        if dialect == "postgresql":
            from sqlalchemy.dialects.postgresql import insert
        elif dialect == "sqlite":
            from sqlalchemy.dialects.sqlite import insert
        else:
            return None
        return insert(HabitLog)

    def upsert_log(
        self,
        habit_id,
        owner,
        log_date,
        completed: bool,
        count: Optional[int] = None,
    ) -> HabitLog:
        """Insert the day's log or overwrite completed/count/timestamp on it."""
        day = to_date_key(log_date)
        if day > self.clock.today():
            raise ValidationError("log_date cannot be in the future")
        if count is None:
            count = 1 if completed else 0
        if count < 0:
            raise ValidationError("count cannot be negative")
        self.habits.find_habit(habit_id, owner)

        with unit_of_work(self.db, "upsert habit log"):
            stmt = self._insert_stmt()
            if stmt is not None:
                stmt = stmt.values(
                    id=uuid.uuid4(),
                    habit_id=habit_id,
                    log_date=day,
                    completed=completed,
                    count=count,
                )
                stmt = stmt.on_conflict_do_update(
                    index_elements=[HabitLog.habit_id, HabitLog.log_date],
                    set_={
                        "completed": stmt.excluded["completed"],
                        "count": stmt.excluded["count"],
                        "created_at": func.now(),
                    },
                )
                self.db.execute(stmt)
            else:
                self._upsert_orm(habit_id, day, completed, count)

        log = (
            self.db.query(HabitLog)
            .filter(HabitLog.habit_id == habit_id, HabitLog.log_date == day)
            .populate_existing()
            .one()
        )
        logger.debug("habit log saved habit=%s day=%s completed=%s", habit_id, day, completed)
        return log

    def _upsert_orm(self, habit_id, day: date, completed: bool, count: int):
        log = (
            self.db.query(HabitLog)
            .filter(HabitLog.habit_id == habit_id, HabitLog.log_date == day)
            .with_for_update()
            .first()
        )
        if log is None:
            self.db.add(
                HabitLog(habit_id=habit_id, log_date=day, completed=completed, count=count)
            )
        else:
            log.completed = completed
            log.count = count
            log.created_at = func.now()

    def query_logs(self, habit_id, owner, query: Optional[RangeQuery] = None) -> list[HabitLog]:
        rq = (query or RangeQuery()).validated(
            self.config.habit_log_default_limit, self.config.max_page_limit
        )
        self.habits.find_habit(habit_id, owner)
        with unit_of_work(self.db, "query habit logs", commit=False):
            q = self.db.query(HabitLog).filter(HabitLog.habit_id == habit_id)
            return rq.apply(q, HabitLog.log_date).all()

    def all_logs(self, habit_id, owner) -> list[HabitLog]:
        """Full log history for the streak and stats calculators."""
        self.habits.find_habit(habit_id, owner)
        with unit_of_work(self.db, "load habit logs", commit=False):
            return (
                self.db.query(HabitLog)
                .filter(HabitLog.habit_id == habit_id)
                .order_by(HabitLog.log_date.desc())
                .all()
            )

    def find_log(self, log_id, habit_id, owner) -> HabitLog:
        with unit_of_work(self.db, "find habit log", commit=False):
            log = (
                self.db.query(HabitLog)
                .join(Habit, Habit.id == HabitLog.habit_id)
                .filter(
                    HabitLog.id == log_id,
                    HabitLog.habit_id == habit_id,
                    Habit.user_id == owner,
                )
                .first()
            )
        if log is None:
            raise NotFound("Habit log not found")
        return log

    def delete_log(self, log_id, habit_id, owner) -> None:
        log = self.find_log(log_id, habit_id, owner)
        with unit_of_work(self.db, "delete habit log"):
            self.db.delete(log)

"""Per-owner history of daily protein targets.

For a given owner the goal intervals [start_date, end_date-or-open] never
overlap. Creating a goal closes every earlier goal that still reaches the
new start date (end_date = start_date - 1) and inserts the new row in the
same transaction, serialized per owner through OwnerLocks.
"""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.config import Settings, settings as default_settings
from app.core.constants import TARGET_PROTEIN_DECIMALS
from app.core.errors import GoalConflict, InvariantViolation, NotFound, ValidationError
from app.core.query import RangeQuery
from app.core.time_utils import Clock, previous_day, to_date_key
from app.models.goal import Goal
from app.stores.locks import OwnerLocks
from app.stores.uow import unit_of_work

logger = logging.getLogger(__name__)


class GoalIntervalStore:
    def __init__(
        self,
        db: Session,
        clock: Clock,
        locks: OwnerLocks,
        config: Settings = default_settings,
    ):
        self.db = db
        self.clock = clock
        self.locks = locks
        self.config = config

    # ---- validation ---------------------------------------------------

    def _validate_target(self, target_protein) -> Decimal:
        try:
            target = Decimal(str(target_protein))
        except (InvalidOperation, ValueError):
            raise ValidationError("target_protein must be a number")
        if not target.is_finite() or target <= 0:
            raise ValidationError("target_protein must be > 0")
        if target < Decimal(str(self.config.target_protein_min)):
            raise ValidationError(
                f"target_protein must be at least {self.config.target_protein_min} grams"
            )
        if target > Decimal(str(self.config.target_protein_max)):
            raise ValidationError(
                f"target_protein cannot exceed {self.config.target_protein_max} grams"
            )
        if target.as_tuple().exponent < -TARGET_PROTEIN_DECIMALS:
            raise ValidationError(
                f"target_protein must have at most {TARGET_PROTEIN_DECIMALS} decimal places"
            )
        return target

    def _validate_dates(self, start_date, end_date):
        start = to_date_key(start_date)
        end = to_date_key(end_date) if end_date is not None else None
        if start > self.clock.today():
            raise ValidationError("start_date cannot be in the future")
        if end is not None and end < start:
            raise ValidationError("end_date must be on or after start_date")
        return start, end

    # ---- writes -------------------------------------------------------

    def create_goal(self, owner, target_protein, start_date, end_date=None) -> Goal:
        """Close the goals the new one replaces and insert it, atomically.

        Raises GoalConflict when a goal starting on or after `start_date`
        would overlap the new interval; those cannot be closed without
        inverting them.
        """
        target = self._validate_target(target_protein)
        start, end = self._validate_dates(start_date, end_date)

        with self.locks.hold(owner):
            with unit_of_work(self.db, "create goal"):
                self.locks.lock_transaction(self.db, owner)
                self._reject_later_overlaps(owner, start, end)
                closed = self._close_reaching(owner, start)

                goal = Goal(
                    user_id=owner,
                    target_protein=target,
                    start_date=start,
                    end_date=end,
                )
                self.db.add(goal)
                self.db.flush()
                self._verify_no_overlap(owner, goal)

        self.db.refresh(goal)
        logger.info(
            "goal created owner=%s interval=[%s, %s] closed=%d",
            owner,
            goal.start_date,
            goal.end_date or "open",
            closed,
        )
        return goal

    def _reject_later_overlaps(self, owner, start: date, end: Optional[date]):
        q = self.db.query(Goal).filter(
            Goal.user_id == owner,
            Goal.start_date >= start,
        )
        if end is not None:
            q = q.filter(Goal.start_date <= end)
        clash = q.order_by(Goal.start_date).first()
        if clash is not None:
            raise GoalConflict(
                f"A goal starting {clash.start_date} already covers this period"
            )

    def _close_reaching(self, owner, start: date) -> int:
        """End every earlier goal that reaches `start` on the day before it."""
        reaching = (
            self.db.query(Goal)
            .filter(
                Goal.user_id == owner,
                or_(Goal.end_date.is_(None), Goal.end_date >= start),
                Goal.start_date < start,
            )
            .with_for_update()
            .all()
        )
        new_end = previous_day(start)
        for goal in reaching:
            goal.end_date = new_end
        self.db.flush()
        return len(reaching)

    def _verify_no_overlap(self, owner, goal: Goal):
        q = self.db.query(Goal).filter(
            Goal.user_id == owner,
            Goal.id != goal.id,
            or_(Goal.end_date.is_(None), Goal.end_date >= goal.start_date),
        )
        if goal.end_date is not None:
            q = q.filter(Goal.start_date <= goal.end_date)
        overlapping = q.all()
        if overlapping:
            logger.error(
                "overlapping goals for owner=%s: new=%s existing=%s",
                owner,
                goal.id,
                [g.id for g in overlapping],
            )
            raise InvariantViolation("Goal intervals overlap; write aborted")

    # ---- reads --------------------------------------------------------

    def find_active_goal(self, owner, as_of_date=None) -> Optional[Goal]:
        """The goal whose interval contains `as_of_date` (today by default)."""
        d = to_date_key(as_of_date) if as_of_date is not None else self.clock.today()
        with unit_of_work(self.db, "find active goal", commit=False):
            rows = (
                self.db.query(Goal)
                .filter(
                    Goal.user_id == owner,
                    Goal.start_date <= d,
                    or_(Goal.end_date.is_(None), Goal.end_date >= d),
                )
                .order_by(Goal.start_date.desc(), Goal.created_at.desc())
                .limit(2)
                .all()
            )
        if len(rows) > 1:
            logger.error("more than one active goal for owner=%s on %s", owner, d)
        return rows[0] if rows else None

    def find_goal_history(self, owner, query: Optional[RangeQuery] = None) -> list[Goal]:
        """Goals whose start_date falls in the window, newest first. Read-only."""
        rq = (query or RangeQuery()).validated(
            self.config.goal_history_default_limit, self.config.max_page_limit
        )
        with unit_of_work(self.db, "find goal history", commit=False):
            q = self.db.query(Goal).filter(Goal.user_id == owner)
            return rq.apply(q, Goal.start_date).all()

    def find_goal(self, goal_id, owner) -> Goal:
        with unit_of_work(self.db, "find goal", commit=False):
            goal = (
                self.db.query(Goal)
                .filter(Goal.id == goal_id, Goal.user_id == owner)
                .first()
            )
        if goal is None:
            raise NotFound("Goal not found")
        return goal

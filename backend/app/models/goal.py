import uuid

from sqlalchemy import CheckConstraint, Column, Date, DateTime, Index, Numeric, Uuid
from sqlalchemy.sql import func
from app.db import Base


class Goal(Base):
    """Daily protein target effective over [start_date, end_date-or-open]."""

    __tablename__ = "goals"
    __table_args__ = (
        CheckConstraint("target_protein > 0", name="ck_goals_target_positive"),
        CheckConstraint(
            "end_date IS NULL OR end_date >= start_date",
            name="ck_goals_end_after_start",
        ),
        Index("ix_goals_user_start", "user_id", "start_date"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Owner, as authenticated by the upstream auth layer
    user_id = Column(Uuid, nullable=False, index=True)

    target_protein = Column(Numeric(6, 2), nullable=False)  # grams per day

    start_date = Column(Date, nullable=False)
    # NULL means open-ended. Only ever rewritten when a later goal is created.
    end_date = Column(Date, nullable=True)

    # Timestamps
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    def contains(self, d) -> bool:
        return self.start_date <= d and (self.end_date is None or self.end_date >= d)

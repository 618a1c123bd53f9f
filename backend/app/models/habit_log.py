import uuid

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db import Base


class HabitLog(Base):
    __tablename__ = "habit_logs"
    __table_args__ = (
        # One row per habit per calendar day; a second write overwrites it
        UniqueConstraint("habit_id", "log_date", name="uq_habit_logs_habit_date"),
        CheckConstraint("count >= 0", name="ck_habit_logs_count_non_negative"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    habit_id = Column(
        Uuid,
        ForeignKey("habits.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    log_date = Column(Date, nullable=False)
    completed = Column(Boolean, nullable=False, default=False)
    count = Column(Integer, nullable=False, default=0)

    # Refreshed on every overwrite
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    habit = relationship("Habit", back_populates="logs")

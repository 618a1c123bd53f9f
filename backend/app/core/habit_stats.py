from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable, Optional

from app.core.constants import RATE_DECIMALS, WEEK_WINDOW_DAYS
from app.core.streaks import Streak, calculate_streak
from app.core.time_utils import to_date_key


@dataclass(frozen=True)
class HabitStats:
    total_completions: int = 0
    completion_rate: float = 0.0
    weekly_completions: int = 0
    streak: Streak = field(default_factory=Streak)


def completion_rate(logs: Iterable) -> float:
    """Percentage of logged days marked completed (0 when nothing is logged).

    Measured over logged days, not scheduled days, rounded to RATE_DECIMALS.
    """
    logs = list(logs)
    if not logs:
        return 0.0
    completed = sum(1 for log in logs if log.completed)
    return round(completed * 100 / len(logs), RATE_DECIMALS)


def weekly_completions(logs: Iterable, now) -> int:
    """Completed logs dated within the 7 days ending at `now`, inclusive."""
    end = to_date_key(now)
    start = end - timedelta(days=WEEK_WINDOW_DAYS - 1)
    return sum(
        1
        for log in logs
        if log.completed and start <= to_date_key(log.log_date) <= end
    )


def total_completions(logs: Iterable) -> int:
    """Sum of `count` over completed logs, e.g. 8 glasses of water in a day."""
    return sum(int(log.count or 0) for log in logs if log.completed)


def summarize(logs: Iterable, today: Optional[date] = None) -> HabitStats:
    logs = list(logs)
    return HabitStats(
        total_completions=total_completions(logs),
        completion_rate=completion_rate(logs),
        weekly_completions=weekly_completions(logs, today) if today else 0,
        streak=calculate_streak(logs, today=today),
    )

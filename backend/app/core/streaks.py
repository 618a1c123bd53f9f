"""Habit streaks computed from a sparse, date-keyed log history.

Streaks count consecutive calendar days with a completed log. The habit's
weekly target_frequency is not consulted: a "weekdays only" habit still
breaks its streak over a skipped day. Dates are compared as naive calendar
days, so callers pass already-localized date keys.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from app.core.time_utils import days_between, next_day, to_date_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Streak:
    current_streak: int = 0
    longest_streak: int = 0
    last_completed_date: Optional[date] = None


def completed_dates(logs: Iterable) -> list[date]:
    """Completed log dates, most recent first."""
    dates = [to_date_key(log.log_date) for log in logs if log.completed]
    dates.sort(reverse=True)
    return dates


def calculate_streak(logs: Iterable, today: Optional[date] = None) -> Streak:
    """Walk completed days newest to oldest and measure the runs.

    The walk starts just after the most recent completion, so the first run
    found is the current one. `current_streak` follows that run until the
    first gap and then freezes. If `today` is given and the most recent
    completion is older than yesterday, the run is no longer current and
    `current_streak` is reported as 0.

    Two logs on the same day (gap == 0) are skipped without touching the
    counters. The upsert key makes that impossible in storage.
    """
    dates = completed_dates(logs)
    if not dates:
        return Streak()

    last_completed = dates[0]
    cursor = next_day(last_completed)
    current = 0
    longest = 0
    running = 0
    gap_crossed = False

    for d in dates:
        gap = days_between(cursor, d)
        if gap == 1:
            running += 1
            if not gap_crossed:
                current = running
        elif gap > 1:
            longest = max(longest, running)
            running = 1
            gap_crossed = True
        cursor = d

    longest = max(longest, running, current)

    if today is not None and days_between(today, last_completed) > 1:
        current = 0

    logger.debug(
        "streak: current=%s longest=%s last=%s", current, longest, last_completed
    )
    return Streak(
        current_streak=current,
        longest_streak=longest,
        last_completed_date=last_completed,
    )

from datetime import date, datetime
from types import SimpleNamespace

from app.core.habit_stats import (
    completion_rate,
    summarize,
    total_completions,
    weekly_completions,
)


def log(d, completed=True, count=1):
    return SimpleNamespace(log_date=d, completed=completed, count=count)


def test_completion_rate_over_logged_days():
    logs = [log(date(2024, 6, d), completed=d <= 7) for d in range(1, 11)]
    assert completion_rate(logs) == 70.0


def test_completion_rate_is_rounded_to_two_places():
    logs = [log(date(2024, 6, d), completed=d != 3) for d in (1, 2, 3)]
    assert completion_rate(logs) == 66.67
    assert summarize(logs, today=date(2024, 6, 27)).completion_rate == 66.67


def test_empty_history_is_zero_not_an_error():
    assert completion_rate([]) == 0.0
    assert weekly_completions([], date(2024, 6, 27)) == 0
    assert total_completions([]) == 0
    stats = summarize([], today=date(2024, 6, 27))
    assert stats.streak.current_streak == 0
    assert stats.completion_rate == 0.0


def test_weekly_window_is_seven_days_inclusive():
    now = date(2024, 6, 27)
    logs = [
        log(date(2024, 6, 20)),  # 8 days back, outside
        log(date(2024, 6, 21)),  # first day of the window
        log(date(2024, 6, 24), completed=False),
        log(date(2024, 6, 27)),  # now
    ]
    assert weekly_completions(logs, now) == 2
    assert weekly_completions(logs, datetime(2024, 6, 27, 23, 30)) == 2


def test_total_completions_sums_counts_of_completed_logs():
    logs = [
        log(date(2024, 6, 25), count=8),
        log(date(2024, 6, 26), count=6),
        log(date(2024, 6, 27), completed=False, count=3),
    ]
    assert total_completions(logs) == 14


def test_summarize_combines_everything():
    today = date(2024, 6, 27)
    logs = [
        log(date(2024, 6, 24)),
        log(date(2024, 6, 25)),
        log(date(2024, 6, 26), count=2),
        log(date(2024, 6, 10), completed=False),
    ]
    stats = summarize(logs, today=today)
    assert stats.total_completions == 4
    assert stats.completion_rate == 75.0
    assert stats.weekly_completions == 3
    assert stats.streak.current_streak == 3
    assert stats.streak.last_completed_date == date(2024, 6, 26)

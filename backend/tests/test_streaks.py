from datetime import date, timedelta
from types import SimpleNamespace

from app.core.streaks import Streak, calculate_streak


def log(d, completed=True, count=1):
    return SimpleNamespace(log_date=d, completed=completed, count=count)


def run(start, days):
    return [log(start + timedelta(days=i)) for i in range(days)]


def test_no_completed_logs_is_all_zero():
    assert calculate_streak([]) == Streak(0, 0, None)
    assert calculate_streak([log(date(2024, 6, 1), completed=False)]) == Streak(0, 0, None)


def test_three_day_run_ending_yesterday():
    logs = [log(date(2024, 6, 24)), log(date(2024, 6, 25)), log(date(2024, 6, 26))]
    streak = calculate_streak(logs, today=date(2024, 6, 27))
    assert streak.current_streak == 3
    assert streak.longest_streak == 3
    assert streak.last_completed_date == date(2024, 6, 26)


def test_longest_run_wins_whichever_is_more_recent():
    older_long = run(date(2024, 5, 1), 5) + run(date(2024, 5, 10), 2)
    streak = calculate_streak(older_long)
    assert streak.longest_streak == 5
    assert streak.current_streak == 2

    recent_long = run(date(2024, 5, 1), 2) + run(date(2024, 5, 10), 5)
    streak = calculate_streak(recent_long)
    assert streak.longest_streak == 5
    assert streak.current_streak == 5


def test_missed_days_break_the_run():
    logs = run(date(2024, 6, 20), 3) + [log(date(2024, 6, 23), completed=False)] + [log(date(2024, 6, 24))]
    streak = calculate_streak(logs, today=date(2024, 6, 24))
    assert streak.current_streak == 1
    assert streak.longest_streak == 3


def test_input_order_does_not_matter():
    logs = run(date(2024, 6, 1), 4)
    assert calculate_streak(list(reversed(logs))) == calculate_streak(logs)


def test_run_that_ended_before_yesterday_is_not_current():
    logs = run(date(2024, 6, 20), 4)  # through 2024-06-23
    assert calculate_streak(logs).current_streak == 4
    stale = calculate_streak(logs, today=date(2024, 6, 25))
    assert stale.current_streak == 0
    assert stale.longest_streak == 4
    assert stale.last_completed_date == date(2024, 6, 23)


def test_completed_today_counts():
    logs = run(date(2024, 6, 25), 3)  # through today
    assert calculate_streak(logs, today=date(2024, 6, 27)).current_streak == 3


def test_duplicate_dates_are_skipped():
    logs = run(date(2024, 6, 24), 3) + [log(date(2024, 6, 25))]
    streak = calculate_streak(logs)
    assert streak.current_streak == 3
    assert streak.longest_streak == 3


def test_cadence_is_ignored_weekend_gap_breaks_streak():
    # Mon-Fri then Mon again: the skipped weekend breaks the run
    week = run(date(2024, 6, 10), 5)
    logs = week + [log(date(2024, 6, 17))]
    streak = calculate_streak(logs)
    assert streak.current_streak == 1
    assert streak.longest_streak == 5


def test_accepts_string_date_keys():
    logs = [log("2024-06-25"), log("2024-06-26")]
    assert calculate_streak(logs).last_completed_date == date(2024, 6, 26)

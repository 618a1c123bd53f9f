from datetime import date, datetime, timedelta

from app.core.errors import ValidationError


def parse_date_key(value: str) -> date:
    """
    Parse a strict 'YYYY-MM-DD' string into a date key.
    Example: '2024-06-27' -> date(2024, 6, 27)
    """
    s = (value or "").strip()
    parts = s.split("-")
    if len(parts) != 3 or len(parts[0]) != 4 or len(parts[1]) != 2 or len(parts[2]) != 2:
        raise ValidationError(f"Date must be in YYYY-MM-DD format: {value!r}")
    try:
        return date.fromisoformat(s)
    except ValueError:
        raise ValidationError(f"Invalid calendar date: {value!r}")


def to_date_key(value) -> date:
    """Reduce a timestamp to its calendar day.

    Accepts date, datetime, a bare 'YYYY-MM-DD' string or a full ISO
    timestamp. Time of day is dropped as-is; no timezone conversion happens
    here, callers pass local values.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        s = value.strip()
        if len(s) == 10:
            return parse_date_key(s)
        try:
            return datetime.fromisoformat(s.replace("Z", "+00:00")).date()
        except ValueError:
            raise ValidationError(f"Not a date or ISO timestamp: {value!r}")
    raise ValidationError(f"Cannot convert {type(value).__name__} to a date key")


def days_between(later: date, earlier: date) -> int:
    """Whole calendar days from `earlier` to `later` (negative if reversed)."""
    return (later - earlier).days


def previous_day(d: date) -> date:
    return d - timedelta(days=1)


def next_day(d: date) -> date:
    return d + timedelta(days=1)


def to_local_datetime(dt, tz_name: str | None = None):
    """Convert a datetime from source tz (assume UTC if naive) to local or given tz.

    - If `tz_name` is 'local' or None: use system local timezone.
    - If `tz_name` is IANA tz name (e.g., 'America/New_York'): use that.
    - If `dt` has no tzinfo, assume UTC.
    """
    from datetime import timezone
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    if tz_name and tz_name != "local":
        from zoneinfo import ZoneInfo
        return dt.astimezone(ZoneInfo(tz_name))
    return dt.astimezone()


class Clock:
    """Answers "what day is it" for the configured timezone."""

    def __init__(self, tz_name: str | None = None):
        self.tz_name = tz_name

    def now(self) -> datetime:
        return to_local_datetime(datetime.now().astimezone(), self.tz_name)

    def today(self) -> date:
        return self.now().date()


class FixedClock(Clock):
    """Clock pinned to a single day. Used by tests and seed scripts."""

    def __init__(self, today: date):
        super().__init__(None)
        self._today = to_date_key(today)

    def now(self) -> datetime:
        return datetime.combine(self._today, datetime.min.time())

    def today(self) -> date:
        return self._today

"""General-purpose utility helpers."""
import calendar
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return current UTC datetime."""
    return datetime.now(timezone.utc)


def months_ago(months: int, now: datetime | None = None) -> datetime:
    """Return the datetime ``months`` calendar months before ``now``.

    The day is clamped to the length of the target month (March 31 minus one
    month is February 28 or 29).
    """
    now = now or utc_now()
    month_index = now.year * 12 + now.month - 1 - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(now.day, calendar.monthrange(year, month)[1])
    return now.replace(year=year, month=month, day=day)


def normalize_names(names: list[str]) -> list[str]:
    """Strip names, drop blanks and case-insensitive duplicates (first spelling wins)."""
    seen: set[str] = set()
    result = []
    for name in names:
        name = name.strip()
        if not name or name.lower() in seen:
            continue
        seen.add(name.lower())
        result.append(name)
    return result

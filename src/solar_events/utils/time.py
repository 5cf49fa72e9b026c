"""
Time Utilities
==============

Timestamp parsing and formatting for upstream event records, plus the
date-range shorthand accepted by the fetch layer.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional


DEFAULT_RANGE_DAYS = 30
DATE_FORMAT = '%Y-%m-%d'


def parse_iso_timestamp(ts: str) -> Optional[datetime]:
    """
    Parse ISO 8601 timestamp to timezone-aware datetime.

    Handles common formats:
    - '2024-01-01T00:55Z' (DONKI)
    - '2024-01-01T00:55:00+00:00'
    - '2024-01-01T00:55:00' (assumes UTC)

    Args:
        ts: ISO timestamp string

    Returns:
        Timezone-aware datetime (UTC) or None if parsing fails
    """
    if not ts or not isinstance(ts, str):
        return None

    ts = ts.strip().replace('Z', '+00:00')

    try:
        dt = datetime.fromisoformat(ts)
    except ValueError:
        return None

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_timestamp(dt: Optional[datetime], fmt: str = 'iso') -> str:
    """
    Format datetime for display.

    Args:
        dt: Datetime object (None renders as 'Unknown')
        fmt: Format type ('iso', 'display', 'date')

    Returns:
        Formatted timestamp string
    """
    if dt is None:
        return 'Unknown'

    if fmt == 'display':
        return dt.strftime('%Y-%m-%d %H:%M UTC')
    elif fmt == 'date':
        return dt.strftime(DATE_FORMAT)
    return dt.isoformat()


def now_utc() -> datetime:
    """Get current time as timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def _years_ago(dt: datetime, years: int) -> datetime:
    try:
        return dt.replace(year=dt.year - years)
    except ValueError:
        # Feb 29 in a non-leap target year
        return dt.replace(year=dt.year - years, day=28)


def _parse_exact_date(value: str, name: str) -> datetime:
    try:
        parsed = datetime.strptime(value.strip(), DATE_FORMAT)
    except ValueError:
        raise ValueError(
            f"Invalid {name} date '{value}'. Expected format: yyyy-MM-dd"
        ) from None
    return parsed.replace(tzinfo=timezone.utc)


def parse_date_range(
    start: Optional[str] = None,
    end: Optional[str] = None,
    now: Optional[datetime] = None,
) -> tuple[datetime, datetime]:
    """
    Resolve the start/end arguments of a fetch request into datetimes.

    Accepted start values:
    - None (with no end): trailing 30-day window ending now
    - 'today': (now, now)
    - 'yrN': the last N years, e.g. 'yr2'
    - 'yyyy-MM-dd': exact date; end defaults to now when absent

    Args:
        start: Start date or shorthand
        end: End date (yyyy-MM-dd)
        now: Reference time (defaults to current UTC time)

    Returns:
        (start, end) as timezone-aware datetimes

    Raises:
        ValueError: On malformed dates or an end before the start
    """
    now = now or now_utc()
    start = start.strip() if start else None
    end = end.strip() if end else None

    if not start and not end:
        return now - timedelta(days=DEFAULT_RANGE_DAYS), now

    # Shorthands ignore a well-formed end but still reject a malformed one
    parsed_end = _parse_exact_date(end, 'end') if end else now

    if start and start.lower() == 'today':
        return now, now

    if start and start.lower().startswith('yr'):
        count = start[2:]
        if not count.isdigit():
            raise ValueError(
                f"Invalid year shorthand '{start}'. Expected 'yr' followed by a number, e.g. 'yr2'"
            )
        return _years_ago(now, int(count)), now

    if not start:
        return parsed_end - timedelta(days=DEFAULT_RANGE_DAYS), parsed_end

    parsed_start = _parse_exact_date(start, 'start')

    if parsed_end < parsed_start:
        raise ValueError(
            f"End date {format_timestamp(parsed_end, 'date')} is before "
            f"start date {format_timestamp(parsed_start, 'date')}"
        )

    return parsed_start, parsed_end

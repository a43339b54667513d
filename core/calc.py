# =============================================================================
# core/calc.py  —  Small arithmetic & date helpers shared by the aggregations
# =============================================================================

import math
from datetime import date, datetime, timedelta
from typing import Optional, Union

STANDARD_DAY_MINUTES = 480  # 8 hours


def round2(value: float) -> float:
    """Round to two decimals, halves upward (0.125 -> 0.13).

    Every percentage is reported at this precision.
    """
    return math.floor(value * 100 + 0.5) / 100


def parse_date(value: Optional[Union[str, date]]) -> Optional[date]:
    """Parse an ISO "YYYY-MM-DD" string (or pass a date through).

    Longer ISO timestamps are accepted; only the date part is kept.
    Empty values return None, which callers treat as open-ended.
    """
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value[:10], "%Y-%m-%d").date()


def working_days_between(
    start_date: Optional[Union[str, date]],
    end_date: Optional[Union[str, date]],
) -> int:
    """Count Monday-Friday days from start to end, both inclusive.

    Returns 0 if either date is missing or the range is inverted.
    """
    start = parse_date(start_date)
    end = parse_date(end_date)
    if start is None or end is None or end < start:
        return 0

    total_days = (end - start).days + 1
    full_weeks, remainder = divmod(total_days, 7)
    count = full_weeks * 5

    # Walk the leftover (< 7) days individually
    day = start + timedelta(days=full_weeks * 7)
    for _ in range(remainder):
        if day.weekday() < 5:  # Saturday=5, Sunday=6
            count += 1
        day += timedelta(days=1)
    return count

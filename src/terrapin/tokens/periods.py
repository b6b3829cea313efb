"""
Terrapin Period Expansion

This module expands (start, end) periods of dates or month-days into the full
list of days they cover, so that they can be used as exact-match criteria.
"""

from typing import Any, List
import numpy as np

from ..core.config import REFERENCE_LEAP_YEAR
from ..core.core_types import Period
from ..core.exceptions import InvalidDateError, ParameterError
from .dates import normalize_date
from .month_days import normalize_month_day


def as_period_list(periods: Any) -> List[Period]:
    """
    Accept a single (start, end) pair or a list of such pairs.

    Raises:
        ParameterError: If a period does not contain exactly two values
    """
    if isinstance(periods, (list, tuple)) and len(periods) == 2 and all(
        not isinstance(bound, (list, tuple)) for bound in periods
    ):
        periods = [periods]

    result = []
    for period in periods:
        if not isinstance(period, (list, tuple)) or len(period) != 2:
            raise ParameterError("periods", str(period), "Each period must be a (start, end) pair")
        result.append((period[0], period[1]))
    return result


def _day_range(start: str, end: str) -> np.ndarray:
    """Inclusive range of days between two ISO dates."""
    first = np.datetime64(start, "D")
    last = np.datetime64(end, "D")
    return np.arange(first, last + np.timedelta64(1, "D"), dtype="datetime64[D]")


def expand_date_periods(periods: Any) -> List[str]:
    """
    Expand date periods into every date they cover.

    Args:
        periods: A (start, end) pair or a list of pairs, in any format
            accepted by normalize_date

    Returns:
        List[str]: Sorted, unique ISO dates ("YYYY-MM-DD")

    Raises:
        InvalidDateError: If a period ends before it starts

    Examples:
        >>> expand_date_periods(("2019-01-01", "03/01/2019"))
        ['2019-01-01', '2019-01-02', '2019-01-03']
    """
    dates = set()
    for start, end in as_period_list(periods):
        iso_start = normalize_date(start)
        iso_end = normalize_date(end)
        if iso_start is None or iso_end is None:
            raise InvalidDateError((start, end), "Periods need both a start and an end")
        if iso_end < iso_start:
            raise InvalidDateError((start, end), "Period ends before it starts")
        dates.update(str(day) for day in _day_range(iso_start, iso_end))
    return sorted(dates)


def _leap_calendar() -> List[str]:
    """Every month-day of a leap year, from Jan-01 to Dec-31."""
    year = REFERENCE_LEAP_YEAR
    return [normalize_month_day(day) for day in _day_range(f"{year}-01-01", f"{year}-12-31")]


def expand_month_day_periods(periods: Any) -> List[str]:
    """
    Expand month-day periods into every month-day they cover.

    A period whose end falls earlier in the calendar than its start wraps
    across the new year ("Dec-30" to "Jan-02" gives Dec-30, Dec-31, Jan-01,
    Jan-02). Feb-29 is included whenever a period spans it.

    Args:
        periods: A (start, end) pair or a list of pairs, in any format
            accepted by normalize_month_day

    Returns:
        List[str]: Unique "Mon-DD" tokens in the order they are walked
    """
    calendar = _leap_calendar()
    tokens: List[str] = []
    seen = set()
    for start, end in as_period_list(periods):
        bounds = (normalize_month_day(start), normalize_month_day(end))
        if None in bounds:
            raise InvalidDateError((start, end), "Periods need both a start and an end")
        first, last = (calendar.index(bound) for bound in bounds)
        if last >= first:
            walked = calendar[first:last + 1]
        else:
            walked = calendar[first:] + calendar[:last + 1]
        for token in walked:
            if token not in seen:
                seen.add(token)
                tokens.append(token)
    return tokens


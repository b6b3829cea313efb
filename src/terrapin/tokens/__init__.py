"""
Terrapin Token Handling

This package normalizes human-entered months, month-days and dates into
canonical forms, and expands date / month-day periods.
"""

from .months import (
    parse_month,
    is_month,
    normalize_month,
)

from .month_days import (
    split_month_day,
    month_day_key,
    normalize_month_day,
    extract_month,
)

from .dates import (
    normalize_date,
    date_key,
)

from .periods import (
    expand_date_periods,
    expand_month_day_periods,
)

__all__ = [
    # Months
    "parse_month",
    "is_month",
    "normalize_month",
    # Month-days
    "split_month_day",
    "month_day_key",
    "normalize_month_day",
    "extract_month",
    # Dates
    "normalize_date",
    "date_key",
    # Periods
    "expand_date_periods",
    "expand_month_day_periods",
]

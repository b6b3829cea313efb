"""
Terrapin Date Token Handling

This module reformats full-date tokens, potentially with the month spelled out
("1991-Jun-20"), without requiring them to parse as an actual calendar date.
"""

from datetime import date
from typing import Any, Optional, Union
import numpy as np

from ..core.config import MONTH_ABBREVIATIONS
from ..core.core_types import DateFormat
from ..core.exceptions import InvalidDateError
from .month_days import as_calendar_date, is_year_part, validate_day, is_missing_token, split_token
from .months import parse_month

# ============================================================================
# Date Normalization
# ============================================================================

def render_date(
    year: int,
    month: int,
    day: int,
    out: Union[DateFormat, str] = "YYYY-MM-DD",
    sep: str = "-"
) -> str:
    """Render a year, month and day in the requested form."""
    date_format = DateFormat.parse(out)
    month_text = MONTH_ABBREVIATIONS[month - 1] if date_format.named_month else f"{month:02d}"
    parts = (f"{year:04d}", month_text, f"{day:02d}")
    if date_format.order == "dmy":
        parts = parts[::-1]
    return sep.join(parts)


def normalize_date(
    token: Any,
    out: Union[DateFormat, str] = "YYYY-MM-DD",
    sep: str = "-"
) -> Optional[str]:
    """
    Reformat date information.

    The token must have three parts. The 4-digit part is the year and must be
    first or last; the middle part is the month. This supports YYYY-MM-DD and
    DD-MM-YYYY but **not** MM-DD-YYYY.

    Output forms (20th June 1991 as the example):

        "YYYY-MM-DD" / "ymd"     "1991-06-20"
        "DD-MM-YYYY" / "dmy"     "20-06-1991"
        "YYYY-Jan-DD" / "ybd"    "1991-Jun-20"
        "DD-Jan-YYYY" / "dby"    "20-Jun-1991"

    Args:
        token: Date string; date, datetime and numpy datetime64 values are
            accepted as well
        out: Output form (case-insensitive)
        sep: Separator placed between the parts

    Returns:
        Optional[str]: The reformatted date, or None for a missing token

    Raises:
        InvalidDateError: If the token is not a three-part date with one year

    Examples:
        >>> normalize_date("20/Jun/1991")
        '1991-06-20'
        >>> normalize_date("1991-06-20", out="dby", sep=" ")
        '20 Jun 1991'
    """
    if is_missing_token(token):
        return None

    if isinstance(token, (date, np.datetime64)):
        stamp = as_calendar_date(token)
        return render_date(stamp.year, stamp.month, stamp.day, out, sep)

    parts = split_token(token, (sep,))
    if len(parts) != 3:
        raise InvalidDateError(token, "Dates must have exactly three parts")

    # A 4-letter month name ("June") in the middle is never the year
    year_positions = [i for i, part in enumerate(parts) if is_year_part(part)]
    if len(year_positions) != 1 or year_positions[0] == 1:
        raise InvalidDateError(token, "Use YYYY-MM-DD or DD-MM-YYYY")

    year_position = year_positions[0]
    month = parse_month(parts[1])
    if month is None:
        raise InvalidDateError(token, f"'{parts[1]}' is not a month; MM-DD-YYYY is not supported")

    day_part = parts[2] if year_position == 0 else parts[0]
    day = validate_day(token, month, day_part)

    return render_date(int(parts[year_position]), month, day, out, sep)


def date_key(token: Any) -> str:
    """Return the ISO form of a date token, used for ordering comparisons."""
    return normalize_date(token, out="YYYY-MM-DD", sep="-")

"""
Terrapin Month-Day Token Handling

This module reformats "month-day" combinations (dates that ignore the year)
to a canonical form such as "Jun-04", and extracts the month from date-like
tokens.

Accepted inputs include, with any of "-", "/", "_" or " " as the separator:

    01-Jan  | 1-Jan | Jan-1 | Jan-01 | January-01 | 2019-01-31 | 31-01-2019

The month must be unambiguous: "01-02" is rejected because it could be the
1st of February or the 2nd of January.
"""

import re
import warnings
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union
import numpy as np

from ..core.config import (
    CANONICAL_SEPARATOR, EQUIVALENT_SEPARATORS, MAX_DAYS_IN_MONTH,
    MONTH_ABBREVIATIONS, MISSING_TOKENS
)
from ..core.core_types import MonthDayFormat, MonthFormat
from ..core.exceptions import (
    AmbiguousDateError, InvalidDateError, InvalidMonthError, ParameterError
)
from .months import is_month, is_month_name, normalize_month, parse_month

_GLUED_MONTH_FIRST = re.compile(r"^([A-Za-z]+)\.?(\d{1,2})$")
_GLUED_DAY_FIRST = re.compile(r"^(\d{1,2})([A-Za-z]+)$")

_NUMERIC_ORDERS = ("month-day", "day-month")

_MONTH_DAY_RENDERERS: Dict[str, Callable[[int, int], Tuple[str, str]]] = {
    "name": lambda m, d: (MONTH_ABBREVIATIONS[m - 1], f"{d:02d}"),
    "padded": lambda m, d: (f"{m:02d}", f"{d:02d}"),
    "plain": lambda m, d: (str(m), str(d)),
}

# ============================================================================
# Token Splitting
# ============================================================================

def is_missing_token(token: Any) -> bool:
    """Check whether a token represents a missing value (None, NaN, NaT, "NA")."""
    if token is None:
        return True
    if isinstance(token, np.datetime64):
        return bool(np.isnat(token))
    if isinstance(token, (float, np.floating)):
        return bool(np.isnan(token))
    if isinstance(token, str):
        return token.strip().lower() in MISSING_TOKENS
    return False


def split_token(token: Any, extra_separators: Sequence[str] = ()) -> List[str]:
    """
    Split a date-like token into its parts.

    "/", "_" and " " (plus any ``extra_separators``) are treated as "-".

    Args:
        token: The token to split
        extra_separators: Further separators to treat as "-"

    Returns:
        List[str]: Non-empty parts of the token
    """
    text = str(token).strip()
    for separator in tuple(EQUIVALENT_SEPARATORS) + tuple(extra_separators):
        if separator:
            text = text.replace(separator, CANONICAL_SEPARATOR)
    return [part for part in text.split(CANONICAL_SEPARATOR) if part]


def _split_glued(part: str) -> Optional[List[str]]:
    """Split tokens such as "Jan01" or "01Jan" into month and day."""
    for pattern in (_GLUED_MONTH_FIRST, _GLUED_DAY_FIRST):
        match = pattern.match(part)
        if match and any(is_month_name(group) for group in match.groups()):
            return list(match.groups())
    return None


def is_year_part(part: str) -> bool:
    return len(part) == 4 and part.isdigit()


def _strip_year(token: Any, parts: List[str]) -> Tuple[List[str], bool]:
    """
    Drop the 4-digit year from a three-part token.

    Returns the remaining parts and whether they are already ordered as
    (month, day). When the year sits at either end, the middle part is the
    month by convention (YYYY-MM-DD or DD-MM-YYYY).
    """
    year_positions = [i for i, part in enumerate(parts) if is_year_part(part)]
    if len(year_positions) != 1:
        raise InvalidDateError(token, "Use YYYY-MM-DD or DD-MM-YYYY")

    position = year_positions[0]
    remaining = [part for i, part in enumerate(parts) if i != position]

    if position == 1:
        return remaining, False

    middle = parts[1]
    if not is_month(middle):
        raise InvalidDateError(token, "Cannot be in the format MM-DD-YYYY; the middle part must be the month")
    day = parts[2] if position == 0 else parts[0]
    return [middle, day], True


def _choose_month(
    token: Any,
    first: str,
    second: str,
    numeric_order: Optional[str] = None
) -> Tuple[str, str]:
    """Decide which of two parts is the month; returns (month, day)."""
    first_named = is_month_name(first)
    second_named = is_month_name(second)

    if first_named and second_named:
        raise InvalidDateError(token, "Both parts are month names")
    if first_named:
        return first, second
    if second_named:
        return second, first

    if not (first.isdigit() and second.isdigit()):
        raise InvalidDateError(token, "Cannot identify a month and a day")

    first_value, second_value = int(first), int(second)
    if first_value > 12 and second_value > 12:
        raise InvalidDateError(token, "Neither part can be a month")
    if first_value > 12:
        return second, first
    if second_value > 12:
        return first, second

    if numeric_order == "month-day":
        return first, second
    if numeric_order == "day-month":
        return second, first
    raise AmbiguousDateError(token)


def split_month_day(
    token: Any,
    extra_separators: Sequence[str] = (),
    numeric_order: Optional[str] = None
) -> Tuple[str, Optional[str]]:
    """
    Locate the month and day sub-tokens of a date-like token.

    A year is stripped first when the token has three parts. A single-part
    token is returned as (token, None) unless it glues a month name to a day.

    Args:
        token: Date-like token
        extra_separators: Further separators to treat as "-"
        numeric_order: "month-day" or "day-month" to resolve two numbers
            that could both be months

    Returns:
        Tuple[str, Optional[str]]: Month sub-token (as entered) and day sub-token

    Raises:
        InvalidDateError: If the token cannot be read as a month and a day
        AmbiguousDateError: If both parts could be the month
    """
    if numeric_order is not None and numeric_order not in _NUMERIC_ORDERS:
        raise ParameterError("numeric_order", str(numeric_order), f"Must be one of: {', '.join(_NUMERIC_ORDERS)}")

    parts = split_token(token, extra_separators)

    if len(parts) == 1:
        glued = _split_glued(parts[0])
        if glued is None:
            return parts[0], None
        parts = glued

    if len(parts) == 3:
        parts, ordered = _strip_year(token, parts)
        if ordered:
            return parts[0], parts[1]

    if len(parts) != 2:
        raise InvalidDateError(token, "Expected a month and a day")

    return _choose_month(token, parts[0], parts[1], numeric_order)


def validate_day(token: Any, month: int, day_part: Optional[str]) -> int:
    if day_part is None or not day_part.isdigit():
        raise InvalidDateError(token, "Could not find the day")
    day = int(day_part)
    if not 1 <= day <= MAX_DAYS_IN_MONTH[month - 1]:
        raise InvalidDateError(token, f"Day {day} does not exist in {MONTH_ABBREVIATIONS[month - 1]}")
    return day

# ============================================================================
# Month-Day Normalization
# ============================================================================

def render_month_day(
    month: int,
    day: int,
    out: Union[MonthDayFormat, str] = "Jan-01",
    sep: str = "-"
) -> str:
    """Render a month and day in the requested form."""
    month_day_format = MonthDayFormat.parse(out)
    month_text, day_text = _MONTH_DAY_RENDERERS[month_day_format.month_style](month, day)
    if month_day_format.order == "month-day":
        return sep.join((month_text, day_text))
    return sep.join((day_text, month_text))


def month_day_key(token: Any) -> Tuple[int, int]:
    """
    Return the (month, day) calendar key of a month-day token.

    Used to order month-day tokens through the year, since the canonical
    "Mon-DD" strings do not sort chronologically.
    """
    month_part, day_part = split_month_day(token)
    month = parse_month(month_part)
    if month is None:
        raise InvalidDateError(token, "Could not find the month")
    return month, validate_day(token, month, day_part)


def normalize_month_day(
    token: Any,
    out: Union[MonthDayFormat, str] = "Jan-01",
    sep: str = "-",
    numeric_order: Optional[str] = None
) -> Optional[str]:
    """
    Reformat a month-day combination.

    Named-month output ("Jan-01", "01-Jan") reads back unchanged. The
    numeric forms do not: "03-04" could be either month first or day first,
    so re-reading it raises AmbiguousDateError unless ``numeric_order`` says
    which part is the month.

    Args:
        token: Month-day (or full date) in any accepted format; date,
            datetime and numpy datetime64 values are also accepted
        out: Output form: "Jan-01" (default), "01-Jan", "MM-DD", "DD-MM",
            "M-D" or "D-M"
        sep: Separator placed between the month and the day
        numeric_order: "month-day" or "day-month" to accept two numbers
            that would otherwise be ambiguous

    Returns:
        Optional[str]: The reformatted month-day, or None for a missing token

    Raises:
        AmbiguousDateError: If the month cannot be told apart from the day
        InvalidDateError: If the token is not a month-day

    Examples:
        >>> normalize_month_day("7 Feb")
        'Feb-07'
        >>> normalize_month_day("2019/12/25", out="dd-mm", sep="/")
        '25/12'
    """
    if is_missing_token(token):
        return None

    if isinstance(token, (date, np.datetime64)):
        stamp = as_calendar_date(token)
        return render_month_day(stamp.month, stamp.day, out, sep)

    month_part, day_part = split_month_day(token, (sep,), numeric_order)
    month = parse_month(month_part)
    if month is None:
        raise InvalidDateError(token, "Could not find the month")

    day = validate_day(token, month, day_part)
    return render_month_day(month, day, out, sep)


def as_calendar_date(value: Union[date, np.datetime64]) -> date:
    if isinstance(value, np.datetime64):
        return value.astype("datetime64[D]").astype(date)
    if isinstance(value, datetime):
        return value.date()
    return value

# ============================================================================
# Month Extraction
# ============================================================================

def extract_month(
    token: Any,
    out: Union[MonthFormat, str, int] = "Jan",
    strict: bool = True
) -> Any:
    """
    Find the month within common date formats.

    Full dates ("15-January-2001"), month-days ("Jan-15", "January 15") and
    bare months ("12", "Dec") are all accepted. Three-part dates are read as
    YYYY-MM-DD or DD-MM-YYYY, never MM-DD-YYYY.

    Args:
        token: Date-like token
        out: Output form as accepted by normalize_month, or "asis" to return
            the month part as it was entered
        strict: If True, unreadable tokens raise; if False, a warning is
            issued and the token is returned unchanged

    Returns:
        The month in the requested form

    Raises:
        InvalidDateError: If the token cannot be read (strict mode)
        AmbiguousDateError: If the month is ambiguous (strict mode)
    """
    if is_missing_token(token):
        return None

    try:
        if isinstance(token, (int, np.integer, float, np.floating)) and not isinstance(token, bool):
            month_part = token
        elif isinstance(token, (date, np.datetime64)):
            month_part = as_calendar_date(token).month
        else:
            month_part, _ = split_month_day(token)
        if not is_month(month_part):
            raise InvalidMonthError(token)
    except (InvalidDateError, AmbiguousDateError, InvalidMonthError) as e:
        if strict:
            raise
        warnings.warn(f"{e.message}. Returning input.", stacklevel=2)
        return token

    if MonthFormat.parse(out) is MonthFormat.AS_IS:
        return month_part
    return normalize_month(month_part, out, strict=True)

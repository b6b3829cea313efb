"""
Terrapin Month Token Handling

This module reformats month tokens regardless of how they were entered
(number, padded string, abbreviation or full name) into any other
representation.
"""

from typing import Any, Callable, Dict, Optional, Union
import numpy as np

from ..core.config import MONTH_ABBREVIATIONS, MONTH_NAMES
from ..core.core_types import MonthFormat, MonthToken
from ..core.exceptions import InvalidMonthError

# ============================================================================
# Month Lookup
# ============================================================================

def _build_month_lookup() -> Dict[str, int]:
    lookup = {}
    for number, (abbreviation, name) in enumerate(zip(MONTH_ABBREVIATIONS, MONTH_NAMES), start=1):
        lookup[str(number)] = number
        lookup[f"{number:02d}"] = number
        lookup[abbreviation.lower()] = number
        lookup[name.lower()] = number
    return lookup

# No initials: "J" could be January, June or July
_MONTH_LOOKUP = _build_month_lookup()

_MONTH_RENDERERS: Dict[MonthFormat, Callable[[int], MonthToken]] = {
    MonthFormat.INTEGER: lambda m: m,
    MonthFormat.STRING: lambda m: str(m),
    MonthFormat.PADDED: lambda m: f"{m:02d}",
    MonthFormat.ABBREVIATION: lambda m: MONTH_ABBREVIATIONS[m - 1],
    MonthFormat.ABBREVIATION_LOWER: lambda m: MONTH_ABBREVIATIONS[m - 1].lower(),
    MonthFormat.ABBREVIATION_UPPER: lambda m: MONTH_ABBREVIATIONS[m - 1].upper(),
    MonthFormat.NAME: lambda m: MONTH_NAMES[m - 1],
    MonthFormat.NAME_LOWER: lambda m: MONTH_NAMES[m - 1].lower(),
    MonthFormat.NAME_UPPER: lambda m: MONTH_NAMES[m - 1].upper(),
    MonthFormat.INITIAL: lambda m: MONTH_ABBREVIATIONS[m - 1][0],
    MonthFormat.INITIAL_LOWER: lambda m: MONTH_ABBREVIATIONS[m - 1][0].lower(),
}

# ============================================================================
# Month Parsing
# ============================================================================

def parse_month(token: Any) -> Optional[int]:
    """
    Return the month number (1-12) for a token, or None if it is not a month.

    Args:
        token: Integer, numeric string, abbreviation or full month name

    Returns:
        Optional[int]: Month number, or None when unrecognised
    """
    if isinstance(token, bool) or token is None:
        return None

    if isinstance(token, (int, np.integer)):
        return int(token) if 1 <= token <= 12 else None

    if isinstance(token, (float, np.floating)):
        if np.isfinite(token) and float(token).is_integer():
            return parse_month(int(token))
        return None

    if isinstance(token, str):
        return _MONTH_LOOKUP.get(token.strip().lower())

    return None


def is_month(token: Any) -> bool:
    """Check whether a token is recognised as a month."""
    return parse_month(token) is not None


def is_month_name(token: Any) -> bool:
    """Check whether a token is a spelled-out month (abbreviation or name)."""
    return isinstance(token, str) and not token.strip().isdigit() and is_month(token)


def normalize_month(
    token: Any,
    out: Union[MonthFormat, str, int] = "01",
    strict: bool = False
) -> Any:
    """
    Reformat a month regardless of how it was entered.

    Input and output can be any of these (January as the example):

        1          integer (pass any integer as ``out``)
        "1"        string
        "01"       padded string
        "Jan"      abbreviation ("jan", "JAN" for other cases)
        "January"  full name ("january", "JANUARY" for other cases)
        "J"        initial ("j") - output only

    Initials cannot be used as input because they are ambiguous.

    Args:
        token: The month to reformat
        out: Output form, as a MonthFormat or an example of the form
        strict: If True, unrecognised input raises InvalidMonthError;
            if False, it is returned unchanged

    Returns:
        The month in the requested form, or ``token`` unchanged if it is not
        a month and ``strict`` is False

    Raises:
        InvalidMonthError: If ``strict`` and the token is not a month
        ParameterError: If ``out`` is not a recognised output form

    Examples:
        >>> normalize_month("feb", out="January")
        'February'
        >>> normalize_month(12, out="01")
        '12'
        >>> normalize_month("Sept", out=1)
        'Sept'
    """
    month_format = MonthFormat.parse(out)
    number = parse_month(token)

    if number is None:
        if strict:
            raise InvalidMonthError(token)
        return token

    if month_format is MonthFormat.AS_IS:
        return token

    return _MONTH_RENDERERS[month_format](number)

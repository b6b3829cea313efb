"""
Terrapin Predicate Selection

This module evaluates a single selection criterion (exact, before, after,
between or except) against one derived field and returns the indices of the
matching layers.
"""

import logging
from typing import Any, Callable, Optional, Tuple

from ..core.config import NUMERIC_FIELDS, resolve_field_name
from ..core.core_types import (
    After, Before, Between, Exact, Except, IndexList, SelectionPredicate,
    TemporalSelection
)
from ..core.exceptions import ParameterError
from ..tokens.dates import date_key
from ..tokens.month_days import month_day_key, normalize_month_day
from ..tokens.months import normalize_month
from .deriver import DerivedFieldTable

logger = logging.getLogger(__name__)

# ============================================================================
# Field Value Coercion
# ============================================================================

def _as_int(field: str) -> Callable[[Any], int]:
    def convert(value: Any) -> int:
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ParameterError(field, repr(value), "Expected a whole number")
        if not number.is_integer():
            raise ParameterError(field, repr(value), "Expected a whole number")
        return int(number)
    return convert


def _as_time(value: Any) -> str:
    """Zero-pad "H:MM" so times compare as ISO strings."""
    hours, _, minutes = str(value).strip().partition(":")
    if not (hours.isdigit() and minutes.isdigit()):
        raise ParameterError("time", repr(value), "Expected HH:MM")
    return f"{int(hours):02d}:{int(minutes):02d}"


def _as_date_time(value: Any) -> str:
    day, _, clock = str(value).strip().replace("T", " ").partition(" ")
    return f"{date_key(day)} {_as_time(clock[:5])}"


def _value_converter(field: str) -> Callable[[Any], Any]:
    """How a user-supplied criterion value is brought into the field's form."""
    if field == "month":
        return lambda value: normalize_month(value, out=1, strict=True)
    if field in NUMERIC_FIELDS:
        return _as_int(field)
    if field == "month_day":
        return normalize_month_day
    if field == "date":
        return date_key
    if field == "time":
        return _as_time
    if field == "date_time":
        return _as_date_time
    raise ParameterError("field", field, "Field cannot be used for selection")


def _order_key(field: str) -> Callable[[Any], Any]:
    """Natural ordering of a field's values."""
    if field == "month_day":
        return month_day_key
    return lambda value: value

# ============================================================================
# Predicate Evaluation
# ============================================================================

def _matcher(field: str, predicate: SelectionPredicate) -> Callable[[Any], bool]:
    convert = _value_converter(field)
    key = _order_key(field)

    if isinstance(predicate, (Exact, Except)):
        wanted = {convert(value) for value in predicate.values}
        if isinstance(predicate, Exact):
            return lambda value: value is not None and value in wanted
        return lambda value: value not in wanted

    if isinstance(predicate, Before):
        threshold = key(convert(predicate.threshold))
        return lambda value: value is not None and key(value) < threshold

    if isinstance(predicate, After):
        threshold = key(convert(predicate.threshold))
        return lambda value: value is not None and key(value) > threshold

    if isinstance(predicate, Between):
        lower = key(convert(predicate.lower))
        upper = key(convert(predicate.upper))
        if lower > upper:
            if field != "month_day":
                raise ParameterError(
                    "between", f"({predicate.lower}, {predicate.upper})",
                    "Lower bound must be <= upper bound"
                )
            # Month-day ranges may wrap across the new year
            return lambda value: value is not None and (key(value) >= lower or key(value) <= upper)
        return lambda value: value is not None and lower <= key(value) <= upper

    raise ParameterError("predicate", repr(predicate), "Unknown selection predicate")


def evaluate_predicate(
    table: DerivedFieldTable,
    field: str,
    predicate: SelectionPredicate
) -> IndexList:
    """
    Return the indices of layers whose field satisfies the predicate.

    Args:
        table: Derived fields of the layers
        field: Field to test
        predicate: Exact, Before, After, Between or Except

    Returns:
        IndexList: Matching layer indices in layer order
    """
    field_name = resolve_field_name(field)
    column = table.column(field_name)
    matches = _matcher(field_name, predicate)
    indices = [i for i, value in enumerate(column) if matches(value)]

    logger.debug(
        "Selected %d of %d layers on %s with %s",
        len(indices), len(column), field_name, predicate
    )
    return indices


def select(table: DerivedFieldTable, selection: TemporalSelection) -> IndexList:
    """
    Evaluate a validated TemporalSelection.

    A selection without a criterion (only possible with ``strict=False``)
    keeps every layer.
    """
    if selection.predicate is None:
        return list(range(len(table)))
    return evaluate_predicate(table, selection.field, selection.predicate)


def select_indices(
    table: DerivedFieldTable,
    field: str,
    exact: Optional[Any] = None,
    before: Optional[Any] = None,
    after: Optional[Any] = None,
    between: Optional[Tuple[Any, Any]] = None,
    except_: Optional[Any] = None,
    *,
    strict: bool = True,
    stacklevel: int = 2
) -> IndexList:
    """
    Select layers on one derived field with exactly one criterion.

    Ordering is numeric for year, month, day, summer, hour and minute;
    ISO-string for date, time and date_time; and calendar order for
    month_day. ``before`` and ``after`` are strict, ``between`` is
    inclusive. A month_day ``between`` whose lower bound is later in the
    year than its upper bound wraps across the new year.

    Args:
        table: Derived fields of the layers
        field: Field to test (e.g. "year", "month", "monthDay", "hour")
        exact: Value or values the field must match
        before: The field must be strictly below this value
        after: The field must be strictly above this value
        between: (lower, upper) inclusive bounds
        except_: Value or values the field must not match; layers without a
            timestamp are kept
        strict: If True, supplying no criterion raises NoSelectionMadeError;
            if False, a NoSelectionWarning is issued and every layer is kept
        stacklevel: Frame that warning points at, as in warnings.warn

    Returns:
        IndexList: Matching 0-based layer indices in layer order

    Raises:
        AmbiguousSelectionError: If more than one criterion is supplied
        NoSelectionMadeError: If no criterion is supplied and ``strict``
        ParameterError: If the field is not available or a value is invalid

    Examples:
        >>> table = derive_fields(["1990-01-01", "1991-01-01", "1992-01-01", "1993-01-01"])
        >>> select_indices(table, "year", exact=[1991, 1992])
        [1, 2]
    """
    selection = TemporalSelection(
        field=field,
        exact=exact,
        before=before,
        after=after,
        between=between,
        except_=except_,
        strict=strict,
        warn_stacklevel=stacklevel + 2,
    )
    return select(table, selection)

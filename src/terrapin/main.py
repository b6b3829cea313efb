"""
Terrapin Main Interface

This module provides the layer-level API: functions that take an xarray
object with a time dimension, work out which layers match, and return the
subset.
"""

import logging
from typing import Any, Optional, Tuple, Union

from .core.config import DEFAULT_AUSTRAL_SPLIT, SUB_DAILY_FIELDS, SUMMER_FIELD, TIME_DIM, resolve_field_name
from .core.core_types import IndexList
from .core.exceptions import ParameterError, check_single_criterion
from .io.layer_store import LayerCollection, read_layer_times, subset_by_indices
from .temporal.completeness import exclude_incomplete_groups, exclude_unmatched_units
from .temporal.deriver import DerivedFieldTable, derive_fields
from .temporal.selector import select_indices
from .tokens.month_days import extract_month
from .tokens.periods import expand_date_periods, expand_month_day_periods

# Get logger for this module
logger = logging.getLogger('terrapin.main')

# Import utility functions for a single entry point
from .utils import get_temporal_info


# ============================================================================
# Date Information
# ============================================================================

def get_date_info(
    obj: LayerCollection,
    austral_split: Optional[int] = DEFAULT_AUSTRAL_SPLIT,
    *,
    sub_daily: Optional[bool] = None,
    time_dim: str = TIME_DIM
) -> DerivedFieldTable:
    """
    Derive the calendar fields of every layer.

    Args:
        obj: DataArray or Dataset with a time dimension
        austral_split: Split month for the ``summer`` field (None to omit it)
        sub_daily: Force (True) or suppress (False) the time, hour, minute
            and date_time fields; detected from the timestamps by default
        time_dim: Name of the time dimension

    Returns:
        DerivedFieldTable: One record per layer

    Examples:
        >>> info = get_date_info(da)
        >>> info.column("month_day")[:2]
        ['Jan-01', 'Feb-01']
        >>> info.to_dataset()  # as an xarray Dataset over "layer"
    """
    return derive_fields(read_layer_times(obj, time_dim), austral_split, sub_daily)

# ============================================================================
# Generic Subsetting
# ============================================================================

def _subset(obj: LayerCollection, indices: IndexList, time_dim: str) -> LayerCollection:
    logger.info("Keeping %d layers", len(indices))
    return subset_by_indices(obj, indices, time_dim)


def subset_by(
    obj: LayerCollection,
    field: str,
    exact: Optional[Any] = None,
    before: Optional[Any] = None,
    after: Optional[Any] = None,
    between: Optional[Tuple[Any, Any]] = None,
    except_: Optional[Any] = None,
    austral_split: Optional[int] = DEFAULT_AUSTRAL_SPLIT,
    strict: bool = True,
    *,
    time_dim: str = TIME_DIM,
    stacklevel: int = 2
) -> LayerCollection:
    """
    Subset layers on any derived field with exactly one criterion.

    This is the function all field-specific subsetters are built on.

    Args:
        obj: DataArray or Dataset with a time dimension
        field: "date", "year", "month", "day", "month_day", "summer", "time",
            "hour", "minute" or "date_time" (camelCase spellings accepted)
        exact: Values to keep
        before: Keep values strictly below this one
        after: Keep values strictly above this one
        between: Keep values within (lower, upper), inclusive
        except_: Values to drop
        austral_split: Split month used for the ``summer`` field
        strict: If False, no criterion returns every layer with a warning
        time_dim: Name of the time dimension
        stacklevel: Frame the no-criterion warning points at, as in
            warnings.warn

    Returns:
        The layers that match, as the same kind of xarray object

    Raises:
        AmbiguousSelectionError: If more than one criterion is supplied
        NoSelectionMadeError: If none is supplied and ``strict``

    Examples:
        >>> subset_by(da, "year", between=(1981, 1982))
        >>> subset_by(da, "monthDay", after="Dec-24")
    """
    field_name = resolve_field_name(field)
    table = derive_fields(
        read_layer_times(obj, time_dim),
        austral_split,
        sub_daily=True if field_name in SUB_DAILY_FIELDS else None,
    )
    indices = select_indices(
        table, field_name,
        exact=exact, before=before, after=after, between=between, except_=except_,
        strict=strict,
        stacklevel=stacklevel + 1,
    )
    return _subset(obj, indices, time_dim)


def subset_by_year(
    obj: LayerCollection,
    years: Optional[Any] = None,
    before: Optional[int] = None,
    after: Optional[int] = None,
    between: Optional[Tuple[int, int]] = None,
    except_: Optional[Any] = None,
    **kwargs
) -> LayerCollection:
    """Subset layers by calendar year."""
    kwargs.setdefault("stacklevel", 3)
    return subset_by(
        obj, "year", exact=years, before=before, after=after,
        between=between, except_=except_, austral_split=None, **kwargs
    )


def subset_by_summer(
    obj: LayerCollection,
    summers: Optional[Any] = None,
    before: Optional[int] = None,
    after: Optional[int] = None,
    between: Optional[Tuple[int, int]] = None,
    except_: Optional[Any] = None,
    austral_split: int = DEFAULT_AUSTRAL_SPLIT,
    **kwargs
) -> LayerCollection:
    """
    Subset layers by austral summer.

    A summer is named after the year it ends in: with the split at 3,
    summer 1992 runs from April 1991 to March 1992.

    Raises:
        ParameterError: If ``austral_split`` is not a month
    """
    if austral_split is None:
        raise ParameterError("austral_split", "None", "Summers need a split month between 1 and 12")
    kwargs.setdefault("stacklevel", 3)
    return subset_by(
        obj, SUMMER_FIELD, exact=summers, before=before, after=after,
        between=between, except_=except_, austral_split=austral_split, **kwargs
    )


def subset_by_day(
    obj: LayerCollection,
    days: Optional[Any] = None,
    before: Optional[int] = None,
    after: Optional[int] = None,
    between: Optional[Tuple[int, int]] = None,
    except_: Optional[Any] = None,
    **kwargs
) -> LayerCollection:
    """Subset layers by day of the month (1-31)."""
    kwargs.setdefault("stacklevel", 3)
    return subset_by(
        obj, "day", exact=days, before=before, after=after,
        between=between, except_=except_, austral_split=None, **kwargs
    )


def subset_by_hour(
    obj: LayerCollection,
    hours: Optional[Any] = None,
    before: Optional[int] = None,
    after: Optional[int] = None,
    between: Optional[Tuple[int, int]] = None,
    except_: Optional[Any] = None,
    **kwargs
) -> LayerCollection:
    """Subset layers by hour of the day (0-23)."""
    kwargs.setdefault("stacklevel", 3)
    return subset_by(
        obj, "hour", exact=hours, before=before, after=after,
        between=between, except_=except_, austral_split=None, **kwargs
    )


def subset_by_minute(
    obj: LayerCollection,
    minutes: Optional[Any] = None,
    before: Optional[int] = None,
    after: Optional[int] = None,
    between: Optional[Tuple[int, int]] = None,
    except_: Optional[Any] = None,
    **kwargs
) -> LayerCollection:
    """Subset layers by minute of the hour (0-59)."""
    kwargs.setdefault("stacklevel", 3)
    return subset_by(
        obj, "minute", exact=minutes, before=before, after=after,
        between=between, except_=except_, austral_split=None, **kwargs
    )

# ============================================================================
# Month, Date and Month-Day Subsetting
# ============================================================================

def _as_list(values: Any) -> list:
    if isinstance(values, (list, tuple, set)):
        return list(values)
    return [values]


def _is_period_list(values: Any) -> bool:
    """Check for a list of (start, end) pairs rather than single values."""
    return isinstance(values, list) and bool(values) and all(
        isinstance(value, (list, tuple)) for value in values
    )


def _apply_incomplete_filter(
    obj: LayerCollection,
    exclude_incomplete: Union[bool, int],
    daily: bool,
    time_dim: str
) -> Optional[LayerCollection]:
    """True drops incomplete years; a month number drops incomplete summers."""
    if exclude_incomplete is False or exclude_incomplete is None:
        return obj
    if exclude_incomplete is True:
        return exclude_incomplete_years(obj, daily=daily, time_dim=time_dim)
    if isinstance(exclude_incomplete, int) and 1 <= exclude_incomplete <= 12:
        return exclude_incomplete_summers(
            obj, daily=daily, austral_split=exclude_incomplete, time_dim=time_dim
        )
    raise ParameterError(
        "exclude_incomplete", str(exclude_incomplete),
        "Use True (years), a split month 1-12 (summers) or False"
    )


def subset_by_month(
    obj: LayerCollection,
    months: Any,
    exclude_incomplete: Union[bool, int] = False,
    daily_resolution: bool = False,
    *,
    time_dim: str = TIME_DIM
) -> Optional[LayerCollection]:
    """
    Subset layers by month.

    Months may be given in any form, including full dates or month-days
    ("2020-01-15", "Jan-15") from which the month is taken.

    Args:
        obj: DataArray or Dataset with a time dimension
        months: Month or months to keep
        exclude_incomplete: True to then drop years missing any of the kept
            months (or month-days with ``daily_resolution``); a split month
            (1-12) to drop incomplete austral summers instead
        daily_resolution: Check completeness on month-days rather than months
        time_dim: Name of the time dimension

    Returns:
        The matching layers, or None if completeness filtering leaves nothing

    Examples:
        >>> subset_by_month(da, ["Dec", "Jan", "Feb"], exclude_incomplete=3)
    """
    wanted = sorted({extract_month(month, out=1, strict=True) for month in _as_list(months)})
    table = derive_fields(read_layer_times(obj, time_dim))
    indices = select_indices(table, "month", exact=wanted)
    subset = _subset(obj, indices, time_dim)
    return _apply_incomplete_filter(subset, exclude_incomplete, daily_resolution, time_dim)


def subset_by_date(
    obj: LayerCollection,
    dates: Optional[Any] = None,
    periods: Optional[Any] = None,
    before: Optional[Any] = None,
    after: Optional[Any] = None,
    except_: Optional[Any] = None,
    *,
    time_dim: str = TIME_DIM
) -> LayerCollection:
    """
    Subset layers by full date.

    Dates may be in any form accepted by normalize_date ("2019-01-31",
    "31/01/2019", "31-Jan-2019").

    Args:
        obj: DataArray or Dataset with a time dimension
        dates: Dates to keep
        periods: A (start, end) pair or list of pairs; every day in each
            period is kept, inclusive
        before: Keep layers strictly before this date
        after: Keep layers strictly after this date
        except_: Dates to drop; a list of (start, end) pairs drops whole
            periods
        time_dim: Name of the time dimension

    Returns:
        The matching layers

    Raises:
        AmbiguousSelectionError: If more than one criterion is supplied
        NoSelectionMadeError: If none is supplied

    Examples:
        >>> subset_by_date(da, periods=[("1980-01-01", "1980-01-10"), ("1981-01-01", "1981-01-10")])
    """
    check_single_criterion(
        {"dates": dates, "periods": periods, "before": before, "after": after, "except": except_},
        no_selection_message="No dates selected!",
    )

    if periods is not None:
        dates = expand_date_periods(periods)
    elif _is_period_list(except_):
        except_ = expand_date_periods(except_)

    return subset_by(
        obj, "date", exact=dates, before=before, after=after, except_=except_,
        austral_split=None, time_dim=time_dim
    )


def subset_by_month_day(
    obj: LayerCollection,
    month_days: Optional[Any] = None,
    periods: Optional[Any] = None,
    before: Optional[Any] = None,
    after: Optional[Any] = None,
    except_: Optional[Any] = None,
    exclude_incomplete: Union[bool, int] = False,
    *,
    time_dim: str = TIME_DIM
) -> Optional[LayerCollection]:
    """
    Subset layers by month-day, ignoring the year.

    Args:
        obj: DataArray or Dataset with a time dimension
        month_days: Month-days to keep ("Jan-01", "1 Jan", "01/31", ...)
        periods: A (start, end) pair or list of pairs; a period whose end
            comes before its start wraps across the new year
            (("Dec-25", "Jan-05") keeps the twelve days around new year)
        before: Keep month-days strictly earlier in the calendar year
        after: Keep month-days strictly later in the calendar year
        except_: Month-days to drop; a list of (start, end) pairs drops whole
            periods
        exclude_incomplete: True to then drop years missing any kept
            month-day; a split month (1-12) to drop incomplete summers
        time_dim: Name of the time dimension

    Returns:
        The matching layers, or None if completeness filtering leaves nothing

    Examples:
        >>> subset_by_month_day(da, periods=("Dec-01", "Feb-28"), exclude_incomplete=3)
    """
    check_single_criterion(
        {"month_days": month_days, "periods": periods, "before": before,
         "after": after, "except": except_},
        no_selection_message="No dates selected!",
    )

    if periods is not None:
        month_days = expand_month_day_periods(periods)
    elif _is_period_list(except_):
        except_ = expand_month_day_periods(except_)

    subset = subset_by(
        obj, "month_day", exact=month_days, before=before, after=after,
        except_=except_, austral_split=None, time_dim=time_dim
    )
    return _apply_incomplete_filter(subset, exclude_incomplete, True, time_dim)

# ============================================================================
# Completeness Filtering
# ============================================================================

def exclude_incomplete_years(
    obj: LayerCollection,
    daily: bool = False,
    print_clarity: bool = False,
    *,
    time_dim: str = TIME_DIM
) -> Optional[LayerCollection]:
    """
    Drop the years that lack any month (or month-day) found in the data.

    Take monthly data for Jan-Apr in 1980 and 1981, Jan-Mar in 1982 and
    Jan-Feb in 1983: only 1980 and 1981 are kept. With ``daily`` the
    comparison uses month-days, and Feb-29 is ignored.

    Args:
        obj: DataArray or Dataset with a time dimension
        daily: Compare month-days instead of months
        print_clarity: Print which years are kept and excluded
        time_dim: Name of the time dimension

    Returns:
        The kept layers, or None (with an EmptyResultWarning) if no year is
        complete
    """
    table = derive_fields(read_layer_times(obj, time_dim))
    result = exclude_incomplete_groups(table, "year", daily, print_clarity)
    if result.is_empty:
        return None
    return _subset(obj, result.indices, time_dim)


def exclude_incomplete_summers(
    obj: LayerCollection,
    daily: bool = False,
    austral_split: int = DEFAULT_AUSTRAL_SPLIT,
    print_clarity: bool = False,
    *,
    time_dim: str = TIME_DIM
) -> Optional[LayerCollection]:
    """
    Drop the austral summers that lack any month (or month-day) found in the data.

    Returns:
        The kept layers, or None (with an EmptyResultWarning) if no summer is
        complete
    """
    if austral_split is None:
        raise ParameterError("austral_split", "None", "Summers need a split month between 1 and 12")
    table = derive_fields(read_layer_times(obj, time_dim), austral_split)
    result = exclude_incomplete_groups(table, SUMMER_FIELD, daily, print_clarity)
    if result.is_empty:
        return None
    return _subset(obj, result.indices, time_dim)


def _exclude_unmatched(
    obj: LayerCollection,
    daily: bool,
    austral_split: Optional[int],
    print_clarity: bool,
    time_dim: str
) -> Optional[LayerCollection]:
    table = derive_fields(read_layer_times(obj, time_dim), austral_split)
    group_by = "year" if austral_split is None else SUMMER_FIELD
    result = exclude_unmatched_units(table, group_by, daily, print_clarity)
    if result.is_empty:
        return None
    return _subset(obj, result.indices, time_dim)


def exclude_unmatched_months(
    obj: LayerCollection,
    austral_split: Optional[int] = None,
    print_clarity: bool = False,
    *,
    time_dim: str = TIME_DIM
) -> Optional[LayerCollection]:
    """
    Drop the months that are not found in every year (or summer).

    With the 1980-1983 example of exclude_incomplete_years, only January
    and February are kept.

    Args:
        obj: DataArray or Dataset with a time dimension
        austral_split: Compare against summers with this split month instead
            of calendar years
        print_clarity: Print which months are kept and excluded
        time_dim: Name of the time dimension

    Returns:
        The kept layers, or None (with an EmptyResultWarning) if no month is
        found in every group
    """
    return _exclude_unmatched(obj, False, austral_split, print_clarity, time_dim)


def exclude_unmatched_days(
    obj: LayerCollection,
    austral_split: Optional[int] = None,
    print_clarity: bool = False,
    *,
    time_dim: str = TIME_DIM
) -> Optional[LayerCollection]:
    """
    Drop the month-days that are not found in every year (or summer).

    Returns:
        The kept layers, or None (with an EmptyResultWarning) if no month-day
        is found in every group
    """
    return _exclude_unmatched(obj, True, austral_split, print_clarity, time_dim)

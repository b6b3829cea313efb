"""
Terrapin Completeness Filtering

This module drops layers so that groups (calendar or austral years) and
calendar units (months or month-days) line up across a collection.

Take monthly data for Jan-Apr in 1980 and 1981, Jan-Mar in 1982 and Jan-Feb
in 1983:

- exclude_incomplete_groups keeps 1980 and 1981, the only years holding
  every month found in the collection.
- exclude_unmatched_units keeps January and February, the only months found
  in every year of the collection.

Applying one after the other (in either order) reaches a fixed point.
"""

import logging
import warnings
from collections import defaultdict
from typing import Any, Callable, Dict, List, Set, Tuple

from ..core.config import LEAP_DAY, SUMMER_FIELD, UNIT_FIELDS
from ..core.core_types import CompletenessOptions, CompletenessResult
from ..core.exceptions import EmptyResultWarning, ParameterError
from ..tokens.month_days import month_day_key
from .deriver import DerivedFieldTable

logger = logging.getLogger(__name__)

# ============================================================================
# Helper Functions
# ============================================================================

def _resolve_options(
    table: DerivedFieldTable,
    group_by: str,
    daily: bool,
    print_clarity: bool
) -> CompletenessOptions:
    if group_by == SUMMER_FIELD and not table.has_summer:
        raise ParameterError(
            "group_by", group_by,
            "The table has no summer field; derive it with an austral_split"
        )
    return CompletenessOptions(
        group_by=group_by,
        daily=daily,
        austral_split=table.austral_split,
        print_clarity=print_clarity,
    )


def _unit_sort_key(unit_field: str) -> Callable[[Any], Any]:
    if unit_field == "month_day":
        return month_day_key
    return lambda value: value


def _pairs(table: DerivedFieldTable, group_by: str, unit_field: str) -> List[Tuple[int, Any, Any]]:
    """(index, group, unit) for every layer with a timestamp."""
    groups = table.column(group_by)
    units = table.column(unit_field)
    return [
        (index, group, unit)
        for index, (group, unit) in enumerate(zip(groups, units))
        if group is not None and unit is not None
    ]


def _finish(
    result: CompletenessResult,
    options: CompletenessOptions,
    total: int
) -> CompletenessResult:
    if result.is_empty:
        warnings.warn(result.message, EmptyResultWarning, stacklevel=3)
    else:
        logger.info(
            "Kept %d of %d layers (%d %s excluded)",
            len(result.indices), total, len(result.excluded),
            result.group_label if result.mode == "incomplete_groups" else f"{result.unit_label}s"
        )

    if options.print_clarity:
        print(result.report())

    return result

# ============================================================================
# Completeness Filters
# ============================================================================

def exclude_incomplete_groups(
    table: DerivedFieldTable,
    group_by: str = "year",
    daily: bool = False,
    print_clarity: bool = False
) -> CompletenessResult:
    """
    Keep only the groups that hold every unit found in the collection.

    The reference set is every distinct month (or month-day, when ``daily``)
    across the whole collection. A group survives when its own set equals
    the reference set. With daily granularity Feb-29 is ignored on both
    sides, so leap and non-leap years compare equal.

    Layers without a timestamp never survive.

    Args:
        table: Derived fields of the layers
        group_by: "year" or "summer" (the table must carry a summer field)
        daily: Compare month-days instead of months
        print_clarity: Print the report of kept and excluded groups

    Returns:
        CompletenessResult: Surviving indices and groups. When no group
        survives the result is empty and an EmptyResultWarning is issued.

    Raises:
        ParameterError: If ``group_by`` is unknown or unavailable
    """
    options = _resolve_options(table, group_by, daily, print_clarity)
    unit_field = UNIT_FIELDS[options.daily]
    pairs = _pairs(table, options.group_by, unit_field)

    units_by_group: Dict[Any, Set[Any]] = defaultdict(set)
    for _, group, unit in pairs:
        units_by_group[group].add(unit)

    reference = {unit for _, _, unit in pairs}
    if options.daily:
        reference.discard(LEAP_DAY)

    kept, excluded = [], []
    for group in sorted(units_by_group):
        units = units_by_group[group] - {LEAP_DAY} if options.daily else units_by_group[group]
        (kept if units == reference else excluded).append(group)

    surviving = set(kept)
    indices = [index for index, group, _ in pairs if group in surviving]

    result = CompletenessResult(
        indices=indices,
        kept=kept,
        excluded=excluded,
        group_by=options.group_by,
        unit_field=unit_field,
        mode="incomplete_groups",
    )
    if result.is_empty:
        result.message = (
            f"No {result.unit_label} is found in all {result.group_label} of this dataset!"
        )

    logger.debug("Reference %ss: %d; groups kept: %s", unit_field, len(reference), kept)
    return _finish(result, options, len(table))


def exclude_unmatched_units(
    table: DerivedFieldTable,
    group_by: str = "year",
    daily: bool = False,
    print_clarity: bool = False
) -> CompletenessResult:
    """
    Keep only the units found in every group of the collection.

    The reference set is every distinct group across the collection. A month
    (or month-day, when ``daily``) survives when the set of groups it appears
    in equals the reference set.

    Layers without a timestamp never survive.

    Args:
        table: Derived fields of the layers
        group_by: "year" or "summer" (the table must carry a summer field)
        daily: Compare month-days instead of months
        print_clarity: Print the report of kept and excluded units

    Returns:
        CompletenessResult: Surviving indices and units. When no unit
        survives the result is empty and an EmptyResultWarning is issued.

    Raises:
        ParameterError: If ``group_by`` is unknown or unavailable
    """
    options = _resolve_options(table, group_by, daily, print_clarity)
    unit_field = UNIT_FIELDS[options.daily]
    pairs = _pairs(table, options.group_by, unit_field)

    groups_by_unit: Dict[Any, Set[Any]] = defaultdict(set)
    for _, group, unit in pairs:
        groups_by_unit[unit].add(group)

    reference = {group for _, group, _ in pairs}

    kept, excluded = [], []
    for unit in sorted(groups_by_unit, key=_unit_sort_key(unit_field)):
        (kept if groups_by_unit[unit] == reference else excluded).append(unit)

    surviving = set(kept)
    indices = [index for index, _, unit in pairs if unit in surviving]

    result = CompletenessResult(
        indices=indices,
        kept=kept,
        excluded=excluded,
        group_by=options.group_by,
        unit_field=unit_field,
        mode="unmatched_units",
    )
    if result.is_empty:
        result.message = (
            f"No {result.group_label} contain all {result.unit_label}s found in this dataset!"
        )

    logger.debug("Reference %s: %s; units kept: %d", result.group_label, sorted(reference), len(kept))
    return _finish(result, options, len(table))

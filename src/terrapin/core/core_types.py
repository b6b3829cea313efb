"""
Terrapin Type Definitions and Data Classes

This module defines all data structures and type aliases used throughout the codebase
for better type safety and code clarity.
"""

from __future__ import annotations
from dataclasses import InitVar, dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union
import numpy as np

from .config import (
    GROUP_KEYS, MONTH_NAMES, SUMMER_FIELD, resolve_field_name
)
from .exceptions import ParameterError, check_single_criterion

# ============================================================================
# Type Aliases
# ============================================================================

TimeValue = Union[str, date, datetime, np.datetime64, None]
MonthToken = Union[int, str]
Period = Tuple[Any, Any]
IndexList = List[int]

# ============================================================================
# Validation Utilities (Module Level)
# ============================================================================

def validate_austral_split(name: str, value: Optional[int]) -> None:
    """Validate a split month (None disables the austral year)."""
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or not 1 <= value <= 12:
        raise ParameterError(name, str(value), "Must be an integer month between 1 and 12, or None")

def _as_tuple(values: Any) -> Tuple[Any, ...]:
    """Wrap a scalar criterion so that membership tests always see a collection."""
    if isinstance(values, (str, bytes, date, np.datetime64)):
        return (values,)
    if isinstance(values, (list, tuple, set, frozenset, range, np.ndarray)):
        return tuple(values)
    return (values,)

# ============================================================================
# Token Output Formats
# ============================================================================

class MonthFormat(Enum):
    """Representations a month can be rendered as."""
    INTEGER = "integer"
    STRING = "string"
    PADDED = "padded"
    ABBREVIATION = "Jan"
    ABBREVIATION_LOWER = "jan"
    ABBREVIATION_UPPER = "JAN"
    NAME = "January"
    NAME_LOWER = "january"
    NAME_UPPER = "JANUARY"
    INITIAL = "J"
    INITIAL_LOWER = "j"
    AS_IS = "asis"

    @classmethod
    def parse(cls, out: Any) -> "MonthFormat":
        """
        Resolve an output-form specifier.

        Accepts a MonthFormat, any integer (numeric output), or an example
        string such as "1", "01", "Jan", "jan", "January", "J" or "asis".

        Raises:
            ParameterError: If the specifier is not recognised
        """
        if isinstance(out, cls):
            return out
        if isinstance(out, (int, np.integer)) and not isinstance(out, bool):
            return cls.INTEGER
        if isinstance(out, str):
            if out in _MONTH_FORMAT_SPELLINGS:
                return _MONTH_FORMAT_SPELLINGS[out]
            # Keywords are case-insensitive; example spellings are not
            if out.lower() in _MONTH_FORMAT_KEYWORDS:
                return _MONTH_FORMAT_SPELLINGS[out.lower()]
        raise ParameterError("out", repr(out), f"Use one of: {', '.join(sorted(_MONTH_FORMAT_SPELLINGS))}")


_MONTH_FORMAT_KEYWORDS = ("integer", "number", "numeric", "string", "padded", "asis")

_MONTH_FORMAT_SPELLINGS = {
    "integer": MonthFormat.INTEGER,
    "number": MonthFormat.INTEGER,
    "numeric": MonthFormat.INTEGER,
    "1": MonthFormat.STRING,
    "string": MonthFormat.STRING,
    "01": MonthFormat.PADDED,
    "padded": MonthFormat.PADDED,
    "Jan": MonthFormat.ABBREVIATION,
    "jan": MonthFormat.ABBREVIATION_LOWER,
    "JAN": MonthFormat.ABBREVIATION_UPPER,
    "January": MonthFormat.NAME,
    "january": MonthFormat.NAME_LOWER,
    "JANUARY": MonthFormat.NAME_UPPER,
    "J": MonthFormat.INITIAL,
    "j": MonthFormat.INITIAL_LOWER,
    "asis": MonthFormat.AS_IS,
}


class MonthDayFormat(Enum):
    """Month-day renderings as (field order, month style)."""
    MON_DD = ("month-day", "name")
    DD_MON = ("day-month", "name")
    MM_DD = ("month-day", "padded")
    DD_MM = ("day-month", "padded")
    M_D = ("month-day", "plain")
    D_M = ("day-month", "plain")

    @property
    def order(self) -> str:
        return self.value[0]

    @property
    def month_style(self) -> str:
        return self.value[1]

    @classmethod
    def parse(cls, out: Any) -> "MonthDayFormat":
        """Resolve an output-form specifier such as "Jan-01", "01-Jan" or "mm-dd"."""
        if isinstance(out, cls):
            return out
        if isinstance(out, str):
            spelled = _MONTH_DAY_FORMAT_SPELLINGS.get(out.strip().lower())
            if spelled is not None:
                return spelled
        raise ParameterError(
            "out", repr(out),
            "Use one of: Jan-01, 01-Jan, MM-DD, DD-MM, M-D, D-M"
        )


_MONTH_DAY_FORMAT_SPELLINGS = {
    "jan-01": MonthDayFormat.MON_DD,
    "mon-dd": MonthDayFormat.MON_DD,
    "01-jan": MonthDayFormat.DD_MON,
    "dd-mon": MonthDayFormat.DD_MON,
    "mm-dd": MonthDayFormat.MM_DD,
    "dd-mm": MonthDayFormat.DD_MM,
    "m-d": MonthDayFormat.M_D,
    "d-m": MonthDayFormat.D_M,
}


class DateFormat(Enum):
    """Full-date renderings as (part order, named month)."""
    YMD = ("ymd", False)
    DMY = ("dmy", False)
    YBD = ("ymd", True)
    DBY = ("dmy", True)

    @property
    def order(self) -> str:
        return self.value[0]

    @property
    def named_month(self) -> bool:
        return self.value[1]

    @classmethod
    def parse(cls, out: Any) -> "DateFormat":
        """Resolve an output-form specifier such as "YYYY-MM-DD" or "dby"."""
        if isinstance(out, cls):
            return out
        if isinstance(out, str):
            spelled = _DATE_FORMAT_SPELLINGS.get(out.strip().lower())
            if spelled is not None:
                return spelled
        raise ParameterError(
            "out", repr(out),
            "Use one of: YYYY-MM-DD (ymd), DD-MM-YYYY (dmy), YYYY-Jan-DD (ybd), DD-Jan-YYYY (dby)"
        )


_DATE_FORMAT_SPELLINGS = {
    "yyyy-mm-dd": DateFormat.YMD,
    "ymd": DateFormat.YMD,
    "dd-mm-yyyy": DateFormat.DMY,
    "dmy": DateFormat.DMY,
    "yyyy-jan-dd": DateFormat.YBD,
    "yyyy-mon-dd": DateFormat.YBD,
    "ybd": DateFormat.YBD,
    "dd-jan-yyyy": DateFormat.DBY,
    "dd-mon-yyyy": DateFormat.DBY,
    "dby": DateFormat.DBY,
}

# ============================================================================
# Selection Predicates
# ============================================================================

@dataclass(frozen=True)
class Exact:
    """Keep layers whose field value is one of ``values``."""
    values: Tuple[Any, ...]

@dataclass(frozen=True)
class Before:
    """Keep layers whose field value is strictly below ``threshold``."""
    threshold: Any

@dataclass(frozen=True)
class After:
    """Keep layers whose field value is strictly above ``threshold``."""
    threshold: Any

@dataclass(frozen=True)
class Between:
    """Keep layers whose field value lies in [lower, upper]."""
    lower: Any
    upper: Any

@dataclass(frozen=True)
class Except:
    """Keep layers whose field value is not one of ``values``."""
    values: Tuple[Any, ...]

SelectionPredicate = Union[Exact, Before, After, Between, Except]

PREDICATE_KINDS = ("exact", "before", "after", "between", "except")


def build_predicate(kind: str, value: Any) -> SelectionPredicate:
    """
    Build a predicate from a criterion name and its argument.

    Args:
        kind: One of "exact", "before", "after", "between", "except"
            ("except_" is accepted as well)
        value: Values (exact/except), threshold (before/after) or a
            (lower, upper) pair (between)

    Returns:
        SelectionPredicate: The predicate variant
    """
    kind = kind.rstrip("_")
    if kind == "exact":
        return Exact(_as_tuple(value))
    if kind == "except":
        return Except(_as_tuple(value))
    if kind == "before":
        return Before(value)
    if kind == "after":
        return After(value)
    if kind == "between":
        bounds = _as_tuple(value)
        if len(bounds) != 2:
            raise ParameterError("between", str(value), "Must contain exactly 2 values")
        return Between(bounds[0], bounds[1])
    raise ParameterError("kind", kind, f"Use one of: {', '.join(PREDICATE_KINDS)}")

# ============================================================================
# Selection Parameters
# ============================================================================

@dataclass
class TemporalSelection:
    """
    Temporal selection parameters for a single derived field.

    Exactly one of the criteria may be set. With ``strict`` left True, setting
    none of them is an error; with ``strict`` False a warning is issued and
    the selection keeps every layer.

    Attributes:
        field: Derived field to test (year, month, day, month_day, summer,
            hour, minute, date, time, date_time)
        exact: Values the field must match
        before: Exclusive upper threshold
        after: Exclusive lower threshold
        between: Inclusive (lower, upper) pair
        except_: Values the field must not match
        strict: Whether an empty selection raises
        warn_stacklevel: Frame an empty-selection warning points at, counted
            from __post_init__ (3 is the code constructing the selection)
    """
    field: str
    exact: Optional[Any] = None
    before: Optional[Any] = None
    after: Optional[Any] = None
    between: Optional[Any] = None
    except_: Optional[Any] = None
    strict: bool = True
    warn_stacklevel: InitVar[int] = 3

    def __post_init__(self, warn_stacklevel: int = 3):
        """Validate selection parameters."""
        self.field = resolve_field_name(self.field)
        chosen = check_single_criterion(
            self.criteria, strict=self.strict, no_selection_message="No dates selected!",
            stacklevel=warn_stacklevel,
        )
        self._predicate = build_predicate(*chosen) if chosen is not None else None

    @property
    def criteria(self) -> Dict[str, Any]:
        return {
            "exact": self.exact,
            "before": self.before,
            "after": self.after,
            "between": self.between,
            "except": self.except_,
        }

    @property
    def has_selection(self) -> bool:
        """Check if a criterion is defined."""
        return self._predicate is not None

    @property
    def predicate(self) -> Optional[SelectionPredicate]:
        return self._predicate

# ============================================================================
# Completeness Options
# ============================================================================

@dataclass
class CompletenessOptions:
    """
    Options for completeness filtering.

    Attributes:
        group_by: Grouping key, "year" or "summer"
        daily: Compare month-day combinations (True) or months (False)
        austral_split: Split month used to derive the summer group
        print_clarity: Print the clarity report after filtering
    """
    group_by: str = "year"
    daily: bool = False
    austral_split: Optional[int] = None
    print_clarity: bool = False

    def __post_init__(self):
        """Validate completeness options."""
        self.group_by = resolve_field_name(self.group_by)
        if self.group_by not in GROUP_KEYS:
            raise ParameterError("group_by", self.group_by, f"Must be one of: {', '.join(GROUP_KEYS)}")
        validate_austral_split("austral_split", self.austral_split)
        if self.group_by == SUMMER_FIELD and self.austral_split is None:
            raise ParameterError("austral_split", "None", "Grouping by summer requires a split month")

# ============================================================================
# Derived Fields
# ============================================================================

@dataclass
class DerivedFieldRecord:
    """Calendar fields derived from one layer's timestamp."""
    date: Optional[str] = None
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    month_day: Optional[str] = None
    summer: Optional[int] = None
    time: Optional[str] = None
    hour: Optional[int] = None
    minute: Optional[int] = None
    date_time: Optional[str] = None

    @property
    def is_missing(self) -> bool:
        return self.date is None

    def as_dict(self, fields: Sequence[str]) -> Dict[str, Any]:
        """Return the record restricted to the given fields."""
        return {name: getattr(self, name) for name in fields}

# ============================================================================
# Completeness Results
# ============================================================================

_GROUP_PLURALS = {"year": "years", "summer": "summers"}
_UNIT_LABELS = {"month": "month", "month_day": "month-day combination"}


@dataclass
class CompletenessResult:
    """
    Outcome of a completeness filter.

    An empty result is a valid outcome: ``is_empty`` is True and ``message``
    describes why nothing survived.

    Attributes:
        indices: Layer indices that survive, in layer order
        kept: Surviving groups (incomplete-group mode) or units (unmatched mode)
        excluded: Groups or units that were dropped
        group_by: Grouping key used
        unit_field: "month" or "month_day"
        mode: "incomplete_groups" or "unmatched_units"
        message: Description of an empty outcome
    """
    indices: IndexList
    kept: List[Any]
    excluded: List[Any]
    group_by: str
    unit_field: str
    mode: str
    message: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.indices

    @property
    def unit_label(self) -> str:
        return _UNIT_LABELS[self.unit_field]

    @property
    def group_label(self) -> str:
        return _GROUP_PLURALS[self.group_by]

    def _render(self, values: Sequence[Any]) -> List[str]:
        if self.mode == "unmatched_units" and self.unit_field == "month":
            return [MONTH_NAMES[value - 1] for value in values]
        return [str(value) for value in values]

    def report(self) -> str:
        """Human-readable summary of what was kept and what was excluded."""
        if self.is_empty:
            return self.message

        lines = []
        if self.mode == "incomplete_groups":
            lines.append(
                f"The following {self.group_label} have data for each "
                f"{self.unit_label} of this dataset:"
            )
            lines.extend(f"  {value}" for value in self._render(self.kept))
            if self.excluded:
                lines.append(f"Data in the following {self.group_label} will be excluded:")
                lines.extend(f"  {value}" for value in self._render(self.excluded))
        else:
            lines.append(
                f"The following {self.unit_label}s have data in all the "
                f"{self.group_label} found in this dataset:"
            )
            lines.extend(f"  {value}" for value in self._render(self.kept))
            if self.excluded:
                lines.append(f"Data from the following {self.unit_label}s will be excluded:")
                lines.extend(f"  {value}" for value in self._render(self.excluded))

        if not self.excluded:
            lines.append("No data needs to be excluded!")

        return "\n".join(lines)


__all__ = [
    "TimeValue", "MonthToken", "Period", "IndexList",
    "MonthFormat", "MonthDayFormat", "DateFormat",
    "Exact", "Before", "After", "Between", "Except",
    "SelectionPredicate", "PREDICATE_KINDS", "build_predicate",
    "TemporalSelection", "CompletenessOptions",
    "DerivedFieldRecord", "CompletenessResult",
]

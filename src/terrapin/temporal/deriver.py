"""
Terrapin Temporal Field Derivation

This module turns per-layer timestamps into a table of comparable calendar
fields (date, year, month, day, month-day, and optionally summer and the
sub-daily fields), one record per layer.
"""

import logging
from datetime import date, datetime
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple
import numpy as np
import xarray as xr

from ..core.config import (
    DATE_FIELDS, DATETIME_PRECISION, LAYER_DIM, NUMERIC_FIELDS, SUB_DAILY_FIELDS, SUMMER_FIELD,
    resolve_field_name
)
from ..core.core_types import DerivedFieldRecord, TimeValue, validate_austral_split
from ..core.exceptions import ParameterError
from ..tokens.month_days import is_missing_token, render_month_day

logger = logging.getLogger(__name__)

# ============================================================================
# Timestamp Normalization
# ============================================================================

def normalize_timestamp(value: TimeValue) -> Optional[np.datetime64]:
    """
    Normalize various time formats to numpy.datetime64.

    Args:
        value: Time value (str, date, datetime, pandas Timestamp or
            np.datetime64); None, NaT, NaN and "NA" are missing

    Returns:
        Optional[np.datetime64]: Normalized time value, or None if missing

    Raises:
        ParameterError: If the time format is invalid
    """
    if is_missing_token(value):
        return None

    try:
        if isinstance(value, np.datetime64):
            stamp = value.astype(f'datetime64[{DATETIME_PRECISION}]')
        elif isinstance(value, datetime):
            if value.tzinfo is not None:
                value = value.replace(tzinfo=None)
            stamp = np.datetime64(value, DATETIME_PRECISION)
        elif isinstance(value, date):
            stamp = np.datetime64(value, 'D').astype(f'datetime64[{DATETIME_PRECISION}]')
        elif isinstance(value, str):
            parsed = datetime.fromisoformat(value.strip())
            stamp = np.datetime64(parsed.replace(tzinfo=None), DATETIME_PRECISION)
        else:
            stamp = np.datetime64(value, DATETIME_PRECISION)
    except (TypeError, ValueError) as e:
        raise ParameterError("timestamp", str(value), f"Cannot parse time value: {e}")

    if np.isnat(stamp):
        return None
    return stamp


def has_time_of_day(stamp: np.datetime64) -> bool:
    """Check whether a timestamp falls anywhere other than midnight."""
    return bool(stamp != stamp.astype('datetime64[D]'))

# ============================================================================
# Derived Field Table
# ============================================================================

class DerivedFieldTable:
    """
    Calendar fields for every layer of a collection.

    Records are 1:1 with the layers, in layer order. ``fields`` lists the
    columns that were derived: sub-daily fields and ``summer`` are absent
    when they were not computed.
    """

    def __init__(
        self,
        records: Sequence[DerivedFieldRecord],
        fields: Sequence[str],
        austral_split: Optional[int] = None
    ):
        self.records = list(records)
        self.fields = tuple(fields)
        self.austral_split = austral_split

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[DerivedFieldRecord]:
        return iter(self.records)

    def __getitem__(self, index: int) -> DerivedFieldRecord:
        return self.records[index]

    def __repr__(self) -> str:
        return f"DerivedFieldTable(layers={len(self)}, fields={self.fields})"

    @property
    def has_sub_daily(self) -> bool:
        return SUB_DAILY_FIELDS[0] in self.fields

    @property
    def has_summer(self) -> bool:
        return SUMMER_FIELD in self.fields

    def has_field(self, name: str) -> bool:
        return resolve_field_name(name) in self.fields

    def column(self, name: str) -> List[Any]:
        """
        Return one field for every layer (None where the timestamp is missing).

        Raises:
            ParameterError: If the field was not derived for this table
        """
        field_name = resolve_field_name(name)
        if field_name not in self.fields:
            raise ParameterError(
                "field", name, f"Available fields: {', '.join(self.fields)}"
            )
        return [getattr(record, field_name) for record in self.records]

    def rows(self) -> List[Dict[str, Any]]:
        """Return the records as dictionaries holding only the derived fields."""
        return [record.as_dict(self.fields) for record in self.records]

    def to_dataset(self) -> xr.Dataset:
        """
        Render the table as an xarray Dataset over a ``layer`` dimension.

        Integer fields with missing values become float columns holding NaN.
        String fields are fixed-width unicode columns holding "" for missing
        values.
        """
        data_vars = {}
        for name in self.fields:
            values = self.column(name)
            if name not in NUMERIC_FIELDS:
                array = np.asarray(["" if v is None else v for v in values], dtype=str)
            elif None in values:
                array = np.asarray([np.nan if v is None else v for v in values], dtype=float)
            else:
                array = np.asarray(values, dtype=np.int64)
            data_vars[name] = ((LAYER_DIM,), array)

        ds = xr.Dataset(data_vars, coords={LAYER_DIM: np.arange(len(self))})
        if self.austral_split is not None:
            ds.attrs["austral_split"] = self.austral_split
        return ds

# ============================================================================
# Field Derivation
# ============================================================================

def _derive_record(
    stamp: Optional[np.datetime64],
    austral_split: Optional[int],
    sub_daily: bool
) -> DerivedFieldRecord:
    if stamp is None:
        return DerivedFieldRecord()

    moment = stamp.astype('datetime64[s]').astype(datetime)
    iso_date = f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"

    record = DerivedFieldRecord(
        date=iso_date,
        year=moment.year,
        month=moment.month,
        day=moment.day,
        month_day=render_month_day(moment.month, moment.day),
    )

    if austral_split is not None:
        record.summer = moment.year + 1 if moment.month > austral_split else moment.year

    if sub_daily:
        record.time = f"{moment.hour:02d}:{moment.minute:02d}"
        record.hour = moment.hour
        record.minute = moment.minute
        record.date_time = f"{iso_date} {record.time}"

    return record


def _as_timestamp_list(timestamps: Iterable[TimeValue]) -> List[TimeValue]:
    if isinstance(timestamps, xr.DataArray):
        return list(timestamps.values)
    return list(timestamps)


def derive_fields(
    timestamps: Iterable[TimeValue],
    austral_split: Optional[int] = None,
    sub_daily: Optional[bool] = None
) -> DerivedFieldTable:
    """
    Derive comparable calendar fields from per-layer timestamps.

    Args:
        timestamps: One timestamp per layer; missing timestamps are allowed
            and produce all-missing records
        austral_split: If an integer between 1 and 12, a ``summer`` field is
            added. Months *after* the split count toward the following
            austral year: with the split at 3 (March), April 1991 to March
            1992 all belong to summer 1992.
        sub_daily: Whether to add time, hour, minute and date_time. By
            default they are added when any timestamp is not at midnight.

    Returns:
        DerivedFieldTable: One record per timestamp, in the same order

    Raises:
        ParameterError: If a timestamp or the split month is invalid

    Examples:
        >>> table = derive_fields(["1991-12-01", "1992-01-15", "1991-06-01"], austral_split=3)
        >>> table.column("summer")
        [1992, 1992, 1992]
    """
    validate_austral_split("austral_split", austral_split)

    stamps: List[Optional[np.datetime64]] = [
        normalize_timestamp(value) for value in _as_timestamp_list(timestamps)
    ]

    if sub_daily is None:
        sub_daily = any(has_time_of_day(stamp) for stamp in stamps if stamp is not None)

    fields: Tuple[str, ...] = DATE_FIELDS
    if austral_split is not None:
        fields += (SUMMER_FIELD,)
    if sub_daily:
        fields += SUB_DAILY_FIELDS

    records = [_derive_record(stamp, austral_split, sub_daily) for stamp in stamps]

    missing = sum(1 for stamp in stamps if stamp is None)
    logger.debug(
        "Derived fields %s for %d layers (%d without a timestamp)",
        fields, len(records), missing
    )

    return DerivedFieldTable(records, fields, austral_split)

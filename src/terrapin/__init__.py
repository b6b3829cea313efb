"""
Terrapin - Temporal selection for time-stamped raster layers.

This package selects layers of an xarray DataArray or Dataset by the
calendar information of their timestamps: year, month, day, month-day, austral
summer, hour, minute or full date. It also drops incomplete years and
unmatched months so that climatologies compare like with like.

Key Features:
- Normalization of human-entered months, month-days and dates
- Exactly-one-criterion selection (exact, before, after, between, except)
- Austral "summer" years with a configurable split month
- Completeness filtering with a leap-day exemption
- Date and month-day periods, including periods that wrap the new year

Quick Start:
    >>> import terrapin as tp
    >>> da = tp.open_layers("/path/to/monthly.nc", variable="tas")
    >>>
    >>> # Southern-hemisphere summers, only where Dec-Feb are all present
    >>> djf = tp.subset_by_month(da, ["Dec", "Jan", "Feb"], exclude_incomplete=3)
    >>>
    >>> # Token normalization
    >>> tp.normalize_month_day("7 Feb")
    'Feb-07'
"""

__version__ = "1.0.0"
__author__ = "Terrapin Development Team"

# Import main interface functions
from .main import (
    # Date information
    get_date_info,

    # Subsetting
    subset_by,
    subset_by_year,
    subset_by_summer,
    subset_by_month,
    subset_by_day,
    subset_by_hour,
    subset_by_minute,
    subset_by_date,
    subset_by_month_day,

    # Completeness filtering
    exclude_incomplete_years,
    exclude_incomplete_summers,
    exclude_unmatched_months,
    exclude_unmatched_days,

    # Utility functions
    get_temporal_info,
)

# Import token handling
from .tokens import (
    normalize_month,
    normalize_month_day,
    normalize_date,
    extract_month,
    expand_date_periods,
    expand_month_day_periods,
)

# Import table-level operations
from .temporal import (
    DerivedFieldTable,
    derive_fields,
    select_indices,
    select,
    exclude_incomplete_groups,
    exclude_unmatched_units,
)

# Import layer store adapter
from .io.layer_store import (
    read_layer_times,
    subset_by_indices,
    open_layers,
)

# Import parameter classes for structured interface
from .core.core_types import (
    MonthFormat,
    MonthDayFormat,
    DateFormat,
    Exact,
    Before,
    After,
    Between,
    Except,
    TemporalSelection,
    CompletenessOptions,
    CompletenessResult,
)

# Import configuration for advanced users
from .core.config import (
    DEFAULT_AUSTRAL_SPLIT,
    LEAP_DAY,
    TIME_DIM,
)

# Import exceptions for error handling
from .core.exceptions import (
    TerrapinError,
    InvalidMonthError,
    InvalidDateError,
    AmbiguousDateError,
    AmbiguousSelectionError,
    NoSelectionMadeError,
    ParameterError,
    LayerStoreError,
    NoSelectionWarning,
    EmptyResultWarning,
)

# Import logging configuration
from .core.logging_config import setup_logging, set_log_level

# Define what gets imported with "from terrapin import *"
__all__ = [
    # Version info
    '__version__',

    # Main interface functions
    'get_date_info',
    'subset_by',
    'subset_by_year',
    'subset_by_summer',
    'subset_by_month',
    'subset_by_day',
    'subset_by_hour',
    'subset_by_minute',
    'subset_by_date',
    'subset_by_month_day',
    'exclude_incomplete_years',
    'exclude_incomplete_summers',
    'exclude_unmatched_months',
    'exclude_unmatched_days',
    'get_temporal_info',

    # Token handling
    'normalize_month',
    'normalize_month_day',
    'normalize_date',
    'extract_month',
    'expand_date_periods',
    'expand_month_day_periods',

    # Table-level operations
    'DerivedFieldTable',
    'derive_fields',
    'select_indices',
    'select',
    'exclude_incomplete_groups',
    'exclude_unmatched_units',

    # Layer store
    'read_layer_times',
    'subset_by_indices',
    'open_layers',

    # Parameter classes
    'MonthFormat',
    'MonthDayFormat',
    'DateFormat',
    'Exact',
    'Before',
    'After',
    'Between',
    'Except',
    'TemporalSelection',
    'CompletenessOptions',
    'CompletenessResult',

    # Configuration constants
    'DEFAULT_AUSTRAL_SPLIT',
    'LEAP_DAY',
    'TIME_DIM',

    # Exception classes
    'TerrapinError',
    'InvalidMonthError',
    'InvalidDateError',
    'AmbiguousDateError',
    'AmbiguousSelectionError',
    'NoSelectionMadeError',
    'ParameterError',
    'LayerStoreError',
    'NoSelectionWarning',
    'EmptyResultWarning',

    # Logging configuration
    'setup_logging',
    'set_log_level',
]

# Optional: Set up logging
import logging
_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())

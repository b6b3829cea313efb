"""
Terrapin Configuration and Constants

This module centralizes all configuration parameters, constants, and default values
for better maintainability and consistency across the codebase.
"""

# ============================================================================
# Calendar Tables
# ============================================================================

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

MONTH_ABBREVIATIONS = tuple(name[:3] for name in MONTH_NAMES)

# Days per month in a leap year, so that Feb-29 is a valid token
MAX_DAYS_IN_MONTH = (31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

# Leap-day month-day token, exempt from completeness checks
LEAP_DAY = "Feb-29"

# Leap year used to anchor month-day arithmetic
REFERENCE_LEAP_YEAR = 1980

# Resolution timestamps are normalised to
DATETIME_PRECISION = "s"

# ============================================================================
# Token Separators
# ============================================================================

CANONICAL_SEPARATOR = "-"
EQUIVALENT_SEPARATORS = ("/", "_", " ")

MISSING_TOKENS = ("", "na", "nan", "nat", "none")

# ============================================================================
# Derived Field Names
# ============================================================================

DATE_FIELDS = ("date", "year", "month", "day", "month_day")
SUMMER_FIELD = "summer"
SUB_DAILY_FIELDS = ("time", "hour", "minute", "date_time")

# camelCase spellings are accepted for the two compound fields
FIELD_ALIASES = {
    "monthDay": "month_day",
    "monthday": "month_day",
    "dateTime": "date_time",
    "datetime": "date_time",
    "austral": "summer",
}

# Fields compared numerically
NUMERIC_FIELDS = ("year", "month", "day", "summer", "hour", "minute")

# Fields compared as ISO strings
ISO_FIELDS = ("date", "time", "date_time")

# Group keys and calendar units understood by the completeness filter
GROUP_KEYS = ("year", "summer")
UNIT_FIELDS = {False: "month", True: "month_day"}

# ============================================================================
# Default Parameters
# ============================================================================

# Last month counted toward the previous austral year (April onwards rolls over)
DEFAULT_AUSTRAL_SPLIT = 3

DEFAULT_MONTH_FORMAT = "01"
DEFAULT_MONTH_DAY_FORMAT = "Jan-01"
DEFAULT_DATE_FORMAT = "YYYY-MM-DD"

# ============================================================================
# Dimension Names
# ============================================================================

TIME_DIM = "time"
LAYER_DIM = "layer"

# ============================================================================
# Helper Functions
# ============================================================================

def resolve_field_name(name: str) -> str:
    """Map an accepted field spelling to its canonical name."""
    return FIELD_ALIASES.get(name, name)

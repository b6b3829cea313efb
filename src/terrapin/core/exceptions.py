"""
Terrapin Custom Exception Classes

This module defines all custom exception and warning classes for better error
handling and more informative error messages.
"""

import warnings
from typing import Any, Mapping, Optional, Sequence, Tuple

# ============================================================================
# Base Exception
# ============================================================================

class TerrapinError(Exception):
    """Base exception class for all Terrapin related errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        self.message = message
        self.details = details
        full_message = f"{message}\nDetails: {details}" if details else message
        super().__init__(full_message)

# ============================================================================
# Token Parsing Errors
# ============================================================================

class InvalidMonthError(TerrapinError):
    """A token could not be read as a calendar month."""

    def __init__(self, token: Any):
        super().__init__(
            f"Invalid month: {token!r}",
            "Expected 1-12, '01'-'12', a month abbreviation or a month name"
        )
        self.token = token

class InvalidDateError(TerrapinError):
    """A date or month-day token could not be parsed."""

    def __init__(self, token: Any, reason: str):
        super().__init__(f"Invalid date format: {token!r}", reason)
        self.token = token
        self.reason = reason

class AmbiguousDateError(TerrapinError):
    """Both numeric parts of a token could be either the day or the month."""

    def __init__(self, token: Any):
        super().__init__(
            f"Ambiguous date format: {token!r}",
            "Both parts are <= 12; spell the month out (e.g. 'Jan-02') "
            "or pass numeric_order"
        )
        self.token = token

# ============================================================================
# Selection Errors
# ============================================================================

class AmbiguousSelectionError(TerrapinError):
    """More than one selection criterion was supplied."""

    def __init__(self, supplied: Sequence[str]):
        super().__init__(
            "Only one condition can be used at once!",
            f"Supplied: {', '.join(supplied)}"
        )
        self.supplied = list(supplied)

class NoSelectionMadeError(TerrapinError):
    """No selection criterion was supplied."""

    def __init__(self, message: str = "No conditions selected!", options: Optional[Sequence[str]] = None):
        super().__init__(
            message,
            f"Use one of: {', '.join(options)}" if options else None
        )
        self.options = list(options) if options else None

# ============================================================================
# Parameter and Data Errors
# ============================================================================

class ParameterError(TerrapinError):
    """Parameter validation errors."""

    def __init__(self, parameter: str, value: str, reason: str):
        super().__init__(f"Invalid parameter '{parameter}': {value}", reason)
        self.parameter = parameter
        self.value = value

class LayerStoreError(TerrapinError):
    """The layer collection cannot provide timestamps or be subset."""

    def __init__(self, operation: str, reason: str):
        super().__init__(f"Layer store failed during {operation}", reason)
        self.operation = operation

# ============================================================================
# Warnings
# ============================================================================

class NoSelectionWarning(UserWarning):
    """No selection criterion was supplied; the input is returned unchanged."""

class EmptyResultWarning(UserWarning):
    """A completeness filter found nothing that satisfies completeness."""

# ============================================================================
# Utility Functions
# ============================================================================

def check_single_criterion(
    criteria: Mapping[str, Any],
    strict: bool = True,
    no_selection_message: str = "No conditions selected!",
    stacklevel: int = 2,
) -> Optional[Tuple[str, Any]]:
    """
    Check that exactly one of several optional arguments has been set.

    Args:
        criteria: Mapping of argument name to value; ``None`` means unset
        strict: If True, an unset mapping raises; if False, it warns
        no_selection_message: Message used when nothing is set
        stacklevel: Frame the NoSelectionWarning points at, counted from
            the function calling this one (1 is that function itself)

    Returns:
        Optional[Tuple[str, Any]]: The (name, value) pair that was set, or
        None when nothing was set and ``strict`` is False

    Raises:
        AmbiguousSelectionError: If more than one argument is set
        NoSelectionMadeError: If nothing is set and ``strict`` is True
    """
    supplied = [(name, value) for name, value in criteria.items() if value is not None]

    if len(supplied) > 1:
        raise AmbiguousSelectionError([name for name, _ in supplied])

    if not supplied:
        if strict:
            raise NoSelectionMadeError(no_selection_message, list(criteria))
        warnings.warn(no_selection_message, NoSelectionWarning, stacklevel=stacklevel + 1)
        return None

    return supplied[0]

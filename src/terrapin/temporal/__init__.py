"""
Terrapin Temporal Operations

This package derives calendar fields from layer timestamps, selects layers
with a single predicate, and filters groups or units for completeness.
"""

from .deriver import (
    DerivedFieldTable,
    derive_fields,
    normalize_timestamp,
)

from .selector import (
    evaluate_predicate,
    select,
    select_indices,
)

from .completeness import (
    exclude_incomplete_groups,
    exclude_unmatched_units,
)

__all__ = [
    # Field derivation
    "DerivedFieldTable",
    "derive_fields",
    "normalize_timestamp",
    # Selection
    "evaluate_predicate",
    "select",
    "select_indices",
    # Completeness
    "exclude_incomplete_groups",
    "exclude_unmatched_units",
]

"""
Terrapin Utilities

This package provides utility functions for temporal coverage queries.
"""

# Information functions
from .info import (
    get_temporal_info,
)

__all__ = [
    # Information functions
    "get_temporal_info",
]

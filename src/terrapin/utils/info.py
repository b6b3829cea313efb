"""
Terrapin Information Utilities

This module provides functions for summarizing the temporal coverage of a
layer collection.
"""

from typing import Any, Dict, Optional

from ..core.config import MONTH_ABBREVIATIONS, TIME_DIM
from ..tokens.month_days import month_day_key


# ============================================================================
# Temporal Coverage
# ============================================================================

def get_temporal_info(
    obj: Any,
    austral_split: Optional[int] = None,
    time_dim: str = TIME_DIM
) -> Dict:
    """
    Summarize the temporal coverage of a layer collection.

    Args:
        obj: DataArray or Dataset with a time dimension
        austral_split: Also report summers using this split month
        time_dim: Name of the time dimension

    Returns:
        Dict: Layer counts, first and last date, and the distinct years,
        months and month-days present

    Examples:
        >>> info = get_temporal_info(da)
        >>> print(f"{info['n_layers']} layers from {info['first_date']} to {info['last_date']}")
        >>> print(f"Months: {info['months']}")
    """
    from ..io.layer_store import read_layer_times
    from ..temporal.deriver import derive_fields

    table = derive_fields(read_layer_times(obj, time_dim), austral_split)
    present = [record for record in table if not record.is_missing]
    dates = sorted(record.date for record in present)

    info = {
        'n_layers': len(table),
        'n_missing': len(table) - len(present),
        'first_date': dates[0] if dates else None,
        'last_date': dates[-1] if dates else None,
        'years': sorted({record.year for record in present}),
        'months': [MONTH_ABBREVIATIONS[m - 1] for m in sorted({record.month for record in present})],
        'n_month_days': len({record.month_day for record in present}),
        'month_days': sorted({record.month_day for record in present}, key=month_day_key),
        'sub_daily': table.has_sub_daily,
    }

    if table.has_summer:
        info['austral_split'] = austral_split
        info['summers'] = sorted({record.summer for record in present})

    return info

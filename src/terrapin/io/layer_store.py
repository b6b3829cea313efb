"""
Terrapin Layer Store Adapter

This module connects the temporal operations to xarray objects: it reads the
per-layer timestamps from the time dimension, applies an index list to it, and
opens layer collections stored as NetCDF.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union
import numpy as np
import xarray as xr

from ..core.config import TIME_DIM
from ..core.core_types import TimeValue
from ..core.exceptions import LayerStoreError

logger = logging.getLogger(__name__)

LayerCollection = Union[xr.DataArray, xr.Dataset]

# ============================================================================
# Timestamp Access
# ============================================================================

def _as_time_value(value: Any) -> TimeValue:
    """Convert cftime-style objects (non-standard calendars) to datetime."""
    if isinstance(value, (np.datetime64, datetime, str)) or value is None:
        return value
    if all(hasattr(value, attr) for attr in ("year", "month", "day", "hour", "minute")):
        return datetime(value.year, value.month, value.day, value.hour, value.minute)
    return value


def read_layer_times(obj: LayerCollection, time_dim: str = TIME_DIM) -> List[TimeValue]:
    """
    Read the timestamp of every layer.

    Args:
        obj: DataArray or Dataset with a time dimension
        time_dim: Name of the time dimension

    Returns:
        List[TimeValue]: One timestamp per layer, in layer order

    Raises:
        LayerStoreError: If the object has no such dimension or coordinate
    """
    if time_dim not in obj.dims:
        raise LayerStoreError(
            "read_layer_times",
            f"No '{time_dim}' dimension; available dimensions: {', '.join(map(str, obj.dims))}"
        )
    if time_dim not in obj.coords:
        raise LayerStoreError("read_layer_times", f"Dimension '{time_dim}' has no coordinate values")

    values = obj[time_dim].values
    if np.issubdtype(values.dtype, np.datetime64):
        return list(values)
    return [_as_time_value(value) for value in values]


def layer_count(obj: LayerCollection, time_dim: str = TIME_DIM) -> int:
    """Return the number of layers along the time dimension."""
    if time_dim not in obj.dims:
        raise LayerStoreError("layer_count", f"No '{time_dim}' dimension")
    return int(obj.sizes[time_dim])

# ============================================================================
# Subsetting
# ============================================================================

def subset_by_indices(
    obj: LayerCollection,
    indices: Sequence[int],
    time_dim: str = TIME_DIM
) -> LayerCollection:
    """
    Keep only the layers at the given 0-based indices.

    Args:
        obj: DataArray or Dataset with a time dimension
        indices: Layer indices, in the order they should appear
        time_dim: Name of the time dimension

    Returns:
        The same kind of object with only the selected layers

    Raises:
        LayerStoreError: If an index lies outside the collection
    """
    count = layer_count(obj, time_dim)
    positions = [int(i) for i in indices]
    out_of_range = [i for i in positions if not 0 <= i < count]
    if out_of_range:
        raise LayerStoreError(
            "subset_by_indices",
            f"Indices {out_of_range} outside 0..{count - 1}"
        )

    logger.debug("Subsetting %d of %d layers", len(positions), count)
    return obj.isel({time_dim: positions})

# ============================================================================
# File Access
# ============================================================================

def open_layers(
    path: Union[str, Path],
    variable: Optional[str] = None,
    engine: Optional[str] = None,
    **kwargs
) -> LayerCollection:
    """
    Open a layer collection stored as NetCDF.

    Args:
        path: File path
        variable: Return only this data variable as a DataArray
        engine: xarray backend engine (e.g. "netcdf4")
        **kwargs: Additional arguments passed to xarray.open_dataset

    Returns:
        Dataset, or DataArray when ``variable`` is given

    Raises:
        LayerStoreError: If the file is missing or cannot be opened
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise LayerStoreError("open_layers", f"File not found: {file_path}")

    try:
        ds = xr.open_dataset(file_path, engine=engine, **kwargs)
    except (OSError, ValueError) as e:
        raise LayerStoreError("open_layers", f"Cannot open {file_path}: {e}")

    if variable is None:
        return ds
    if variable not in ds.data_vars:
        available = ", ".join(map(str, ds.data_vars))
        ds.close()
        raise LayerStoreError("open_layers", f"Variable '{variable}' not found; available: {available}")
    return ds[variable]

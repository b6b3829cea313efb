from __future__ import annotations

import numpy as np
import pytest
import xarray as xr


def make_layers(times, name: str = "value") -> xr.DataArray:
    """Small DataArray with one 2x2 layer per timestamp."""
    stamps = np.array(times, dtype="datetime64[ns]")
    data = np.arange(len(stamps) * 4, dtype=float).reshape(len(stamps), 2, 2)
    return xr.DataArray(data, dims=("time", "y", "x"), coords={"time": stamps}, name=name)


def month_starts(year: int, months) -> list:
    return [f"{year}-{m:02d}-01" for m in months]


@pytest.fixture
def layers_from():
    return make_layers


@pytest.fixture
def monthly_layers() -> xr.DataArray:
    # Jan-Apr 1980 and 1981, Jan-Mar 1982, Jan-Feb 1983
    times = (
        month_starts(1980, range(1, 5))
        + month_starts(1981, range(1, 5))
        + month_starts(1982, range(1, 4))
        + month_starts(1983, range(1, 3))
    )
    return make_layers(times)


@pytest.fixture
def leap_daily_layers() -> xr.DataArray:
    # Feb-27 to Mar-02 in a leap year and a common year
    times = np.concatenate([
        np.arange("1980-02-27", "1980-03-03", dtype="datetime64[D]"),
        np.arange("1981-02-27", "1981-03-03", dtype="datetime64[D]"),
    ])
    return make_layers(times)


@pytest.fixture
def hourly_layers() -> xr.DataArray:
    # Every six hours over two days, starting at midnight
    times = np.arange("2020-01-01T00", "2020-01-03T00", np.timedelta64(6, "h"), dtype="datetime64[h]")
    return make_layers(times)


@pytest.fixture
def summer_layers() -> xr.DataArray:
    # Monthly from Oct 1990 to Mar 1992: summers 1991 (Oct-Mar) and 1992 (Apr-Mar)
    times = month_starts(1990, range(10, 13)) + month_starts(1991, range(1, 13)) + month_starts(1992, range(1, 4))
    return make_layers(times)

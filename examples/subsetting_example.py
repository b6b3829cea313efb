"""
Example: Temporal Subsetting with Terrapin

This example builds a small monthly collection in memory and walks through
token normalization, field-based subsetting and completeness filtering.
"""

import numpy as np
import xarray as xr

import terrapin as tp

# Monthly layers: Jan-Apr 1980 and 1981, Jan-Mar 1982, Jan-Feb 1983
times = np.array(
    [f"1980-{m:02d}-01" for m in range(1, 5)]
    + [f"1981-{m:02d}-01" for m in range(1, 5)]
    + [f"1982-{m:02d}-01" for m in range(1, 4)]
    + [f"1983-{m:02d}-01" for m in range(1, 3)],
    dtype="datetime64[ns]",
)
da = xr.DataArray(
    np.random.default_rng(0).normal(size=(len(times), 3, 3)),
    dims=("time", "y", "x"),
    coords={"time": times},
    name="tas",
)

# ============================================================================
# Example 1: Token Normalization
# ============================================================================

print("="*70)
print("Example 1: Token Normalization")
print("="*70)

print(tp.normalize_month("feb", out="January"))        # February
print(tp.normalize_month_day("7 Feb"))                 # Feb-07
print(tp.normalize_date("20/Jun/1991", out="dby"))     # 20-Jun-1991
print(tp.extract_month("15-January-2001", out="01"))   # 01

# ============================================================================
# Example 2: Date Information
# ============================================================================

print("\n" + "="*70)
print("Example 2: Derived Date Information")
print("="*70)

info = tp.get_date_info(da, austral_split=3)
print(info.to_dataset())
print(tp.get_temporal_info(da))

# ============================================================================
# Example 3: Subsetting
# ============================================================================

print("\n" + "="*70)
print("Example 3: Subsetting by Field")
print("="*70)

print(tp.subset_by_year(da, between=(1981, 1982)).time.values)
print(tp.subset_by_month(da, ["Jan", "Mar"]).time.values)
print(tp.subset_by_date(da, periods=("1980-01-01", "1980-03-01")).time.values)

# ============================================================================
# Example 4: Completeness Filtering
# ============================================================================

print("\n" + "="*70)
print("Example 4: Completeness Filtering")
print("="*70)

tp.exclude_incomplete_years(da, print_clarity=True)
tp.exclude_unmatched_months(da, print_clarity=True)

from __future__ import annotations

import warnings

import numpy as np
import pytest

from terrapin.core.exceptions import EmptyResultWarning, ParameterError
from terrapin.temporal.completeness import exclude_incomplete_groups, exclude_unmatched_units
from terrapin.temporal.deriver import derive_fields


def month_starts(year, months):
    return [f"{year}-{m:02d}-01" for m in months]


# Jan-Apr 1980 and 1981, Jan-Mar 1982, Jan-Feb 1983
EXAMPLE = (
    month_starts(1980, range(1, 5))
    + month_starts(1981, range(1, 5))
    + month_starts(1982, range(1, 4))
    + month_starts(1983, range(1, 3))
)


def days(start, stop):
    return [str(d) for d in np.arange(start, stop, dtype="datetime64[D]")]


def test_incomplete_years_are_excluded():
    result = exclude_incomplete_groups(derive_fields(EXAMPLE))
    assert result.kept == [1980, 1981]
    assert result.excluded == [1982, 1983]
    assert result.indices == list(range(8))


def test_unmatched_months_are_excluded():
    result = exclude_unmatched_units(derive_fields(EXAMPLE))
    assert result.kept == [1, 2]
    assert result.excluded == [3, 4]
    assert result.indices == [0, 1, 4, 5, 8, 9, 11, 12]


@pytest.mark.parametrize("daily", [False, True])
def test_filters_reach_a_fixed_point(daily):
    stamps = EXAMPLE + ["1984-01-01"]
    table = derive_fields(stamps)

    for first, second in [
        (exclude_incomplete_groups, exclude_unmatched_units),
        (exclude_unmatched_units, exclude_incomplete_groups),
    ]:
        kept = [stamps[i] for i in first(table, daily=daily).indices]
        after_second = [kept[i] for i in second(derive_fields(kept), daily=daily).indices]
        again_first = [after_second[i] for i in first(derive_fields(after_second), daily=daily).indices]
        again_second = [again_first[i] for i in second(derive_fields(again_first), daily=daily).indices]
        assert again_first == after_second
        assert again_second == after_second


def test_leap_day_does_not_split_years():
    table = derive_fields(days("1980-02-27", "1980-03-03") + days("1981-02-27", "1981-03-03"))
    result = exclude_incomplete_groups(table, daily=True)
    assert result.kept == [1980, 1981]
    assert len(result.indices) == len(table)


def test_leap_day_is_not_exempt_from_unmatched_units():
    table = derive_fields(days("1980-02-27", "1980-03-03") + days("1981-02-27", "1981-03-03"))
    result = exclude_unmatched_units(table, daily=True)
    assert result.kept == ["Feb-27", "Feb-28", "Mar-01", "Mar-02"]
    assert result.excluded == ["Feb-29"]


def test_month_days_are_sorted_by_calendar():
    table = derive_fields(["1980-12-01", "1980-02-01", "1981-12-01", "1981-02-01", "1981-04-01"])
    result = exclude_unmatched_units(table, daily=True)
    assert result.kept == ["Feb-01", "Dec-01"]
    assert result.excluded == ["Apr-01"]


def test_single_group_always_survives():
    table = derive_fields(["1990-01-01", "1990-05-01"])
    assert exclude_incomplete_groups(table).indices == [0, 1]
    assert exclude_unmatched_units(table).indices == [0, 1]


def test_summer_grouping():
    # Summer 1991: Oct-Mar; summer 1992: Oct-Dec only
    stamps = month_starts(1990, range(10, 13)) + month_starts(1991, range(1, 4)) + month_starts(1991, range(10, 13))
    table = derive_fields(stamps, austral_split=3)
    result = exclude_incomplete_groups(table, group_by="summer")
    assert result.kept == [1991]
    assert result.excluded == [1992]
    assert result.indices == [0, 1, 2, 3, 4, 5]

    unmatched = exclude_unmatched_units(table, group_by="summer")
    assert unmatched.kept == [10, 11, 12]


def test_summer_grouping_needs_a_summer_field():
    with pytest.raises(ParameterError):
        exclude_incomplete_groups(derive_fields(EXAMPLE), group_by="summer")


def test_unknown_group_key():
    with pytest.raises(ParameterError):
        exclude_unmatched_units(derive_fields(EXAMPLE), group_by="decade")


def test_missing_timestamps_never_survive():
    table = derive_fields(["1980-01-01", None, "1981-01-01"])
    assert exclude_incomplete_groups(table).indices == [0, 2]
    assert exclude_unmatched_units(table).indices == [0, 2]


def test_empty_outcome_warns_and_carries_a_message():
    # Each year holds a different month, so no month is in every year
    table = derive_fields(["1980-01-01", "1981-02-01"])
    with pytest.warns(EmptyResultWarning):
        result = exclude_unmatched_units(table)
    assert result.is_empty
    assert result.indices == []
    assert result.message == "No years contain all months found in this dataset!"
    assert result.report() == result.message

    with pytest.warns(EmptyResultWarning):
        result = exclude_incomplete_groups(table)
    assert result.message == "No month is found in all years of this dataset!"


def test_report_for_incomplete_groups():
    result = exclude_incomplete_groups(derive_fields(EXAMPLE))
    report = result.report()
    assert report.startswith("The following years have data for each month of this dataset:")
    assert "Data in the following years will be excluded:" in report
    assert "  1983" in report


def test_report_for_unmatched_units_names_months():
    report = exclude_unmatched_units(derive_fields(EXAMPLE)).report()
    assert "The following months have data in all the years found in this dataset:" in report
    assert "  January" in report
    assert "  April" in report


def test_report_without_exclusions():
    table = derive_fields(month_starts(1980, [1, 2]) + month_starts(1981, [1, 2]))
    result = exclude_incomplete_groups(table, daily=True)
    assert "month-day combination" in result.report()
    assert result.report().endswith("No data needs to be excluded!")


def test_print_clarity(capsys):
    exclude_incomplete_groups(derive_fields(EXAMPLE), print_clarity=True)
    assert "Data in the following years will be excluded:" in capsys.readouterr().out


def test_no_warning_when_something_survives():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        exclude_incomplete_groups(derive_fields(EXAMPLE))

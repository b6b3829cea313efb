from __future__ import annotations

import itertools
import warnings

import pytest

from terrapin.core.core_types import Between, Exact, TemporalSelection
from terrapin.core.exceptions import (
    AmbiguousSelectionError, InvalidMonthError, NoSelectionMadeError,
    NoSelectionWarning, ParameterError
)
from terrapin.temporal.deriver import derive_fields
from terrapin.temporal.selector import evaluate_predicate, select, select_indices


@pytest.fixture
def yearly_table():
    return derive_fields(["1990-01-01", "1991-01-01", "1992-01-01", "1993-01-01"])


@pytest.fixture
def monthly_table():
    return derive_fields([f"2000-{m:02d}-15" for m in range(1, 13)], austral_split=3)


def test_exact_years(yearly_table):
    assert select_indices(yearly_table, "year", exact=[1991, 1992]) == [1, 2]


def test_exact_accepts_a_scalar(yearly_table):
    assert select_indices(yearly_table, "year", exact=1993) == [3]


def test_before_and_after_are_strict(yearly_table):
    assert select_indices(yearly_table, "year", before=1992) == [0, 1]
    assert select_indices(yearly_table, "year", after=1992) == [3]


def test_between_is_inclusive(yearly_table):
    assert select_indices(yearly_table, "year", between=(1991, 1993)) == [1, 2, 3]


def test_except(yearly_table):
    assert select_indices(yearly_table, "year", except_=[1990, 1993]) == [1, 2]


def test_between_needs_two_values(yearly_table):
    with pytest.raises(ParameterError):
        select_indices(yearly_table, "year", between=(1991,))


def test_reversed_numeric_between_is_rejected(yearly_table):
    with pytest.raises(ParameterError):
        select_indices(yearly_table, "year", between=(1993, 1991))


@pytest.mark.parametrize("first, second", list(itertools.combinations(["exact", "before", "after", "between", "except_"], 2)))
def test_any_two_criteria_are_ambiguous(yearly_table, first, second):
    values = {"exact": [1991], "before": 1992, "after": 1990, "between": (1990, 1992), "except_": [1993]}
    with pytest.raises(AmbiguousSelectionError):
        select_indices(yearly_table, "year", **{first: values[first], second: values[second]})


def test_no_criterion_raises_when_strict(yearly_table):
    with pytest.raises(NoSelectionMadeError):
        select_indices(yearly_table, "year")


def test_no_criterion_warns_and_keeps_everything_when_lenient(yearly_table):
    with pytest.warns(NoSelectionWarning) as record:
        assert select_indices(yearly_table, "year", strict=False) == [0, 1, 2, 3]
    assert record[0].filename == __file__


def test_selection_object_warning_points_at_its_constructor():
    with pytest.warns(NoSelectionWarning) as record:
        TemporalSelection(field="year", strict=False)
    assert record[0].filename == __file__


def test_months_are_normalized(monthly_table):
    assert select_indices(monthly_table, "month", exact=["Dec", "01", "February"]) == [0, 1, 11]
    assert select_indices(monthly_table, "month", after="Oct") == [10, 11]


def test_invalid_month_value(monthly_table):
    with pytest.raises(InvalidMonthError):
        select_indices(monthly_table, "month", exact=["Sept"])


def test_summer_field(monthly_table):
    assert select_indices(monthly_table, "summer", exact=2000) == [0, 1, 2]


def test_month_day_ordering_is_calendar_order(monthly_table):
    # "Apr-15" < "Feb-15" as strings, but not in the calendar
    assert select_indices(monthly_table, "monthDay", before="Mar-01") == [0, 1]
    assert select_indices(monthly_table, "month_day", between=("15 Feb", "Apr-15")) == [1, 2, 3]


def test_month_day_between_wraps_the_new_year(monthly_table):
    assert select_indices(monthly_table, "month_day", between=("Nov-01", "Feb-15")) == [0, 1, 10, 11]


def test_dates_are_normalized():
    table = derive_fields(["1999-12-31", "2000-01-01", "2000-01-02"])
    assert select_indices(table, "date", exact=["01/01/2000"]) == [1]
    assert select_indices(table, "date", after="31-Dec-1999") == [1, 2]


def test_sub_daily_fields():
    table = derive_fields(["2020-01-01T00:00", "2020-01-01T06:00", "2020-01-01T12:00", "2020-01-01T18:00"])
    assert select_indices(table, "hour", between=(6, 12)) == [1, 2]
    assert select_indices(table, "time", before="12:00") == [0, 1]
    assert select_indices(table, "time", exact="6:00") == [1]
    assert select_indices(table, "date_time", after="2020-01-01 12:00") == [3]


def test_missing_values_never_match_but_survive_except():
    table = derive_fields(["1990-01-01", None, "1992-01-01"])
    assert select_indices(table, "year", exact=[1990, 1992]) == [0, 2]
    assert select_indices(table, "year", before=2000) == [0, 2]
    assert select_indices(table, "year", between=(1900, 2000)) == [0, 2]
    assert select_indices(table, "year", except_=[1990]) == [1, 2]


def test_unknown_field(yearly_table):
    with pytest.raises(ParameterError):
        select_indices(yearly_table, "season", exact=1)
    with pytest.raises(ParameterError):
        select_indices(yearly_table, "hour", exact=1)


def test_select_with_a_selection_object(yearly_table):
    selection = TemporalSelection(field="year", after=1991)
    assert selection.has_selection
    assert select(yearly_table, selection) == [2, 3]


def test_lenient_selection_object_keeps_everything(yearly_table):
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", NoSelectionWarning)
        selection = TemporalSelection(field="year", strict=False)
    assert not selection.has_selection
    assert select(yearly_table, selection) == [0, 1, 2, 3]


def test_evaluate_predicate_directly(yearly_table):
    assert evaluate_predicate(yearly_table, "year", Exact((1990,))) == [0]
    assert evaluate_predicate(yearly_table, "year", Between(1992, 1993)) == [2, 3]

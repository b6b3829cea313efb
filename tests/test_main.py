from __future__ import annotations

import pytest

import terrapin as tp
from terrapin.core.exceptions import (
    AmbiguousSelectionError, EmptyResultWarning, NoSelectionMadeError, NoSelectionWarning, ParameterError
)


def dates_of(obj):
    return [str(t)[:10] for t in obj.time.values.astype("datetime64[D]")]


def test_get_date_info_defaults_to_split_three(monthly_layers):
    info = tp.get_date_info(monthly_layers)
    assert info.has_summer
    assert info.column("summer")[:4] == [1980, 1980, 1980, 1981]
    assert tp.get_date_info(monthly_layers, austral_split=None).has_summer is False


def test_subset_by_generic_field(monthly_layers):
    subset = tp.subset_by(monthly_layers, "year", between=(1981, 1982))
    assert subset.sizes["time"] == 7
    assert isinstance(subset, type(monthly_layers))


def test_subset_by_without_criterion(monthly_layers):
    with pytest.raises(NoSelectionMadeError):
        tp.subset_by(monthly_layers, "year")
    with pytest.warns(NoSelectionWarning) as record:
        assert tp.subset_by(monthly_layers, "year", strict=False).sizes["time"] == 13
    assert record[0].filename == __file__


def test_no_criterion_warning_points_at_the_caller(monthly_layers):
    with pytest.warns(NoSelectionWarning) as record:
        tp.subset_by_year(monthly_layers, strict=False)
    assert record[0].filename == __file__


def test_subset_by_year(monthly_layers):
    assert tp.subset_by_year(monthly_layers, [1980, 1983]).sizes["time"] == 6
    assert tp.subset_by_year(monthly_layers, except_=1980).sizes["time"] == 9


def test_subset_by_summer(summer_layers):
    assert tp.subset_by_summer(summer_layers, 1991).sizes["time"] == 6
    assert dates_of(tp.subset_by_summer(summer_layers, 1991, austral_split=12))[:1] == ["1991-01-01"]
    with pytest.raises(ParameterError):
        tp.subset_by_summer(summer_layers, 1991, austral_split=None)


def test_subset_by_month(monthly_layers):
    subset = tp.subset_by_month(monthly_layers, ["Mar", "2020-04-15"])
    assert dates_of(subset) == ["1980-03-01", "1980-04-01", "1981-03-01", "1981-04-01", "1982-03-01"]


def test_subset_by_month_excluding_incomplete_years(monthly_layers):
    subset = tp.subset_by_month(monthly_layers, ["Mar", "Apr"], exclude_incomplete=True)
    assert dates_of(subset) == ["1980-03-01", "1980-04-01", "1981-03-01", "1981-04-01"]


def test_subset_by_month_excluding_incomplete_summers(summer_layers):
    # Summer 1991 (Oct 1990-Mar 1991) has no April
    subset = tp.subset_by_month(summer_layers, ["Mar", "Apr"], exclude_incomplete=3)
    assert dates_of(subset) == ["1991-04-01", "1992-03-01"]


def test_subset_by_month_rejects_bad_completeness_option(monthly_layers):
    with pytest.raises(ParameterError):
        tp.subset_by_month(monthly_layers, "Jan", exclude_incomplete=13)


def test_subset_by_date(leap_daily_layers):
    assert dates_of(tp.subset_by_date(leap_daily_layers, ["29/02/1980", "1981-03-01"])) == ["1980-02-29", "1981-03-01"]
    assert dates_of(tp.subset_by_date(leap_daily_layers, after="1981-02-28")) == ["1981-03-01", "1981-03-02"]


def test_subset_by_date_periods(leap_daily_layers):
    subset = tp.subset_by_date(leap_daily_layers, periods=[("1980-02-28", "1980-03-01"), ("1981-03-02", "1981-03-09")])
    assert dates_of(subset) == ["1980-02-28", "1980-02-29", "1980-03-01", "1981-03-02"]


def test_subset_by_date_except_periods(leap_daily_layers):
    subset = tp.subset_by_date(leap_daily_layers, except_=[("1980-01-01", "1980-12-31")])
    assert dates_of(subset) == ["1981-02-27", "1981-02-28", "1981-03-01", "1981-03-02"]


def test_subset_by_date_needs_exactly_one_criterion(leap_daily_layers):
    with pytest.raises(AmbiguousSelectionError):
        tp.subset_by_date(leap_daily_layers, dates=["1980-02-29"], periods=("1980-01-01", "1980-12-31"))
    with pytest.raises(NoSelectionMadeError):
        tp.subset_by_date(leap_daily_layers)


def test_subset_by_month_day(leap_daily_layers):
    assert tp.subset_by_month_day(leap_daily_layers, ["1 Mar"]).sizes["time"] == 2
    assert tp.subset_by_month_day(leap_daily_layers, before="Feb-29").sizes["time"] == 4
    assert tp.subset_by_month_day(leap_daily_layers, except_=[("Feb-28", "Mar-01")]).sizes["time"] == 4


def test_subset_by_month_day_periods_wrap(layers_from):
    layers = layers_from(["2000-12-30", "2000-12-31", "2001-01-01", "2001-01-05", "2001-06-01"])
    subset = tp.subset_by_month_day(layers, periods=("Dec-31", "Jan-01"))
    assert dates_of(subset) == ["2000-12-31", "2001-01-01"]


def test_subset_by_month_day_excluding_incomplete(leap_daily_layers):
    subset = tp.subset_by_month_day(leap_daily_layers, periods=("Feb-28", "Mar-01"), exclude_incomplete=True)
    assert dates_of(subset) == ["1980-02-28", "1980-02-29", "1980-03-01", "1981-02-28", "1981-03-01"]


def test_subset_by_day(leap_daily_layers):
    assert tp.subset_by_day(leap_daily_layers, between=(28, 29)).sizes["time"] == 3


def test_subset_by_hour_and_minute(hourly_layers):
    assert tp.subset_by_hour(hourly_layers, [0, 12]).sizes["time"] == 4
    assert tp.subset_by_hour(hourly_layers, after=6).sizes["time"] == 4
    assert tp.subset_by_minute(hourly_layers, 0).sizes["time"] == 8


def test_hour_on_midnight_only_layers(layers_from):
    layers = layers_from(["2020-01-01", "2020-01-02"])
    assert tp.subset_by_hour(layers, 0).sizes["time"] == 2


def test_exclude_incomplete_years(monthly_layers):
    subset = tp.exclude_incomplete_years(monthly_layers)
    assert sorted(set(d[:4] for d in dates_of(subset))) == ["1980", "1981"]


def test_exclude_incomplete_years_daily_ignores_leap_day(leap_daily_layers):
    assert tp.exclude_incomplete_years(leap_daily_layers, daily=True).sizes["time"] == 9


def test_exclude_incomplete_summers(summer_layers):
    # Summer 1991 runs Oct 1990-Mar 1991 and lacks Apr-Sep
    assert dates_of(tp.exclude_incomplete_summers(summer_layers))[0] == "1991-04-01"


def test_exclude_unmatched_months(monthly_layers):
    subset = tp.exclude_unmatched_months(monthly_layers)
    assert sorted(set(d[5:7] for d in dates_of(subset))) == ["01", "02"]


def test_exclude_unmatched_months_by_summer(summer_layers):
    subset = tp.exclude_unmatched_months(summer_layers, austral_split=3)
    assert sorted(set(d[5:7] for d in dates_of(subset))) == ["01", "02", "03", "10", "11", "12"]


def test_exclude_unmatched_days(leap_daily_layers):
    subset = tp.exclude_unmatched_days(leap_daily_layers)
    assert "1980-02-29" not in dates_of(subset)
    assert subset.sizes["time"] == 8


def test_exclude_returns_none_when_nothing_survives(layers_from):
    layers = layers_from(["1980-01-01", "1981-02-01"])
    with pytest.warns(EmptyResultWarning):
        assert tp.exclude_unmatched_months(layers) is None
    with pytest.warns(EmptyResultWarning):
        assert tp.exclude_incomplete_years(layers) is None


def test_dataset_input(monthly_layers):
    ds = monthly_layers.to_dataset()
    subset = tp.subset_by_year(ds, 1982)
    assert subset["value"].sizes["time"] == 3


def test_custom_time_dimension(monthly_layers):
    renamed = monthly_layers.rename(time="t")
    assert tp.subset_by_year(renamed, 1982, time_dim="t").sizes["t"] == 3

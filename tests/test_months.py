from __future__ import annotations

import numpy as np
import pytest

from terrapin.core.core_types import MonthFormat
from terrapin.core.exceptions import InvalidMonthError, ParameterError
from terrapin.tokens.months import is_month, is_month_name, normalize_month, parse_month


@pytest.mark.parametrize("token", [2, "2", "02", "Feb", "feb", "FEB", "February", "february", " february "])
def test_parse_month_accepts_every_input_form(token):
    assert parse_month(token) == 2


def test_parse_month_rejects_non_months():
    assert parse_month(13) is None
    assert parse_month(0) is None
    assert parse_month("Sept") is None
    assert parse_month("J") is None
    assert parse_month(True) is None
    assert parse_month(None) is None
    assert parse_month(2.5) is None


def test_parse_month_accepts_numpy_and_integral_floats():
    assert parse_month(np.int64(11)) == 11
    assert parse_month(3.0) == 3


def test_normalize_month_output_forms():
    assert normalize_month("feb", out="January") == "February"
    assert normalize_month(12, out="01") == "12"
    assert normalize_month("March", out=1) == 3
    assert normalize_month("03", out="1") == "3"
    assert normalize_month(7, out="Jan") == "Jul"
    assert normalize_month(7, out="jan") == "jul"
    assert normalize_month(7, out="JAN") == "JUL"
    assert normalize_month(9, out="JANUARY") == "SEPTEMBER"
    assert normalize_month(9, out="J") == "S"
    assert normalize_month(9, out="j") == "s"
    assert normalize_month("Aug", out=MonthFormat.PADDED) == "08"


def test_normalize_month_default_is_padded():
    assert normalize_month("Oct") == "10"


def test_normalize_month_as_is_returns_token():
    assert normalize_month("janUARY", out="asis") == "janUARY"


def test_normalize_month_passes_unknown_tokens_through():
    assert normalize_month("Sept", out=1) == "Sept"


def test_normalize_month_strict_raises():
    with pytest.raises(InvalidMonthError):
        normalize_month("Sept", strict=True)


def test_normalize_month_rejects_unknown_output_form():
    with pytest.raises(ParameterError):
        normalize_month("Jan", out="Janvier")


def test_month_name_excludes_numbers():
    assert is_month("5")
    assert not is_month_name("5")
    assert is_month_name("May")

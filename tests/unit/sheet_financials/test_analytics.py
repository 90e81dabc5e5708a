import math

import pytest

from src.sheet_financials.analytics import is_num, last_n, pct_change, sum_ttm, yoy_series


@pytest.mark.unit
def test_is_num():
    assert is_num(1) and is_num(2.5) and is_num(0)
    assert not is_num(None)
    assert not is_num(True)
    assert not is_num("1")
    assert not is_num(math.nan)
    assert not is_num(math.inf)


@pytest.mark.unit
def test_last_n():
    assert last_n([1, 2, 3, 4, 5], 2) == [4, 5]
    assert last_n([1, 2], 4) == [1, 2]
    assert last_n([1, 2], 0) == []
    assert last_n(None, 3) == []


@pytest.mark.unit
def test_sum_ttm_skips_absent_values():
    assert sum_ttm([1.0, 2.0, 3.0, 4.0, 5.0]) == 14.0
    assert sum_ttm([1.0, None, 3.0, 4.0, 5.0]) == 13.0
    assert sum_ttm([]) == 0.0


@pytest.mark.unit
def test_pct_change():
    assert pct_change(110.0, 100.0) == pytest.approx(10.0)
    assert pct_change(50.0, 100.0) == pytest.approx(-50.0)
    assert pct_change(1.0, 0.0) is None
    assert pct_change(None, 1.0) is None
    assert pct_change(1.0, None) is None


@pytest.mark.unit
def test_yoy_series_compares_same_quarter_prior_year():
    series = [100.0, 100.0, 100.0, 100.0, 110.0, 120.0, None, 80.0]

    assert yoy_series(series) == [pytest.approx(10.0), pytest.approx(20.0), None, pytest.approx(-20.0)]


@pytest.mark.unit
def test_yoy_series_needs_more_than_a_year():
    assert yoy_series([1.0, 2.0, 3.0, 4.0]) == []

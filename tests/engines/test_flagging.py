import pytest

from comp_rollup.engines.flagging import is_flagged, total_increase_percent


@pytest.mark.parametrize("pct, flagged", [(0.0, False), (10.0, False), (10.01, True), (14.0, True)])
def test_flag_threshold(pct, flagged):
    assert is_flagged(pct) is flagged


def test_total_increase_percent():
    assert total_increase_percent(100000, 110000) == 10.0
    assert total_increase_percent(100000, 104000) == 4.0


def test_total_increase_percent_zero_salary():
    assert total_increase_percent(0, 5000) == 0.0

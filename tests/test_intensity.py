import pytest

from chartdata.config import ChartConfig
from chartdata.domain import IntensityLevel
from chartdata.intensity import classify, level_color, max_amount


def test_zero_is_none_for_any_max():
    for peak in (0, 1, 50, 10_000):
        assert classify(0, peak) is IntensityLevel.NONE


@pytest.mark.parametrize(
    "amount, expected",
    [
        (1, IntensityLevel.LOW),
        (19.99, IntensityLevel.LOW),
        (20, IntensityLevel.MEDIUM),
        (49, IntensityLevel.MEDIUM),
        (50, IntensityLevel.HIGH),
        (79, IntensityLevel.HIGH),
        (80, IntensityLevel.CRITICAL),
        (100, IntensityLevel.CRITICAL),
    ],
)
def test_thresholds(amount, expected):
    assert classify(amount, 100) is expected


def test_floor_of_one_prevents_division_by_zero():
    assert classify(0.5, 0) is IntensityLevel.HIGH
    assert classify(3, 0) is IntensityLevel.CRITICAL


def test_monotone_in_amount():
    levels = [classify(x / 10, 100) for x in range(0, 1200)]
    assert levels == sorted(levels)


def test_max_amount_has_floor():
    assert max_amount([]) == 1
    assert max_amount([0, 0.4]) == 1
    assert max_amount([12, 40, 3]) == 40


def test_level_colors_follow_config():
    config = ChartConfig()
    assert level_color(IntensityLevel.NONE) == config.level_colors[0]
    assert level_color(IntensityLevel.CRITICAL, dark=True) == config.dark_level_colors[4]

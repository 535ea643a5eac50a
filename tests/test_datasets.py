import pytest

from chartdata.config import make_translator, DEFAULT_LABELS
from chartdata.datasets import (
    overview_dataset,
    pie_dataset,
    series_colors,
    time_series_dataset,
)
from chartdata.domain import Bucket

PALETTE = ("#111111", "#222222", "#333333")
LEFTOVER = "#32d74b"
OVERSPEND = "#ff3b30"


def make_buckets():
    return (
        Bucket("Food", {"expense": 120, "income": 0}),
        Bucket("Rent", {"expense": 900, "income": 0}),
        Bucket("Transport", {"expense": 45, "income": 0}),
        Bucket("Dining", {"expense": 80, "income": 0}),
    )


def overview(remaining):
    return overview_dataset(make_buckets(), PALETTE, remaining, make_translator(DEFAULT_LABELS), LEFTOVER, OVERSPEND)


def test_pie_colors_cycle_by_position():
    slices = pie_dataset(make_buckets(), PALETTE, series="expense")
    assert [s.color for s in slices] == ["#111111", "#222222", "#333333", "#111111"]
    assert [(s.key, s.value) for s in slices] == [("Food", 120), ("Rent", 900), ("Transport", 45), ("Dining", 80)]


def test_pie_is_deterministic():
    assert pie_dataset(make_buckets(), PALETTE) == pie_dataset(make_buckets(), PALETTE)


def test_pie_without_series_sums_bucket():
    (s,) = pie_dataset([Bucket("Mixed", {"a": 2, "b": 3})], PALETTE)
    assert s.value == 5


def test_pie_empty():
    assert pie_dataset((), PALETTE) == ()


def test_pie_needs_palette():
    with pytest.raises(ValueError):
        pie_dataset(make_buckets(), ())


def test_overview_positive_remaining():
    slices = overview(150)
    extra = slices[-1]
    assert len(slices) == 5
    assert extra.synthetic
    assert extra.value == 150
    assert extra.color == LEFTOVER
    assert extra.name == "Remaining"
    assert extra.key == "remaining"


def test_overview_negative_remaining():
    extra = overview(-75)[-1]
    assert extra.value == 75
    assert extra.color == OVERSPEND
    assert extra.name == "Extra Expense"
    assert extra.key == "overspend"


def test_overview_zero_remaining_has_no_extra_slice():
    slices = overview(0)
    assert len(slices) == 4
    assert not any(s.synthetic for s in slices)


def test_synthetic_slice_does_not_shift_palette():
    real = [s.color for s in overview(150) if not s.synthetic]
    assert real == [s.color for s in pie_dataset(make_buckets(), PALETTE)]


def test_overview_uses_given_translator():
    slices = overview_dataset(make_buckets(), PALETTE, 10, lambda key: key.upper(), LEFTOVER, OVERSPEND)
    assert slices[-1].name == "REMAINING"


def test_time_series_keeps_bucket_order():
    buckets = (
        Bucket("2023-10-03", {"income": 1000, "expense": 60}),
        Bucket("2023-09-30", {"expense": 25}),
    )
    records = time_series_dataset(buckets, ("income", "expense"))
    assert records == (
        {"date": "2023-10-03", "income": 1000, "expense": 60},
        {"date": "2023-09-30", "income": 0, "expense": 25},
    )


def test_time_series_custom_series_and_key_field():
    buckets = (Bucket("2023-09", {"Food": 10, "Rent": 900}), Bucket("2023-10", {"Food": 30, "Travel": 5}))
    records = time_series_dataset(buckets, key_field="month")
    assert records[0] == {"month": "2023-09", "Food": 10, "Rent": 900, "Travel": 0}
    assert records[1] == {"month": "2023-10", "Food": 30, "Rent": 0, "Travel": 5}


def test_series_colors():
    colors = series_colors(["a", "b", "income", "c", "d"], ["#1", "#2", "#3"], fixed={"income": "#green"})
    assert colors == {"a": "#1", "b": "#2", "income": "#green", "c": "#1", "d": "#2"}


def test_series_cannot_shadow_key_field():
    buckets = (Bucket("2023-10", {"month": 30}),)
    with pytest.raises(ValueError):
        time_series_dataset(buckets, key_field="month")
    with pytest.raises(ValueError):
        time_series_dataset(buckets, ["date"])

from datetime import date, datetime

import pytest

from chartdata.calendar_grid import days
from chartdata.config import ChartConfig
from chartdata.domain import Day, Pad, Transaction
from chartdata.services import ChartService, remaining_balance


def make_tx(id, day, amount, kind, category):
    return Transaction(id=id, date=datetime(2023, *day, 10), amount=amount, type=kind, category=category)


def make_sample():
    return (
        make_tx("t1", (10, 27), 40, "expense", "Food"),
        make_tx("t2", (9, 1), 500, "income", "Salary"),
        make_tx("t3", (10, 3), 200, "expense", "Rent"),
        make_tx("t4", (9, 20), 60, "expense", "Food"),
        make_tx("t5", (10, 3), 100, "income", "Freelance"),
    )


def test_remaining_balance():
    assert remaining_balance(make_sample()) == 600 - 300
    assert remaining_balance(()) == 0


def test_category_pie_expense_only():
    slices = ChartService().category_pie(make_sample())
    assert [(s.key, s.value) for s in slices] == [("Food", 100), ("Rent", 200)]
    palette = ChartConfig().palette
    assert [s.color for s in slices] == [palette[0], palette[1]]


def test_overview_defaults_remaining_to_income_minus_expense():
    slices = ChartService().overview(make_sample())
    assert slices[-1].synthetic
    assert slices[-1].value == 300
    assert slices[-1].name == "Remaining"


def test_overview_overspend_with_custom_translate():
    slices = ChartService(translate=lambda key: f"<{key}>").overview(make_sample(), remaining=-20)
    assert slices[-1].name == "<overspend>"
    assert slices[-1].value == 20


def test_flow_bars_sorted_by_day():
    flow = ChartService().flow_bars(make_sample())
    assert [r["date"] for r in flow["records"]] == ["2023-09-01", "2023-09-20", "2023-10-03", "2023-10-27"]
    assert flow["records"][2] == {"date": "2023-10-03", "income": 100, "expense": 200}
    assert flow["colors"] == {"income": "#32d74b", "expense": "#ff3b30"}


def test_trend_lines_default_series():
    trend = ChartService().trend_lines(make_sample())
    assert trend["series"] == ("income", "expense")
    assert trend["records"] == (
        {"month": "2023-09", "income": 500, "expense": 60},
        {"month": "2023-10", "income": 100, "expense": 240},
    )


def test_trend_lines_custom_keys():
    trend = ChartService().trend_lines(make_sample(), custom_keys=["Food", "Travel"])
    assert trend["records"] == (
        {"month": "2023-09", "Food": 60, "Travel": 0},
        {"month": "2023-10", "Food": 40, "Travel": 0},
    )
    line_palette = ChartConfig().line_palette
    assert trend["colors"] == {"Food": line_palette[0], "Travel": line_palette[1]}


def test_heatmap_bundle():
    heat = ChartService().heatmap(make_sample())
    cells = heat["cells"]
    # 2023-09-01 is a Friday
    assert cells[:5] == (Pad(),) * 5
    assert len([c for c in cells if isinstance(c, Day)]) == 30 + 31
    assert heat["max_amount"] == 200
    assert heat["headers"][0] == "S"
    assert all(len(r) == 7 for r in heat["rows"])


def test_heatmap_empty():
    heat = ChartService().heatmap(())
    assert heat["cells"] == ()
    assert heat["rows"] == ()


def test_date_window():
    service = ChartService()
    slices = service.category_pie(make_sample(), start=date(2023, 10, 1), end=date(2023, 10, 31))
    assert [(s.key, s.value) for s in slices] == [("Food", 40), ("Rent", 200)]
    assert service.heatmap(make_sample(), start=date(2023, 10, 1))["cells"][0] == Day("2023-10-01", 0)


def test_trend_lines_reject_category_named_like_key():
    trans = (make_tx("t1", (10, 5), 30, "expense", "month"),)
    with pytest.raises(ValueError):
        ChartService().trend_lines(trans, custom_keys=["month"])


def test_category_focus_for_heatmap_and_flow():
    service = ChartService()
    heat = service.heatmap(make_sample(), category="Food")
    assert heat["max_amount"] == 60
    assert sum(d.amount for d in days(heat["cells"])) == 100
    flow = service.flow_bars(make_sample(), category="Rent")
    assert flow["records"] == ({"date": "2023-10-03", "income": 0, "expense": 200},)

from datetime import date
from typing import Any, Callable, Iterable, Optional, Sequence

from chartdata.aggregate import sort_buckets
from chartdata.calendar_grid import days, grid_rows, weekday_headers
from chartdata.config import ChartConfig, make_translator
from chartdata.datasets import (
    flow_colors,
    overview_dataset,
    pie_dataset,
    series_colors,
    time_series_dataset,
)
from chartdata.domain import EXPENSE, INCOME, Slice, Transaction
from chartdata.filters import all_of, by_category, by_date_range, is_expense, is_income, iter_transactions
from chartdata.intensity import max_amount as peak_amount
from chartdata.logging_setup import get_logger
from chartdata.memo import cached_buckets, cached_grid

logger = get_logger(__name__)

FLOW_SERIES = (INCOME, EXPENSE)


def remaining_balance(trans: Iterable[Transaction]) -> float:
    trans = tuple(trans)
    income = sum(t.amount for t in iter_transactions(trans, is_income))
    expense = sum(t.amount for t in iter_transactions(trans, is_expense))
    return income - expense


class ChartService:
    """Facade building every dashboard dataset from one transaction list.

    config: palette, fixed colors and week layout
    translate: label id -> display string, used for synthetic pie slices
    """

    def __init__(self, config: Optional[ChartConfig] = None, translate: Optional[Callable[[str], str]] = None):
        self.config = config or ChartConfig()
        self.translate = translate or make_translator(self.config.labels)

    def _select(
        self,
        trans: Iterable[Transaction],
        start: Optional[date],
        end: Optional[date],
        category: Optional[str] = None,
    ) -> tuple[Transaction, ...]:
        preds = []
        if start is not None or end is not None:
            preds.append(by_date_range(start, end))
        if category is not None:
            preds.append(by_category(category))
        if not preds:
            return tuple(trans)
        return tuple(iter_transactions(trans, all_of(*preds)))

    def category_pie(self, trans: Iterable[Transaction], start: Optional[date] = None, end: Optional[date] = None) -> tuple[Slice, ...]:
        selected = self._select(trans, start, end)
        buckets = cached_buckets(selected, "category", "expense")
        slices = pie_dataset(buckets, self.config.palette, series=EXPENSE)
        logger.debug("category pie: %d transactions -> %d slices", len(selected), len(slices))
        return slices

    def overview(
        self,
        trans: Iterable[Transaction],
        remaining: Optional[float] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> tuple[Slice, ...]:
        selected = self._select(trans, start, end)
        if remaining is None:
            remaining = remaining_balance(selected)
        buckets = cached_buckets(selected, "category", "expense")
        slices = overview_dataset(
            buckets,
            self.config.palette,
            remaining,
            self.translate,
            self.config.leftover_color,
            self.config.overspend_color,
            series=EXPENSE,
        )
        logger.debug("overview: %d transactions -> %d slices (remaining=%s)", len(selected), len(slices), remaining)
        return slices

    def flow_bars(
        self,
        trans: Iterable[Transaction],
        start: Optional[date] = None,
        end: Optional[date] = None,
        category: Optional[str] = None,
    ) -> dict[str, Any]:
        selected = self._select(trans, start, end, category)
        buckets = sort_buckets(cached_buckets(selected, "day", "type", FLOW_SERIES))
        records = time_series_dataset(buckets, FLOW_SERIES, key_field="date")
        logger.debug("flow bars: %d transactions -> %d days", len(selected), len(records))
        return {
            "records": records,
            "series": FLOW_SERIES,
            "colors": flow_colors(self.config.income_color, self.config.expense_color),
        }

    def trend_lines(
        self,
        trans: Iterable[Transaction],
        custom_keys: Optional[Sequence[str]] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> dict[str, Any]:
        selected = self._select(trans, start, end)
        if custom_keys:
            series = tuple(custom_keys)
            buckets = cached_buckets(selected, "month", "category", series)
            colors = series_colors(series, self.config.line_palette)
        else:
            series = FLOW_SERIES
            buckets = cached_buckets(selected, "month", "type", series)
            colors = flow_colors(self.config.income_color, self.config.expense_color)
        records = time_series_dataset(sort_buckets(buckets), series, key_field="month")
        logger.debug("trend lines: %d transactions -> %d months, series %s", len(selected), len(records), series)
        return {"records": records, "series": series, "colors": colors}

    def heatmap(
        self,
        trans: Iterable[Transaction],
        max_amount: Optional[float] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        category: Optional[str] = None,
    ) -> dict[str, Any]:
        selected = self._select(trans, start, end, category)
        cells = cached_grid(selected, max_amount, self.config.first_weekday)
        if max_amount is None:
            max_amount = peak_amount(d.amount for d in days(cells))
        logger.debug("heatmap: %d transactions -> %d cells", len(selected), len(cells))
        return {
            "cells": cells,
            "rows": grid_rows(cells),
            "headers": weekday_headers(self.config.first_weekday),
            "max_amount": max_amount,
        }

"""Group transactions into buckets of summed series.

``aggregate`` keeps buckets in the order their keys are first seen. The order
is tracked explicitly (a list of keys plus a key -> position index) instead of
leaning on dict insertion order. Sorting is left to the caller, see
``sort_buckets``.
"""

from collections import defaultdict
from typing import Callable, Hashable, Iterable, Optional, Sequence

from chartdata.dates import to_date_key, to_month_key
from chartdata.domain import EXPENSE, Bucket, Transaction
from chartdata.filters import is_expense
from chartdata.logging_setup import get_logger

logger = get_logger(__name__)

KeyFn = Callable[[Transaction], Optional[str]]
SeriesFn = Callable[[Transaction], Optional[tuple[str, float]]]


def aggregate(
    trans: Iterable[Transaction],
    key_fn: KeyFn,
    series_fn: SeriesFn,
    series_names: Sequence[str] = (),
) -> tuple[Bucket, ...]:
    keys: list[str] = []
    index: dict[str, int] = {}
    sums: list[dict[str, float]] = []
    seen_series: list[str] = list(series_names)

    for t in trans:
        key = key_fn(t)
        if key is None:
            continue
        entry = series_fn(t)
        if entry is None:
            continue
        name, amount = entry

        pos = index.get(key)
        if pos is None:
            pos = index[key] = len(keys)
            keys.append(key)
            sums.append(defaultdict(float))
        sums[pos][name] += amount
        if name not in seen_series:
            seen_series.append(name)

    buckets = tuple(
        Bucket(key=key, values={name: sums[i].get(name, 0) for name in seen_series})
        for i, key in enumerate(keys)
    )
    logger.debug("aggregated %d buckets over series %s", len(buckets), seen_series)
    return buckets


def sort_buckets(buckets: Iterable[Bucket], key: Callable[[Bucket], Hashable] = None, reverse: bool = False) -> tuple[Bucket, ...]:
    """Sort once on the output; DateKeys and MonthKeys sort chronologically as strings."""
    return tuple(sorted(buckets, key=key or (lambda b: b.key), reverse=reverse))


def series_totals(buckets: Iterable[Bucket]) -> dict[str, float]:
    totals: dict[str, float] = defaultdict(float)
    for b in buckets:
        for name, value in b.values.items():
            totals[name] += value
    return dict(totals)


# Key functions

def by_day() -> KeyFn:
    def _key(t: Transaction) -> str:
        return to_date_key(t.date)

    return _key


def by_month() -> KeyFn:
    def _key(t: Transaction) -> str:
        return to_month_key(t.date)

    return _key


def by_category() -> KeyFn:
    def _key(t: Transaction) -> str:
        return t.category

    return _key


# Series functions

def by_type() -> SeriesFn:
    """One series per transaction type: 'income' and 'expense'."""
    def _series(t: Transaction) -> tuple[str, float]:
        return t.type, t.amount

    return _series


def expense_only() -> SeriesFn:
    def _series(t: Transaction) -> Optional[tuple[str, float]]:
        if t.type != EXPENSE:
            return None
        return EXPENSE, t.amount

    return _series


def by_category_series(categories: Optional[Sequence[str]] = None) -> SeriesFn:
    """Expense amount keyed by category name, restricted to ``categories`` when given."""
    wanted = set(categories) if categories is not None else None

    def _series(t: Transaction) -> Optional[tuple[str, float]]:
        if t.type != EXPENSE:
            return None
        if wanted is not None and t.category not in wanted:
            return None
        return t.category, t.amount

    return _series


def daily_expense_totals(trans: Iterable[Transaction]) -> dict[str, float]:
    totals: dict[str, float] = defaultdict(float)
    for t in trans:
        if is_expense(t):
            totals[to_date_key(t.date)] += t.amount
    return dict(totals)

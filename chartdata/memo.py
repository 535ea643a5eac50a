import calendar
from functools import lru_cache
from typing import Optional

from chartdata import aggregate as agg
from chartdata.calendar_grid import build_grid
from chartdata.domain import Bucket, CalendarCell, Transaction

GROUPINGS = {
    "day": agg.by_day,
    "month": agg.by_month,
    "category": agg.by_category,
}

SERIES = {
    "type": agg.by_type,
    "expense": agg.expense_only,
    "category": agg.by_category_series,
}


# Transactions are frozen dataclasses in a tuple, so the whole list is
# hashable: a different list is a different cache key.
@lru_cache(maxsize=64)
def cached_buckets(
    trans: tuple[Transaction, ...],
    grouping: str,
    series: str,
    series_names: tuple[str, ...] = (),
) -> tuple[Bucket, ...]:
    if grouping not in GROUPINGS:
        raise ValueError(f"unknown grouping {grouping!r}, expected one of {sorted(GROUPINGS)}")
    if series not in SERIES:
        raise ValueError(f"unknown series {series!r}, expected one of {sorted(SERIES)}")
    return agg.aggregate(trans, GROUPINGS[grouping](), SERIES[series](), series_names)


@lru_cache(maxsize=16)
def cached_grid(
    trans: tuple[Transaction, ...],
    max_amount: Optional[float] = None,
    first_weekday: int = calendar.SUNDAY,
) -> tuple[CalendarCell, ...]:
    return build_grid(trans, max_amount, first_weekday)

"""Calendar layout for the spending heatmap.

``build_grid`` returns one ``Day`` per date of every month touched by the
transactions, preceded by enough ``Pad`` cells that the first day lands in
its weekday column once the sequence is wrapped into rows of seven.
"""

import calendar
from datetime import timedelta
from typing import Iterable, Optional, Sequence

from chartdata.aggregate import daily_expense_totals
from chartdata.dates import month_bounds, to_date_key, to_local
from chartdata.domain import CalendarCell, Day, Pad, Transaction
from chartdata.intensity import classify, max_amount as peak_amount
from chartdata.logging_setup import get_logger

logger = get_logger(__name__)

WEEK = 7
_DAY_LETTERS = ("M", "T", "W", "T", "F", "S", "S")  # Monday first, like date.weekday()


def leading_pads(weekday: int, first_weekday: int = calendar.SUNDAY) -> int:
    """Blank cells before a day whose ``date.weekday()`` is ``weekday``."""
    return (weekday - first_weekday) % WEEK


def build_grid(
    trans: Iterable[Transaction],
    max_amount: Optional[float] = None,
    first_weekday: int = calendar.SUNDAY,
) -> tuple[CalendarCell, ...]:
    trans = tuple(trans)
    if not trans:
        return ()

    # range from real timestamps, not from DateKey strings
    stamps = [to_local(t.date) for t in trans]
    start, _ = month_bounds(min(stamps))
    _, end = month_bounds(max(stamps))

    totals = daily_expense_totals(trans)
    if max_amount is None:
        max_amount = peak_amount(totals.values())

    cells = [Pad() for _ in range(leading_pads(start.weekday(), first_weekday))]
    day = start
    while day <= end:
        key = to_date_key(day)
        amount = totals.get(key, 0)
        cells.append(Day(date=key, amount=amount, level=classify(amount, max_amount)))
        day += timedelta(days=1)

    logger.debug("calendar grid %s..%s: %d cells", start, end, len(cells))
    return tuple(cells)


def days(cells: Iterable[CalendarCell]) -> tuple[Day, ...]:
    return tuple(c for c in cells if isinstance(c, Day))


def grid_rows(cells: Sequence[CalendarCell]) -> tuple[tuple[CalendarCell, ...], ...]:
    """Wrap cells into weekly rows, right-padding the last row."""
    rows = []
    for i in range(0, len(cells), WEEK):
        row = tuple(cells[i:i + WEEK])
        rows.append(row + tuple(Pad() for _ in range(WEEK - len(row))))
    return tuple(rows)


def weekday_headers(first_weekday: int = calendar.SUNDAY) -> tuple[str, ...]:
    return tuple(_DAY_LETTERS[(first_weekday + i) % WEEK] for i in range(WEEK))

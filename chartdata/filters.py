from datetime import date, datetime
from typing import Callable, Iterable, Iterator, Optional

from chartdata.dates import local_date
from chartdata.domain import EXPENSE, INCOME, Transaction

Predicate = Callable[[Transaction], bool]


def iter_transactions(trans: Iterable[Transaction], pred: Predicate) -> Iterator[Transaction]:
    for t in trans:
        if pred(t):
            yield t


def by_type(kind: str) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return t.type == kind

    return _filter


is_expense = by_type(EXPENSE)
is_income = by_type(INCOME)


def by_category(category: str) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return t.category == category

    return _filter


def by_date_range(start: Optional[date] = None, end: Optional[date] = None) -> Predicate:
    """Inclusive range on the local calendar day; either bound may be open."""
    if isinstance(start, datetime):
        start = local_date(start)
    if isinstance(end, datetime):
        end = local_date(end)

    def _filter(t: Transaction) -> bool:
        d = local_date(t.date)
        if start is not None and d < start:
            return False
        if end is not None and d > end:
            return False
        return True

    return _filter


def all_of(*preds: Predicate) -> Predicate:
    def _filter(t: Transaction) -> bool:
        return all(p(t) for p in preds)

    return _filter

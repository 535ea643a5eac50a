from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum
from types import MappingProxyType
from typing import Mapping, Union

INCOME = "income"
EXPENSE = "expense"
TRANSACTION_TYPES = (INCOME, EXPENSE)


@dataclass(frozen=True)
class Transaction:
    id: str
    date: datetime   # local wall-clock time, or aware
    amount: float    # always a non-negative magnitude
    type: str        # "income" or "expense"
    category: str
    note: str = ""


@dataclass(frozen=True)
class Bucket:
    key: str
    values: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self):
        # read-only view over a private copy; cached buckets are shared
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def get(self, series: str) -> float:
        return self.values.get(series, 0)

    def total(self) -> float:
        return sum(self.values.values())


class IntensityLevel(IntEnum):
    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4


# Heatmap cells: leading blanks are their own type so they can never be
# mistaken for a zero-spend day.
@dataclass(frozen=True)
class Pad:
    pass


@dataclass(frozen=True)
class Day:
    date: str        # DateKey, "YYYY-MM-DD"
    amount: float
    level: IntensityLevel = IntensityLevel.NONE


CalendarCell = Union[Pad, Day]


@dataclass(frozen=True)
class Slice:
    key: str         # bucket key, or the label id for synthetic slices
    name: str
    value: float
    color: str
    synthetic: bool = False

from typing import Callable, Iterable, Mapping, Optional, Sequence

from chartdata.config import LABEL_OVERSPEND, LABEL_REMAINING
from chartdata.domain import EXPENSE, INCOME, Bucket, Slice


def _bucket_value(bucket: Bucket, series: Optional[str]) -> float:
    return bucket.get(series) if series is not None else bucket.total()


def pie_dataset(
    buckets: Iterable[Bucket],
    palette: Sequence[str],
    series: Optional[str] = None,
) -> tuple[Slice, ...]:
    """One slice per bucket; colors cycle through ``palette`` by position."""
    if not palette:
        raise ValueError("palette must contain at least one color")
    return tuple(
        Slice(key=b.key, name=b.key, value=_bucket_value(b, series), color=palette[i % len(palette)])
        for i, b in enumerate(buckets)
    )


def remainder_slice(
    remaining: float,
    translate: Callable[[str], str],
    leftover_color: str,
    overspend_color: str,
) -> Optional[Slice]:
    if remaining > 0:
        label_id, color = LABEL_REMAINING, leftover_color
    elif remaining < 0:
        label_id, color = LABEL_OVERSPEND, overspend_color
    else:
        return None
    return Slice(key=label_id, name=translate(label_id), value=abs(remaining), color=color, synthetic=True)


def overview_dataset(
    buckets: Iterable[Bucket],
    palette: Sequence[str],
    remaining: float,
    translate: Callable[[str], str],
    leftover_color: str,
    overspend_color: str,
    series: Optional[str] = None,
) -> tuple[Slice, ...]:
    """Pie slices plus a fixed-color slice for what is left over (or overspent)."""
    slices = pie_dataset(buckets, palette, series)
    extra = remainder_slice(remaining, translate, leftover_color, overspend_color)
    return slices + (extra,) if extra is not None else slices


def time_series_dataset(
    buckets: Iterable[Bucket],
    series_names: Optional[Sequence[str]] = None,
    key_field: str = "date",
) -> tuple[dict[str, object], ...]:
    buckets = tuple(buckets)
    if series_names is None:
        names: list[str] = []
        for b in buckets:
            names.extend(n for n in b.values if n not in names)
        series_names = names
    if key_field in series_names:
        raise ValueError(f"series name {key_field!r} clashes with the record key field")

    records = []
    for b in buckets:
        record: dict[str, object] = {key_field: b.key}
        for name in series_names:
            record[name] = b.get(name)
        records.append(record)
    return tuple(records)


def series_colors(
    series_names: Sequence[str],
    palette: Sequence[str],
    fixed: Optional[Mapping[str, str]] = None,
) -> dict[str, str]:
    """Fixed colors where given, otherwise cycle through ``palette`` by position."""
    if not palette:
        raise ValueError("palette must contain at least one color")
    fixed = fixed or {}
    return {
        name: fixed.get(name, palette[i % len(palette)])
        for i, name in enumerate(series_names)
    }


def flow_colors(income_color: str, expense_color: str) -> dict[str, str]:
    return {INCOME: income_color, EXPENSE: expense_color}

import calendar
import json
import os
from dataclasses import dataclass, field, fields, replace
from typing import Callable, Mapping, Optional

CONFIG_ENV_VAR = "CHARTDATA_CONFIG"

LABEL_REMAINING = "remaining"
LABEL_OVERSPEND = "overspend"

DEFAULT_LABELS = {
    LABEL_REMAINING: "Remaining",
    LABEL_OVERSPEND: "Extra Expense",
}


@dataclass(frozen=True)
class ChartConfig:
    palette: tuple[str, ...] = (
        "#0072d6", "#ff9500", "#af52de", "#ff2d55",
        "#5ac8fa", "#ffcc00", "#5856d6", "#a2845e",
    )
    # custom trend series (one line per category)
    line_palette: tuple[str, ...] = ("#ff3b30", "#0072d6", "#ff9500", "#75d9ff")
    income_color: str = "#32d74b"
    expense_color: str = "#ff3b30"
    leftover_color: str = "#32d74b"
    overspend_color: str = "#ff3b30"
    first_weekday: int = calendar.SUNDAY
    # indexed by IntensityLevel: none, low, medium, high, critical
    level_colors: tuple[str, ...] = ("#f3f4f6", "#fecaca", "#f87171", "#ef4444", "#dc2626")
    dark_level_colors: tuple[str, ...] = ("#1f2937", "#7f1d1d", "#b91c1c", "#dc2626", "#ef4444")
    labels: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_LABELS))

    def __post_init__(self):
        if not self.palette:
            raise ValueError("palette must contain at least one color")
        if len(self.level_colors) != 5 or len(self.dark_level_colors) != 5:
            raise ValueError("level colors need exactly 5 entries (none, low, medium, high, critical)")
        if not 0 <= self.first_weekday <= 6:
            raise ValueError(f"first_weekday must be 0..6, got {self.first_weekday}")


_TUPLE_FIELDS = ("palette", "line_palette", "level_colors", "dark_level_colors")


def config_from_dict(data: Mapping) -> ChartConfig:
    known = {f.name for f in fields(ChartConfig)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"unknown config keys: {sorted(unknown)}")

    overrides = dict(data)
    for name in _TUPLE_FIELDS:
        if name in overrides:
            overrides[name] = tuple(overrides[name])
    if "labels" in overrides:
        overrides["labels"] = {**DEFAULT_LABELS, **overrides["labels"]}
    return replace(ChartConfig(), **overrides)


def load_config(path: Optional[str] = None) -> ChartConfig:
    """Read a JSON config from ``path``, else ``$CHARTDATA_CONFIG``, else defaults."""
    path = path or os.getenv(CONFIG_ENV_VAR)
    if not path:
        return ChartConfig()

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"invalid config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"config file {path} must hold a JSON object")
    return config_from_dict(data)


def make_translator(labels: Mapping[str, str]) -> Callable[[str], str]:
    table: dict[str, str] = dict(labels)

    def translate(label_id: str) -> str:
        return table.get(label_id, label_id)

    return translate

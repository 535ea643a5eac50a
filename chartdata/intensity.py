from typing import Iterable, Optional

from chartdata.config import ChartConfig
from chartdata.domain import IntensityLevel

# upper bounds (exclusive) of amount / max for LOW, MEDIUM, HIGH
THRESHOLDS = (
    (0.2, IntensityLevel.LOW),
    (0.5, IntensityLevel.MEDIUM),
    (0.8, IntensityLevel.HIGH),
)


def max_amount(values: Iterable[float]) -> float:
    """Largest observed amount, never below 1."""
    return max([1, *values])


def classify(amount: float, max_amount: float) -> IntensityLevel:
    if amount == 0:
        return IntensityLevel.NONE
    intensity = amount / max(max_amount, 1)
    for bound, level in THRESHOLDS:
        if intensity < bound:
            return level
    return IntensityLevel.CRITICAL


def level_color(level: IntensityLevel, dark: bool = False, config: Optional[ChartConfig] = None) -> str:
    config = config or ChartConfig()
    colors = config.dark_level_colors if dark else config.level_colors
    return colors[int(level)]

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Any

import numpy as np

from sparkline_view.errors import InvalidInputError
from sparkline_view.primitives import Rect
from sparkline_view.series import normalize_series


FLAT_SPAN_MIN = 1.0
FLAT_SPAN_RATIO = 0.01


@dataclass(frozen=True)
class AxisScale:
    axis_min: float
    axis_max: float

    def __post_init__(self) -> None:
        if not (self.axis_max > self.axis_min):
            raise ValueError("axis_max must be > axis_min")
        if not math.isfinite(self.axis_max - self.axis_min):
            raise ValueError("axis span must be finite")

    @property
    def span(self) -> float:
        return self.axis_max - self.axis_min

    def value_to_fraction(self, value: float) -> float:
        return (float(value) - self.axis_min) / self.span


def data_extent(series: np.ndarray) -> tuple[float, float] | None:
    if series.size == 0:
        return None
    return (float(np.min(series)), float(np.max(series)))


def resolve_scale(series: Any, lower_limit: float | None = None, upper_limit: float | None = None) -> AxisScale:
    """Vertical axis bounds covering every sample and every forced limit.

    Forced limits only ever widen the auto-scaled extent. A zero-width extent
    is widened symmetrically so the flat line sits mid-plot.
    """

    values = normalize_series(series)
    lower = _checked_limit(lower_limit, "lower_limit")
    upper = _checked_limit(upper_limit, "upper_limit")
    if lower is not None and upper is not None and lower > upper:
        raise InvalidInputError(f"lower limit {lower} is above upper limit {upper}")

    extent = data_extent(values)
    if extent is None:
        if lower is None and upper is None:
            return AxisScale(0.0, 1.0)
        axis_min = lower if lower is not None else 0.0
        axis_max = upper if upper is not None else 1.0
        if axis_min > axis_max:
            # Only one limit is present here; the absent bound collapses onto it.
            if lower is not None:
                axis_max = lower
            else:
                axis_min = upper  # type: ignore[assignment]
    else:
        axis_min, axis_max = extent
        if lower is not None:
            axis_min = min(axis_min, lower)
        if upper is not None:
            axis_max = max(axis_max, upper)

    if axis_min == axis_max:
        delta = max(FLAT_SPAN_MIN, abs(axis_min) * FLAT_SPAN_RATIO)
        axis_min -= delta
        axis_max += delta
    if not math.isfinite(axis_max - axis_min):
        raise InvalidInputError(f"series range [{axis_min!r}, {axis_max!r}] is too wide to scale")
    return AxisScale(axis_min=float(axis_min), axis_max=float(axis_max))


def sample_x_positions(count: int, plot_rect: Rect) -> np.ndarray:
    if count <= 0:
        return np.empty(0, dtype=np.float64)
    if count == 1:
        return np.asarray([plot_rect.center.x], dtype=np.float64)
    return plot_rect.left + np.arange(count, dtype=np.float64) / float(count - 1) * plot_rect.width


def map_values_to_y(values: np.ndarray, scale: AxisScale, plot_rect: Rect) -> np.ndarray:
    fractions = (np.asarray(values, dtype=np.float64) - scale.axis_min) / scale.span
    return plot_rect.bottom - fractions * plot_rect.height


def _checked_limit(value: float | None, name: str) -> float | None:
    if value is None:
        return None
    out = float(value)
    if not math.isfinite(out):
        raise InvalidInputError(f"{name} must be finite")
    return out

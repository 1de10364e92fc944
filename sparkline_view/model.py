from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property

import numpy as np

from sparkline_view.config import SparklineConfig
from sparkline_view.scales import AxisScale, data_extent, resolve_scale


@dataclass(frozen=True, eq=False)
class SparklineModel:
    """One immutable data + configuration snapshot.

    Derived values are memoized on the instance; replacing the model is the
    only way to change them.
    """

    values: np.ndarray
    config: SparklineConfig

    def __post_init__(self) -> None:
        if self.values.ndim != 1 or self.values.flags.writeable:
            raise ValueError("values must be a read-only 1-D array (use normalize_series)")

    @property
    def is_empty(self) -> bool:
        return self.values.size == 0

    @cached_property
    def _extent(self) -> tuple[float, float] | None:
        return data_extent(self.values)

    @property
    def data_minimum(self) -> float | None:
        extent = self._extent
        return None if extent is None else extent[0]

    @property
    def data_maximum(self) -> float | None:
        extent = self._extent
        return None if extent is None else extent[1]

    @property
    def data_current_value(self) -> float | None:
        if self.is_empty:
            return None
        return float(self.values[-1])

    @cached_property
    def axis_scale(self) -> AxisScale:
        return resolve_scale(
            self.values,
            self.config.range_overlay_lower_limit,
            self.config.range_overlay_upper_limit,
        )

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

import numpy as np

from sparkline_view.config import DEFAULT_CONFIG, SparklineConfig, format_current_value
from sparkline_view.geometry import build_geometry, label_command
from sparkline_view.layout import PLOT_MARGIN_PX, LayoutPlan, plan_layout
from sparkline_view.model import SparklineModel
from sparkline_view.primitives import Rect
from sparkline_view.renderer import (
    DrawCommand,
    DrawPlan,
    FontSpec,
    PopClip,
    PushClip,
    SparklineRenderer,
    TextMeasurer,
    execute_plan,
)
from sparkline_view.scales import AxisScale
from sparkline_view.series import normalize_series


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderResult:
    plan: DrawPlan
    layout: LayoutPlan
    scale: AxisScale
    data_minimum: float | None
    data_maximum: float | None
    data_current_value: float | None


class SparklineLayoutEngine:
    """Owns a sparkline's series and settings and turns them into draw plans.

    Every setter swaps in a new immutable `SparklineModel`, so derived values
    (minimum, maximum, current value, axis scale) are recomputed on demand.
    """

    def __init__(
        self,
        values: Any = (),
        *,
        label: str | None = None,
        config: SparklineConfig | None = None,
    ) -> None:
        base = config if config is not None else DEFAULT_CONFIG
        if label is not None:
            base = base.with_overrides(label_text=label)
        self._model = _checked_model(normalize_series(values), base)

    @property
    def model(self) -> SparklineModel:
        return self._model

    @property
    def values(self) -> np.ndarray:
        return self._model.values

    @property
    def config(self) -> SparklineConfig:
        return self._model.config

    def set_values(self, values: Any) -> None:
        self._model = _checked_model(normalize_series(values), self._model.config)

    def set_config(self, config: SparklineConfig) -> None:
        if not isinstance(config, SparklineConfig):
            raise TypeError("config must be a SparklineConfig")
        self._model = _checked_model(self._model.values, config)

    def configure(self, **overrides: Any) -> SparklineConfig:
        config = self._model.config.with_overrides(**overrides)
        self.set_config(config)
        return config

    @property
    def data_minimum(self) -> float | None:
        return self._model.data_minimum

    @property
    def data_maximum(self) -> float | None:
        return self._model.data_maximum

    @property
    def data_current_value(self) -> float | None:
        return self._model.data_current_value

    def axis_scale(self) -> AxisScale:
        return self._model.axis_scale

    def layout_pass(self, rect: Rect, font: FontSpec, measurer: TextMeasurer) -> RenderResult:
        model = self._model
        config = model.config
        layout = plan_layout(rect, config.label_text, font, measurer, margin=_plot_margin(config))
        scale = model.axis_scale

        commands: list[DrawCommand] = []
        label = label_command(layout, config.label_color)
        if label is not None:
            commands.append(label)
        plot_commands = build_geometry(model.values, scale, layout.plot_rect, config, font, measurer)
        if len(plot_commands):
            commands.append(PushClip(layout.plot_area))
            commands.extend(plot_commands)
            commands.append(PopClip())
        plan = DrawPlan(tuple(commands))

        LOGGER.debug(
            "sparkline pass: %d samples, axis=[%g, %g], %d commands",
            model.values.size,
            scale.axis_min,
            scale.axis_max,
            len(plan),
        )
        return RenderResult(
            plan=plan,
            layout=layout,
            scale=scale,
            data_minimum=model.data_minimum,
            data_maximum=model.data_maximum,
            data_current_value=model.data_current_value,
        )

    def plan(self, rect: Rect, font: FontSpec, measurer: TextMeasurer) -> DrawPlan:
        return self.layout_pass(rect, font, measurer).plan

    def render(self, rect: Rect, font: FontSpec, renderer: SparklineRenderer) -> RenderResult:
        result = self.layout_pass(rect, font, renderer)
        execute_plan(result.plan, renderer)
        return result

    def accessibility_label(self) -> str:
        config = self._model.config
        name = config.label_text or "Sparkline"
        current = self._model.data_current_value
        if current is None:
            return f"{name}, no data"
        fmt = config.current_value_format
        latest = format_current_value(fmt, current)
        low = format_current_value(fmt, self._model.data_minimum)  # type: ignore[arg-type]
        high = format_current_value(fmt, self._model.data_maximum)  # type: ignore[arg-type]
        return f"{name}, latest {latest}, range {low} to {high}"


def _plot_margin(config: SparklineConfig) -> float:
    margin = max(PLOT_MARGIN_PX, config.pen_width * 0.5 + 1.0)
    if config.show_current_value:
        margin = max(margin, config.marker_radius + 1.0)
    return margin


def _checked_model(values: np.ndarray, config: SparklineConfig) -> SparklineModel:
    model = SparklineModel(values=values, config=config)
    # Unscalable input fails here, before it replaces the current model.
    model.axis_scale
    return model

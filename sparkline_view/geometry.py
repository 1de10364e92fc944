from __future__ import annotations

import numpy as np

from sparkline_view.config import RGBA, SparklineConfig, format_current_value
from sparkline_view.layout import LayoutPlan
from sparkline_view.primitives import Point, Rect
from sparkline_view.renderer import (
    DrawCommand,
    DrawPlan,
    DrawText,
    FillDisc,
    FillRect,
    FontSpec,
    StrokePolyline,
    TextMeasurer,
)
from sparkline_view.scales import AxisScale, map_values_to_y, sample_x_positions


VALUE_TEXT_GAP_PX = 2.0


def map_series(series: np.ndarray, scale: AxisScale, plot_rect: Rect) -> tuple[Point, ...]:
    xs = sample_x_positions(series.size, plot_rect)
    ys = map_values_to_y(series, scale, plot_rect)
    return tuple(Point(float(x), float(y)) for x, y in zip(xs.tolist(), ys.tolist(), strict=True))


def build_geometry(
    series: np.ndarray,
    scale: AxisScale,
    plot_rect: Rect,
    config: SparklineConfig,
    font: FontSpec,
    measurer: TextMeasurer,
) -> DrawPlan:
    """Plot-region commands in paint order: band, polyline, marker, readout.

    Range overlay limits come from `config`; an absent limit extends the band
    to that edge of `plot_rect`. Nothing is emitted for an empty series.
    """

    if series.size == 0:
        return DrawPlan()

    points = map_series(series, scale, plot_rect)
    commands: list[DrawCommand] = []

    if config.show_range_overlay:
        commands.append(FillRect(_overlay_band(scale, plot_rect, config), config.range_overlay_color))

    if len(points) >= 2:
        commands.append(StrokePolyline(points=points, color=config.pen_color, width=config.pen_width))

    if config.show_current_value:
        marker = points[-1]
        commands.append(FillDisc(center=marker, radius=config.marker_radius, color=config.current_value_color))
        text = format_current_value(config.current_value_format, float(series[-1]))
        origin = _readout_origin(text, marker, config.marker_radius, plot_rect, font, measurer)
        commands.append(DrawText(text=text, origin=origin, font=font, color=config.current_value_color))

    return DrawPlan(tuple(commands))


def label_command(layout: LayoutPlan, color: RGBA) -> DrawText | None:
    if layout.label_text is None:
        return None
    rect = layout.label_rect
    y = max(rect.y, rect.y + (rect.height - layout.font.size_px) * 0.5)
    return DrawText(text=layout.label_text, origin=Point(rect.x, y), font=layout.font, color=color)


def _overlay_band(scale: AxisScale, plot_rect: Rect, config: SparklineConfig) -> Rect:
    upper = config.range_overlay_upper_limit
    lower = config.range_overlay_lower_limit
    top = plot_rect.top
    bottom = plot_rect.bottom
    if upper is not None:
        top = float(map_values_to_y(np.asarray([upper]), scale, plot_rect)[0])
    if lower is not None:
        bottom = float(map_values_to_y(np.asarray([lower]), scale, plot_rect)[0])
    return Rect(plot_rect.left, top, plot_rect.width, max(0.0, bottom - top))


def _readout_origin(
    text: str,
    marker: Point,
    radius: float,
    plot_rect: Rect,
    font: FontSpec,
    measurer: TextMeasurer,
) -> Point:
    width = measurer.measure_text(text, font)
    x = marker.x + radius + VALUE_TEXT_GAP_PX
    if x + width > plot_rect.right:
        # Flip to the marker's left.
        x = marker.x - radius - VALUE_TEXT_GAP_PX - width
    x = max(plot_rect.left, x)
    y = marker.y - font.size_px * 0.5
    y = max(plot_rect.top, min(y, plot_rect.bottom - font.size_px))
    return Point(x, y)

from __future__ import annotations

import unittest

import numpy as np

from sparkline_view import DrawText, FillDisc, FillRect, FontSpec, Point, Rect, SparklineConfig, StrokePolyline, build_geometry, plan_layout
from sparkline_view.geometry import label_command
from sparkline_view.scales import resolve_scale
from sparkline_view.series import normalize_series


class _HalfEmMeasurer:
    def measure_text(self, text: str, font: FontSpec) -> float:
        return len(text) * font.size_px * 0.5


PLOT = Rect(10.0, 5.0, 100.0, 40.0)


def _build(values, config: SparklineConfig | None = None):
    series = normalize_series(values)
    config = config or SparklineConfig()
    scale = resolve_scale(series, config.range_overlay_lower_limit, config.range_overlay_upper_limit)
    return build_geometry(series, scale, PLOT, config, FontSpec(), _HalfEmMeasurer())


class GeometryBuilderTests(unittest.TestCase):
    def test_polyline_has_one_point_per_sample_with_increasing_x(self) -> None:
        plan = _build([4.0, 1.0, 9.0, 2.0, 2.0, 7.0])
        (line,) = plan.of_type(StrokePolyline)
        xs = [p.x for p in line.points]
        self.assertEqual(len(line.points), 6)
        self.assertTrue(all(b > a for a, b in zip(xs, xs[1:])))
        self.assertEqual(xs[0], PLOT.left)
        self.assertEqual(xs[-1], PLOT.right)

    def test_mid_scale_value_maps_to_vertical_centre(self) -> None:
        plan = _build([1, 2, 3, 2, 1])
        (line,) = plan.of_type(StrokePolyline)
        self.assertEqual(line.points[-1].y, PLOT.bottom)
        self.assertEqual(line.points[2].y, PLOT.top)
        self.assertEqual(line.points[1].y, PLOT.center.y)

    def test_empty_series_emits_nothing(self) -> None:
        plan = _build([], SparklineConfig(show_range_overlay=True))
        self.assertEqual(len(plan), 0)

    def test_single_sample_is_marker_only(self) -> None:
        plan = _build([10.0], SparklineConfig(current_value_format="%.1f"))
        self.assertEqual(plan.of_type(StrokePolyline), [])
        (disc,) = plan.of_type(FillDisc)
        self.assertEqual(disc.center.x, PLOT.center.x)
        self.assertEqual(disc.center.y, PLOT.center.y)
        (text,) = plan.of_type(DrawText)
        self.assertEqual(text.text, "10.0")

    def test_commands_are_layered_band_line_marker_text(self) -> None:
        plan = _build([1.0, 3.0, 2.0], SparklineConfig(show_range_overlay=True))
        self.assertEqual(
            [type(cmd) for cmd in plan],
            [FillRect, StrokePolyline, FillDisc, DrawText],
        )

    def test_flat_series_with_limits_draws_band_over_full_plot(self) -> None:
        config = SparklineConfig(
            show_range_overlay=True,
            range_overlay_lower_limit=0.0,
            range_overlay_upper_limit=10.0,
        )
        plan = _build([5, 5, 5], config)
        (band,) = plan.of_type(FillRect)
        self.assertEqual(band.rect, PLOT)
        self.assertEqual(band.color, config.range_overlay_color)
        (line,) = plan.of_type(StrokePolyline)
        self.assertEqual({p.y for p in line.points}, {PLOT.center.y})

    def test_band_follows_limits_and_open_sides_reach_plot_edges(self) -> None:
        config = SparklineConfig(show_range_overlay=True, range_overlay_lower_limit=2.5)
        plan = _build([0.0, 10.0], config)
        (band,) = plan.of_type(FillRect)
        self.assertEqual(band.rect.top, PLOT.top)
        self.assertEqual(band.rect.bottom, PLOT.bottom - 0.25 * PLOT.height)
        self.assertEqual((band.rect.left, band.rect.width), (PLOT.left, PLOT.width))

    def test_overlay_hidden_when_disabled(self) -> None:
        plan = _build([1.0, 2.0], SparklineConfig(range_overlay_lower_limit=0.0))
        self.assertEqual(plan.of_type(FillRect), [])

    def test_current_value_can_be_turned_off(self) -> None:
        plan = _build([1.0, 2.0], SparklineConfig(show_current_value=False))
        self.assertEqual(plan.of_type(FillDisc), [])
        self.assertEqual(plan.of_type(DrawText), [])

    def test_readout_is_kept_inside_right_edge(self) -> None:
        plan = _build([1.0, 2.0, 3.0], SparklineConfig(current_value_format="%.3f"))
        (text,) = plan.of_type(DrawText)
        width = _HalfEmMeasurer().measure_text(text.text, text.font)
        self.assertEqual(text.text, "3.000")
        self.assertLessEqual(text.origin.x + width, PLOT.right)
        self.assertGreaterEqual(text.origin.x, PLOT.left)
        self.assertGreaterEqual(text.origin.y, PLOT.top)

    def test_pen_settings_reach_polyline(self) -> None:
        plan = _build([1.0, 2.0], SparklineConfig(pen_color="#FF0000", pen_width=2.5))
        (line,) = plan.of_type(StrokePolyline)
        self.assertEqual(line.color, (255, 0, 0, 255))
        self.assertEqual(line.width, 2.5)

    def test_geometry_is_deterministic(self) -> None:
        values = np.linspace(-3.0, 3.0, 17) ** 2
        self.assertEqual(_build(values), _build(values))


class LabelCommandTests(unittest.TestCase):
    def test_label_is_vertically_centred_in_its_column(self) -> None:
        layout = plan_layout(Rect(0.0, 0.0, 240.0, 32.0), "CPU", FontSpec(), _HalfEmMeasurer())
        command = label_command(layout, (0, 0, 0, 255))
        self.assertEqual(command.origin, Point(0.0, 10.0))

    def test_label_never_starts_above_a_short_rect(self) -> None:
        layout = plan_layout(Rect(5.0, 20.0, 240.0, 6.0), "CPU", FontSpec(), _HalfEmMeasurer())
        command = label_command(layout, (0, 0, 0, 255))
        self.assertEqual(command.origin.y, 20.0)
        self.assertEqual(command.origin.x, 5.0)

    def test_absent_label_emits_nothing(self) -> None:
        layout = plan_layout(Rect(0.0, 0.0, 240.0, 32.0), None, FontSpec(), _HalfEmMeasurer())
        self.assertIsNone(label_command(layout, (0, 0, 0, 255)))


if __name__ == "__main__":
    unittest.main()

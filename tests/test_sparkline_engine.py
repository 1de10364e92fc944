from __future__ import annotations

import math
import unittest

import numpy as np

from sparkline_view import (
    DrawText,
    FillDisc,
    FillRect,
    FontSpec,
    InvalidInputError,
    PopClip,
    PushClip,
    Rect,
    SparklineConfig,
    SparklineLayoutEngine,
    StrokePolyline,
)


class _RecordingRenderer:
    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.measured: list[str] = []

    def measure_text(self, text: str, font: FontSpec) -> float:
        self.measured.append(text)
        return len(text) * font.size_px * 0.5

    def draw_text(self, text, origin, font, color) -> None:
        self.calls.append(("draw_text", text))

    def stroke_polyline(self, points, color, width) -> None:
        self.calls.append(("stroke_polyline", len(points)))

    def fill_rect(self, rect, color) -> None:
        self.calls.append(("fill_rect", rect))

    def fill_disc(self, center, radius, color) -> None:
        self.calls.append(("fill_disc", center))

    def push_clip(self, rect) -> None:
        self.calls.append(("push_clip", rect))

    def pop_clip(self) -> None:
        self.calls.append(("pop_clip",))


RECT = Rect(0.0, 0.0, 240.0, 32.0)


class SparklineLayoutEngineTests(unittest.TestCase):
    def test_empty_series_with_label_draws_only_label(self) -> None:
        engine = SparklineLayoutEngine([], label="CPU")
        renderer = _RecordingRenderer()

        result = engine.render(RECT, FontSpec(), renderer)

        self.assertEqual(renderer.calls, [("draw_text", "CPU")])
        self.assertIsNone(result.data_current_value)
        self.assertIsNone(result.data_minimum)
        self.assertIsNone(result.data_maximum)

    def test_render_issues_commands_in_layer_order(self) -> None:
        engine = SparklineLayoutEngine([1, 2, 3, 2, 1], label="Load")
        engine.configure(show_range_overlay=True)
        renderer = _RecordingRenderer()

        engine.render(RECT, FontSpec(), renderer)

        self.assertEqual(
            [call[0] for call in renderer.calls],
            ["draw_text", "push_clip", "fill_rect", "stroke_polyline", "fill_disc", "draw_text", "pop_clip"],
        )
        self.assertEqual(renderer.calls[3], ("stroke_polyline", 5))
        self.assertEqual(renderer.calls[5], ("draw_text", "1.0"))

    def test_plan_clips_plot_commands_to_plot_area(self) -> None:
        engine = SparklineLayoutEngine([3.0, 4.0], label="Mem")
        result = engine.layout_pass(RECT, FontSpec(), _RecordingRenderer())

        clip = result.plan.of_type(PushClip)[0]
        self.assertEqual(clip.rect, result.layout.plot_area)
        self.assertIsInstance(result.plan.commands[-1], PopClip)
        self.assertFalse(result.layout.label_rect.overlaps(result.layout.plot_area))

    def test_derived_values_follow_latest_series(self) -> None:
        engine = SparklineLayoutEngine([4.0, -2.0, 9.5, 3.0])
        self.assertEqual(engine.data_minimum, -2.0)
        self.assertEqual(engine.data_maximum, 9.5)
        self.assertEqual(engine.data_current_value, 3.0)

        engine.set_values([7.0])
        self.assertEqual(engine.data_minimum, 7.0)
        self.assertEqual(engine.data_maximum, 7.0)
        self.assertEqual(engine.data_current_value, 7.0)

    def test_derived_minimum_ignores_forced_limits(self) -> None:
        engine = SparklineLayoutEngine([5, 5, 5])
        engine.configure(range_overlay_lower_limit=0.0, range_overlay_upper_limit=10.0, show_range_overlay=True)

        self.assertEqual(engine.data_minimum, 5.0)
        scale = engine.axis_scale()
        self.assertEqual((scale.axis_min, scale.axis_max), (0.0, 10.0))

    def test_flat_series_with_limits_draws_line_at_mid_band(self) -> None:
        engine = SparklineLayoutEngine(
            [5, 5, 5],
            config=SparklineConfig(show_range_overlay=True, range_overlay_lower_limit=0, range_overlay_upper_limit=10),
        )
        result = engine.layout_pass(RECT, FontSpec(), _RecordingRenderer())

        plot = result.layout.plot_rect
        (band,) = result.plan.of_type(FillRect)
        (line,) = result.plan.of_type(StrokePolyline)
        self.assertEqual(band.rect, plot)
        self.assertEqual({p.y for p in line.points}, {plot.center.y})

    def test_single_sample_shows_marker_and_formatted_value(self) -> None:
        engine = SparklineLayoutEngine([10], config=SparklineConfig(current_value_format="%.1f"))
        result = engine.layout_pass(RECT, FontSpec(), _RecordingRenderer())

        (disc,) = result.plan.of_type(FillDisc)
        self.assertEqual(disc.center, result.layout.plot_rect.center)
        texts = [cmd.text for cmd in result.plan.of_type(DrawText)]
        self.assertEqual(texts, ["10.0"])

    def test_caller_mutation_after_set_is_not_observed(self) -> None:
        values = [1.0, 2.0, 3.0]
        engine = SparklineLayoutEngine(values)
        values.append(100.0)
        values[0] = -50.0

        self.assertEqual(engine.values.tolist(), [1.0, 2.0, 3.0])
        self.assertEqual(engine.data_maximum, 3.0)

        arr = np.asarray([1.0, 2.0])
        engine.set_values(arr)
        arr[1] = 42.0
        self.assertEqual(engine.data_current_value, 2.0)

    def test_stored_values_are_read_only(self) -> None:
        engine = SparklineLayoutEngine([1.0, 2.0])
        with self.assertRaises(ValueError):
            engine.values[0] = 5.0

    def test_derived_values_are_memoized_per_model(self) -> None:
        engine = SparklineLayoutEngine([1.0, 2.0])
        model = engine.model
        self.assertIs(model.axis_scale, model.axis_scale)
        engine.configure(pen_width=2.0)
        self.assertIsNot(engine.model, model)

    def test_non_finite_samples_are_rejected(self) -> None:
        with self.assertRaises(InvalidInputError):
            SparklineLayoutEngine([1.0, math.nan])
        engine = SparklineLayoutEngine([1.0])
        with self.assertRaises(InvalidInputError):
            engine.set_values([math.inf])
        self.assertEqual(engine.values.tolist(), [1.0])

    def test_unscalable_series_is_rejected_and_previous_values_kept(self) -> None:
        engine = SparklineLayoutEngine([1.0, 2.0])
        with self.assertRaises(InvalidInputError):
            engine.set_values([-1e308, 0.0, 1e308])
        with self.assertRaises(InvalidInputError):
            engine.set_values([1, 10**400])
        self.assertEqual(engine.values.tolist(), [1.0, 2.0])
        with self.assertRaises(InvalidInputError):
            SparklineLayoutEngine([-1e308, 0.0, 1e308])

    def test_inverted_limits_are_rejected(self) -> None:
        engine = SparklineLayoutEngine([1.0])
        engine.configure(range_overlay_upper_limit=2.0)
        with self.assertRaisesRegex(InvalidInputError, "above upper"):
            engine.configure(range_overlay_lower_limit=3.0)

    def test_renderer_failures_propagate(self) -> None:
        class _FailingRenderer(_RecordingRenderer):
            def stroke_polyline(self, points, color, width) -> None:
                raise RuntimeError("surface lost")

        engine = SparklineLayoutEngine([1.0, 2.0])
        with self.assertRaisesRegex(RuntimeError, "surface lost"):
            engine.render(RECT, FontSpec(), _FailingRenderer())

    def test_accessibility_label(self) -> None:
        engine = SparklineLayoutEngine([], label="CPU")
        self.assertEqual(engine.accessibility_label(), "CPU, no data")
        engine.set_values([12.0, 1.0, 10.0])
        self.assertEqual(engine.accessibility_label(), "CPU, latest 10.0, range 1.0 to 12.0")

    def test_render_is_repeatable(self) -> None:
        engine = SparklineLayoutEngine([3.0, 1.0, 4.0, 1.0, 5.0], label="Pi")
        first = engine.plan(RECT, FontSpec(), _RecordingRenderer())
        second = engine.plan(RECT, FontSpec(), _RecordingRenderer())
        self.assertEqual(first, second)


if __name__ == "__main__":
    unittest.main()

from __future__ import annotations

from dataclasses import dataclass
import logging

from sparkline_view.primitives import Rect
from sparkline_view.renderer import FontSpec, TextMeasurer


LOGGER = logging.getLogger(__name__)

MAX_LABEL_FRACTION = 0.5
LABEL_PADDING_PX = 4.0
PLOT_MARGIN_PX = 3.0
ELLIPSIS = "…"


@dataclass(frozen=True)
class LayoutPlan:
    label_rect: Rect
    plot_area: Rect
    plot_rect: Rect
    label_text: str | None
    font: FontSpec
    label_truncated: bool = False


def plan_layout(
    rect: Rect,
    label_text: str | None,
    font: FontSpec,
    measurer: TextMeasurer,
    *,
    margin: float = PLOT_MARGIN_PX,
    padding: float = LABEL_PADDING_PX,
) -> LayoutPlan:
    """Split `rect` into a label column on the left and an inset plot region.

    The label never takes more than half of the width. A label that does not
    fit first shrinks toward `font.min_size_px`; at that floor it is clipped on
    the right with an ellipsis. `plot_area` is everything right of the label
    (used as the clip region); `plot_rect` is that area inset by `margin` so
    strokes and markers at the data extremes stay visible.
    """

    if not label_text:
        return LayoutPlan(
            label_rect=Rect(rect.x, rect.y, 0.0, rect.height),
            plot_area=rect,
            plot_rect=rect.inset(margin, margin),
            label_text=None,
            font=font,
        )

    max_label_w = rect.width * MAX_LABEL_FRACTION
    max_text_w = max(0.0, max_label_w - padding)
    text, used_font, text_w = _fit_label(label_text, font, max_text_w, measurer)
    truncated = text != label_text
    if truncated:
        LOGGER.debug("label %r truncated to %r at %.1fpx", label_text, text, used_font.size_px)

    label_w = min(text_w + padding, max_label_w) if text else 0.0
    label_rect = Rect(rect.x, rect.y, label_w, rect.height)
    plot_area = Rect(rect.x + label_w, rect.y, max(0.0, rect.width - label_w), rect.height)
    return LayoutPlan(
        label_rect=label_rect,
        plot_area=plot_area,
        plot_rect=plot_area.inset(margin, margin),
        label_text=text or None,
        font=used_font,
        label_truncated=truncated,
    )


def _fit_label(text: str, font: FontSpec, max_w: float, measurer: TextMeasurer) -> tuple[str, FontSpec, float]:
    width = measurer.measure_text(text, font)
    if width <= max_w:
        return text, font, width

    if font.min_size_px < font.size_px:
        # Glyph advance scales roughly linearly with size, so aim straight at the fit.
        target = max(font.min_size_px, font.size_px * max_w / width)
        candidate = font.with_size(target)
        width = measurer.measure_text(text, candidate)
        if width <= max_w:
            return text, candidate, width
        if target > font.min_size_px:
            candidate = font.with_size(font.min_size_px)
            width = measurer.measure_text(text, candidate)
            if width <= max_w:
                return text, candidate, width
        font = candidate

    return _truncate(text, font, max_w, measurer)


def _truncate(text: str, font: FontSpec, max_w: float, measurer: TextMeasurer) -> tuple[str, FontSpec, float]:
    ellipsis_w = measurer.measure_text(ELLIPSIS, font)
    if ellipsis_w > max_w:
        return "", font, 0.0

    best = ELLIPSIS
    best_w = ellipsis_w
    lo, hi = 1, len(text) - 1
    while lo <= hi:
        mid = (lo + hi) // 2
        candidate = text[:mid].rstrip() + ELLIPSIS
        w = measurer.measure_text(candidate, font)
        if w <= max_w:
            best, best_w = candidate, w
            lo = mid + 1
        else:
            hi = mid - 1
    return best, font, best_w

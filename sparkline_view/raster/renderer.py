from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from PIL import Image

from sparkline_view.config import RGBA
from sparkline_view.primitives import Point, Rect
from sparkline_view.raster.canvas import fill_block, new_canvas
from sparkline_view.raster.draw_lines import draw_polyline
from sparkline_view.raster.draw_markers import draw_disc
from sparkline_view.raster.draw_text import draw_text, text_width
from sparkline_view.renderer import FontSpec


TRANSPARENT: RGBA = (255, 255, 255, 0)


class RasterRenderer:
    """`SparklineRenderer` backed by an RGBA uint8 numpy canvas of shape (H, W, 4).

    Clipping draws into a numpy view of the canvas, so every primitive only
    needs to respect its destination array's bounds.
    """

    def __init__(self, width: int, height: int, background: RGBA = TRANSPARENT) -> None:
        self._canvas = new_canvas(width, height, color=background)
        self._clips: list[tuple[int, int, int, int]] = []

    @property
    def width(self) -> int:
        return int(self._canvas.shape[1])

    @property
    def height(self) -> int:
        return int(self._canvas.shape[0])

    @property
    def clip_depth(self) -> int:
        return len(self._clips)

    def measure_text(self, text: str, font: FontSpec) -> float:
        return text_width(text, font_family=font.family, font_size_px=font.size_px)

    def draw_text(self, text: str, origin: Point, font: FontSpec, color: RGBA) -> None:
        dst, ox, oy = self._target()
        draw_text(
            dst,
            int(round(origin.x)) - ox,
            int(round(origin.y)) - oy,
            text,
            color,
            font_family=font.family,
            font_size_px=font.size_px,
        )

    def stroke_polyline(self, points: Sequence[Point], color: RGBA, width: float) -> None:
        if len(points) < 2:
            return
        dst, ox, oy = self._target()
        xs = np.rint(np.asarray([p.x for p in points], dtype=np.float64)).astype(np.int32) - ox
        ys = np.rint(np.asarray([p.y for p in points], dtype=np.float64)).astype(np.int32) - oy
        draw_polyline(dst, xs, ys, color=color, width=max(1, int(round(width))))

    def fill_rect(self, rect: Rect, color: RGBA) -> None:
        if rect.is_empty:
            return
        dst, ox, oy = self._target()
        fill_block(
            dst,
            int(math.floor(rect.left)) - ox,
            int(math.floor(rect.top)) - oy,
            int(math.ceil(rect.right)) - 1 - ox,
            int(math.ceil(rect.bottom)) - 1 - oy,
            color,
        )

    def fill_disc(self, center: Point, radius: float, color: RGBA) -> None:
        dst, ox, oy = self._target()
        draw_disc(dst, center.x - ox, center.y - oy, radius, color)

    def push_clip(self, rect: Rect) -> None:
        x0 = max(0, int(math.floor(rect.left)))
        y0 = max(0, int(math.floor(rect.top)))
        x1 = min(self.width, int(math.ceil(rect.right)))
        y1 = min(self.height, int(math.ceil(rect.bottom)))
        if self._clips:
            px0, py0, px1, py1 = self._clips[-1]
            x0, y0 = max(x0, px0), max(y0, py0)
            x1, y1 = min(x1, px1), min(y1, py1)
        self._clips.append((x0, y0, max(x0, x1), max(y0, y1)))

    def pop_clip(self) -> None:
        if not self._clips:
            raise RuntimeError("pop_clip called with an empty clip stack")
        self._clips.pop()

    def to_rgba(self) -> np.ndarray:
        return self._canvas.copy()

    def to_image(self) -> Image.Image:
        return Image.fromarray(self._canvas)

    def _target(self) -> tuple[np.ndarray, int, int]:
        if not self._clips:
            return self._canvas, 0, 0
        x0, y0, x1, y1 = self._clips[-1]
        return self._canvas[y0:y1, x0:x1], x0, y0

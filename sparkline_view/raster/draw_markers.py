from __future__ import annotations

import numpy as np

from sparkline_view.config import RGBA
from sparkline_view.raster.canvas import draw_pixel


def draw_disc(dst: np.ndarray, cx: float, cy: float, radius: float, color: RGBA) -> None:
    if radius < 0.5:
        draw_pixel(dst, int(round(cx)), int(round(cy)), color)
        return
    r2 = radius * radius
    for yy in range(int(np.floor(cy - radius)), int(np.ceil(cy + radius)) + 1):
        for xx in range(int(np.floor(cx - radius)), int(np.ceil(cx + radius)) + 1):
            if (xx - cx) ** 2 + (yy - cy) ** 2 <= r2:
                draw_pixel(dst, xx, yy, color)

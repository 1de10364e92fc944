from __future__ import annotations

import numpy as np

from sparkline_view.config import RGBA


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 255)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width/height must be > 0")
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :, 0] = color[0]
    canvas[:, :, 1] = color[1]
    canvas[:, :, 2] = color[2]
    canvas[:, :, 3] = color[3]
    return canvas


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0] or x < 0 or x >= dst.shape[1]:
        return
    a = color[3] / 255.0
    inv = 1.0 - a
    current = dst[y, x, :3].astype(np.float32)
    dst[y, x, 0:3] = (np.asarray(color[0:3], dtype=np.float32) * a + current * inv).astype(np.uint8)
    dst[y, x, 3] = max(int(dst[y, x, 3]), color[3])


def fill_block(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    """Blend `color` over the inclusive pixel block [x0, x1] x [y0, y1]."""

    xa = max(0, min(x0, x1))
    xb = min(dst.shape[1] - 1, max(x0, x1))
    ya = max(0, min(y0, y1))
    yb = min(dst.shape[0] - 1, max(y0, y1))
    if xa > xb or ya > yb:
        return
    block = dst[ya : yb + 1, xa : xb + 1]
    a = color[3] / 255.0
    inv = 1.0 - a
    src = np.asarray(color[0:3], dtype=np.float32).reshape(1, 1, 3)
    block[:, :, :3] = (src * a + block[:, :, :3].astype(np.float32) * inv).astype(np.uint8)
    np.maximum(block[:, :, 3], color[3], out=block[:, :, 3])

from __future__ import annotations

from pathlib import Path
from typing import Any

import numpy as np
from PIL import Image

from sparkline_view.config import RGBA, SparklineConfig
from sparkline_view.engine import SparklineLayoutEngine
from sparkline_view.primitives import Rect
from sparkline_view.raster import RasterRenderer
from sparkline_view.raster.renderer import TRANSPARENT
from sparkline_view.renderer import FontSpec


def render_sparkline(
    values: Any,
    width: int,
    height: int,
    *,
    label: str | None = None,
    config: SparklineConfig | None = None,
    font: FontSpec | None = None,
    background: RGBA = TRANSPARENT,
) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("width and height must be > 0")
    engine = SparklineLayoutEngine(values, label=label, config=config)
    renderer = RasterRenderer(width, height, background=background)
    engine.render(Rect(0.0, 0.0, float(width), float(height)), font or FontSpec(), renderer)
    return renderer.to_rgba()


def save_sparkline_png(path: str | Path, values: Any, width: int, height: int, **kwargs: Any) -> Path:
    out = Path(path)
    frame = render_sparkline(values, width, height, **kwargs)
    Image.fromarray(frame).save(out, format="PNG")
    return out

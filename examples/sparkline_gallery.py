from __future__ import annotations

import logging
from pathlib import Path
import sys

import numpy as np

from sparkline_view import SparklineConfig, save_sparkline_png


LOGGER = logging.getLogger(__name__)


def gallery_specs() -> list[tuple[str, np.ndarray, SparklineConfig]]:
    t = np.linspace(0.0, 4.0 * np.pi, 48)
    return [
        ("cpu", 40.0 + 25.0 * np.sin(t) + 5.0 * np.cos(3.0 * t), SparklineConfig(label_text="CPU", current_value_format="%.0f%%")),
        (
            "temperature",
            np.asarray([36.4, 36.6, 36.9, 37.4, 38.1, 37.8, 37.2, 36.8, 36.7]),
            SparklineConfig(
                label_text="Temp",
                show_range_overlay=True,
                range_overlay_lower_limit=36.1,
                range_overlay_upper_limit=37.2,
                current_value_color="#D0312D",
            ),
        ),
        ("flat", np.full(12, 5.0), SparklineConfig(label_text="Queue depth (steady)", pen_width=2.0)),
        ("empty", np.empty(0), SparklineConfig(label_text="No samples yet")),
    ]


def build_gallery(out_dir: Path, *, width: int = 220, height: int = 28) -> list[Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for name, values, config in gallery_specs():
        path = save_sparkline_png(
            out_dir / f"{name}.png",
            values,
            width,
            height,
            config=config,
            background=(255, 255, 255, 255),
        )
        LOGGER.info("wrote %s", path)
        written.append(path)
    return written


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    build_gallery(Path(sys.argv[1]) if len(sys.argv) > 1 else Path("sparkline_gallery"))

from __future__ import annotations

from functools import lru_cache
import logging
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from sparkline_view.config import RGBA


LOGGER = logging.getLogger(__name__)

DEFAULT_FONT_FAMILY = "Helvetica"
DEFAULT_FONT_SIZE_PX = 12.0
SANS_FONT_FALLBACK_PATTERNS = (
    "helvetica",
    "arial",
    "liberationsans",
    "liberation sans",
    "dejavusans",
    "dejavu sans",
)

PILFont = ImageFont.FreeTypeFont | ImageFont.ImageFont


def draw_text(
    dst: np.ndarray,
    x: int,
    y: int,
    text: str,
    color: RGBA,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
) -> None:
    if not text:
        return
    font = load_font(font_family=font_family, font_size_px=font_size_px)
    mask = _render_mask(text=text, font=font)
    _blend_mask(dst, x, y, mask, color)


def text_width(
    text: str,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
) -> float:
    """Horizontal advance of `text`, which is what layout budgets against."""

    if not text:
        return 0.0
    font = load_font(font_family=font_family, font_size_px=font_size_px)
    return float(font.getlength(text))


def _blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA) -> None:
    h, w = mask.shape
    if h <= 0 or w <= 0:
        return

    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + w)
    y1 = min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return

    sx0 = x0 - x
    sy0 = y0 - y
    cov = mask[sy0 : sy0 + (y1 - y0), sx0 : sx0 + (x1 - x0)].astype(np.float32) / 255.0
    src_alpha = (color[3] / 255.0) * cov
    if not np.any(src_alpha > 0):
        return

    patch = dst[y0:y1, x0:x1]
    dst_rgb = patch[:, :, :3].astype(np.float32)
    dst_alpha = patch[:, :, 3].astype(np.float32) / 255.0
    src_rgb = np.asarray(color[:3], dtype=np.float32).reshape(1, 1, 3)
    out_alpha = src_alpha + dst_alpha * (1.0 - src_alpha)
    out_rgb_num = src_rgb * src_alpha[:, :, None] + dst_rgb * dst_alpha[:, :, None] * (1.0 - src_alpha[:, :, None])
    safe_alpha = np.where(out_alpha > 1e-6, out_alpha, 1.0)
    out_rgb = out_rgb_num / safe_alpha[:, :, None]

    patch[:, :, :3] = np.clip(out_rgb, 0, 255).astype(np.uint8)
    patch[:, :, 3] = np.clip(out_alpha * 255.0, 0, 255).astype(np.uint8)


@lru_cache(maxsize=128)
def _render_mask(text: str, font: PILFont) -> np.ndarray:
    # Mask spans the full line box so text placed at `y` has its top at `y`.
    width = max(1, int(np.ceil(font.getlength(text))))
    left, top, right, bottom = font.getbbox(text)
    width = max(width, int(right))
    height = max(1, int(bottom))
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    draw.text((0, 0), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


@lru_cache(maxsize=64)
def load_font(font_family: str, font_size_px: float) -> PILFont:
    size = max(1, int(round(font_size_px)))
    font_path = _resolve_font_path(font_family)
    if font_path is not None:
        try:
            return ImageFont.truetype(str(font_path), size=size)
        except OSError as exc:
            LOGGER.warning("could not load font %s (%s); using Pillow default", font_path, exc)
    else:
        LOGGER.warning("no installed font matches %r; using Pillow default", font_family)
    return ImageFont.load_default(size=size)


def _resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower() if font_family.strip() else DEFAULT_FONT_FAMILY.lower()
    patterns = (wanted,) + SANS_FONT_FALLBACK_PATTERNS

    font_dirs = [
        Path.home() / "Library" / "Fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        Path("/System/Library/Fonts/Supplemental"),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
    ]

    candidates: list[Path] = []
    for base in font_dirs:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(base.rglob(ext))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path in candidates:
            stem = path.stem.lower().replace(" ", "")
            if p in stem:
                return path
    return None

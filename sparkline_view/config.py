from __future__ import annotations

from dataclasses import asdict, dataclass
import math
import re
from typing import Any, Mapping

from sparkline_view.errors import InvalidInputError


RGBA = tuple[int, int, int, int]

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")

DARK_GRAY: RGBA = (85, 85, 85, 255)
BLUE: RGBA = (0, 0, 255, 255)
LIGHT_GRAY: RGBA = (170, 170, 170, 255)
BLACK: RGBA = (0, 0, 0, 255)
DEFAULT_CURRENT_VALUE_FORMAT = "%.1f"

_COLOR_FIELDS = ("label_color", "current_value_color", "range_overlay_color", "pen_color")


def parse_color(value: Any, *, name: str = "color") -> RGBA:
    """Normalize `#RRGGBB`, `#RRGGBBAA`, RGB or RGBA tuples into an RGBA tuple."""

    if isinstance(value, str):
        if not _HEX_COLOR.match(value):
            raise InvalidInputError(f"`{name}` must be a hex color (#RRGGBB or #RRGGBBAA)")
        raw = value[1:]
        alpha = int(raw[6:8], 16) if len(raw) == 8 else 255
        return (int(raw[0:2], 16), int(raw[2:4], 16), int(raw[4:6], 16), alpha)
    if isinstance(value, (tuple, list)) and len(value) in (3, 4):
        channels = []
        for channel in value:
            if isinstance(channel, bool) or not isinstance(channel, int):
                raise InvalidInputError(f"`{name}` channels must be integers in [0, 255]")
            if channel < 0 or channel > 255:
                raise InvalidInputError(f"`{name}` channels must be integers in [0, 255]")
            channels.append(channel)
        if len(channels) == 3:
            channels.append(255)
        return (channels[0], channels[1], channels[2], channels[3])
    raise InvalidInputError(f"`{name}` must be a hex string or an RGB/RGBA tuple, got {value!r}")


def format_current_value(pattern: str, value: float) -> str:
    try:
        return pattern % value
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"current value format {pattern!r} cannot format a number") from exc


def _optional_limit(value: Any, *, name: str) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidInputError(f"`{name}` must be a number or None")
    try:
        out = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"`{name}` must be a number or None") from exc
    if not math.isfinite(out):
        raise InvalidInputError(f"`{name}` must be finite")
    return out


@dataclass(frozen=True)
class SparklineConfig:
    """Presentation settings for one sparkline.

    A limit of `None` leaves that side of the vertical scale auto-scaled; a
    number forces the scale to include it and bounds the range overlay band.
    """

    label_text: str | None = None
    label_color: RGBA = DARK_GRAY
    show_current_value: bool = True
    current_value_color: RGBA = BLUE
    current_value_format: str = DEFAULT_CURRENT_VALUE_FORMAT
    show_range_overlay: bool = False
    range_overlay_color: RGBA = LIGHT_GRAY
    range_overlay_lower_limit: float | None = None
    range_overlay_upper_limit: float | None = None
    pen_color: RGBA = BLACK
    pen_width: float = 1.0
    marker_radius: float = 2.0

    def __post_init__(self) -> None:
        if self.label_text is not None and not isinstance(self.label_text, str):
            raise InvalidInputError("`label_text` must be a string or None")
        for name in _COLOR_FIELDS:
            object.__setattr__(self, name, parse_color(getattr(self, name), name=name))
        if not isinstance(self.current_value_format, str):
            raise InvalidInputError("`current_value_format` must be a string")
        format_current_value(self.current_value_format, 0.0)

        lower = _optional_limit(self.range_overlay_lower_limit, name="range_overlay_lower_limit")
        upper = _optional_limit(self.range_overlay_upper_limit, name="range_overlay_upper_limit")
        if lower is not None and upper is not None and lower > upper:
            raise InvalidInputError(f"range overlay lower limit {lower} is above upper limit {upper}")
        object.__setattr__(self, "range_overlay_lower_limit", lower)
        object.__setattr__(self, "range_overlay_upper_limit", upper)

        if not math.isfinite(self.pen_width) or self.pen_width <= 0:
            raise InvalidInputError("`pen_width` must be a positive number")
        if not math.isfinite(self.marker_radius) or self.marker_radius < 0:
            raise InvalidInputError("`marker_radius` must be >= 0")
        object.__setattr__(self, "show_current_value", bool(self.show_current_value))
        object.__setattr__(self, "show_range_overlay", bool(self.show_range_overlay))
        object.__setattr__(self, "pen_width", float(self.pen_width))
        object.__setattr__(self, "marker_radius", float(self.marker_radius))

    def with_overrides(self, **overrides: Any) -> "SparklineConfig":
        return validate_config(overrides, base=self)


DEFAULT_CONFIG = SparklineConfig()


def validate_config(
    overrides: Mapping[str, Any] | None = None,
    *,
    base: SparklineConfig | None = None,
) -> SparklineConfig:
    """Merge `overrides` onto `base` (defaults when omitted) and validate the result."""

    raw: dict[str, Any] = asdict(base if base is not None else DEFAULT_CONFIG)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise InvalidInputError(f"Unknown sparkline setting: {key}")
            raw[key] = value
    return SparklineConfig(**raw)

from __future__ import annotations

from dataclasses import dataclass
import math

from sparkline_view.errors import InvalidInputError


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in screen space (origin top-left, y grows downward)."""

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        if not all(math.isfinite(v) for v in (self.x, self.y, self.width, self.height)):
            raise InvalidInputError("Rect coordinates must be finite")
        if self.width < 0 or self.height < 0:
            raise InvalidInputError("Rect width/height must be >= 0")

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point(self.x + self.width * 0.5, self.y + self.height * 0.5)

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def inset(self, dx: float, dy: float) -> "Rect":
        # Too-small rects collapse onto their centre instead of inverting.
        if self.width > 2 * dx:
            x, width = self.x + dx, self.width - 2 * dx
        else:
            x, width = self.x + self.width * 0.5, 0.0
        if self.height > 2 * dy:
            y, height = self.y + dy, self.height - 2 * dy
        else:
            y, height = self.y + self.height * 0.5, 0.0
        return Rect(x, y, width, height)

    def contains_rect(self, other: "Rect", eps: float = 1e-9) -> bool:
        return (
            other.left >= self.left - eps
            and other.top >= self.top - eps
            and other.right <= self.right + eps
            and other.bottom <= self.bottom + eps
        )

    def overlaps(self, other: "Rect") -> bool:
        """True when the two rects share a region of positive area."""

        w = min(self.right, other.right) - max(self.left, other.left)
        h = min(self.bottom, other.bottom) - max(self.top, other.top)
        return w > 0 and h > 0

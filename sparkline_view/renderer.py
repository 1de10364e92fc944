from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Protocol, Sequence, TypeVar, Union

from sparkline_view.config import RGBA
from sparkline_view.primitives import Point, Rect


@dataclass(frozen=True)
class FontSpec:
    """Font request handed to the renderer.

    `min_size_px` is the floor the layout planner may shrink a long label to
    before it starts truncating.
    """

    family: str = "Helvetica"
    size_px: float = 12.0
    min_size_px: float = 10.0

    def __post_init__(self) -> None:
        if not self.family.strip():
            raise ValueError("FontSpec requires a non-empty `family`")
        if self.size_px <= 0:
            raise ValueError("FontSpec `size_px` must be > 0")
        if self.min_size_px <= 0 or self.min_size_px > self.size_px:
            raise ValueError("FontSpec `min_size_px` must be in (0, size_px]")

    def with_size(self, size_px: float) -> "FontSpec":
        return FontSpec(family=self.family, size_px=size_px, min_size_px=min(self.min_size_px, size_px))


@dataclass(frozen=True)
class FillRect:
    rect: Rect
    color: RGBA


@dataclass(frozen=True)
class StrokePolyline:
    points: tuple[Point, ...]
    color: RGBA
    width: float


@dataclass(frozen=True)
class FillDisc:
    center: Point
    radius: float
    color: RGBA


@dataclass(frozen=True)
class DrawText:
    """Text whose box has its top-left corner at `origin`."""

    text: str
    origin: Point
    font: FontSpec
    color: RGBA


@dataclass(frozen=True)
class PushClip:
    rect: Rect


@dataclass(frozen=True)
class PopClip:
    pass


DrawCommand = Union[FillRect, StrokePolyline, FillDisc, DrawText, PushClip, PopClip]
_C = TypeVar("_C")


@dataclass(frozen=True)
class DrawPlan:
    """Ordered draw commands for one layout pass; later commands paint over earlier ones."""

    commands: tuple[DrawCommand, ...] = ()

    def __iter__(self) -> Iterator[DrawCommand]:
        return iter(self.commands)

    def __len__(self) -> int:
        return len(self.commands)

    def of_type(self, kind: type[_C]) -> list[_C]:
        return [cmd for cmd in self.commands if isinstance(cmd, kind)]


class TextMeasurer(Protocol):
    def measure_text(self, text: str, font: FontSpec) -> float:
        ...


class SparklineRenderer(Protocol):
    """Drawing surface the engine emits commands against; it never touches pixels itself."""

    def measure_text(self, text: str, font: FontSpec) -> float:
        ...

    def draw_text(self, text: str, origin: Point, font: FontSpec, color: RGBA) -> None:
        ...

    def stroke_polyline(self, points: Sequence[Point], color: RGBA, width: float) -> None:
        ...

    def fill_rect(self, rect: Rect, color: RGBA) -> None:
        ...

    def fill_disc(self, center: Point, radius: float, color: RGBA) -> None:
        ...

    def push_clip(self, rect: Rect) -> None:
        ...

    def pop_clip(self) -> None:
        ...


def execute_plan(plan: DrawPlan, renderer: SparklineRenderer) -> None:
    for cmd in plan:
        if isinstance(cmd, FillRect):
            renderer.fill_rect(cmd.rect, cmd.color)
        elif isinstance(cmd, StrokePolyline):
            renderer.stroke_polyline(cmd.points, cmd.color, cmd.width)
        elif isinstance(cmd, FillDisc):
            renderer.fill_disc(cmd.center, cmd.radius, cmd.color)
        elif isinstance(cmd, DrawText):
            renderer.draw_text(cmd.text, cmd.origin, cmd.font, cmd.color)
        elif isinstance(cmd, PushClip):
            renderer.push_clip(cmd.rect)
        elif isinstance(cmd, PopClip):
            renderer.pop_clip()
        else:
            raise TypeError(f"unknown draw command: {cmd!r}")

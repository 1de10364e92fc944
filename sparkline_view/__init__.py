from sparkline_view.api import render_sparkline, save_sparkline_png
from sparkline_view.config import DEFAULT_CONFIG, SparklineConfig, validate_config
from sparkline_view.engine import RenderResult, SparklineLayoutEngine
from sparkline_view.errors import InvalidInputError
from sparkline_view.geometry import build_geometry
from sparkline_view.layout import LayoutPlan, plan_layout
from sparkline_view.primitives import Point, Rect
from sparkline_view.renderer import (
    DrawPlan,
    DrawText,
    FillDisc,
    FillRect,
    FontSpec,
    PopClip,
    PushClip,
    SparklineRenderer,
    StrokePolyline,
    execute_plan,
)
from sparkline_view.scales import AxisScale, resolve_scale

__all__ = [
    "AxisScale",
    "DEFAULT_CONFIG",
    "DrawPlan",
    "DrawText",
    "FillDisc",
    "FillRect",
    "FontSpec",
    "InvalidInputError",
    "LayoutPlan",
    "Point",
    "PopClip",
    "PushClip",
    "Rect",
    "RenderResult",
    "SparklineConfig",
    "SparklineLayoutEngine",
    "SparklineRenderer",
    "StrokePolyline",
    "build_geometry",
    "execute_plan",
    "plan_layout",
    "render_sparkline",
    "resolve_scale",
    "save_sparkline_png",
    "validate_config",
]

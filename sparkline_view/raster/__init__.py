from .canvas import fill_block, new_canvas
from .draw_lines import draw_polyline
from .draw_markers import draw_disc
from .draw_text import draw_text, text_width
from .renderer import RasterRenderer

__all__ = [
    "RasterRenderer",
    "draw_disc",
    "draw_polyline",
    "draw_text",
    "fill_block",
    "new_canvas",
    "text_width",
]

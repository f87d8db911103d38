from __future__ import annotations

from .borders import apply_border_preset
from .builder import SheetBuilder, write_layout
from .columns import compute_auto_width, display_width, plan_columns
from .header import place_headers
from .merge import MergePlan, resolve_horizontal_merges, resolve_vertical_merges
from .rows import render_rows
from .style import map_style, overlay_styles, resolve_style

__all__ = [
    "MergePlan",
    "SheetBuilder",
    "apply_border_preset",
    "compute_auto_width",
    "display_width",
    "map_style",
    "overlay_styles",
    "place_headers",
    "plan_columns",
    "render_rows",
    "resolve_horizontal_merges",
    "resolve_style",
    "resolve_vertical_merges",
    "write_layout",
]

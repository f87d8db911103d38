from __future__ import annotations

from typing import Any

from ..models import CellStyle
from ..types import BorderPreset, BorderSideName
from .grid import SheetGrid

_THIN: dict[str, Any] = {"style": "thin"}
_MEDIUM: dict[str, Any] = {"style": "medium"}


def _sides(*names: BorderSideName, spec: dict[str, Any]) -> CellStyle:
    return CellStyle(border={name: dict(spec) for name in names})


def apply_border_preset(
    grid: SheetGrid, preset: BorderPreset, *, header_row_count: int
) -> None:
    """Apply a sheet border preset over the finished grid."""
    if preset == "none":
        return
    if preset == "all":
        box = _sides("top", "left", "bottom", "right", spec=_THIN)
        for cell in grid:
            grid.overlay(cell.row, cell.col, box)
        return
    last_row = grid.row_count
    last_col = grid.column_count
    if last_row == 0 or last_col == 0:
        return
    if preset == "outer":
        top = _sides("top", spec=_THIN)
        bottom = _sides("bottom", spec=_THIN)
        left = _sides("left", spec=_THIN)
        right = _sides("right", spec=_THIN)
        for col in range(1, last_col + 1):
            grid.overlay(1, col, top)
            grid.overlay(last_row, col, bottom)
        for row in range(1, last_row + 1):
            grid.overlay(row, 1, left)
            grid.overlay(row, last_col, right)
        return
    if preset == "header-body":
        if header_row_count < 1:
            return
        bottom = _sides("bottom", spec=_MEDIUM)
        for col in range(1, last_col + 1):
            grid.overlay(header_row_count, col, bottom)
        return
    raise ValueError(f"Unknown border preset: {preset}")


__all__ = ["apply_border_preset"]

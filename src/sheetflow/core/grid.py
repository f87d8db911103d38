from __future__ import annotations

from collections.abc import Iterator

from ..models import Cell, CellStyle
from .style import overlay_styles


class SheetGrid:
    """Mutable cell store owned by one sheet build."""

    def __init__(self) -> None:
        self._cells: dict[tuple[int, int], Cell] = {}

    def cell(self, row: int, col: int) -> Cell:
        """Return the cell at (row, col), creating an empty one if needed."""
        key = (row, col)
        existing = self._cells.get(key)
        if existing is None:
            existing = Cell(row=row, col=col)
            self._cells[key] = existing
        return existing

    def get(self, row: int, col: int) -> Cell | None:
        return self._cells.get((row, col))

    def value(self, row: int, col: int) -> object:
        """Return the stored value at (row, col); None for missing cells."""
        existing = self._cells.get((row, col))
        return existing.value if existing is not None else None

    def overlay(self, row: int, col: int, style: CellStyle | None) -> None:
        """Overlay a style on top of the cell's current style."""
        if style is None or style.is_empty():
            return
        target = self.cell(row, col)
        target.style = overlay_styles(target.style, style)

    def underlay(self, row: int, col: int, style: CellStyle | None) -> None:
        """Apply a style beneath the cell's current style."""
        if style is None or style.is_empty():
            return
        target = self.cell(row, col)
        target.style = overlay_styles(style, target.style)

    def row_cells(self, row: int) -> list[Cell]:
        """Return existing cells of one row ordered by column."""
        return [self._cells[key] for key in sorted(self._cells) if key[0] == row]

    def __iter__(self) -> Iterator[Cell]:
        for key in sorted(self._cells):
            yield self._cells[key]

    def __len__(self) -> int:
        return len(self._cells)

    @property
    def row_count(self) -> int:
        return max((row for row, _ in self._cells), default=0)

    @property
    def column_count(self) -> int:
        return max((col for _, col in self._cells), default=0)

    def snapshot(self) -> dict[tuple[int, int], Cell]:
        """Return the cells keyed by position, in row-major order."""
        return {key: self._cells[key] for key in sorted(self._cells)}

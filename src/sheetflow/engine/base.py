from __future__ import annotations

from pathlib import Path
from typing import Protocol

from ..models import CellStyle, MergeRange


class WorksheetEngine(Protocol):
    """Protocol for the worksheet surface the layout handoff writes to."""

    @property
    def title(self) -> str:
        """Worksheet name."""

    def set_column_width(self, col: int, width: float) -> None:
        """Set the width of a 1-based column."""

    def set_value(self, row: int, col: int, value: object) -> None:
        """Store a value at a 1-based (row, col)."""

    def merge_cells(self, merge: MergeRange) -> None:
        """Merge a rectangular range."""

    def apply_style(
        self, row: int, col: int, style: CellStyle, number_format: str | None
    ) -> None:
        """Apply a resolved style and optional number format to one cell."""


class WorkbookEngine(Protocol):
    """Protocol for the spreadsheet engine owning the workbook object model."""

    def sheet_names(self) -> list[str]:
        """Return worksheet names in creation order."""

    def add_worksheet(self, name: str) -> WorksheetEngine:
        """Create and return a new worksheet."""

    def remove_worksheet(self, name: str) -> None:
        """Remove a worksheet by name."""

    def write_to_file(self, path: Path) -> None:
        """Serialize the workbook to a file."""

    def write_to_buffer(self) -> bytes:
        """Serialize the workbook to bytes."""


__all__ = ["WorkbookEngine", "WorksheetEngine"]

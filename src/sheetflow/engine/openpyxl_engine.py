from __future__ import annotations

from io import BytesIO
from pathlib import Path

from openpyxl import Workbook as OpenpyxlWorkbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.worksheet.worksheet import Worksheet

from ..models import CellStyle, MergeRange
from ..shared.a1 import column_index_to_label

_BORDER_SIDES = ("left", "right", "top", "bottom")


class OpenpyxlWorksheetEngine:
    """Worksheet adapter over an openpyxl worksheet."""

    def __init__(self, sheet: Worksheet) -> None:
        self._sheet = sheet

    @property
    def title(self) -> str:
        return str(self._sheet.title)

    @property
    def worksheet(self) -> Worksheet:
        return self._sheet

    def set_column_width(self, col: int, width: float) -> None:
        self._sheet.column_dimensions[column_index_to_label(col)].width = width

    def set_value(self, row: int, col: int, value: object) -> None:
        self._sheet.cell(row=row, column=col).value = value

    def merge_cells(self, merge: MergeRange) -> None:
        self._sheet.merge_cells(
            start_row=merge.start_row,
            start_column=merge.start_col,
            end_row=merge.end_row,
            end_column=merge.end_col,
        )

    def apply_style(
        self, row: int, col: int, style: CellStyle, number_format: str | None
    ) -> None:
        """Apply a resolved style; merged (non-anchor) cells accept styles too."""
        cell = self._sheet.cell(row=row, column=col)
        if style.font:
            cell.font = Font(**style.font)
        if style.fill:
            cell.fill = PatternFill(**style.fill)
        if style.alignment:
            cell.alignment = Alignment(**style.alignment)
        if style.border:
            cell.border = Border(
                **{side: Side(**style.border.get(side, {})) for side in _BORDER_SIDES}
            )
        if number_format is not None:
            cell.number_format = number_format


class OpenpyxlWorkbookEngine:
    """Workbook adapter over an openpyxl workbook."""

    def __init__(self) -> None:
        self._workbook = OpenpyxlWorkbook()
        # Drop the default sheet so the workbook only holds defined sheets.
        self._workbook.remove(self._workbook.active)

    @property
    def workbook(self) -> OpenpyxlWorkbook:
        return self._workbook

    def sheet_names(self) -> list[str]:
        return list(self._workbook.sheetnames)

    def add_worksheet(self, name: str) -> OpenpyxlWorksheetEngine:
        return OpenpyxlWorksheetEngine(self._workbook.create_sheet(title=name))

    def remove_worksheet(self, name: str) -> None:
        self._workbook.remove(self._workbook[name])

    def write_to_file(self, path: Path) -> None:
        self._workbook.save(path)

    def write_to_buffer(self) -> bytes:
        buffer = BytesIO()
        self._workbook.save(buffer)
        return buffer.getvalue()


__all__ = ["OpenpyxlWorkbookEngine", "OpenpyxlWorksheetEngine"]

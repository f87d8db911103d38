from __future__ import annotations

from collections.abc import Sequence

from ..models import (
    Cell,
    CellStyle,
    ColumnPlan,
    ComputedStyle,
    FormatSource,
    NumberFormat,
    SheetDef,
    ValueFormatter,
)
from .grid import SheetGrid
from .records import record_inline_style, record_value
from .style import coerce_style, map_style, overlay_styles, resolve_style


def apply_format(cell: Cell, fmt: FormatSource, raw_value: object) -> None:
    """Apply a number format or substitute the value through a formatter."""
    if isinstance(fmt, NumberFormat):
        cell.number_format = fmt.code
    elif isinstance(fmt, ValueFormatter):
        cell.value = fmt.fn(raw_value)
    else:
        raise TypeError(f"Unsupported format source: {type(fmt).__name__}")


def _base_style(default: CellStyle | None, plan: ColumnPlan) -> CellStyle:
    base = default if default is not None else CellStyle()
    return overlay_styles(base, plan.base_style)


def render_rows(
    grid: SheetGrid,
    sheet_def: SheetDef,
    plans: Sequence[ColumnPlan],
    records: Sequence[object],
    *,
    data_start_row: int,
) -> None:
    """Write data rows with layered styles.

    Layers per cell, lowest first: sheet default style, static column style,
    row style function, the record's inline ``style``, computed column style.
    Formats run last; a formatter replaces the stored value.
    """
    default = (
        map_style(sheet_def.default_style)
        if sheet_def.default_style is not None
        else None
    )
    row_style_fn = sheet_def.rows.style if sheet_def.rows is not None else None
    for index, record in enumerate(records):
        row = data_start_row + index
        raw_values: list[object] = []
        cells: list[Cell] = []
        for plan, column in zip(plans, sheet_def.columns):
            cell = grid.cell(row, plan.index)
            value = record_value(record, column.key)
            cell.value = value
            cell.style = _base_style(default, plan)
            raw_values.append(value)
            cells.append(cell)

        if row_style_fn is not None:
            row_style = coerce_style(
                row_style_fn(record, index), context=f"rows.style at index {index}"
            )
            if row_style is not None:
                mapped = map_style(row_style)
                for cell in cells:
                    grid.overlay(cell.row, cell.col, mapped)

        inline_style = coerce_style(
            record_inline_style(record), context=f"record style at index {index}"
        )
        if inline_style is not None:
            mapped = map_style(inline_style)
            for cell in cells:
                grid.overlay(cell.row, cell.col, mapped)

        for cell, column, raw_value in zip(cells, sheet_def.columns, raw_values):
            if isinstance(column.style, ComputedStyle):
                grid.overlay(
                    cell.row,
                    cell.col,
                    resolve_style(column.style, raw_value, record, index),
                )
            if column.format is not None:
                apply_format(cell, column.format, raw_value)


__all__ = ["apply_format", "render_rows"]

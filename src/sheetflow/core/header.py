from __future__ import annotations

import logging

from ..errors import SheetDefinitionError
from ..models import HeaderCell, HeaderDescriptor, MergeRange, SheetDef
from ..shared.a1 import cell_ref
from .grid import SheetGrid
from .merge import MergePlan
from .style import map_style

logger = logging.getLogger(__name__)


def header_rows(sheet_def: SheetDef) -> list[list[HeaderDescriptor]]:
    """Return configured header rows, or one row of column labels."""
    if sheet_def.header is not None and sheet_def.header.rows is not None:
        return sheet_def.header.rows
    return [[column.header for column in sheet_def.columns]]


def place_headers(grid: SheetGrid, sheet_def: SheetDef, merges: MergePlan) -> int:
    """Place header cells and register header spans.

    Each row is filled left to right from column 1. Positions already covered
    by a span registered earlier (in this row or reaching down from a previous
    header row) are skipped. The sheet-level header style is applied last,
    underneath each cell's own style.

    Args:
        grid: Cell store of the sheet being built.
        sheet_def: Sheet definition.
        merges: Merge registry shared with later stages.

    Returns:
        Number of header rows.

    Raises:
        SheetDefinitionError: If a span reaches below the last header row.
        MergeConflictError: If two header spans overlap.
    """
    rows = header_rows(sheet_def)
    for offset, descriptors in enumerate(rows):
        row = offset + 1
        col = 1
        for descriptor in descriptors:
            while merges.covers(row, col):
                col += 1
            cell = grid.cell(row, col)
            if not isinstance(descriptor, HeaderCell):
                cell.value = descriptor
                col += 1
                continue
            cell.value = descriptor.value
            if descriptor.style is not None:
                grid.overlay(row, col, map_style(descriptor.style))
            if row + descriptor.row_span - 1 > len(rows):
                raise SheetDefinitionError(
                    f"Header cell {descriptor.value!r} at {cell_ref(row, col)} spans "
                    f"{descriptor.row_span} rows but the header has only "
                    f"{len(rows)} rows."
                )
            if descriptor.row_span > 1 or descriptor.col_span > 1:
                span = MergeRange(
                    start_row=row,
                    start_col=col,
                    end_row=row + descriptor.row_span - 1,
                    end_col=col + descriptor.col_span - 1,
                )
                merges.add(span)
                for position in span.positions():
                    grid.cell(*position)
                logger.debug("Header span %s", span.coord)
            col += descriptor.col_span

    header_style = sheet_def.header.style if sheet_def.header is not None else None
    if header_style is not None:
        mapped = map_style(header_style)
        for row in range(1, len(rows) + 1):
            for cell in grid.row_cells(row):
                grid.underlay(cell.row, cell.col, mapped)
    return len(rows)


__all__ = ["header_rows", "place_headers"]

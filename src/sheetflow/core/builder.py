from __future__ import annotations

from collections.abc import Sequence
import logging

from ..engine.base import WorksheetEngine
from ..models import SheetDef, SheetLayout
from .borders import apply_border_preset
from .columns import plan_columns
from .grid import SheetGrid
from .header import place_headers
from .merge import MergePlan, resolve_horizontal_merges, resolve_vertical_merges
from .rows import render_rows

logger = logging.getLogger(__name__)


class SheetBuilder:
    """Run the layout pipeline for one sheet definition.

    Pipeline order: columns, headers, data rows, vertical merges, horizontal
    merges, border preset. The builder owns the grid and merge registry for
    the duration of one :meth:`build` call.
    """

    def __init__(self, sheet_def: SheetDef) -> None:
        self._sheet_def = sheet_def

    @property
    def sheet_def(self) -> SheetDef:
        return self._sheet_def

    @property
    def header_row_count(self) -> int:
        return self._sheet_def.header_row_count

    @property
    def data_start_row(self) -> int:
        return self._sheet_def.data_start_row

    def build(self, records: Sequence[object]) -> SheetLayout:
        """Resolve the full layout for `records`.

        Args:
            records: Data records, one per sheet row.

        Returns:
            Positioned cells, column plans and merge ranges.

        Raises:
            SheetDefinitionError: If a style cannot be resolved or merges overlap.
        """
        sheet_def = self._sheet_def
        grid = SheetGrid()
        merges = MergePlan()

        plans = plan_columns(sheet_def, records)
        header_row_count = place_headers(grid, sheet_def, merges)
        data_start_row = header_row_count + 1
        render_rows(grid, sheet_def, plans, records, data_start_row=data_start_row)
        resolve_vertical_merges(
            grid,
            sheet_def,
            data_start_row=data_start_row,
            record_count=len(records),
            merges=merges,
        )
        resolve_horizontal_merges(
            grid,
            sheet_def,
            data_start_row=data_start_row,
            record_count=len(records),
            merges=merges,
        )
        apply_border_preset(grid, sheet_def.borders, header_row_count=header_row_count)
        logger.debug(
            "Built sheet %s: %d header rows, %d records, %d cells, %d merges",
            sheet_def.name,
            header_row_count,
            len(records),
            len(grid),
            len(merges),
        )
        return SheetLayout(
            name=sheet_def.name,
            columns=plans,
            cells=grid.snapshot(),
            merges=merges.ranges,
            header_row_count=header_row_count,
            data_start_row=data_start_row,
        )


def write_layout(sheet: WorksheetEngine, layout: SheetLayout) -> None:
    """Hand a resolved layout to a worksheet engine.

    Values are written before merging and styles after, so that cells
    replaced by the engine during a merge still receive their styles.
    """
    for plan in layout.columns:
        sheet.set_column_width(plan.index, plan.width)
    for cell in layout.iter_cells():
        if cell.value is not None:
            sheet.set_value(cell.row, cell.col, cell.value)
    for merge in layout.merges:
        sheet.merge_cells(merge)
    for cell in layout.iter_cells():
        if cell.style.is_empty() and cell.number_format is None:
            continue
        sheet.apply_style(cell.row, cell.col, cell.style, cell.number_format)


__all__ = ["SheetBuilder", "write_layout"]

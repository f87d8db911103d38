from __future__ import annotations

from collections.abc import Iterator, Sequence
import logging

from ..errors import MergeConflictError
from ..models import MergeRange, SheetDef
from .grid import SheetGrid

logger = logging.getLogger(__name__)


class MergePlan:
    """Ordered merge ranges for one sheet, rejecting overlaps."""

    def __init__(self) -> None:
        self._ranges: list[MergeRange] = []
        self._covered: set[tuple[int, int]] = set()

    def add(self, merge: MergeRange) -> None:
        """Register a merge range.

        Cost is proportional to the cells of `merge`; registered ranges are
        only scanned to name the conflicting one.

        Raises:
            MergeConflictError: If the range shares a cell with a registered one.
        """
        positions = list(merge.positions())
        if not self._covered.isdisjoint(positions):
            existing = next(item for item in self._ranges if item.overlaps(merge))
            raise MergeConflictError(
                f"Merge range {merge.coord} overlaps existing merged range "
                f"{existing.coord}. Overlapping merges are not supported."
            )
        self._ranges.append(merge)
        self._covered.update(positions)

    def covers(self, row: int, col: int) -> bool:
        """Return whether (row, col) lies inside any registered range."""
        return (row, col) in self._covered

    @property
    def ranges(self) -> list[MergeRange]:
        return list(self._ranges)

    def __len__(self) -> int:
        return len(self._ranges)


def same_value(left: object, right: object) -> bool:
    """Strict equality: same type and equal value."""
    return type(left) is type(right) and left == right


def contiguous_runs(values: Sequence[object]) -> Iterator[tuple[int, int]]:
    """Yield (start, end) offsets of equal-value runs longer than one item."""
    if not values:
        return
    run_start = 0
    run_value = values[0]
    for offset in range(1, len(values)):
        current = values[offset]
        if same_value(current, run_value):
            continue
        if offset - 1 > run_start:
            yield run_start, offset - 1
        run_start = offset
        run_value = current
    last = len(values) - 1
    if last > run_start:
        yield run_start, last


def resolve_vertical_merges(
    grid: SheetGrid,
    sheet_def: SheetDef,
    *,
    data_start_row: int,
    record_count: int,
    merges: MergePlan,
) -> None:
    """Merge equal-value runs down each `merge="vertical"` column."""
    rows = range(data_start_row, data_start_row + record_count)
    for col, column in enumerate(sheet_def.columns, start=1):
        if column.merge != "vertical":
            continue
        values = [grid.value(row, col) for row in rows]
        for start, end in contiguous_runs(values):
            merges.add(
                MergeRange(
                    start_row=data_start_row + start,
                    start_col=col,
                    end_row=data_start_row + end,
                    end_col=col,
                )
            )
            logger.debug(
                "Vertical merge in column %s: rows %s-%s",
                col,
                data_start_row + start,
                data_start_row + end,
            )


def _eligible_segments(sheet_def: SheetDef) -> list[list[int]]:
    """Group adjacent `merge="horizontal"` columns; other columns split groups."""
    segments: list[list[int]] = []
    current: list[int] = []
    for col, column in enumerate(sheet_def.columns, start=1):
        if column.merge == "horizontal":
            current.append(col)
            continue
        if current:
            segments.append(current)
            current = []
    if current:
        segments.append(current)
    return segments


def resolve_horizontal_merges(
    grid: SheetGrid,
    sheet_def: SheetDef,
    *,
    data_start_row: int,
    record_count: int,
    merges: MergePlan,
) -> None:
    """Merge equal-value runs across adjacent `merge="horizontal"` columns."""
    segments = _eligible_segments(sheet_def)
    if not segments:
        return
    for row in range(data_start_row, data_start_row + record_count):
        for segment in segments:
            values = [grid.value(row, col) for col in segment]
            for start, end in contiguous_runs(values):
                merges.add(
                    MergeRange(
                        start_row=row,
                        start_col=segment[start],
                        end_row=row,
                        end_col=segment[end],
                    )
                )


__all__ = [
    "MergePlan",
    "contiguous_runs",
    "resolve_horizontal_merges",
    "resolve_vertical_merges",
    "same_value",
]

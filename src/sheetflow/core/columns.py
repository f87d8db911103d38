from __future__ import annotations

from collections.abc import Iterable, Sequence
import logging
import math

from ..models import (
    DEFAULT_COLUMN_WIDTH,
    AutoWidthConfig,
    ColumnPlan,
    SheetDef,
    StaticStyle,
)
from .records import record_value
from .style import map_style

logger = logging.getLogger(__name__)


def display_width(text: str) -> int:
    """Estimate display width, counting code points above 255 as two units."""
    return sum(2 if ord(char) > 255 else 1 for char in text)


def _text_of(value: object) -> str:
    return "" if value is None else str(value)


def compute_auto_width(
    header: str, values: Iterable[object], config: AutoWidthConfig
) -> float:
    """Compute an auto width from the header label and column values.

    Args:
        header: Column header label.
        values: Raw column values, one per record.
        config: Padding, header inclusion and character width tuning.

    Returns:
        Estimated column width, or the default width when the result is not
        a finite number.
    """
    max_len = display_width(header) if config.header_included else 0
    for value in values:
        length = display_width(_text_of(value))
        if length > max_len:
            max_len = length
    width = (max_len + config.padding) * config.char_width_constant
    if not math.isfinite(width):
        return DEFAULT_COLUMN_WIDTH
    return float(width)


def plan_columns(sheet_def: SheetDef, records: Sequence[object]) -> list[ColumnPlan]:
    """Resolve width and base style for every column of a sheet."""
    plans: list[ColumnPlan] = []
    for index, column in enumerate(sheet_def.columns, start=1):
        if column.width == "auto":
            width = compute_auto_width(
                column.header,
                (record_value(record, column.key) for record in records),
                sheet_def.auto_width,
            )
        elif isinstance(column.width, int | float) and math.isfinite(column.width):
            width = float(column.width)
        else:
            width = DEFAULT_COLUMN_WIDTH
        base_style = (
            map_style(column.style.style)
            if isinstance(column.style, StaticStyle)
            else None
        )
        plans.append(
            ColumnPlan(
                index=index,
                key=column.key,
                header=column.header,
                width=width,
                base_style=base_style,
            )
        )
        logger.debug("Column %s (%s) width=%.2f", index, column.key, width)
    return plans

"""Declarative, styled xlsx generation from typed row data."""

from __future__ import annotations

from .config import SheetflowConfig
from .core.builder import SheetBuilder
from .errors import (
    InvocationError,
    MergeConflictError,
    SerializationTimeoutError,
    SheetDefinitionError,
    SheetflowError,
)
from .models import (
    AlignmentSpec,
    AutoWidthConfig,
    BorderSideSpec,
    BorderSpec,
    Cell,
    CellStyle,
    ColumnDef,
    ColumnPlan,
    ComputedStyle,
    FillSpec,
    FontSpec,
    HeaderCell,
    HeaderConfig,
    MergeRange,
    NumberFormat,
    RowsConfig,
    SheetDef,
    SheetLayout,
    StaticStyle,
    ValueFormatter,
    XLStyle,
)
from .workbook import Workbook, create_workbook, define_sheet

__all__ = [
    "AlignmentSpec",
    "AutoWidthConfig",
    "BorderSideSpec",
    "BorderSpec",
    "Cell",
    "CellStyle",
    "ColumnDef",
    "ColumnPlan",
    "ComputedStyle",
    "FillSpec",
    "FontSpec",
    "HeaderCell",
    "HeaderConfig",
    "InvocationError",
    "MergeConflictError",
    "MergeRange",
    "NumberFormat",
    "RowsConfig",
    "SerializationTimeoutError",
    "SheetBuilder",
    "SheetDef",
    "SheetDefinitionError",
    "SheetLayout",
    "SheetflowConfig",
    "SheetflowError",
    "StaticStyle",
    "ValueFormatter",
    "Workbook",
    "XLStyle",
    "create_workbook",
    "define_sheet",
]

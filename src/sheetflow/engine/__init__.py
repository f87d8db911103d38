from __future__ import annotations

from .base import WorkbookEngine, WorksheetEngine
from .openpyxl_engine import OpenpyxlWorkbookEngine, OpenpyxlWorksheetEngine

__all__ = [
    "OpenpyxlWorkbookEngine",
    "OpenpyxlWorksheetEngine",
    "WorkbookEngine",
    "WorksheetEngine",
]

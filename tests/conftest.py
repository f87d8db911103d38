from __future__ import annotations

from collections.abc import Callable
from io import BytesIO

import anyio
from openpyxl import load_workbook
from openpyxl.workbook.workbook import Workbook as OpenpyxlWorkbook
import pytest

from sheetflow import Workbook


def read_xlsx(payload: bytes) -> OpenpyxlWorkbook:
    """Load serialized workbook bytes back with openpyxl."""
    return load_workbook(BytesIO(payload))


@pytest.fixture
def roundtrip() -> Callable[[Workbook], OpenpyxlWorkbook]:
    """Serialize a workbook to bytes and read it back."""

    def _roundtrip(workbook: Workbook) -> OpenpyxlWorkbook:
        return read_xlsx(anyio.run(workbook.save_to_buffer))

    return _roundtrip

from __future__ import annotations


def column_index_to_label(index: int) -> str:
    """Convert 1-based column index to Excel-style column label."""
    if index < 1:
        raise ValueError("Column index must be positive.")
    chunks: list[str] = []
    current = index
    while current > 0:
        current -= 1
        chunks.append(chr(ord("A") + (current % 26)))
        current //= 26
    return "".join(reversed(chunks))


def cell_ref(row: int, col: int) -> str:
    """Build an A1 reference from 1-based row/column indexes."""
    if row < 1:
        raise ValueError("Row index must be positive.")
    return f"{column_index_to_label(col)}{row}"


def range_ref(start_row: int, start_col: int, end_row: int, end_col: int) -> str:
    """Build an A1 range reference from 1-based corner indexes."""
    return f"{cell_ref(start_row, start_col)}:{cell_ref(end_row, end_col)}"

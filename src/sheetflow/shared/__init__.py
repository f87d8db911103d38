from __future__ import annotations

from .a1 import cell_ref, column_index_to_label, range_ref

__all__ = ["cell_ref", "column_index_to_label", "range_ref"]

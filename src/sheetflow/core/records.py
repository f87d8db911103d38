from __future__ import annotations

from collections.abc import Mapping

from ..models import RESERVED_COLUMN_KEY


def record_value(record: object, key: str) -> object:
    """Read a field from a mapping record, falling back to attribute access."""
    if isinstance(record, Mapping):
        return record.get(key)
    return getattr(record, key, None)


def record_inline_style(record: object) -> object:
    """Return the record's inline row style, if it carries one."""
    return record_value(record, RESERVED_COLUMN_KEY)

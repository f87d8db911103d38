from __future__ import annotations


class SheetflowError(Exception):
    """Base class for sheetflow errors."""


class SheetDefinitionError(SheetflowError, ValueError):
    """Sheet definition violates a naming, key or layout rule."""


class MergeConflictError(SheetDefinitionError):
    """Two merge ranges would share a cell."""


class InvocationError(SheetflowError, RuntimeError):
    """Serialization target or environment is not usable."""


class SerializationTimeoutError(SheetflowError, TimeoutError):
    """Serialization did not finish within the configured time budget."""

    def __init__(self, timeout: float) -> None:
        super().__init__(f"Operation timed out after {timeout:g}s.")
        self.timeout = timeout


__all__ = [
    "InvocationError",
    "MergeConflictError",
    "SerializationTimeoutError",
    "SheetDefinitionError",
    "SheetflowError",
]

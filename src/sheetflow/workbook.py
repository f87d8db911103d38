from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
import importlib
import logging
from pathlib import Path
import sys
from typing import Any, TypeVar, cast

import anyio
from pydantic import BaseModel, ConfigDict, ValidationError

from .config import SheetflowConfig
from .core.builder import SheetBuilder, write_layout
from .engine.base import WorkbookEngine
from .engine.openpyxl_engine import OpenpyxlWorkbookEngine
from .errors import InvocationError, SerializationTimeoutError, SheetDefinitionError
from .models import SheetDef

logger = logging.getLogger(__name__)

XLSX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

T = TypeVar("T")


class BrowserContext(BaseModel):
    """Handles to the browser globals used by :meth:`Workbook.download`."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    js: Any
    to_js: Callable[..., Any]


def _is_browser_runtime() -> bool:
    """Return True when running inside a browser (Pyodide) interpreter."""
    return sys.platform == "emscripten"


def _browser_context() -> BrowserContext | None:
    """Return browser globals, or None outside a browser runtime."""
    if not _is_browser_runtime():
        return None
    try:
        js = importlib.import_module("js")
        ffi = importlib.import_module("pyodide.ffi")
    except ModuleNotFoundError:
        return None
    if getattr(js, "document", None) is None:
        return None
    return BrowserContext(js=js, to_js=ffi.to_js)


def _has_file_system() -> bool:
    """Return True when writes reach a persistent file system."""
    return not _is_browser_runtime()


def _validation_message(exc: ValidationError) -> str:
    """Flatten pydantic errors, preferring the raised ValueError text."""
    messages: list[str] = []
    for error in exc.errors():
        ctx = error.get("ctx") or {}
        raised = ctx.get("error")
        if raised is not None:
            messages.append(str(raised))
            continue
        location = ".".join(str(part) for part in error.get("loc", ()))
        messages.append(f"{location}: {error.get('msg')}" if location else error["msg"])
    return "; ".join(messages)


def define_sheet(sheet_def: SheetDef | Mapping[str, Any]) -> SheetDef:
    """Validate a sheet definition; an existing `SheetDef` is returned as is."""
    if isinstance(sheet_def, SheetDef):
        return sheet_def
    try:
        return SheetDef.model_validate(sheet_def)
    except ValidationError as exc:
        raise SheetDefinitionError(_validation_message(exc)) from exc


class Workbook:
    """Workbook built from declarative sheet definitions.

    Sheets are added with :meth:`add_sheet` (chainable) and the workbook is
    serialized with :meth:`save`, :meth:`save_to_buffer` or :meth:`download`.
    Instances are not thread-safe; callers serialize ``add_sheet`` calls.
    """

    def __init__(
        self,
        *,
        config: SheetflowConfig | None = None,
        engine: WorkbookEngine | None = None,
    ) -> None:
        self._config = config or SheetflowConfig()
        self._engine: WorkbookEngine = engine or OpenpyxlWorkbookEngine()

    @property
    def config(self) -> SheetflowConfig:
        return self._config

    @property
    def engine(self) -> WorkbookEngine:
        return self._engine

    @property
    def sheet_names(self) -> list[str]:
        return self._engine.sheet_names()

    def add_sheet(
        self,
        sheet_def: SheetDef | Mapping[str, Any],
        data: Sequence[object],
    ) -> Workbook:
        """Build one sheet from a definition and its records.

        The layout is fully resolved before the engine is touched, so a
        definition error leaves the workbook unchanged. If the engine rejects
        a value while the sheet is written, the sheet is removed again and
        the engine error is re-raised.

        Args:
            sheet_def: Sheet definition (model or mapping).
            data: Records, one per data row.

        Returns:
            This workbook, for chaining.

        Raises:
            SheetDefinitionError: If the definition or a computed style is invalid.
        """
        definition = define_sheet(sheet_def)
        self._ensure_unique_name(definition.name)
        records = list(data)
        layout = SheetBuilder(definition).build(records)
        sheet = self._engine.add_worksheet(definition.name)
        try:
            write_layout(sheet, layout)
        except Exception:
            self._engine.remove_worksheet(sheet.title)
            logger.warning("Removed sheet %s after a failed write", definition.name)
            raise
        logger.info(
            "Added sheet %s (%d rows, %d merges)",
            definition.name,
            len(records),
            len(layout.merges),
        )
        return self

    def _ensure_unique_name(self, name: str) -> None:
        existing = {sheet.casefold() for sheet in self._engine.sheet_names()}
        if name.casefold() in existing:
            raise SheetDefinitionError(f'Sheet name "{name}" already exists.')

    async def save(self, path: str | Path, *, timeout: float | None = None) -> None:
        """Write the workbook to a file.

        Args:
            path: Target file path; parent directories are created.
            timeout: Time budget in seconds; defaults to the config value.

        Raises:
            InvocationError: If the path is blank or no file system is available.
            SerializationTimeoutError: If writing exceeds the time budget.
        """
        if not str(path).strip():
            raise InvocationError("File path cannot be empty.")
        if not _has_file_system():
            raise InvocationError(
                "File system access is not available in this environment. "
                "Use save_to_buffer() or download() instead."
            )
        target = Path(path)
        self._ensure_has_sheets()
        target.parent.mkdir(parents=True, exist_ok=True)
        await self._serialize(lambda: self._engine.write_to_file(target), timeout)
        logger.info("Saved workbook to %s", target)

    async def save_to_buffer(self, *, timeout: float | None = None) -> bytes:
        """Serialize the workbook to bytes.

        Raises:
            SerializationTimeoutError: If serialization exceeds the time budget.
        """
        self._ensure_has_sheets()
        return await self._serialize(self._engine.write_to_buffer, timeout)

    async def download(self, filename: str, *, timeout: float | None = None) -> None:
        """Trigger a browser download of the workbook.

        Only available in a browser (Pyodide) runtime. A temporary object URL
        is created for the bytes and revoked after the download is triggered.

        Raises:
            InvocationError: Outside a browser runtime or for a blank filename.
            SerializationTimeoutError: If serialization exceeds the time budget.
        """
        context = _browser_context()
        if context is None:
            raise InvocationError(
                "download() is only available in a browser environment. "
                "Use save() or save_to_buffer() instead."
            )
        if not filename.strip():
            raise InvocationError("Download filename cannot be empty.")
        payload = await self.save_to_buffer(timeout=timeout)
        js = context.js
        array = js.Uint8Array.new(len(payload))
        array.assign(payload)
        options = context.to_js(
            {"type": XLSX_MIME_TYPE}, dict_converter=js.Object.fromEntries
        )
        blob = js.Blob.new(context.to_js([array]), options)
        url = js.URL.createObjectURL(blob)
        try:
            anchor = js.document.createElement("a")
            anchor.href = url
            anchor.download = filename
            anchor.click()
        finally:
            js.URL.revokeObjectURL(url)
        logger.info("Triggered download of %s", filename)

    def _ensure_has_sheets(self) -> None:
        if not self._engine.sheet_names():
            raise InvocationError(
                "Workbook has no sheets. Call add_sheet() before serializing."
            )

    async def _serialize(self, work: Callable[[], T], timeout: float | None) -> T:
        """Run a blocking engine write in a worker thread under a time budget.

        The worker is abandoned, not stopped, when the budget runs out; its
        eventual result or error is discarded.
        """
        budget = self._config.save_timeout if timeout is None else max(timeout, 0.0)
        result: T | None = None
        with anyio.move_on_after(budget) as scope:
            result = await anyio.to_thread.run_sync(work, abandon_on_cancel=True)
        if scope.cancelled_caught:
            logger.warning(
                "Serialization exceeded %gs; the background write is abandoned.",
                budget,
            )
            raise SerializationTimeoutError(budget)
        return cast(T, result)


def create_workbook(
    *,
    config: SheetflowConfig | None = None,
    engine: WorkbookEngine | None = None,
) -> Workbook:
    """Create an empty workbook."""
    return Workbook(config=config, engine=engine)


__all__ = [
    "BrowserContext",
    "Workbook",
    "XLSX_MIME_TYPE",
    "create_workbook",
    "define_sheet",
]

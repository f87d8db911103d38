from __future__ import annotations

from collections.abc import Callable, Iterator
import re
from typing import Any, Final, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .shared.a1 import range_ref
from .types import (
    BorderLineStyle,
    BorderPreset,
    FillPattern,
    HorizontalAlignType,
    MergePolicy,
    UnderlineType,
    VerticalAlignType,
)

MAX_SHEET_NAME_LENGTH: Final = 31
RESERVED_COLUMN_KEY: Final = "style"
DEFAULT_COLUMN_WIDTH: Final = 15.0

_HEX_COLOR_PATTERN = re.compile(r"^#?(?:[0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})$")
_INVALID_SHEET_NAME_PATTERN = re.compile(r"[\\/?*\[\]:]")


def validate_sheet_name(name: str) -> str:
    """Validate an Excel worksheet name.

    Args:
        name: Candidate sheet name.

    Returns:
        The unchanged name.

    Raises:
        ValueError: If the name is empty, too long or uses reserved characters.
    """
    if not name:
        raise ValueError("Sheet name is required.")
    if len(name) > MAX_SHEET_NAME_LENGTH:
        raise ValueError(
            f'Sheet name "{name}" exceeds the maximum length of '
            f"{MAX_SHEET_NAME_LENGTH} characters."
        )
    if _INVALID_SHEET_NAME_PATTERN.search(name):
        raise ValueError(
            f'Sheet name "{name}" contains invalid characters (\\ / ? * [ ] :).'
        )
    return name


def _coerce_color(value: object) -> object:
    """Accept `#RRGGBB`/`AARRGGBB` text or an `{"argb": ...}` mapping."""
    if value is None:
        return None
    if isinstance(value, dict):
        value = value.get("argb")
    if not isinstance(value, str) or not _HEX_COLOR_PATTERN.match(value):
        raise ValueError(
            f"Invalid color: {value!r}. Use '#RRGGBB', 'AARRGGBB' or {{'argb': ...}}."
        )
    return value


class FontSpec(BaseModel):
    """Font part of an abstract cell style."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str | None = None
    size: float | None = Field(default=None, gt=0)
    bold: bool | None = None
    italic: bool | None = None
    underline: UnderlineType | bool | None = None
    strike: bool | None = None
    color: str | None = None

    @field_validator("color", mode="before")
    @classmethod
    def _validate_color(cls, value: object) -> object:
        return _coerce_color(value)


class FillSpec(BaseModel):
    """Background fill part of an abstract cell style."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    color: str | None = None
    pattern: FillPattern = "solid"

    @field_validator("color", mode="before")
    @classmethod
    def _validate_color(cls, value: object) -> object:
        return _coerce_color(value)

    @model_validator(mode="after")
    def _validate_solid_color(self) -> FillSpec:
        explicit = "pattern" in self.model_fields_set
        if self.color is None and self.pattern == "solid" and explicit:
            raise ValueError("A solid fill requires a color.")
        return self


class AlignmentSpec(BaseModel):
    """Alignment part of an abstract cell style."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    horizontal: HorizontalAlignType | None = None
    vertical: VerticalAlignType | None = None
    wrap_text: bool | None = None
    shrink_to_fit: bool | None = None
    indent: int | None = Field(default=None, ge=0)
    text_rotation: int | None = Field(default=None, ge=0, le=180)


class BorderSideSpec(BaseModel):
    """One border edge."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    style: BorderLineStyle = "thin"
    color: str | None = None

    @field_validator("color", mode="before")
    @classmethod
    def _validate_color(cls, value: object) -> object:
        return _coerce_color(value)


class BorderSpec(BaseModel):
    """Per-side border part of an abstract cell style."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    top: BorderSideSpec | None = None
    left: BorderSideSpec | None = None
    bottom: BorderSideSpec | None = None
    right: BorderSideSpec | None = None


class XLStyle(BaseModel):
    """Abstract style description used throughout sheet definitions."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    font: FontSpec | None = None
    fill: FillSpec | None = None
    alignment: AlignmentSpec | None = None
    border: BorderSpec | None = None


class StaticStyle(BaseModel):
    """Style that does not depend on the cell value."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["static"] = "static"
    style: XLStyle


class ComputedStyle(BaseModel):
    """Style computed per cell from `(value, record, index)`."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["computed"] = "computed"
    fn: Callable[[Any, Any, int], Any]


class NumberFormat(BaseModel):
    """Display number format; the stored value stays unchanged."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["number_format"] = "number_format"
    code: str = Field(..., min_length=1)


class ValueFormatter(BaseModel):
    """Formatter whose return value replaces the stored cell value."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["formatter"] = "formatter"
    fn: Callable[[Any], Any]


StyleSource = StaticStyle | ComputedStyle
FormatSource = NumberFormat | ValueFormatter
RowStyleFn = Callable[[Any, int], Any]


def wrap_style_source(value: object) -> object:
    """Wrap a raw style value or callable into its tagged variant."""
    if value is None or isinstance(value, StaticStyle | ComputedStyle):
        return value
    if callable(value):
        return ComputedStyle(fn=value)
    return StaticStyle(style=XLStyle.model_validate(value))


def wrap_format_source(value: object) -> object:
    """Wrap a raw format string or callable into its tagged variant."""
    if value is None or isinstance(value, NumberFormat | ValueFormatter):
        return value
    if isinstance(value, str):
        return NumberFormat(code=value)
    if callable(value):
        return ValueFormatter(fn=value)
    return value


class ColumnDef(BaseModel):
    """One column of a sheet definition."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    key: str
    header: str = ""
    width: float | Literal["auto"] | None = None
    merge: MergePolicy | None = None
    style: StyleSource | None = None
    format: FormatSource | None = None  # noqa: A003

    @field_validator("key")
    @classmethod
    def _validate_key(cls, value: str) -> str:
        if value == RESERVED_COLUMN_KEY:
            raise ValueError(
                "Column key 'style' is reserved for row styling and cannot be "
                "used as a column key."
            )
        return value

    @field_validator("style", mode="before")
    @classmethod
    def _wrap_style(cls, value: object) -> object:
        return wrap_style_source(value)

    @field_validator("format", mode="before")
    @classmethod
    def _wrap_format(cls, value: object) -> object:
        return wrap_format_source(value)


class HeaderCell(BaseModel):
    """Structured header cell with optional style and span."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    value: Any = None
    style: XLStyle | None = None
    row_span: int = Field(default=1, ge=1)
    col_span: int = Field(default=1, ge=1)


HeaderDescriptor = str | HeaderCell


class HeaderConfig(BaseModel):
    """Custom header rows and a sheet-level header style."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    rows: list[list[HeaderDescriptor]] | None = None
    style: XLStyle | None = None


class RowsConfig(BaseModel):
    """Row-level rendering options."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    style: RowStyleFn | None = None


class AutoWidthConfig(BaseModel):
    """Tuning for `width="auto"` columns."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    padding: float = 2
    header_included: bool = True
    char_width_constant: float = 1.2


class SheetDef(BaseModel):
    """Declarative schema for one worksheet."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    columns: list[ColumnDef] = Field(default_factory=list)
    header: HeaderConfig | None = None
    rows: RowsConfig | None = None
    borders: BorderPreset = "none"
    auto_width: AutoWidthConfig = Field(default_factory=AutoWidthConfig)
    default_style: XLStyle | None = None

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        return validate_sheet_name(value)

    @property
    def header_row_count(self) -> int:
        """Number of header rows; an explicit empty list means no header."""
        if self.header is None or self.header.rows is None:
            return 1
        return len(self.header.rows)

    @property
    def data_start_row(self) -> int:
        """1-based row index of the first data record."""
        return self.header_row_count + 1


class CellStyle(BaseModel):
    """Engine-ready style, one keyword mapping per category."""

    model_config = ConfigDict(frozen=True)

    font: dict[str, Any] = Field(default_factory=dict)
    fill: dict[str, Any] = Field(default_factory=dict)
    alignment: dict[str, Any] = Field(default_factory=dict)
    border: dict[str, dict[str, Any]] = Field(default_factory=dict)

    def is_empty(self) -> bool:
        """Return True when no category carries a property."""
        return not (self.font or self.fill or self.alignment or self.border)


class Cell(BaseModel):
    """Resolved cell handed to the spreadsheet engine."""

    row: int = Field(..., ge=1)
    col: int = Field(..., ge=1)
    value: Any = None
    style: CellStyle = Field(default_factory=CellStyle)
    number_format: str | None = None


class MergeRange(BaseModel):
    """Rectangular merge instruction spanning at least two cells."""

    model_config = ConfigDict(frozen=True)

    start_row: int = Field(..., ge=1)
    start_col: int = Field(..., ge=1)
    end_row: int = Field(..., ge=1)
    end_col: int = Field(..., ge=1)

    @model_validator(mode="after")
    def _validate_span(self) -> MergeRange:
        if self.end_row < self.start_row or self.end_col < self.start_col:
            raise ValueError("Merge range end must not precede its start.")
        if self.end_row == self.start_row and self.end_col == self.start_col:
            raise ValueError("Merge range must span at least two cells.")
        return self

    @property
    def coord(self) -> str:
        """A1 notation of the range."""
        return range_ref(self.start_row, self.start_col, self.end_row, self.end_col)

    def overlaps(self, other: MergeRange) -> bool:
        """Return whether both ranges share at least one cell."""
        return not (
            other.start_row > self.end_row
            or other.end_row < self.start_row
            or other.start_col > self.end_col
            or other.end_col < self.start_col
        )

    def positions(self) -> Iterator[tuple[int, int]]:
        """Yield every (row, col) covered by the range."""
        for row in range(self.start_row, self.end_row + 1):
            for col in range(self.start_col, self.end_col + 1):
                yield row, col


class ColumnPlan(BaseModel):
    """Resolved width and base style for one column."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(..., ge=1)
    key: str
    header: str
    width: float
    base_style: CellStyle | None = None


class SheetLayout(BaseModel):
    """Fully positioned output of one sheet build."""

    model_config = ConfigDict(frozen=True)

    name: str
    columns: list[ColumnPlan] = Field(default_factory=list)
    cells: dict[tuple[int, int], Cell] = Field(default_factory=dict)
    merges: list[MergeRange] = Field(default_factory=list)
    header_row_count: int = Field(..., ge=0)
    data_start_row: int = Field(..., ge=1)

    def get_cell(self, row: int, col: int) -> Cell | None:
        """Return the resolved cell at (row, col), if any."""
        return self.cells.get((row, col))

    def iter_cells(self) -> Iterator[Cell]:
        """Yield cells in row-major order."""
        for key in sorted(self.cells):
            yield self.cells[key]

    @property
    def row_count(self) -> int:
        """Last populated row index (0 for an empty sheet)."""
        return max((row for row, _ in self.cells), default=0)

    @property
    def column_count(self) -> int:
        """Last populated column index (0 for an empty sheet)."""
        return max((col for _, col in self.cells), default=0)


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
    "DEFAULT_COLUMN_WIDTH",
    "FillSpec",
    "FontSpec",
    "FormatSource",
    "HeaderCell",
    "HeaderConfig",
    "HeaderDescriptor",
    "MAX_SHEET_NAME_LENGTH",
    "MergeRange",
    "NumberFormat",
    "RESERVED_COLUMN_KEY",
    "RowsConfig",
    "SheetDef",
    "SheetLayout",
    "StaticStyle",
    "StyleSource",
    "ValueFormatter",
    "XLStyle",
    "validate_sheet_name",
    "wrap_format_source",
    "wrap_style_source",
]

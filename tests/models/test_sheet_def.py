from __future__ import annotations

from pydantic import ValidationError
import pytest

from sheetflow.models import (
    ColumnDef,
    ComputedStyle,
    FontSpec,
    HeaderCell,
    HeaderConfig,
    MergeRange,
    NumberFormat,
    SheetDef,
    StaticStyle,
    ValueFormatter,
    XLStyle,
)


@pytest.mark.parametrize("name", ["A", "Sales 2024", "x" * 31, "売上", "a-b_c (1)"])
def test_valid_sheet_names_are_accepted(name: str) -> None:
    assert SheetDef(name=name).name == name


@pytest.mark.parametrize("char", ["\\", "/", "?", "*", "[", "]", ":"])
def test_sheet_name_with_reserved_character_is_rejected(char: str) -> None:
    with pytest.raises(ValidationError, match="invalid characters"):
        SheetDef(name=f"bad{char}name")


def test_sheet_name_longer_than_31_is_rejected() -> None:
    with pytest.raises(ValidationError, match="exceeds the maximum length of 31"):
        SheetDef(name="x" * 32)


def test_empty_sheet_name_is_rejected() -> None:
    with pytest.raises(ValidationError, match="Sheet name is required"):
        SheetDef(name="")


@pytest.mark.parametrize(
    "extra",
    [{}, {"width": 10}, {"width": "auto", "merge": "vertical"}, {"format": "0.00"}],
)
def test_reserved_style_key_is_rejected(extra: dict[str, object]) -> None:
    with pytest.raises(ValidationError, match="Column key 'style' is reserved"):
        ColumnDef(key="style", header="Style", **extra)


def test_column_style_and_format_are_wrapped_into_variants() -> None:
    static = ColumnDef(key="a", style={"font": {"bold": True}}, format="0.00")
    assert isinstance(static.style, StaticStyle)
    assert static.style.style.font == FontSpec(bold=True)
    assert static.format == NumberFormat(code="0.00")

    computed = ColumnDef(
        key="b", style=lambda value, record, index: None, format=lambda value: value
    )
    assert isinstance(computed.style, ComputedStyle)
    assert isinstance(computed.format, ValueFormatter)


def test_color_accepts_hex_and_argb_mapping() -> None:
    assert FontSpec(color="#FF0000").color == "#FF0000"
    assert FontSpec(color={"argb": "80FF0000"}).color == "80FF0000"
    with pytest.raises(ValidationError, match="Invalid color"):
        XLStyle.model_validate({"fill": {"color": "red"}})


def test_header_row_count_defaults() -> None:
    assert SheetDef(name="A").header_row_count == 1
    assert SheetDef(name="A").data_start_row == 2
    two_rows = SheetDef(
        name="A",
        header=HeaderConfig(rows=[[HeaderCell(value="G", col_span=2)], ["x", "y"]]),
    )
    assert two_rows.header_row_count == 2
    assert two_rows.data_start_row == 3
    headerless = SheetDef(name="A", header=HeaderConfig(rows=[]))
    assert headerless.header_row_count == 0
    assert headerless.data_start_row == 1


def test_header_rows_accept_labels_and_mappings() -> None:
    config = HeaderConfig.model_validate(
        {"rows": [["Name", {"value": "Scores", "col_span": 2}]]}
    )
    assert config.rows is not None
    assert config.rows[0][0] == "Name"
    assert config.rows[0][1] == HeaderCell(value="Scores", col_span=2)


def test_merge_range_requires_two_cells() -> None:
    with pytest.raises(ValidationError, match="at least two cells"):
        MergeRange(start_row=2, start_col=1, end_row=2, end_col=1)


def test_merge_range_coord_and_overlap() -> None:
    merge = MergeRange(start_row=2, start_col=1, end_row=3, end_col=1)
    crossing = MergeRange(start_row=3, start_col=1, end_row=3, end_col=2)
    beside = MergeRange(start_row=2, start_col=2, end_row=3, end_col=2)
    assert merge.coord == "A2:A3"
    assert merge.overlaps(crossing)
    assert crossing.overlaps(merge)
    assert not merge.overlaps(beside)
    assert list(merge.positions()) == [(2, 1), (3, 1)]

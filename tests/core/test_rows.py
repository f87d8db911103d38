from __future__ import annotations

from types import SimpleNamespace

from sheetflow.core.columns import plan_columns
from sheetflow.core.grid import SheetGrid
from sheetflow.core.rows import render_rows
from sheetflow.core.style import map_style
from sheetflow.models import ColumnDef, ColumnPlan, RowsConfig, SheetDef, XLStyle


def _render(sheet_def: SheetDef, records: list[object]) -> SheetGrid:
    grid = SheetGrid()
    render_rows(
        grid,
        sheet_def,
        plan_columns(sheet_def, records),
        records,
        data_start_row=sheet_def.data_start_row,
    )
    return grid


def _negative_red(value: object, record: object, index: int) -> object:
    if isinstance(value, int) and value < 0:
        return {"font": {"color": "#FF0000"}}
    return None


def _italic_first_row(record: object, index: int) -> object:
    return {"font": {"italic": True}} if index == 0 else None


def test_style_layers_apply_from_default_to_computed() -> None:
    sheet_def = SheetDef(
        name="Layers",
        default_style={"font": {"name": "Arial", "color": "#111111"}},
        columns=[
            ColumnDef(
                key="a",
                style={"font": {"bold": True}, "fill": {"color": "#EEEEEE"}},
            ),
            ColumnDef(key="b", style=_negative_red),
        ],
        rows=RowsConfig(style=_italic_first_row),
    )
    records: list[object] = [
        {"a": 1, "b": -1, "style": {"font": {"color": "#0000FF"}}},
        {"a": 2, "b": 3},
    ]
    grid = _render(sheet_def, records)

    first_a = grid.get(2, 1)
    first_b = grid.get(2, 2)
    second_a = grid.get(3, 1)
    second_b = grid.get(3, 2)
    assert first_a is not None and first_b is not None
    assert second_a is not None and second_b is not None

    assert first_a.style.font == {
        "name": "Arial",
        "color": "FF0000FF",
        "bold": True,
        "italic": True,
    }
    assert first_a.style.fill["start_color"] == "FFEEEEEE"
    assert first_b.style.font == {"name": "Arial", "color": "FFFF0000", "italic": True}
    assert first_b.style.fill == {}

    assert second_a.style.font == {"name": "Arial", "color": "FF111111", "bold": True}
    assert second_b.style.font == {"name": "Arial", "color": "FF111111"}


def test_row_style_function_receives_record_and_index() -> None:
    seen: list[tuple[object, int]] = []

    def _row_style(record: object, index: int) -> None:
        seen.append((record, index))

    records: list[object] = [{"a": 1}, {"a": 2}]
    sheet_def = SheetDef(
        name="S", columns=[ColumnDef(key="a")], rows=RowsConfig(style=_row_style)
    )
    _render(sheet_def, records)
    assert seen == [(records[0], 0), (records[1], 1)]


def test_number_format_keeps_value_and_formatter_replaces_it() -> None:
    seen: list[object] = []

    def _track(value: object, record: object, index: int) -> None:
        seen.append(value)

    sheet_def = SheetDef(
        name="Formats",
        columns=[
            ColumnDef(key="price", format="0.00"),
            ColumnDef(key="name", format=str.upper, style=_track),
        ],
    )
    grid = _render(sheet_def, [{"price": 3.5, "name": "alice"}])
    price = grid.get(2, 1)
    name = grid.get(2, 2)
    assert price is not None and name is not None
    assert price.value == 3.5
    assert price.number_format == "0.00"
    assert name.value == "ALICE"
    assert name.number_format is None
    assert seen == ["alice"]


def test_missing_keys_and_attribute_records() -> None:
    sheet_def = SheetDef(name="S", columns=[ColumnDef(key="a"), ColumnDef(key="b")])
    records: list[object] = [{"a": "x"}, SimpleNamespace(a="y", b=2)]
    grid = _render(sheet_def, records)
    assert grid.value(2, 1) == "x"
    assert grid.get(2, 2) is not None
    assert grid.value(2, 2) is None
    assert grid.value(3, 1) == "y"
    assert grid.value(3, 2) == 2


def test_inline_style_is_not_written_as_a_value() -> None:
    sheet_def = SheetDef(name="S", columns=[ColumnDef(key="a")])
    grid = _render(sheet_def, [{"a": 1, "style": {"fill": {"color": "#ABCDEF"}}}])
    assert len(grid) == 1
    cell = grid.get(2, 1)
    assert cell is not None
    assert cell.value == 1
    assert cell.style.fill["start_color"] == "FFABCDEF"


def test_column_function_fill_wins_over_inline_row_and_static_layers() -> None:
    sheet_def = SheetDef(
        name="Precedence",
        columns=[
            ColumnDef(
                key="amount",
                style=lambda value, record, index: {"fill": {"color": "#0000FF"}},
            )
        ],
        rows=RowsConfig(
            style=lambda record, index: {"font": {"color": "#00FF00"}},
        ),
    )
    static_fill = map_style(XLStyle.model_validate({"fill": {"color": "#CCCCCC"}}))
    plans = [
        ColumnPlan(index=1, key="amount", header="", width=15, base_style=static_fill)
    ]
    records: list[object] = [{"amount": 5, "style": {"fill": {"color": "#FFFF00"}}}]
    grid = SheetGrid()
    render_rows(grid, sheet_def, plans, records, data_start_row=2)

    cell = grid.get(2, 1)
    assert cell is not None
    assert cell.style.fill["start_color"] == "FF0000FF"
    assert cell.style.fill["end_color"] == "FF0000FF"
    assert cell.style.font == {"color": "FF00FF00"}

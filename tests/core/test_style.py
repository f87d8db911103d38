from __future__ import annotations

from pydantic import ValidationError
import pytest

from sheetflow.core.style import (
    coerce_style,
    map_style,
    overlay_styles,
    resolve_style,
    to_argb,
)
from sheetflow.errors import SheetDefinitionError
from sheetflow.models import CellStyle, ComputedStyle, StaticStyle, XLStyle


def test_to_argb() -> None:
    assert to_argb("#ff0000") == "FFFF0000"
    assert to_argb("00ff00") == "FF00FF00"
    assert to_argb("80123456") == "80123456"


def test_map_style_translates_every_category() -> None:
    style = XLStyle.model_validate(
        {
            "font": {"bold": True, "color": "#FF0000", "underline": True},
            "fill": {"color": "#CCCCCC"},
            "alignment": {"horizontal": "center", "wrap_text": True},
            "border": {"top": {}, "bottom": {"style": "medium", "color": "#000000"}},
        }
    )
    mapped = map_style(style)
    assert mapped.font == {"bold": True, "underline": "single", "color": "FFFF0000"}
    assert mapped.fill == {
        "fill_type": "solid",
        "start_color": "FFCCCCCC",
        "end_color": "FFCCCCCC",
    }
    assert mapped.alignment == {"horizontal": "center", "wrap_text": True}
    assert mapped.border == {
        "top": {"style": "thin"},
        "bottom": {"style": "medium", "color": "FF000000"},
    }


def test_map_style_none_is_empty() -> None:
    assert map_style(None).is_empty()
    assert map_style(XLStyle(fill={})).fill == {}


def test_map_style_keeps_pattern_fill_without_color() -> None:
    style = XLStyle.model_validate({"fill": {"pattern": "gray125"}})
    assert map_style(style).fill == {"fill_type": "gray125"}


def test_solid_fill_without_color_is_rejected() -> None:
    with pytest.raises(ValidationError, match="A solid fill requires a color"):
        XLStyle.model_validate({"fill": {"pattern": "solid"}})


def test_overlay_replaces_leaf_properties_only() -> None:
    base = CellStyle(
        font={"bold": True, "color": "FFFF0000"},
        fill={"fill_type": "solid", "start_color": "FF0000FF"},
        border={"left": {"style": "dashed"}, "top": {"style": "thin"}},
    )
    top = CellStyle(font={"color": "FF00FF00"}, border={"top": {"style": "medium"}})
    merged = overlay_styles(base, top)
    assert merged.font == {"bold": True, "color": "FF00FF00"}
    assert merged.fill == base.fill
    assert merged.border == {"left": {"style": "dashed"}, "top": {"style": "medium"}}
    assert base.font == {"bold": True, "color": "FFFF0000"}


def test_overlay_with_empty_layers() -> None:
    style = CellStyle(font={"bold": True})
    assert overlay_styles(style, None) is style
    assert overlay_styles(style, CellStyle()) is style
    assert overlay_styles(CellStyle(), style) is style


def test_resolve_static_and_computed_sources() -> None:
    static = StaticStyle(style=XLStyle.model_validate({"font": {"italic": True}}))
    resolved = resolve_style(static, "v", {}, 0)
    assert resolved is not None
    assert resolved.font == {"italic": True}

    calls: list[tuple[object, object, int]] = []

    def _negative_red(value: object, record: object, index: int) -> object:
        calls.append((value, record, index))
        if isinstance(value, int) and value < 0:
            return {"font": {"color": "#FF0000"}}
        return None

    computed = ComputedStyle(fn=_negative_red)
    record = {"amount": -5}
    negative = resolve_style(computed, -5, record, 3)
    assert negative is not None
    assert negative.font == {"color": "FFFF0000"}
    assert resolve_style(computed, 5, record, 4) is None
    assert calls == [(-5, record, 3), (5, record, 4)]
    assert resolve_style(None, 1, {}, 0) is None


def test_coerce_style_rejects_invalid_payload() -> None:
    assert coerce_style({}, context="test") is None
    with pytest.raises(SheetDefinitionError, match="Invalid style from row 2"):
        coerce_style({"font": {"bold": "very"}}, context="row 2")

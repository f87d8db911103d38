from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from ..errors import SheetDefinitionError
from ..models import CellStyle, ComputedStyle, StaticStyle, StyleSource, XLStyle

_FONT_KEYS = ("name", "size", "bold", "italic", "underline", "strike")
_ALIGNMENT_KEYS = (
    "horizontal",
    "vertical",
    "wrap_text",
    "shrink_to_fit",
    "indent",
    "text_rotation",
)


def to_argb(color: str) -> str:
    """Normalize `#RRGGBB`/`RRGGBB`/`AARRGGBB` to uppercase ARGB."""
    text = color.strip().lstrip("#").upper()
    if len(text) == 6:
        return f"FF{text}"
    return text


def coerce_style(raw: object, *, context: str) -> XLStyle | None:
    """Validate a style returned by user code (dict, XLStyle or None).

    Args:
        raw: Candidate style value.
        context: Human readable origin used in error messages.

    Returns:
        Validated style, or None for an empty value.

    Raises:
        SheetDefinitionError: If the value is not a valid style.
    """
    if raw is None or isinstance(raw, XLStyle):
        return raw
    if isinstance(raw, dict) and not raw:
        return None
    try:
        return XLStyle.model_validate(raw)
    except ValidationError as exc:
        raise SheetDefinitionError(f"Invalid style from {context}: {exc}") from exc


def map_style(style: XLStyle | None) -> CellStyle:
    """Translate an abstract style into engine keyword mappings."""
    if style is None:
        return CellStyle()
    font: dict[str, Any] = {}
    if style.font is not None:
        for key in _FONT_KEYS:
            value = getattr(style.font, key)
            if value is None:
                continue
            if key == "underline":
                if value is False:
                    continue
                value = "single" if value is True else value
            font[key] = value
        if style.font.color is not None:
            font["color"] = to_argb(style.font.color)
    fill: dict[str, Any] = {}
    if style.fill is not None and style.fill.color is not None:
        argb = to_argb(style.fill.color)
        fill = {"fill_type": style.fill.pattern, "start_color": argb, "end_color": argb}
    elif style.fill is not None and style.fill.pattern != "solid":
        fill = {"fill_type": style.fill.pattern}
    alignment: dict[str, Any] = {}
    if style.alignment is not None:
        for key in _ALIGNMENT_KEYS:
            value = getattr(style.alignment, key)
            if value is not None:
                alignment[key] = value
    border: dict[str, dict[str, Any]] = {}
    if style.border is not None:
        for side_name in ("top", "left", "bottom", "right"):
            side = getattr(style.border, side_name)
            if side is None:
                continue
            side_kwargs: dict[str, Any] = {"style": side.style}
            if side.color is not None:
                side_kwargs["color"] = to_argb(side.color)
            border[side_name] = side_kwargs
    return CellStyle(font=font, fill=fill, alignment=alignment, border=border)


def overlay_styles(base: CellStyle, top: CellStyle | None) -> CellStyle:
    """Overlay `top` onto `base` category by category.

    Properties set in `top` replace the same properties in `base`; the rest
    of `base` is kept. Border sides are replaced as a whole.
    """
    if top is None or top.is_empty():
        return base
    if base.is_empty():
        return top
    return CellStyle(
        font={**base.font, **top.font},
        fill={**base.fill, **top.fill},
        alignment={**base.alignment, **top.alignment},
        border={**base.border, **top.border},
    )


def resolve_style(
    source: StyleSource | None, value: object, record: object, index: int
) -> CellStyle | None:
    """Resolve a static or computed style source for one cell."""
    if source is None:
        return None
    if isinstance(source, StaticStyle):
        return map_style(source.style)
    if isinstance(source, ComputedStyle):
        computed = coerce_style(
            source.fn(value, record, index), context=f"column style at index {index}"
        )
        return map_style(computed) if computed is not None else None
    raise TypeError(f"Unsupported style source: {type(source).__name__}")


__all__ = ["coerce_style", "map_style", "overlay_styles", "resolve_style", "to_argb"]

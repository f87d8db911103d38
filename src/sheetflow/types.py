from __future__ import annotations

from typing import Literal

MergePolicy = Literal["none", "vertical", "horizontal"]
BorderPreset = Literal["none", "all", "outer", "header-body"]
BorderSideName = Literal["top", "left", "bottom", "right"]
BorderLineStyle = Literal[
    "thin",
    "medium",
    "thick",
    "dashed",
    "dotted",
    "double",
    "hair",
    "mediumDashed",
    "dashDot",
    "mediumDashDot",
    "dashDotDot",
    "mediumDashDotDot",
    "slantDashDot",
]
FillPattern = Literal[
    "solid",
    "darkGray",
    "mediumGray",
    "lightGray",
    "gray125",
    "gray0625",
    "darkHorizontal",
    "darkVertical",
    "darkDown",
    "darkUp",
    "darkGrid",
    "darkTrellis",
    "lightHorizontal",
    "lightVertical",
    "lightDown",
    "lightUp",
    "lightGrid",
    "lightTrellis",
]
UnderlineType = Literal["single", "double", "singleAccounting", "doubleAccounting"]

HorizontalAlignType = Literal[
    "general",
    "left",
    "center",
    "right",
    "fill",
    "justify",
    "centerContinuous",
    "distributed",
]
VerticalAlignType = Literal["top", "center", "bottom", "justify", "distributed"]

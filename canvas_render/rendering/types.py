"""Data structures shared by the façade and the drawing contexts.

StyleState mirrors the mutable style attributes of a 2D context.
SimpleDraw and ClippedDraw select the two image-draw shapes explicitly.
DrawCommand is the immutable record of one context call, and RenderPacket
is the serializable container a RecordingCanvas commits.
"""

from __future__ import annotations

import dataclasses
from typing import Union

STYLE_FIELDS: tuple[str, ...] = (
    "fill_style",
    "stroke_style",
    "line_width",
    "line_join",
    "miter_limit",
    "text_align",
    "font",
)


@dataclasses.dataclass
class StyleState:
    """Style attributes last written to the drawing context.

    Defaults match a freshly created HTML canvas context.  Nothing saves or
    restores these values: each draw call overwrites the fields it needs and
    leaves them set for whatever runs next.
    """

    fill_style: str = "#000000"
    stroke_style: str = "#000000"
    line_width: float = 1.0
    line_join: str = "miter"
    miter_limit: float = 10.0
    text_align: str = "start"
    font: str = "10px sans-serif"

    def as_dict(self) -> dict:
        return dataclasses.asdict(self)


@dataclasses.dataclass(frozen=True)
class SimpleDraw:
    """Draw a whole image with its top-left corner at ``(x, y)``.

    ``w`` and ``h`` default to the image's natural size.
    """

    x: float = 0
    y: float = 0
    w: float | None = None
    h: float | None = None


@dataclasses.dataclass(frozen=True)
class ClippedDraw:
    """Copy the source rectangle ``(sx, sy, sw, sh)`` into ``(dx, dy, dw, dh)``.

    Any omitted width or height defaults to the image's natural size.
    """

    sx: float
    sy: float
    sw: float | None = None
    sh: float | None = None
    dx: float = 0
    dy: float = 0
    dw: float | None = None
    dh: float | None = None


DrawSpec = Union[SimpleDraw, ClippedDraw]


@dataclasses.dataclass(frozen=True)
class DrawCommand:
    """Immutable record of a single drawing-context call.

    :param op: Context operation, e.g. ``"fill_rect"``, ``"arc"``, or
        ``"set"`` for a style attribute write.
    :param params: Arguments of the call, keyed by parameter name.
    """

    op: str
    params: dict = dataclasses.field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.params, dict):
            object.__setattr__(self, "params", dict(self.params))

    def to_dict(self) -> dict:
        return {"op": self.op, **self.params}


@dataclasses.dataclass
class RenderPacket:
    """Wire-format container for the commands recorded since the last commit."""

    width: int
    height: int
    commands: list[DrawCommand] = dataclasses.field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialize to a JSON-ready dict a browser canvas can replay."""
        return {
            "width": self.width,
            "height": self.height,
            "commands": [cmd.to_dict() for cmd in self.commands],
        }

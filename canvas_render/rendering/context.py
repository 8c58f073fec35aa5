"""The drawing-context capability the façade drives, and a recording canvas.

``DrawingContext`` and ``Canvas`` describe what a host surface must offer.
``RecordingCanvas`` implements them by appending a ``DrawCommand`` for each
call; ``commit()`` packs the commands into a ``RenderPacket`` that a browser
``<canvas>`` can replay one call at a time.
"""

from __future__ import annotations

import typing

from .images import ImageHandle
from .types import STYLE_FIELDS, DrawCommand, RenderPacket, StyleState


@typing.runtime_checkable
class DrawingContext(typing.Protocol):
    fill_style: str
    stroke_style: str
    line_width: float
    line_join: str
    miter_limit: float
    text_align: str
    font: str

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None: ...

    def fill_rect(self, x: float, y: float, w: float, h: float) -> None: ...

    def stroke_rect(self, x: float, y: float, w: float, h: float) -> None: ...

    def begin_path(self) -> None: ...

    def move_to(self, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def arc(
        self,
        x: float,
        y: float,
        radius: float,
        start_angle: float,
        end_angle: float,
        counterclockwise: bool = False,
    ) -> None: ...

    def fill(self) -> None: ...

    def stroke(self) -> None: ...

    def fill_text(self, text: str, x: float, y: float) -> None: ...

    def stroke_text(self, text: str, x: float, y: float) -> None: ...

    def draw_image(
        self, image: ImageHandle, dx: float, dy: float, dw: float, dh: float
    ) -> None: ...

    def draw_image_region(
        self,
        image: ImageHandle,
        sx: float,
        sy: float,
        sw: float,
        sh: float,
        dx: float,
        dy: float,
        dw: float,
        dh: float,
    ) -> None: ...


@typing.runtime_checkable
class Canvas(typing.Protocol):
    width: int
    height: int

    def get_context(self) -> DrawingContext: ...


class RecordingContext:
    """Drawing context that records every call instead of drawing.

    Style attribute writes are recorded as ``"set"`` commands, so the exact
    sequence of state changes and draw calls can be inspected or replayed.
    """

    def __init__(self) -> None:
        object.__setattr__(self, "commands", [])
        object.__setattr__(self, "_style", StyleState())

    def __getattr__(self, name: str) -> typing.Any:
        if name in STYLE_FIELDS:
            return getattr(self._style, name)
        raise AttributeError(name)

    def __setattr__(self, name: str, value: typing.Any) -> None:
        if name not in STYLE_FIELDS:
            raise AttributeError(f"{type(self).__name__} has no style {name!r}")
        setattr(self._style, name, value)
        self._record("set", name=name, value=value)

    def _record(self, op: str, **params: typing.Any) -> None:
        self.commands.append(DrawCommand(op=op, params=params))

    def ops(self) -> list[str]:
        """Return the recorded operation names in call order."""
        return [cmd.op for cmd in self.commands]

    def clear_rect(self, x, y, w, h) -> None:
        self._record("clear_rect", x=x, y=y, w=w, h=h)

    def fill_rect(self, x, y, w, h) -> None:
        self._record("fill_rect", x=x, y=y, w=w, h=h)

    def stroke_rect(self, x, y, w, h) -> None:
        self._record("stroke_rect", x=x, y=y, w=w, h=h)

    def begin_path(self) -> None:
        self._record("begin_path")

    def move_to(self, x, y) -> None:
        self._record("move_to", x=x, y=y)

    def line_to(self, x, y) -> None:
        self._record("line_to", x=x, y=y)

    def arc(self, x, y, radius, start_angle, end_angle, counterclockwise=False) -> None:
        self._record(
            "arc",
            x=x,
            y=y,
            radius=radius,
            start_angle=start_angle,
            end_angle=end_angle,
            counterclockwise=counterclockwise,
        )

    def fill(self) -> None:
        self._record("fill")

    def stroke(self) -> None:
        self._record("stroke")

    def fill_text(self, text, x, y) -> None:
        self._record("fill_text", text=text, x=x, y=y)

    def stroke_text(self, text, x, y) -> None:
        self._record("stroke_text", text=text, x=x, y=y)

    def draw_image(self, image, dx, dy, dw, dh) -> None:
        self._record(
            "draw_image", image=image.locator, dx=dx, dy=dy, dw=dw, dh=dh
        )

    def draw_image_region(self, image, sx, sy, sw, sh, dx, dy, dw, dh) -> None:
        self._record(
            "draw_image_region",
            image=image.locator,
            sx=sx,
            sy=sy,
            sw=sw,
            sh=sh,
            dx=dx,
            dy=dy,
            dw=dw,
            dh=dh,
        )


class RecordingCanvas:
    """Canvas whose single context records calls.

    :param width: Width of the drawing area in pixels.
    :param height: Height of the drawing area in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self._context = RecordingContext()

    def get_context(self) -> RecordingContext:
        return self._context

    def commit(self) -> RenderPacket:
        """Pack the commands recorded so far and clear the buffer.

        The context keeps its style state; only the command list resets.
        """
        commands = list(self._context.commands)
        self._context.commands.clear()
        return RenderPacket(width=self.width, height=self.height, commands=commands)

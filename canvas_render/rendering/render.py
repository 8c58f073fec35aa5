"""Named drawing helpers over an immediate-mode 2D drawing context.

``Render`` wraps a canvas and exposes one method per common shape.  Each
method writes the style attributes it needs (fill, stroke, line width,
alignment, font) and then issues the matching context calls.  Style writes
are never undone, so a caller that depends on a style must set it again.

Images are registered by name and drawn with an explicit ``SimpleDraw`` or
``ClippedDraw`` spec::

    render = Render(PillowCanvas(320, 240))
    render.set_image("hero", "sprites/hero.png")
    render.images.wait_all()
    render.draw_image("hero", SimpleDraw(10, 20))
"""

from __future__ import annotations

import logging
import math

from canvas_render.configurations.render_config import RenderConfig

from .context import Canvas, DrawingContext
from .fonts import font_size
from .images import ImageHandle, ImageLoader, ImageRegistry, ThreadedImageLoader
from .types import STYLE_FIELDS, ClippedDraw, DrawSpec, SimpleDraw, StyleState

logger = logging.getLogger(__name__)

FULL_CIRCLE = 2 * math.pi


class Render:
    """Drawing façade bound to one canvas.

    :param canvas: Host canvas supplying ``width``, ``height`` and the
        drawing context.
    :param config: Defaults for fonts, alignment and line widths.
    :param loader: Image loader; defaults to a ``ThreadedImageLoader`` rooted
        at ``config.image_root``.
    """

    def __init__(
        self,
        canvas: Canvas,
        config: RenderConfig | None = None,
        loader: ImageLoader | None = None,
    ) -> None:
        self.canvas = canvas
        self.ctx: DrawingContext = canvas.get_context()
        self.config = config if config is not None else RenderConfig()
        if loader is None:
            loader = ThreadedImageLoader(root=self.config.image_root)
        self.images = ImageRegistry(loader)
        self.style = StyleState(
            **{name: getattr(self.ctx, name) for name in STYLE_FIELDS}
        )
        self._apply(font=self.config.default_font)

    @property
    def width(self) -> int:
        return self.canvas.width

    @property
    def height(self) -> int:
        return self.canvas.height

    def _apply(self, **fields: object) -> None:
        """Write style fields to both the cached state and the context."""
        for name, value in fields.items():
            setattr(self.style, name, value)
            setattr(self.ctx, name, value)

    # ------------------------------------------------------------------
    # Canvas and images
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Clear the whole canvas."""
        self.ctx.clear_rect(0, 0, self.width, self.height)

    def set_image(self, name: str, locator: str) -> ImageHandle:
        """Start loading the image at *locator* and register it as *name*."""
        return self.images.register(name, locator)

    def get_image(self, name: str) -> ImageHandle:
        """Return the handle registered as *name*.

        :raises ImageNotFoundError: If *name* was never registered.
        """
        return self.images.lookup(name)

    def draw_image(self, name: str, spec: DrawSpec | None = None) -> None:
        """Draw the image registered as *name*.

        :param spec: ``SimpleDraw`` to place the whole image, ``ClippedDraw``
            to copy a source rectangle into a destination rectangle.
            Defaults to ``SimpleDraw(0, 0)``.  Omitted widths and heights
            use the image's natural size.
        :raises ImageNotFoundError: If *name* was never registered.
        :raises ImageNotReadyError: If the image has not finished loading or
            failed to load.
        """
        img = self.images.lookup(name)
        img.require_loaded()
        if spec is None:
            spec = SimpleDraw()

        width = img.natural_width
        height = img.natural_height

        if isinstance(spec, SimpleDraw):
            self.ctx.draw_image(
                img,
                spec.x,
                spec.y,
                width if spec.w is None else spec.w,
                height if spec.h is None else spec.h,
            )
        elif isinstance(spec, ClippedDraw):
            self.ctx.draw_image_region(
                img,
                spec.sx,
                spec.sy,
                width if spec.sw is None else spec.sw,
                height if spec.sh is None else spec.sh,
                spec.dx,
                spec.dy,
                width if spec.dw is None else spec.dw,
                height if spec.dh is None else spec.dh,
            )
        else:
            raise TypeError(
                f"spec must be SimpleDraw or ClippedDraw, got {type(spec).__name__}"
            )

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def set_font(self, font: str) -> None:
        """Set the font descriptor, e.g. ``"12px Arial"``.

        Nothing is written when *font* is already the current font.
        """
        if font == self.style.font:
            logger.debug(f"Font already set to {font!r}")
            return
        self._apply(font=font)

    def text(
        self,
        x: float,
        y: float,
        text: str,
        color: str,
        alignment: str | None = None,
    ) -> None:
        """Draw filled text.  Writes ``fill_style`` and ``text_align``."""
        if alignment is None:
            alignment = self.config.text_alignment
        self._apply(fill_style=color, text_align=alignment)
        self.ctx.fill_text(text, x, y)

    def outline_text(
        self,
        x: float,
        y: float,
        text: str,
        color: str,
        outline_color: str | None = None,
        alignment: str | None = None,
    ) -> None:
        """Draw text with an outline, stroked first and filled on top.

        The outline width is the current font size divided by
        ``config.outline_width_divisor`` (``"20px Arial"`` gives 2).

        :raises MalformedFontDescriptorError: If the current font has no
            numeric size.  No style is written in that case.
        """
        size = font_size(self.style.font)
        if outline_color is None:
            outline_color = self.config.outline_color
        if alignment is None:
            alignment = self.config.text_alignment

        self._apply(
            fill_style=color,
            stroke_style=outline_color,
            line_width=size / self.config.outline_width_divisor,
            line_join="miter",
            miter_limit=self.config.miter_limit,
            text_align=alignment,
        )
        self.ctx.stroke_text(text, x, y)
        self.ctx.fill_text(text, x, y)

    # ------------------------------------------------------------------
    # Shapes
    # ------------------------------------------------------------------

    def dot(self, x: float, y: float, color: str) -> None:
        """Fill the single pixel at ``(x, y)``."""
        self.fill_rect(x, y, 1, 1, color)

    def line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        color: str,
        line_width: float | None = None,
    ) -> None:
        """Stroke a straight segment from ``(x1, y1)`` to ``(x2, y2)``."""
        if line_width is None:
            line_width = self.config.line_width
        self.ctx.begin_path()
        self._apply(line_width=line_width, stroke_style=color)
        self.ctx.move_to(x1, y1)
        self.ctx.line_to(x2, y2)
        self.ctx.stroke()

    def rect(
        self,
        x: float,
        y: float,
        w: float,
        h: float,
        color: str,
        line_width: float | None = None,
    ) -> None:
        """Stroke a rectangle outline."""
        if line_width is None:
            line_width = self.config.line_width
        self._apply(line_width=line_width, stroke_style=color)
        self.ctx.stroke_rect(x, y, w, h)

    def fill_rect(self, x: float, y: float, w: float, h: float, color: str) -> None:
        """Fill a rectangle."""
        self._apply(fill_style=color)
        self.ctx.fill_rect(x, y, w, h)

    def border_rect(
        self,
        x: float,
        y: float,
        w: float,
        h: float,
        background_color: str,
        border_color: str,
        line_width: float | None = None,
    ) -> None:
        """Fill a rectangle, then stroke its border on top."""
        self.fill_rect(x, y, w, h, background_color)
        self.rect(x, y, w, h, border_color, line_width)

    def circle(
        self,
        x: float,
        y: float,
        radius: float,
        color: str,
        line_width: float | None = None,
    ) -> None:
        """Stroke a circle centred on ``(x, y)``."""
        if line_width is None:
            line_width = self.config.line_width
        self.ctx.begin_path()
        self._apply(stroke_style=color, line_width=line_width)
        self.ctx.arc(x, y, radius, 0, FULL_CIRCLE, False)
        self.ctx.stroke()

    def fill_circle(self, x: float, y: float, radius: float, color: str) -> None:
        """Fill a disc centred on ``(x, y)``."""
        self.ctx.begin_path()
        self._apply(fill_style=color)
        self.ctx.arc(x, y, radius, 0, FULL_CIRCLE, False)
        self.ctx.fill()

    def border_circle(
        self,
        x: float,
        y: float,
        radius: float,
        background_color: str,
        border_color: str,
        line_width: float | None = None,
    ) -> None:
        """Fill a disc and stroke its outline using a single path."""
        if line_width is None:
            line_width = self.config.line_width
        self.ctx.begin_path()
        self.ctx.arc(x, y, radius, 0, FULL_CIRCLE, False)
        self._apply(fill_style=background_color)
        self.ctx.fill()
        self._apply(line_width=line_width, stroke_style=border_color)
        self.ctx.stroke()

"""A drawing context backed by a Pillow RGBA image.

Paths follow the HTML canvas model: ``begin_path`` starts a new path,
``move_to``/``line_to``/``arc`` extend it, and ``fill``/``stroke`` paint every
subpath collected so far.  Colors are any string ``PIL.ImageColor`` accepts
(CSS names, ``#rgb``, ``#rrggbb``, ``rgb()``, ``hsl()``).
"""

from __future__ import annotations

import functools
import logging
import math

import numpy as np
from PIL import Image, ImageColor, ImageDraw, ImageFont

from .errors import MalformedFontDescriptorError
from .fonts import font_family, font_size_pixels
from .images import ImageHandle

logger = logging.getLogger(__name__)

TRANSPARENT = (0, 0, 0, 0)

# text_align -> Pillow anchor, measured from the alphabetic baseline
_TEXT_ANCHORS = {
    "left": "ls",
    "start": "ls",
    "center": "ms",
    "right": "rs",
    "end": "rs",
}

DEFAULT_FONT_SIZE = 10


@functools.lru_cache(maxsize=32)
def load_font(font: str) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Resolve a CSS-style font descriptor to a Pillow font.

    The first family in the descriptor is tried as a TrueType font; when it
    cannot be found the bundled default font is used at the same size.
    """
    try:
        size = font_size_pixels(font)
        family = font_family(font).split(",")[0].strip().strip("'\"")
    except MalformedFontDescriptorError:
        logger.debug(f"No size in font {font!r}; using {DEFAULT_FONT_SIZE}px")
        size = DEFAULT_FONT_SIZE
        family = font.split(",")[0].strip().strip("'\"")

    pixels = max(1, round(size))
    for candidate in (family, f"{family}.ttf"):
        try:
            return ImageFont.truetype(candidate, pixels)
        except OSError:
            continue
    logger.debug(f"Font family {family!r} not found; using the default font")
    return ImageFont.load_default(size=pixels)


class PillowContext:
    """2D drawing context painting into ``image``."""

    def __init__(self, image: Image.Image) -> None:
        self.image = image
        self.draw = ImageDraw.Draw(image)

        self.fill_style = "#000000"
        self.stroke_style = "#000000"
        self.line_width = 1.0
        self.line_join = "miter"
        self.miter_limit = 10.0
        self.text_align = "start"
        self.font = "10px sans-serif"

        self._subpaths: list[tuple] = []

    def _color(self, style: str) -> tuple:
        return ImageColor.getcolor(style, "RGBA")

    def _stroke_width(self) -> int:
        return max(1, round(self.line_width))

    # ------------------------------------------------------------------
    # Rectangles
    # ------------------------------------------------------------------

    @staticmethod
    def _box(x, y, w, h) -> list[float] | None:
        if w < 0:
            x, w = x + w, -w
        if h < 0:
            y, h = y + h, -h
        if w == 0 or h == 0:
            return None
        # Pillow boxes include their far edge
        return [x, y, max(x, x + w - 1), max(y, y + h - 1)]

    def clear_rect(self, x, y, w, h) -> None:
        box = self._box(x, y, w, h)
        if box is not None:
            self.draw.rectangle(box, fill=TRANSPARENT)

    def fill_rect(self, x, y, w, h) -> None:
        box = self._box(x, y, w, h)
        if box is not None:
            self.draw.rectangle(box, fill=self._color(self.fill_style))

    def stroke_rect(self, x, y, w, h) -> None:
        box = self._box(x, y, w, h)
        if box is not None:
            self.draw.rectangle(
                box,
                outline=self._color(self.stroke_style),
                width=self._stroke_width(),
            )

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def begin_path(self) -> None:
        self._subpaths = []

    def move_to(self, x, y) -> None:
        self._subpaths.append(("points", [(x, y)]))

    def line_to(self, x, y) -> None:
        if self._subpaths and self._subpaths[-1][0] == "points":
            self._subpaths[-1][1].append((x, y))
        else:
            self.move_to(x, y)

    def arc(self, x, y, radius, start_angle, end_angle, counterclockwise=False) -> None:
        if radius < 0:
            raise ValueError(f"arc radius must be non-negative, got {radius}")
        self._subpaths.append(
            ("arc", (x, y, radius, start_angle, end_angle, counterclockwise))
        )

    @staticmethod
    def _arc_geometry(x, y, radius, start_angle, end_angle, counterclockwise):
        box = [x - radius, y - radius, x + radius, y + radius]
        sweep = end_angle - start_angle
        full = abs(sweep) >= 2 * math.pi
        if counterclockwise:
            start_angle, end_angle = end_angle, start_angle
        return box, full, math.degrees(start_angle), math.degrees(end_angle)

    def fill(self) -> None:
        color = self._color(self.fill_style)
        for kind, data in self._subpaths:
            if kind == "points":
                if len(data) >= 3:
                    self.draw.polygon(data, fill=color)
                continue
            box, full, start, end = self._arc_geometry(*data)
            if full:
                self.draw.ellipse(box, fill=color)
            else:
                self.draw.chord(box, start, end, fill=color)

    def stroke(self) -> None:
        color = self._color(self.stroke_style)
        width = self._stroke_width()
        for kind, data in self._subpaths:
            if kind == "points":
                if len(data) >= 2:
                    self.draw.line(data, fill=color, width=width)
                continue
            box, full, start, end = self._arc_geometry(*data)
            if full:
                self.draw.ellipse(box, outline=color, width=width)
            else:
                self.draw.arc(box, start, end, fill=color, width=width)

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def _anchor(self) -> str:
        return _TEXT_ANCHORS.get(self.text_align, "ls")

    def fill_text(self, text, x, y) -> None:
        self.draw.text(
            (x, y),
            text,
            fill=self._color(self.fill_style),
            font=load_font(self.font),
            anchor=self._anchor(),
        )

    def stroke_text(self, text, x, y) -> None:
        color = self._color(self.stroke_style)
        self.draw.text(
            (x, y),
            text,
            fill=color,
            font=load_font(self.font),
            anchor=self._anchor(),
            stroke_width=self._stroke_width(),
            stroke_fill=color,
        )

    # ------------------------------------------------------------------
    # Images
    # ------------------------------------------------------------------

    def _blit(self, source: Image.Image, dx, dy, dw, dh) -> None:
        size = (round(dw), round(dh))
        if size[0] <= 0 or size[1] <= 0:
            return
        if source.size != size:
            source = source.resize(size)
        source = source.convert("RGBA")
        self.image.paste(source, (round(dx), round(dy)), source)

    def draw_image(self, image: ImageHandle, dx, dy, dw, dh) -> None:
        self._blit(image.resource, dx, dy, dw, dh)

    def draw_image_region(
        self, image: ImageHandle, sx, sy, sw, sh, dx, dy, dw, dh
    ) -> None:
        region = image.resource.crop(
            (round(sx), round(sy), round(sx + sw), round(sy + sh))
        )
        self._blit(region, dx, dy, dw, dh)


class PillowCanvas:
    """Transparent RGBA canvas of ``width`` x ``height`` pixels."""

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.image = Image.new("RGBA", (width, height), TRANSPARENT)
        self._context = PillowContext(self.image)

    def get_context(self) -> PillowContext:
        return self._context

    def snapshot(self) -> np.ndarray:
        """Return a copy of the pixels as a ``(height, width, 4)`` uint8 array."""
        return np.array(self.image, dtype=np.uint8)

    def save(self, path: str, **kwargs) -> None:
        self.image.save(path, **kwargs)

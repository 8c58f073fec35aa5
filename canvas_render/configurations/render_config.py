from __future__ import annotations

import logging
import os

from canvas_render.utils.sentinels import NotProvided

logger = logging.getLogger(__name__)

IMAGE_ROOT_ENV = "CANVAS_RENDER_IMAGE_ROOT"


class RenderConfig:
    def __init__(self):

        # Text
        self.default_font: str = "12px Arial"
        self.text_alignment: str = "left"
        self.outline_color: str = "black"
        self.outline_width_divisor: float = 10
        self.miter_limit: float = 2

        # Strokes
        self.line_width: float = 1

        # Images
        self.image_root: str | None = os.environ.get(IMAGE_ROOT_ENV) or None

    def text(
        self,
        default_font: str = NotProvided,
        alignment: str = NotProvided,
        outline_color: str = NotProvided,
        outline_width_divisor: float = NotProvided,
        miter_limit: float = NotProvided,
    ) -> RenderConfig:
        """
        Configure the defaults used by text drawing.

        Args:
            default_font: Font descriptor written to the context when the
                façade is created (e.g. "12px Arial").
            alignment: Text alignment used when a call does not pass one.
            outline_color: Outline color for outline_text.
            outline_width_divisor: outline_text strokes with the font size
                divided by this value.
            miter_limit: Miter limit applied to outlined glyphs.
        """
        if default_font is not NotProvided:
            self.default_font = default_font

        if alignment is not NotProvided:
            self.text_alignment = alignment

        if outline_color is not NotProvided:
            self.outline_color = outline_color

        if outline_width_divisor is not NotProvided:
            if outline_width_divisor <= 0:
                raise ValueError(
                    f"outline_width_divisor must be positive, got {outline_width_divisor}"
                )
            self.outline_width_divisor = outline_width_divisor

        if miter_limit is not NotProvided:
            if miter_limit <= 0:
                raise ValueError(f"miter_limit must be positive, got {miter_limit}")
            self.miter_limit = miter_limit

        return self

    def strokes(self, line_width: float = NotProvided) -> RenderConfig:
        if line_width is not NotProvided:
            if line_width <= 0:
                raise ValueError(f"line_width must be positive, got {line_width}")
            self.line_width = line_width

        return self

    def images(self, root: str | None = None) -> RenderConfig:
        """
        Configure where relative image locators are resolved.

        The root can be provided directly or via the CANVAS_RENDER_IMAGE_ROOT
        environment variable.
        """
        resolved_root = root or os.environ.get(IMAGE_ROOT_ENV)

        if resolved_root:
            self.image_root = resolved_root
            logger.info(f"Resolving image locators against {resolved_root}")
        else:
            self.image_root = None
            logger.debug(
                f"No image root set; pass root= or set {IMAGE_ROOT_ENV} to "
                "resolve relative locators."
            )

        return self

    def to_dict(self) -> dict:
        return {
            "default_font": self.default_font,
            "text_alignment": self.text_alignment,
            "outline_color": self.outline_color,
            "outline_width_divisor": self.outline_width_divisor,
            "miter_limit": self.miter_limit,
            "line_width": self.line_width,
            "image_root": self.image_root,
        }

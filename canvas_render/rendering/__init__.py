"""Canvas-style drawing helpers with a named image registry."""

from __future__ import annotations

from .context import Canvas, DrawingContext, RecordingCanvas, RecordingContext
from .errors import (
    ImageNotFoundError,
    ImageNotReadyError,
    MalformedFontDescriptorError,
    RenderError,
)
from .images import ImageHandle, ImageLoader, ImageRegistry, ThreadedImageLoader
from .pillow_canvas import PillowCanvas, PillowContext
from .render import Render
from .types import (
    ClippedDraw,
    DrawCommand,
    DrawSpec,
    RenderPacket,
    SimpleDraw,
    StyleState,
)

__all__ = [
    "Canvas",
    "ClippedDraw",
    "DrawCommand",
    "DrawSpec",
    "DrawingContext",
    "ImageHandle",
    "ImageLoader",
    "ImageNotFoundError",
    "ImageNotReadyError",
    "ImageRegistry",
    "MalformedFontDescriptorError",
    "PillowCanvas",
    "PillowContext",
    "Render",
    "RecordingCanvas",
    "RecordingContext",
    "RenderError",
    "RenderPacket",
    "SimpleDraw",
    "StyleState",
    "ThreadedImageLoader",
]

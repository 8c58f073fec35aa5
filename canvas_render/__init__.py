"""Named drawing helpers on top of an immediate-mode 2D canvas."""

from __future__ import annotations

from canvas_render.configurations.render_config import RenderConfig
from canvas_render.rendering import Render

__all__ = ["Render", "RenderConfig"]

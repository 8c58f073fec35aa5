"""Exceptions raised by the rendering façade."""

from __future__ import annotations


class RenderError(Exception):
    """Base class for all rendering errors."""


class ImageNotFoundError(RenderError, KeyError):
    """An image name was looked up that was never registered."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"No image registered under {self.name!r}"


class ImageNotReadyError(RenderError):
    """An image was drawn before its decode finished, or after it failed.

    When the decode failed, the loader's exception is chained as
    ``__cause__``.
    """

    def __init__(self, name: str, locator: str, *, failed: bool = False) -> None:
        self.name = name
        self.locator = locator
        self.failed = failed
        state = "failed to load" if failed else "has not finished loading"
        super().__init__(f"Image {name!r} ({locator}) {state}")


class MalformedFontDescriptorError(RenderError, ValueError):
    """A font descriptor carries no numeric size token."""

    def __init__(self, font: str) -> None:
        self.font = font
        super().__init__(f"Font descriptor has no numeric size: {font!r}")

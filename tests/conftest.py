"""
Shared pytest fixtures for canvas_render tests.

Provides:
- FakeImage / ImmediateLoader / ManualLoader: deterministic image loading
  so registry and draw tests never touch the filesystem or threads.
- canvas: a RecordingCanvas that records every context call.
- render: a Render bound to ``canvas`` with an ImmediateLoader.
"""

from __future__ import annotations

import dataclasses

import pytest

from canvas_render.rendering import ImageHandle, RecordingCanvas, Render


@dataclasses.dataclass
class FakeImage:
    width: int
    height: int


class ImmediateLoader:
    """Resolve every handle synchronously with a fixed-size FakeImage."""

    def __init__(self, sizes=None, default=(32, 16)):
        self.sizes = dict(sizes or {})
        self.default = default
        self.loaded: list[str] = []

    def load(self, name, locator):
        handle = ImageHandle(name, locator)
        width, height = self.sizes.get(locator, self.default)
        handle.resolve(FakeImage(width, height))
        self.loaded.append(locator)
        return handle


class ManualLoader:
    """Hand out handles that stay pending until the test resolves them."""

    def __init__(self):
        self.handles: list[ImageHandle] = []

    def load(self, name, locator):
        handle = ImageHandle(name, locator)
        self.handles.append(handle)
        return handle


@pytest.fixture
def canvas():
    return RecordingCanvas(800, 600)


@pytest.fixture
def loader():
    return ImmediateLoader(sizes={"hero.png": (64, 48), "tiles.png": (256, 128)})


@pytest.fixture
def render(canvas, loader):
    r = Render(canvas, loader=loader)
    # Drop the initial font write so tests only see their own calls.
    canvas.commit()
    return r


@pytest.fixture
def manual_loader():
    return ManualLoader()


@pytest.fixture
def fake_image():
    return FakeImage


@pytest.fixture
def make_render(canvas, loader):
    """Build a Render on ``canvas``; the initial font write is discarded."""

    def _make(config=None, loader=loader):
        r = Render(canvas, config=config, loader=loader)
        canvas.commit()
        return r

    return _make

"""Unit tests for canvas_render.rendering.images.

Covers ImageHandle lifecycle, ImageRegistry semantics (last write wins,
explicit not-found, insertion order) and the threaded Pillow loader.
"""

from __future__ import annotations

import logging
import os

import pytest
from PIL import Image

from canvas_render.rendering import (
    ImageHandle,
    ImageNotFoundError,
    ImageNotReadyError,
    ImageRegistry,
    ThreadedImageLoader,
)
from canvas_render.rendering.images import decode_image

# ======================================================================
# ImageHandle
# ======================================================================


class TestImageHandle:
    def test_pending_handle(self) -> None:
        h = ImageHandle("hero", "hero.png")
        assert not h.loaded
        assert not h.failed
        assert h.natural_width == 0
        assert h.natural_height == 0
        assert h.wait(timeout=0) is False
        assert "loading" in repr(h)

    def test_resolved_handle(self, fake_image) -> None:
        h = ImageHandle("hero", "hero.png")
        h.resolve(fake_image(10, 20))
        assert h.loaded
        assert (h.natural_width, h.natural_height) == (10, 20)
        assert h.wait(timeout=0) is True
        assert "10x20" in repr(h)

    def test_failed_handle_keeps_zero_size(self) -> None:
        h = ImageHandle("hero", "hero.png")
        error = OSError("truncated")
        h.fail(error)
        assert h.failed
        assert not h.loaded
        assert h.error is error
        assert h.natural_width == 0
        assert h.wait(timeout=0) is False

    def test_require_loaded_pending(self) -> None:
        h = ImageHandle("hero", "hero.png")
        with pytest.raises(ImageNotReadyError) as exc_info:
            h.require_loaded()
        assert exc_info.value.name == "hero"
        assert exc_info.value.locator == "hero.png"
        assert "has not finished loading" in str(exc_info.value)

    def test_require_loaded_failed(self) -> None:
        h = ImageHandle("hero", "hero.png")
        h.fail(OSError("bad"))
        with pytest.raises(ImageNotReadyError, match="failed to load"):
            h.require_loaded()


# ======================================================================
# ImageRegistry
# ======================================================================


class TestImageRegistry:
    def test_register_and_lookup(self, loader) -> None:
        reg = ImageRegistry(loader)
        handle = reg.register("hero", "hero.png")
        assert reg.lookup("hero") is handle
        assert "hero" in reg
        assert loader.loaded == ["hero.png"]

    def test_lookup_missing(self, loader) -> None:
        reg = ImageRegistry(loader)
        reg.register("hero", "hero.png")
        for name in ["villain", "Hero", "hero.png"]:
            with pytest.raises(ImageNotFoundError) as exc_info:
                reg.lookup(name)
            assert exc_info.value.name == name
            assert name in str(exc_info.value)

    def test_last_write_wins(self, loader) -> None:
        reg = ImageRegistry(loader)
        old = reg.register("hero", "hero.png")
        new = reg.register("hero", "tiles.png")
        assert reg.lookup("hero") is new
        assert old is not new
        assert len(reg) == 1
        # The old handle is dropped, not cancelled.
        assert old.loaded

    def test_iteration_is_insertion_ordered(self, loader) -> None:
        reg = ImageRegistry(loader)
        for name in ["c", "a", "b"]:
            reg.register(name, f"{name}.png")
        reg.register("c", "c2.png")
        assert list(reg) == ["a", "b", "c"]

    def test_wait_all(self, manual_loader, fake_image) -> None:
        reg = ImageRegistry(manual_loader)
        reg.register("a", "a.png")
        reg.register("b", "b.png")
        assert reg.wait_all(timeout=0) is False
        for handle in manual_loader.handles:
            handle.resolve(fake_image(1, 1))
        assert reg.wait_all(timeout=0) is True

    def test_default_loader_is_threaded(self) -> None:
        assert isinstance(ImageRegistry().loader, ThreadedImageLoader)


# ======================================================================
# ThreadedImageLoader
# ======================================================================


@pytest.fixture
def png_path(tmp_path):
    path = tmp_path / "sprite.png"
    Image.new("RGBA", (12, 7), (255, 0, 0, 255)).save(path)
    return path


class TestThreadedImageLoader:
    @pytest.mark.timeout(10)
    def test_decodes_in_background(self, png_path) -> None:
        handle = ThreadedImageLoader().load("sprite", str(png_path))
        assert handle.wait(timeout=5)
        assert (handle.natural_width, handle.natural_height) == (12, 7)
        assert handle.resource.mode == "RGBA"

    @pytest.mark.timeout(10)
    def test_relative_locator_uses_root(self, png_path) -> None:
        loader = ThreadedImageLoader(root=str(png_path.parent))
        handle = loader.load("sprite", "sprite.png")
        assert handle.wait(timeout=5)
        assert handle.natural_width == 12

    def test_absolute_locator_ignores_root(self, tmp_path) -> None:
        loader = ThreadedImageLoader(root="/assets")
        absolute = str(tmp_path / "x.png")
        assert loader.resolve_path(absolute) == absolute
        assert loader.resolve_path("x.png") == os.path.join("/assets", "x.png")

    @pytest.mark.timeout(10)
    def test_missing_file_fails(self, tmp_path, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="canvas_render.rendering.images"):
            handle = ThreadedImageLoader().load("ghost", str(tmp_path / "nope.png"))
            assert handle.wait(timeout=5) is False
        assert handle.failed
        assert isinstance(handle.error, FileNotFoundError)
        assert "ghost" in caplog.text

    @pytest.mark.timeout(10)
    def test_custom_decoder(self, fake_image) -> None:
        seen = []

        def decoder(path):
            seen.append(path)
            return fake_image(3, 4)

        handle = ThreadedImageLoader(root="assets", decoder=decoder).load("a", "a.png")
        assert handle.wait(timeout=5)
        assert seen == [os.path.join("assets", "a.png")]
        assert handle.natural_height == 4

    def test_decode_image_converts_to_rgba(self, tmp_path) -> None:
        path = tmp_path / "gray.png"
        Image.new("L", (2, 3), 128).save(path)
        img = decode_image(str(path))
        assert img.mode == "RGBA"
        assert img.size == (2, 3)

"""Named image registry and background image loading.

Images are registered under a caller-chosen name.  Registration hands the
locator to an ``ImageLoader`` which starts decoding in the background and
returns an ``ImageHandle`` immediately; the handle reports its natural size
once the decode completes.
"""

from __future__ import annotations

import logging
import os
import threading
import typing

from PIL import Image

from .errors import ImageNotFoundError, ImageNotReadyError

logger = logging.getLogger(__name__)


class ImageHandle:
    """Reference to an image resource that may still be decoding.

    ``natural_width`` and ``natural_height`` are ``0`` until the decode
    finishes and stay ``0`` if it fails.

    :param name: Registry name the handle was created for.
    :param locator: Path or URI the image is loaded from.
    """

    def __init__(self, name: str, locator: str) -> None:
        self.name = name
        self.locator = locator
        self._resource: typing.Any = None
        self._error: BaseException | None = None
        self._done = threading.Event()

    def __repr__(self) -> str:
        if self.loaded:
            state = f"{self.natural_width}x{self.natural_height}"
        elif self.failed:
            state = "failed"
        else:
            state = "loading"
        return f"ImageHandle({self.name!r}, {self.locator!r}, {state})"

    def resolve(self, resource: typing.Any) -> None:
        """Attach the decoded resource and mark the handle as loaded.

        *resource* must expose ``width`` and ``height``.
        """
        self._resource = resource
        self._done.set()

    def fail(self, error: BaseException) -> None:
        """Record a decode failure.  The handle never becomes loaded."""
        self._error = error
        self._done.set()

    @property
    def resource(self) -> typing.Any:
        return self._resource

    @property
    def error(self) -> BaseException | None:
        return self._error

    @property
    def loaded(self) -> bool:
        return self._done.is_set() and self._error is None

    @property
    def failed(self) -> bool:
        return self._error is not None

    @property
    def natural_width(self) -> int:
        return self._resource.width if self.loaded else 0

    @property
    def natural_height(self) -> int:
        return self._resource.height if self.loaded else 0

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the decode finishes; return ``True`` if it succeeded."""
        self._done.wait(timeout)
        return self.loaded

    def require_loaded(self) -> None:
        """Raise ``ImageNotReadyError`` unless the handle is loaded."""
        if self.loaded:
            return
        err = ImageNotReadyError(self.name, self.locator, failed=self.failed)
        raise err from self._error


class ImageLoader(typing.Protocol):
    def load(self, name: str, locator: str) -> ImageHandle: ...


def decode_image(path: str) -> Image.Image:
    """Open *path* with Pillow and force the pixel data to be read."""
    with Image.open(path) as img:
        img.load()
        return img.convert("RGBA")


class ThreadedImageLoader:
    """Decode each image on its own daemon thread.

    :param root: Directory relative locators are resolved against.
    :param decoder: Callable turning a path into a resource with ``width``
        and ``height``.  Defaults to :func:`decode_image`.
    """

    def __init__(
        self,
        root: str | None = None,
        decoder: typing.Callable[[str], typing.Any] = decode_image,
    ) -> None:
        self.root = root
        self.decoder = decoder

    def resolve_path(self, locator: str) -> str:
        if self.root is None or os.path.isabs(locator):
            return locator
        return os.path.join(self.root, locator)

    def load(self, name: str, locator: str) -> ImageHandle:
        handle = ImageHandle(name, locator)
        thread = threading.Thread(
            target=self._decode,
            args=(handle, self.resolve_path(locator)),
            name=f"image-loader-{name}",
            daemon=True,
        )
        thread.start()
        return handle

    def _decode(self, handle: ImageHandle, path: str) -> None:
        try:
            resource = self.decoder(path)
        except Exception as e:
            logger.warning(f"Failed to load image {handle.name!r} from {path}: {e}")
            handle.fail(e)
            return
        logger.debug(
            f"Loaded image {handle.name!r} ({resource.width}x{resource.height})"
        )
        handle.resolve(resource)


class ImageRegistry:
    """Insertion-ordered mapping from image name to ``ImageHandle``.

    Entries are only ever added or replaced, never removed.  Registering a
    name again drops the old handle without cancelling its load.

    :param loader: Loader used to start decoding registered images.
    """

    def __init__(self, loader: ImageLoader | None = None) -> None:
        self.loader = loader if loader is not None else ThreadedImageLoader()
        self._handles: dict[str, ImageHandle] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._handles

    def __len__(self) -> int:
        return len(self._handles)

    def __iter__(self) -> typing.Iterator[str]:
        return iter(list(self._handles))

    def register(self, name: str, locator: str) -> ImageHandle:
        """Start loading *locator* and store the handle under *name*."""
        handle = self.loader.load(name, locator)
        if self._handles.pop(name, None) is not None:
            logger.debug(f"Replacing image {name!r} with {locator}")
        else:
            logger.debug(f"Registered image {name!r} from {locator}")
        self._handles[name] = handle
        return handle

    def lookup(self, name: str) -> ImageHandle:
        """Return the handle registered under *name*.

        :raises ImageNotFoundError: If *name* was never registered.
        """
        try:
            return self._handles[name]
        except KeyError:
            raise ImageNotFoundError(name) from None

    def wait_all(self, timeout: float | None = None) -> bool:
        """Wait for every registered image; ``True`` if all loaded.

        *timeout* applies to each handle in turn.
        """
        return all([handle.wait(timeout) for handle in list(self._handles.values())])

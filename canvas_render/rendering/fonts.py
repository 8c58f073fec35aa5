"""Helpers for CSS-style font descriptors such as ``"bold 20px Arial"``."""

from __future__ import annotations

import re

from .errors import MalformedFontDescriptorError

# A size carries a unit; weights like "700" do not.
_UNIT_SIZE_RE = re.compile(r"(?<![\w.])(\d+(?:\.\d+)?)(px|pt|em|rem|%)(?![\w])")
_BARE_SIZE_RE = re.compile(r"(\d+(?:\.\d+)?)")

# CSS absolute lengths relative to one pixel; em/rem/% against a 16px root.
_UNIT_PIXELS = {
    "px": 1.0,
    "pt": 4 / 3,
    "em": 16.0,
    "rem": 16.0,
    "%": 16 / 100,
}


def _size_match(font: str) -> re.Match:
    match = _UNIT_SIZE_RE.search(font)
    if match is None:
        match = _BARE_SIZE_RE.search(font)
    if match is None:
        raise MalformedFontDescriptorError(font)
    return match


def font_size(font: str) -> float:
    """Return the numeric part of the size token in *font*.

    The first number carrying a unit (``px``, ``pt``, ``em``, ``rem``, ``%``)
    is the size, so ``"700 20px Arial"`` gives 20.  Without any unit the
    first bare number is used.

    :raises MalformedFontDescriptorError: If *font* contains no digits.
    """
    return float(_size_match(font).group(1))


def font_size_pixels(font: str) -> float:
    """Return the size of *font* converted to pixels (``"12pt"`` is 16)."""
    match = _size_match(font)
    unit = match.group(2) if match.re is _UNIT_SIZE_RE else "px"
    return float(match.group(1)) * _UNIT_PIXELS[unit]


def font_family(font: str) -> str:
    """Return the family part of *font*, i.e. everything after the size token.

    Falls back to ``"sans-serif"`` when nothing follows the size.
    """
    match = _size_match(font)
    family = font[match.end():].strip()
    # "12px/1.5 Arial" carries a line height after the size
    if family.startswith("/"):
        family = family.partition(" ")[2].strip()
    return family.strip("'\"") or "sans-serif"

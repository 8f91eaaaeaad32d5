"""Palette variants stored alongside ICI images.

A palette is exactly one of four shapes:

* :class:`NoPalette`     -- no palette data
* :class:`PaletteId`     -- 16-bit reference to a palette known by the reader
* :class:`PaletteName`   -- 1..255 byte UTF-8 name known by the reader
* :class:`PaletteColors` -- 1..255 explicit colors

Consumers dispatch with ``isinstance`` over :data:`PALETTE_TYPES` and end
with :func:`unknown_palette` so that a new variant fails loudly everywhere it
is not handled yet.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, NoReturn, Optional, Sequence, Tuple, Union

from .color import TRANSPARENT, Color
from .errors import CountOutOfRange

PAL_NO_DATA = 0
PAL_ID = 1
PAL_NAME = 2
PAL_COLORS = 3

MAX_PALETTE_ID = 0xFFFF
MAX_NAME_BYTES = 255
MAX_COLORS = 255


@dataclass(frozen=True)
class NoPalette:
    """The image carries no palette information."""


@dataclass(frozen=True)
class PaletteId:
    id: int

    def __post_init__(self) -> None:
        if not 0 <= self.id <= MAX_PALETTE_ID:
            raise CountOutOfRange(0, MAX_PALETTE_ID, self.id, "palette id")


@dataclass(frozen=True)
class PaletteName:
    name: str

    def __post_init__(self) -> None:
        size = len(self.name.encode("utf-8"))
        if not 1 <= size <= MAX_NAME_BYTES:
            raise CountOutOfRange(1, MAX_NAME_BYTES, size, "palette name length")


@dataclass(frozen=True)
class PaletteColors:
    colors: Tuple[Color, ...]

    def __post_init__(self) -> None:
        colors = tuple(self.colors)
        if not 1 <= len(colors) <= MAX_COLORS:
            raise CountOutOfRange(1, MAX_COLORS, len(colors), "palette color count")
        for color in colors:
            if not isinstance(color, Color):
                raise TypeError(f"Palette colors must be Color instances, got {color!r}")
        object.__setattr__(self, "colors", colors)

    def __len__(self) -> int:
        return len(self.colors)


Palette = Union[NoPalette, PaletteId, PaletteName, PaletteColors]
PALETTE_TYPES = (NoPalette, PaletteId, PaletteName, PaletteColors)


def unknown_palette(palette: object) -> NoReturn:
    raise TypeError(f"Unsupported palette variant: {palette!r}")


def as_palette(value: Union[Palette, Sequence[Color], None]) -> Palette:
    """Accept a palette variant, a plain sequence of colors, or ``None``."""
    if value is None:
        return NoPalette()
    if isinstance(value, PALETTE_TYPES):
        return value
    return PaletteColors(tuple(value))


def palette_tag(palette: Palette) -> int:
    if isinstance(palette, NoPalette):
        return PAL_NO_DATA
    if isinstance(palette, PaletteId):
        return PAL_ID
    if isinstance(palette, PaletteName):
        return PAL_NAME
    if isinstance(palette, PaletteColors):
        return PAL_COLORS
    unknown_palette(palette)


def describe_palette(palette: Palette) -> str:
    if isinstance(palette, NoPalette):
        return "none"
    if isinstance(palette, PaletteId):
        return f"id {palette.id}"
    if isinstance(palette, PaletteName):
        return f"name {palette.name!r}"
    if isinstance(palette, PaletteColors):
        return f"{len(palette.colors)} colors"
    unknown_palette(palette)


def explicit_colors(palette: Palette) -> Optional[List[Color]]:
    """Return a copy of the palette's colors, or ``None`` when it names none."""
    if isinstance(palette, PaletteColors):
        return list(palette.colors)
    if isinstance(palette, (NoPalette, PaletteId, PaletteName)):
        return None
    unknown_palette(palette)


def highest_index(pixels: Iterable[int]) -> int:
    return max(pixels, default=0)


def synthesize_colors(pixels: Iterable[int]) -> List[Color]:
    """Fully transparent palette covering every index used by ``pixels``."""
    return [TRANSPARENT] * (highest_index(pixels) + 1)


def effective_colors(palette: Palette, pixels: Iterable[int]) -> List[Color]:
    colors = explicit_colors(palette)
    if colors is None:
        return synthesize_colors(pixels)
    return colors


def _distinct_count(colors: Sequence[Color]) -> int:
    return len(set(colors))


def simplify_palette(colors: Sequence[Color], threshold: int) -> List[Color]:
    """Merge colors whose :meth:`Color.diff` is below ``threshold``.

    Merged slots both receive the midpoint color, so the result has the same
    length and every pixel index keeps pointing at a similar color.
    """
    output = list(colors)
    idx = 0
    while idx < len(output):
        merge_with = None
        for i, candidate in enumerate(output):
            diff = output[idx].diff(candidate)
            if i != idx and 0 < diff < threshold:
                merge_with = i
                break
        if merge_with is None:
            idx += 1
            continue
        merged = output[idx].mid(output[merge_with])
        output[idx] = merged
        output[merge_with] = merged
    return output


def simplify_palette_to_fit(colors: Sequence[Color], max_colors: int) -> List[Color]:
    """Repeatedly merge similar colors until fewer than ``max_colors`` remain distinct."""
    if max_colors < 2:
        raise ValueError("max_colors must be at least 2")
    output = list(colors)
    threshold = 2
    while _distinct_count(output) >= max_colors:
        output = simplify_palette(output, threshold)
        threshold += 10
    return output

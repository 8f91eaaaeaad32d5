"""Static indexed-color image."""
from __future__ import annotations

from typing import List, Mapping, Sequence, Tuple, Union

from .color import TRANSPARENT, Color
from .errors import CountOutOfRange, DimensionMismatch, IndexOutOfRange
from .palette import (
    Palette,
    PaletteColors,
    as_palette,
    effective_colors,
    explicit_colors,
    highest_index,
)
from .transforms import (
    MAX_DIMENSION,
    Flip,
    Rotation,
    Transform,
    coerce_transform,
    remap_frames,
    replace_indices,
)

PaletteLike = Union[Palette, Sequence[Color], None]


def check_dimension(value: int, what: str) -> None:
    if not 1 <= value <= MAX_DIMENSION:
        raise CountOutOfRange(1, MAX_DIMENSION, value, what)


def to_pixel_buffer(pixels: Sequence[int]) -> bytearray:
    try:
        return bytearray(pixels)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Pixel values must be integers between 0 and 255: {exc}") from exc


class PalettedPixels:
    """Pixel buffer plus palette handling shared by static and animated images.

    ``palette`` is what the codec persists; ``colors`` is the effective color
    list. For palettes without explicit colors, ``colors`` is a synthesized,
    fully transparent list of exactly ``max(pixels) + 1`` entries. It is resized
    whenever the indices in use change; edits to slots that stay in range are
    kept. Equality ignores it because it is never persisted.
    """

    _width: int
    _height: int
    _pixels: bytearray
    _palette: Palette
    _colors: List[Color]

    def _init_fields(self, width: int, height: int, pixels: bytearray, palette: Palette) -> None:
        self._width = width
        self._height = height
        self._pixels = pixels
        self._palette = palette
        self._colors = effective_colors(palette, pixels)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> Tuple[int, int]:
        return self._width, self._height

    @property
    def pixels(self) -> bytes:
        return bytes(self._pixels)

    @property
    def palette(self) -> Palette:
        return self._palette

    @property
    def colors(self) -> List[Color]:
        return list(self._colors)

    def has_explicit_colors(self) -> bool:
        return isinstance(self._palette, PaletteColors)

    def pixel_index(self, x: int, y: int) -> int:
        if not 0 <= x < self._width:
            raise IndexOutOfRange(x, self._width, "width")
        if not 0 <= y < self._height:
            raise IndexOutOfRange(y, self._height, "height")
        return y * self._width + x

    def min_palette_size_supported(self) -> int:
        return highest_index(self._pixels) + 1

    def get_color(self, slot: int) -> Color:
        if not 0 <= slot < len(self._colors):
            raise IndexOutOfRange(slot, len(self._colors), "palette")
        return self._colors[slot]

    def set_color(self, slot: int, color: Color) -> None:
        """Replace the color at ``slot``; pixel indices are untouched."""
        if not 0 <= slot < len(self._colors):
            raise IndexOutOfRange(slot, len(self._colors), "palette")
        self._colors[slot] = color
        if isinstance(self._palette, PaletteColors):
            self._palette = PaletteColors(tuple(self._colors))

    def set_palette(self, palette: PaletteLike) -> None:
        self._palette = as_palette(palette)
        self._colors = effective_colors(self._palette, self._pixels)

    def set_palette_replace_id(self, palette: PaletteLike, replacement: int) -> None:
        """Set an explicit palette; indices it does not cover become ``replacement``."""
        new_palette = as_palette(palette)
        colors = explicit_colors(new_palette)
        if colors is None:
            raise TypeError("set_palette_replace_id requires explicit colors")
        if not 0 <= replacement < len(colors):
            raise IndexOutOfRange(replacement, len(colors), "palette")
        mapping = {idx: replacement for idx in range(len(colors), 256)}
        self._pixels = replace_indices(self._pixels, mapping)
        self._palette = new_palette
        self._colors = colors

    def set_palette_replace_color(self, palette: PaletteLike, color: Color) -> None:
        """Set an explicit palette, padded with ``color`` until it covers every index in use."""
        colors = explicit_colors(as_palette(palette))
        if colors is None:
            raise TypeError("set_palette_replace_color requires explicit colors")
        colors.extend([color] * (self.min_palette_size_supported() - len(colors)))
        self._palette = PaletteColors(tuple(colors))
        self._colors = colors

    def tint_add(self, diff: Tuple[int, int, int, int]):
        """Copy with ``diff`` added to every palette color, clamped per channel."""
        return self._with_colors([color.tint_add(*diff) for color in self._colors])

    def tint_mul(self, factors: Tuple[float, float, float, float]):
        return self._with_colors([color.tint_mul(*factors) for color in self._colors])

    def tint_palette_add(self, diffs: Sequence[Tuple[int, int, int, int]]):
        """Like :meth:`tint_add` with one ``diff`` per palette slot."""
        self._check_tint_count(diffs)
        return self._with_colors([color.tint_add(*diff) for color, diff in zip(self._colors, diffs)])

    def tint_palette_mul(self, factors: Sequence[Tuple[float, float, float, float]]):
        self._check_tint_count(factors)
        return self._with_colors([color.tint_mul(*factor) for color, factor in zip(self._colors, factors)])

    def _check_tint_count(self, tints: Sequence) -> None:
        if len(tints) != len(self._colors):
            raise CountOutOfRange(len(self._colors), len(self._colors), len(tints), "tint count")

    def _with_colors(self, colors: List[Color]):
        image = self.copy()
        image._colors = colors
        if isinstance(image._palette, PaletteColors):
            image._palette = PaletteColors(tuple(colors))
        return image

    def _write_index(self, position: int, value: int) -> None:
        if not 0 <= value <= 255:
            raise ValueError(f"Palette index must be between 0 and 255, got {value}")
        previous = self._pixels[position]
        self._pixels[position] = value
        if value >= len(self._colors) or previous == len(self._colors) - 1:
            self._sync_synthesized()

    def _sync_synthesized(self) -> None:
        """Resize a synthesized palette to exactly ``max(pixels) + 1`` entries."""
        if self.has_explicit_colors():
            return
        needed = self.min_palette_size_supported()
        del self._colors[needed:]
        self._colors.extend([TRANSPARENT] * (needed - len(self._colors)))


class IndexedImage(PalettedPixels):
    """A single frame of palette indices.

    ``IndexedImage(width, height, pixels, palette)`` validates that both
    dimensions are 1..255 and that ``pixels`` holds exactly
    ``width * height`` indices. Use :meth:`unchecked` for data that is
    already known to be consistent.
    """

    def __init__(self, width: int, height: int, pixels: Sequence[int], palette: PaletteLike = None):
        check_dimension(width, "width")
        check_dimension(height, "height")
        buffer = to_pixel_buffer(pixels)
        if len(buffer) != width * height:
            raise DimensionMismatch(width * height, len(buffer))
        self._init_fields(width, height, buffer, as_palette(palette))

    @classmethod
    def unchecked(cls, width: int, height: int, pixels: Sequence[int], palette: PaletteLike = None) -> "IndexedImage":
        """Build an image without the dimension and length checks.

        The caller guarantees ``1 <= width, height <= 255`` and
        ``len(pixels) == width * height``; transforms and encoding of an
        image that breaks this are undefined.
        """
        image = cls.__new__(cls)
        image._init_fields(width, height, bytearray(pixels), as_palette(palette))
        return image

    @classmethod
    def blank(cls, width: int, height: int, palette: PaletteLike = None) -> "IndexedImage":
        check_dimension(width, "width")
        check_dimension(height, "height")
        return cls(width, height, bytes(width * height), palette)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IndexedImage):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and self._pixels == other._pixels
            and self._palette == other._palette
        )

    def __repr__(self) -> str:
        return (
            f"IndexedImage(width={self._width}, height={self._height}, "
            f"palette={self._palette!r}, colors={len(self._colors)})"
        )

    def copy(self) -> "IndexedImage":
        return self._derive(self._width, self._height, bytearray(self._pixels))

    def _derive(self, width: int, height: int, pixels: bytearray) -> "IndexedImage":
        image = IndexedImage.unchecked(width, height, pixels, self._palette)
        image._colors = list(self._colors)
        image._sync_synthesized()
        return image

    def get_pixel(self, pixel_idx: int) -> int:
        if not 0 <= pixel_idx < len(self._pixels):
            raise IndexOutOfRange(pixel_idx, len(self._pixels), "pixels")
        return self._pixels[pixel_idx]

    def set_pixel(self, pixel_idx: int, value: int) -> None:
        if not 0 <= pixel_idx < len(self._pixels):
            raise IndexOutOfRange(pixel_idx, len(self._pixels), "pixels")
        self._write_index(pixel_idx, value)

    def color_at(self, x: int, y: int) -> Color:
        return self.get_color(self._pixels[self.pixel_index(x, y)])

    def transform(self, transform: Union[Transform, str, int]) -> "IndexedImage":
        pixels, width, height = remap_frames(self._pixels, self._width, self._height, 1, coerce_transform(transform))
        return self._derive(width, height, pixels)

    def flip(self, axis: Union[Flip, str]) -> "IndexedImage":
        return self.transform(Flip(axis))

    def flip_horizontal(self) -> "IndexedImage":
        return self.transform(Flip.HORIZONTAL)

    def flip_vertical(self) -> "IndexedImage":
        return self.transform(Flip.VERTICAL)

    def rotate(self, angle: Union[Rotation, int]) -> "IndexedImage":
        return self.transform(Rotation(angle))

    def recolor_indices(self, mapping: Mapping[int, int]) -> "IndexedImage":
        return self._derive(self._width, self._height, replace_indices(self._pixels, mapping))

    def recolor_index(self, old: int, new: int) -> "IndexedImage":
        """Copy with every pixel using index ``old`` switched to ``new``."""
        return self.recolor_indices({old: new})

    def recolor_slot(self, slot: int, color: Color) -> "IndexedImage":
        """Copy with palette slot ``slot`` holding ``color``; pixels unchanged."""
        image = self.copy()
        image.set_color(slot, color)
        return image


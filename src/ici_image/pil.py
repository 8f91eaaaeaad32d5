"""Conversion between Pillow images and ICI images."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from PIL import Image

from .animated import AnimatedIndexedImage
from .color import TRANSPARENT, Color
from .errors import IndexedImageError
from .image import IndexedImage
from .palette import MAX_COLORS, NoPalette, Palette, PaletteColors, PaletteId, PaletteName
from .transforms import MAX_DIMENSION

PALETTE_MODES = ("colors", "none", "id", "name")


@dataclass
class ConvertOptions:
    """Options for turning a Pillow image into an :class:`IndexedImage`."""

    palette_mode: str = "colors"  # colors, none, id, name
    palette_id: int | None = None
    palette_name: str | None = None
    max_colors: int = MAX_COLORS


class ConversionError(IndexedImageError):
    """Custom exception for conversion errors."""


def build_palette(colors: Sequence[Color], options: ConvertOptions) -> Palette:
    mode = options.palette_mode.lower()
    if mode == "colors":
        return PaletteColors(tuple(colors))
    if mode == "none":
        return NoPalette()
    if mode == "id":
        if options.palette_id is None:
            raise ConversionError("Palette mode 'id' requires a palette id")
        return PaletteId(options.palette_id)
    if mode == "name":
        if not options.palette_name:
            raise ConversionError("Palette mode 'name' requires a palette name")
        return PaletteName(options.palette_name)
    raise ConversionError(f"Unknown palette mode: {options.palette_mode}")


def _to_paletted(image: Image.Image, options: ConvertOptions) -> Image.Image:
    if image.mode == "P":
        return image
    if not 2 <= options.max_colors <= MAX_COLORS:
        raise ConversionError(f"max_colors must be between 2 and {MAX_COLORS}")
    return image.convert("RGBA").quantize(colors=options.max_colors)


def _palette_entries(image: Image.Image) -> List[Color]:
    raw = image.getpalette("RGBA") or []
    entries = [Color.from_rgba_tuple(raw[i : i + 4]) for i in range(0, len(raw) - 3, 4)]
    transparency = image.info.get("transparency")
    if isinstance(transparency, int) and transparency < len(entries):
        entries[transparency] = entries[transparency].with_alpha(0)
    elif isinstance(transparency, bytes):
        for idx, alpha in enumerate(transparency[: len(entries)]):
            entries[idx] = entries[idx].with_alpha(alpha)
    return entries


def convert_image_to_ici(image: Image.Image, options: ConvertOptions | None = None) -> IndexedImage:
    options = options or ConvertOptions()
    width, height = image.size
    if width > MAX_DIMENSION or height > MAX_DIMENSION:
        raise ConversionError(f"Input exceeds {MAX_DIMENSION}x{MAX_DIMENSION}: {width}x{height}")

    paletted = _to_paletted(image, options)
    pixels = paletted.tobytes()
    needed = max(pixels, default=0) + 1
    if needed > MAX_COLORS:
        raise ConversionError(f"Image uses palette index {needed - 1}; at most {MAX_COLORS} colors are supported")

    entries = _palette_entries(paletted)[:needed]
    entries.extend([Color(0, 0, 0)] * (needed - len(entries)))
    return IndexedImage(width, height, pixels, build_palette(entries, options))


def convert_png_to_ici(path: str | Path, options: ConvertOptions | None = None) -> IndexedImage:
    path = Path(path)
    try:
        with Image.open(path) as img:
            return convert_image_to_ici(img, options)
    except FileNotFoundError as exc:
        raise ConversionError(f"Input file not found: {path}") from exc
    except OSError as exc:
        raise ConversionError(f"Failed to read PNG: {path}") from exc


def render_image(image: IndexedImage) -> Image.Image:
    """RGBA preview of ``image`` using its effective colors."""
    colors = image.colors
    data = bytearray()
    for idx in image.pixels:
        color = colors[idx] if idx < len(colors) else TRANSPARENT
        data.extend(color.to_bytes())
    return Image.frombytes("RGBA", image.size, bytes(data))


def render_frames(image: AnimatedIndexedImage) -> List[Image.Image]:
    return [render_image(frame) for frame in image.as_images()]

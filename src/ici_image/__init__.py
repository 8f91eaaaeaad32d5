"""Indexed-color images (ICI) and palettes.

Static and animated palette-indexed images, their binary codec, the JASC-PAL
text palette format, and flip/rotate/recolor transforms. Everything works on
in-memory values; :mod:`ici_image.file` and :mod:`ici_image.jasc` add thin
``load``/``save`` helpers and :mod:`ici_image.pil` converts to and from Pillow.
"""

from .animated import AnimatedIndexedImage
from .codec import (
    decode_animated,
    decode_image,
    decode_palette,
    encode_animated,
    encode_image,
    encode_palette,
)
from .color import TRANSPARENT, Color
from .errors import (
    CountOutOfRange,
    DimensionMismatch,
    FrameSizeMismatch,
    IndexedImageError,
    IndexOutOfRange,
    InvalidColorLine,
    InvalidFrameDuration,
    InvalidHeader,
    InvalidTag,
    InvalidUtf8,
    JascSyntaxError,
    NotIciFile,
    TrailingData,
    UnexpectedEof,
    UnknownFileType,
    VersionMismatch,
)
from .file import FileType, from_file_contents, load, save, to_file_contents
from .image import IndexedImage
from .jasc import JascPalette, decode_jasc, encode_jasc, load_jasc, save_jasc
from .palette import (
    NoPalette,
    Palette,
    PaletteColors,
    PaletteId,
    PaletteName,
    simplify_palette,
    simplify_palette_to_fit,
)
from .transforms import Flip, Rotation
from .wrapper import IndexedWrapper

__all__ = [
    "AnimatedIndexedImage",
    "Color",
    "CountOutOfRange",
    "DimensionMismatch",
    "FileType",
    "Flip",
    "FrameSizeMismatch",
    "IndexOutOfRange",
    "IndexedImage",
    "IndexedImageError",
    "IndexedWrapper",
    "InvalidColorLine",
    "InvalidFrameDuration",
    "InvalidHeader",
    "InvalidTag",
    "InvalidUtf8",
    "JascPalette",
    "JascSyntaxError",
    "NoPalette",
    "NotIciFile",
    "Palette",
    "PaletteColors",
    "PaletteId",
    "PaletteName",
    "Rotation",
    "TRANSPARENT",
    "TrailingData",
    "UnexpectedEof",
    "UnknownFileType",
    "VersionMismatch",
    "decode_animated",
    "decode_image",
    "decode_jasc",
    "decode_palette",
    "encode_animated",
    "encode_image",
    "encode_jasc",
    "encode_palette",
    "from_file_contents",
    "load",
    "load_jasc",
    "save",
    "save_jasc",
    "simplify_palette",
    "simplify_palette_to_fit",
    "to_file_contents",
]

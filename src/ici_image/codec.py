"""Binary encoding of palettes, static images and animated images.

Layouts (multi-byte fields are little-endian)::

    palette   tag:u8 [payload]
              0 none    -
              1 id      id:u16
              2 name    len:u8 (1..255), utf-8 bytes
              3 colors  count:u8 (1..255), count * (r, g, b, a)
    image     width:u8, height:u8, palette, pixels[width * height]
    animated  width:u8, height:u8, frame_count:u8, frame_duration:f32,
              palette, frames[frame_count][width * height]

Decoders either return a fully validated value or raise an
:class:`~ici_image.errors.IndexedImageError`; nothing partial escapes.
"""
from __future__ import annotations

import struct

from .animated import AnimatedIndexedImage, check_frame_count, quantize_duration
from .color import Color
from .errors import (
    CountOutOfRange,
    DimensionMismatch,
    FrameSizeMismatch,
    InvalidTag,
    InvalidUtf8,
    TrailingData,
    UnexpectedEof,
)
from .image import IndexedImage, check_dimension
from .palette import (
    MAX_COLORS,
    MAX_NAME_BYTES,
    PAL_COLORS,
    PAL_ID,
    PAL_NAME,
    PAL_NO_DATA,
    NoPalette,
    Palette,
    PaletteColors,
    PaletteId,
    PaletteName,
    palette_tag,
    unknown_palette,
)

_ANIMATED_HEADER = struct.Struct("<BBBf")


class ByteReader:
    """Cursor over an in-memory byte sequence."""

    def __init__(self, data: bytes, offset: int = 0):
        self.data = bytes(data)
        self.offset = offset

    @property
    def remaining(self) -> int:
        return len(self.data) - self.offset

    def read_bytes(self, count: int, what: str = "data") -> bytes:
        if self.remaining < count:
            raise UnexpectedEof(count, self.remaining, what)
        chunk = self.data[self.offset : self.offset + count]
        self.offset += count
        return chunk

    def read_u8(self, what: str = "data") -> int:
        return self.read_bytes(1, what)[0]

    def read_u16(self, what: str = "data") -> int:
        return int.from_bytes(self.read_bytes(2, what), "little")

    def read_struct(self, layout: struct.Struct, what: str = "data") -> tuple:
        return layout.unpack(self.read_bytes(layout.size, what))


def write_palette(palette: Palette, output: bytearray) -> None:
    output.append(palette_tag(palette))
    if isinstance(palette, NoPalette):
        return
    if isinstance(palette, PaletteId):
        output.extend(palette.id.to_bytes(2, "little"))
    elif isinstance(palette, PaletteName):
        name = palette.name.encode("utf-8")
        output.append(len(name))
        output.extend(name)
    elif isinstance(palette, PaletteColors):
        output.append(len(palette.colors))
        for color in palette.colors:
            output.extend(color.to_bytes())
    else:
        unknown_palette(palette)


def read_palette(reader: ByteReader) -> Palette:
    tag = reader.read_u8("palette type")
    if tag == PAL_NO_DATA:
        return NoPalette()
    if tag == PAL_ID:
        return PaletteId(reader.read_u16("palette id"))
    if tag == PAL_NAME:
        length = reader.read_u8("palette name length")
        if length == 0:
            raise CountOutOfRange(1, MAX_NAME_BYTES, 0, "palette name length")
        raw = reader.read_bytes(length, "palette name")
        try:
            name = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidUtf8(f"Palette name was not valid UTF-8: {exc}") from exc
        return PaletteName(name)
    if tag == PAL_COLORS:
        count = reader.read_u8("palette color count")
        if count == 0:
            raise CountOutOfRange(1, MAX_COLORS, 0, "palette color count")
        raw = reader.read_bytes(count * 4, "palette colors")
        return PaletteColors(tuple(Color.from_rgba_tuple(raw[i : i + 4]) for i in range(0, len(raw), 4)))
    raise InvalidTag(tag)


def encode_palette(palette: Palette) -> bytes:
    output = bytearray()
    write_palette(palette, output)
    return bytes(output)


def decode_palette(data: bytes) -> Palette:
    reader = ByteReader(data)
    palette = read_palette(reader)
    if reader.remaining:
        raise TrailingData(reader.remaining)
    return palette


def encode_image(image: IndexedImage) -> bytes:
    output = bytearray([image.width, image.height])
    write_palette(image.palette, output)
    output.extend(image.pixels)
    return bytes(output)


def decode_image(data: bytes) -> IndexedImage:
    reader = ByteReader(data)
    width = reader.read_u8("width")
    height = reader.read_u8("height")
    check_dimension(width, "width")
    check_dimension(height, "height")
    palette = read_palette(reader)
    expected = width * height
    if reader.remaining > expected:
        raise DimensionMismatch(expected, reader.remaining)
    pixels = reader.read_bytes(expected, "pixel data")
    return IndexedImage(width, height, pixels, palette)


def encode_animated(image: AnimatedIndexedImage) -> bytes:
    output = bytearray(
        _ANIMATED_HEADER.pack(image.width, image.height, image.frame_count, image.frame_duration)
    )
    write_palette(image.palette, output)
    output.extend(image.pixels)
    return bytes(output)


def decode_animated(data: bytes) -> AnimatedIndexedImage:
    reader = ByteReader(data)
    width, height, frame_count, frame_duration = reader.read_struct(_ANIMATED_HEADER, "animation header")
    check_dimension(width, "width")
    check_dimension(height, "height")
    check_frame_count(frame_count)
    quantize_duration(frame_duration)
    palette = read_palette(reader)
    expected = width * height * frame_count
    if reader.remaining > expected:
        raise FrameSizeMismatch(expected, reader.remaining)
    pixels = reader.read_bytes(expected, "frame data")
    return AnimatedIndexedImage(width, height, frame_count, frame_duration, pixels, palette)

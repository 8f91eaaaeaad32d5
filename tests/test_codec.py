import math
import struct

import pytest

from ici_image.animated import AnimatedIndexedImage
from ici_image.codec import (
    decode_animated,
    decode_image,
    decode_palette,
    encode_animated,
    encode_image,
    encode_palette,
)
from ici_image.color import BLUE, RED, TRANSPARENT, Color
from ici_image.errors import (
    CountOutOfRange,
    DimensionMismatch,
    FrameSizeMismatch,
    InvalidFrameDuration,
    InvalidTag,
    InvalidUtf8,
    TrailingData,
    UnexpectedEof,
)
from ici_image.image import IndexedImage
from ici_image.palette import NoPalette, PaletteColors, PaletteId, PaletteName


def test_palette_layouts() -> None:
    assert encode_palette(NoPalette()) == b"\x00"
    assert encode_palette(PaletteId(5)) == bytes([1, 5, 0])
    assert encode_palette(PaletteId(256)) == bytes([1, 0, 1])
    assert encode_palette(PaletteName("test")) == bytes([2, 4]) + b"test"
    assert encode_palette(PaletteName("\U0001F63A")) == bytes([2, 4, 240, 159, 152, 186])
    assert encode_palette(PaletteColors((Color(100, 101, 102, 103),))) == bytes([3, 1, 100, 101, 102, 103])


@pytest.mark.parametrize(
    "palette",
    [
        NoPalette(),
        PaletteId(0),
        PaletteId(65535),
        PaletteName("x"),
        PaletteName("n" * 255),
        PaletteColors((RED,)),
        PaletteColors(tuple(Color(i, 255 - i, i // 2, i) for i in range(255))),
    ],
)
def test_palette_decodes_what_it_encodes(palette) -> None:
    assert decode_palette(encode_palette(palette)) == palette


@pytest.mark.parametrize(
    ("data", "error"),
    [
        (b"", UnexpectedEof),
        (bytes([4]), InvalidTag),
        (bytes([255]), InvalidTag),
        (bytes([1, 5]), UnexpectedEof),
        (bytes([2, 0]), CountOutOfRange),
        (bytes([2, 3, 97]), UnexpectedEof),
        (bytes([2, 2, 0xFF, 0xFE]), InvalidUtf8),
        (bytes([3, 0]), CountOutOfRange),
        (bytes([3, 2, 1, 2, 3, 4]), UnexpectedEof),
        (bytes([0, 0]), TrailingData),
    ],
)
def test_palette_decode_errors(data: bytes, error: type) -> None:
    with pytest.raises(error):
        decode_palette(data)


def test_static_image_without_palette_synthesizes_transparent_colors() -> None:
    image = decode_image(bytes([2, 2, 0, 0, 1, 1, 2]))

    assert image.size == (2, 2)
    assert image.pixels == bytes([0, 1, 1, 2])
    assert image.palette == NoPalette()
    assert image.colors == [TRANSPARENT] * 3


def test_static_image_layout() -> None:
    image = IndexedImage(2, 1, [1, 0], [RED, BLUE])

    assert encode_image(image) == bytes([2, 1, 3, 2, 255, 0, 0, 255, 0, 0, 255, 255, 1, 0])


@pytest.mark.parametrize(
    "image",
    [
        IndexedImage(1, 1, [0]),
        IndexedImage(3, 2, [0, 1, 2, 3, 4, 5], PaletteId(42)),
        IndexedImage(2, 2, [0, 0, 1, 1], PaletteName("mono")),
        IndexedImage.blank(255, 255, [RED, BLUE]),
    ],
)
def test_static_image_round_trip(image: IndexedImage) -> None:
    data = encode_image(image)

    decoded = decode_image(data)

    assert decoded == image
    assert encode_image(decoded) == data


@pytest.mark.parametrize(
    ("data", "error"),
    [
        (bytes([2]), UnexpectedEof),
        (bytes([0, 2, 0]), CountOutOfRange),
        (bytes([2, 0, 0]), CountOutOfRange),
        (bytes([2, 2, 0, 0, 1, 1]), UnexpectedEof),
        (bytes([2, 2, 0, 0, 1, 1, 2, 9]), DimensionMismatch),
        (bytes([1, 1, 7, 0]), InvalidTag),
    ],
)
def test_static_image_decode_errors(data: bytes, error: type) -> None:
    with pytest.raises(error):
        decode_image(data)


def _animated_header(width: int, height: int, frames: int, duration: float) -> bytes:
    return bytes([width, height, frames]) + struct.pack("<f", duration)


def test_animated_layout() -> None:
    image = AnimatedIndexedImage(1, 1, 3, 0.5, [0, 1, 0], [RED, BLUE])

    assert encode_animated(image) == (
        bytes([1, 1, 3])
        + bytes([0x00, 0x00, 0x00, 0x3F])
        + bytes([3, 2, 255, 0, 0, 255, 0, 0, 255, 255])
        + bytes([0, 1, 0])
    )


def test_animated_round_trip_keeps_quantized_duration() -> None:
    image = AnimatedIndexedImage.from_frames(2, 1, [[0, 1], [1, 0]], 0.1, PaletteName("blink"))
    data = encode_animated(image)

    decoded = decode_animated(data)

    assert decoded == image
    assert decoded.frame_duration == image.frame_duration
    assert encode_animated(decoded) == data


@pytest.mark.parametrize(
    ("data", "error"),
    [
        (bytes([1, 1, 1]), UnexpectedEof),
        (_animated_header(1, 1, 0, 0.5) + b"\x00", CountOutOfRange),
        (_animated_header(0, 1, 1, 0.5) + b"\x00\x00", CountOutOfRange),
        (_animated_header(1, 1, 1, 0.0) + b"\x00\x00", InvalidFrameDuration),
        (_animated_header(1, 1, 1, -1.0) + b"\x00\x00", InvalidFrameDuration),
        (_animated_header(1, 1, 1, math.nan) + b"\x00\x00", InvalidFrameDuration),
        (_animated_header(1, 1, 1, math.inf) + b"\x00\x00", InvalidFrameDuration),
        (_animated_header(1, 1, 2, 0.5) + b"\x00\x00", UnexpectedEof),
        (_animated_header(1, 1, 2, 0.5) + b"\x00\x00\x01\x02", FrameSizeMismatch),
    ],
)
def test_animated_decode_errors(data: bytes, error: type) -> None:
    with pytest.raises(error):
        decode_animated(data)


def test_round_trip_after_recolor_shrinks_synthesized_palette() -> None:
    image = IndexedImage(2, 2, [0, 1, 1, 2]).recolor_index(2, 0)

    assert len(image.colors) == 2
    assert decode_image(encode_image(image)) == image


def test_round_trip_after_pixel_edits() -> None:
    image = IndexedImage(1, 1, [0])
    image.set_pixel(0, 5)
    image.set_pixel(0, 0)

    assert image.colors == [TRANSPARENT]
    assert decode_image(encode_image(image)) == image


def test_round_trip_ignores_edits_to_synthesized_colors() -> None:
    image = IndexedImage(2, 1, [0, 1])
    image.set_color(0, RED)

    decoded = decode_image(encode_image(image))

    assert decoded == image
    assert decoded.colors == [TRANSPARENT, TRANSPARENT]


def test_animated_round_trip_after_set_frame() -> None:
    animation = AnimatedIndexedImage(1, 1, 1, 0.5, [3])
    animation.set_frame(0, [0])

    assert animation.colors == [TRANSPARENT]
    assert decode_animated(encode_animated(animation)) == animation

"""Animated indexed-color image: equal sized frames sharing one palette."""
from __future__ import annotations

import math
import struct
from typing import List, Mapping, Sequence, Union

from .color import Color
from .errors import CountOutOfRange, FrameSizeMismatch, IndexOutOfRange, InvalidFrameDuration
from .image import IndexedImage, PalettedPixels, PaletteLike, check_dimension, to_pixel_buffer
from .palette import as_palette
from .transforms import Flip, Rotation, Transform, coerce_transform, remap_frames, replace_indices

MAX_FRAMES = 255


def quantize_duration(value: float) -> float:
    """Validate a frame duration and round it to the nearest 32-bit float."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidFrameDuration(value)
    if not math.isfinite(value) or value <= 0:
        raise InvalidFrameDuration(value)
    try:
        quantized = struct.unpack("<f", struct.pack("<f", float(value)))[0]
    except OverflowError as exc:
        raise InvalidFrameDuration(value) from exc
    if quantized <= 0 or not math.isfinite(quantized):
        raise InvalidFrameDuration(value)
    return quantized


def check_frame_count(frame_count: int) -> None:
    if not 1 <= frame_count <= MAX_FRAMES:
        raise CountOutOfRange(1, MAX_FRAMES, frame_count, "frame count")


class AnimatedIndexedImage(PalettedPixels):
    """Series of frames played one after another, ``frame_duration`` seconds each.

    Frames are kept back to back in one flat buffer of
    ``frame_count * width * height`` indices.
    """

    def __init__(
        self,
        width: int,
        height: int,
        frame_count: int,
        frame_duration: float,
        pixels: Sequence[int],
        palette: PaletteLike = None,
    ):
        check_dimension(width, "width")
        check_dimension(height, "height")
        check_frame_count(frame_count)
        duration = quantize_duration(frame_duration)
        buffer = to_pixel_buffer(pixels)
        expected = width * height * frame_count
        if len(buffer) != expected:
            raise FrameSizeMismatch(expected, len(buffer))
        self._init_fields(width, height, buffer, as_palette(palette))
        self._frame_count = frame_count
        self._frame_duration = duration

    @classmethod
    def from_frames(
        cls,
        width: int,
        height: int,
        frames: Sequence[Sequence[int]],
        frame_duration: float,
        palette: PaletteLike = None,
    ) -> "AnimatedIndexedImage":
        check_dimension(width, "width")
        check_dimension(height, "height")
        check_frame_count(len(frames))
        frame_size = width * height
        buffer = bytearray()
        for frame in frames:
            data = to_pixel_buffer(frame)
            if len(data) != frame_size:
                raise FrameSizeMismatch(frame_size, len(data))
            buffer.extend(data)
        return cls(width, height, len(frames), frame_duration, buffer, palette)

    @classmethod
    def unchecked(
        cls,
        width: int,
        height: int,
        frame_count: int,
        frame_duration: float,
        pixels: Sequence[int],
        palette: PaletteLike = None,
    ) -> "AnimatedIndexedImage":
        """Build an animation without the dimension, count and length checks.

        The caller guarantees every bound and
        ``len(pixels) == frame_count * width * height``.
        """
        image = cls.__new__(cls)
        image._init_fields(width, height, bytearray(pixels), as_palette(palette))
        image._frame_count = frame_count
        image._frame_duration = frame_duration
        return image

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AnimatedIndexedImage):
            return NotImplemented
        return (
            self._width == other._width
            and self._height == other._height
            and self._frame_count == other._frame_count
            and self._frame_duration == other._frame_duration
            and self._pixels == other._pixels
            and self._palette == other._palette
        )

    def __repr__(self) -> str:
        return (
            f"AnimatedIndexedImage(width={self._width}, height={self._height}, "
            f"frame_count={self._frame_count}, frame_duration={self._frame_duration}, "
            f"palette={self._palette!r}, colors={len(self._colors)})"
        )

    @property
    def frame_count(self) -> int:
        return self._frame_count

    @property
    def frame_size(self) -> int:
        return self._width * self._height

    @property
    def frame_duration(self) -> float:
        return self._frame_duration

    @frame_duration.setter
    def frame_duration(self, seconds: float) -> None:
        self._frame_duration = quantize_duration(seconds)

    @property
    def total_duration(self) -> float:
        return self._frame_duration * self._frame_count

    def _check_frame(self, frame: int) -> None:
        if not 0 <= frame < self._frame_count:
            raise IndexOutOfRange(frame, self._frame_count, "frames")

    def get_frame(self, frame: int) -> bytes:
        self._check_frame(frame)
        start = frame * self.frame_size
        return bytes(self._pixels[start : start + self.frame_size])

    def set_frame(self, frame: int, pixels: Sequence[int]) -> None:
        self._check_frame(frame)
        data = to_pixel_buffer(pixels)
        if len(data) != self.frame_size:
            raise FrameSizeMismatch(self.frame_size, len(data))
        start = frame * self.frame_size
        self._pixels[start : start + self.frame_size] = data
        self._sync_synthesized()

    def frames(self) -> List[bytes]:
        return [self.get_frame(i) for i in range(self._frame_count)]

    def as_images(self) -> List[IndexedImage]:
        """One independent :class:`IndexedImage` per frame, in playback order.

        Every image gets its own copy of the shared palette and colors.
        """
        images = []
        for frame in self.frames():
            image = IndexedImage.unchecked(self._width, self._height, frame, self._palette)
            image._colors = list(self._colors)
            images.append(image)
        return images

    def get_pixel(self, frame: int, pixel_idx: int) -> int:
        self._check_frame(frame)
        if not 0 <= pixel_idx < self.frame_size:
            raise IndexOutOfRange(pixel_idx, self.frame_size, "pixels")
        return self._pixels[frame * self.frame_size + pixel_idx]

    def set_pixel(self, frame: int, pixel_idx: int, value: int) -> None:
        self._check_frame(frame)
        if not 0 <= pixel_idx < self.frame_size:
            raise IndexOutOfRange(pixel_idx, self.frame_size, "pixels")
        self._write_index(frame * self.frame_size + pixel_idx, value)

    def copy(self) -> "AnimatedIndexedImage":
        return self._derive(self._width, self._height, bytearray(self._pixels))

    def _derive(self, width: int, height: int, pixels: bytearray) -> "AnimatedIndexedImage":
        image = AnimatedIndexedImage.unchecked(
            width, height, self._frame_count, self._frame_duration, pixels, self._palette
        )
        image._colors = list(self._colors)
        image._sync_synthesized()
        return image

    def transform(self, transform: Union[Transform, str, int]) -> "AnimatedIndexedImage":
        """Apply one flip or rotation to every frame."""
        pixels, width, height = remap_frames(
            self._pixels, self._width, self._height, self._frame_count, coerce_transform(transform)
        )
        return self._derive(width, height, pixels)

    def flip(self, axis: Union[Flip, str]) -> "AnimatedIndexedImage":
        return self.transform(Flip(axis))

    def flip_horizontal(self) -> "AnimatedIndexedImage":
        return self.transform(Flip.HORIZONTAL)

    def flip_vertical(self) -> "AnimatedIndexedImage":
        return self.transform(Flip.VERTICAL)

    def rotate(self, angle: Union[Rotation, int]) -> "AnimatedIndexedImage":
        return self.transform(Rotation(angle))

    def recolor_indices(self, mapping: Mapping[int, int]) -> "AnimatedIndexedImage":
        return self._derive(self._width, self._height, replace_indices(self._pixels, mapping))

    def recolor_index(self, old: int, new: int) -> "AnimatedIndexedImage":
        return self.recolor_indices({old: new})

    def recolor_slot(self, slot: int, color: Color) -> "AnimatedIndexedImage":
        image = self.copy()
        image.set_color(slot, color)
        return image

"""Geometric and index transforms over flat pixel buffers.

All coordinate math lives in :func:`target_position`; every flip and rotation
of static and animated images goes through :func:`source_order`, which turns
that mapping into a gather list that can be applied to any number of frames.
"""
from __future__ import annotations

from enum import Enum, IntEnum
from functools import lru_cache
from typing import List, Mapping, Sequence, Tuple, Union

from .errors import CountOutOfRange, DimensionMismatch

MAX_DIMENSION = 255


class Flip(Enum):
    HORIZONTAL = "horizontal"  # mirror each row
    VERTICAL = "vertical"  # reverse the row order


class Rotation(IntEnum):
    """Rotation by a multiple of 90 degrees.

    ``DEG_90`` maps ``(x, y)`` to ``(y, width - 1 - x)``; on a y-down display
    the picture turns counter-clockwise. ``DEG_180`` and ``DEG_270`` are that
    mapping applied two and three times.
    """

    DEG_90 = 90
    DEG_180 = 180
    DEG_270 = 270


Transform = Union[Flip, Rotation]


def coerce_transform(value: Union[Transform, str, int]) -> Transform:
    if isinstance(value, (Flip, Rotation)):
        return value
    if isinstance(value, str):
        return Flip(value.lower())
    return Rotation(value)


def target_size(transform: Transform, width: int, height: int) -> Tuple[int, int]:
    if transform in (Rotation.DEG_90, Rotation.DEG_270):
        return height, width
    return width, height


def target_position(transform: Transform, x: int, y: int, width: int, height: int) -> Tuple[int, int]:
    """Where the source pixel ``(x, y)`` lands after ``transform``."""
    if transform is Flip.HORIZONTAL:
        return width - 1 - x, y
    if transform is Flip.VERTICAL:
        return x, height - 1 - y
    if transform is Rotation.DEG_90:
        return y, width - 1 - x
    if transform is Rotation.DEG_180:
        return width - 1 - x, height - 1 - y
    if transform is Rotation.DEG_270:
        return height - 1 - y, x
    raise TypeError(f"Unsupported transform: {transform!r}")


@lru_cache(maxsize=8)
def source_order(transform: Transform, width: int, height: int) -> Tuple[int, ...]:
    """For each target index in raster order, the source index it copies from."""
    new_width, new_height = target_size(transform, width, height)
    if new_width > MAX_DIMENSION:
        raise CountOutOfRange(1, MAX_DIMENSION, new_width, "width")
    if new_height > MAX_DIMENSION:
        raise CountOutOfRange(1, MAX_DIMENSION, new_height, "height")
    order = [0] * (width * height)
    for y in range(height):
        for x in range(width):
            nx, ny = target_position(transform, x, y, width, height)
            order[ny * new_width + nx] = y * width + x
    return tuple(order)


def remap_frames(
    pixels: Sequence[int],
    width: int,
    height: int,
    frame_count: int,
    transform: Transform,
) -> Tuple[bytearray, int, int]:
    """Apply ``transform`` to every frame of a flat frame buffer.

    Returns the new buffer together with the new width and height.
    """
    frame_size = width * height
    if len(pixels) != frame_size * frame_count:
        raise DimensionMismatch(frame_size * frame_count, len(pixels))
    order = source_order(transform, width, height)
    output = bytearray(len(pixels))
    for start in range(0, len(pixels), frame_size):
        output[start : start + frame_size] = bytes(pixels[start + i] for i in order)
    new_width, new_height = target_size(transform, width, height)
    return output, new_width, new_height


def remap(pixels: Sequence[int], width: int, height: int, transform: Transform) -> Tuple[bytearray, int, int]:
    return remap_frames(pixels, width, height, 1, transform)


def _check_index(value: int, what: str) -> None:
    if not 0 <= value <= 255:
        raise ValueError(f"{what} must be between 0 and 255, got {value}")


def replace_indices(pixels: Sequence[int], mapping: Mapping[int, int]) -> bytearray:
    """Rewrite palette index values; positions and unmapped values stay as they are."""
    table: List[int] = list(range(256))
    for old, new in mapping.items():
        _check_index(old, "Source index")
        _check_index(new, "Target index")
        table[old] = new
    return bytearray(pixels).translate(bytes(table))


def replace_index(pixels: Sequence[int], old: int, new: int) -> bytearray:
    return replace_indices(pixels, {old: new})

"""Uniform access to static and animated images."""
from __future__ import annotations

from typing import List, Mapping, NoReturn, Sequence, Tuple, Union

from .animated import AnimatedIndexedImage
from .codec import encode_animated, encode_image
from .color import Color
from .errors import IndexOutOfRange
from .image import IndexedImage, PaletteLike
from .palette import Palette
from .transforms import Flip, Rotation, Transform

AnyImage = Union[IndexedImage, AnimatedIndexedImage]


def _unknown_image(image: object) -> NoReturn:
    raise TypeError(f"Unsupported image type: {image!r}")


class IndexedWrapper:
    """Holds either an :class:`IndexedImage` or an :class:`AnimatedIndexedImage`.

    Queries are forwarded to the held image. Transforms return a new wrapper
    holding the same kind of image; the wrapper never converts between kinds.
    """

    def __init__(self, image: AnyImage):
        if not isinstance(image, (IndexedImage, AnimatedIndexedImage)):
            _unknown_image(image)
        self.image = image

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IndexedWrapper):
            return NotImplemented
        return self.image == other.image

    def __repr__(self) -> str:
        return f"IndexedWrapper({self.image!r})"

    def is_animated(self) -> bool:
        return isinstance(self.image, AnimatedIndexedImage)

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def size(self) -> Tuple[int, int]:
        return self.image.size

    @property
    def palette(self) -> Palette:
        return self.image.palette

    @property
    def colors(self) -> List[Color]:
        return self.image.colors

    @property
    def frame_count(self) -> int:
        if isinstance(self.image, AnimatedIndexedImage):
            return self.image.frame_count
        if isinstance(self.image, IndexedImage):
            return 1
        _unknown_image(self.image)

    def get_frame(self, frame: int) -> bytes:
        if isinstance(self.image, AnimatedIndexedImage):
            return self.image.get_frame(frame)
        if isinstance(self.image, IndexedImage):
            if frame != 0:
                raise IndexOutOfRange(frame, 1, "frames")
            return self.image.pixels
        _unknown_image(self.image)

    def as_images(self) -> List[IndexedImage]:
        if isinstance(self.image, AnimatedIndexedImage):
            return self.image.as_images()
        if isinstance(self.image, IndexedImage):
            return [self.image.copy()]
        _unknown_image(self.image)

    def get_color(self, slot: int) -> Color:
        return self.image.get_color(slot)

    def set_color(self, slot: int, color: Color) -> None:
        self.image.set_color(slot, color)

    def set_palette(self, palette: PaletteLike) -> None:
        self.image.set_palette(palette)

    def set_palette_replace_color(self, palette: PaletteLike, color: Color) -> None:
        self.image.set_palette_replace_color(palette, color)

    def tint_add(self, diff: Tuple[int, int, int, int]) -> "IndexedWrapper":
        return IndexedWrapper(self.image.tint_add(diff))

    def tint_mul(self, factors: Tuple[float, float, float, float]) -> "IndexedWrapper":
        return IndexedWrapper(self.image.tint_mul(factors))

    def tint_palette_add(self, diffs: Sequence[Tuple[int, int, int, int]]) -> "IndexedWrapper":
        return IndexedWrapper(self.image.tint_palette_add(diffs))

    def tint_palette_mul(self, factors: Sequence[Tuple[float, float, float, float]]) -> "IndexedWrapper":
        return IndexedWrapper(self.image.tint_palette_mul(factors))

    def min_palette_size_supported(self) -> int:
        return self.image.min_palette_size_supported()

    def transform(self, transform: Union[Transform, str, int]) -> "IndexedWrapper":
        return IndexedWrapper(self.image.transform(transform))

    def flip(self, axis: Union[Flip, str]) -> "IndexedWrapper":
        return IndexedWrapper(self.image.flip(axis))

    def rotate(self, angle: Union[Rotation, int]) -> "IndexedWrapper":
        return IndexedWrapper(self.image.rotate(angle))

    def recolor_indices(self, mapping: Mapping[int, int]) -> "IndexedWrapper":
        return IndexedWrapper(self.image.recolor_indices(mapping))

    def recolor_index(self, old: int, new: int) -> "IndexedWrapper":
        return IndexedWrapper(self.image.recolor_index(old, new))

    def recolor_slot(self, slot: int, color: Color) -> "IndexedWrapper":
        return IndexedWrapper(self.image.recolor_slot(slot, color))

    def encode(self) -> bytes:
        """Binary layout of the held image, without the file header."""
        if isinstance(self.image, AnimatedIndexedImage):
            return encode_animated(self.image)
        if isinstance(self.image, IndexedImage):
            return encode_image(self.image)
        _unknown_image(self.image)

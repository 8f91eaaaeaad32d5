"""ICI file container: a short header in front of the binary image layout.

::

    "ICI" version:u8 (1) type:u8 (1 = image, 2 = animated) payload

Reading and writing files is a thin wrapper over the in-memory functions.
"""
from __future__ import annotations

from enum import IntEnum
from pathlib import Path
from typing import Union

from .codec import decode_animated, decode_image
from .errors import NotIciFile, UnknownFileType
from .wrapper import AnyImage, IndexedWrapper

MAGIC = b"ICI"
VERSION = 1
HEADER = MAGIC + bytes([VERSION])


class FileType(IntEnum):
    IMAGE = 1
    ANIMATED = 2

    @property
    def label(self) -> str:
        return "Image" if self is FileType.IMAGE else "Animated Image"

    @property
    def ext(self) -> str:
        return "ici" if self is FileType.IMAGE else "ica"


def _wrap(image: Union[AnyImage, IndexedWrapper]) -> IndexedWrapper:
    if isinstance(image, IndexedWrapper):
        return image
    return IndexedWrapper(image)


def file_type_of(image: Union[AnyImage, IndexedWrapper]) -> FileType:
    return FileType.ANIMATED if _wrap(image).is_animated() else FileType.IMAGE


def verify_format(data: bytes) -> FileType:
    if len(data) < len(HEADER) + 1 or not data.startswith(MAGIC):
        raise NotIciFile("Invalid file header")
    if data[len(MAGIC)] != VERSION:
        raise NotIciFile(f"Unsupported ICI version {data[len(MAGIC)]}")
    type_byte = data[len(HEADER)]
    try:
        return FileType(type_byte)
    except ValueError as exc:
        raise UnknownFileType(type_byte) from exc


def to_file_contents(image: Union[AnyImage, IndexedWrapper]) -> bytes:
    wrapper = _wrap(image)
    return HEADER + bytes([file_type_of(wrapper)]) + wrapper.encode()


def from_file_contents(data: bytes) -> IndexedWrapper:
    file_type = verify_format(data)
    payload = bytes(data[len(HEADER) + 1 :])
    if file_type is FileType.ANIMATED:
        return IndexedWrapper(decode_animated(payload))
    return IndexedWrapper(decode_image(payload))


def save(path: Union[str, Path], image: Union[AnyImage, IndexedWrapper]) -> Path:
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(to_file_contents(image))
    return output


def load(path: Union[str, Path]) -> IndexedWrapper:
    return from_file_contents(Path(path).read_bytes())

"""Exceptions raised by the ICI codecs and image model."""
from __future__ import annotations


class IndexedImageError(ValueError):
    """Base class for every error raised by ``ici_image``."""


class UnexpectedEof(IndexedImageError):
    """Raised when a byte stream ends before the structure it describes."""

    def __init__(self, needed: int, available: int, what: str = "data"):
        self.needed = needed
        self.available = available
        self.what = what
        super().__init__(f"Unexpected end of {what}: needed {needed} bytes, {available} available")


class InvalidTag(IndexedImageError):
    """Raised for a palette tag byte outside 0..3."""

    def __init__(self, tag: int):
        self.tag = tag
        super().__init__(f"Unsupported palette type {tag}")


class InvalidUtf8(IndexedImageError):
    """Raised when a palette name payload is not valid UTF-8."""


class CountOutOfRange(IndexedImageError):
    """Raised when a count, length or dimension is outside its allowed range."""

    def __init__(self, minimum: int, maximum: int, actual: int, what: str = "count"):
        self.minimum = minimum
        self.maximum = maximum
        self.actual = actual
        self.what = what
        super().__init__(f"{what} must be between {minimum} and {maximum}, got {actual}")


class DimensionMismatch(IndexedImageError):
    """Raised when the pixel data length does not match width x height."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Pixel data length mismatch, found {actual} but expected {expected}")


class FrameSizeMismatch(IndexedImageError):
    """Raised when animation frame data does not match frame_count x width x height."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Frame data length mismatch, found {actual} but expected {expected}")


class IndexOutOfRange(IndexedImageError):
    def __init__(self, index: int, length: int, what: str):
        self.index = index
        self.length = length
        self.what = what
        super().__init__(f"Index {index} was outside of {what} (len {length})")


class InvalidFrameDuration(IndexedImageError):
    def __init__(self, value: float):
        self.value = value
        super().__init__(f"Frame duration must be a positive, finite 32-bit float: {value!r}")


class InvalidHeader(IndexedImageError):
    """Raised when a JASC palette does not start with ``JASC-PAL``."""

    def __init__(self, found: str):
        self.found = found
        super().__init__(f"Invalid palette file header: {found!r}")


class VersionMismatch(IndexedImageError):
    """Raised when a JASC palette version line is not ``0100``."""

    def __init__(self, found: str):
        self.found = found
        super().__init__(f"Unsupported palette file version: {found!r}")


class JascSyntaxError(IndexedImageError):
    """Raised when a JASC palette line cannot be parsed."""

    def __init__(self, line_number: int, text: str, reason: str = "Invalid line"):
        self.line_number = line_number
        self.text = text
        super().__init__(f"{reason} on line {line_number}: {text!r}")


class InvalidColorLine(JascSyntaxError):
    def __init__(self, line_number: int, text: str):
        super().__init__(line_number, text, "Invalid color")


class NotIciFile(IndexedImageError):
    """Raised when an ICI container does not start with the expected magic bytes."""


class UnknownFileType(IndexedImageError):
    def __init__(self, type_byte: int):
        self.type_byte = type_byte
        super().__init__(f"Unsupported ICI file type {type_byte}")


class TrailingData(IndexedImageError):
    """Raised when a standalone palette block is followed by extra bytes."""

    def __init__(self, extra: int):
        self.extra = extra
        super().__init__(f"{extra} unexpected bytes after palette data")

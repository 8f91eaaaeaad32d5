"""RGBA color value and its explicit conversions.

Every conversion is named after the channel order it uses so that nothing is
reordered implicitly:

* ``rgba`` -- red, green, blue, alpha
* ``argb`` -- alpha, red, green, blue
* ``rgb``  -- red, green, blue; alpha is dropped when encoding and forced to
  255 when decoding

Packed integers keep the first channel in the most significant byte, so
``Color(0x11, 0x22, 0x33, 0x44).to_rgba() == 0x11223344``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple

FloatQuad = Tuple[float, float, float, float]
FloatTriple = Tuple[float, float, float]


def _round_channel(value: float) -> int:
    """Round half away from zero and clamp to 0..255; NaN becomes 0."""
    if math.isnan(value):
        return 0
    return int(math.floor(max(0.0, min(255.0, value)) + 0.5))


def _float_to_channel(value: float) -> int:
    return _round_channel(value * 255.0)


def _channel_to_float(value: int) -> float:
    return value / 255.0


def _check_length(values: Sequence, expected: int, order: str) -> None:
    if len(values) != expected:
        raise ValueError(f"{order} values must have {expected} components, got {len(values)}")


@dataclass(frozen=True)
class Color:
    """A color with four 8-bit channels."""

    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not isinstance(value, int) or not 0 <= value <= 255:
                raise ValueError(f"Channel {name} must be an integer between 0 and 255, got {value!r}")

    @classmethod
    def gray(cls, value: int) -> "Color":
        return cls(value, value, value, 255)

    # Packed 32-bit integers

    @classmethod
    def from_rgba(cls, value: int) -> "Color":
        value &= 0xFFFFFFFF
        return cls((value >> 24) & 0xFF, (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

    def to_rgba(self) -> int:
        return (self.r << 24) | (self.g << 16) | (self.b << 8) | self.a

    @classmethod
    def from_argb(cls, value: int) -> "Color":
        value &= 0xFFFFFFFF
        return cls((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF, (value >> 24) & 0xFF)

    def to_argb(self) -> int:
        return (self.a << 24) | (self.r << 16) | (self.g << 8) | self.b

    @classmethod
    def from_rgb(cls, value: int) -> "Color":
        """Decode ``0x00RRGGBB``; the top byte is ignored and alpha is 255."""
        return cls((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF, 255)

    def to_rgb(self) -> int:
        return (self.r << 16) | (self.g << 8) | self.b

    # Byte sequences (tuples, lists, bytes)

    @classmethod
    def from_rgba_tuple(cls, values: Sequence[int]) -> "Color":
        _check_length(values, 4, "RGBA")
        r, g, b, a = values
        return cls(r, g, b, a)

    def to_rgba_tuple(self) -> Tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    @classmethod
    def from_argb_tuple(cls, values: Sequence[int]) -> "Color":
        _check_length(values, 4, "ARGB")
        a, r, g, b = values
        return cls(r, g, b, a)

    def to_argb_tuple(self) -> Tuple[int, int, int, int]:
        return (self.a, self.r, self.g, self.b)

    @classmethod
    def from_rgb_tuple(cls, values: Sequence[int]) -> "Color":
        _check_length(values, 3, "RGB")
        r, g, b = values
        return cls(r, g, b, 255)

    def to_rgb_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def to_bytes(self) -> bytes:
        """Return the four channels as RGBA bytes."""
        return bytes(self.to_rgba_tuple())

    # Normalized floats, 0.0..1.0 per channel

    @classmethod
    def from_float_rgba(cls, values: Sequence[float]) -> "Color":
        _check_length(values, 4, "RGBA")
        r, g, b, a = (_float_to_channel(v) for v in values)
        return cls(r, g, b, a)

    def to_float_rgba(self) -> FloatQuad:
        return (
            _channel_to_float(self.r),
            _channel_to_float(self.g),
            _channel_to_float(self.b),
            _channel_to_float(self.a),
        )

    @classmethod
    def from_float_argb(cls, values: Sequence[float]) -> "Color":
        _check_length(values, 4, "ARGB")
        a, r, g, b = (_float_to_channel(v) for v in values)
        return cls(r, g, b, a)

    def to_float_argb(self) -> FloatQuad:
        r, g, b, a = self.to_float_rgba()
        return (a, r, g, b)

    @classmethod
    def from_float_rgb(cls, values: Sequence[float]) -> "Color":
        _check_length(values, 3, "RGB")
        r, g, b = (_float_to_channel(v) for v in values)
        return cls(r, g, b, 255)

    def to_float_rgb(self) -> FloatTriple:
        r, g, b, _a = self.to_float_rgba()
        return (r, g, b)

    # Hex strings

    @classmethod
    def from_hex(cls, text: str) -> "Color":
        """Parse ``RRGGBB`` or ``RRGGBBAA`` with an optional leading ``#``."""
        digits = text[1:] if text.startswith("#") else text
        if len(digits) not in (6, 8):
            raise ValueError(f"Hex color must have 6 or 8 digits: {text!r}")
        if any(c not in "0123456789abcdefABCDEF" for c in digits):
            raise ValueError(f"Hex color contains non hex digits: {text!r}")
        channels = [int(digits[i : i + 2], 16) for i in range(0, len(digits), 2)]
        if len(channels) == 3:
            channels.append(255)
        return cls.from_rgba_tuple(channels)

    def to_hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}{self.a:02X}"

    # Copy with one channel replaced

    def with_red(self, red: int) -> "Color":
        return Color(red, self.g, self.b, self.a)

    def with_green(self, green: int) -> "Color":
        return Color(self.r, green, self.b, self.a)

    def with_blue(self, blue: int) -> "Color":
        return Color(self.r, self.g, blue, self.a)

    def with_alpha(self, alpha: int) -> "Color":
        return Color(self.r, self.g, self.b, alpha)

    # Queries and mixing

    def is_transparent(self) -> bool:
        return self.a == 0

    def brightness(self) -> float:
        """Relative luminance of the RGB channels (alpha ignored)."""
        r, g, b = self.to_float_rgb()
        return 0.2126 * r + 0.7152 * g + 0.0722 * b

    def is_dark(self) -> bool:
        return self.brightness() < 0.5

    def with_brightness(self, amount: float) -> "Color":
        """Copy with the RGB channels scaled by ``amount``; alpha unchanged."""
        r, g, b = (min(1.0, max(0.0, value * amount)) for value in self.to_float_rgb())
        return Color.from_float_rgba((r, g, b, self.a / 255.0))

    def darken(self) -> "Color":
        return self.with_brightness(0.9)

    def lighten(self) -> "Color":
        return self.with_brightness(1.1)

    def with_saturate(self, amount: float) -> "Color":
        """Move the RGB channels ``amount`` of the way towards their luma.

        Positive values desaturate, negative values saturate.
        """
        r, g, b = self.to_float_rgb()
        luma = 0.2989 * r + 0.5870 * g + 0.1140 * b
        return Color.from_float_rgba(
            (r + amount * (luma - r), g + amount * (luma - g), b + amount * (luma - b), self.a / 255.0)
        )

    def desaturate(self) -> "Color":
        return self.with_saturate(0.1)

    def saturate(self) -> "Color":
        return self.with_saturate(-0.1)

    def tint_add(self, r: int, g: int, b: int, a: int = 0) -> "Color":
        """Copy with each channel offset by the given amount, clamped to 0..255."""
        return Color(
            max(0, min(255, self.r + r)),
            max(0, min(255, self.g + g)),
            max(0, min(255, self.b + b)),
            max(0, min(255, self.a + a)),
        )

    def tint_mul(self, r: float, g: float, b: float, a: float = 1.0) -> "Color":
        return Color(
            _round_channel(self.r * r),
            _round_channel(self.g * g),
            _round_channel(self.b * b),
            _round_channel(self.a * a),
        )

    def diff(self, other: "Color") -> int:
        """Sum of absolute per-channel differences."""
        return sum(abs(x - y) for x, y in zip(self.to_rgba_tuple(), other.to_rgba_tuple()))

    def mid(self, other: "Color") -> "Color":
        channels = [min(x, y) + abs(x - y) // 2 for x, y in zip(self.to_rgba_tuple(), other.to_rgba_tuple())]
        return Color.from_rgba_tuple(channels)

    def blend(self, other: "Color") -> "Color":
        """Composite ``other`` over this color (straight alpha)."""
        base = self.to_float_rgba()
        added = other.to_float_rgba()
        alpha = 1.0 - (1.0 - added[3]) * (1.0 - base[3])
        if alpha <= 0.0:
            return TRANSPARENT
        mixed = [
            (added[i] * added[3] / alpha) + (base[i] * base[3] * (1.0 - added[3]) / alpha)
            for i in range(3)
        ]
        return Color.from_float_rgba((*mixed, alpha))


TRANSPARENT = Color(0, 0, 0, 0)
WHITE = Color.gray(255)
OFF_WHITE = Color.gray(250)
BLACK = Color.gray(0)
OFF_BLACK = Color.gray(5)
DARKER_GRAY = Color.gray(45)
DARK_GRAY = Color.gray(75)
MID_GRAY = Color.gray(110)
LIGHT_GRAY = Color.gray(180)
LIGHTER_GRAY = Color.gray(205)
RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
BLUE = Color(0, 0, 255)
MAGENTA = Color(255, 0, 255)
YELLOW = Color(255, 255, 0)
ORANGE = Color(255, 165, 0)
BROWN = Color(139, 69, 19)
PURPLE = Color(75, 0, 130)
CYAN = Color(0, 255, 255)

# Game Boy DMG-01, darkest (GB_3) to lightest (GB_0)
GB_3 = Color(15, 56, 15)
GB_2 = Color(48, 98, 48)
GB_1 = Color(120, 145, 15)
GB_0 = Color(155, 188, 15)

"""JASC-PAL plain text palettes.

::

    JASC-PAL
    0100
    <count>
    <R> <G> <B>      (count lines)

The format has no alpha channel: decoded colors are opaque and alpha is
dropped on encode.
"""
from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence, Union

from .color import Color
from .errors import CountOutOfRange, InvalidColorLine, InvalidHeader, JascSyntaxError, VersionMismatch
from .palette import PaletteColors

FILE_HEADER = "JASC-PAL"
FILE_VERSION = "0100"


def _is_decimal(text: str) -> bool:
    return text.isascii() and text.isdigit()


def _parse_color(line_number: int, text: str) -> Color:
    parts = text.split()
    if len(parts) != 3 or not all(_is_decimal(part) for part in parts):
        raise InvalidColorLine(line_number, text)
    values = [int(part) for part in parts]
    if any(value > 255 for value in values):
        raise InvalidColorLine(line_number, text)
    return Color.from_rgb_tuple(values)


def decode_jasc(text: str) -> List[Color]:
    lines = text.splitlines()
    header = lines[0] if lines else ""
    if header != FILE_HEADER:
        raise InvalidHeader(header)
    version = lines[1] if len(lines) > 1 else ""
    if version != FILE_VERSION:
        raise VersionMismatch(version)
    if len(lines) < 3:
        raise JascSyntaxError(3, "", "Missing color count")
    count_text = lines[2].strip()
    if not _is_decimal(count_text):
        raise JascSyntaxError(3, lines[2], "Invalid color count")
    count = int(count_text)

    colors = [
        _parse_color(line_number, line)
        for line_number, line in enumerate(lines[3:], start=4)
        if line.strip()
    ]
    if len(colors) != count:
        raise CountOutOfRange(count, count, len(colors), "color lines")
    return colors


def encode_jasc(colors: Sequence[Color]) -> str:
    translucent = sum(1 for color in colors if color.a != 255)
    if translucent:
        warnings.warn(
            f"JASC palettes have no alpha channel; alpha of {translucent} colors was dropped",
            RuntimeWarning,
            stacklevel=2,
        )
    lines = [FILE_HEADER, FILE_VERSION, str(len(colors))]
    lines.extend(f"{color.r} {color.g} {color.b}" for color in colors)
    return "\n".join(lines) + "\n"


@dataclass
class JascPalette:
    colors: List[Color] = field(default_factory=list)

    @classmethod
    def from_file_contents(cls, text: str) -> "JascPalette":
        return cls(decode_jasc(text))

    def to_file_contents(self) -> str:
        return encode_jasc(self.colors)

    def to_palette(self) -> PaletteColors:
        return PaletteColors(tuple(self.colors))


def load_jasc(path: Union[str, Path]) -> JascPalette:
    return JascPalette.from_file_contents(Path(path).read_text(encoding="ascii"))


def save_jasc(path: Union[str, Path], colors: Sequence[Color]) -> Path:
    output = Path(path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(encode_jasc(colors), encoding="ascii", newline="\n")
    return output

import pytest

from ici_image.color import GREEN, RED, Color
from ici_image.errors import (
    CountOutOfRange,
    InvalidColorLine,
    InvalidHeader,
    JascSyntaxError,
    VersionMismatch,
)
from ici_image.jasc import JascPalette, decode_jasc, encode_jasc, load_jasc, save_jasc
from ici_image.palette import PaletteColors

SAMPLE = "JASC-PAL\n0100\n2\n255 0 0\n0 255 0\n"


def test_decode() -> None:
    assert decode_jasc(SAMPLE) == [Color(255, 0, 0, 255), Color(0, 255, 0, 255)]


def test_decode_accepts_crlf_and_blank_lines() -> None:
    text = "JASC-PAL\r\n0100\r\n2\r\n255 0 0\r\n\r\n0 255 0\r\n"

    assert decode_jasc(text) == [RED, GREEN]


def test_encode() -> None:
    assert encode_jasc([RED, GREEN]) == SAMPLE


def test_encode_warns_when_alpha_is_dropped() -> None:
    with pytest.warns(RuntimeWarning):
        text = encode_jasc([Color(1, 2, 3, 4)])

    assert text == "JASC-PAL\n0100\n1\n1 2 3\n"


@pytest.mark.parametrize(
    ("text", "error"),
    [
        ("", InvalidHeader),
        ("JASC-PAI\n0100\n0\n", InvalidHeader),
        ("JASC-PAL\n0101\n0\n", VersionMismatch),
        ("JASC-PAL\n", VersionMismatch),
        ("JASC-PAL\n0100\n", JascSyntaxError),
        ("JASC-PAL\n0100\nten\n", JascSyntaxError),
        ("JASC-PAL\n0100\n3\n255 0 0\n0 255 0\n", CountOutOfRange),
        ("JASC-PAL\n0100\n1\n255 0 0\n0 255 0\n", CountOutOfRange),
        ("JASC-PAL\n0100\n1\n255 0\n", InvalidColorLine),
        ("JASC-PAL\n0100\n1\n255 0 0 0\n", InvalidColorLine),
        ("JASC-PAL\n0100\n1\n256 0 0\n", InvalidColorLine),
        ("JASC-PAL\n0100\n1\n-1 0 0\n", InvalidColorLine),
        ("JASC-PAL\n0100\n1\nred green blue\n", InvalidColorLine),
    ],
)
def test_decode_errors(text: str, error: type) -> None:
    with pytest.raises(error):
        decode_jasc(text)


def test_invalid_color_line_reports_line_number() -> None:
    with pytest.raises(InvalidColorLine) as excinfo:
        decode_jasc("JASC-PAL\n0100\n2\n1 2 3\nx\n")

    assert excinfo.value.line_number == 5


def test_empty_palette() -> None:
    assert decode_jasc("JASC-PAL\n0100\n0\n") == []


def test_palette_object(tmp_path) -> None:
    palette = JascPalette.from_file_contents(SAMPLE)

    assert palette.to_file_contents() == SAMPLE
    assert palette.to_palette() == PaletteColors((RED, GREEN))

    path = save_jasc(tmp_path / "colors.pal", palette.colors)
    assert path.read_text() == SAMPLE
    assert load_jasc(path) == palette

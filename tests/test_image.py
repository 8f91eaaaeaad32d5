import pytest

from ici_image.color import BLUE, GREEN, RED, TRANSPARENT, Color
from ici_image.errors import CountOutOfRange, DimensionMismatch, IndexOutOfRange
from ici_image.image import IndexedImage
from ici_image.palette import NoPalette, PaletteColors, PaletteId


@pytest.mark.parametrize("size", [(0, 1), (1, 0), (256, 1), (1, 256)])
def test_dimensions_must_be_1_to_255(size) -> None:
    width, height = size
    with pytest.raises(CountOutOfRange):
        IndexedImage(width, height, bytes(max(width * height, 1)))


def test_largest_image_is_accepted() -> None:
    image = IndexedImage(255, 255, bytes(255 * 255))

    assert image.size == (255, 255)


def test_pixel_count_must_match() -> None:
    with pytest.raises(DimensionMismatch):
        IndexedImage(2, 2, [0, 1, 2])
    with pytest.raises(ValueError):
        IndexedImage(1, 1, [256])


def test_unchecked_skips_validation() -> None:
    image = IndexedImage.unchecked(2, 2, [0])

    assert image.size == (2, 2)
    assert image.pixels == b"\x00"


def test_default_palette_is_synthesized() -> None:
    image = IndexedImage(2, 2, [0, 1, 1, 2])

    assert image.palette == NoPalette()
    assert not image.has_explicit_colors()
    assert image.colors == [TRANSPARENT] * 3
    assert image.min_palette_size_supported() == 3


def test_set_pixel_grows_synthesized_palette() -> None:
    image = IndexedImage(1, 1, [0], PaletteId(9))

    image.set_pixel(0, 4)

    assert image.get_pixel(0) == 4
    assert len(image.colors) == 5
    assert image.palette == PaletteId(9)


def test_set_pixel_keeps_explicit_palette() -> None:
    image = IndexedImage(2, 1, [0, 1], [RED, BLUE])

    image.set_pixel(1, 5)

    assert image.colors == [RED, BLUE]
    with pytest.raises(IndexOutOfRange):
        image.get_color(5)


def test_pixel_access_bounds() -> None:
    image = IndexedImage(2, 2, [0, 1, 2, 3])

    assert image.pixel_index(1, 1) == 3
    with pytest.raises(IndexOutOfRange):
        image.pixel_index(2, 0)
    with pytest.raises(IndexOutOfRange):
        image.pixel_index(0, 2)
    with pytest.raises(IndexOutOfRange):
        image.get_pixel(4)
    with pytest.raises(IndexOutOfRange):
        image.set_pixel(-1, 0)
    with pytest.raises(ValueError):
        image.set_pixel(0, 256)


def test_set_color_updates_explicit_palette() -> None:
    image = IndexedImage(2, 1, [0, 1], [RED, BLUE])

    image.set_color(1, GREEN)

    assert image.palette == PaletteColors((RED, GREEN))
    assert image.color_at(1, 0) == GREEN
    with pytest.raises(IndexOutOfRange):
        image.set_color(2, GREEN)


def test_set_palette_replaces_colors() -> None:
    image = IndexedImage(2, 1, [0, 1])

    image.set_palette([RED, BLUE])

    assert image.colors == [RED, BLUE]
    image.set_palette(None)
    assert image.colors == [TRANSPARENT, TRANSPARENT]


def test_set_palette_replace_id() -> None:
    image = IndexedImage(2, 2, [0, 1, 2, 3])

    image.set_palette_replace_id([RED, BLUE], 0)

    assert image.pixels == bytes([0, 1, 0, 0])
    assert image.colors == [RED, BLUE]
    with pytest.raises(TypeError):
        image.set_palette_replace_id(PaletteId(1), 0)
    with pytest.raises(IndexOutOfRange):
        image.set_palette_replace_id([RED], 3)


def test_recolor_returns_new_image() -> None:
    image = IndexedImage(2, 2, [0, 1, 1, 2])

    recolored = image.recolor_index(1, 3)

    assert recolored.pixels == bytes([0, 3, 3, 2])
    assert len(recolored.colors) == 4
    assert image.pixels == bytes([0, 1, 1, 2])


def test_recolor_slot_leaves_original() -> None:
    image = IndexedImage(1, 1, [0], [RED])

    recolored = image.recolor_slot(0, BLUE)

    assert recolored.colors == [BLUE]
    assert image.colors == [RED]


def test_copy_is_independent() -> None:
    image = IndexedImage(2, 1, [0, 1], [RED, BLUE])
    copy = image.copy()

    copy.set_pixel(0, 1)

    assert copy != image
    assert image.pixels == bytes([0, 1])
    assert image.copy() == image


def test_synthesized_palette_tracks_highest_index() -> None:
    image = IndexedImage(2, 1, [0, 3])

    image.set_pixel(1, 1)
    assert len(image.colors) == 2

    image.set_pixel(0, 6)
    assert len(image.colors) == 7
    assert len(image.recolor_index(6, 0).colors) == 2


def test_set_palette_replace_color_pads_to_highest_index() -> None:
    image = IndexedImage(2, 2, [0, 1, 2, 3])

    image.set_palette_replace_color([RED], BLUE)

    assert image.palette == PaletteColors((RED, BLUE, BLUE, BLUE))
    assert image.pixels == bytes([0, 1, 2, 3])

    image.set_palette_replace_color([RED, GREEN, RED, GREEN, RED], BLUE)
    assert len(image.colors) == 5
    with pytest.raises(TypeError):
        image.set_palette_replace_color(PaletteId(1), BLUE)


def test_tints_return_new_images() -> None:
    image = IndexedImage(2, 1, [0, 1], [Color(100, 150, 200), RED])

    added = image.tint_add((50, 50, 50, 0))
    multiplied = image.tint_mul((0.5, 0.5, 0.5, 0.5))

    assert added.palette == PaletteColors((Color(150, 200, 250), Color(255, 50, 50)))
    assert multiplied.colors == [Color(50, 75, 100, 128), Color(128, 0, 0, 128)]
    assert image.colors == [Color(100, 150, 200), RED]


def test_per_slot_tints() -> None:
    image = IndexedImage(2, 1, [0, 1], [Color(100, 150, 200), RED])

    added = image.tint_palette_add([(10, 0, 0, 0), (0, 0, 0, -255)])
    multiplied = image.tint_palette_mul([(1, 1, 1, 1), (0, 1, 1, 1)])

    assert added.colors == [Color(110, 150, 200), Color(255, 0, 0, 0)]
    assert multiplied.colors == [Color(100, 150, 200), Color(0, 0, 0)]
    with pytest.raises(CountOutOfRange):
        image.tint_palette_add([(1, 1, 1, 1)])
    with pytest.raises(CountOutOfRange):
        image.tint_palette_mul([(1, 1, 1, 1)] * 3)


def test_tint_on_synthesized_palette_keeps_declared_palette() -> None:
    image = IndexedImage(1, 1, [1], PaletteId(3))

    tinted = image.tint_add((0, 0, 0, 255))

    assert tinted.palette == PaletteId(3)
    assert tinted.colors == [Color(0, 0, 0, 255)] * 2

import numpy as np
import pytest
from PIL import Image, UnidentifiedImageError

from median_palette.core_types import Color, InvalidArgument
from median_palette.image_io import (
    Region,
    downscale_max_side,
    image_palette,
    load_image_rgb,
    pixels_in_region,
)


def make_split_image(path, size=(40, 20)):
    """Red left half, blue right half."""
    w, h = size
    img = Image.new("RGB", size, (0, 0, 255))
    img.paste((255, 0, 0), (0, 0, w // 2, h))
    img.save(path)


def test_load_image_rgb_shape(tmp_path):
    p = tmp_path / "split.png"
    make_split_image(p)
    arr = load_image_rgb(p)
    assert arr.shape == (20, 40, 3)
    assert arr.dtype == np.uint8
    assert arr[0, 0].tolist() == [255, 0, 0]
    assert arr[0, 39].tolist() == [0, 0, 255]


def test_load_image_drops_alpha(tmp_path):
    p = tmp_path / "rgba.png"
    Image.new("RGBA", (8, 8), (10, 20, 30, 255)).save(p)
    arr = load_image_rgb(p)
    assert arr.shape == (8, 8, 3)
    assert image_palette(p, 1) == [Color(10, 20, 30)]


def test_load_greyscale_image(tmp_path):
    p = tmp_path / "grey.png"
    Image.new("L", (6, 6), 77).save(p)
    assert image_palette(p, 2) == [Color(77, 77, 77), Color(77, 77, 77)]


def test_image_palette_two_halves(tmp_path):
    p = tmp_path / "split.png"
    make_split_image(p)
    # R and B tie on range, so R drives the split: blue (R=0) comes first.
    assert image_palette(p, 2) == [Color(0, 0, 255), Color(255, 0, 0)]


def test_image_palette_region(tmp_path):
    p = tmp_path / "split.png"
    make_split_image(p)
    assert image_palette(p, 4, region=Region(0, 0, 20, 20)) == [Color(255, 0, 0)] * 4
    assert image_palette(p, 1, region=Region(20, 0, 20, 20)) == [Color(0, 0, 255)]


def test_image_palette_region_outside_image(tmp_path):
    p = tmp_path / "split.png"
    make_split_image(p)
    assert image_palette(p, 4, region=Region(100, 100, 5, 5)) == []


def test_image_palette_max_side(tmp_path):
    p = tmp_path / "flat.png"
    Image.new("RGB", (100, 50), (200, 100, 50)).save(p)
    assert image_palette(p, 2, max_side=10) == [Color(200, 100, 50)] * 2


def test_downscale_max_side():
    img = np.zeros((50, 100, 3), dtype=np.uint8)
    assert downscale_max_side(img, 10).shape == (5, 10, 3)
    assert downscale_max_side(img, 200) is img
    assert downscale_max_side(img, None) is img
    with pytest.raises(InvalidArgument):
        downscale_max_side(img, 0)


def test_pixels_in_region_row_major():
    img = np.arange(4 * 4 * 3, dtype=np.uint8).reshape(4, 4, 3)
    px = pixels_in_region(img, Region(1, 2, 2, 1))
    assert px.shape == (2, 3)
    assert px.tolist() == [img[2, 1].tolist(), img[2, 2].tolist()]


def test_pixels_in_region_clipped_and_whole():
    img = np.zeros((4, 4, 3), dtype=np.uint8)
    assert pixels_in_region(img, Region(2, 2, 10, 10)).shape == (4, 3)
    assert pixels_in_region(img).shape == (16, 3)


def test_pixels_in_region_drops_alpha():
    img = np.full((2, 2, 4), 9, dtype=np.uint8)
    assert pixels_in_region(img).shape == (4, 3)


def test_pixels_in_region_bad_shape():
    with pytest.raises(InvalidArgument):
        pixels_in_region(np.zeros((4, 4), dtype=np.uint8))


@pytest.mark.parametrize(
    "args", [(-1, 0, 1, 1), (0, -1, 1, 1), (0, 0, 0, 1), (0, 0, 1, -3)]
)
def test_region_validation(args):
    with pytest.raises(InvalidArgument):
        Region(*args)


def test_not_an_image(tmp_path):
    p = tmp_path / "fake.png"
    p.write_text("not an image")
    with pytest.raises(UnidentifiedImageError):
        load_image_rgb(p)


def test_region_outside_image_with_max_side_gives_empty_palette(tmp_path):
    p = tmp_path / "wide.png"
    Image.new("RGB", (200, 10), (90, 90, 90)).save(p)
    assert image_palette(p, 4, region=Region(0, 50, 200, 10), max_side=50) == []


def test_downscale_empty_image_unchanged():
    empty = np.zeros((0, 200, 3), dtype=np.uint8)
    assert downscale_max_side(empty, 50) is empty

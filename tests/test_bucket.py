import numpy as np
import pytest

from median_palette.bucket import (
    PixelBucket,
    channel_ranges,
    select_widest_channel,
    sort_by_channel,
)
from median_palette.core_types import Channel, Color, InvalidArgument, Pixel


def test_channel_ranges_use_true_extremes():
    pixels = [(10, 200, 30), (40, 100, 30), (25, 150, 90)]
    assert channel_ranges(pixels) == (30, 100, 60)


def test_channel_ranges_empty_rejected():
    with pytest.raises(InvalidArgument):
        channel_ranges([])


def test_widest_channel_is_not_smallest_minimum():
    # R has the smallest minimum but G has the widest range.
    pixels = [(0, 50, 100), (10, 250, 100), (5, 120, 100)]
    assert select_widest_channel(pixels) == Channel.G


def test_widest_channel_full_range_high_values():
    # B spans 200..255; R and G sit at 0 with no spread.
    pixels = [(0, 0, 200), (0, 0, 255)]
    assert select_widest_channel(pixels) == Channel.B


def test_tie_break_prefers_red():
    pixels = [(0, 0, 0), (100, 100, 100)]
    assert select_widest_channel(pixels) == Channel.R


def test_tie_break_green_over_blue():
    pixels = [(5, 0, 0), (5, 100, 100)]
    assert select_widest_channel(pixels) == Channel.G


def test_uniform_pixels_select_red():
    assert select_widest_channel([(7, 7, 7)] * 3) == Channel.R


def test_sort_by_channel_array_in_place():
    arr = np.array([[3, 9, 0], [1, 8, 0], [2, 7, 0]], dtype=np.uint8)
    sort_by_channel(arr, Channel.R)
    assert arr[:, 0].tolist() == [1, 2, 3]
    sort_by_channel(arr, Channel.G)
    assert arr[:, 1].tolist() == [7, 8, 9]


def test_sort_by_channel_list_in_place():
    pixels = [Pixel(0, 0, 30), Pixel(0, 0, 10), Pixel(0, 0, 20)]
    sort_by_channel(pixels, Channel.B)
    assert [p.b for p in pixels] == [10, 20, 30]


def test_sort_by_channel_only_touches_view():
    arena = np.array([[9, 0, 0], [5, 0, 0], [4, 0, 0], [1, 0, 0]], dtype=np.uint8)
    sort_by_channel(arena[1:3], Channel.R)
    assert arena[:, 0].tolist() == [9, 4, 5, 1]


@pytest.mark.parametrize("size", range(0, 9))
def test_split_conserves_size(size):
    bucket = PixelBucket.from_pixels([(i, i, i) for i in range(size)])
    left, right = bucket.split()
    assert len(left) == size // 2
    assert len(left) + len(right) == size
    assert left.end == right.start
    assert left.arena is right.arena is bucket.arena


def test_split_halves_are_disjoint_views():
    bucket = PixelBucket.from_pixels([(1, 0, 0), (2, 0, 0), (3, 0, 0)])
    left, right = bucket.split()
    assert left.to_list() == [(1, 0, 0)]
    assert right.to_list() == [(2, 0, 0), (3, 0, 0)]


def test_from_pixels_copies_input():
    src = np.array([[3, 0, 0], [1, 0, 0]], dtype=np.uint8)
    bucket = PixelBucket.from_pixels(src)
    bucket.sort_by(Channel.R)
    assert src[:, 0].tolist() == [3, 1]
    assert bucket.pixels[:, 0].tolist() == [1, 3]


def test_bucket_range_validation():
    arena = np.zeros((4, 3), dtype=np.uint8)
    with pytest.raises(InvalidArgument):
        PixelBucket(arena, 3, 2)
    with pytest.raises(InvalidArgument):
        PixelBucket(arena, 0, 5)
    with pytest.raises(InvalidArgument):
        PixelBucket(np.zeros((4, 3), dtype=np.int32))


def test_average_single_pixel_exact():
    bucket = PixelBucket.from_pixels([(10, 20, 30)])
    assert bucket.average() == Color(10, 20, 30)


def test_average_uniform_bucket_exact():
    bucket = PixelBucket.from_pixels([(123, 45, 67)] * 1001)
    assert bucket.average() == Color(123, 45, 67)


@pytest.mark.parametrize(
    "values, expected",
    [
        ([0, 1], 1),  # 0.5 rounds up
        ([1, 2], 2),  # 1.5 rounds up
        ([254, 255], 255),  # 254.5 rounds up
        ([0, 0, 1], 0),  # 0.33 rounds down
        ([0, 1, 1], 1),  # 0.67 rounds up
        ([10, 20, 30], 20),
    ],
)
def test_average_rounds_half_up(values, expected):
    bucket = PixelBucket.from_pixels([(v, v, v) for v in values])
    assert bucket.average() == Color(expected, expected, expected)


def test_average_empty_rejected():
    bucket = PixelBucket.from_pixels([])
    assert bucket.is_empty()
    with pytest.raises(InvalidArgument):
        bucket.average()


def test_color_is_distinct_from_pixel():
    colour = PixelBucket.from_pixels([(255, 0, 16)]).average()
    assert isinstance(colour, Color)
    assert not isinstance(colour, Pixel)
    assert colour.hex == "#ff0010"

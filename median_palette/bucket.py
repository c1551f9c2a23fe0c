# median_palette/bucket.py
from __future__ import annotations

"""
Pixel buckets and the channel helpers used by median cut.

A PixelBucket is a [start, end) range over one shared uint8 (N, 3) arena.
Splitting hands two disjoint sub-ranges to the children, so no pixel data is
copied below the top-level call. Sorting a bucket permutes only its own
slice of the arena.

Public API:
  channel_ranges, select_widest_channel, sort_by_channel
  PixelBucket: from_pixels, split, sort_by, widest_channel, average,
    to_list (rows as RGB tuples, for inspecting a partition)
"""

from typing import List, MutableSequence, Optional, Sequence, Tuple, Union

import numpy as np

from .core_types import (
    Channel,
    Color,
    InvalidArgument,
    PixelArray,
    RGBTuple,
    as_pixel_array,
)

PixelsLike = Union[PixelArray, Sequence[Sequence[int]]]


# Channel helpers


def channel_ranges(pixels: PixelsLike) -> Tuple[int, int, int]:
    """Per-channel (max - min) over all pixels as (r_range, g_range, b_range)."""
    arr = as_pixel_array(pixels, copy=False)
    if arr.shape[0] == 0:
        raise InvalidArgument("channel range of an empty pixel set is undefined")
    # Reductions run over the real values, so min and max are the true extremes.
    lo = arr.min(axis=0).astype(np.int16)
    hi = arr.max(axis=0).astype(np.int16)
    spread = hi - lo
    return (int(spread[0]), int(spread[1]), int(spread[2]))


def select_widest_channel(pixels: PixelsLike) -> Channel:
    """
    Channel with the greatest value range.

    Ties go to R, then G, then B.
    """
    ranges = channel_ranges(pixels)
    widest = max(ranges)
    for channel in Channel:
        if ranges[channel] == widest:
            return channel
    raise AssertionError("unreachable")  # pragma: no cover


def sort_by_channel(
    pixels: Union[PixelArray, MutableSequence[Sequence[int]]], channel: Channel
) -> None:
    """
    Sort pixels in place, ascending by one channel.

    Works on a uint8 (N, 3) array (or a view into one) and on plain lists of
    RGB triples. The sort is stable.
    """
    ch = int(Channel(channel))
    if isinstance(pixels, np.ndarray):
        if pixels.ndim != 2 or pixels.shape[-1] < 3:
            raise InvalidArgument(f"expected (N,3) pixels, got shape {pixels.shape}")
        order = np.argsort(pixels[:, ch], kind="stable")
        pixels[...] = pixels[order]
        return
    pixels.sort(key=lambda p: p[ch])  # type: ignore[attr-defined]


# Buckets


class PixelBucket:
    """Contiguous run of pixels [start, end) inside a shared arena."""

    __slots__ = ("arena", "start", "end")

    def __init__(self, arena: PixelArray, start: int = 0, end: Optional[int] = None):
        if arena.ndim != 2 or arena.shape[-1] != 3 or arena.dtype != np.uint8:
            raise InvalidArgument("arena must be a uint8 (N,3) array")
        stop = arena.shape[0] if end is None else int(end)
        if not 0 <= start <= stop <= arena.shape[0]:
            raise InvalidArgument(
                f"bucket range [{start}, {stop}) outside arena of {arena.shape[0]}"
            )
        self.arena = arena
        self.start = int(start)
        self.end = stop

    @classmethod
    def from_pixels(cls, pixels: PixelsLike) -> "PixelBucket":
        """Copy pixels into a fresh arena and wrap all of it."""
        return cls(as_pixel_array(pixels, copy=True))

    def __len__(self) -> int:
        return self.end - self.start

    def __repr__(self) -> str:
        return f"PixelBucket([{self.start}, {self.end}) of {self.arena.shape[0]})"

    @property
    def pixels(self) -> PixelArray:
        """View of this bucket's rows; writes go through to the arena."""
        return self.arena[self.start : self.end]

    def is_empty(self) -> bool:
        return self.end <= self.start

    def channel_ranges(self) -> Tuple[int, int, int]:
        return channel_ranges(self.pixels)

    def widest_channel(self) -> Channel:
        return select_widest_channel(self.pixels)

    def sort_by(self, channel: Channel) -> None:
        sort_by_channel(self.pixels, channel)

    def split(self) -> Tuple["PixelBucket", "PixelBucket"]:
        """
        Split at the median index.

        Left gets floor(len/2) rows, right gets the rest. The parent should
        not be used afterwards.
        """
        mid = self.start + len(self) // 2
        return (
            PixelBucket(self.arena, self.start, mid),
            PixelBucket(self.arena, mid, self.end),
        )

    def average(self) -> Color:
        """
        Channel-wise mean, rounded half up.

        Integer arithmetic: round(sum / n) == (2 * sum + n) // (2 * n) for
        non-negative sums, so uniform buckets come back exactly.
        """
        count = len(self)
        if count == 0:
            raise InvalidArgument("cannot average an empty bucket")
        sums = self.pixels.sum(axis=0, dtype=np.int64)
        r, g, b = ((2 * int(s) + count) // (2 * count) for s in sums)
        return Color(r, g, b)

    def to_list(self) -> List[RGBTuple]:
        return [tuple(row) for row in self.pixels.tolist()]  # type: ignore[misc]


__all__ = [
    "PixelsLike",
    "channel_ranges",
    "select_widest_channel",
    "sort_by_channel",
    "PixelBucket",
]

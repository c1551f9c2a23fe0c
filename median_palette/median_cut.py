# median_palette/median_cut.py
from __future__ import annotations

"""
Median-cut colour quantization.

Each call copies the pixels into one private arena and cuts it recursively:
pick the channel with the widest range, sort the bucket along it, split at the
median index and recurse on both halves with half the colour budget. A bucket
whose budget has dropped below 2 becomes a leaf and is reduced to its rounded
channel mean.

The budget is halved as a real number on both sides of every split, so a
request for n colours yields 2 ** floor(log2(min(n, 16))) of them: n=5 gives 4.
"""

import math
from numbers import Integral, Real
from typing import List

from .bucket import PixelBucket, PixelsLike
from .constants import DEFAULT_COLOURS, MAX_COLOURS
from .core_types import Color, InvalidArgument
from .utils import debug_log, key_value_pairs_to_string


def clamp_palette_size(n: int) -> int:
    """Validate a requested palette size and cap it at MAX_COLOURS."""
    if isinstance(n, bool) or not isinstance(n, Real):
        raise InvalidArgument(f"palette size must be an integer, got {n!r}")
    if not isinstance(n, Integral):
        if not math.isfinite(n) or int(n) != n:
            raise InvalidArgument(f"palette size must be an integer, got {n!r}")
    if n < 1:
        raise InvalidArgument(f"palette size must be >= 1, got {n!r}")
    return min(int(n), MAX_COLOURS)


def palette_size_for(n: int) -> int:
    """Number of colours quantize() returns for n on a large enough input."""
    size = clamp_palette_size(n)
    return 2 ** int(math.floor(math.log2(size)))


def _cut(
    bucket: PixelBucket,
    budget: float,
    depth: int,
    leaves: List[PixelBucket],
    debug: bool,
) -> None:
    """Recursively split bucket, appending leaves in split order."""
    # budget < 2 is log2(budget) < 1: no further cut is wanted.
    if bucket.is_empty() or budget < 2.0:
        if not bucket.is_empty():
            leaves.append(bucket)
        return

    channel = bucket.widest_channel()
    bucket.sort_by(channel)
    left, right = bucket.split()
    if debug:
        debug_log(
            "  " * depth
            + key_value_pairs_to_string(
                [
                    ("split", f"[{bucket.start}, {bucket.end})"),
                    ("channel", channel.name),
                    ("ranges", "/".join(str(v) for v in bucket.channel_ranges())),
                    ("left", len(left)),
                    ("right", len(right)),
                ]
            )
        )
    _cut(left, budget / 2.0, depth + 1, leaves, debug)
    _cut(right, budget / 2.0, depth + 1, leaves, debug)


def median_cut_buckets(
    pixels: PixelsLike, n: int = DEFAULT_COLOURS, *, debug: bool = False
) -> List[PixelBucket]:
    """
    Partition pixels into median-cut leaf buckets.

    Returns the non-empty leaves in split order; together they hold every
    input pixel exactly once. An empty input gives an empty list.
    """
    size = clamp_palette_size(n)
    root = PixelBucket.from_pixels(pixels)
    if root.is_empty():
        if debug:
            debug_log("empty input: no pixels to quantize")
        return []

    leaves: List[PixelBucket] = []
    _cut(root, float(size), 0, leaves, debug)
    return leaves


def quantize(
    pixels: PixelsLike, n: int = DEFAULT_COLOURS, *, debug: bool = False
) -> List[Color]:
    """
    Reduce pixels to a palette of representative colours.

    Args:
      pixels : uint8 (N,3) array or sequence of (r, g, b) triples; not modified
      n      : requested palette size, >= 1, capped at 16
      debug  : print the split tree and the resulting palette

    Returns:
      List of Color in split order (left subtree before right subtree), not
      ordered by dominance. Empty when pixels is empty.

    Raises:
      InvalidArgument: n < 1, n not integral, or malformed pixels.
    """
    leaves = median_cut_buckets(pixels, n, debug=debug)
    palette = [leaf.average() for leaf in leaves]
    if debug and palette:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Pixels", sum(len(leaf) for leaf in leaves)),
                    ("Requested", n),
                    ("Colours", len(palette)),
                ]
            )
        )
        for leaf, colour in zip(leaves, palette):
            debug_log(f"  -> {colour.hex}  pixels={len(leaf):,}")
    return palette


def get_palette(pixels: PixelsLike, n: int = DEFAULT_COLOURS) -> List[Color]:
    """Public entry point: quantize(pixels, n) without diagnostics."""
    return quantize(pixels, n)


__all__ = [
    "clamp_palette_size",
    "palette_size_for",
    "median_cut_buckets",
    "quantize",
    "get_palette",
]

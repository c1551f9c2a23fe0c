# median_palette/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, errors and lightweight helpers.
"""

from enum import IntEnum
from typing import Iterable, NamedTuple, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBTuple = Tuple[int, int, int]
HexStr = str

PixelArray = NDArray[np.uint8]  # (N, 3) flat list of sampled pixels
PixelImage = NDArray[np.uint8]  # (H, W, 3)

# Errors


class PaletteError(Exception):
    """Base class for palette extraction errors."""


class InvalidArgument(PaletteError, ValueError):
    """Raised for a bad palette size, region or pixel buffer."""


# Value objects


class Channel(IntEnum):
    """Colour channel selector. The value is the column index in a PixelArray."""

    R = 0
    G = 1
    B = 2


class Pixel(NamedTuple):
    """One sampled pixel, channels in [0, 255]."""

    r: int
    g: int
    b: int


class Color(NamedTuple):
    """
    Representative colour of a bucket (the rounded channel mean).

    Same shape as Pixel, but never sampled directly from an image.
    """

    r: int
    g: int
    b: int

    @property
    def hex(self) -> HexStr:
        return rgb_to_hex(self)


# Small helpers


def rgb_to_hex(rgb: Iterable[int]) -> HexStr:
    """RGB triple to lowercase hex string '#rrggbb'."""
    r, g, b = list(rgb)
    return f"#{r:02x}{g:02x}{b:02x}"


def as_pixel_array(
    pixels: Union[PixelArray, Sequence[Sequence[int]]], copy: bool = True
) -> PixelArray:
    """
    Validate pixels and return them as a contiguous uint8 (N, 3) array.

    Accepts an (N, 3) / (N, 4) array or any sequence of RGB(A) triples such as
    Pixel tuples. A fourth (alpha) column is dropped. With copy=False a
    well-formed uint8 array is returned as-is.
    """
    if isinstance(pixels, np.ndarray):
        arr = pixels
    else:
        seq = list(pixels)
        if not seq:
            return np.zeros((0, 3), dtype=np.uint8)
        try:
            arr = np.asarray(seq)
        except ValueError as e:
            raise InvalidArgument(f"pixels must be (r, g, b) triples: {e}") from e

    if arr.ndim != 2 or arr.shape[-1] not in (3, 4):
        if arr.size == 0:
            return np.zeros((0, 3), dtype=np.uint8)
        raise InvalidArgument(f"expected (N,3) pixels, got shape {arr.shape}")
    arr = arr[:, :3]

    if arr.dtype != np.uint8:
        if not np.issubdtype(arr.dtype, np.integer):
            raise InvalidArgument(f"pixel channels must be integers, got {arr.dtype}")
        if arr.size and (arr.min() < 0 or arr.max() > 255):
            raise InvalidArgument("pixel channels must be in [0, 255]")
        return np.ascontiguousarray(arr, dtype=np.uint8)

    if copy:
        return np.array(arr, dtype=np.uint8, copy=True, order="C")
    return np.ascontiguousarray(arr)


__all__ = [
    # aliases / types
    "RGBTuple",
    "HexStr",
    "PixelArray",
    "PixelImage",
    # errors
    "PaletteError",
    "InvalidArgument",
    # value objects
    "Channel",
    "Pixel",
    "Color",
    # helpers
    "rgb_to_hex",
    "as_pixel_array",
]

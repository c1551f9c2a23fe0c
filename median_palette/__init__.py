"""
median_palette package.

Purpose:
  Dominant-colour palette extraction with median cut. See extract_palette.py for CLI.

Public API:
  get_palette          : pixels, n -> list[Color] (the entry point).
  quantize             : same, with optional debug output of the split tree.
  median_cut_buckets   : the leaf partition behind a palette.
  select_widest_channel: channel with the greatest value range (ties R > G > B).
  sort_by_channel      : in-place ascending sort of pixels by one channel.
  image_palette        : load an image (optionally a Region of it) and quantize.
  core_types           : Pixel, Color, Channel, PixelArray, InvalidArgument.
  utils                : logging and palette listing helpers.

Quick start:
  from median_palette import get_palette
  get_palette([(0, 0, 0), (255, 255, 255)], 2)
  # [Color(r=0, g=0, b=0), Color(r=255, g=255, b=255)]
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import constants
from . import core_types
from . import bucket
from . import median_cut
from . import image_io
from . import utils

from .core_types import (  # noqa: E402,F401
    Channel,
    Color,
    InvalidArgument,
    PaletteError,
    Pixel,
)
from .bucket import (  # noqa: E402,F401
    PixelBucket,
    channel_ranges,
    select_widest_channel,
    sort_by_channel,
)
from .median_cut import (  # noqa: E402,F401
    get_palette,
    median_cut_buckets,
    palette_size_for,
    quantize,
)
from .image_io import Region, image_palette  # noqa: E402,F401

__all__ = [
    "__version__",
    "constants",
    "core_types",
    "bucket",
    "median_cut",
    "image_io",
    "utils",
    "Channel",
    "Color",
    "InvalidArgument",
    "PaletteError",
    "Pixel",
    "PixelBucket",
    "channel_ranges",
    "select_widest_channel",
    "sort_by_channel",
    "get_palette",
    "median_cut_buckets",
    "palette_size_for",
    "quantize",
    "Region",
    "image_palette",
]

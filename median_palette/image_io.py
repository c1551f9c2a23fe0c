# median_palette/image_io.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

import numpy as np
from PIL import Image, ImageOps

from .constants import DEFAULT_COLOURS
from .core_types import Color, InvalidArgument, PixelArray, PixelImage
from .median_cut import quantize

"""
Image loading and pixel sampling in front of the quantizer.

Images are decoded with Pillow, EXIF-oriented and flattened to RGB. Alpha is
dropped here; the quantizer only ever sees (N, 3) uint8 pixels.
"""


@dataclass(frozen=True)
class Region:
    """Rectangular area of interest: top-left (sx, sy) and size (sw, sh)."""

    sx: int
    sy: int
    sw: int
    sh: int

    def __post_init__(self) -> None:
        if self.sx < 0 or self.sy < 0:
            raise InvalidArgument(f"region offset must be >= 0, got ({self.sx}, {self.sy})")
        if self.sw <= 0 or self.sh <= 0:
            raise InvalidArgument(f"region size must be > 0, got {self.sw}x{self.sh}")


def _to_rgb(im: Image.Image) -> Image.Image:
    im = ImageOps.exif_transpose(im)
    if im.mode == "RGB":
        return im
    return im.convert("RGB")


def load_image_rgb(path: Union[str, Path]) -> PixelImage:
    """Load an image with Pillow and return a uint8 (H, W, 3) array."""
    with Image.open(path) as im0:
        im = _to_rgb(im0)
        arr = np.array(im, dtype=np.uint8)
    return arr


def downscale_max_side(image: PixelImage, max_side: Optional[int]) -> PixelImage:
    """Shrink so the longest side is <= max_side. No-op for None, empty or small images."""
    if max_side is None:
        return image
    if max_side <= 0:
        raise InvalidArgument(f"max_side must be > 0, got {max_side}")
    if image.size == 0:
        return image
    h0, w0 = image.shape[0], image.shape[1]
    longest = max(h0, w0)
    if longest <= max_side:
        return image
    scale = max_side / float(longest)
    dst_w = max(1, int(round(w0 * scale)))
    dst_h = max(1, int(round(h0 * scale)))
    im = Image.fromarray(np.ascontiguousarray(image))
    im2 = im.resize((dst_w, dst_h), resample=Image.Resampling.BOX)
    return np.array(im2, dtype=np.uint8)


def pixels_in_region(image: PixelImage, region: Optional[Region] = None) -> PixelArray:
    """
    Flatten a region of an image to (N, 3) pixels, row-major.

    The region is clipped to the image bounds; None means the whole image.
    A fourth (alpha) channel, if present, is discarded.
    """
    if image.ndim != 3 or image.shape[-1] < 3:
        raise InvalidArgument(f"expected (H,W,3) image, got shape {image.shape}")
    rgb = image[..., :3]
    if region is not None:
        rgb = rgb[region.sy : region.sy + region.sh, region.sx : region.sx + region.sw]
    return np.ascontiguousarray(rgb, dtype=np.uint8).reshape(-1, 3)


def image_palette(
    path: Union[str, Path],
    n: int = DEFAULT_COLOURS,
    region: Optional[Region] = None,
    max_side: Optional[int] = None,
    *,
    debug: bool = False,
) -> List[Color]:
    """
    Load an image and extract its median-cut palette.

    The region is taken from the full-size image before any downscale.
    """
    image = load_image_rgb(path)
    if region is not None:
        image = image[region.sy : region.sy + region.sh, region.sx : region.sx + region.sw]
    image = downscale_max_side(image, max_side)
    return quantize(pixels_in_region(image), n, debug=debug)


__all__ = [
    "Region",
    "load_image_rgb",
    "downscale_max_side",
    "pixels_in_region",
    "image_palette",
]

"""
Global tunables used across the project.

- Palette size limits (MAX_COLOURS, DEFAULT_COLOURS)
- CLI inputs and outputs (IMAGE_EXTS, OUTPUT_FORMATS, DEFAULT_JOBS)
"""
from __future__ import annotations

from typing import FrozenSet, Tuple

# ============
# Palette size
# ============
MAX_COLOURS: int = 16  # larger requests are capped, never rejected
DEFAULT_COLOURS: int = 1

# =====
# CLI
# =====
IMAGE_EXTS: FrozenSet[str] = frozenset({".png", ".jpg", ".jpeg", ".webp", ".bmp", ".gif"})
OUTPUT_FORMATS: Tuple[str, ...] = ("text", "json")
DEFAULT_JOBS: int = 2

__all__ = [
    "MAX_COLOURS",
    "DEFAULT_COLOURS",
    "IMAGE_EXTS",
    "OUTPUT_FORMATS",
    "DEFAULT_JOBS",
]

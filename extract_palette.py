#!/usr/bin/env python3
"""
extract_palette.py
Extract dominant-colour palettes from images with median cut.

Usage:
  python extract_palette.py INPUT -n N [--region SX SY SW SH] [--max-side S] [--format text|json] [--jobs J] [--debug]

Input:
  Any Pillow-readable image, or a folder of them (non-recursive). Alpha is ignored.

Output:
  text : one '#rrggbb  rgb(r, g, b)' line per colour, in split order.
  json : one object per file: {"file": ..., "palette": [{"hex": ..., "rgb": [r, g, b]}]}

Notes:
  N is capped at 16, and the palette holds 2**floor(log2(N)) colours (N=5 gives 4).
  Folder mode processes --jobs files in parallel and prints results in name order.
"""

from __future__ import annotations

import argparse
import io
import json
import os
import sys
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from contextlib import redirect_stdout
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from PIL import UnidentifiedImageError

from median_palette.constants import (
    DEFAULT_COLOURS,
    DEFAULT_JOBS,
    IMAGE_EXTS,
    MAX_COLOURS,
    OUTPUT_FORMATS,
)
from median_palette.core_types import Color, PaletteError
from median_palette.image_io import Region, image_palette
from median_palette.utils import (
    # formatting
    format_total_duration_compact,
    format_palette_lines,
    palette_to_records,
    # pretty logging
    print_banner,
    log,
    debug_log,
    error,
    print_config_line,
    key_value_pairs_to_string,
    enable_line_buffered_stdout,
)

# CLI args


def parse_cli_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """
    Parse CLI arguments for palette extraction.

    Returns:
      argparse.Namespace with:
        src: Path to image or folder
        colours: requested palette size
        region: None or [sx, sy, sw, sh]
        max_side: optional int longest side before sampling
        format: "text" | "json"
        jobs: parallel file workers
        debug: bool for split-tree details
    """
    parser = argparse.ArgumentParser(
        prog="extract_palette",
        description="Extract a median-cut colour palette from image(s).",
    )
    parser.add_argument("src", type=Path, help="Input image or folder")
    parser.add_argument(
        "-n",
        "--colours",
        type=int,
        default=DEFAULT_COLOURS,
        help=f"Palette size (capped at {MAX_COLOURS}).",
    )
    parser.add_argument(
        "--region",
        type=int,
        nargs=4,
        metavar=("SX", "SY", "SW", "SH"),
        default=None,
        help="Only sample this rectangle (left, top, width, height).",
    )
    parser.add_argument(
        "--max-side",
        type=int,
        default=None,
        help="Downscale so the longest side <= S before sampling. Omit for full size.",
    )
    parser.add_argument(
        "--format", choices=list(OUTPUT_FORMATS), default="text", help="Output format."
    )
    parser.add_argument(
        "--jobs", type=int, default=DEFAULT_JOBS, help="Files processed in parallel"
    )
    parser.add_argument("--debug", action="store_true", help="Print the split tree")
    args = parser.parse_args(argv)
    if args.colours < 1:
        parser.error(f"--colours must be >= 1, got {args.colours}")
    if args.jobs < 1:
        parser.error(f"--jobs must be >= 1, got {args.jobs}")
    return args


def _region_from_args(values: Optional[List[int]]) -> Optional[Region]:
    if values is None:
        return None
    sx, sy, sw, sh = values
    return Region(sx, sy, sw, sh)


# Per-file processing


def _process_single_image(
    src_path: Path,
    colours: int,
    region: Optional[Region],
    max_side: Optional[int],
    output_format: str,
    debug: bool,
) -> Tuple[bool, Optional[dict]]:
    """
    Process a single image path end-to-end: load -> sample -> quantize -> report.

    Returns (ok, record). record is the JSON object for json output, else None.
    """
    t_start = time.perf_counter()
    if output_format == "text":
        print_banner(src_path.name)

    try:
        palette: List[Color] = image_palette(
            src_path, colours, region=region, max_side=max_side, debug=debug
        )
    except (UnidentifiedImageError, OSError, PaletteError) as e:
        error(f"{src_path.name}: {e}")
        return False, None
    elapsed = time.perf_counter() - t_start

    if output_format == "json":
        return True, {"file": str(src_path), "palette": palette_to_records(palette)}

    if not palette:
        log("No pixels sampled.")
    for line in format_palette_lines(palette):
        log(f"  {line}")
    if debug:
        debug_log(
            key_value_pairs_to_string(
                [("Requested", colours), ("Colours", len(palette))]
            )
        )
    log(f"Total time {format_total_duration_compact(elapsed)}")
    return True, None


class _ThreadStdout(io.TextIOBase):
    """
    Stdout stand-in that sends each thread's writes to that thread's buffer.

    Threads without a buffer write through to the wrapped stream.
    """

    def __init__(self, stream) -> None:
        super().__init__()
        self._stream = stream
        self._local = threading.local()

    def capture(self) -> io.StringIO:
        buf = io.StringIO()
        self._local.buf = buf
        return buf

    def release(self) -> None:
        self._local.buf = None

    def _target(self):
        buf = getattr(self._local, "buf", None)
        return self._stream if buf is None else buf

    def writable(self) -> bool:
        return True

    def write(self, s: str) -> int:
        return self._target().write(s)

    def flush(self) -> None:
        self._target().flush()


def _process_one_captured(
    router: _ThreadStdout,
    path: Path,
    colours: int,
    region: Optional[Region],
    max_side: Optional[int],
    output_format: str,
    debug: bool,
) -> Tuple[str, bool, Optional[dict]]:
    """
    Process a single file with stdout capture.

    Useful for concurrent execution where output should be printed in order.
    """
    buf = router.capture()
    try:
        ok, record = _process_single_image(
            path, colours, region, max_side, output_format, debug
        )
    finally:
        router.release()
    return buf.getvalue(), ok, record


def _list_images(folder: Path) -> List[Path]:
    files = [
        p for p in folder.iterdir() if p.is_file() and p.suffix.lower() in IMAGE_EXTS
    ]
    files.sort(key=lambda p: p.name.lower())
    return files


# Entry point


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    CLI entry point.

    Handles single file or folder. In folder mode supports --jobs parallelism
    while preserving readable output ordering. Returns the process exit code.
    """
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    src = args.src
    if not src.exists():
        error(f"not found: {src}")
        return 2

    try:
        region = _region_from_args(args.region)
    except PaletteError as e:
        error(str(e))
        return 2

    text_out = args.format == "text"
    if text_out:
        print_config_line(
            "run",
            [
                ("CPU cores", os.cpu_count() or 1),
                ("Jobs", args.jobs),
                ("Colours", args.colours),
            ],
            debug=args.debug,
        )

    files = _list_images(src) if src.is_dir() else [src]
    if args.debug and src.is_dir() and text_out:
        debug_log(key_value_pairs_to_string([("Images", len(files)), ("Jobs", args.jobs)]))

    # Text output streams live when there is nothing to reorder.
    if text_out and (args.jobs == 1 or len(files) <= 1):
        oks = [
            _process_single_image(
                p, args.colours, region, args.max_side, args.format, args.debug
            )[0]
            for p in files
        ]
        return 0 if all(oks) else 1

    router = _ThreadStdout(sys.stdout)
    with redirect_stdout(router):
        with ThreadPoolExecutor(max_workers=args.jobs) as ex:
            futures = [
                ex.submit(
                    _process_one_captured,
                    router,
                    p,
                    args.colours,
                    region,
                    args.max_side,
                    args.format,
                    args.debug,
                )
                for p in files
            ]
            results = [f.result() for f in futures]

    if text_out:
        print("".join(block for block, _ok, _rec in results), end="", flush=True)
    else:
        records = [rec for _block, _ok, rec in results if rec is not None]
        print(json.dumps(records, indent=2), flush=True)

    return 0 if all(ok for _block, ok, _rec in results) else 1


if __name__ == "__main__":
    sys.exit(main())

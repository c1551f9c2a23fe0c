# median_palette/utils.py
from __future__ import annotations

"""
Shared utilities for median_palette.

Includes time formatting, palette listings for the CLI, and tidy logging.
"""

from typing import Any, Dict, Iterable, List, Sequence, Tuple

from .core_types import Color


#  Time formatting


def format_total_duration_compact(seconds: float) -> str:
    """Compact total duration: 'Mm Ss', 'Ss.s', or 'ms'."""
    if seconds >= 60.0:
        minutes = int(seconds // 60)
        rem = int(round(seconds - 60 * minutes))
        return f"{minutes}m {rem}s"
    if seconds >= 1.0:
        return f"{seconds:.1f}s"
    return f"{seconds * 1000.0:.1f}ms"


# Palette listings


def format_palette_lines(palette: Sequence[Color]) -> List[str]:
    """One '#rrggbb  rgb(r, g, b)' line per colour, in palette order."""
    return [f"{c.hex}  rgb({c.r}, {c.g}, {c.b})" for c in palette]


def palette_to_records(palette: Sequence[Color]) -> List[Dict[str, Any]]:
    """JSON-friendly records: [{'hex': '#rrggbb', 'rgb': [r, g, b]}, ...]."""
    return [{"hex": c.hex, "rgb": [c.r, c.g, c.b]} for c in palette]


#  CLI / stdout


def enable_line_buffered_stdout() -> None:
    """
    Enable line-buffered stdout when supported.
    Helps live output in terminals that expose .reconfigure().
    """
    import sys

    reconfig = getattr(sys.stdout, "reconfigure", None)
    if callable(reconfig):
        try:
            reconfig(line_buffering=True, write_through=True)
        except (ValueError, OSError):
            pass


# Pretty logging


def format_bool_on_off(value: Any) -> str:
    """Pretty boolean: 'on'/'off' for bools; str(value) otherwise."""
    if isinstance(value, bool):
        return "on" if value else "off"
    return str(value)


def format_number_compact(value: Any) -> str:
    """Pretty number: 1,234 style for ints; compact for floats; passthrough otherwise."""
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        text = f"{value:.3f}".rstrip("0").rstrip(".")
        return text
    return str(value)


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  ", eq: str = ": "
) -> str:
    """
    Format (name, value) pairs as 'Name: value' blocks separated by sep.
    Uses format_bool_on_off / format_number_compact for readability.
    """
    out: List[str] = []
    for name, value in pairs:
        display = (
            format_bool_on_off(value)
            if isinstance(value, bool)
            else format_number_compact(value)
        )
        out.append(f"{name}{eq}{display}")
    return sep.join(out)


def print_config_line(
    section: str, pairs: Iterable[Tuple[str, Any]], debug: bool
) -> None:
    """
    Emit a single human-readable config line, e.g.:
      [run] CPU cores: 8  Jobs: 2  Colours: 8
    Routes to debug_log() when debug=True, else to log().
    """
    line = f"[{section}] {key_value_pairs_to_string(pairs)}"
    (debug_log if debug else log)(line)


def print_banner(title: str) -> None:
    """Section banner."""
    print(f"\n=== {title} ===", flush=True)


def log(message: str) -> None:
    """Plain log line."""
    print(message, flush=True)


def debug_log(message: str) -> None:
    """Debug log line."""
    print(f"[debug] {message}", flush=True)


def error(message: str) -> None:
    """Error log line to stderr."""
    import sys

    print(f"[error] {message}", file=sys.stderr, flush=True)


__all__ = [
    # formatting
    "format_total_duration_compact",
    "format_bool_on_off",
    "format_number_compact",
    "key_value_pairs_to_string",
    # palette listings
    "format_palette_lines",
    "palette_to_records",
    # logging
    "enable_line_buffered_stdout",
    "print_config_line",
    "print_banner",
    "log",
    "debug_log",
    "error",
]

from __future__ import annotations

"""
Human-readable byte counts.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Tuple

SIZE_UNITS: Tuple[str, ...] = ("B", "KB", "MB", "GB", "TB")
_STEP = 1024
_TWO_PLACES = Decimal("0.01")


def format_size(num_bytes: int) -> str:
    """
    Convert a byte count into the largest unit that keeps it below 1024.

    Keeps at most two fractional digits and trims trailing zeros, so 1536
    becomes "1.5 KB" and 1073741824 becomes "1 GB". Values past the TB
    range stay in TB.

    Args:
        num_bytes: Non-negative byte count.

    Returns:
        str: Formatted size, e.g. "1023 B".

    Raises:
        ValueError: If num_bytes is negative.
    """
    if num_bytes < 0:
        raise ValueError(f"Byte count must be non-negative, received {num_bytes}.")

    value = Decimal(int(num_bytes))
    order = 0
    while value >= _STEP and order < len(SIZE_UNITS) - 1:
        value /= _STEP
        order += 1

    rounded = value.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)
    text = f"{rounded:f}".rstrip("0").rstrip(".")
    return f"{text} {SIZE_UNITS[order]}"

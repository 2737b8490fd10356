#!/usr/bin/env python3
"""
pdfsqueeze
size_tools.py
Byte counts: stat lookup, human-readable formatting and savings percentage.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Union

# Largest unit first
_UNITS = (
    ("GB", 1024 ** 3),
    ("MB", 1024 ** 2),
    ("KB", 1024),
)


def file_size(path: Union[str, Path]) -> int:
    """Size of a file in bytes, as reported by stat."""
    return os.stat(path).st_size


def format_size(size: int) -> str:
    """
    Format a byte count using the largest unit it fills.

    Values below 1024 are shown as whole bytes. Above that, one decimal
    place is kept and the rest truncated, so the shown value never
    reaches 1024 of its unit. Negative counts (a file that grew) get a
    leading minus sign.

    Examples:
        >>> format_size(512)
        '512 B'
        >>> format_size(1536)
        '1.5 KB'
        >>> format_size(2097152)
        '2.0 MB'
    """
    size = int(size)
    if size < 0:
        return "-" + format_size(-size)
    for unit, divisor in _UNITS:
        if size >= divisor:
            tenths = size * 10 // divisor
            return f"{tenths // 10}.{tenths % 10} {unit}"
    return f"{size} B"


def savings_percent(original: int, compressed: int) -> int:
    """
    Percentage saved, truncated toward zero (49.9% -> 49).

    Returns 0 for an empty original so a zero-byte input never divides
    by zero.
    """
    if original <= 0:
        return 0
    saved = original - compressed
    pct = abs(saved) * 100 // original
    return -pct if saved < 0 else pct


__all__ = ["file_size", "format_size", "savings_percent"]

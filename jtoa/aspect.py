#!/usr/bin/env python3
# jtoa/aspect.py
"""
Output grid sizing.
Derives the missing output dimension from the source aspect ratio, keeping
in mind that a terminal character cell is about twice as tall as it is wide.
"""

from __future__ import annotations

import logging
import math
from typing import Tuple

from jtoa.config import SizingMode

__all__ = [
    "round_half_up",
    "derive_height",
    "derive_width",
    "resolve_dimensions",
    "MAX_ADJUST_STEPS",
]

logger = logging.getLogger(__name__)

# Upper bound on how far the fixed dimension may be bumped.
MAX_ADJUST_STEPS = 1 << 20


def round_half_up(x: float) -> int:
    """Round to nearest, halves away from -inf: floor(x + 0.5)."""
    return int(math.floor(x + 0.5))


def derive_height(width: int, src_width: int, src_height: int) -> int:
    return round_half_up(0.5 * width * src_height / src_width)


def derive_width(height: int, src_width: int, src_height: int) -> int:
    return round_half_up(2.0 * height * src_width / src_height)


def resolve_dimensions(
    mode: SizingMode,
    width: int,
    height: int,
    src_width: int,
    src_height: int,
) -> Tuple[int, int]:
    """
    Return the (width, height) of the output grid for one source image.

    When the derived dimension rounds to zero the fixed one is bumped by one
    and the derivation retried, until the derived side is at least 1.
    """
    if src_width < 1 or src_height < 1:
        raise ValueError(f"Invalid source dimensions {src_width}x{src_height}")

    if mode is SizingMode.DERIVE_HEIGHT:
        for _ in range(MAX_ADJUST_STEPS):
            height = derive_height(width, src_width, src_height)
            if height >= 1:
                return width, height
            width += 1
            logger.debug("Derived height is 0, bumping width to %d", width)
        raise ValueError(f"Cannot derive a height for a {src_width}x{src_height} source")

    if mode is SizingMode.DERIVE_WIDTH:
        for _ in range(MAX_ADJUST_STEPS):
            width = derive_width(height, src_width, src_height)
            if width >= 1:
                return width, height
            height += 1
            logger.debug("Derived width is 0, bumping height to %d", height)
        raise ValueError(f"Cannot derive a width for a {src_width}x{src_height} source")

    return width, height

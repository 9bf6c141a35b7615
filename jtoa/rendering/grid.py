#!/usr/bin/env python3
# jtoa/rendering/grid.py
"""
Destination accumulation grid.

Holds the per-cell brightness sums, how many source rows fed each destination
row, and which source pixel feeds each destination column (nearest neighbour
horizontally, no averaging across columns).
"""

from __future__ import annotations

import logging

import numpy as np

from jtoa.errors import AllocationFailure
from jtoa.rendering.intensity import normalize

__all__ = ["GridBuffer"]

logger = logging.getLogger(__name__)


class GridBuffer:
    """Owned by one image from allocation until it has been rendered."""

    def __init__(self, width: int, height: int, src_width: int, components: int):
        if width < 1 or height < 1:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.components = components
        self.horizontal_ratio = src_width / width
        self.normalized = False

        self.accumulator = None
        self.row_counts = None
        self.column_lookup = None
        try:
            self.accumulator = np.zeros((height, width), dtype=np.float64)
            self.row_counts = np.zeros(height, dtype=np.int64)
            self.column_lookup = (
                np.floor(np.arange(width) * self.horizontal_ratio).astype(np.intp) * components
            )
        except (MemoryError, ValueError) as exc:
            self.release()
            raise AllocationFailure("Not enough memory for given output dimension") from exc

        logger.debug("Grid %dx%d, horizontal ratio %.4f", width, height, self.horizontal_ratio)

    def add_row(self, dest_row: int, values: np.ndarray) -> None:
        """Accumulate one row of intensities into dest_row."""
        self.accumulator[dest_row] += values
        self.row_counts[dest_row] += 1

    def normalize(self) -> None:
        if self.normalized:
            raise RuntimeError("Grid has already been normalized")
        normalize(self.accumulator, self.row_counts)
        self.normalized = True

    def release(self) -> None:
        self.accumulator = None
        self.row_counts = None
        self.column_lookup = None

#!/usr/bin/env python3
# jtoa/rendering/resampler.py
"""
Vertical resampler.

Source rows arrive one at a time, top to bottom. Each is mapped to a
destination row; every destination row from the cursor up to and including
that one receives the row's intensities. Shrinking therefore averages all
source rows landing on a destination row (box filter), while stretching
replicates a source row into the destination rows it skips over.
"""

from __future__ import annotations

import logging

import numpy as np

from jtoa.aspect import round_half_up
from jtoa.rendering.grid import GridBuffer
from jtoa.rendering.intensity import gather_row

__all__ = ["Resampler"]

logger = logging.getLogger(__name__)


class Resampler:
    """One instance per image; the row cursor is never shared."""

    def __init__(self, grid: GridBuffer, src_height: int):
        self.grid = grid
        self.src_height = src_height
        if src_height > 1:
            self.vertical_ratio = (grid.height - 1) / (src_height - 1)
        else:
            self.vertical_ratio = 0.0
        self.last_dest_row = 0
        self._last_src_row = -1
        logger.debug("Vertical ratio %.4f over %d source rows", self.vertical_ratio, src_height)

    def dest_row_for(self, src_row: int) -> int:
        if self.src_height == 1:
            # A lone source row fills the whole grid.
            return self.grid.height - 1
        return min(round_half_up(self.vertical_ratio * src_row), self.grid.height - 1)

    def consume(self, src_row: int, scanline: np.ndarray) -> None:
        if src_row <= self._last_src_row:
            raise ValueError(f"Source row {src_row} arrived after row {self._last_src_row}")
        self._last_src_row = src_row

        dest_row = self.dest_row_for(src_row)
        values = gather_row(scanline, self.grid.column_lookup, self.grid.components)
        while self.last_dest_row <= dest_row:
            self.grid.add_row(self.last_dest_row, values)
            self.last_dest_row += 1
        self.last_dest_row = dest_row

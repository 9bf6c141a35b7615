#!/usr/bin/env python3
# jtoa/rendering/intensity.py
"""
Brightness helpers.

- intensity():      multi-component 8-bit sample -> brightness in [0, 1]
- gather_row():     one source scanline -> brightness per destination column
- normalize():      divide accumulated row sums by their contribution counts
- quantize():       cell brightness -> palette index
"""

from __future__ import annotations

from typing import Sequence, Union

import numpy as np

__all__ = ["intensity", "gather_row", "normalize", "quantize"]

ArrayLike = Union[np.ndarray, Sequence[int]]


def intensity(samples: ArrayLike, components: int):
    """
    Average of the first `components` samples along the last axis, scaled to
    [0, 1]. A single pixel gives a float, a stack of pixels an array.
    """
    px = np.asarray(samples)[..., :components].astype(np.float64)
    v = px.sum(axis=-1) / (255.0 * components)
    if v.ndim == 0:
        return float(v)
    return v


def gather_row(scanline: np.ndarray, column_lookup: np.ndarray, components: int) -> np.ndarray:
    """
    Pick one source pixel per destination column and return its intensity.

    column_lookup holds sample offsets (component units) into the scanline.
    """
    offsets = column_lookup[:, None] + np.arange(components)
    return intensity(scanline[offsets], components)


def normalize(accumulator: np.ndarray, row_counts: np.ndarray) -> None:
    """
    Turn row sums into averages, in place.
    Rows that received no contributions stay as they are (zero).
    Not idempotent: run exactly once per grid.
    """
    filled = row_counts != 0
    accumulator[filled] /= row_counts[filled, None]


def quantize(cell: Union[float, np.ndarray], chars: int, invert: bool = False):
    """
    Map brightness to a palette index in [0, chars].

    Without invert, bright cells land on index 0 and dark cells on `chars`.
    """
    pos = np.floor(chars * np.asarray(cell, dtype=np.float64) + 0.5).astype(np.intp)
    pos = np.clip(pos, 0, chars)
    idx = pos if invert else chars - pos
    if idx.ndim == 0:
        return int(idx)
    return idx

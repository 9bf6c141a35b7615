#!/usr/bin/env python3
# jtoa/decoding.py
"""
Decoding collaborator backed by Pillow.

Exposes the header metadata (width, height, components per pixel) before the
first row is requested, then hands out 8-bit scanlines strictly top to bottom.
"""

from __future__ import annotations

import io
import logging
from typing import BinaryIO, Iterator, Tuple

import numpy as np
from PIL import Image, UnidentifiedImageError

from jtoa.errors import DecodeFailure

__all__ = ["ScanlineSource", "open_source"]

logger = logging.getLogger(__name__)

# Modes passed through as-is; wide grey modes are scaled down to 8 bits,
# everything else is converted to RGB.
_NATIVE_MODES = {"L": 1, "RGB": 3}
_WIDE_GREY_MODES = ("I", "I;16", "I;16L", "I;16B", "I;16N", "F")


def _to_8bit(img: Image.Image) -> np.ndarray:
    """Sample array of an image as uint8, scaling 16-bit grey down."""
    if img.mode == "F":
        # same range Pillow uses for F -> L
        return np.clip(np.rint(np.asarray(img)), 0, 255).astype(np.uint8)
    if img.mode in _WIDE_GREY_MODES:
        arr = np.clip(np.asarray(img).astype(np.int64), 0, 0xFFFF)
        return (arr >> 8).astype(np.uint8)
    return np.asarray(img, dtype=np.uint8)


class ScanlineSource:
    """Forward-only row reader over a decoded image."""

    def __init__(self, img: Image.Image):
        if img.mode in _WIDE_GREY_MODES:
            self.components = 1
        else:
            if img.mode not in _NATIVE_MODES:
                logger.debug("Converting %s image to RGB", img.mode)
                img = img.convert("RGB")
            self.components = _NATIVE_MODES[img.mode]
        self._img = img
        self.width, self.height = img.size
        self._consumed = False

    @property
    def row_stride(self) -> int:
        return self.width * self.components

    def rows(self) -> Iterator[Tuple[int, np.ndarray]]:
        """Yield (row_index, samples) for every row, top to bottom, once."""
        if self._consumed:
            raise RuntimeError("Scanlines were already read")
        self._consumed = True
        try:
            arr = _to_8bit(self._img)
        except OSError as exc:
            raise DecodeFailure(f"Cannot decode image: {exc}") from exc
        arr = arr.reshape(self.height, self.row_stride)
        for y in range(self.height):
            yield y, arr[y]


def open_source(fp: BinaryIO) -> ScanlineSource:
    """
    Read the header from a binary stream and return a ScanlineSource.
    Non-seekable streams (pipes, stdin) are buffered in memory first.
    """
    try:
        seekable = fp.seekable()
    except (AttributeError, ValueError):
        seekable = False
    if not seekable:
        fp = io.BytesIO(fp.read())
    try:
        img = Image.open(fp)
        img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
        raise DecodeFailure(f"Cannot decode image: {exc}") from exc
    return ScanlineSource(img)

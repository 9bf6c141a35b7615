#!/usr/bin/env python3
# jtoa/rendering/renderer.py
"""
Text renderer.

- Quantizes each normalized grid cell to a palette index
- Applies optional X/Y flips at output time only (stored data is untouched)
- Emits one string per destination row, without trailing newline or padding
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from jtoa.config import RenderOptions
from jtoa.rendering.grid import GridBuffer
from jtoa.rendering.intensity import quantize
from jtoa.rendering.palette import Palette

__all__ = ["Renderer"]


@dataclass
class Renderer:
    palette: Palette
    invert: bool = False
    flipx: bool = False
    flipy: bool = False

    @classmethod
    def from_options(cls, options: RenderOptions) -> "Renderer":
        return cls(options.palette, options.invert, options.flipx, options.flipy)

    def render(self, grid: GridBuffer) -> List[str]:
        if not grid.normalized:
            raise RuntimeError("Grid must be normalized before rendering")

        idx = quantize(grid.accumulator, self.palette.chars, self.invert)
        if self.flipy:
            idx = idx[::-1, :]
        if self.flipx:
            idx = idx[:, ::-1]

        glyphs = np.array(list(self.palette.glyphs))
        return ["".join(glyphs[row].tolist()) for row in idx]

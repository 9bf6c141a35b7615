#!/usr/bin/env python3
# jtoa/rendering/palette.py
"""
Character palettes.

A palette is an ordered run of glyphs from one brightness extreme to the
other. By default the rightmost glyph draws black cells (dark ink on a light
background); inverting the render swaps the ends.
"""

from __future__ import annotations

from dataclasses import dataclass

from jtoa.errors import InvalidArguments

__all__ = [
    "Palette",
    "DEFAULT_CHARS",
    "MIN_PALETTE_LENGTH",
    "MAX_PALETTE_LENGTH",
]

DEFAULT_CHARS = "   ...',;:clodxkO0KXNWM"
MIN_PALETTE_LENGTH = 2
MAX_PALETTE_LENGTH = 256


@dataclass(frozen=True)
class Palette:
    glyphs: str = DEFAULT_CHARS

    def __post_init__(self):
        if not isinstance(self.glyphs, str):
            raise InvalidArguments("Palette characters must be a string.")
        if len(self.glyphs) > MAX_PALETTE_LENGTH:
            raise InvalidArguments("Too many ascii characters specified.")
        if len(self.glyphs) < MIN_PALETTE_LENGTH:
            raise InvalidArguments("You must specify at least two characters in --chars.")

    def __len__(self) -> int:
        return len(self.glyphs)

    def __getitem__(self, index: int) -> str:
        return self.glyphs[index]

    @property
    def chars(self) -> int:
        """Highest usable index (length - 1)."""
        return len(self.glyphs) - 1

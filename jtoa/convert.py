#!/usr/bin/env python3
# jtoa/convert.py
"""
Per-image conversion pipeline.

sizing -> grid allocation -> row-by-row resampling -> normalization -> text.
Every image gets fresh grid and resampler state.
"""

from __future__ import annotations

import logging
from typing import BinaryIO, List

from jtoa.aspect import resolve_dimensions
from jtoa.config import RenderOptions
from jtoa.decoding import ScanlineSource, open_source
from jtoa.errors import InvalidArguments
from jtoa.rendering.grid import GridBuffer
from jtoa.rendering.renderer import Renderer
from jtoa.rendering.resampler import Resampler

__all__ = ["convert_source", "convert_stream"]

logger = logging.getLogger(__name__)


def _log_info(source: ScanlineSource, width: int, height: int, options: RenderOptions) -> None:
    palette = options.palette
    logger.info("Source width: %d", source.width)
    logger.info("Source height: %d", source.height)
    logger.info("Source color components: %d", source.components)
    logger.info("Output width: %d", width)
    logger.info("Output height: %d", height)
    logger.info("Output palette (%d chars): '%s'", len(palette), palette.glyphs)


def convert_source(source: ScanlineSource, options: RenderOptions) -> List[str]:
    """Render an already opened image into lines of text."""
    try:
        width, height = resolve_dimensions(
            options.mode, options.width, options.height, source.width, source.height
        )
    except ValueError as exc:
        raise InvalidArguments(str(exc)) from exc

    grid = GridBuffer(width, height, source.width, source.components)
    try:
        _log_info(source, width, height, options)

        resampler = Resampler(grid, source.height)
        for y, scanline in source.rows():
            resampler.consume(y, scanline)
        grid.normalize()

        return Renderer.from_options(options).render(grid)
    finally:
        grid.release()


def convert_stream(fp: BinaryIO, options: RenderOptions) -> List[str]:
    return convert_source(open_source(fp), options)

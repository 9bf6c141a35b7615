import numpy as np
import pytest

from jtoa.config import RenderOptions
from jtoa.rendering.grid import GridBuffer
from jtoa.rendering.palette import Palette
from jtoa.rendering.renderer import Renderer


@pytest.fixture
def grid():
    g = GridBuffer(2, 2, 2, 1)
    g.add_row(0, np.array([0.0, 0.0]))
    g.add_row(1, np.array([1.0, 0.0]))
    g.normalize()
    return g


def test_render_plain(grid):
    # dark cells take the right end of the palette
    assert Renderer(Palette(" #")).render(grid) == ["##", " #"]


def test_render_invert(grid):
    assert Renderer(Palette(" #"), invert=True).render(grid) == ["  ", "# "]


def test_render_flips(grid):
    assert Renderer(Palette(" #"), flipx=True).render(grid) == ["##", "# "]
    assert Renderer(Palette(" #"), flipy=True).render(grid) == [" #", "##"]
    assert Renderer(Palette(" #"), flipx=True, flipy=True).render(grid) == ["# ", "##"]


def test_flip_is_involution(grid):
    plain = Renderer(Palette(" .:#")).render(grid)
    flipped = Renderer(Palette(" .:#"), flipx=True, flipy=True).render(grid)
    assert [line[::-1] for line in flipped[::-1]] == plain


def test_flip_leaves_grid_untouched(grid):
    before = grid.accumulator.copy()
    Renderer(Palette(" #"), flipx=True, flipy=True).render(grid)
    assert np.array_equal(grid.accumulator, before)


def test_requires_normalized_grid():
    with pytest.raises(RuntimeError):
        Renderer(Palette(" #")).render(GridBuffer(1, 1, 1, 1))


def test_from_options():
    opts = RenderOptions(palette=Palette("ab"), invert=True, flipy=True)
    r = Renderer.from_options(opts)
    assert r.palette.glyphs == "ab" and r.invert and r.flipy and not r.flipx

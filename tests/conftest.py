import io
import logging

import numpy as np
import pytest
from PIL import Image


def png_bytes(arr: np.ndarray, mode: str) -> bytes:
    buf = io.BytesIO()
    img = Image.fromarray(arr.astype(np.uint8))
    assert img.mode == mode
    img.save(buf, "PNG")
    return buf.getvalue()


@pytest.fixture
def make_png():
    """Build PNG bytes for a uniform image of the given size and mode."""
    def _make(width, height, value=128, mode="L"):
        channels = {"L": None, "RGB": 3, "RGBA": 4}[mode]
        shape = (height, width) if channels is None else (height, width, channels)
        return png_bytes(np.full(shape, value), mode)
    return _make


@pytest.fixture(autouse=True)
def no_user_config(tmp_path, monkeypatch):
    monkeypatch.setenv("JTOA_CONFIG", str(tmp_path / "missing.json"))


@pytest.fixture(autouse=True)
def drop_cli_log_handlers():
    """main() installs a stderr handler bound to the captured stream."""
    yield
    root = logging.getLogger()
    for h in root.handlers[:]:
        if type(h) is logging.StreamHandler:
            root.removeHandler(h)
    root.setLevel(logging.WARNING)

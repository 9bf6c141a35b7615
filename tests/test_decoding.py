import io

import numpy as np
import pytest
from PIL import Image

from jtoa.decoding import ScanlineSource, open_source
from jtoa.errors import DecodeFailure

from conftest import png_bytes


class _Pipe(io.RawIOBase):
    """Readable but not seekable, like stdin."""

    def __init__(self, data):
        self._buf = io.BytesIO(data)

    def readable(self):
        return True

    def seekable(self):
        return False

    def readinto(self, b):
        chunk = self._buf.read(len(b))
        b[:len(chunk)] = chunk
        return len(chunk)


def test_grayscale_header_and_rows():
    arr = np.array([[0, 10, 20], [30, 40, 50]])
    src = open_source(io.BytesIO(png_bytes(arr, "L")))
    assert (src.width, src.height, src.components) == (3, 2, 1)
    rows = list(src.rows())
    assert [y for y, _ in rows] == [0, 1]
    assert rows[1][1].tolist() == [30, 40, 50]


def test_rgb_rows_are_interleaved(make_png):
    src = open_source(io.BytesIO(make_png(4, 3, 7, "RGB")))
    assert src.components == 3
    y, row = next(src.rows())
    assert y == 0
    assert row.shape == (12,)
    assert row.dtype == np.uint8


def test_alpha_dropped(make_png):
    src = open_source(io.BytesIO(make_png(2, 2, 255, "RGBA")))
    assert src.components == 3


def test_rows_read_once(make_png):
    src = open_source(io.BytesIO(make_png(2, 2)))
    list(src.rows())
    with pytest.raises(RuntimeError):
        list(src.rows())


def test_non_seekable_stream(make_png):
    src = open_source(io.BufferedReader(_Pipe(make_png(5, 4))))
    assert (src.width, src.height) == (5, 4)


def test_garbage_is_decode_failure():
    with pytest.raises(DecodeFailure):
        open_source(io.BytesIO(b"definitely not an image"))


def test_sixteen_bit_grey_scaled_to_eight_bits():
    buf = io.BytesIO()
    Image.fromarray(np.full((3, 4), 16384, dtype=np.uint16)).save(buf, "PNG")
    src = open_source(io.BytesIO(buf.getvalue()))
    assert src.components == 1
    rows = list(src.rows())
    assert len(rows) == 3
    assert rows[0][1].tolist() == [64] * 4
    assert rows[0][1].dtype == np.uint8


def test_float_image_clipped_to_byte_range():
    arr = np.array([[-5.0, 100.4, 300.0]], dtype=np.float32)
    src = ScanlineSource(Image.fromarray(arr))
    assert src.components == 1
    _, row = next(src.rows())
    assert row.tolist() == [0, 100, 255]

import numpy as np
import pytest
from PIL import Image

from conftest import continuous_ramp
from edgeascii.buffer import PixelBuffer
from edgeascii.errors import SourceUnavailable
from edgeascii.source import PillowImageSource, save_buffer


def test_load_pgm(pgm_factory):
    arr = continuous_ramp(13, 7)
    buf = PillowImageSource().load(pgm_factory(arr))

    assert buf.size == (13, 7)
    assert buf.stride == 16
    np.testing.assert_array_equal(buf.pixels, arr)


def test_load_converts_colour_to_grey(tmp_path):
    path = tmp_path / "red.png"
    Image.new("RGB", (5, 4), (255, 0, 0)).save(path)

    buf = PillowImageSource(alignment=1).load(path)
    assert buf.size == (5, 4)
    assert buf.stride == 5
    # ITU-R 601 luma of pure red
    assert buf.pixel(0, 0) == 76


def test_missing_path(tmp_path):
    with pytest.raises(SourceUnavailable, match="does not exist"):
        PillowImageSource().load(tmp_path / "nope.pgm")


def test_directory_is_not_a_source(tmp_path):
    with pytest.raises(SourceUnavailable):
        PillowImageSource().load(tmp_path)


def test_undecodable_file(tmp_path):
    path = tmp_path / "garbage.pgm"
    path.write_bytes(b"not an image at all")
    with pytest.raises(SourceUnavailable, match="could not be read"):
        PillowImageSource().load(path)


def test_oversized_image_is_unavailable(pgm_factory, monkeypatch):
    path = pgm_factory(continuous_ramp(64, 64))
    # Anything over twice the pixel limit is a decompression bomb
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
    with pytest.raises(SourceUnavailable, match="could not be read"):
        PillowImageSource().load(path)


def test_save_buffer_writes_loadable_pgm(tmp_path):
    buf = PixelBuffer.from_array(continuous_ramp(9, 3), alignment=8)
    path = save_buffer(buf, tmp_path / "out.pgm")

    reloaded = PillowImageSource().load(path)
    np.testing.assert_array_equal(reloaded.pixels, buf.pixels)

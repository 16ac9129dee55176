import numpy as np
import pytest

from conftest import checkerboard, continuous_ramp, solid
from edgeascii.buffer import PixelBuffer
from edgeascii.errors import StageSizeError
from edgeascii.resample import cubic_kernel, resample, resample_bicubic, resample_cubic_reference

RESAMPLERS = [resample_bicubic, resample_cubic_reference]


@pytest.mark.parametrize("func", RESAMPLERS)
@pytest.mark.parametrize("size", [(1, 1), (7, 3), (16, 12), (50, 31), (64, 64)])
def test_output_matches_requested_size(func, size):
    width, height = size
    out = func(checkerboard(32, 24), width, height)
    assert out.shape == (height, width)
    assert out.dtype == np.uint8


@pytest.mark.parametrize("func", RESAMPLERS)
def test_resample_to_own_size_is_identity(func, rng):
    src = rng.integers(0, 256, size=(17, 29), dtype=np.uint8)
    np.testing.assert_array_equal(func(src, 29, 17), src)


@pytest.mark.parametrize("func", RESAMPLERS)
def test_repeated_resample_keeps_exact_dimensions(func):
    once = func(continuous_ramp(40, 20), 13, 9)
    twice = func(once, 13, 9)
    assert twice.shape == (9, 13)


@pytest.mark.parametrize("func", RESAMPLERS)
@pytest.mark.parametrize("size", [(5, 4), (60, 45)])
def test_flat_image_stays_flat(func, size):
    out = func(solid(20, 15, 100), *size)
    assert np.all(np.abs(out.astype(int) - 100) <= 1)


@pytest.mark.parametrize("func", RESAMPLERS)
@pytest.mark.parametrize("width,height", [(0, 5), (5, 0), (-3, 4)])
def test_non_positive_target_is_rejected(func, width, height):
    with pytest.raises(StageSizeError) as excinfo:
        func(solid(4, 4, 0), width, height)
    assert excinfo.value.stage == "resample"


def test_cubic_kernel_interpolates():
    taps = cubic_kernel(np.array([0.0, 1.0, -1.0, 2.0, 2.5]))
    np.testing.assert_allclose(taps, [1.0, 0.0, 0.0, 0.0, 0.0], atol=1e-12)
    # Partition of unity at any phase
    frac = 0.3
    total = cubic_kernel(np.array([-1 - frac, -frac, 1 - frac, 2 - frac])).sum()
    assert total == pytest.approx(1.0)


def test_reference_upscale_keeps_ramp_monotonic():
    out = resample_cubic_reference(continuous_ramp(16, 2), 64, 2)
    assert np.all(np.diff(out[0].astype(int)) >= -1)
    assert out[0, 0] <= 5 and out[0, -1] >= 250


def test_bicubic_reads_strided_read_only_view():
    arr = checkerboard(13, 7)
    buf = PixelBuffer.from_array(arr, alignment=8)
    np.testing.assert_array_equal(resample_bicubic(buf.pixels, 13, 7), arr)
    assert resample_bicubic(buf.pixels, 5, 3).shape == (3, 5)


def test_resample_buffer_wrapper():
    buf = PixelBuffer.from_array(checkerboard(20, 10))
    out = resample(buf, 10, 5)
    assert out.size == (10, 5)
    assert out is not buf

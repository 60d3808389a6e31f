"""Test equivalence between the Numba and NumPy backends.

Both backends must produce byte-identical output for every parameter set.
"""

import numpy as np
import pytest

from tonekit import FilterParameters, PixelBuffer, apply_filters
from tonekit.config import PRESETS


def create_test_image(width=64, height=48, seed=42):
    """Create a reproducible random RGBA image."""
    rng = np.random.default_rng(seed)
    return PixelBuffer.from_array(rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8))


def assert_backends_match(buffer, params):
    numba_result = apply_filters(buffer, params, backend="numba")
    numpy_result = apply_filters(buffer, params, backend="numpy")

    np.testing.assert_array_equal(numba_result.data, numpy_result.data, err_msg=repr(params))


class TestSingleAdjustments:
    """Each control on its own, at both ends of its range."""

    @pytest.mark.parametrize(
        "name", ["exposure", "contrast", "temperature", "tint", "saturation", "highlights", "shadows"]
    )
    @pytest.mark.parametrize("value", [-100.0, -37.5, 0.0, 42.0, 100.0])
    def test_bipolar_control(self, name, value):
        assert_backends_match(create_test_image(), FilterParameters(**{name: value}))

    @pytest.mark.parametrize("value", [0.0, 0.5, 50.0, 100.0])
    def test_sepia(self, value):
        assert_backends_match(create_test_image(), FilterParameters(sepia=value))


class TestCombinedAdjustments:
    """Random and preset combinations."""

    def test_random_parameter_sets(self):
        rng = np.random.default_rng(123)
        buffer = create_test_image(width=97, height=31)

        for _ in range(25):
            params = FilterParameters(
                exposure=rng.uniform(-100, 100),
                contrast=rng.uniform(-100, 100),
                highlights=rng.uniform(-100, 100),
                shadows=rng.uniform(-100, 100),
                saturation=rng.uniform(-100, 100),
                temperature=rng.uniform(-100, 100),
                tint=rng.uniform(-100, 100),
                sepia=rng.uniform(0, 100),
            )
            assert_backends_match(buffer, params)

    @pytest.mark.parametrize("name", sorted(PRESETS))
    def test_presets(self, name):
        assert_backends_match(create_test_image(), PRESETS[name])

    def test_out_of_range_values(self):
        params = FilterParameters(exposure=400, contrast=-300, sepia=250, tint=1000)

        assert_backends_match(create_test_image(), params)

    def test_single_pixel(self):
        buffer = PixelBuffer.from_array(np.array([[[255, 0, 128, 10]]], dtype=np.uint8))

        assert_backends_match(buffer, FilterParameters(contrast=63, saturation=-71, shadows=12))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

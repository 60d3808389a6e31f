"""Tests for FilterPipeline (per-pixel adjustments).

Every test runs against both backends.
"""

import numpy as np
import pytest

from tonekit import FilterParameters, FilterPipeline, PixelBuffer, apply_filters
from tonekit.errors import DimensionMismatchError, InvalidInputError
from tonekit.filters import BACKENDS


@pytest.fixture(params=BACKENDS)
def pipeline(request):
    return FilterPipeline(backend=request.param)


@pytest.fixture
def sample_buffer():
    """Random 37x23 RGBA image with varied alpha."""
    rng = np.random.default_rng(42)
    data = rng.integers(0, 256, size=(23, 37, 4), dtype=np.uint8)
    return PixelBuffer.from_array(data)


def single_pixel(r, g, b, a=255):
    return PixelBuffer.from_array(np.array([[[r, g, b, a]]], dtype=np.uint8))


def pixel_of(buffer):
    return tuple(int(v) for v in buffer.data[0, 0])


def random_params(rng) -> FilterParameters:
    return FilterParameters(
        exposure=rng.uniform(-100, 100),
        contrast=rng.uniform(-100, 100),
        highlights=rng.uniform(-100, 100),
        shadows=rng.uniform(-100, 100),
        saturation=rng.uniform(-100, 100),
        temperature=rng.uniform(-100, 100),
        tint=rng.uniform(-100, 100),
        sepia=rng.uniform(0, 100),
    )


class TestPipelineLaws:
    """Identity, alpha, determinism, clamping and immutability."""

    def test_identity_parameters_reproduce_input(self, pipeline, sample_buffer):
        result = pipeline.apply(sample_buffer, FilterParameters())

        assert result is not sample_buffer
        np.testing.assert_array_equal(result.data, sample_buffer.data)

    def test_identity_on_extreme_values(self, pipeline):
        data = np.array(
            [[[0, 0, 0, 0], [255, 255, 255, 255], [255, 0, 128, 7], [1, 254, 127, 128]]],
            dtype=np.uint8,
        )
        buf = PixelBuffer.from_array(data)

        result = pipeline.apply(buf, FilterParameters())

        assert result == buf

    def test_alpha_preserved(self, pipeline, sample_buffer):
        rng = np.random.default_rng(7)
        for _ in range(5):
            result = pipeline.apply(sample_buffer, random_params(rng))
            np.testing.assert_array_equal(result.alpha, sample_buffer.alpha)

    def test_deterministic(self, pipeline, sample_buffer):
        params = FilterParameters(exposure=12, contrast=33, saturation=-20, sepia=45)

        first = pipeline.apply(sample_buffer, params)
        second = pipeline.apply(sample_buffer, params)

        assert first.tobytes() == second.tobytes()

    def test_output_in_range(self, pipeline, sample_buffer):
        extreme = FilterParameters(
            exposure=100, contrast=100, highlights=100, shadows=100, saturation=100,
            temperature=100, tint=-100, sepia=100,
        )
        result = pipeline.apply(sample_buffer, extreme)

        assert result.data.dtype == np.uint8
        assert result.data.min() >= 0
        assert result.data.max() <= 255

    def test_input_not_mutated(self, pipeline, sample_buffer):
        before = sample_buffer.data.copy()

        pipeline.apply(sample_buffer, FilterParameters(exposure=80, sepia=100))

        np.testing.assert_array_equal(sample_buffer.data, before)

    def test_same_dimensions(self, pipeline, sample_buffer):
        result = pipeline.apply(sample_buffer, FilterParameters(contrast=10))

        assert result.shape == sample_buffer.shape

    def test_zero_pixel_buffer(self, pipeline):
        empty = PixelBuffer.empty(0, 0)

        result = pipeline.apply(empty, FilterParameters(exposure=50))

        assert result.num_pixels == 0
        assert result.shape == (0, 0)

    def test_zero_height_buffer(self, pipeline):
        result = pipeline.apply(PixelBuffer.empty(5, 0), FilterParameters(sepia=50))

        assert result.shape == (5, 0)

    def test_repeated_refilter_from_original(self, pipeline, sample_buffer):
        """Filtering the original twice never compounds."""
        params = FilterParameters(exposure=30)

        pipeline.apply(sample_buffer, params)
        again = pipeline.apply(sample_buffer, params)

        np.testing.assert_array_equal(again.data, pipeline.apply(sample_buffer, params).data)


class TestScenarios:
    """Known single-pixel results."""

    def test_red_pixel_full_contrast(self, pipeline):
        result = pipeline.apply(single_pixel(255, 0, 0), FilterParameters(contrast=100))

        assert pixel_of(result) == (255, 0, 0, 255)

    def test_gray_pixel_exposure(self, pipeline):
        result = pipeline.apply(single_pixel(128, 128, 128), FilterParameters(exposure=50))

        assert pixel_of(result) == (178, 178, 178, 255)

    def test_negative_exposure_clamps_at_zero(self, pipeline):
        result = pipeline.apply(single_pixel(30, 60, 90), FilterParameters(exposure=-100))

        assert pixel_of(result) == (0, 0, 0, 255)

    def test_minimum_contrast_flattens_to_midpoint(self, pipeline):
        result = pipeline.apply(single_pixel(10, 200, 90), FilterParameters(contrast=-100))

        assert pixel_of(result) == (128, 128, 128, 255)

    def test_warm_temperature(self, pipeline):
        result = pipeline.apply(single_pixel(100, 100, 100), FilterParameters(temperature=50))

        # r += 0.6 * 50, b -= 0.4 * 50
        assert pixel_of(result) == (130, 100, 80, 255)

    def test_cool_temperature(self, pipeline):
        result = pipeline.apply(single_pixel(100, 100, 100), FilterParameters(temperature=-50))

        # r += 0.4 * -50, b -= 0.6 * -50
        assert pixel_of(result) == (80, 100, 130, 255)

    def test_tint_is_symmetric(self, pipeline):
        magenta = pipeline.apply(single_pixel(100, 100, 100), FilterParameters(tint=40))
        green = pipeline.apply(single_pixel(100, 100, 100), FilterParameters(tint=-40))

        assert pixel_of(magenta) == (100, 80, 100, 255)
        assert pixel_of(green) == (100, 120, 100, 255)

    def test_highlights_scale_with_brightness(self, pipeline):
        black = pipeline.apply(single_pixel(0, 0, 0), FilterParameters(highlights=100))
        white = pipeline.apply(single_pixel(255, 255, 255), FilterParameters(highlights=-100))
        gray = pipeline.apply(single_pixel(102, 102, 102), FilterParameters(highlights=50))

        assert pixel_of(black) == (0, 0, 0, 255)
        assert pixel_of(white) == (0, 0, 0, 255)
        # brightness 0.4 -> 0.5 * 0.4 * 255 = 51
        assert pixel_of(gray) == (153, 153, 153, 255)

    def test_shadows_scale_with_darkness(self, pipeline):
        black = pipeline.apply(single_pixel(0, 0, 0), FilterParameters(shadows=100))
        white = pipeline.apply(single_pixel(255, 255, 255), FilterParameters(shadows=-100))

        assert pixel_of(black) == (255, 255, 255, 255)
        assert pixel_of(white) == (255, 255, 255, 255)

    def test_clamping_happens_once_at_the_end(self, pipeline):
        """Exposure pushes past 255, negative shadows pull back within the same pass."""
        params = FilterParameters(exposure=100, shadows=-100)

        result = pipeline.apply(single_pixel(200, 200, 200), params)

        # 300 each; brightness clamps to 1 so shadows add 0 -> 255
        assert pixel_of(result) == (255, 255, 255, 255)

        result = pipeline.apply(single_pixel(0, 0, 0), FilterParameters(exposure=-100, highlights=0))
        assert pixel_of(result) == (0, 0, 0, 255)

    def test_unclamped_intermediate_feeds_saturation(self, pipeline):
        """Saturation sees the out-of-range red from contrast, not a clipped 255."""
        params = FilterParameters(contrast=100, saturation=-100)

        result = pipeline.apply(single_pixel(255, 0, 0), params)

        r, g, b = 636.0, -384.0, -384.0
        gray = 0.299 * r + 0.587 * g + 0.114 * b
        expected = int(np.rint(np.clip(gray, 0, 255)))
        assert pixel_of(result) == (expected, expected, expected, 255)


class TestSaturationAndSepia:
    """Saturation extremes and full sepia blend."""

    def test_full_desaturation_is_luma(self, pipeline, sample_buffer):
        result = pipeline.apply(sample_buffer, FilterParameters(saturation=-100))

        rgb = sample_buffer.data[..., :3].astype(np.float64)
        r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
        luma = np.rint(np.clip(0.299 * r + 0.587 * g + 0.114 * b, 0, 255)).astype(np.uint8)

        np.testing.assert_array_equal(result.data[..., 0], luma)
        np.testing.assert_array_equal(result.data[..., 1], luma)
        np.testing.assert_array_equal(result.data[..., 2], luma)

    def test_full_sepia_is_matrix_transform(self, pipeline, sample_buffer):
        result = pipeline.apply(sample_buffer, FilterParameters(sepia=100))

        rgb = sample_buffer.data[..., :3].astype(np.float64)
        r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
        expected = np.stack(
            [
                0.393 * r + 0.769 * g + 0.189 * b,
                0.349 * r + 0.686 * g + 0.168 * b,
                0.272 * r + 0.534 * g + 0.131 * b,
            ],
            axis=-1,
        )
        expected = np.rint(np.clip(expected, 0, 255)).astype(np.uint8)

        np.testing.assert_array_equal(result.data[..., :3], expected)

    def test_partial_sepia_between_input_and_full(self, pipeline):
        buf = single_pixel(40, 120, 200)
        full = pixel_of(pipeline.apply(buf, FilterParameters(sepia=100)))
        half = pixel_of(pipeline.apply(buf, FilterParameters(sepia=50)))

        for c in range(3):
            lo, hi = sorted((pixel_of(buf)[c], full[c]))
            assert lo <= half[c] <= hi

    def test_increased_saturation_spreads_channels(self, pipeline):
        buf = single_pixel(150, 100, 50)

        result = pixel_of(pipeline.apply(buf, FilterParameters(saturation=100)))

        assert result[0] - result[2] > 100


class TestOutputBuffer:
    """Writing into a caller-supplied destination."""

    def test_writes_into_out(self, pipeline, sample_buffer):
        out = PixelBuffer.empty(sample_buffer.width, sample_buffer.height)

        result = pipeline.apply(sample_buffer, FilterParameters(exposure=10), out=out)

        assert result is out
        expected = pipeline.apply(sample_buffer, FilterParameters(exposure=10))
        assert out == expected

    def test_out_dimension_mismatch(self, pipeline, sample_buffer):
        with pytest.raises(DimensionMismatchError):
            pipeline.apply(sample_buffer, FilterParameters(), out=PixelBuffer.empty(3, 3))

    def test_out_may_not_alias_original(self, pipeline, sample_buffer):
        with pytest.raises(InvalidInputError):
            pipeline.apply(sample_buffer, FilterParameters(), out=sample_buffer)


class TestErrors:
    """Precondition failures."""

    def test_missing_original(self, pipeline):
        with pytest.raises(InvalidInputError, match="No image loaded"):
            pipeline.apply(None, FilterParameters())

    def test_unknown_backend_function(self, sample_buffer):
        with pytest.raises(ValueError, match="Unknown backend"):
            apply_filters(sample_buffer, FilterParameters(), backend="opencl")

    def test_unknown_backend_class(self):
        with pytest.raises(ValueError, match="is not valid"):
            FilterPipeline(backend="opencl")

    def test_out_of_range_parameters_are_not_validated(self, pipeline, sample_buffer):
        result = pipeline.apply(sample_buffer, FilterParameters(exposure=500, sepia=250))

        assert result.data[..., :3].min() >= 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

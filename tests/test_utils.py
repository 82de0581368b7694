"""
Unit tests for standalone helpers
"""

import numpy as np
import pytest

from rasterkit.utils import normalize_pixel_values, white_image


class TestWhiteImage:
    def test_shape_and_values(self):
        img = white_image(2, 3)

        assert img.buffer.shape == (2, 3, 3)
        assert (img.buffer == 1.0).all()
        assert img.is_rgb()

    def test_keeps_legacy_name(self):
        assert white_image(1, 1).name == "black_image"

    def test_color_view_is_white(self):
        assert (white_image(2, 2).color() == 1.0).all()


class TestNormalizePixelValues:
    def test_vector(self):
        out = normalize_pixel_values([[2, 4, 6, 8]])
        np.testing.assert_allclose(out, [[0.0, 1 / 3, 2 / 3, 1.0]])

    def test_flat_list(self):
        np.testing.assert_allclose(normalize_pixel_values([2, 4, 6, 8]), [0.0, 1 / 3, 2 / 3, 1.0])

    def test_grayscale_image_range(self):
        out = normalize_pixel_values(np.array([[10, 20], [30, 50]], dtype=np.uint8))
        assert out.min() == 0.0
        assert out.max() == 1.0
        assert out.dtype == np.float64

    def test_constant_input_is_zero(self):
        np.testing.assert_array_equal(normalize_pixel_values(np.full((2, 2), 7)), np.zeros((2, 2)))

    def test_does_not_modify_input(self):
        values = np.array([[1.0, 3.0]])
        normalize_pixel_values(values)
        np.testing.assert_array_equal(values, [[1.0, 3.0]])

    def test_rank_three_not_implemented(self):
        with pytest.raises(NotImplementedError):
            normalize_pixel_values(np.zeros((2, 2, 3)))

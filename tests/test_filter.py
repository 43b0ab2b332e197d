"""Tests for whole-volume median filtering."""

import logging

import numpy as np
import pytest
from conftest import sorted_window_median
from numpy.testing import assert_allclose
from scipy.ndimage import median_filter

from voxel_median import ExtentError, median_filter_3d


class TestMedianFilter3D:
    def test_constant_volume(self):
        data = np.full((5, 5, 5), 7.0)
        assert_allclose(median_filter_3d(data, [3, 3, 3]), data)

    def test_matches_sorted_windows(self, rng):
        data = rng.normal(size=(5, 4, 6))
        result = median_filter_3d(data, [3, 1, 5])

        for pos in np.ndindex(*data.shape):
            assert_allclose(result[pos], sorted_window_median(data, pos, (1, 0, 2)))

    def test_interior_matches_scipy(self, rng):
        """Away from the boundary no clipping happens."""
        data = rng.normal(size=(8, 9, 7))
        result = median_filter_3d(data, 3)
        reference = median_filter(data, size=3)
        assert_allclose(result[1:-1, 1:-1, 1:-1], reference[1:-1, 1:-1, 1:-1])

    def test_interior_matches_scipy_anisotropic(self, rng):
        data = rng.normal(size=(9, 6, 7))
        result = median_filter_3d(data, (5, 3, 1))
        reference = median_filter(data, size=(5, 3, 1))
        assert_allclose(result[2:-2, 1:-1, :], reference[2:-2, 1:-1, :])

    def test_removes_impulse(self):
        data = np.zeros((5, 5, 5))
        data[2, 2, 2] = 1000.0
        assert_allclose(median_filter_3d(data), 0.0)

    def test_extent_one_is_identity(self, ramp_volume):
        assert_allclose(median_filter_3d(ramp_volume, 1), ramp_volume)

    def test_fourth_axis_filtered_independently(self, rng):
        data = rng.normal(size=(4, 3, 5, 3))
        result = median_filter_3d(data, 3)
        assert result.shape == data.shape
        for t in range(data.shape[3]):
            assert_allclose(result[..., t], median_filter_3d(data[..., t], 3))

    def test_two_dimensional_input(self):
        data = np.array([[1, 9, 2], [8, 3, 7]], dtype=float)
        result = median_filter_3d(data, 3)
        assert result.shape == (2, 3)
        # corner window holds 1, 9, 8, 3
        assert result[0, 0] == 5.5
        assert result[1, 1] == 5.0

    def test_output_is_float64(self):
        data = np.arange(27, dtype=np.uint8).reshape(3, 3, 3)
        result = median_filter_3d(data)
        assert result.dtype == np.float64
        assert result[1, 1, 1] == 13.0

    def test_input_not_modified(self, rng):
        data = rng.normal(size=(3, 4, 5))
        before = data.copy()
        median_filter_3d(data, 3)
        assert_allclose(data, before)

    def test_bad_extent(self, ramp_volume):
        with pytest.raises(ExtentError):
            median_filter_3d(ramp_volume, [3, 5])

    def test_scalar_rejected(self):
        with pytest.raises(ValueError):
            median_filter_3d(np.float64(3.0))

    def test_progress_bar(self, ramp_volume, capsys):
        result = median_filter_3d(ramp_volume, 3, progress=True)
        assert result.shape == ramp_volume.shape
        assert "median filtering" in capsys.readouterr().err

    def test_logs_run(self, ramp_volume, caplog):
        with caplog.at_level(logging.INFO, logger="voxel_median.filter"):
            median_filter_3d(ramp_volume, 3, name="ramp")
        assert 'median filtering "ramp"' in caplog.text

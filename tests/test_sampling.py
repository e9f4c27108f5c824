"""Tests for circle sampling geometry."""

import numpy as np
import pytest

from circlehough.detection.sampling import (
    ANGLE_SAMPLES,
    center_candidates,
    circle_offsets,
    perimeter_points,
    to_pixel,
)
from circlehough.exceptions import ConfigurationError


class TestSampling:
    """Test shared sampling routine."""

    def test_sample_count(self):
        """Test 360 one-degree samples."""
        dx, dy = circle_offsets(10)
        assert ANGLE_SAMPLES == 360
        assert dx.shape == dy.shape == (360,)
        assert dx[0] == pytest.approx(10.0)
        assert dy[90] == pytest.approx(10.0)

    def test_offsets_read_only(self):
        """Test cached offsets cannot be modified by callers."""
        dx, _ = circle_offsets(4)
        with pytest.raises(ValueError):
            dx[0] = 1.0

    def test_truncate_toward_zero(self):
        """Test truncation drops the fraction toward zero."""
        values = np.array([-1.5, -0.5, 0.5, 1.49, 2.99])
        assert to_pixel(values, "truncate").tolist() == [-1, 0, 0, 1, 2]

    def test_nearest(self):
        """Test nearest rounding, halves away from zero."""
        values = np.array([-1.5, -0.5, 0.5, 1.49, 2.99])
        assert to_pixel(values, "nearest").tolist() == [-2, -1, 1, 1, 3]

    def test_unknown_rounding(self):
        """Test unknown rounding modes are rejected."""
        with pytest.raises(ConfigurationError):
            to_pixel(np.array([1.0]), "floor")

    def test_center_candidates_shape(self):
        """Test one candidate per point and angle."""
        a, b = center_candidates(np.array([10, 20, 30]), np.array([5, 5, 5]), 3)
        assert a.shape == b.shape == (3, 360)
        assert a[0, 0] == 7
        assert b[0, 0] == 5

    def test_vote_and_draw_are_inverse(self):
        """Test outline pixels of a circle vote back near its center."""
        xs, ys = perimeter_points(50, 50, 30)
        a, b = center_candidates(xs, ys, 30)
        diagonal_a = a[np.arange(360), np.arange(360)]
        diagonal_b = b[np.arange(360), np.arange(360)]
        assert set(diagonal_a.tolist()) <= {49, 50}
        assert set(diagonal_b.tolist()) <= {49, 50}

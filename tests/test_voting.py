"""Tests for the Hough voting engine."""

import threading

import numpy as np
import pytest

from circlehough.detection.edge_classifier import BrightnessEdgeClassifier, MaskEdgeClassifier
from circlehough.detection.sampling import circle_offsets
from circlehough.detection.voting import VotingEngine
from circlehough.exceptions import ConfigurationError, InputError, VotingCancelledError


def reference_votes(edge_points, width, height, min_radius, max_radius):
    """Straightforward per-pixel, per-radius, per-angle voting loop."""
    votes = np.zeros((width, height, max_radius - min_radius + 1), dtype=np.int64)
    for x, y in edge_points:
        for r in range(min_radius, max_radius + 1):
            dx, dy = circle_offsets(r)
            for angle in range(360):
                a = int(x - dx[angle])
                b = int(y - dy[angle])
                if 0 <= a < width and 0 <= b < height:
                    votes[a, b, r - min_radius] += 1
    return votes


class TestVotingEngine:
    """Test voting engine."""

    def test_initialization(self):
        """Test default parameters."""
        engine = VotingEngine()
        assert isinstance(engine.classifier, BrightnessEdgeClassifier)
        assert engine.rounding == "truncate"
        assert engine.workers == 1

    @pytest.mark.parametrize("kwargs", [
        {"rounding": "ceil"},
        {"workers": 0},
        {"chunk_size": 0},
    ])
    def test_invalid_params(self, kwargs):
        """Test invalid engine parameters."""
        with pytest.raises(ConfigurationError):
            VotingEngine(**kwargs)

    def test_matches_reference_loop(self):
        """Test vectorised voting equals the plain nested loop."""
        image = np.full((24, 30), 255, dtype=np.uint8)
        points = [(0, 0), (5, 7), (29, 23), (15, 12), (3, 20)]
        for x, y in points:
            image[y, x] = 0

        accumulator = VotingEngine(chunk_size=2).populate(image, 2, 6)
        expected = reference_votes(points, 30, 24, 2, 6)
        assert np.array_equal(accumulator.votes, expected)

    def test_accumulator_geometry(self, circle_image):
        """Test the accumulator covers the whole image and radius range."""
        accumulator = VotingEngine().populate(circle_image, 20, 50)
        assert accumulator.shape == (100, 100, 31)

    def test_single_circle_peak(self, circle_image):
        """Test the strongest cell sits on the drawn circle."""
        accumulator = VotingEngine().populate(circle_image, 20, 50)
        a, b, r = np.unravel_index(np.argmax(accumulator.votes), accumulator.shape)
        assert r + 20 == 30
        assert abs(a - 50) <= 1
        assert abs(b - 50) <= 1

    def test_empty_edge_image(self, blank_image):
        """Test an image without edges leaves the accumulator at zero."""
        accumulator = VotingEngine().populate(blank_image, 5, 10)
        assert accumulator.total_votes() == 0

    def test_single_edge_pixel_vote_count(self):
        """Test one interior edge pixel casts 360 votes per radius."""
        image = np.full((101, 101), 255, dtype=np.uint8)
        image[50, 50] = 0
        accumulator = VotingEngine().populate(image, 3, 5)
        assert accumulator.total_votes() == 360 * 3

    def test_votes_near_border_are_clipped(self):
        """Test a corner edge pixel loses the votes that fall outside."""
        image = np.full((40, 40), 255, dtype=np.uint8)
        image[0, 0] = 0
        accumulator = VotingEngine().populate(image, 10, 10)
        assert 0 < accumulator.total_votes() < 360

    def test_mask_classifier(self, circle_image):
        """Test a supplied edge map drives voting instead of brightness."""
        mask = np.zeros(circle_image.shape[:2], dtype=np.uint8)
        mask[10, 10] = 1
        engine = VotingEngine(classifier=MaskEdgeClassifier(mask))
        accumulator = engine.populate(circle_image, 5, 5)
        assert accumulator.total_votes() == 360

    def test_nearest_rounding(self, circle_image):
        """Test nearest rounding still finds the circle."""
        accumulator = VotingEngine(rounding="nearest").populate(circle_image, 25, 35)
        a, b, r = np.unravel_index(np.argmax(accumulator.votes), accumulator.shape)
        assert r + 25 == 30
        assert abs(a - 50) <= 1 and abs(b - 50) <= 1

    def test_invalid_radius_range(self, circle_image):
        """Test invalid radii fail before voting."""
        with pytest.raises(ConfigurationError):
            VotingEngine().populate(circle_image, 50, 20)
        with pytest.raises(ConfigurationError):
            VotingEngine().populate(circle_image, 0, 20)

    def test_accumulator_limit(self, circle_image):
        """Test the cell limit applies to populate."""
        engine = VotingEngine(max_cells=1000)
        with pytest.raises(ConfigurationError):
            engine.populate(circle_image, 20, 50)

    def test_malformed_buffer(self):
        """Test malformed input raises InputError."""
        with pytest.raises(InputError):
            VotingEngine().populate(np.zeros((0, 10)), 1, 2)


class TestParallelVoting:
    """Test row-band parallel voting."""

    def test_parallel_matches_serial(self, circle_image_factory):
        """Test band-partitioned voting merges to the serial result."""
        image = circle_image_factory(size=(80, 90), circles=((30, 30, 15), (60, 50, 20)))
        serial = VotingEngine().populate(image, 10, 22)
        parallel = VotingEngine(workers=3).populate(image, 10, 22)
        assert np.array_equal(serial.votes, parallel.votes)

    def test_more_workers_than_rows(self):
        """Test surplus workers with empty bands."""
        image = np.full((3, 20), 255, dtype=np.uint8)
        image[1, 10] = 0
        serial = VotingEngine().populate(image, 1, 2)
        parallel = VotingEngine(workers=8).populate(image, 1, 2)
        assert np.array_equal(serial.votes, parallel.votes)


class TestCancellation:
    """Test cooperative cancellation."""

    def test_cancelled_before_start(self, circle_image):
        """Test a set cancel event aborts the pass."""
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(VotingCancelledError):
            VotingEngine().populate(circle_image, 20, 30, cancel=cancel)

    def test_cancelled_in_parallel(self, circle_image):
        """Test cancellation propagates out of worker threads."""
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(VotingCancelledError):
            VotingEngine(workers=2).populate(circle_image, 20, 30, cancel=cancel)

    def test_unset_event_completes(self, circle_image):
        """Test an unset event does not interfere."""
        accumulator = VotingEngine().populate(circle_image, 28, 32, cancel=threading.Event())
        assert accumulator.total_votes() > 0

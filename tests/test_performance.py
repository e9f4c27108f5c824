"""Performance tests."""

import time

from circlehough.detection.peak_extractor import PeakExtractor
from circlehough.detection.voting import VotingEngine


class TestPerformance:
    """Test performance benchmarks."""

    def test_voting_speed(self, circle_image_factory):
        """Test voting on a sparse 320x240 edge image."""
        image = circle_image_factory(size=(240, 320), circles=((160, 120, 60), (60, 60, 40)))
        engine = VotingEngine()

        start = time.time()
        accumulator = engine.populate(image, 30, 70)
        duration = (time.time() - start) * 1000

        assert accumulator.total_votes() > 0
        assert duration < 20000

    def test_peak_extraction_speed(self, circle_image_factory):
        """Test scanning a 320x240x41 accumulator."""
        image = circle_image_factory(size=(240, 320), circles=((160, 120, 60),))
        accumulator = VotingEngine().populate(image, 30, 70)

        start = time.time()
        PeakExtractor().find_circles(accumulator, 50)
        duration = (time.time() - start) * 1000

        assert duration < 2000

"""Peak extraction: turn accumulator cells above a threshold into circles."""

import logging
from typing import List, Tuple

import numpy as np

from circlehough.detection.accumulator import Accumulator
from circlehough.detection.circle import Circle

logger = logging.getLogger(__name__)


class PeakExtractor:
    """
    Reports every accumulator cell whose vote count is strictly above a threshold.

    Cells are visited in (a, b, r) order. Neighbouring cells around a true
    peak are all reported; no merging or ranking happens here.
    """

    def find_peaks(self, accumulator: Accumulator, threshold: int) -> List[Tuple[Circle, int]]:
        """
        Scan the accumulator for cells with ``count > threshold``.

        Returns:
            List of (circle, votes) pairs in storage order
        """
        counts = accumulator.flat
        indices = np.flatnonzero(counts > threshold)

        span = accumulator.radius_span
        height = accumulator.height
        a = indices // (height * span)
        b = (indices // span) % height
        r = indices % span + accumulator.min_radius

        peaks = [
            (Circle(int(x), int(y), int(radius)), int(votes))
            for x, y, radius, votes in zip(a, b, r, counts[indices])
        ]
        logger.debug("%d cells above threshold %d", len(peaks), threshold)
        return peaks

    def find_circles(self, accumulator: Accumulator, threshold: int) -> List[Circle]:
        """Circles for every cell whose vote count strictly exceeds ``threshold``."""
        return [circle for circle, _ in self.find_peaks(accumulator, threshold)]


def find_circles(accumulator: Accumulator, threshold: int) -> List[Circle]:
    """Module-level shortcut for ``PeakExtractor().find_circles``."""
    return PeakExtractor().find_circles(accumulator, threshold)

"""Hough voting: every edge pixel votes for all centers that could explain it."""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Tuple

import numpy as np

from circlehough.config import ROUNDING_MODES, validate_radius_range
from circlehough.detection.accumulator import Accumulator
from circlehough.detection.edge_classifier import (
    BrightnessEdgeClassifier,
    EdgeClassifier,
    check_buffer,
)
from circlehough.detection.sampling import center_candidates
from circlehough.exceptions import ConfigurationError, VotingCancelledError

logger = logging.getLogger(__name__)


class VotingEngine:
    """Populates a Hough accumulator from the edge pixels of an image."""

    def __init__(self, classifier: Optional[EdgeClassifier] = None,
                 rounding: str = "truncate", workers: int = 1,
                 max_cells: Optional[int] = None, chunk_size: int = 2048):
        """
        Initialize voting engine.

        Args:
            classifier: Edge predicate (defaults to red channel < 128)
            rounding: Float-to-pixel conversion, "truncate" or "nearest"
            workers: Number of row bands voted in parallel, each into a
                private accumulator that is summed at the end
            max_cells: Upper bound on accumulator cells per allocation
            chunk_size: Edge pixels vectorised per step; cancellation is
                checked between chunks
        """
        if rounding not in ROUNDING_MODES:
            raise ConfigurationError(f"rounding must be one of {ROUNDING_MODES}, got {rounding!r}")
        if workers < 1:
            raise ConfigurationError(f"workers must be >= 1, got {workers}")
        if chunk_size < 1:
            raise ConfigurationError(f"chunk_size must be >= 1, got {chunk_size}")

        self.classifier = classifier or BrightnessEdgeClassifier()
        self.rounding = rounding
        self.workers = workers
        self.max_cells = max_cells
        self.chunk_size = chunk_size
        self.last_edge_count = 0

    def edge_points(self, buffer: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Coordinates (xs, ys) of edge pixels in row-major order."""
        mask = self.classifier.edge_mask(buffer)
        ys, xs = np.nonzero(mask)
        return xs, ys

    def populate(self, buffer: np.ndarray, min_radius: int, max_radius: int,
                 cancel: Optional[threading.Event] = None) -> Accumulator:
        """
        Run the full voting pass.

        For every edge pixel (x, y), radius r in [min_radius, max_radius] and
        angle in 0..359 degrees, votes for center
        (x - r*cos(theta), y - r*sin(theta)) converted to pixels.
        The number of edge pixels found is kept in ``last_edge_count``.

        Args:
            buffer: Decoded image (H x W or H x W x C)
            min_radius: Smallest radius searched
            max_radius: Largest radius searched (inclusive)
            cancel: Optional event; when set the pass stops and raises
                VotingCancelledError

        Returns:
            Completed accumulator
        """
        buffer = check_buffer(buffer)
        validate_radius_range(min_radius, max_radius)
        height, width = buffer.shape[:2]

        # Allocate up front so bad parameters fail before any edge work.
        accumulator = self._new_accumulator(width, height, min_radius, max_radius)

        start = time.perf_counter()
        xs, ys = self.edge_points(buffer)
        self.last_edge_count = int(xs.size)
        logger.debug("Found %d edge pixels in %dx%d image", xs.size, width, height)

        if self.workers == 1 or xs.size == 0:
            self._vote_points(accumulator, xs, ys, cancel)
        else:
            for partial in self._vote_bands(xs, ys, width, height, min_radius, max_radius, cancel):
                accumulator.merge(partial)

        elapsed = (time.perf_counter() - start) * 1000
        logger.info("Voting done: %d edge pixels, radii %d-%d, %d votes in %.1fms",
                    xs.size, min_radius, max_radius, accumulator.total_votes(), elapsed)
        return accumulator

    def _new_accumulator(self, width, height, min_radius, max_radius) -> Accumulator:
        return Accumulator(width, height, min_radius, max_radius, max_cells=self.max_cells)

    def _vote_points(self, accumulator: Accumulator, xs: np.ndarray, ys: np.ndarray,
                     cancel: Optional[threading.Event] = None):
        for start in range(0, xs.size, self.chunk_size):
            if cancel is not None and cancel.is_set():
                raise VotingCancelledError("Voting cancelled")
            chunk_x = xs[start:start + self.chunk_size]
            chunk_y = ys[start:start + self.chunk_size]
            for radius in accumulator.radii:
                a, b = center_candidates(chunk_x, chunk_y, radius, self.rounding)
                accumulator.vote_many(a, b, radius)

    def _vote_bands(self, xs, ys, width, height, min_radius, max_radius,
                    cancel) -> List[Accumulator]:
        """Vote each row band into its own accumulator, in a thread pool."""
        bounds = np.linspace(0, height, self.workers + 1).astype(int)
        bands = []
        for lo, hi in zip(bounds[:-1], bounds[1:]):
            in_band = (ys >= lo) & (ys < hi)
            if in_band.any():
                bands.append((xs[in_band], ys[in_band]))

        def vote_band(points):
            partial = self._new_accumulator(width, height, min_radius, max_radius)
            self._vote_points(partial, points[0], points[1], cancel)
            return partial

        logger.debug("Voting %d row bands with %d workers", len(bands), self.workers)
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = [executor.submit(vote_band, band) for band in bands]
            return [future.result() for future in futures]

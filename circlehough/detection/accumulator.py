"""Dense 3D Hough accumulator indexed by (center-x, center-y, radius)."""

from typing import Optional, Tuple

import numpy as np

from circlehough.config import validate_radius_range
from circlehough.exceptions import ConfigurationError, OutOfRangeError


class Accumulator:
    """
    Vote counters for every candidate circle ``(a, b, r)``.

    Storage is one flat int32 array; cell ``(a, b, r)`` lives at
    ``(a * height + b) * radius_span + (r - min_radius)``. Counters start at
    zero and only ever increase. ``vote`` silently drops candidates outside
    the grid, while ``count`` treats an out-of-range read as a caller bug.
    """

    def __init__(self, width: int, height: int, min_radius: int, max_radius: int,
                 max_cells: Optional[int] = None):
        """
        Args:
            width: Image width (range of a)
            height: Image height (range of b)
            min_radius: Smallest candidate radius
            max_radius: Largest candidate radius (inclusive)
            max_cells: Refuse to allocate more cells than this
        """
        if width <= 0 or height <= 0:
            raise ConfigurationError(f"Image dimensions must be positive, got {width}x{height}")
        validate_radius_range(min_radius, max_radius)

        self.width = int(width)
        self.height = int(height)
        self.min_radius = int(min_radius)
        self.max_radius = int(max_radius)
        self.radius_span = self.max_radius - self.min_radius + 1

        cells = self.width * self.height * self.radius_span
        if max_cells is not None and cells > max_cells:
            raise ConfigurationError(
                f"Accumulator of {cells} cells exceeds the limit of {max_cells}"
            )
        try:
            self._counts = np.zeros(cells, dtype=np.int32)
        except MemoryError as e:
            raise ConfigurationError(f"Cannot allocate accumulator of {cells} cells") from e

    @property
    def shape(self) -> Tuple[int, int, int]:
        return self.width, self.height, self.radius_span

    @property
    def size(self) -> int:
        return self._counts.size

    @property
    def radii(self) -> range:
        return range(self.min_radius, self.max_radius + 1)

    @property
    def votes(self) -> np.ndarray:
        """Read-only ``(width, height, radius_span)`` view of the counters."""
        view = self._counts.reshape(self.shape)
        view.flags.writeable = False
        return view

    @property
    def flat(self) -> np.ndarray:
        """Read-only flat view in storage order."""
        view = self._counts.view()
        view.flags.writeable = False
        return view

    def index(self, a: int, b: int, radius: int) -> int:
        return (a * self.height + b) * self.radius_span + (radius - self.min_radius)

    def contains(self, a: int, b: int, radius: int) -> bool:
        return (0 <= a < self.width and 0 <= b < self.height
                and self.min_radius <= radius <= self.max_radius)

    def vote(self, a: int, b: int, radius: int):
        """Add one vote to ``(a, b, radius)``; out-of-range candidates are dropped."""
        if self.contains(a, b, radius):
            self._counts[self.index(a, b, radius)] += 1

    def vote_many(self, a: np.ndarray, b: np.ndarray, radius: int) -> int:
        """
        Cast one vote per ``(a[i], b[i])`` pair at a single radius.

        Equivalent to calling ``vote`` for each pair: repeated pairs are all
        counted and out-of-range pairs are dropped.

        Returns:
            Number of votes that landed inside the grid
        """
        if not self.min_radius <= radius <= self.max_radius:
            return 0

        a = np.asarray(a, dtype=np.int64).ravel()
        b = np.asarray(b, dtype=np.int64).ravel()
        inside = (a >= 0) & (a < self.width) & (b >= 0) & (b < self.height)
        if not inside.any():
            return 0

        cells = a[inside] * self.height + b[inside]
        plane = np.bincount(cells, minlength=self.width * self.height)
        layer = self._counts.reshape(self.width * self.height, self.radius_span)
        layer[:, radius - self.min_radius] += plane.astype(np.int32)
        return int(cells.size)

    def count(self, a: int, b: int, radius: int) -> int:
        """Current vote count; raises OutOfRangeError outside the grid."""
        if not self.contains(a, b, radius):
            raise OutOfRangeError(
                f"Cell ({a}, {b}, r={radius}) outside accumulator "
                f"{self.width}x{self.height}, r in [{self.min_radius}, {self.max_radius}]"
            )
        return int(self._counts[self.index(a, b, radius)])

    def merge(self, other: "Accumulator") -> "Accumulator":
        """Add another accumulator's counts into this one (elementwise sum)."""
        if (self.shape != other.shape) or (self.min_radius != other.min_radius):
            raise ConfigurationError(
                f"Cannot merge accumulators with different geometry: "
                f"{self.shape}/r>={self.min_radius} vs {other.shape}/r>={other.min_radius}"
            )
        self._counts += other._counts
        return self

    def total_votes(self) -> int:
        return int(self._counts.sum(dtype=np.int64))

    def max_count(self) -> int:
        return int(self._counts.max())

    def __repr__(self) -> str:
        return (f"Accumulator(width={self.width}, height={self.height}, "
                f"radii={self.min_radius}..{self.max_radius})")

"""Edge pixel classification for Hough voting."""

import numpy as np

from circlehough.config import validate_cutoff
from circlehough.exceptions import InputError


def check_buffer(buffer: np.ndarray) -> np.ndarray:
    """Validate a decoded pixel buffer (H x W or H x W x C) and return it as an array."""
    if buffer is None:
        raise InputError("Pixel buffer is None")
    buffer = np.asarray(buffer)
    if buffer.ndim not in (2, 3):
        raise InputError(f"Pixel buffer must be 2D or 3D, got shape {buffer.shape}")
    if buffer.shape[0] == 0 or buffer.shape[1] == 0:
        raise InputError(f"Pixel buffer has zero width or height: {buffer.shape}")
    return buffer


class EdgeClassifier:
    """
    Decides whether a pixel lies on a shape boundary.

    Subclasses implement ``is_edge``; ``edge_mask`` defaults to evaluating it
    for every pixel, so any pixel -> bool predicate can be plugged into the
    voting engine.
    """

    def is_edge(self, buffer: np.ndarray, x: int, y: int) -> bool:
        raise NotImplementedError

    def edge_mask(self, buffer: np.ndarray) -> np.ndarray:
        """Boolean H x W mask of edge pixels."""
        buffer = check_buffer(buffer)
        height, width = buffer.shape[:2]
        mask = np.zeros((height, width), dtype=bool)
        for y in range(height):
            for x in range(width):
                mask[y, x] = self.is_edge(buffer, x, y)
        return mask


class BrightnessEdgeClassifier(EdgeClassifier):
    """Dark pixels are edges: intensity channel strictly below a fixed cutoff."""

    def __init__(self, cutoff: int = 128, channel: int = 2):
        """
        Args:
            cutoff: Intensity (0-255) below which a pixel counts as an edge
            channel: Channel read from 3D buffers (2 = red in BGR/BGRA)
        """
        validate_cutoff(cutoff)
        self.cutoff = cutoff
        self.channel = channel

    def intensity(self, buffer: np.ndarray) -> np.ndarray:
        """Intensity-bearing plane of the buffer."""
        if buffer.ndim == 2:
            return buffer
        if not 0 <= self.channel < buffer.shape[2]:
            raise InputError(
                f"Channel {self.channel} not available in buffer with {buffer.shape[2]} channels"
            )
        return buffer[:, :, self.channel]

    def is_edge(self, buffer: np.ndarray, x: int, y: int) -> bool:
        buffer = np.asarray(buffer)
        return bool(self.intensity(buffer)[y, x] < self.cutoff)

    def edge_mask(self, buffer: np.ndarray) -> np.ndarray:
        buffer = check_buffer(buffer)
        return self.intensity(buffer) < self.cutoff


class MaskEdgeClassifier(EdgeClassifier):
    """Uses an edge map computed elsewhere (e.g. Canny); non-zero entries are edges."""

    def __init__(self, mask: np.ndarray):
        mask = np.asarray(mask)
        if mask.ndim != 2:
            raise InputError(f"Edge mask must be 2D, got shape {mask.shape}")
        self.mask = mask != 0

    def _check_shape(self, buffer: np.ndarray):
        if buffer.shape[:2] != self.mask.shape:
            raise InputError(
                f"Edge mask shape {self.mask.shape} does not match buffer {buffer.shape[:2]}"
            )

    def is_edge(self, buffer: np.ndarray, x: int, y: int) -> bool:
        self._check_shape(np.asarray(buffer))
        return bool(self.mask[y, x])

    def edge_mask(self, buffer: np.ndarray) -> np.ndarray:
        buffer = check_buffer(buffer)
        self._check_shape(buffer)
        return self.mask.copy()

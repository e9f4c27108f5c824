"""Parametric circle sampling shared by voting and rendering."""

from functools import lru_cache
from typing import Tuple

import numpy as np

from circlehough.exceptions import ConfigurationError

# One sample per degree. Changing this changes detection fidelity.
ANGLE_SAMPLES = 360

THETAS = np.arange(ANGLE_SAMPLES) * (np.pi / 180.0)


@lru_cache(maxsize=256)
def circle_offsets(radius: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Offsets ``(r*cos(theta), r*sin(theta))`` for the 360 one-degree samples.

    Args:
        radius: Circle radius in pixels

    Returns:
        Read-only float64 arrays (dx, dy) of length ANGLE_SAMPLES
    """
    dx = radius * np.cos(THETAS)
    dy = radius * np.sin(THETAS)
    dx.setflags(write=False)
    dy.setflags(write=False)
    return dx, dy


def to_pixel(values: np.ndarray, rounding: str = "truncate") -> np.ndarray:
    """
    Convert float coordinates to integer pixel indices.

    ``truncate`` drops the fraction toward zero (so -0.5 becomes 0);
    ``nearest`` rounds half away from zero.
    """
    if rounding == "truncate":
        return np.trunc(values).astype(np.int64)
    if rounding == "nearest":
        return (np.sign(values) * np.floor(np.abs(values) + 0.5)).astype(np.int64)
    raise ConfigurationError(f"Unknown rounding mode: {rounding!r}")


def center_candidates(xs: np.ndarray, ys: np.ndarray, radius: int,
                      rounding: str = "truncate") -> Tuple[np.ndarray, np.ndarray]:
    """
    Candidate centers for edge points at the given radius.

    Each point ``(x, y)`` yields ``(x - r*cos(theta), y - r*sin(theta))``
    for every sample angle.

    Returns:
        Integer arrays (a, b) of shape ``(len(xs), ANGLE_SAMPLES)``
    """
    dx, dy = circle_offsets(radius)
    a = to_pixel(np.asarray(xs, dtype=np.float64)[:, None] - dx[None, :], rounding)
    b = to_pixel(np.asarray(ys, dtype=np.float64)[:, None] - dy[None, :], rounding)
    return a, b


def perimeter_points(center_x: int, center_y: int, radius: int,
                     rounding: str = "truncate") -> Tuple[np.ndarray, np.ndarray]:
    """Pixel coordinates ``(cx + r*cos(theta), cy + r*sin(theta))`` of the sampled outline."""
    dx, dy = circle_offsets(radius)
    return to_pixel(center_x + dx, rounding), to_pixel(center_y + dy, rounding)

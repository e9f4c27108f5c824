"""Drawing detected circles onto output images."""

from typing import Iterable, Optional, Sequence, Union

import cv2
import numpy as np

from circlehough.detection.circle import Circle
from circlehough.detection.sampling import perimeter_points
from circlehough.exceptions import ConfigurationError

Color = Union[int, Sequence[int]]


def default_color(image: np.ndarray) -> Color:
    """Full-opacity red in the image's channel layout (BGR / BGRA / gray)."""
    if image.ndim == 2:
        return 255
    if image.shape[2] == 4:
        return (0, 0, 255, 255)
    return (0, 0, 255)


def fit_color(color: Color, image: np.ndarray) -> Color:
    """
    Match a color to the image's channel count.

    A single level paints every channel. A BGR color on a BGRA image gets
    full opacity.

    Raises:
        ConfigurationError: The color cannot be written to this image
    """
    if isinstance(color, (int, np.integer)):
        return color
    levels = tuple(color)
    channels = 1 if image.ndim == 2 else image.shape[2]
    if len(levels) == 1:
        return levels[0]
    if len(levels) == channels:
        return levels
    if len(levels) == 3 and channels == 4:
        return levels + (255,)
    raise ConfigurationError(
        f"color {color!r} does not fit an image with {channels} channel(s)"
    )


def to_color_image(image: np.ndarray) -> np.ndarray:
    """Copy of the image with color channels, so red outlines can be drawn."""
    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2BGR)
    return image.copy()


def draw_circle(output: np.ndarray, circle: Circle, color: Optional[Color] = None,
                rounding: str = "truncate") -> np.ndarray:
    """
    Overwrite the sampled outline of ``circle`` in ``output`` (in place).

    Uses the same 360 one-degree samples as voting; samples falling outside
    the image are skipped. Drawing twice gives the same result as once.
    """
    if color is None:
        color = default_color(output)
    else:
        color = fit_color(color, output)

    height, width = output.shape[:2]
    xs, ys = perimeter_points(circle.center_x, circle.center_y, circle.radius, rounding)
    inside = (xs >= 0) & (xs < width) & (ys >= 0) & (ys < height)
    output[ys[inside], xs[inside]] = color
    return output


def draw_circles(image: np.ndarray, circles: Iterable[Circle],
                 color: Optional[Color] = None, rounding: str = "truncate") -> np.ndarray:
    """Draw detected circles on a copy of the image."""
    output = image.copy()
    for circle in circles:
        draw_circle(output, circle, color, rounding)
    return output


def draw_edge_mask(image: np.ndarray, mask: np.ndarray,
                   alpha: float = 0.4) -> np.ndarray:
    """Overlay the edge pixels used for voting on the image."""
    base = to_color_image(image)
    if base.shape[2] == 4:
        base = cv2.cvtColor(base, cv2.COLOR_BGRA2BGR)
    overlay = base.copy()
    overlay[mask] = [0, 255, 0]
    return cv2.addWeighted(base, 1 - alpha, overlay, alpha, 0)


def accumulator_heatmap(votes: np.ndarray) -> np.ndarray:
    """
    Color heatmap of the strongest vote over all radii for each center.

    Args:
        votes: Accumulator votes of shape (width, height, radius_span)

    Returns:
        BGR image of shape (height, width, 3)
    """
    best = votes.max(axis=2).T.astype(np.float32)
    peak = best.max()
    if peak > 0:
        best = best / peak * 255.0
    return cv2.applyColorMap(best.astype(np.uint8), cv2.COLORMAP_HOT)

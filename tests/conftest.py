"""Shared fixtures: synthetic images with known circles."""

import numpy as np
import pytest
from skimage.draw import circle_perimeter


def make_circle_image(size=(100, 100), circles=((50, 50, 30),), channels=3):
    """White image with black 1-pixel circle outlines at (cx, cy, r)."""
    height, width = size
    shape = (height, width, channels) if channels else (height, width)
    image = np.full(shape, 255, dtype=np.uint8)
    for cx, cy, r in circles:
        rr, cc = circle_perimeter(cy, cx, r, shape=(height, width))
        image[rr, cc] = 0
    return image


@pytest.fixture
def circle_image():
    """100x100 BGR image with a single circle centered at (50, 50), radius 30."""
    return make_circle_image()


@pytest.fixture
def blank_image():
    """100x100 BGR image with no edge pixels."""
    return np.full((100, 100, 3), 255, dtype=np.uint8)


@pytest.fixture
def circle_image_factory():
    """Builder for images with arbitrary circles."""
    return make_circle_image

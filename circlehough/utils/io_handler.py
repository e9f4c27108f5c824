"""I/O handling for images and JSON output."""

import cv2
import json
import numpy as np
from pathlib import Path
from typing import Dict, List, Union

from circlehough.exceptions import InputError


class JSONWriter:
    """Write detection results to JSON."""

    @staticmethod
    def save_results(output: Union[Dict, List], output_path: str, indent: int = 2):
        """Save results to JSON file."""
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w') as f:
            json.dump(output, f, indent=indent)

    @staticmethod
    def load_results(input_path: str) -> Union[Dict, List]:
        """Load results from JSON file."""
        with open(input_path, 'r') as f:
            return json.load(f)


def save_image(image: np.ndarray, output_path: str):
    """Save image to file; the format follows the file extension."""
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    if not cv2.imwrite(str(output_path), image):
        raise IOError(f"Failed to write image to {output_path}")


def load_image(image_path: str, keep_alpha: bool = False) -> np.ndarray:
    """
    Load and decode an image file.

    Args:
        image_path: Path to the image
        keep_alpha: Keep a 4th alpha channel when the file has one

    Returns:
        BGR (or BGRA) uint8 array

    Raises:
        InputError: The file is missing or cannot be decoded
    """
    flags = cv2.IMREAD_UNCHANGED if keep_alpha else cv2.IMREAD_COLOR
    image = cv2.imread(str(image_path), flags)
    if image is None:
        raise InputError(f"Failed to load image from {image_path}")
    # Fixed scale to 8 bits so the 0-255 brightness cutoff means the same
    # thing for every file.
    if image.dtype == np.uint16:
        image = (image >> 8).astype(np.uint8)
    elif image.dtype != np.uint8:
        image = cv2.convertScaleAbs(np.clip(image, 0.0, 1.0), alpha=255.0)
    return image

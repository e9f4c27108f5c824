"""Basic usage example: detect circles in input.png and write output_circles.png."""

import sys

from circlehough.core import CircleProcessor
from circlehough.exceptions import CircleHoughError
from circlehough.utils.io_handler import load_image, save_image
from circlehough.utils.logger import setup_logger


def main(image_path: str = "input.png", output_path: str = "output_circles.png") -> int:
    """Run circle detection on one image."""
    logger = setup_logger('basic_usage')

    processor = CircleProcessor({
        "detection": {"min_radius": 20, "max_radius": 50, "threshold": 150}
    })

    try:
        image = load_image(image_path, keep_alpha=True)
        logger.info(f"Detecting circles in {image_path}...")
        result = processor.process_frame(image)
    except CircleHoughError as e:
        logger.error(f"Detection failed: {e}")
        return 1

    circles = processor.circles_from_result(result)
    logger.info(f"Detected {len(circles)} circles")

    output = processor.annotate(image, circles)
    save_image(output, output_path)
    logger.info(f"Results saved to {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main(*sys.argv[1:3]))

"""Batch processing example for a directory of images."""

from pathlib import Path

from circlehough.config import load_config
from circlehough.core import CircleProcessor
from circlehough.exceptions import InputError
from circlehough.utils.io_handler import load_image, save_image, JSONWriter
from circlehough.utils.logger import setup_logger, create_session_log_file


def main(input_dir: str = "test_data/images", output_dir: str = "output",
         config_path: str = "circlehough.yaml"):
    """Process every PNG/JPG in a directory."""
    config = load_config(config_path)
    logger = setup_logger('batch_processor', config["logging"]["level"],
                          config["logging"]["log_file"] or create_session_log_file())

    processor = CircleProcessor(config)

    image_files = sorted(p for p in Path(input_dir).iterdir()
                         if p.suffix.lower() in {".png", ".jpg", ".jpeg"})
    logger.info(f"Processing {len(image_files)} images...")

    results = []
    for i, image_path in enumerate(image_files):
        logger.info(f"Processing image {i+1}/{len(image_files)}: {image_path.name}")

        try:
            image = load_image(image_path)
        except InputError as e:
            logger.warning(str(e))
            continue

        result = processor.process_frame(image)
        result['frame_id'] = image_path.stem
        results.append(result)

        circles = processor.circles_from_result(result)
        save_image(processor.annotate(image, circles),
                   str(Path(output_dir) / f"{image_path.stem}_circles.png"))

    JSONWriter.save_results(results, str(Path(output_dir) / "batch_results.json"))
    logger.info("Batch processing complete!")


if __name__ == "__main__":
    main()

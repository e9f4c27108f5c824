"""
circlehough Core Processor
Main entry point for circle detection on a single image
"""

import copy
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np

from circlehough.config import DEFAULT_CONFIG, merge_config, validate_config
from circlehough.detection.accumulator import Accumulator
from circlehough.detection.circle import Circle
from circlehough.detection.edge_classifier import BrightnessEdgeClassifier, EdgeClassifier
from circlehough.detection.peak_extractor import PeakExtractor
from circlehough.detection.voting import VotingEngine
from circlehough.utils.io_handler import load_image
from circlehough.utils.metrics import PerformanceMetrics
from circlehough.utils.visualization import draw_circles, to_color_image

logger = logging.getLogger(__name__)


class CircleProcessor:
    """Edge classification, Hough voting and peak extraction for one image at a time"""

    def __init__(self, config: Dict[str, Any] = None,
                 classifier: Optional[EdgeClassifier] = None):
        """
        Initialize circle processor

        Args:
            config: Configuration overrides, same layout as DEFAULT_CONFIG (optional)
            classifier: Custom edge predicate replacing the brightness threshold

        Raises:
            ConfigurationError: Invalid detection parameters
        """
        self.config = merge_config(copy.deepcopy(DEFAULT_CONFIG), config or {})
        validate_config(self.config)
        self.version = "1.0.0"

        detection = self.config["detection"]
        self.min_radius = detection["min_radius"]
        self.max_radius = detection["max_radius"]
        self.threshold = detection["threshold"]
        self.rounding = detection["rounding"]

        self.classifier = classifier or BrightnessEdgeClassifier(
            cutoff=detection["edge_brightness_cutoff"],
            channel=detection["edge_channel"],
        )
        self.voting_engine = VotingEngine(
            classifier=self.classifier,
            rounding=self.rounding,
            workers=detection["workers"],
            max_cells=detection["max_accumulator_cells"],
        )
        self.peak_extractor = PeakExtractor()

    def detect(self, frame: np.ndarray,
               metrics: Optional[PerformanceMetrics] = None) -> Tuple[List[Tuple[Circle, int]], Accumulator]:
        """
        Vote and extract peaks.

        Returns:
            (circle, votes) pairs above the threshold, and the accumulator
        """
        metrics = metrics or PerformanceMetrics()

        with metrics.timer("voting"):
            accumulator = self.voting_engine.populate(frame, self.min_radius, self.max_radius)

        # Extraction only starts once the voting pass has fully completed.
        with metrics.timer("peak_extraction"):
            peaks = self.peak_extractor.find_peaks(accumulator, self.threshold)

        logger.info("Detected %d circles above %d votes", len(peaks), self.threshold)
        return peaks, accumulator

    def process_frame(self, frame_input: Union[str, Path, np.ndarray]) -> Dict[str, Any]:
        """
        Process a single frame for circle detection

        Args:
            frame_input: Path to image file or numpy array

        Returns:
            Dictionary with detected circles and processing metadata

        Raises:
            InputError: Image cannot be loaded or is malformed
            ConfigurationError: Accumulator cannot be allocated
        """
        metrics = PerformanceMetrics()

        if isinstance(frame_input, (str, Path)):
            with metrics.timer("load"):
                frame = load_image(frame_input)
            frame_id = Path(frame_input).stem
        else:
            frame = frame_input
            frame_id = f"frame_{int(datetime.now().timestamp())}"

        peaks, accumulator = self.detect(frame, metrics)
        edge_pixels = self.voting_engine.last_edge_count

        return {
            "system": "circlehough",
            "version": self.version,
            "timestamp": datetime.now().isoformat(),
            "frame_id": frame_id,
            "status": "success" if peaks else "no_circles",

            "parameters": {
                "min_radius": self.min_radius,
                "max_radius": self.max_radius,
                "threshold": self.threshold,
                "rounding": self.rounding,
            },

            "circles": [dict(circle.to_dict(), votes=votes) for circle, votes in peaks],

            "processing_metadata": {
                "image_size": {
                    "width": accumulator.width,
                    "height": accumulator.height
                },
                "edge_pixels": edge_pixels,
                "accumulator_cells": accumulator.size,
                "total_votes": accumulator.total_votes(),
                "max_votes": accumulator.max_count(),
                "timings_ms": metrics.get_summary(),
            }
        }

    def annotate(self, frame: np.ndarray, circles: List[Circle]) -> np.ndarray:
        """Copy of the frame with circle outlines in the configured color."""
        output = to_color_image(frame)
        color = self.config["rendering"]["color"]
        if color is not None:
            color = tuple(color)
        return draw_circles(output, circles, color, self.rounding)

    @staticmethod
    def circles_from_result(result: Dict[str, Any]) -> List[Circle]:
        """Rebuild Circle objects from a process_frame result."""
        return [Circle(c["center_x"], c["center_y"], c["radius"]) for c in result["circles"]]

"""Timing of detection stages and scoring against known circles."""

from contextlib import contextmanager
from time import perf_counter
from typing import Dict, Iterable, List

from circlehough.detection.circle import Circle


class PerformanceMetrics:
    """Track stage durations in milliseconds."""

    def __init__(self):
        self.start_times = {}
        self.durations = {}

    def start_timer(self, name: str):
        self.start_times[name] = perf_counter()

    def stop_timer(self, name: str) -> float:
        """Stop timing and return duration in milliseconds."""
        if name not in self.start_times:
            return 0.0
        duration = (perf_counter() - self.start_times.pop(name)) * 1000
        self.durations[name] = duration
        return duration

    @contextmanager
    def timer(self, name: str):
        """Time the enclosed block under ``name``."""
        self.start_timer(name)
        try:
            yield
        finally:
            self.stop_timer(name)

    def get_summary(self) -> Dict[str, float]:
        return {name: round(ms, 2) for name, ms in self.durations.items()}


class CircleMatchMetrics:
    """Compare detections with ground-truth circles."""

    @staticmethod
    def matches(detected: Circle, expected: Circle, center_tolerance: float,
                radius_tolerance: float) -> bool:
        dx = detected.center_x - expected.center_x
        dy = detected.center_y - expected.center_y
        return ((dx * dx + dy * dy) ** 0.5 <= center_tolerance
                and abs(detected.radius - expected.radius) <= radius_tolerance)

    @classmethod
    def evaluate(cls, detected: Iterable[Circle], expected: Iterable[Circle],
                 center_tolerance: float = 2.0,
                 radius_tolerance: float = 1.0) -> Dict[str, float]:
        """
        Precision, recall and F1 of detections.

        A detection is a true positive if it lies within tolerance of any
        expected circle. An expected circle is recalled if at least one
        detection matches it. Duplicate detections of the same circle all
        count as true positives.
        """
        detected: List[Circle] = list(detected)
        expected: List[Circle] = list(expected)

        true_positives = sum(
            1 for d in detected
            if any(cls.matches(d, e, center_tolerance, radius_tolerance) for e in expected)
        )
        false_positives = len(detected) - true_positives
        recalled = sum(
            1 for e in expected
            if any(cls.matches(d, e, center_tolerance, radius_tolerance) for d in detected)
        )
        false_negatives = len(expected) - recalled

        precision = true_positives / (true_positives + false_positives) if detected else 0.0
        recall = recalled / (recalled + false_negatives) if expected else 0.0
        f1 = 2 * (precision * recall) / (precision + recall) if (precision + recall) > 0 else 0.0

        return {
            'precision': precision,
            'recall': recall,
            'f1_score': f1
        }

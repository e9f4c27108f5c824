"""
circlehough - circle detection with a 3D Hough accumulator
"""

from .core import CircleProcessor
from .detection.accumulator import Accumulator
from .detection.circle import Circle
from .detection.edge_classifier import BrightnessEdgeClassifier, EdgeClassifier, MaskEdgeClassifier
from .detection.peak_extractor import PeakExtractor
from .detection.voting import VotingEngine
from .exceptions import (
    CircleHoughError,
    ConfigurationError,
    InputError,
    OutOfRangeError,
    VotingCancelledError,
)

__all__ = [
    'CircleProcessor',
    'Accumulator',
    'Circle',
    'EdgeClassifier',
    'BrightnessEdgeClassifier',
    'MaskEdgeClassifier',
    'PeakExtractor',
    'VotingEngine',
    'CircleHoughError',
    'ConfigurationError',
    'InputError',
    'OutOfRangeError',
    'VotingCancelledError',
]
__version__ = '1.0.0'

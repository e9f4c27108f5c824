"""
Configuration management for circlehough
"""

import copy
import numbers
import os
from typing import Any, Dict, Optional

import yaml

from circlehough.exceptions import ConfigurationError

ROUNDING_MODES = ("truncate", "nearest")

DEFAULT_CONFIG = {
    "detection": {
        "min_radius": 20,
        "max_radius": 50,
        "threshold": 150,
        "edge_brightness_cutoff": 128,
        "edge_channel": 2,  # red in OpenCV BGR/BGRA order
        "rounding": "truncate",
        "workers": 1,
        "max_accumulator_cells": 500_000_000
    },
    "rendering": {
        "color": None  # None -> full-opacity red for the buffer's layout
    },
    "logging": {
        "level": "INFO",
        "log_file": None
    }
}


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from a YAML file.

    Falls back to defaults for any missing values.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path and os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        if not isinstance(yaml_data, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a mapping")

        config = merge_config(config, yaml_data)

    return config


def merge_config(config: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Merge known sections/keys of ``overrides`` into ``config`` (unknown keys are ignored)."""
    for section, values in overrides.items():
        if section not in config or not isinstance(values, dict):
            continue
        for key, value in values.items():
            if key in config[section]:
                config[section][key] = value
    return config


def validate_config(config: Dict[str, Any]) -> None:
    """Raise ConfigurationError if detection parameters cannot produce a valid run."""
    detection = config["detection"]
    validate_radius_range(detection["min_radius"], detection["max_radius"])

    if not isinstance(detection["threshold"], numbers.Integral) or isinstance(detection["threshold"], bool):
        raise ConfigurationError(f"threshold must be an integer, got {detection['threshold']!r}")

    validate_cutoff(detection["edge_brightness_cutoff"])

    if detection["rounding"] not in ROUNDING_MODES:
        raise ConfigurationError(
            f"rounding must be one of {ROUNDING_MODES}, got {detection['rounding']!r}"
        )

    workers = detection["workers"]
    if not isinstance(workers, numbers.Integral) or isinstance(workers, bool) or workers < 1:
        raise ConfigurationError(f"workers must be a positive integer, got {workers!r}")

    max_cells = detection["max_accumulator_cells"]
    if max_cells is not None and (not isinstance(max_cells, numbers.Integral) or max_cells <= 0):
        raise ConfigurationError(f"max_accumulator_cells must be positive, got {max_cells!r}")

    validate_color(config["rendering"]["color"])


def validate_radius_range(min_radius: int, max_radius: int) -> None:
    """Check ``0 < min_radius <= max_radius``."""
    for name, value in (("min_radius", min_radius), ("max_radius", max_radius)):
        if not isinstance(value, numbers.Integral) or isinstance(value, bool):
            raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        if value <= 0:
            raise ConfigurationError(f"{name} must be > 0, got {value}")
    if min_radius > max_radius:
        raise ConfigurationError(
            f"min_radius ({min_radius}) must not exceed max_radius ({max_radius})"
        )


def validate_cutoff(cutoff: int) -> None:
    if not isinstance(cutoff, numbers.Integral) or isinstance(cutoff, bool) or not 0 <= cutoff <= 255:
        raise ConfigurationError(f"edge brightness cutoff must be in [0, 255], got {cutoff!r}")


def validate_color(color) -> None:
    """Check a drawing color: None, one gray level, or 3 (BGR) or 4 (BGRA) levels."""
    if color is None:
        return
    levels = [color] if isinstance(color, numbers.Integral) else color
    if (not isinstance(levels, (list, tuple)) or len(levels) not in (1, 3, 4)
            or any(not isinstance(v, numbers.Integral) or isinstance(v, bool) or not 0 <= v <= 255
                   for v in levels)):
        raise ConfigurationError(
            f"color must be 1, 3 or 4 integers in [0, 255], got {color!r}"
        )


def save_default_config(path: str) -> None:
    """Save default configuration to YAML file for reference."""
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(DEFAULT_CONFIG, f, default_flow_style=False, sort_keys=False)

"""Detected circle value type."""

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class Circle:
    """A circle found in the accumulator: integer center and radius in pixels."""

    center_x: int
    center_y: int
    radius: int

    def as_tuple(self) -> Tuple[int, int, int]:
        return self.center_x, self.center_y, self.radius

    def to_dict(self) -> Dict[str, int]:
        return {"center_x": self.center_x, "center_y": self.center_y, "radius": self.radius}

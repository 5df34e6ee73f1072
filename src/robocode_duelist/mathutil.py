from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import Optional


class DomainError(ValueError):
    """Raised when a numeric input is outside the range an operation accepts."""


@dataclass(frozen=True)
class Color:
    """RGB color with each channel in [0, 1]."""

    r: float
    g: float
    b: float

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not 0.0 <= channel <= 1.0:
                raise DomainError(f"Color channel out of range: {channel}")

    def to_rgb255(self) -> tuple[int, int, int]:
        return (round(self.r * 255), round(self.g * 255), round(self.b * 255))

    @classmethod
    def from_hex(cls, text: str) -> "Color":
        value = text.lstrip("#")
        if len(value) != 6:
            raise DomainError(f"Expected #rrggbb color, got {text!r}")
        return cls.from_rgb255(int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))

    @classmethod
    def from_rgb255(cls, r: int, g: int, b: int) -> "Color":
        return cls(r / 255, g / 255, b / 255)


def normalize_angle_degrees(angle: float) -> float:
    """Map any degree value onto the equivalent angle in (-180, 180]."""
    if not math.isfinite(angle):
        raise DomainError(f"Cannot normalize non-finite angle: {angle}")
    wrapped = math.fmod(angle, 360.0)
    if wrapped > 180.0:
        wrapped -= 360.0
    elif wrapped <= -180.0:
        wrapped += 360.0
    return wrapped


class RandomSource:
    """
    Uniform generator shared by every stochastic decision of one run.

    Create it once at startup and hand it to the controller; pass a seed for
    reproducible runs.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random(seed)

    def uniform(self, low: float, high: float) -> float:
        if low > high:
            raise DomainError(f"uniform() requires min <= max, got {low} > {high}")
        return low + (high - low) * self._rng.random()

    def chance(self, probability: float) -> bool:
        if not 0.0 <= probability <= 1.0:
            raise DomainError(f"Probability must be in [0, 1], got {probability}")
        if probability == 0.0:
            return False
        return self.uniform(0.0, 1.0) < probability

    def random_color(self) -> Color:
        return Color(self.uniform(0.0, 1.0), self.uniform(0.0, 1.0), self.uniform(0.0, 1.0))

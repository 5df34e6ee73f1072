from __future__ import annotations

import math
import sys
from dataclasses import asdict, dataclass
from typing import Optional

from .mathutil import Color, DomainError


class InvalidSnapshotError(DomainError):
    """Raised when a sensor snapshot cannot be used for a tick."""


class SnapshotOrderError(DomainError):
    """Raised when a snapshot for an already processed turn is delivered."""


@dataclass(frozen=True)
class SensorSnapshot:
    """One scan of the opponent, as delivered by the host."""

    distance: float
    bearing: float
    heading: float
    velocity: float
    turn: Optional[int] = None

    def validate(self) -> "SensorSnapshot":
        for name in ("distance", "bearing", "heading", "velocity"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise InvalidSnapshotError(f"Snapshot field {name} is not finite: {value}")
        if self.distance < 0:
            raise InvalidSnapshotError(f"Snapshot distance must be >= 0, got {self.distance}")
        return self


@dataclass(frozen=True)
class AgentPose:
    """Our own tank as seen by the host at the time of the scan."""

    heading: float = 0.0
    gun_heading: float = 0.0
    radar_turn_remaining: float = 0.0
    velocity: float = 0.0

    def validate(self) -> "AgentPose":
        for name in ("heading", "gun_heading", "radar_turn_remaining", "velocity"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise InvalidSnapshotError(f"Pose field {name} is not finite: {value}")
        return self


@dataclass(frozen=True)
class ColorScheme:
    body: Color
    gun: Color
    radar: Color
    bullet: Optional[Color] = None
    scan: Optional[Color] = None


@dataclass(frozen=True)
class CommandBundle:
    """Everything the host applies for one tick.

    Turn angles are clockwise degrees in (-180, 180]. ``fire_power`` is None
    when the tick must not fire.
    """

    radar_turn: float = 0.0
    gun_turn: float = 0.0
    body_turn: float = 0.0
    travel_distance: float = 0.0
    fire_power: Optional[float] = None
    max_velocity: Optional[float] = None
    full_stop: bool = False
    colors: Optional[ColorScheme] = None
    phase: Optional[str] = None
    rejected: bool = False

    @classmethod
    def hold(cls) -> "CommandBundle":
        """Safe default: no turn, no fire, hold position."""
        return cls(rejected=True)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class SetupCommands:
    adjust_gun_for_body_turn: bool = True
    adjust_radar_for_body_turn: bool = True
    radar_sweep: float = sys.float_info.max
    colors: Optional[ColorScheme] = None

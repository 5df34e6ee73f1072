from __future__ import annotations

import math
from typing import Dict, Iterable, List, Tuple

from .mathutil import DomainError

DISTANCE_STEP = 150.0
VELOCITY_STEP = 4.0
POWER_STEP = 0.5


def predict_lead_offset(enemy_velocity: float, enemy_heading: float, enemy_bearing: float) -> float:
    """
    Linear lead for an opponent assumed to keep its heading and velocity.

    ``enemy_bearing`` is the absolute bearing to the opponent. The sine of the
    heading/line-of-sight angle is expressed in degrees and scaled by the
    velocity; callers dampen it with a phase-specific divisor.
    """
    return math.degrees(math.sin(math.radians(enemy_heading - enemy_bearing))) * enemy_velocity


def select_power(
    distance: float,
    enemy_velocity: float,
    min_power: float,
    max_power: float,
) -> float:
    """
    Bullet power for the current shot.

    Opponents that stand still or retreat get ``max_power``. Otherwise one
    grace step is consumed, then every further step where both the remaining
    distance and velocity stay positive costs ``POWER_STEP``. The result never
    drops below ``min_power``.
    """
    if min_power > max_power:
        raise DomainError(f"min_power {min_power} exceeds max_power {max_power}")
    if distance < 0 or not math.isfinite(distance):
        raise DomainError(f"distance must be a finite value >= 0, got {distance}")
    if not math.isfinite(enemy_velocity):
        raise DomainError(f"enemy_velocity must be finite, got {enemy_velocity}")
    power = max_power
    if enemy_velocity > 0:
        distance -= DISTANCE_STEP
        enemy_velocity -= VELOCITY_STEP
        if distance > 0 and enemy_velocity > 0:
            # Steps taken until either remaining distance or velocity reaches zero.
            steps = min(math.ceil(distance / DISTANCE_STEP), math.ceil(enemy_velocity / VELOCITY_STEP))
            power -= POWER_STEP * steps
    return max(power, min_power)


def power_table(
    distances: Iterable[float],
    velocities: Iterable[float],
    min_power: float,
    max_power: float,
) -> Dict[Tuple[float, float], float]:
    vel_list: List[float] = list(velocities)
    return {
        (d, v): select_power(d, v, min_power, max_power)
        for d in distances
        for v in vel_list
    }

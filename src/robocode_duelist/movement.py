from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass
from typing import Optional

from .config import AgentConfig
from .mathutil import RandomSource, normalize_angle_degrees

log = logging.getLogger("robocode_duelist.movement")


class Phase(str, enum.Enum):
    APPROACH = "approach"
    EVADE = "evade"


@dataclass(frozen=True)
class MotionPlan:
    phase: Phase
    gun_turn: float
    body_turn: float
    travel_distance: float
    max_velocity: Optional[float] = None
    full_stop: bool = False


def classify_phase(distance: float, config: AgentConfig) -> Phase:
    """Evade at or inside the threshold, Approach beyond it.

    Re-evaluated every tick without hysteresis, so a distance hovering around
    the threshold flips the phase from one tick to the next.
    """
    if distance <= config.evade_threshold:
        return Phase.EVADE
    return Phase.APPROACH


def approach_body_turn(bearing: float, offset: float, own_velocity: float, config: AgentConfig) -> float:
    if not config.divide_body_lead_by_velocity:
        return normalize_angle_degrees(bearing + offset)
    # Standing still or crawling: steer straight at the opponent.
    if own_velocity == 0:
        return normalize_angle_degrees(bearing)
    lead = offset / own_velocity
    if not math.isfinite(lead):
        return normalize_angle_degrees(bearing)
    return normalize_angle_degrees(bearing + lead)


def evade_body_turn(bearing: float) -> float:
    # Clockwise form of turning left by -(90 + bearing): puts the opponent abeam.
    return normalize_angle_degrees(90.0 + bearing)


def plan_motion(
    *,
    distance: float,
    bearing: float,
    shoot_angle: float,
    offset: float,
    own_velocity: float,
    direction: int,
    config: AgentConfig,
    rng: RandomSource,
) -> MotionPlan:
    """
    Pick the phase for this tick and derive gun/body turns and travel.

    ``shoot_angle`` is the absolute bearing to the opponent minus the current
    gun heading, ``bearing`` is relative to our body and ``offset`` comes from
    :func:`robocode_duelist.targeting.predict_lead_offset`.
    """
    phase = classify_phase(distance, config)
    if phase is Phase.APPROACH:
        gun_turn = normalize_angle_degrees(shoot_angle + offset / config.approach_gun_divisor)
        body_turn = approach_body_turn(bearing, offset, own_velocity, config)
        travel = direction * (distance - config.safe_distance)
    else:
        gun_turn = normalize_angle_degrees(shoot_angle + offset / config.evade_gun_divisor)
        body_turn = evade_body_turn(bearing)
        travel = direction * config.circle_step

    max_velocity = None
    if rng.chance(config.velocity_change_probability):
        max_velocity = rng.uniform(config.min_velocity, config.max_velocity)

    full_stop = False
    if phase is not Phase.EVADE and rng.chance(config.stop_probability):
        full_stop = True
        travel = 0.0

    log.debug(
        "phase=%s gun=%.2f body=%.2f travel=%.2f max_velocity=%s stop=%s",
        phase.value,
        gun_turn,
        body_turn,
        travel,
        max_velocity,
        full_stop,
    )
    return MotionPlan(
        phase=phase,
        gun_turn=gun_turn,
        body_turn=body_turn,
        travel_distance=float(travel),
        max_velocity=max_velocity,
        full_stop=full_stop,
    )

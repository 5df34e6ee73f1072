from __future__ import annotations

import logging
from typing import List, Optional, Protocol

from .config import AgentConfig
from .mathutil import Color, DomainError, RandomSource, normalize_angle_degrees
from .models import (
    AgentPose,
    ColorScheme,
    CommandBundle,
    SensorSnapshot,
    SetupCommands,
    SnapshotOrderError,
)
from .movement import plan_motion
from .targeting import predict_lead_offset, select_power

log = logging.getLogger("robocode_duelist.controller")


class CommandSink(Protocol):
    """Host side that executes the commands of a tick."""

    def apply(self, bundle: CommandBundle) -> None:
        ...


class Agent(Protocol):
    def setup_commands(self) -> SetupCommands:
        ...

    def on_scanned_opponent(self, snapshot: SensorSnapshot, pose: AgentPose) -> CommandBundle:
        ...

    def on_hit_wall(self) -> None:
        ...


class RecordingSink:
    """Sink that keeps every bundle it receives."""

    def __init__(self) -> None:
        self.bundles: List[CommandBundle] = []

    def apply(self, bundle: CommandBundle) -> None:
        self.bundles.append(bundle)


def palette_scheme(config: AgentConfig) -> ColorScheme:
    palette = config.palette
    return ColorScheme(
        body=Color.from_hex(palette.body),
        gun=Color.from_hex(palette.gun),
        radar=Color.from_hex(palette.radar),
        bullet=Color.from_hex(palette.bullet),
        scan=Color.from_hex(palette.scan),
    )


class DuelController:
    """
    Per-tick decision loop for a one-on-one duel.

    The travel direction is the only state carried between ticks; it flips on
    every wall hit. Each snapshot yields exactly one :class:`CommandBundle`,
    handed to the sink and returned.
    """

    def __init__(self, config: AgentConfig, sink: CommandSink, rng: Optional[RandomSource] = None):
        self.config = config
        self.sink = sink
        self.rng = rng or RandomSource()
        self.direction = 1
        self._last_turn: Optional[int] = None

    def setup_commands(self) -> SetupCommands:
        return SetupCommands(colors=palette_scheme(self.config))

    def on_hit_wall(self) -> None:
        self.direction = -self.direction
        log.info("Hit wall; travel direction now %+d", self.direction)

    def on_scanned_opponent(self, snapshot: SensorSnapshot, pose: AgentPose) -> CommandBundle:
        if snapshot.turn is not None:
            if self._last_turn is not None and snapshot.turn <= self._last_turn:
                raise SnapshotOrderError(
                    f"Snapshot for turn {snapshot.turn} arrived after turn {self._last_turn}"
                )
            self._last_turn = snapshot.turn
        try:
            bundle = self._decide(snapshot.validate(), pose.validate())
        except DomainError as exc:
            log.warning("Rejected snapshot, holding position: %s", exc)
            bundle = CommandBundle.hold()
        self.sink.apply(bundle)
        return bundle

    def _colors(self) -> ColorScheme:
        if not self.config.randomize_colors:
            return palette_scheme(self.config)
        return ColorScheme(
            body=self.rng.random_color(),
            gun=self.rng.random_color(),
            radar=self.rng.random_color(),
        )

    def _decide(self, snapshot: SensorSnapshot, pose: AgentPose) -> CommandBundle:
        cfg = self.config
        enemy_bearing = pose.heading + snapshot.bearing
        offset = predict_lead_offset(snapshot.velocity, snapshot.heading, enemy_bearing)
        radar_turn = normalize_angle_degrees(-pose.radar_turn_remaining)
        plan = plan_motion(
            distance=snapshot.distance,
            bearing=snapshot.bearing,
            shoot_angle=enemy_bearing - pose.gun_heading,
            offset=offset,
            own_velocity=pose.velocity,
            direction=self.direction,
            config=cfg,
            rng=self.rng,
        )
        power = select_power(snapshot.distance, snapshot.velocity, cfg.min_bullet_power, cfg.max_bullet_power)
        return CommandBundle(
            radar_turn=radar_turn,
            gun_turn=plan.gun_turn,
            body_turn=plan.body_turn,
            travel_distance=plan.travel_distance,
            fire_power=power,
            max_velocity=plan.max_velocity,
            full_stop=plan.full_stop,
            colors=self._colors(),
            phase=plan.phase.value,
        )

"""Tank Royale host adapter for the duel controller.

Tank Royale measures angles counter-clockwise from east; the controller works
in clockwise compass degrees, so everything crossing the boundary is mirrored.
"""

from __future__ import annotations

import asyncio
import logging
import os
import pathlib

from robocode_tank_royale.bot_api.bot import Bot
from robocode_tank_royale.bot_api.bot_info import BotInfo
from robocode_tank_royale.bot_api.color import Color as TankColor
from robocode_tank_royale.bot_api.events import HitWallEvent, ScannedBotEvent

from robocode_duelist.config import AgentConfig
from robocode_duelist.controller import DuelController
from robocode_duelist.mathutil import Color, RandomSource
from robocode_duelist.models import AgentPose, CommandBundle, SensorSnapshot, SnapshotOrderError

log = logging.getLogger("robocode_duelist.bot")


def _compass(direction: float) -> float:
    return (90.0 - direction) % 360.0


def _tank_color(color: Color) -> TankColor:
    return TankColor.from_rgb(*color.to_rgb255())


class DuelistBot(Bot):
    def __init__(self, config: AgentConfig) -> None:
        info = BotInfo.from_file("bot-config.json")
        super().__init__(bot_info=info)
        self.controller = DuelController(config, self, rng=RandomSource())

    async def run(self) -> None:
        setup = self.controller.setup_commands()
        self.set_adjust_gun_for_body_turn(setup.adjust_gun_for_body_turn)
        self.set_adjust_radar_for_body_turn(setup.adjust_radar_for_body_turn)
        if setup.colors:
            self.set_body_color(_tank_color(setup.colors.body))
            self.set_gun_color(_tank_color(setup.colors.gun))
            self.set_radar_color(_tank_color(setup.colors.radar))
            if setup.colors.bullet:
                self.set_bullet_color(_tank_color(setup.colors.bullet))
            if setup.colors.scan:
                self.set_scan_color(_tank_color(setup.colors.scan))
        self.set_turn_radar_right(setup.radar_sweep)
        while self.is_running():
            await self.go()

    def apply(self, bundle: CommandBundle) -> None:
        self.set_turn_radar_right(bundle.radar_turn)
        self.set_turn_gun_right(bundle.gun_turn)
        self.set_turn_right(bundle.body_turn)
        self.set_forward(bundle.travel_distance)
        if bundle.max_velocity is not None:
            self.set_max_speed(bundle.max_velocity)
        if bundle.fire_power is not None:
            self.set_fire(bundle.fire_power)
        if bundle.colors:
            self.set_body_color(_tank_color(bundle.colors.body))
            self.set_gun_color(_tank_color(bundle.colors.gun))
            self.set_radar_color(_tank_color(bundle.colors.radar))

    async def on_scanned_bot(self, e: ScannedBotEvent) -> None:
        snapshot = SensorSnapshot(
            distance=self.distance_to(e.x, e.y),
            bearing=-self.bearing_to(e.x, e.y),
            heading=_compass(e.direction),
            velocity=e.speed,
            turn=e.turn_number,
        )
        pose = AgentPose(
            heading=_compass(self.get_direction()),
            gun_heading=_compass(self.get_gun_direction()),
            radar_turn_remaining=-self.get_radar_turn_remaining(),
            velocity=self.get_speed(),
        )
        try:
            self.controller.on_scanned_opponent(snapshot, pose)
        except SnapshotOrderError as exc:
            log.warning("Skipping repeated scan: %s", exc)

    async def on_hit_wall(self, e: HitWallEvent) -> None:
        self.controller.on_hit_wall()


def _load_config() -> AgentConfig:
    path = pathlib.Path(os.environ.get("DUELIST_CONFIG", "duelist.yaml"))
    if path.exists():
        return AgentConfig.load(path)
    return AgentConfig.from_preset(os.environ.get("DUELIST_PRESET", "dodger"))


async def main() -> None:
    bot = DuelistBot(_load_config())
    await bot.start()


if __name__ == "__main__":
    asyncio.run(main())

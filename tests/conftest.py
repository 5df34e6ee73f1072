"""Shared pytest fixtures for duelist tests."""

from typing import Iterable

import pytest

from robocode_duelist.config import AgentConfig
from robocode_duelist.controller import DuelController, RecordingSink
from robocode_duelist.mathutil import RandomSource


class ScriptedRandom:
    """Stand-in for random.Random that replays fixed draws in a loop."""

    def __init__(self, draws: Iterable[float]):
        self.draws = list(draws)
        self.calls = 0

    def random(self) -> float:
        value = self.draws[self.calls % len(self.draws)]
        self.calls += 1
        return value


@pytest.fixture
def quiet_config() -> AgentConfig:
    """Config with every stochastic movement modifier switched off."""
    return AgentConfig(
        safe_distance=150.0,
        dodge_margin=0.0,
        circle_step=10.0,
        approach_gun_divisor=13.5,
        evade_gun_divisor=11.0,
        velocity_change_probability=0.0,
        stop_probability=0.0,
        divide_body_lead_by_velocity=True,
    )


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def controller(quiet_config: AgentConfig, sink: RecordingSink) -> DuelController:
    return DuelController(quiet_config, sink, rng=RandomSource(seed=7))


@pytest.fixture
def scripted():
    def _make(*draws: float) -> RandomSource:
        return RandomSource(rng=ScriptedRandom(draws))

    return _make

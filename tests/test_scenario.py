import pathlib

import pytest

from robocode_duelist.controller import DuelController
from robocode_duelist.scenario import HitWallEvent, ScanEvent, ScenarioError, load_scenario, replay

SCENARIOS = pathlib.Path(__file__).resolve().parents[1] / "scenarios"


def test_bundled_scenario_loads() -> None:
    events = load_scenario(SCENARIOS / "close_in.yaml")
    assert [type(e) for e in events] == [ScanEvent, ScanEvent, HitWallEvent, ScanEvent, ScanEvent]
    assert events[0].snapshot.turn == 1
    assert events[1].pose.gun_heading == 25.0


def test_replay_emits_one_bundle_per_scan(controller: DuelController, sink) -> None:
    results = replay(controller, load_scenario(SCENARIOS / "close_in.yaml"))
    assert results[2] is None
    assert len(sink.bundles) == 4
    assert controller.direction == -1
    assert [b.phase for b in sink.bundles] == ["approach", "approach", "approach", "evade"]


@pytest.mark.parametrize(
    "text",
    [
        "events: nope\n",
        "events:\n  - type: scan\n    distance: 10\n",
        "events:\n  - [1, 2]\n",
        "events:\n  - {type: scan, distance: 1, bearing: 0, heading: 0, velocity: 0, pose: {speed: 3}}\n",
    ],
)
def test_malformed_scenarios(tmp_path: pathlib.Path, text: str) -> None:
    path = tmp_path / "scenario.yaml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ScenarioError):
        load_scenario(path)


def test_fractional_turn_is_rejected(tmp_path: pathlib.Path) -> None:
    path = tmp_path / "scenario.yaml"
    path.write_text(
        "events:\n  - {type: scan, turn: 1.7, distance: 1, bearing: 0, heading: 0, velocity: 0}\n",
        encoding="utf-8",
    )
    with pytest.raises(ScenarioError, match="turn must be an integer"):
        load_scenario(path)


@pytest.mark.parametrize(
    "text",
    [
        "events: [\n",
        "events:\n  - {type: scan, distance: 1, bearing: 0, heading: 0, velocity: 0, pose: 5}\n",
    ],
)
def test_unreadable_scenarios(tmp_path: pathlib.Path, text: str) -> None:
    path = tmp_path / "scenario.yaml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ScenarioError):
        load_scenario(path)

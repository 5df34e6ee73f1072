from __future__ import annotations

import pathlib
from dataclasses import dataclass
from typing import List, Optional, Union

import yaml

from .controller import DuelController
from .models import AgentPose, CommandBundle, SensorSnapshot


class ScenarioError(Exception):
    """Raised when a scenario file cannot be replayed."""


@dataclass
class ScanEvent:
    snapshot: SensorSnapshot
    pose: AgentPose


@dataclass
class HitWallEvent:
    pass


Event = Union[ScanEvent, HitWallEvent]


def _parse_event(index: int, raw: dict) -> Event:
    if not isinstance(raw, dict):
        raise ScenarioError(f"Event #{index} must be a mapping")
    kind = raw.get("type")
    if kind == "hit_wall":
        return HitWallEvent()
    if kind != "scan":
        raise ScenarioError(f"Event #{index} has unknown type {kind!r}")
    turn = raw.get("turn")
    if turn is not None and (isinstance(turn, bool) or not isinstance(turn, int)):
        raise ScenarioError(f"Event #{index} turn must be an integer, got {turn!r}")
    pose_raw = raw.get("pose") or {}
    if not isinstance(pose_raw, dict):
        raise ScenarioError(f"Event #{index} pose must be a mapping, got {pose_raw!r}")
    try:
        snapshot = SensorSnapshot(
            distance=float(raw["distance"]),
            bearing=float(raw["bearing"]),
            heading=float(raw["heading"]),
            velocity=float(raw["velocity"]),
            turn=turn,
        )
        pose = AgentPose(**{k: float(v) for k, v in pose_raw.items()})
    except (KeyError, TypeError, ValueError) as exc:
        raise ScenarioError(f"Event #{index} is malformed: {exc}") from exc
    return ScanEvent(snapshot=snapshot, pose=pose)


def load_scenario(path: pathlib.Path) -> List[Event]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ScenarioError(f"Scenario {path} is not valid YAML: {exc}") from exc
    events = data.get("events") if isinstance(data, dict) else None
    if not isinstance(events, list):
        raise ScenarioError(f"Scenario {path} needs an 'events' list")
    return [_parse_event(idx, raw) for idx, raw in enumerate(events)]


def replay(controller: DuelController, events: List[Event]) -> List[Optional[CommandBundle]]:
    """Feed events in order; wall hits produce ``None`` in the result."""
    results: List[Optional[CommandBundle]] = []
    for event in events:
        if isinstance(event, HitWallEvent):
            controller.on_hit_wall()
            results.append(None)
        else:
            results.append(controller.on_scanned_opponent(event.snapshot, event.pose))
    return results

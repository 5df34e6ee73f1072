from __future__ import annotations

import pathlib
from typing import Dict, Optional

import yaml
from pydantic import BaseModel, Field, root_validator, validator


class Rules:
    """Arena constants of the classic Robocode host."""

    MAX_VELOCITY = 8.0
    MIN_BULLET_POWER = 0.1
    MAX_BULLET_POWER = 3.0


class PaletteConfig(BaseModel):
    body: str = "#00ff00"
    gun: str = "#000000"
    radar: str = "#ffffff"
    bullet: str = "#ffc800"
    scan: str = "#ff0000"

    @validator("body", "gun", "radar", "bullet", "scan")
    def _hex_color(cls, value: str) -> str:  # noqa: N805
        text = value.strip().lower()
        if len(text) != 7 or not text.startswith("#"):
            raise ValueError(f"Expected #rrggbb color, got {value!r}")
        int(text[1:], 16)
        return text


class AgentConfig(BaseModel):
    safe_distance: float = Field(150.0, gt=0, description="Proximity threshold between Approach and Evade")
    dodge_margin: float = Field(20.0, ge=0, description="Extra distance added to the Evade test")
    circle_step: float = Field(10.0, gt=0, description="Travel per tick while circling")
    min_bullet_power: float = Field(Rules.MIN_BULLET_POWER, gt=0)
    max_bullet_power: float = Field(Rules.MAX_BULLET_POWER, gt=0)
    min_velocity: float = Field(max(Rules.MAX_VELOCITY - 7, 0), ge=0)
    max_velocity: float = Field(Rules.MAX_VELOCITY, gt=0)
    velocity_change_probability: float = Field(0.2, ge=0.0, le=1.0)
    stop_probability: float = Field(0.1, ge=0.0, le=1.0)
    approach_gun_divisor: float = 13.5
    evade_gun_divisor: float = 11.0
    divide_body_lead_by_velocity: bool = True
    randomize_colors: bool = True
    palette: PaletteConfig = Field(default_factory=PaletteConfig)

    @root_validator(skip_on_failure=True)
    def _bounds_order(cls, values: dict) -> dict:  # noqa: N805
        for low_key, high_key in (("min_bullet_power", "max_bullet_power"), ("min_velocity", "max_velocity")):
            low, high = values.get(low_key), values.get(high_key)
            if low is not None and high is not None and low > high:
                raise ValueError(f"{low_key} {low} exceeds {high_key} {high}")
        return values

    @validator("approach_gun_divisor", "evade_gun_divisor")
    def _non_zero(cls, value: float) -> float:  # noqa: N805
        if value == 0:
            raise ValueError("Gun lead divisor must be non-zero")
        return value

    @property
    def evade_threshold(self) -> float:
        return self.safe_distance + self.dodge_margin

    @classmethod
    def from_preset(cls, name: str, **overrides) -> "AgentConfig":
        try:
            base = PRESETS[name]
        except KeyError:
            raise ValueError(f"Unknown preset {name!r}; choose from {', '.join(sorted(PRESETS))}") from None
        data = dict(base)
        data.update(overrides)
        return cls(**data)

    @classmethod
    def load(cls, path: str | pathlib.Path, preset: Optional[str] = None) -> "AgentConfig":
        cfg_path = pathlib.Path(path)
        with cfg_path.open("r", encoding="utf-8") as fh:
            try:
                data = yaml.safe_load(fh) or {}
            except yaml.YAMLError as exc:
                raise ValueError(f"Config {cfg_path} is not valid YAML: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"Config {cfg_path} must be a mapping")
        preset = data.pop("preset", None) or preset
        if preset:
            return cls.from_preset(preset, **data)
        return cls(**data)


PRESETS: Dict[str, dict] = {
    "classic": {
        "safe_distance": 100.0,
        "dodge_margin": 0.0,
        "circle_step": 10.0,
        "approach_gun_divisor": 20.0,
        "evade_gun_divisor": 40.0,
        "divide_body_lead_by_velocity": False,
        "stop_probability": 0.0,
        "randomize_colors": False,
    },
    "circler": {
        "safe_distance": 130.0,
        "dodge_margin": 0.0,
        "circle_step": 10.0,
        "approach_gun_divisor": 14.5,
        "evade_gun_divisor": 11.0,
        "divide_body_lead_by_velocity": True,
        "stop_probability": 0.0,
    },
    "dodger": {
        "safe_distance": 150.0,
        "dodge_margin": 20.0,
        "circle_step": 10.0,
        "approach_gun_divisor": 13.5,
        "evade_gun_divisor": 11.0,
        "divide_body_lead_by_velocity": True,
        "stop_probability": 0.1,
    },
}

from __future__ import annotations

import json
import logging
import pathlib
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich import print
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .config import PRESETS, AgentConfig, Rules
from .controller import DuelController, RecordingSink
from .mathutil import RandomSource
from .models import SnapshotOrderError
from .scenario import ScenarioError, load_scenario, replay
from .targeting import power_table as build_power_table

app = typer.Typer(add_completion=False, help="Duel bot decision core tools")
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _load_config(config: Optional[pathlib.Path], preset: Optional[str]) -> AgentConfig:
    try:
        if config:
            return AgentConfig.load(config, preset=preset)
        return AgentConfig.from_preset(preset or "dodger")
    except (ValidationError, ValueError, OSError) as exc:
        print(f"[red]Invalid config[/red]: {escape(str(exc))}")
        raise typer.Exit(1)


@app.command()
def simulate(
    scenario: pathlib.Path = typer.Argument(..., help="YAML scenario with scan/hit_wall events"),
    config: Optional[pathlib.Path] = typer.Option(None, help="Agent config YAML"),
    preset: Optional[str] = typer.Option(None, help=f"Preset ({', '.join(sorted(PRESETS))})"),
    seed: Optional[int] = typer.Option(None, help="Seed for the shared random source"),
    output: Optional[pathlib.Path] = typer.Option(None, help="Write bundles as JSON here"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log per-tick decisions"),
) -> None:
    """Replay a scenario through the controller and show the emitted commands."""
    _setup_logging(verbose)
    cfg = _load_config(config, preset)
    try:
        events = load_scenario(scenario)
    except (ScenarioError, OSError) as exc:
        print(f"[red]Cannot load scenario[/red]: {escape(str(exc))}")
        raise typer.Exit(1)

    sink = RecordingSink()
    controller = DuelController(cfg, sink, rng=RandomSource(seed))
    try:
        results = replay(controller, events)
    except SnapshotOrderError as exc:
        print(f"[red]Scenario out of order[/red]: {escape(str(exc))}")
        raise typer.Exit(1)

    table = Table(title=f"{len(sink.bundles)} ticks")
    for column in ["#", "phase", "gun", "body", "radar", "travel", "power", "max vel", "stop"]:
        table.add_column(column, justify="right")
    for idx, bundle in enumerate(results):
        if bundle is None:
            table.add_row(str(idx), "[yellow]hit wall[/yellow]", *[""] * 7)
            continue
        table.add_row(
            str(idx),
            "[red]rejected[/red]" if bundle.rejected else str(bundle.phase),
            f"{bundle.gun_turn:.2f}",
            f"{bundle.body_turn:.2f}",
            f"{bundle.radar_turn:.2f}",
            f"{bundle.travel_distance:.2f}",
            "-" if bundle.fire_power is None else f"{bundle.fire_power:.2f}",
            "-" if bundle.max_velocity is None else f"{bundle.max_velocity:.2f}",
            "yes" if bundle.full_stop else "",
        )
    console.print(table)

    if output:
        payload = {
            "config": cfg.dict(),
            "seed": seed,
            "ticks": [None if b is None else b.to_dict() for b in results],
        }
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"[green]Bundles written[/green]: {output}")


@app.command()
def power_table(
    min_power: float = typer.Option(Rules.MIN_BULLET_POWER, help="Minimum bullet power"),
    max_power: float = typer.Option(Rules.MAX_BULLET_POWER, help="Maximum bullet power"),
    distance: List[float] = typer.Option([100.0, 300.0, 500.0, 800.0], help="Distances to tabulate"),
    velocity: List[float] = typer.Option([0.0, 4.0, 8.0, 12.0, 20.0], help="Opponent velocities to tabulate"),
) -> None:
    """Print bullet power for each distance/velocity pair."""
    try:
        values = build_power_table(distance, velocity, min_power, max_power)
    except ValueError as exc:
        print(f"[red]Invalid input[/red]: {escape(str(exc))}")
        raise typer.Exit(1)
    table = Table(title="Bullet power")
    table.add_column("distance", justify="right")
    for v in velocity:
        table.add_column(f"v={v:g}", justify="right")
    for d in distance:
        table.add_row(f"{d:g}", *[f"{values[(d, v)]:.1f}" for v in velocity])
    console.print(table)


@app.command()
def show_config(
    config: Optional[pathlib.Path] = typer.Option(None, help="Agent config YAML"),
    preset: Optional[str] = typer.Option(None, help="Preset name"),
) -> None:
    """Print the resolved agent configuration."""
    cfg = _load_config(config, preset)
    console.print_json(json.dumps(cfg.dict()))


if __name__ == "__main__":
    app()

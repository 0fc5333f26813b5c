"""Offline scenarios: scripted calls and selections replayed tick by tick."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List

from dispatch import Direction, InvalidElevatorId

from .building import Building
from .config import SimulationConfig
from .simulation import Simulation

logger = logging.getLogger(__name__)


def build_simulation(config: Dict) -> Simulation:
    building_cfg = config.get("building", {})
    dispatcher_cfg = config.get("dispatcher", {})
    defaults = SimulationConfig()
    sim_config = SimulationConfig(
        elevator_count=building_cfg.get("elevator_count", defaults.elevator_count),
        num_floors=building_cfg.get("num_floors", defaults.num_floors),
        direction_change_penalty=dispatcher_cfg.get(
            "direction_change_penalty", defaults.direction_change_penalty
        ),
        away_penalty=dispatcher_cfg.get("away_penalty", defaults.away_penalty),
    )
    return Simulation(Building.from_config(sim_config))


def _apply_scheduled_requests(
    simulation: Simulation, requests: Iterable[Dict], current_time: int
) -> None:
    for request in requests:
        if request.get("time", 0) != current_time:
            continue
        floor = request["floor"]
        try:
            simulation.building.validate_floor(floor)
            if request.get("type") == "call":
                simulation.call_elevator(floor, Direction(request["direction"]))
            elif request.get("type") == "select":
                simulation.select_floor(request["elevator_id"], floor)
            else:
                logger.warning("Skipping request with unknown type %r", request.get("type"))
        except (InvalidElevatorId, ValueError) as exc:
            logger.warning("Skipping request %s: %s", request, exc)


def run_scenario(simulation: Simulation, config: Dict) -> List[Dict]:
    """Run the scripted scenario and return one snapshot per tick."""
    duration = config.get("duration", 30)
    requests = config.get("requests", [])
    snapshots: List[Dict] = []
    simulation.on_event("tick", snapshots.append)

    for _ in range(duration):
        _apply_scheduled_requests(simulation, requests, simulation.current_time)
        simulation.step()
    return snapshots

"""Simulation primitives for the elevator bank."""

from .building import Building
from .config import SimulationConfig
from .elevator import Elevator, Status
from .simulation import Simulation

__all__ = [
    "Building",
    "Elevator",
    "SimulationConfig",
    "Simulation",
    "Status",
]

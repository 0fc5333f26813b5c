from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Protocol, Tuple


class Direction(str, Enum):
    """Travel direction of a car, or of a hall call (UP/DOWN only)."""

    UP = "UP"
    DOWN = "DOWN"
    IDLE = "IDLE"


@dataclass(frozen=True)
class ElevatorSnapshot:
    """Lightweight view of an elevator for dispatch decisions."""

    elevator_id: int
    current_floor: int
    direction: Direction
    target_floors: Tuple[int, ...] = ()


class Dispatcher(Protocol):
    """Strategy interface for choosing the car that answers a hall call."""

    def select(
        self,
        elevator_state: Iterable[ElevatorSnapshot],
        floor: int,
        direction: Direction,
    ) -> ElevatorSnapshot:
        """
        Return the snapshot of the elevator that should serve the call.

        Implementations raise NoElevatorsAvailable when the fleet is empty.
        """
        ...

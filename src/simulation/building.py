from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from dispatch import CostDispatcher, Direction, Dispatcher, ElevatorSnapshot, InvalidElevatorId

from .config import SimulationConfig
from .elevator import Elevator

logger = logging.getLogger(__name__)


@dataclass
class Building:
    """Owns the fixed fleet and routes calls and selections to its cars.

    Callers are responsible for serializing access; none of these methods
    lock on their own.
    """

    num_floors: int
    elevator_count: int = 3
    dispatcher: Dispatcher = field(default_factory=CostDispatcher)
    elevators: List[Elevator] = field(init=False)

    def __post_init__(self) -> None:
        self.elevators = [
            Elevator(elevator_id=i, max_floor=self.max_floor) for i in range(self.elevator_count)
        ]

    @classmethod
    def from_config(cls, config: SimulationConfig) -> "Building":
        return cls(
            num_floors=config.num_floors,
            elevator_count=config.elevator_count,
            dispatcher=CostDispatcher(
                direction_change_penalty=config.direction_change_penalty,
                away_penalty=config.away_penalty,
            ),
        )

    @property
    def max_floor(self) -> int:
        return self.num_floors - 1

    def assign(self, floor: int, direction: Direction) -> int:
        """Dispatch a hall call and return the id of the chosen car."""
        direction = Direction(direction)
        chosen = self.dispatcher.select(self._snapshot_elevators(), floor, direction)
        elevator = self.elevators[chosen.elevator_id]
        logger.info(
            "Best elevator %s chosen for floor %s and direction %s",
            chosen.elevator_id,
            floor,
            direction.value,
        )
        if not elevator.add_target(floor):
            logger.info("Elevator %s is already at floor %s", chosen.elevator_id, floor)
        return chosen.elevator_id

    def enqueue_selection(self, elevator_id: int, floor: int) -> None:
        elevator = self.get_elevator(elevator_id)
        if elevator is None:
            raise InvalidElevatorId(elevator_id, len(self.elevators))
        if elevator.add_target(floor):
            logger.info("Elevator %s was instructed to go to floor %s", elevator_id, floor)
        else:
            logger.info("Elevator %s is already at floor %s", elevator_id, floor)

    def validate_floor(self, floor: int) -> None:
        if not 0 <= floor <= self.max_floor:
            raise ValueError(f"Floor {floor} is outside 0..{self.max_floor}")

    def get_elevator(self, elevator_id: int) -> Optional[Elevator]:
        if 0 <= elevator_id < len(self.elevators):
            return self.elevators[elevator_id]
        return None

    def snapshot(self) -> List[dict]:
        return [elevator.snapshot() for elevator in self.elevators]

    def _snapshot_elevators(self) -> List[ElevatorSnapshot]:
        return [elevator.dispatch_view() for elevator in self.elevators]

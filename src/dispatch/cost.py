from __future__ import annotations

from typing import Iterable, Optional

from .errors import NoElevatorsAvailable
from .interface import Direction, ElevatorSnapshot

DIRECTION_CHANGE_PENALTY = 100
AWAY_PENALTY = 50


class CostDispatcher:
    """Assigns a hall call to the car with the lowest distance-plus-penalty cost.

    A car already committed to the opposite direction pays
    ``direction_change_penalty``; if it is also heading away from the
    calling floor it pays ``away_penalty`` on top. Ties go to the first car
    in fleet order.
    """

    def __init__(
        self,
        direction_change_penalty: int = DIRECTION_CHANGE_PENALTY,
        away_penalty: int = AWAY_PENALTY,
    ) -> None:
        self.direction_change_penalty = direction_change_penalty
        self.away_penalty = away_penalty

    def select(
        self,
        elevator_state: Iterable[ElevatorSnapshot],
        floor: int,
        direction: Direction,
    ) -> ElevatorSnapshot:
        if direction == Direction.IDLE:
            raise ValueError("Hall calls must be UP or DOWN")

        best: Optional[ElevatorSnapshot] = None
        best_cost = 0
        for elevator in elevator_state:
            cost = self.cost(elevator, floor, direction)
            # Strict comparison keeps the earliest car on ties
            if best is None or cost < best_cost:
                best = elevator
                best_cost = cost
        if best is None:
            raise NoElevatorsAvailable()
        return best

    def cost(self, elevator: ElevatorSnapshot, floor: int, direction: Direction) -> int:
        distance = abs(elevator.current_floor - floor)

        penalty = 0
        if elevator.direction != Direction.IDLE and elevator.direction != direction:
            penalty += self.direction_change_penalty
            if self._moving_away(elevator, floor):
                penalty += self.away_penalty
        return distance + penalty

    def _moving_away(self, elevator: ElevatorSnapshot, floor: int) -> bool:
        return (elevator.direction == Direction.UP and elevator.current_floor > floor) or (
            elevator.direction == Direction.DOWN and elevator.current_floor < floor
        )

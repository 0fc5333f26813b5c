from __future__ import annotations

import logging
from bisect import bisect_left, bisect_right
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from dispatch import Direction, ElevatorSnapshot

logger = logging.getLogger(__name__)


class Status(str, Enum):
    """Door and motion state of a car."""

    IDLE = "IDLE"
    MOVING = "MOVING"
    DOORS_OPEN = "DOORS_OPEN"


@dataclass
class Elevator:
    """A single car driven by a LOOK scan over its sorted target floors."""

    elevator_id: int
    max_floor: int
    current_floor: int = 0
    direction: Direction = Direction.IDLE
    status: Status = Status.IDLE
    target_floors: List[int] = field(default_factory=list)

    def add_target(self, floor: int) -> bool:
        """Queue a floor to visit; return False if nothing had to be queued.

        A request for the floor where the car is idle or already has its
        doors open is served on the spot.
        """
        if floor == self.current_floor and self.status in (Status.IDLE, Status.DOORS_OPEN):
            return False
        index = bisect_left(self.target_floors, floor)
        if index < len(self.target_floors) and self.target_floors[index] == floor:
            return True
        self.target_floors.insert(index, floor)
        return True

    def has_target(self, floor: int) -> bool:
        index = bisect_left(self.target_floors, floor)
        return index < len(self.target_floors) and self.target_floors[index] == floor

    def next_target(self) -> Optional[int]:
        """Pick the next stop with the LOOK policy, or None without targets."""
        if not self.target_floors:
            return None

        if self.direction == Direction.UP:
            # Closest stop at or above, else the top stop to reverse
            index = bisect_left(self.target_floors, self.current_floor)
            if index < len(self.target_floors):
                return self.target_floors[index]
            return self.target_floors[-1]
        if self.direction == Direction.DOWN:
            index = bisect_right(self.target_floors, self.current_floor)
            if index > 0:
                return self.target_floors[index - 1]
            return self.target_floors[0]
        return self.target_floors[0]

    def step(self) -> None:
        """Advance the door/motion state machine by one tick."""
        if self.status == Status.IDLE:
            if self.target_floors:
                self._update_direction()
                if self.direction != Direction.IDLE:
                    self.status = Status.MOVING
            return

        if self.status == Status.MOVING:
            if self.has_target(self.current_floor):
                self._open_doors()
            else:
                self._move()
            return

        if self.status == Status.DOORS_OPEN:
            logger.debug("Elevator %s doors are open. Deciding next move.", self.elevator_id)
            if not self.target_floors:
                self.status = Status.IDLE
                self.direction = Direction.IDLE
                return
            self._update_direction()
            self.status = Status.MOVING
            self._move()

    def snapshot(self) -> dict:
        return {
            "id": self.elevator_id,
            "currentFloor": self.current_floor,
            "direction": self.direction.value,
            "status": self.status.value,
            "targetFloors": list(self.target_floors),
        }

    def dispatch_view(self) -> ElevatorSnapshot:
        return ElevatorSnapshot(
            elevator_id=self.elevator_id,
            current_floor=self.current_floor,
            direction=self.direction,
            target_floors=tuple(self.target_floors),
        )

    def _open_doors(self) -> None:
        self.target_floors.remove(self.current_floor)
        self.status = Status.DOORS_OPEN
        logger.info("Elevator %s stopped at target floor %s", self.elevator_id, self.current_floor)

    def _update_direction(self) -> None:
        target = self.next_target()
        if target is None:
            self.direction = Direction.IDLE
        elif target > self.current_floor:
            self.direction = Direction.UP
        elif target < self.current_floor:
            self.direction = Direction.DOWN
        # Equal floor keeps the direction; arrival is handled while MOVING

    def _move(self) -> None:
        if self.direction == Direction.UP and self.current_floor < self.max_floor:
            self.current_floor += 1
        elif self.direction == Direction.DOWN and self.current_floor > 0:
            self.current_floor -= 1

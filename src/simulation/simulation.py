from __future__ import annotations

import logging
from typing import Callable, Dict, List

from dispatch import Direction

from .building import Building
from .elevator import Status

logger = logging.getLogger(__name__)


class Simulation:
    """Tick-stepped elevator bank simulation for the service and offline runs.

    Every ``step`` advances each car's state machine once, then emits a
    ``"tick"`` event carrying a snapshot of the whole fleet. Hooks also
    receive ``"arrival"``, ``"call"`` and ``"selection"`` events.
    """

    def __init__(self, building: Building) -> None:
        self.building = building
        self.current_time: int = 0
        self.event_hooks: Dict[str, List[Callable[[object], None]]] = {}

    def run(self, duration: int) -> None:
        for _ in range(duration):
            self.step()

    def step(self) -> List[dict]:
        for elevator in self.building.elevators:
            previous = elevator.status
            elevator.step()
            if elevator.status == Status.DOORS_OPEN and previous != Status.DOORS_OPEN:
                self._emit(
                    "arrival",
                    {
                        "elevator_id": elevator.elevator_id,
                        "floor": elevator.current_floor,
                        "time": self.current_time,
                    },
                )

        self.current_time += 1
        snapshot = self.building.snapshot()
        logger.debug("Tick %s: %s", self.current_time, snapshot)
        self._emit("tick", {"time": self.current_time, "elevators": snapshot})
        return snapshot

    def call_elevator(self, floor: int, direction: Direction) -> int:
        elevator_id = self.building.assign(floor, direction)
        self._emit(
            "call",
            {"floor": floor, "direction": direction, "elevator_id": elevator_id, "time": self.current_time},
        )
        return elevator_id

    def select_floor(self, elevator_id: int, floor: int) -> None:
        self.building.enqueue_selection(elevator_id, floor)
        self._emit("selection", {"elevator_id": elevator_id, "floor": floor, "time": self.current_time})

    def on_event(self, event: str, callback: Callable[[object], None]) -> None:
        self.event_hooks.setdefault(event, []).append(callback)

    def _emit(self, event: str, payload: object) -> None:
        for callback in self.event_hooks.get(event, []):
            callback(payload)

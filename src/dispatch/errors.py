from __future__ import annotations


class ElevatorSystemError(Exception):
    """Base class for dispatch and fleet errors."""


class NoElevatorsAvailable(ElevatorSystemError, RuntimeError):
    """Raised when a call is dispatched against an empty fleet."""

    def __init__(self) -> None:
        super().__init__("No elevators available")


class InvalidElevatorId(ElevatorSystemError, IndexError):
    """Raised when a floor selection names a car that does not exist."""

    def __init__(self, elevator_id: int, fleet_size: int) -> None:
        self.elevator_id = elevator_id
        self.fleet_size = fleet_size
        super().__init__(f"Invalid elevator ID: {elevator_id} (fleet has {fleet_size} cars)")

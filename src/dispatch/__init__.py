from __future__ import annotations

from .cost import AWAY_PENALTY, DIRECTION_CHANGE_PENALTY, CostDispatcher
from .errors import ElevatorSystemError, InvalidElevatorId, NoElevatorsAvailable
from .interface import Direction, Dispatcher, ElevatorSnapshot

__all__ = [
    "AWAY_PENALTY",
    "DIRECTION_CHANGE_PENALTY",
    "CostDispatcher",
    "Direction",
    "Dispatcher",
    "ElevatorSnapshot",
    "ElevatorSystemError",
    "InvalidElevatorId",
    "NoElevatorsAvailable",
]

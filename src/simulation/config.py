from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from dispatch import AWAY_PENALTY, DIRECTION_CHANGE_PENALTY


@dataclass
class SimulationConfig:
    """Tunables for the fleet, the dispatcher and the tick loop."""

    elevator_count: int = 3
    num_floors: int = 10
    tick_interval: float = 1.0
    direction_change_penalty: int = DIRECTION_CHANGE_PENALTY
    away_penalty: int = AWAY_PENALTY
    cors_origins: Tuple[str, ...] = ("http://localhost:3000",)
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.elevator_count < 0:
            raise ValueError(f"elevator_count must be >= 0, got {self.elevator_count}")
        if self.num_floors < 1:
            raise ValueError(f"num_floors must be >= 1, got {self.num_floors}")
        if self.tick_interval <= 0:
            raise ValueError(f"tick_interval must be positive, got {self.tick_interval}")

    @property
    def max_floor(self) -> int:
        return self.num_floors - 1

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SimulationConfig":
        env = os.environ if environ is None else environ
        defaults = cls()
        origins = env.get("CORS_ORIGINS")
        return cls(
            elevator_count=int(env.get("ELEVATOR_COUNT", defaults.elevator_count)),
            num_floors=int(env.get("NUM_FLOORS", defaults.num_floors)),
            tick_interval=float(env.get("TICK_INTERVAL", defaults.tick_interval)),
            direction_change_penalty=int(
                env.get("DIRECTION_CHANGE_PENALTY", defaults.direction_change_penalty)
            ),
            away_penalty=int(env.get("AWAY_PENALTY", defaults.away_penalty)),
            cors_origins=(
                tuple(o.strip() for o in origins.split(",") if o.strip())
                if origins is not None
                else defaults.cors_origins
            ),
            log_level=env.get("LOG_LEVEL", defaults.log_level).upper(),
        )

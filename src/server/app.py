from __future__ import annotations

import asyncio
import contextlib
import json
import logging
from typing import List, Literal, Optional, Set

from fastapi import FastAPI, HTTPException, Response, WebSocket, WebSocketDisconnect, status
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from dispatch import Direction, InvalidElevatorId, NoElevatorsAvailable
from simulation import Building, Simulation, SimulationConfig

logger = logging.getLogger(__name__)


class CallRequest(BaseModel):
    floor: int
    direction: Literal["UP", "DOWN"]


class SelectRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    elevator_id: int = Field(alias="elevatorId")
    floor: int


class SimulationManager:
    """Runs the tick loop and serializes ticks and requests on one lock."""

    def __init__(self, config: Optional[SimulationConfig] = None) -> None:
        self.config = config or SimulationConfig()
        self.simulation = Simulation(Building.from_config(self.config))
        self.tick_interval = self.config.tick_interval
        self.clients: Set[WebSocket] = set()
        self._task: Optional[asyncio.Task] = None
        self._lock = asyncio.Lock()

    async def start(self) -> None:
        if self._task is None:
            logger.info(
                "Starting simulation: %s elevators, %s floors, tick every %ss",
                self.config.elevator_count,
                self.config.num_floors,
                self.tick_interval,
            )
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None

    async def _run(self) -> None:
        while True:
            try:
                await self.tick()
            except Exception:
                logger.exception("Tick failed")
            await asyncio.sleep(self.tick_interval)

    async def tick(self) -> List[dict]:
        # The snapshot is taken inside the critical section so it reflects
        # exactly this tick's transitions.
        async with self._lock:
            payload = self.simulation.step()
        await self.broadcast(payload)
        return payload

    async def broadcast(self, payload: List[dict]) -> None:
        message = json.dumps(payload)
        logger.debug("Broadcasting elevator states to %s clients", len(self.clients))
        disconnected: Set[WebSocket] = set()
        for client in set(self.clients):
            try:
                await client.send_text(message)
            except WebSocketDisconnect:
                disconnected.add(client)
            except Exception as exc:
                logger.warning("Dropping client after failed send: %r", exc)
                disconnected.add(client)
        for client in disconnected:
            await self.unregister(client)

    async def register(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.clients.add(websocket)
        await websocket.send_text(json.dumps(self.current_state()))

    async def unregister(self, websocket: WebSocket) -> None:
        if websocket in self.clients:
            self.clients.remove(websocket)
        with contextlib.suppress(Exception):
            await websocket.close()

    def current_state(self) -> List[dict]:
        return self.simulation.building.snapshot()

    async def call_elevator(self, floor: int, direction: Direction) -> int:
        async with self._lock:
            self.simulation.building.validate_floor(floor)
            try:
                return self.simulation.call_elevator(floor, direction)
            except NoElevatorsAvailable:
                logger.exception("Cannot dispatch call for floor %s: fleet is empty", floor)
                raise

    async def select_floor(self, elevator_id: int, floor: int) -> bool:
        async with self._lock:
            self.simulation.building.validate_floor(floor)
            try:
                self.simulation.select_floor(elevator_id, floor)
            except InvalidElevatorId:
                logger.warning("Invalid elevator ID: %s", elevator_id)
                return False
            return True


config = SimulationConfig.from_env()
manager = SimulationManager(config)
app = FastAPI(title="Elevator Bank Simulation API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(config.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def on_startup() -> None:
    await manager.start()


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await manager.stop()


@app.get("/api/elevators")
async def get_state() -> List[dict]:
    return manager.current_state()


@app.post("/api/elevators/call", status_code=status.HTTP_202_ACCEPTED)
async def call_elevator(request: CallRequest) -> Response:
    try:
        await manager.call_elevator(request.floor, Direction(request.direction))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return Response(status_code=status.HTTP_202_ACCEPTED)


@app.post("/api/elevators/select", status_code=status.HTTP_202_ACCEPTED)
async def select_floor(request: SelectRequest) -> Response:
    try:
        await manager.select_floor(request.elevator_id, request.floor)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return Response(status_code=status.HTTP_202_ACCEPTED)


@app.websocket("/ws/elevators")
async def websocket_endpoint(websocket: WebSocket) -> None:
    await manager.register(websocket)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await manager.unregister(websocket)


def main() -> None:
    import uvicorn

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("server.app:app", host="0.0.0.0", port=8000, reload=False)


if __name__ == "__main__":
    main()

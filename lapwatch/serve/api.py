"""FastAPI application exposing a stopwatch registry over HTTP and websockets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from fastapi import FastAPI, Request, WebSocket, WebSocketDisconnect, status
from fastapi.responses import JSONResponse

from ..core.clock import Clock
from ..core.errors import (
    DuplicateIdError,
    InvalidArgumentError,
    InvalidStateError,
    RegistryFullError,
    UnknownIdError,
)
from ..core.registry import StopwatchRegistry
from ..utils.logging import logger
from .broadcaster import EventBroadcaster
from .schemas import CreateStopwatch, LapModel, StopwatchModel, SummaryModel


@dataclass
class ApiConfig:
    title: str = "lapwatch API"
    # 0 disables the limit
    max_stopwatches: int = 0


class AppState:
    def __init__(self, config: ApiConfig, clock: Optional[Clock] = None):
        self.config = config
        self.registry = StopwatchRegistry(clock)
        self.broadcaster = EventBroadcaster()


ERROR_STATUS = {
    InvalidArgumentError: status.HTTP_400_BAD_REQUEST,
    DuplicateIdError: status.HTTP_409_CONFLICT,
    InvalidStateError: status.HTTP_409_CONFLICT,
    UnknownIdError: status.HTTP_404_NOT_FOUND,
    RegistryFullError: status.HTTP_429_TOO_MANY_REQUESTS,
}


def create_app(config: Optional[ApiConfig] = None, clock: Optional[Clock] = None) -> FastAPI:
    config = config or ApiConfig()
    app = FastAPI(title=config.title)
    state = AppState(config, clock)
    app.state.runtime = state

    def _make_handler(code: int):
        async def handler(request: Request, exc: Exception) -> JSONResponse:
            logger.warning("{method} {path} -> {code}: {exc}", method=request.method, path=request.url.path, code=code, exc=exc)
            return JSONResponse(status_code=code, content={"detail": str(exc)})

        return handler

    for exc_type, code in ERROR_STATUS.items():
        app.add_exception_handler(exc_type, _make_handler(code))

    @app.get("/health")
    async def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/stopwatches", response_model=StopwatchModel, status_code=status.HTTP_201_CREATED)
    async def create_stopwatch(payload: CreateStopwatch) -> StopwatchModel:
        limit = state.config.max_stopwatches
        if limit and len(state.registry) >= limit:
            raise RegistryFullError(f"stopwatch limit of {limit} reached")
        # ids travel as a single path segment in the per-stopwatch routes
        if "/" in payload.id:
            raise InvalidArgumentError(f"id {payload.id!r} must not contain '/'")
        stopwatch = state.registry.create(payload.id)
        logger.info("Created stopwatch {id}", id=stopwatch.id)
        await state.broadcaster.publish("created", stopwatch.id)
        return StopwatchModel.from_stopwatch(stopwatch)

    @app.get("/stopwatches", response_model=List[StopwatchModel])
    async def list_stopwatches() -> List[StopwatchModel]:
        return [StopwatchModel.from_stopwatch(sw) for sw in state.registry.list()]

    @app.get("/stopwatches/{stopwatch_id}", response_model=StopwatchModel)
    async def get_stopwatch(stopwatch_id: str) -> StopwatchModel:
        return StopwatchModel.from_stopwatch(state.registry.get(stopwatch_id))

    @app.post("/stopwatches/{stopwatch_id}/start", response_model=StopwatchModel)
    async def start_stopwatch(stopwatch_id: str) -> StopwatchModel:
        stopwatch = state.registry.get(stopwatch_id)
        stopwatch.start()
        logger.info("Started stopwatch {id}", id=stopwatch_id)
        await state.broadcaster.publish("started", stopwatch_id)
        return StopwatchModel.from_stopwatch(stopwatch)

    @app.post("/stopwatches/{stopwatch_id}/lap", response_model=LapModel)
    async def lap_stopwatch(stopwatch_id: str) -> LapModel:
        stopwatch = state.registry.get(stopwatch_id)
        lap_ms = stopwatch.lap()
        return await _lap_response("lap", stopwatch_id, lap_ms, stopwatch.snapshot())

    @app.post("/stopwatches/{stopwatch_id}/stop", response_model=LapModel)
    async def stop_stopwatch(stopwatch_id: str) -> LapModel:
        stopwatch = state.registry.get(stopwatch_id)
        lap_ms = stopwatch.stop()
        return await _lap_response("stopped", stopwatch_id, lap_ms, stopwatch.snapshot())

    @app.post("/stopwatches/{stopwatch_id}/reset", response_model=StopwatchModel)
    async def reset_stopwatch(stopwatch_id: str) -> StopwatchModel:
        stopwatch = state.registry.get(stopwatch_id)
        stopwatch.reset()
        logger.info("Reset stopwatch {id}", id=stopwatch_id)
        await state.broadcaster.publish("reset", stopwatch_id)
        return StopwatchModel.from_stopwatch(stopwatch)

    @app.get("/stopwatches/{stopwatch_id}/summary", response_model=SummaryModel)
    async def stopwatch_summary(stopwatch_id: str) -> SummaryModel:
        stopwatch = state.registry.get(stopwatch_id)
        return SummaryModel.from_summary(stopwatch_id, stopwatch.summary())

    @app.websocket("/ws/events")
    async def ws_events(socket: WebSocket):
        # subscribe before accepting so no event published after the handshake is missed
        queue = await state.broadcaster.register()
        await socket.accept()
        try:
            while True:
                payload = await queue.get()
                await socket.send_json(payload)
        except WebSocketDisconnect:
            logger.debug("Websocket subscriber disconnected")
        finally:
            await state.broadcaster.unregister(queue)

    async def _lap_response(event, stopwatch_id, lap_ms, snap) -> LapModel:
        # another thread may have reset in between, so the index is best effort
        lap_index = max(len(snap.laps) - 1, 0)
        logger.info("Stopwatch {id} {event} #{index}: {lap:.3f} ms", id=stopwatch_id, event=event, index=lap_index, lap=lap_ms)
        await state.broadcaster.publish(event, stopwatch_id, lap_ms=lap_ms, lap_index=lap_index)
        return LapModel(id=stopwatch_id, lap_ms=lap_ms, lap_index=lap_index, state=snap.state)

    return app


app = create_app()


__all__ = ["create_app", "app", "ApiConfig", "AppState"]

"""FastAPI application — config route, WebSocket endpoint, game loop."""

import asyncio
import json
import logging
import time

from contextlib import asynccontextmanager

from fastapi import FastAPI, WebSocket, WebSocketDisconnect

from .constants import FRAME_RATE, HOST, PORT
from .connection_manager import ConnectionManager, build_state_msg, config_to_dict
from .game import GameState
from .models import GameConfig, InputSnapshot

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    task = asyncio.create_task(game_loop())
    yield
    task.cancel()


app = FastAPI(lifespan=lifespan)
game = GameState(GameConfig.from_env())
manager = ConnectionManager()


@app.get("/")
async def serve_config():
    return config_to_dict(game.config)


@app.websocket("/ws")
async def websocket_endpoint(ws: WebSocket):
    await manager.connect(ws, game.config)
    logger.info("Client %s connected", id(ws))
    try:
        while True:
            raw = await ws.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue
            if msg.get("type") == "input":
                keys = msg.get("keys")
                if isinstance(keys, dict):
                    game.set_input(InputSnapshot.from_dict(keys))
            elif msg.get("type") == "restart":
                game.restart()
    except WebSocketDisconnect:
        logger.info("Client %s disconnected", id(ws))
    finally:
        manager.disconnect(ws)


async def game_loop():
    last = time.monotonic()
    while True:
        await asyncio.sleep(1 / FRAME_RATE)
        now = time.monotonic()
        try:
            game.update(now - last)
        except Exception:
            logger.exception("Game loop stopped")
            raise
        last = now
        if manager.connections:
            await manager.broadcast(build_state_msg(game))


def main():
    import uvicorn
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    logger.info("Snake server starting on http://localhost:%s", PORT)
    uvicorn.run(app, host=HOST, port=PORT)


if __name__ == "__main__":
    main()

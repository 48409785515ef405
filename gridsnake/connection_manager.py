"""WebSocket connection management and state serialization."""

import json
import logging

from fastapi import WebSocket

from .game import GameState
from .models import GameConfig

logger = logging.getLogger(__name__)


class ConnectionManager:
    def __init__(self):
        self.connections: set[WebSocket] = set()

    async def connect(self, ws: WebSocket, config: GameConfig):
        await ws.accept()
        await ws.send_text(build_welcome_msg(config))
        self.connections.add(ws)

    def disconnect(self, ws: WebSocket):
        self.connections.discard(ws)

    async def broadcast(self, message: str):
        disconnected = []
        for ws in list(self.connections):
            try:
                await ws.send_text(message)
            except Exception:
                logger.warning("Dropping connection after failed send", exc_info=True)
                disconnected.append(ws)
        for ws in disconnected:
            self.connections.discard(ws)


def config_to_dict(config: GameConfig) -> dict:
    return {
        "grid": [config.width, config.height],
        "move_period": config.move_period,
        "food_period": config.food_period,
    }


def build_welcome_msg(config: GameConfig) -> str:
    return json.dumps({"type": "welcome", **config_to_dict(config)})


def build_state_msg(game: GameState) -> str:
    return json.dumps({
        "type": "state",
        "tick": game.ticks,
        "direction": game.direction.value,
        "score": game.score,
        "best_score": game.best_score,
        "games_played": game.games_played,
        "entities": [item.to_dict() for item in game.render_items()],
    })

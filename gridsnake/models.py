"""Data models."""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Optional

from .constants import (
    GRID_W, GRID_H, MOVE_PERIOD, FOOD_PERIOD,
    SPAWN_HEAD, SPAWN_DIRECTION, DIRECTIONS, OPPOSITES, KEY_PRIORITY,
)


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> tuple[int, int]:
        return DIRECTIONS[self.value]

    def opposite(self) -> "Direction":
        return Direction(OPPOSITES[self.value])


class Position(NamedTuple):
    x: int
    y: int

    def step(self, direction: Direction) -> "Position":
        dx, dy = direction.delta
        return Position(self.x + dx, self.y + dy)

    def in_bounds(self, width: int, height: int) -> bool:
        return 0 <= self.x < width and 0 <= self.y < height


class EntityKind(Enum):
    HEAD = "head"
    BODY = "body"
    FOOD = "food"


@dataclass(frozen=True)
class RenderItem:
    kind: EntityKind
    position: Position
    size: float

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "x": self.position.x, "y": self.position.y, "size": self.size}


@dataclass(frozen=True)
class InputSnapshot:
    """Directional keys held during one frame."""

    up: bool = False
    left: bool = False
    right: bool = False
    down: bool = False

    def direction(self) -> Optional[Direction]:
        for name in KEY_PRIORITY:
            if getattr(self, name):
                return Direction(name)
        return None

    @classmethod
    def from_dict(cls, keys: dict) -> "InputSnapshot":
        return cls(**{name: bool(keys.get(name, False)) for name in DIRECTIONS})


@dataclass(frozen=True)
class GameConfig:
    width: int = GRID_W
    height: int = GRID_H
    move_period: float = MOVE_PERIOD
    food_period: float = FOOD_PERIOD
    spawn: Position = field(default_factory=lambda: Position(*SPAWN_HEAD))
    spawn_direction: Direction = Direction(SPAWN_DIRECTION)

    def __post_init__(self):
        object.__setattr__(self, "spawn", Position(*self.spawn))
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"grid must be positive, got {self.width}x{self.height}")
        if self.move_period <= 0 or self.food_period <= 0:
            raise ValueError("timer periods must be positive")
        tail = self.spawn.step(self.spawn_direction.opposite())
        if not (self.spawn.in_bounds(self.width, self.height) and tail.in_bounds(self.width, self.height)):
            raise ValueError(f"spawn {tuple(self.spawn)} does not fit a {self.width}x{self.height} grid")

    @classmethod
    def from_env(cls) -> "GameConfig":
        return cls(
            width=int(os.environ.get("SNAKE_GRID_W", GRID_W)),
            height=int(os.environ.get("SNAKE_GRID_H", GRID_H)),
            move_period=float(os.environ.get("SNAKE_MOVE_PERIOD", MOVE_PERIOD)),
            food_period=float(os.environ.get("SNAKE_FOOD_PERIOD", FOOD_PERIOD)),
        )

    def spawn_segments(self) -> list[Position]:
        return [self.spawn, self.spawn.step(self.spawn_direction.opposite())]

"""Core game state and logic."""

import logging
import math
import random
from dataclasses import dataclass
from typing import Optional

from .clock import FixedTimer
from .constants import HEAD_SIZE, BODY_SIZE, FOOD_SIZE
from .models import EntityKind, GameConfig, InputSnapshot, Position, RenderItem

logger = logging.getLogger(__name__)


class InvariantViolation(RuntimeError):
    """Raised when the simulation is driven out of order."""


@dataclass
class TickOutcome:
    game_over: bool = False
    reason: Optional[str] = None
    eaten: int = 0
    grew: bool = False


class GameState:
    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or GameConfig()
        self.rng = rng or random.Random()
        self.move_timer = FixedTimer(self.config.move_period)
        self.food_timer = FixedTimer(self.config.food_period)
        self.segments: list[Position] = []
        self.food: list[Position] = []
        self.direction = self.config.spawn_direction
        self.next_direction = self.direction
        self.held_keys = InputSnapshot()
        self.last_tail_position: Optional[Position] = None
        self.pending_growth = 0
        self.game_over_signals = 0
        self.score = 0
        self.best_score = 0
        self.games_played = 0
        self.ticks = 0
        self._restore_spawn()

    def _restore_spawn(self):
        self.segments = self.config.spawn_segments()
        self.direction = self.config.spawn_direction
        self.next_direction = self.direction
        self.held_keys = InputSnapshot()
        self.last_tail_position = None
        self.pending_growth = 0
        self.game_over_signals = 0
        self.score = 0

    @property
    def head(self) -> Position:
        if not self.segments:
            raise InvariantViolation("snake has no segments")
        return self.segments[0]

    # ── Input ──────────────────────────────────────────────────────

    def set_input(self, keys: InputSnapshot):
        """Buffer the keys held this frame; the last accepted heading wins."""
        self.held_keys = keys
        requested = keys.direction()
        if requested is not None and requested != self.direction.opposite():
            self.next_direction = requested

    def apply_input(self):
        self.direction = self.next_direction

    # ── Per-tick steps, in the order tick() runs them ──────────────

    def move(self) -> list[Position]:
        """Shift the snake one cell and return the body as it was before the move."""
        if not self.segments:
            raise InvariantViolation("cannot move a snake with no segments")
        pre_move = list(self.segments)
        self.segments = [pre_move[0].step(self.direction)] + pre_move[:-1]
        self.last_tail_position = pre_move[-1]
        return pre_move[1:]

    def check_collision(self, pre_move_body: list[Position]) -> Optional[str]:
        # Compared against the body before this tick's shift, so the cell the
        # tail is leaving still counts as occupied.
        head = self.head
        if not head.in_bounds(self.config.width, self.config.height):
            reason = "wall"
        elif head in pre_move_body:
            reason = "self"
        else:
            return None
        self.game_over_signals += 1
        return reason

    def check_eating(self) -> int:
        head = self.head
        eaten = sum(1 for f in self.food if f == head)
        if eaten:
            self.food = [f for f in self.food if f != head]
            self.pending_growth += eaten
            self.score += eaten
        return eaten

    def apply_growth(self) -> bool:
        """Append at most one segment, dropping any extra growth signals."""
        if not self.pending_growth:
            return False
        self.pending_growth = 0
        if not self.segments:
            raise InvariantViolation("cannot grow a snake with no segments")
        if self.last_tail_position is None:
            raise InvariantViolation("growth signalled before any movement")
        self.segments.append(self.last_tail_position)
        return True

    def reset(self) -> bool:
        """Restart the game if a game over was signalled this tick."""
        if not self.game_over_signals:
            return False
        self.best_score = max(self.best_score, self.score)
        self.games_played += 1
        self.food.clear()
        self._restore_spawn()
        return True

    def restart(self):
        self.game_over_signals += 1
        self.reset()

    def tick(self) -> TickOutcome:
        outcome = TickOutcome()
        self.ticks += 1
        self.apply_input()
        pre_move_body = self.move()
        outcome.reason = self.check_collision(pre_move_body)
        outcome.eaten = self.check_eating()
        if self.game_over_signals:
            logger.info("Game over (%s) after scoring %d", outcome.reason, self.score)
            outcome.game_over = self.reset()
        else:
            outcome.grew = self.apply_growth()
        return outcome

    # ── Food ───────────────────────────────────────────────────────

    def spawn_food(self) -> Position:
        # No overlap check against the snake or other food.
        pos = Position(
            math.floor(self.rng.random() * self.config.width),
            math.floor(self.rng.random() * self.config.height),
        )
        self.food.append(pos)
        logger.debug("Spawned food at %s", tuple(pos))
        return pos

    # ── Frame driver ───────────────────────────────────────────────

    def update(self, dt: float, keys: Optional[InputSnapshot] = None) -> list[TickOutcome]:
        """Advance both timers by ``dt`` seconds.

        Input is sampled first, then every due movement tick runs, then every
        due food spawn.
        """
        if dt < 0:
            raise ValueError(f"dt must not be negative, got {dt}")
        self.set_input(self.held_keys if keys is None else keys)
        outcomes = [self.tick() for _ in range(self.move_timer.tick(dt))]
        for _ in range(self.food_timer.tick(dt)):
            self.spawn_food()
        return outcomes

    # ── Read model ─────────────────────────────────────────────────

    def render_items(self) -> list[RenderItem]:
        items = [
            RenderItem(EntityKind.HEAD if i == 0 else EntityKind.BODY, pos, HEAD_SIZE if i == 0 else BODY_SIZE)
            for i, pos in enumerate(self.segments)
        ]
        items.extend(RenderItem(EntityKind.FOOD, pos, FOOD_SIZE) for pos in self.food)
        return items

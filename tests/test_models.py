import dataclasses

import pytest

from gridsnake.clock import FixedTimer
from gridsnake.models import Direction, GameConfig, InputSnapshot, Position


def test_opposites():
    assert Direction.UP.opposite() == Direction.DOWN
    assert Direction.LEFT.opposite() == Direction.RIGHT
    for d in Direction:
        assert d.opposite().opposite() == d


def test_position_step_and_bounds():
    assert Position(3, 3).step(Direction.UP) == (3, 4)
    assert Position(0, 0).step(Direction.LEFT) == (-1, 0)
    assert Position(9, 9).in_bounds(10, 10)
    assert not Position(10, 0).in_bounds(10, 10)
    assert not Position(0, -1).in_bounds(10, 10)


def test_input_snapshot_from_dict():
    keys = InputSnapshot.from_dict({"down": 1, "jump": True})
    assert keys == InputSnapshot(down=True)
    assert keys.direction() == Direction.DOWN
    assert InputSnapshot.from_dict({}).direction() is None


@pytest.mark.parametrize("kwargs", [
    {"width": 0},
    {"move_period": 0},
    {"food_period": -1.0},
    {"spawn": (3, 0)},
    {"spawn": (12, 3)},
])
def test_invalid_config(kwargs):
    with pytest.raises(ValueError):
        GameConfig(**kwargs)


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("SNAKE_GRID_W", "20")
    monkeypatch.setenv("SNAKE_GRID_H", "20")
    monkeypatch.setenv("SNAKE_MOVE_PERIOD", "0.25")
    config = GameConfig.from_env()
    assert (config.width, config.height) == (20, 20)
    assert config.move_period == 0.25
    assert config.food_period == 1.0


def test_fixed_timer_accumulates():
    timer = FixedTimer(0.25)
    assert timer.tick(0.125) == 0
    assert timer.tick(0.125) == 1
    assert timer.tick(0.75) == 3
    assert timer.tick(0.0) == 0


def test_fixed_timer_rejects_bad_input():
    with pytest.raises(ValueError):
        FixedTimer(0)
    with pytest.raises(ValueError):
        FixedTimer(1.0).tick(-1)


def test_config_is_frozen():
    config = GameConfig(spawn=[4, 4])
    assert config.spawn == Position(4, 4)
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.width = 20

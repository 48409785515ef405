"""Game constants."""

GRID_W, GRID_H = 10, 10
MOVE_PERIOD = 0.2
FOOD_PERIOD = 1.0
FRAME_RATE = 60

SPAWN_HEAD = (3, 3)
SPAWN_DIRECTION = "up"

HEAD_SIZE = 0.8
BODY_SIZE = 0.65
FOOD_SIZE = 0.8

HOST, PORT = "0.0.0.0", 8765

# y grows upwards
DIRECTIONS = {
    "up": (0, 1),
    "down": (0, -1),
    "left": (-1, 0),
    "right": (1, 0),
}
OPPOSITES = {"up": "down", "down": "up", "left": "right", "right": "left"}

# Checked in this order when several keys are held
KEY_PRIORITY = ("left", "down", "up", "right")

"""Fixed-step timers driving the simulation."""


class FixedTimer:
    """Accumulates frame time and reports how many whole periods elapsed."""

    def __init__(self, period: float):
        if period <= 0:
            raise ValueError(f"period must be positive, got {period}")
        self.period = period
        self.accumulated = 0.0

    def tick(self, dt: float) -> int:
        if dt < 0:
            raise ValueError(f"dt must not be negative, got {dt}")
        self.accumulated += dt
        steps = int(self.accumulated // self.period)
        self.accumulated -= steps * self.period
        return steps

    def reset(self):
        self.accumulated = 0.0

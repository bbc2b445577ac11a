"""Time system for the simulation: real seconds to game hours and days."""

import math

from greenhouse_sim.core.config import HOURS_PER_DAY, SECONDS_PER_GAME_HOUR, STARTING_DAY, STARTING_HOUR


class TimeClock:
    """Converts real elapsed time into discrete game hours and days."""

    def __init__(self, seconds_per_game_hour: float = SECONDS_PER_GAME_HOUR) -> None:
        if seconds_per_game_hour <= 0:
            raise ValueError("seconds_per_game_hour must be positive")
        self.seconds_per_game_hour = seconds_per_game_hour
        self.elapsed: float = 0.0
        self.hour: int = STARTING_HOUR
        self.day: int = STARTING_DAY
        self.days_crossed: int = 0  # day boundaries crossed by the last advance()

    def advance(self, delta_seconds: float) -> bool:
        """Advance by real seconds. Returns True if a day boundary was crossed.

        Every hour threshold inside the delta is consumed by subtraction so
        large or uneven frame deltas do not drift.
        """
        if not math.isfinite(delta_seconds):
            raise ValueError(f"delta_seconds must be finite, got {delta_seconds}")
        self.days_crossed = 0
        self.elapsed += max(0.0, delta_seconds)

        while self.elapsed >= self.seconds_per_game_hour:
            self.elapsed -= self.seconds_per_game_hour
            self.hour += 1
            if self.hour >= HOURS_PER_DAY:
                self.hour = 0
                self.day += 1
                self.days_crossed += 1

        return self.days_crossed > 0

    @property
    def day_fraction(self) -> float:
        """Progress through the current day in [0, 1)."""
        hours = self.hour + self.elapsed / self.seconds_per_game_hour
        return hours / HOURS_PER_DAY

    def seconds_until_day_end(self) -> float:
        hours_left = HOURS_PER_DAY - self.hour
        return hours_left * self.seconds_per_game_hour - self.elapsed

from __future__ import annotations

import math
from typing import Callable, Optional


class QuestionTimer:
    """Per-question countdown driven by explicit ticks from the host loop.

    The timer never schedules anything itself; the presentation layer calls
    `tick(dt)` once per frame.
    """

    def __init__(self, seconds: float, on_time_up: Optional[Callable[[], None]] = None) -> None:
        self.seconds = max(1.0, float(seconds))
        self.on_time_up = on_time_up
        self.remaining = self.seconds
        self.running = False

    def reset(self) -> None:
        self.remaining = self.seconds
        self.running = True

    def stop(self) -> None:
        self.running = False

    def tick(self, dt: float) -> bool:
        """Advance by dt seconds. Returns True on the tick the timer expires."""
        if not self.running:
            return False
        self.remaining -= max(0.0, dt)
        if self.remaining > 0.0:
            return False
        self.remaining = 0.0
        self.running = False
        if self.on_time_up is not None:
            self.on_time_up()
        return True

    @property
    def fraction(self) -> float:
        return max(0.0, min(1.0, self.remaining / self.seconds))

    @property
    def display_seconds(self) -> int:
        return max(0, math.ceil(self.remaining))

"""Frame pacing."""

from __future__ import annotations

import time
from collections.abc import Callable


class Sleeper:
    """Sleeps to keep a loop near a target time per iteration (in seconds)."""

    def __init__(
        self,
        target_delta_time: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.target_delta_time = target_delta_time
        self.last_instant: float | None = None
        self._clock = clock
        self._sleep = sleep

    def sleep(self) -> bool:
        """Sleep out the rest of the target time; return whether any sleeping happened."""
        now = self._clock()
        self.last_instant = now
        if not self.in_time():
            return False
        remaining = self.target_delta_time - (now - self.last_instant)
        if remaining <= 0:
            return False
        self._sleep(remaining)
        return True

    def in_time(self) -> bool:
        """Whether less than the target time passed since the last sleep; False before any."""
        if self.last_instant is None:
            return False
        return self.target_delta_time > self._clock() - self.last_instant
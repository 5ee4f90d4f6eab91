"""Wall-clock tick source for a ProgressSimulator."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from .errors import ConfigurationError, PreconditionError
from .simulator import ProgressSimulator

logger = logging.getLogger(__name__)

Clock = Callable[[], float]

# Float slack so 0.3s on a 100ms tick counts as 3 ticks, not 2
_EPSILON_MS = 1e-6


class TickDriver:
    """Owns the timer side of a simulation.

    Each `pump()` issues every tick that has come due on the injected clock since
    the driver started, capped at `max_catch_up` per call so a throttled browser tab
    does not replay a long gap in a single rerun. `stop()` is the only teardown.
    """

    def __init__(self, simulator: ProgressSimulator, clock: Clock = time.monotonic, max_catch_up: int = 50):
        if max_catch_up <= 0:
            raise ConfigurationError("max_catch_up must be positive")
        self.simulator = simulator
        self.max_catch_up = max_catch_up
        self._clock = clock
        self._origin: Optional[float] = None
        self._issued = 0
        self._stopped = False

    @property
    def tick_seconds(self) -> float:
        return self.simulator.tick_ms / 1000

    @property
    def started(self) -> bool:
        return self._origin is not None

    @property
    def stopped(self) -> bool:
        return self._stopped

    def start(self) -> None:
        if self._origin is not None:
            raise PreconditionError("Driver already started")
        self.simulator.start()
        self._origin = self._clock()

    def due_ticks(self) -> int:
        """Ticks owed to the simulator right now."""
        if self._origin is None or self._stopped:
            return 0
        elapsed_ms = (self._clock() - self._origin) * 1000
        owed = int((elapsed_ms + _EPSILON_MS) // self.simulator.tick_ms) - self._issued
        return max(owed, 0)

    def pump(self) -> int:
        """Deliver due ticks; returns how many the simulator accepted."""
        due = min(self.due_ticks(), self.max_catch_up)
        if due == 0:
            return 0
        applied = self.simulator.advance(due)
        self._issued += due
        if self.simulator.completed:
            logger.debug("Simulation finished; driver idle after %d ticks", self._issued)
        return applied

    def stop(self) -> None:
        if not self._stopped:
            self._stopped = True
            self.simulator.dispose()

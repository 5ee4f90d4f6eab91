"""
Time-driven progress simulation for the analysis tracker.

A ProgressSimulator turns a virtual clock into the tracker's visible state:
the active phase, the overall percentage, and an append-only activity log.
Nothing here touches timers or Streamlit; the owner calls `tick()` once per
tick interval (see market.driver.TickDriver) and renders `snapshot()`.

State machine: idle -> running -> completed. Ticks delivered while idle,
after completion or after `dispose()` are ignored.
"""

from __future__ import annotations

import itertools
import logging
import random
from bisect import bisect_right
from typing import Any, Callable, Iterable, Optional, Sequence

from pydantic import ValidationError

from .errors import ConfigurationError, PreconditionError
from .schemas import ActivityEntry, Phase, SimulationState, SimulationStatus

logger = logging.getLogger(__name__)

MessageSelector = Callable[[Sequence[str]], str]
CompletionCallback = Callable[[SimulationState], None]

DEFAULT_TICK_MS = 100
DEFAULT_REPORT_INTERVAL_MS = 2000
COMPLETION_MESSAGE = "✓ Market analysis complete! Generating insights..."


def random_selector(seed: Optional[int] = None) -> MessageSelector:
    """Pick pool entries at random; pass a seed for a reproducible feed."""
    rng = random.Random(seed)

    def _select(pool: Sequence[str]) -> str:
        return rng.choice(pool)

    return _select


def cycle_selector() -> MessageSelector:
    """Walk the pool in order, wrapping around."""
    counter = itertools.count()

    def _select(pool: Sequence[str]) -> str:
        return pool[next(counter) % len(pool)]

    return _select


def fixed_selector(index: int = 0) -> MessageSelector:
    """Always pick the same pool entry."""

    def _select(pool: Sequence[str]) -> str:
        return pool[index % len(pool)]

    return _select


def _coerce_phases(phases: Iterable[Any]) -> tuple[Phase, ...]:
    try:
        coerced = tuple(p if isinstance(p, Phase) else Phase.model_validate(p) for p in phases)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid phase definition: {e}") from e
    if not coerced:
        raise ConfigurationError("A simulation needs at least one phase")
    return coerced


def _positive_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
    return value


class ProgressSimulator:
    """Deterministic mapping from elapsed virtual time to progress tracker state."""

    def __init__(
        self,
        phases: Iterable[Phase | dict[str, Any]],
        tick_ms: int = DEFAULT_TICK_MS,
        report_interval_ms: int = DEFAULT_REPORT_INTERVAL_MS,
        messages: Iterable[str] = (),
        selector: Optional[MessageSelector] = None,
        on_complete: Optional[CompletionCallback] = None,
    ):
        self.phases = _coerce_phases(phases)
        self.tick_ms = _positive_int("tick_ms", tick_ms)
        self.report_interval_ms = _positive_int("report_interval_ms", report_interval_ms)
        if isinstance(messages, str):
            raise ConfigurationError("messages must be a sequence of strings, not a single string")
        self.messages: tuple[str, ...] = tuple(str(m) for m in messages)
        self._select = selector or random_selector()
        self._on_complete = on_complete

        # Cumulative phase end times; phase i is active for ends[i-1] <= t < ends[i]
        self._phase_ends = tuple(itertools.accumulate(p.duration_ms for p in self.phases))
        self.total_duration_ms = self._phase_ends[-1]
        if self.total_duration_ms <= 0:
            raise ConfigurationError("Total simulation duration must be positive")

        self._status: SimulationStatus = "idle"
        self._elapsed_ms = 0
        self._phase_index = -1
        self._log: list[ActivityEntry] = []
        self._disposed = False

    # ------------------------------------------------------------------ state

    @property
    def status(self) -> SimulationStatus:
        return self._status

    @property
    def elapsed_ms(self) -> int:
        return self._elapsed_ms

    @property
    def completed(self) -> bool:
        return self._status == "completed"

    @property
    def is_running(self) -> bool:
        return self._status == "running" and not self._disposed

    @property
    def disposed(self) -> bool:
        return self._disposed

    def phase_index_at(self, elapsed_ms: int) -> int:
        """Index of the phase active at `elapsed_ms`; len(phases) once the total is reached."""
        return min(bisect_right(self._phase_ends, max(elapsed_ms, 0)), len(self.phases))

    def progress_at(self, elapsed_ms: int) -> float:
        return min(max(elapsed_ms, 0) / self.total_duration_ms * 100, 100.0)

    # ------------------------------------------------------------- operations

    def start(self) -> None:
        """Move from idle to running. The first tick logs the start of phase 0."""
        if self._disposed:
            raise PreconditionError("Simulator has been disposed")
        if self._status != "idle":
            raise PreconditionError(f"Simulator already {self._status}; create a new one to restart")
        self._status = "running"
        self._elapsed_ms = 0
        self._phase_index = -1
        self._log.clear()
        logger.info(
            "Simulation started: %d phases, %d ms total, tick %d ms",
            len(self.phases),
            self.total_duration_ms,
            self.tick_ms,
        )

    def tick(self) -> bool:
        """Advance the virtual clock by one tick. Returns False when the tick was ignored."""
        if not self.is_running:
            logger.debug("Ignoring tick while %s (disposed=%s)", self._status, self._disposed)
            return False

        self._elapsed_ms += self.tick_ms
        new_index = self.phase_index_at(self._elapsed_ms)
        if new_index != self._phase_index:
            self._log_transitions(self._phase_index, new_index)
            self._phase_index = new_index

        if self._elapsed_ms >= self.total_duration_ms:
            self._complete()
        elif self.messages and self._elapsed_ms % self.report_interval_ms == 0:
            self._append(f"• {self._select(self.messages)}")
        return True

    def advance(self, ticks: int) -> int:
        """Tick up to `ticks` times, stopping early once ticks are ignored. Returns ticks applied."""
        applied = 0
        for _ in range(max(ticks, 0)):
            if not self.tick():
                break
            applied += 1
        return applied

    def run_to_completion(self) -> int:
        applied = 0
        while self.tick():
            applied += 1
        return applied

    def dispose(self) -> None:
        """Detach from the owner; every later tick is ignored."""
        if not self._disposed:
            logger.debug("Simulator disposed at %d ms (%s)", self._elapsed_ms, self._status)
        self._disposed = True

    def snapshot(self) -> SimulationState:
        if self.completed:
            index = len(self.phases)
        else:
            index = min(max(self._phase_index, 0), len(self.phases) - 1)
        return SimulationState(
            status=self._status,
            elapsed_ms=self._elapsed_ms,
            current_phase_index=index,
            overall_progress_percent=self.progress_at(self._elapsed_ms),
            completed=self.completed,
            activity_log=tuple(self._log),
            phase_count=len(self.phases),
            total_duration_ms=self.total_duration_ms,
        )

    # -------------------------------------------------------------- internals

    def _append(self, message: str) -> None:
        self._log.append(ActivityEntry(elapsed_ms=self._elapsed_ms, message=message))

    def _starting_line(self, index: int) -> str:
        return f"→ Starting {self.phases[index].title.lower()}..."

    def _log_transitions(self, previous: int, new: int) -> None:
        # Phases skipped within one tick still get their completed/starting pair, in order
        first = previous
        if previous < 0:
            self._append(self._starting_line(0))
            first = 0
        for i in range(first, new):
            self._append(f"✓ {self.phases[i].title} completed")
            if i + 1 < len(self.phases):
                self._append(self._starting_line(i + 1))
        logger.debug("Phase %d -> %d at %d ms", previous, new, self._elapsed_ms)

    def _complete(self) -> None:
        self._append(COMPLETION_MESSAGE)
        self._status = "completed"
        logger.info("Simulation completed after %d ms", self._elapsed_ms)
        if self._on_complete is not None:
            self._on_complete(self.snapshot())


__all__ = [
    "MessageSelector",
    "CompletionCallback",
    "DEFAULT_TICK_MS",
    "DEFAULT_REPORT_INTERVAL_MS",
    "COMPLETION_MESSAGE",
    "ProgressSimulator",
    "random_selector",
    "cycle_selector",
    "fixed_selector",
]

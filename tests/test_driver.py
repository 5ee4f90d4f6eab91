"""
Tests for the wall-clock tick driver.
"""

import pytest

from market import ConfigurationError, PreconditionError, ProgressSimulator, TickDriver


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def simulator(analysis_phases):
    return ProgressSimulator(analysis_phases)


def test_nothing_due_before_start(simulator, clock):
    driver = TickDriver(simulator, clock=clock)
    clock.now += 5
    assert driver.due_ticks() == 0
    assert driver.pump() == 0
    assert simulator.status == "idle"


def test_pump_issues_ticks_owed_by_the_clock(simulator, clock):
    driver = TickDriver(simulator, clock=clock)
    driver.start()
    assert simulator.status == "running"

    clock.now += 0.3
    assert driver.pump() == 3
    assert simulator.elapsed_ms == 300

    assert driver.pump() == 0

    clock.now += 0.25
    assert driver.pump() == 2
    assert simulator.elapsed_ms == 500


def test_catch_up_is_capped_per_pump(simulator, clock):
    driver = TickDriver(simulator, clock=clock, max_catch_up=10)
    driver.start()

    clock.now += 3.0
    assert driver.pump() == 10
    assert driver.due_ticks() == 20
    assert driver.pump() == 10
    assert driver.pump() == 10
    assert driver.pump() == 0
    assert simulator.elapsed_ms == 3000


def test_runs_until_completion(simulator, clock):
    driver = TickDriver(simulator, clock=clock)
    driver.start()
    clock.now += 60

    applied = 0
    for _ in range(10):
        applied += driver.pump()
    assert applied == 180
    assert simulator.completed is True


def test_stop_disposes_simulator(simulator, clock):
    driver = TickDriver(simulator, clock=clock)
    driver.start()
    clock.now += 1
    driver.pump()

    driver.stop()
    clock.now += 1
    assert driver.stopped is True
    assert simulator.disposed is True
    assert driver.pump() == 0
    assert simulator.elapsed_ms == 1000


def test_start_twice(simulator, clock):
    driver = TickDriver(simulator, clock=clock)
    driver.start()
    with pytest.raises(PreconditionError):
        driver.start()


def test_invalid_catch_up(simulator):
    with pytest.raises(ConfigurationError):
        TickDriver(simulator, max_catch_up=0)


def test_tick_seconds(simulator):
    assert TickDriver(simulator).tick_seconds == pytest.approx(0.1)

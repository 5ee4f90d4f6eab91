"""
Tests for application logging setup.
"""

import logging

import pytest

import config
from utils import logging_config


@pytest.fixture(autouse=True)
def _reset_loggers():
    yield
    logging_config.disable_logging()
    for name in logging_config.LOGGER_NAMES:
        logging.getLogger(name).setLevel(logging.NOTSET)


def _console_handlers(name):
    return [h for h in logging.getLogger(name).handlers if h.get_name() == "xenith-console"]


def test_enable_console_logging_is_idempotent():
    logging_config.enable_console_logging("DEBUG")
    logging_config.enable_console_logging("INFO")

    for name in logging_config.LOGGER_NAMES:
        handlers = _console_handlers(name)
        assert len(handlers) == 1
        assert handlers[0].level == logging.INFO
        assert logging.getLogger(name).level == logging.INFO


def test_configure_from_env(monkeypatch):
    monkeypatch.setenv("XN_LOG_LEVEL", "error")
    config.refresh_cache()
    logging_config.configure_from_env()
    assert logging.getLogger("market").level == logging.ERROR


def test_set_level_and_disable():
    logging_config.enable_console_logging()
    logging_config.set_level("WARNING")
    assert logging.getLogger("utils").level == logging.WARNING

    logging_config.disable_logging()
    assert _console_handlers("market") == []


def test_market_logger_is_silent_by_default():
    import market  # noqa: F401

    assert any(isinstance(h, logging.NullHandler) for h in logging.getLogger("market").handlers)


def test_simulator_logs_lifecycle(caplog, analysis_phases):
    from market import ProgressSimulator

    caplog.set_level(logging.INFO, logger="market")
    sim = ProgressSimulator(analysis_phases)
    sim.start()
    sim.run_to_completion()
    messages = [r.getMessage() for r in caplog.records if r.name == "market.simulator"]
    assert any("Simulation started" in m for m in messages)
    assert any("Simulation completed after 18000 ms" in m for m in messages)

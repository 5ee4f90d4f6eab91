"""
Tests for session-scoped state helpers.
"""

import pytest

from market import DEFAULT_CATEGORIES, Selection, TickDriver
from utils import app_state

SELECTION = Selection(category_id="electronics", subcategory="Mobile Phones")


@pytest.fixture(autouse=True)
def _catalog(monkeypatch):
    monkeypatch.setattr(app_state, "get_catalog", lambda: DEFAULT_CATEGORIES)


def test_selector_is_created_once(session_state):
    first = app_state.get_selector()
    assert app_state.get_selector() is first
    assert session_state[app_state.SELECTOR_KEY] is first


def test_selection_round_trip(session_state):
    assert app_state.get_selection() is None
    app_state.set_selection(SELECTION)
    assert session_state[app_state.SELECTION_KEY] == {
        "category_id": "electronics",
        "subcategory": "Mobile Phones",
    }
    assert app_state.get_selection() == SELECTION
    assert app_state.get_analysis_id().startswith("MKT-")


def test_start_tracking_reuses_running_driver(session_state):
    driver = app_state.start_tracking(SELECTION)
    assert isinstance(driver, TickDriver)
    assert driver.simulator.status == "running"
    assert app_state.start_tracking(SELECTION) is driver
    assert app_state.get_driver() is driver


def test_fast_simulation_flag(session_state, monkeypatch):
    monkeypatch.setenv("XN_ENABLE_FAST_SIMULATION", "1")
    import config

    config.refresh_cache()
    driver = app_state.start_tracking(SELECTION)
    assert driver.simulator.total_duration_ms == 1800


def test_new_selection_stops_previous_tracker(session_state):
    app_state.set_selection(SELECTION)
    driver = app_state.start_tracking(SELECTION)

    app_state.set_selection(Selection(category_id="gaming", subcategory="PC Gaming"))
    assert driver.stopped is True
    assert driver.simulator.disposed is True
    assert app_state.get_driver() is None


def test_reset_analysis(session_state):
    selector = app_state.get_selector()
    selector.select_category("electronics")
    selector.select_subcategory("Mobile Phones")
    app_state.set_selection(selector.start())
    app_state.start_tracking(SELECTION)

    app_state.reset_analysis()
    assert app_state.get_selection() is None
    assert app_state.get_driver() is None
    assert app_state.get_analysis_id() is None
    assert selector.is_ready_to_start() is False

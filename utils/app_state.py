"""Session-scoped state shared by the onboarding and progress pages."""

from __future__ import annotations

import logging
from typing import Optional

import streamlit as st

import config
from market import CategorySelector, Selection, TickDriver
from market.plan import analysis_id_for, build_simulator, selection_label
from market.schemas import Category
from market.taxonomy import DEFAULT_CATEGORIES, load_taxonomy
from utils.logging_config import configure_from_env

logger = logging.getLogger(__name__)

SELECTOR_KEY = "category_selector"
SELECTION_KEY = "analysis_selection"
DRIVER_KEY = "progress_driver"
ANALYSIS_ID_KEY = "analysis_id"

# Phase durations are divided by ten when fast simulation is on
FAST_SIMULATION_SCALE = 0.1


@st.cache_data
def _load_catalog(path: str | None) -> tuple[Category, ...]:
    if path:
        return load_taxonomy(path)
    return DEFAULT_CATEGORIES


def get_catalog() -> tuple[Category, ...]:
    """Category table for this process: XN_TAXONOMY_PATH if set, otherwise the built-in table."""
    return _load_catalog(config.get_taxonomy_path())


def init_session_state() -> None:
    """Configure logging and make sure the picker exists for this session."""
    configure_from_env()
    if SELECTOR_KEY not in st.session_state:
        st.session_state[SELECTOR_KEY] = CategorySelector(get_catalog())


def get_selector() -> CategorySelector:
    selector = st.session_state.get(SELECTOR_KEY)
    if not isinstance(selector, CategorySelector):
        selector = CategorySelector(get_catalog())
        st.session_state[SELECTOR_KEY] = selector
    return selector


def get_selection() -> Optional[Selection]:
    """Selection handed over by the onboarding page, if any."""
    data = st.session_state.get(SELECTION_KEY)
    if isinstance(data, dict):
        return Selection.model_validate(data)
    return None


def set_selection(selection: Selection) -> None:
    """Store a new selection and drop any tracker started for a previous one."""
    stop_tracking()
    st.session_state[SELECTION_KEY] = selection.model_dump()
    st.session_state[ANALYSIS_ID_KEY] = analysis_id_for(selection)


def get_analysis_id() -> Optional[str]:
    return st.session_state.get(ANALYSIS_ID_KEY)


def get_driver() -> Optional[TickDriver]:
    driver = st.session_state.get(DRIVER_KEY)
    return driver if isinstance(driver, TickDriver) else None


def start_tracking(selection: Selection) -> TickDriver:
    """Return the running driver for this session, creating and starting one if needed."""
    driver = get_driver()
    if driver is not None and not driver.stopped:
        return driver

    simulator = build_simulator(
        selection,
        get_catalog(),
        tick_ms=config.get_tick_ms(),
        report_interval_ms=config.get_report_interval_ms(),
        seed=config.get_message_seed(),
        duration_scale=FAST_SIMULATION_SCALE if config.is_enabled("XN_ENABLE_FAST_SIMULATION") else 1.0,
    )
    driver = TickDriver(simulator)
    driver.start()
    st.session_state[DRIVER_KEY] = driver
    logger.info("Tracking started for %s", selection.label())
    return driver


def stop_tracking() -> None:
    """Stop the session's timer; the simulator ignores any tick that arrives later."""
    driver = st.session_state.pop(DRIVER_KEY, None)
    if isinstance(driver, TickDriver):
        driver.stop()


def reset_analysis() -> None:
    """Forget the selection and tracker so the user can start over."""
    stop_tracking()
    for key in (SELECTION_KEY, ANALYSIS_ID_KEY):
        st.session_state.pop(key, None)
    get_selector().reset()


def sidebar_controls() -> None:
    """Render the shared sidebar: current selection and resolved settings."""
    selection = get_selection()
    st.sidebar.subheader("Current analysis")
    if selection is None:
        st.sidebar.caption("No category selected yet.")
    else:
        st.sidebar.markdown(f"**{selection_label(selection, get_catalog())}**")
        st.sidebar.caption(f"Analysis ID: {get_analysis_id()}")

    with st.sidebar.expander("Settings", expanded=False):
        st.json(config.settings_summary())

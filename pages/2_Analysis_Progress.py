import os, sys
import streamlit as st
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from config import get_activity_limit  # type: ignore
from market.plan import selection_label  # type: ignore
from utils.app_state import (  # type: ignore
    init_session_state,
    sidebar_controls,
    get_analysis_id,
    get_catalog,
    get_driver,
    get_selection,
    reset_analysis,
    start_tracking,
)
from utils.navigation import ONBOARDING_PAGE, continue_to, open_results  # type: ignore
from utils.progress_view import render_activity_feed, render_progress_tracker, remaining_badge  # type: ignore

# Slowest UI refresh; ticks still follow the wall clock through TickDriver catch-up
MIN_REFRESH_SECONDS = 0.25

st.set_page_config(page_title="Xenith — Analysis Progress", page_icon=":hourglass_flowing_sand:")

init_session_state()
sidebar_controls()

selection = get_selection()
if selection is None:
    st.title("Market Analysis")
    st.info("Choose a category and subcategory to start an analysis.")
    if st.button("Choose a category →", type="primary"):
        continue_to(ONBOARDING_PAGE)
    st.stop()

driver = start_tracking(selection)
phases = driver.simulator.phases

st.title("Market Analysis in Progress")
st.caption(selection_label(selection, get_catalog()))


@st.fragment(run_every=max(driver.tick_seconds, MIN_REFRESH_SECONDS))
def live_progress() -> None:
    current = get_driver()
    if current is None:
        return
    current.pump()
    state = current.simulator.snapshot()

    render_progress_tracker(state, phases)
    render_activity_feed(state, get_activity_limit())

    if state.completed:
        st.success(
            f"**Analysis Complete!** Your {selection.subcategory} market research is ready "
            "with actionable insights."
        )
        st.caption(f"{remaining_badge(state)} · Analysis ID: {get_analysis_id()}")
        col1, col2 = st.columns(2)
        with col1:
            if st.button("View Results →", type="primary", use_container_width=True):
                route = open_results(get_analysis_id())
                st.info(f"Results for this analysis will be available at {route}.")
        with col2:
            if st.button("Start a new analysis", use_container_width=True):
                reset_analysis()
                continue_to(ONBOARDING_PAGE)


live_progress()

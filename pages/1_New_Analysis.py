import os, sys
import streamlit as st
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from utils.app_state import init_session_state, sidebar_controls, get_selector, set_selection  # type: ignore
from utils.navigation import PROGRESS_PAGE, continue_to  # type: ignore
from utils.onboarding import CategoryPicker  # type: ignore


st.set_page_config(page_title="Xenith — New Market Analysis", page_icon=":bar_chart:")

init_session_state()
sidebar_controls()

st.caption("Step 1 of 2")
picker = CategoryPicker(get_selector())
selection = picker.render()

if selection is not None:
    set_selection(selection)
    continue_to(PROGRESS_PAGE)

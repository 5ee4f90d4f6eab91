"""
Tests for page navigation helpers.
"""

from unittest.mock import patch

import streamlit as st
from streamlit.errors import StreamlitAPIException

from utils.navigation import (
    ONBOARDING_PAGE,
    PROGRESS_PAGE,
    RESULTS_ID_KEY,
    continue_to,
    get_page_label,
    get_recommended_next_page,
    open_results,
    results_path,
)


class TestNavigationFlow:
    def test_sequence_next_mapping(self):
        assert get_recommended_next_page("onboarding") == PROGRESS_PAGE
        assert get_recommended_next_page(ONBOARDING_PAGE) == PROGRESS_PAGE
        # Last page stays put
        assert get_recommended_next_page("progress") == PROGRESS_PAGE
        assert get_recommended_next_page("unknown") == "unknown"

    def test_get_page_label_from_slug_and_file(self):
        assert get_page_label("onboarding") == "New Analysis"
        assert get_page_label("pages/2_Analysis_Progress.py") == "Analysis Progress"
        assert get_page_label("2_Analysis_Progress.py") == "Analysis Progress"
        assert get_page_label("elsewhere") == "elsewhere"

    def test_results_path(self):
        assert results_path("MKT-1234ABCD") == "/project/MKT-1234ABCD"

    def test_continue_to_switches_page(self):
        with patch("utils.navigation.st.switch_page") as switch:
            continue_to(PROGRESS_PAGE)
        switch.assert_called_once_with(PROGRESS_PAGE)

    def test_continue_to_falls_back_to_link(self):
        with patch(
            "utils.navigation.st.switch_page", side_effect=StreamlitAPIException("no such page")
        ), patch("utils.navigation.st.page_link") as link:
            continue_to(PROGRESS_PAGE)
        link.assert_called_once()
        assert link.call_args.args[0] == PROGRESS_PAGE

    def test_open_results_hands_over_analysis_id(self, session_state, monkeypatch):
        query_params: dict = {}
        monkeypatch.setattr(st, "query_params", query_params)

        route = open_results("MKT-1234ABCD")
        assert route == "/project/MKT-1234ABCD"
        assert session_state[RESULTS_ID_KEY] == "MKT-1234ABCD"
        assert query_params == {"analysis": "MKT-1234ABCD"}

"""
Shared fixtures: isolate config from real secrets/env caches and give each test
a fresh dict for st.session_state.
"""

from __future__ import annotations

import pytest
import streamlit as st

import config
from market.plan import ANALYSIS_PHASES

MESSAGE_POOL = [
    "Analyzing 1,250 products in Smart Home category",
    "Processing product specifications and features",
    "Extracting customer review sentiment data",
    "Identifying competitive pricing patterns",
    "Mapping feature preferences across segments",
]


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    """No st.secrets lookups and no cached values leaking between tests."""
    monkeypatch.setattr(config, "_secrets_getter", lambda key, default=None: default)
    config.refresh_cache()
    yield
    config.refresh_cache()


@pytest.fixture
def session_state(monkeypatch):
    state: dict = {}
    monkeypatch.setattr(st, "session_state", state)
    return state


@pytest.fixture
def analysis_phases():
    return list(ANALYSIS_PHASES)


@pytest.fixture
def message_pool():
    return list(MESSAGE_POOL)

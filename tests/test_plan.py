"""
Tests for the analysis plan built from an onboarding selection.
"""

import re

from market import Selection
from market.plan import (
    ANALYSIS_PHASES,
    analysis_id_for,
    build_message_pool,
    build_phases,
    build_simulator,
    selection_label,
)
from market.simulator import cycle_selector

SELECTION = Selection(category_id="smart-home", subcategory="Home Entertainment")


def test_phases_keep_order_and_durations():
    phases = build_phases(SELECTION)
    assert [p.id for p in phases] == ["collecting", "extracting", "reviews", "analyzing"]
    assert [p.duration_ms for p in phases] == [5000, 4000, 6000, 3000]


def test_collecting_description_names_the_selection():
    phases = build_phases(SELECTION)
    assert phases[0].description == "Scanning Amazon for products in Smart Home > Home Entertainment"
    assert phases[1].description == ANALYSIS_PHASES[1].description


def test_duration_scale():
    phases = build_phases(SELECTION, duration_scale=0.1)
    assert sum(p.duration_ms for p in phases) == 1800


def test_message_pool_mentions_category():
    pool = build_message_pool(Selection(category_id="gaming", subcategory="PC Gaming"))
    assert pool[0] == "Analyzing 1,250 products in Gaming category"
    assert len(pool) == 5


def test_unknown_category_falls_back_to_id():
    selection = Selection(category_id="garden", subcategory="Tools")
    assert selection_label(selection) == "garden > Tools"


def test_analysis_id_is_stable_and_opaque():
    first = analysis_id_for(SELECTION)
    assert re.fullmatch(r"MKT-[0-9A-F]{8}", first)
    assert analysis_id_for(Selection(category_id="smart-home", subcategory="Home Entertainment")) == first
    assert analysis_id_for(Selection(category_id="smart-home", subcategory="Climate Control")) != first


def test_build_simulator_wires_settings():
    sim = build_simulator(SELECTION, tick_ms=200, report_interval_ms=1000, selector=cycle_selector())
    assert sim.tick_ms == 200
    assert sim.report_interval_ms == 1000
    assert sim.total_duration_ms == 18000
    assert "Smart Home" in sim.messages[0]


def test_seeded_simulators_match():
    logs = []
    for _ in range(2):
        sim = build_simulator(SELECTION, seed=42)
        sim.start()
        sim.run_to_completion()
        logs.append(sim.snapshot().messages)
    assert logs[0] == logs[1]

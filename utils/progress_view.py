"""Progress tracker UI components for the market analysis page."""

from __future__ import annotations

from typing import Sequence

import pandas as pd
import streamlit as st

from market.schemas import Phase, PhaseStatus, SimulationState

PHASE_ICONS: dict[str, str] = {
    "collecting": "🔍",
    "extracting": "🗄️",
    "reviews": "👥",
    "analyzing": "📊",
}

STATUS_LABELS: dict[PhaseStatus, str] = {
    "complete": "Complete",
    "in_progress": "In Progress",
    "pending": "Pending",
}

_STATUS_MARKERS: dict[PhaseStatus, str] = {
    "complete": "✅",
    "in_progress": "🔄",
    "pending": "⏸️",
}

EMPTY_FEED_TEXT = "Starting analysis..."


def remaining_badge(state: SimulationState) -> str:
    if state.completed:
        return "Completed"
    return f"{state.minutes_remaining} min remaining"


def status_line(state: SimulationState, phases: Sequence[Phase]) -> str:
    """One-line summary shown under the progress bar."""
    if state.completed:
        return "Analysis complete! Your market insights are ready."
    if 0 <= state.current_phase_index < len(phases):
        return f"Currently {phases[state.current_phase_index].title.lower()}..."
    return "Currently processing..."


def phase_frame(state: SimulationState, phases: Sequence[Phase]) -> pd.DataFrame:
    """Table of phases with their status, in phase order."""
    rows = []
    for i, phase in enumerate(phases):
        status = state.phase_status(i)
        rows.append(
            {
                "": _STATUS_MARKERS[status],
                "Step": f"{PHASE_ICONS.get(phase.id, '•')} {phase.title}",
                "Details": phase.description,
                "Status": STATUS_LABELS[status],
            }
        )
    return pd.DataFrame(rows, columns=["", "Step", "Details", "Status"])


def activity_lines(state: SimulationState, limit: int = 10) -> list[str]:
    """Newest-first feed lines, or the placeholder while the log is empty."""
    recent = state.recent_activity(limit)
    if not recent:
        return [EMPTY_FEED_TEXT]
    return [entry.message for entry in recent]


def render_progress_tracker(state: SimulationState, phases: Sequence[Phase]) -> None:
    """Render the overall progress card and the per-phase table."""
    col1, col2 = st.columns([4, 1])
    with col1:
        st.markdown("### Analysis Progress")
    with col2:
        st.metric("Progress", f"{round(state.overall_progress_percent)}%")

    st.progress(state.overall_progress_percent / 100, text=status_line(state, phases))
    st.caption(f"⏱️ {remaining_badge(state)}")
    st.dataframe(phase_frame(state, phases), hide_index=True, use_container_width=True)


def render_activity_feed(state: SimulationState, limit: int = 10) -> None:
    st.markdown("#### Real-time Activity")
    with st.container(border=True):
        for line in activity_lines(state, limit):
            st.text(line)

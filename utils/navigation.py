"""Navigation between the onboarding and progress pages.

Public API:
- get_page_label(identifier: str) -> str
- get_recommended_next_page(current_page_id: str) -> str
- results_path(analysis_id: str) -> str
- open_results(analysis_id: str) -> str
- continue_to(page_file: str) -> None
"""

from __future__ import annotations

import logging

import streamlit as st
from streamlit.errors import StreamlitAPIException

logger = logging.getLogger(__name__)

# Ordered flow: (slug, file, display label)
_PAGE_SEQUENCE: list[tuple[str, str, str]] = [
    ("onboarding", "pages/1_New_Analysis.py", "New Analysis"),
    ("progress", "pages/2_Analysis_Progress.py", "Analysis Progress"),
]

ONBOARDING_PAGE = _PAGE_SEQUENCE[0][1]
PROGRESS_PAGE = _PAGE_SEQUENCE[1][1]

# Derived lookup maps
_SLUG_TO_FILE: dict[str, str] = {s: f for s, f, _ in _PAGE_SEQUENCE}
_FILE_TO_SLUG: dict[str, str] = {f: s for s, f, _ in _PAGE_SEQUENCE}
_SLUG_TO_LABEL: dict[str, str] = {s: lbl for s, _, lbl in _PAGE_SEQUENCE}


def _normalize_identifier(identifier: str) -> str:
    """Normalize a slug, file path or file basename to a slug; unknown values pass through."""
    if identifier in _SLUG_TO_FILE:
        return identifier
    if identifier in _FILE_TO_SLUG:
        return _FILE_TO_SLUG[identifier]
    for file_path, slug in _FILE_TO_SLUG.items():
        if identifier == file_path.split("/")[-1]:
            return slug
    return identifier


def get_page_label(identifier: str) -> str:
    """Return the user-facing label for a slug or file identifier."""
    slug = _normalize_identifier(identifier)
    return _SLUG_TO_LABEL.get(slug, identifier)


def get_recommended_next_page(current_page_id: str) -> str:
    """Return the next page file in the flow; the last or an unknown page maps to itself."""
    slug = _normalize_identifier(current_page_id)
    slugs = [s for s, *_ in _PAGE_SEQUENCE]
    if slug not in slugs:
        return current_page_id
    idx = slugs.index(slug)
    if idx + 1 < len(_PAGE_SEQUENCE):
        return _PAGE_SEQUENCE[idx + 1][1]
    return _SLUG_TO_FILE[slug]


def results_path(analysis_id: str) -> str:
    """Route of the results view for a finished analysis."""
    return f"/project/{analysis_id}"


def continue_to(page_file: str) -> None:
    """Navigate to `page_file`, falling back to a page link when switching is not possible."""
    try:
        st.switch_page(page_file)
    except StreamlitAPIException as e:
        logger.warning("switch_page(%s) failed: %s", page_file, e)
        st.page_link(page_file, label=f"Continue to {get_page_label(page_file)} →")


RESULTS_ID_KEY = "results_analysis_id"


def open_results(analysis_id: str) -> str:
    """Hand a finished analysis to the results view.

    The id is kept in session state and mirrored into the URL (`?analysis=...`) so the
    results view can pick it up after a reload. Returns the results route.
    """
    st.session_state[RESULTS_ID_KEY] = analysis_id
    st.query_params["analysis"] = analysis_id
    logger.info("Results requested for %s", analysis_id)
    return results_path(analysis_id)

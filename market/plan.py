"""
Analysis plan for a chosen category: phases, status-message pool, preview figures and ids.

This is the collaborator between the onboarding selection and the simulator.
Phase descriptions and feed messages mention the chosen category; the simulator
itself never sees the selection.
"""

from __future__ import annotations

from typing import Iterable, Optional

from .schemas import Category, Phase, Selection
from .simulator import (
    DEFAULT_REPORT_INTERVAL_MS,
    DEFAULT_TICK_MS,
    CompletionCallback,
    MessageSelector,
    ProgressSimulator,
    random_selector,
)
from .taxonomy import DEFAULT_CATEGORIES, get_category

# Phase definitions for the market analysis tracker
ANALYSIS_PHASES: tuple[Phase, ...] = (
    Phase(
        id="collecting",
        title="Collecting Product Listings",
        description="Scanning Amazon for products in the selected category",
        duration_ms=5000,
    ),
    Phase(
        id="extracting",
        title="Extracting Specifications",
        description="Processing product details, features, and technical specifications",
        duration_ms=4000,
    ),
    Phase(
        id="reviews",
        title="Processing Customer Reviews",
        description="Analyzing customer feedback, ratings, and sentiment patterns",
        duration_ms=6000,
    ),
    Phase(
        id="analyzing",
        title="Generating Market Insights",
        description="Creating competitive analysis and market opportunity reports",
        duration_ms=3000,
    ),
)

ANALYSIS_PREVIEW: tuple[dict[str, str], ...] = (
    {"icon": "🗄️", "label": "Product Data", "value": "~1,200-2,500 products"},
    {"icon": "👥", "label": "Customer Reviews", "value": "~15,000-50,000 reviews"},
    {"icon": "⏱️", "label": "Processing Time", "value": "15-20 minutes"},
)


def selection_label(selection: Selection, catalog: Iterable[Category] = DEFAULT_CATEGORIES) -> str:
    """'Smart Home > Home Entertainment' style label, falling back to the raw id."""
    category = get_category(catalog, selection.category_id)
    return selection.label(category.name if category else None)


def build_phases(
    selection: Selection,
    catalog: Iterable[Category] = DEFAULT_CATEGORIES,
    duration_scale: float = 1.0,
) -> list[Phase]:
    """Return the analysis phases with descriptions tailored to `selection`."""
    label = selection_label(selection, catalog)
    phases: list[Phase] = []
    for phase in ANALYSIS_PHASES:
        update: dict[str, object] = {}
        if phase.id == "collecting":
            update["description"] = f"Scanning Amazon for products in {label}"
        if duration_scale != 1.0:
            update["duration_ms"] = max(1, round(phase.duration_ms * duration_scale))
        phases.append(phase.model_copy(update=update) if update else phase)
    return phases


def build_message_pool(selection: Selection, catalog: Iterable[Category] = DEFAULT_CATEGORIES) -> list[str]:
    category = get_category(catalog, selection.category_id)
    name = category.name if category else selection.category_id
    return [
        f"Analyzing 1,250 products in {name} category",
        "Processing product specifications and features",
        "Extracting customer review sentiment data",
        "Identifying competitive pricing patterns",
        "Mapping feature preferences across segments",
    ]


def analysis_id_for(selection: Selection) -> str:
    """Opaque, stable identifier handed to the results route."""
    return f"MKT-{selection.stable_hash()[:8].upper()}"


def build_simulator(
    selection: Selection,
    catalog: Iterable[Category] = DEFAULT_CATEGORIES,
    tick_ms: int = DEFAULT_TICK_MS,
    report_interval_ms: int = DEFAULT_REPORT_INTERVAL_MS,
    seed: Optional[int] = None,
    selector: Optional[MessageSelector] = None,
    duration_scale: float = 1.0,
    on_complete: Optional[CompletionCallback] = None,
) -> ProgressSimulator:
    """Wire a ProgressSimulator for `selection`. An explicit selector wins over `seed`."""
    catalog = tuple(catalog)
    return ProgressSimulator(
        build_phases(selection, catalog, duration_scale=duration_scale),
        tick_ms=tick_ms,
        report_interval_ms=report_interval_ms,
        messages=build_message_pool(selection, catalog),
        selector=selector or random_selector(seed),
        on_complete=on_complete,
    )

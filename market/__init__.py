"""
Xenith market analysis core.
Category selection, analysis plans and the progress simulation engine.
"""

import logging

from .driver import TickDriver
from .errors import ConfigurationError, MarketError, PreconditionError
from .plan import ANALYSIS_PHASES, analysis_id_for, build_simulator
from .schemas import ActivityEntry, Category, Phase, Selection, SimulationState
from .selector import CategorySelector
from .simulator import ProgressSimulator, cycle_selector, fixed_selector, random_selector
from .taxonomy import DEFAULT_CATEGORIES, load_taxonomy

# Silent unless the application configures logging (see utils.logging_config)
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ANALYSIS_PHASES",
    "DEFAULT_CATEGORIES",
    "ActivityEntry",
    "Category",
    "CategorySelector",
    "ConfigurationError",
    "MarketError",
    "Phase",
    "PreconditionError",
    "ProgressSimulator",
    "Selection",
    "SimulationState",
    "TickDriver",
    "analysis_id_for",
    "build_simulator",
    "cycle_selector",
    "fixed_selector",
    "load_taxonomy",
    "random_selector",
]

__version__ = "0.1.0"

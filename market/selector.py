"""Two-level category picker state for the onboarding screen."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .errors import PreconditionError
from .schemas import Category, Selection
from .taxonomy import DEFAULT_CATEGORIES, build_taxonomy, get_category

logger = logging.getLogger(__name__)


class CategorySelector:
    """Searchable taxonomy plus the user's (category, subcategory) choice."""

    def __init__(self, categories: Optional[Iterable[Category]] = None):
        self.categories: tuple[Category, ...] = (
            DEFAULT_CATEGORIES if categories is None else build_taxonomy(categories)
        )
        self._category_id: Optional[str] = None
        self._subcategory: Optional[str] = None

    @property
    def category_id(self) -> Optional[str]:
        return self._category_id

    @property
    def subcategory(self) -> Optional[str]:
        return self._subcategory

    @property
    def selected_category(self) -> Optional[Category]:
        if self._category_id is None:
            return None
        return get_category(self.categories, self._category_id)

    def search(self, query: str = "") -> list[Category]:
        """Return categories whose name or any subcategory contains `query`, in table order."""
        needle = (query or "").strip()
        if not needle:
            return list(self.categories)
        return [cat for cat in self.categories if cat.matches(needle)]

    def select_category(self, category_id: str) -> bool:
        """Make `category_id` active and clear the subcategory. Unknown ids are ignored."""
        if get_category(self.categories, category_id) is None:
            logger.debug("Ignoring unknown category id %r", category_id)
            return False
        self._category_id = category_id
        self._subcategory = None
        return True

    def select_subcategory(self, name: str) -> bool:
        """Set the subcategory if it belongs to the active category; otherwise ignore."""
        category = self.selected_category
        if category is None or not category.has_subcategory(name):
            logger.debug("Ignoring subcategory %r for category %r", name, self._category_id)
            return False
        self._subcategory = name
        return True

    def is_ready_to_start(self) -> bool:
        return self._category_id is not None and self._subcategory is not None

    def start(self) -> Selection:
        if not self.is_ready_to_start():
            raise PreconditionError("Choose a category and a subcategory before starting the analysis")
        selection = Selection(category_id=self._category_id, subcategory=self._subcategory)
        logger.info("Starting analysis for %s", selection.label())
        return selection

    def reset(self) -> None:
        self._category_id = None
        self._subcategory = None

"""
Static category taxonomy for the onboarding picker.

APIs:
- DEFAULT_CATEGORIES: the built-in Amazon category table
- load_taxonomy(path) -> tuple[Category, ...]
- get_category(catalog, category_id) -> Category | None
"""

from __future__ import annotations

import json as _json
import logging
from pathlib import Path
from typing import Any, Iterable

from pydantic import ValidationError

from .errors import ConfigurationError
from .schemas import Category

logger = logging.getLogger(__name__)

_RAW_CATEGORIES: list[dict[str, Any]] = [
    {
        "id": "smart-home",
        "name": "Smart Home",
        "subcategories": [
            "Home Entertainment",
            "Security Systems",
            "Lighting & Electrical",
            "Climate Control",
            "Voice Assistants",
        ],
    },
    {
        "id": "electronics",
        "name": "Electronics",
        "subcategories": ["Mobile Phones", "Tablets", "Laptops", "Audio Equipment", "Cameras"],
    },
    {
        "id": "automotive",
        "name": "Automotive",
        "subcategories": [
            "Car Electronics",
            "Tools & Equipment",
            "Exterior Accessories",
            "Interior Accessories",
        ],
    },
    {
        "id": "gaming",
        "name": "Gaming",
        "subcategories": ["Gaming Consoles", "PC Gaming", "Gaming Accessories", "Mobile Gaming"],
    },
    {
        "id": "fashion",
        "name": "Fashion",
        "subcategories": ["Men's Clothing", "Women's Clothing", "Shoes", "Accessories", "Jewelry"],
    },
    {
        "id": "books",
        "name": "Books & Media",
        "subcategories": ["Fiction", "Non-Fiction", "Educational", "Children's Books", "Digital Media"],
    },
]


def build_taxonomy(rows: Iterable[Any]) -> tuple[Category, ...]:
    """Validate raw rows into an ordered, immutable category table."""
    try:
        categories = tuple(
            row if isinstance(row, Category) else Category.model_validate(row) for row in rows
        )
    except ValidationError as e:
        raise ConfigurationError(f"Invalid category table: {e}") from e

    seen: set[str] = set()
    for cat in categories:
        if cat.id in seen:
            raise ConfigurationError(f"Duplicate category id: {cat.id!r}")
        seen.add(cat.id)
    return categories


DEFAULT_CATEGORIES: tuple[Category, ...] = build_taxonomy(_RAW_CATEGORIES)


def load_taxonomy(path: str | Path) -> tuple[Category, ...]:
    """Load a taxonomy JSON file shaped like {"categories": [{id, name, subcategories}, ...]}."""
    p = Path(path)
    try:
        data = _json.loads(p.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"Cannot read taxonomy file {p}: {e}") from e
    except ValueError as e:
        raise ConfigurationError(f"Invalid JSON in taxonomy file {p}: {e}") from e

    rows = data.get("categories") if isinstance(data, dict) else data
    if not isinstance(rows, list) or not rows:
        raise ConfigurationError(f"Taxonomy file {p} has no categories")
    catalog = build_taxonomy(rows)
    logger.info("Loaded %d categories from %s", len(catalog), p)
    return catalog


def get_category(catalog: Iterable[Category], category_id: str) -> Category | None:
    return next((c for c in catalog if c.id == category_id), None)


__all__ = ["DEFAULT_CATEGORIES", "build_taxonomy", "load_taxonomy", "get_category"]

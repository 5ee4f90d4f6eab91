"""
Pydantic data models for the market analysis core.
"""

from __future__ import annotations

import hashlib
import json as _json
import math
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

SimulationStatus = Literal["idle", "running", "completed"]
PhaseStatus = Literal["complete", "in_progress", "pending"]


class _FrozenModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


def _json_dumps_stable(obj: Any) -> str:
    return _json.dumps(obj, sort_keys=True, separators=(",", ":"), default=str)


def stable_hash_for_obj(obj: Any) -> str:
    return hashlib.sha256(_json_dumps_stable(obj).encode("utf-8")).hexdigest()[:16]


class Category(_FrozenModel):
    id: str
    name: str
    subcategories: tuple[str, ...] = ()

    def has_subcategory(self, name: str) -> bool:
        return name in self.subcategories

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on the name or any subcategory."""
        needle = query.lower()
        if needle in self.name.lower():
            return True
        return any(needle in sub.lower() for sub in self.subcategories)


class Selection(_FrozenModel):
    category_id: str
    subcategory: str

    def label(self, category_name: str | None = None) -> str:
        """Breadcrumb-style label, e.g. 'Smart Home > Home Entertainment'."""
        return f"{category_name or self.category_id} > {self.subcategory}"

    def stable_hash(self) -> str:
        return stable_hash_for_obj(self.model_dump(mode="json"))


class Phase(_FrozenModel):
    id: str
    title: str
    description: str = ""
    duration_ms: int = Field(gt=0, strict=True)


class ActivityEntry(_FrozenModel):
    elapsed_ms: int
    message: str

    def __str__(self) -> str:
        return self.message


class SimulationState(_FrozenModel):
    status: SimulationStatus = "idle"
    elapsed_ms: int = 0
    current_phase_index: int = 0
    overall_progress_percent: float = 0.0
    completed: bool = False
    activity_log: tuple[ActivityEntry, ...] = ()
    phase_count: int = 0
    total_duration_ms: int = 0

    @property
    def messages(self) -> list[str]:
        return [entry.message for entry in self.activity_log]

    @property
    def minutes_remaining(self) -> int:
        """Rough badge estimate: one minute per 5% left, zero once completed."""
        if self.completed:
            return 0
        return max(0, math.ceil((100 - self.overall_progress_percent) / 5))

    def recent_activity(self, limit: int = 10) -> list[ActivityEntry]:
        """Return the newest `limit` entries, newest first. The log itself is untouched."""
        if limit <= 0:
            return []
        return list(reversed(self.activity_log[-limit:]))

    def phase_status(self, index: int) -> PhaseStatus:
        if self.completed or index < self.current_phase_index:
            return "complete"
        if index == self.current_phase_index and self.status == "running":
            return "in_progress"
        return "pending"


__all__ = [
    "SimulationStatus",
    "PhaseStatus",
    "Category",
    "Selection",
    "Phase",
    "ActivityEntry",
    "SimulationState",
    "stable_hash_for_obj",
]

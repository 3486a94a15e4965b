"""Durable weight history and favorite meals."""

import datetime
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

from diet_planner.domain.errors import PersistenceReadError
from diet_planner.domain.plan import DietPlan, Meal
from diet_planner.domain.tracking import WeightEntry

WEIGHT_HISTORY_KEY = "weightHistory"
FAVORITE_MEALS_KEY = "favoriteMeals"

_logger = logging.getLogger(__name__)

_WEIGHT_HISTORY = TypeAdapter(list[WeightEntry])
_FAVORITE_IDS = TypeAdapter(list[str])


class KeyValueStore(Protocol):
    """Storage interface for JSON-serializable values."""

    def get(self, key: str) -> object | None:
        """Return the stored value, or None when the key is absent."""

    def set(self, key: str, value: object) -> None:
        """Store a value, replacing any previous one."""


def _read(store: KeyValueStore, key: str, adapter: TypeAdapter) -> list:
    """Read a list value, falling back to empty when missing or corrupt."""
    try:
        raw = store.get(key)
    except PersistenceReadError:
        _logger.warning(
            "Stored value is unreadable; using empty default", extra={"key": key}
        )
        return []
    if raw is None:
        return []
    try:
        return adapter.validate_python(raw)
    except ValidationError:
        _logger.warning(
            "Stored value is corrupt; using empty default", extra={"key": key}
        )
        return []


@dataclass
class WeightHistoryService:
    """Weight journal kept sorted by date with one entry per day."""

    store: KeyValueStore

    def list_entries(self) -> list[WeightEntry]:
        """Return all entries in ascending date order."""
        return sorted(
            _read(self.store, WEIGHT_HISTORY_KEY, _WEIGHT_HISTORY),
            key=lambda entry: entry.date,
        )

    def add_entry(self, entry: WeightEntry) -> list[WeightEntry]:
        """Insert an entry, replacing any existing entry for the same date."""
        history = [item for item in self.list_entries() if item.date != entry.date]
        history.append(entry)
        history.sort(key=lambda item: item.date)
        self._save(history)
        return history

    def delete_entry(self, day: datetime.date) -> list[WeightEntry]:
        """Remove the entry for a date; unknown dates leave history unchanged."""
        history = self.list_entries()
        remaining = [item for item in history if item.date != day]
        if len(remaining) != len(history):
            self._save(remaining)
        return remaining

    def latest(self) -> WeightEntry | None:
        """Return the most recent entry, if any."""
        history = self.list_entries()
        return history[-1] if history else None

    def _save(self, history: list[WeightEntry]) -> None:
        self.store.set(
            WEIGHT_HISTORY_KEY, _WEIGHT_HISTORY.dump_python(history, mode="json")
        )


@dataclass
class FavoritesService:
    """Set of favorite meal ids, independent of the loaded plan."""

    store: KeyValueStore

    def list_ids(self) -> list[str]:
        """Return favorite ids in the order they were added."""
        stored = _read(self.store, FAVORITE_MEALS_KEY, _FAVORITE_IDS)
        return list(dict.fromkeys(stored))

    def is_favorite(self, meal_id: str) -> bool:
        """Return True when the meal id is a favorite."""
        return meal_id in self.list_ids()

    def toggle(self, meal_id: str) -> bool:
        """Flip a meal's favorite flag and return the new value."""
        ids = self.list_ids()
        if meal_id in ids:
            ids.remove(meal_id)
            favorite = False
        else:
            ids.append(meal_id)
            favorite = True
        self.store.set(FAVORITE_MEALS_KEY, ids)
        return favorite

    def favorites_in_plan(self, plan: DietPlan) -> list[Meal]:
        """Return the plan's meals that are favorites, in plan order."""
        ids = set(self.list_ids())
        return [meal for meal in plan.meals() if meal.id in ids]

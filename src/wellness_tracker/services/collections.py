"""Persisted record collections and their derived totals."""

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Generic, TypeVar
from uuid import UUID

from wellness_tracker.domain.chat import ChatMessage
from wellness_tracker.domain.diet import MacroTotals, Meal
from wellness_tracker.domain.hydration import WaterLog
from wellness_tracker.domain.journal import JournalEntry
from wellness_tracker.services.store import (
    CHAT_MESSAGES_KEY,
    JOURNAL_ENTRIES_KEY,
    MEALS_KEY,
    WATER_LOGS_KEY,
    RecordStore,
)

R = TypeVar("R")


class InvalidInputError(ValueError):
    """User input was rejected before touching a collection."""


def current_timestamp() -> datetime:
    """Return the current UTC time truncated to whole seconds."""
    return datetime.now(tz=UTC).replace(microsecond=0)


@dataclass
class RecordLog(Generic[R]):
    """Ordered collection that writes itself through on every change."""

    store: RecordStore
    key: str
    items: tuple[R, ...] = ()

    @classmethod
    def load(cls, store: RecordStore, **kwargs: object) -> "RecordLog[R]":
        """Restore a collection from the store, empty if nothing was saved."""
        log = cls(store=store, **kwargs)
        log.items = tuple(store.load(log.key, []))
        return log

    def append(self, item: R) -> tuple[R, ...]:
        """Add an item to the end of the collection."""
        return self._replace((*self.items, item))

    def _replace(self, items: tuple[R, ...]) -> tuple[R, ...]:
        self.items = items
        self.store.save(self.key, list(items))
        return items


@dataclass
class MealLog(RecordLog[Meal]):
    """Meals logged through the diet view."""

    key: str = MEALS_KEY

    def remove_by_id(self, meal_id: UUID) -> tuple[Meal, ...]:
        """Drop the meal with the given id; unknown ids leave the log unchanged."""
        remaining = tuple(meal for meal in self.items if meal.id != meal_id)
        if len(remaining) == len(self.items):
            return self.items
        return self._replace(remaining)


@dataclass
class WaterLogs(RecordLog[WaterLog]):
    """Water intake entries."""

    key: str = WATER_LOGS_KEY

    def remove_last(self) -> tuple[WaterLog, ...]:
        """Drop the most recent entry; an empty log is left as is."""
        if not self.items:
            return self.items
        return self._replace(self.items[:-1])


@dataclass
class ChatHistory(RecordLog[ChatMessage]):
    """Messages exchanged in the support chat."""

    key: str = CHAT_MESSAGES_KEY

    def recent(self, limit: int) -> tuple[ChatMessage, ...]:
        """Return at most the last ``limit`` messages."""
        if limit <= 0:
            return ()
        return self.items[-limit:]


@dataclass
class JournalLog(RecordLog[JournalEntry]):
    """Saved journal entries."""

    key: str = JOURNAL_ENTRIES_KEY


def total(items: Iterable[object], field_name: str) -> float:
    """Sum a numeric attribute across records."""
    return sum((getattr(item, field_name) for item in items), 0)


def macro_totals(meals: Iterable[Meal]) -> MacroTotals:
    """Return summed calories and macros for meals."""
    meal_list = list(meals)
    return MacroTotals(
        calories=total(meal_list, "calories"),
        protein=total(meal_list, "protein"),
        carbs=total(meal_list, "carbs"),
        fats=total(meal_list, "fats"),
    )


def goal_percentage(value: float, goal: float) -> int:
    """Return progress toward a goal rounded half up and capped at 100."""
    if goal <= 0:
        return 0
    return min(100, math.floor(value / goal * 100 + 0.5))


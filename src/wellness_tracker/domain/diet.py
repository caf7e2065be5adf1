"""Domain models for the diet log."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class Meal:
    """A logged meal with estimated nutrition."""

    id: UUID
    name: str
    calories: float
    protein: float
    carbs: float
    fats: float
    timestamp: datetime


@dataclass(frozen=True)
class MacroTotals:
    """Summed calories and macronutrients in grams."""

    calories: float
    protein: float
    carbs: float
    fats: float

"""Daily overview computed from the meal and water logs."""

from collections.abc import Sequence
from dataclasses import dataclass

from wellness_tracker.domain.diet import MacroTotals, Meal
from wellness_tracker.domain.hydration import WaterLog
from wellness_tracker.services.collections import goal_percentage, macro_totals, total


@dataclass(frozen=True)
class DailySummary:
    """Progress toward the daily calorie and water goals."""

    calories: float
    calorie_goal: int
    calorie_percentage: int
    water_ml: int
    water_goal_ml: int
    water_percentage: int
    macros: MacroTotals


def summarize_day(
    meals: Sequence[Meal],
    water_logs: Sequence[WaterLog],
    calorie_goal: int,
    water_goal_ml: int,
) -> DailySummary:
    """Return totals and goal percentages for the logged day."""
    macros = macro_totals(meals)
    water_ml = int(total(water_logs, "amount_ml"))
    return DailySummary(
        calories=macros.calories,
        calorie_goal=calorie_goal,
        calorie_percentage=goal_percentage(macros.calories, calorie_goal),
        water_ml=water_ml,
        water_goal_ml=water_goal_ml,
        water_percentage=goal_percentage(water_ml, water_goal_ml),
        macros=macros,
    )

"""View models for each screen of the tracker."""

from collections.abc import Sequence
from enum import Enum

from wellness_tracker.domain.chat import ChatMessage
from wellness_tracker.domain.diet import Meal
from wellness_tracker.domain.hydration import WaterLog
from wellness_tracker.domain.journal import JournalEntry
from wellness_tracker.services.collections import goal_percentage, macro_totals, total
from wellness_tracker.services.dashboard import summarize_day
from wellness_tracker.services.hydration import QUICK_ADD_AMOUNTS_ML

RECENT_WATER_ENTRIES = 3


class View(str, Enum):
    """Screens the user can switch between."""

    OVERVIEW = "overview"
    DIET = "diet"
    HYDRATION = "hydration"
    SUPPORT_CHAT = "support-chat"
    JOURNAL = "journal"

    @classmethod
    def parse(cls, selector: str | None) -> "View":
        """Return the matching view, falling back to the overview."""
        try:
            return cls(selector)
        except ValueError:
            return cls.OVERVIEW


def overview_view(
    meals: Sequence[Meal],
    water_logs: Sequence[WaterLog],
    calorie_goal: int,
    water_goal_ml: int,
) -> dict[str, object]:
    """Dashboard totals and macro breakdown."""
    return {
        "summary": summarize_day(meals, water_logs, calorie_goal, water_goal_ml),
    }


def diet_view(meals: Sequence[Meal]) -> dict[str, object]:
    """Logged meals in order with their totals."""
    return {"meals": list(meals), "totals": macro_totals(meals)}


def hydration_view(
    water_logs: Sequence[WaterLog], water_goal_ml: int
) -> dict[str, object]:
    """Water progress, undo availability and the latest entries."""
    total_ml = int(total(water_logs, "amount_ml"))
    return {
        "total_ml": total_ml,
        "goal_ml": water_goal_ml,
        "percentage": goal_percentage(total_ml, water_goal_ml),
        "can_undo": bool(water_logs),
        "recent": list(reversed(water_logs))[:RECENT_WATER_ENTRIES],
        "quick_add_ml": list(QUICK_ADD_AMOUNTS_ML),
    }


def support_chat_view(messages: Sequence[ChatMessage]) -> dict[str, object]:
    """Conversation in the order it happened."""
    return {"messages": list(messages)}


def journal_view(entries: Sequence[JournalEntry]) -> dict[str, object]:
    """Entries, newest first."""
    return {"entries": list(reversed(entries))}

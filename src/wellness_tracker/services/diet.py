"""Diet log service backed by generative meal analysis."""

import logging
from dataclasses import dataclass
from uuid import UUID, uuid4

from wellness_tracker.domain.diet import Meal
from wellness_tracker.services.assistant import (
    AssistantResponseError,
    AssistantService,
    AssistantUnavailableError,
)
from wellness_tracker.services.collections import (
    InvalidInputError,
    MealLog,
    current_timestamp,
)

ANALYSIS_FAILED_MESSAGE = "Could not analyze meal. Please try again."
CONNECTION_FAILED_MESSAGE = "Error connecting to AI service."

_logger = logging.getLogger(__name__)


class MealAnalysisError(Exception):
    """Meal analysis failed and nothing was logged.

    The original description is kept so the caller can offer a retry.
    """

    def __init__(
        self, message: str, description: str, *, unavailable: bool = False
    ) -> None:
        super().__init__(message)
        self.message = message
        self.description = description
        self.unavailable = unavailable


@dataclass
class DietService:
    """Turns meal descriptions into logged meals."""

    assistant: AssistantService
    meals: MealLog

    async def log_meal(self, description: str) -> Meal:
        """Analyze a described meal and append it to the log."""
        text = description.strip()
        if not text:
            raise InvalidInputError("Meal description is empty")
        try:
            analysis = await self.assistant.analyze_meal(text)
        except AssistantResponseError as exc:
            _logger.warning("Meal analysis returned unusable output: %s", exc)
            raise MealAnalysisError(ANALYSIS_FAILED_MESSAGE, description) from exc
        except AssistantUnavailableError as exc:
            _logger.warning("Meal analysis failed to reach the assistant: %s", exc)
            raise MealAnalysisError(
                CONNECTION_FAILED_MESSAGE, description, unavailable=True
            ) from exc
        meal = Meal(
            id=uuid4(),
            name=analysis.name,
            calories=analysis.calories,
            protein=analysis.protein,
            carbs=analysis.carbs,
            fats=analysis.fats,
            timestamp=current_timestamp(),
        )
        self.meals.append(meal)
        return meal

    def remove_meal(self, meal_id: UUID) -> tuple[Meal, ...]:
        """Remove a logged meal by id."""
        return self.meals.remove_by_id(meal_id)

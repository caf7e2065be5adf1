"""Generative assistant operations for meals, chat and the journal."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, TypeVar

from pydantic import ValidationError

from wellness_tracker.domain.assistant import JournalMetadata, MealAnalysis
from wellness_tracker.domain.chat import ChatMessage, ChatRole

M = TypeVar("M", MealAnalysis, JournalMetadata)

MEAL_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "name": {
            "type": "string",
            "description": "A short, concise name for the meal.",
        },
        "calories": {
            "type": "number",
            "minimum": 0,
            "description": "Estimated total calories.",
        },
        "protein": {
            "type": "number",
            "minimum": 0,
            "description": "Estimated protein in grams.",
        },
        "carbs": {
            "type": "number",
            "minimum": 0,
            "description": "Estimated carbohydrates in grams.",
        },
        "fats": {
            "type": "number",
            "minimum": 0,
            "description": "Estimated fats in grams.",
        },
    },
    "required": ["name", "calories", "protein", "carbs", "fats"],
    "additionalProperties": False,
}

JOURNAL_METADATA_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "title": {
            "type": "string",
            "description": "A concise title (under 10 words) for the note.",
        },
        "tags": {
            "type": "array",
            "items": {"type": "string"},
            "maxItems": 5,
            "description": "A list of maximum 5 relevant keyword tags.",
        },
    },
    "required": ["title", "tags"],
    "additionalProperties": False,
}

SUPPORT_INSTRUCTIONS = (
    "You are a compassionate, encouraging, and knowledgeable fat loss coach and "
    "emotional support companion. Your goal is to help the user stay motivated, "
    "navigate emotional eating triggers, and maintain a healthy mindset. Be "
    "empathetic but practical. Keep responses concise (under 3 paragraphs) "
    "unless asked for details."
)


class AssistantError(Exception):
    """Base class for generative capability failures."""


class AssistantUnavailableError(AssistantError):
    """The generative service could not be reached or returned an error."""


class AssistantResponseError(AssistantError):
    """The generative service answered with empty or malformed output."""


class GenerativeClient(Protocol):
    """Interface for a text-generation backend."""

    async def generate_structured(
        self,
        *,
        prompt: str,
        schema: dict[str, object],
        schema_name: str,
    ) -> dict[str, object]:
        """Return JSON output matching the schema."""

    async def generate_text(
        self,
        *,
        messages: Sequence[tuple[ChatRole, str]],
        instructions: str | None = None,
    ) -> str:
        """Return a free-text reply to role-tagged messages."""


@dataclass
class AssistantService:
    """Shapes prompts for each assistant task and validates the results."""

    client: GenerativeClient

    async def analyze_meal(self, description: str) -> MealAnalysis:
        """Estimate nutrition for a free-text meal description."""
        prompt = (
            "Analyze the nutritional content of this meal description: "
            f'"{description}". Provide a realistic estimate.'
        )
        raw = await self.client.generate_structured(
            prompt=prompt, schema=MEAL_SCHEMA, schema_name="meal_analysis"
        )
        return _validate(MealAnalysis, raw)

    async def reply(self, history: Sequence[ChatMessage], message: str) -> str:
        """Return the coach's reply to a new message given prior history."""
        messages = [(entry.role, entry.text) for entry in history]
        messages.append((ChatRole.USER, message))
        text = await self.client.generate_text(
            messages=messages, instructions=SUPPORT_INSTRUCTIONS
        )
        if not text or not text.strip():
            raise AssistantResponseError("Empty chat reply")
        return text

    async def generate_journal_metadata(self, content: str) -> JournalMetadata:
        """Generate a title and tags for journal content."""
        prompt = (
            "Analyze this journal entry. Generate a concise title and relevant "
            f'tags.\n\nEntry: "{content}"'
        )
        raw = await self.client.generate_structured(
            prompt=prompt,
            schema=JOURNAL_METADATA_SCHEMA,
            schema_name="journal_metadata",
        )
        metadata = _validate(JournalMetadata, raw)
        if not metadata.title.strip():
            raise AssistantResponseError("Journal metadata has an empty title")
        return metadata

    async def polish_journal(self, content: str) -> str:
        """Rewrite journal content for clarity and flow."""
        prompt = (
            "Enhance the following text for clarity, flow, and emotional "
            "resonance. Return ONLY the polished text, no preamble."
            f'\n\nText: "{content}"'
        )
        text = await self.client.generate_text(messages=[(ChatRole.USER, prompt)])
        if not text or not text.strip():
            raise AssistantResponseError("Empty polished text")
        return text.strip()


def _validate(model: type[M], raw: object) -> M:
    if not isinstance(raw, dict):
        raise AssistantResponseError(f"Expected an object for {model.__name__}")
    try:
        return model.model_validate(raw)
    except ValidationError as exc:
        raise AssistantResponseError(str(exc)) from exc

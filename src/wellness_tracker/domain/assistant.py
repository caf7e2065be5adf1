"""Models for structured generative results."""

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_JOURNAL_TAGS = 5


class MealAnalysis(BaseModel):
    """Nutrition estimate for a described meal."""

    model_config = ConfigDict(str_strip_whitespace=True, allow_inf_nan=False)

    name: str = Field(min_length=1)
    calories: float = Field(ge=0.0)
    protein: float = Field(ge=0.0)
    carbs: float = Field(ge=0.0)
    fats: float = Field(ge=0.0)


class JournalMetadata(BaseModel):
    """Generated title and tags for a journal entry."""

    title: str
    tags: list[str] = Field(default_factory=list)

    @field_validator("tags")
    @classmethod
    def _normalize_tags(cls, tags: list[str]) -> list[str]:
        return list(normalize_tags(tags))


def normalize_tags(tags: Iterable[str]) -> tuple[str, ...]:
    """Strip, deduplicate and cap tags while keeping their order."""
    unique: list[str] = []
    for tag in tags:
        cleaned = tag.strip()
        if cleaned and cleaned not in unique:
            unique.append(cleaned)
    return tuple(unique[:MAX_JOURNAL_TAGS])

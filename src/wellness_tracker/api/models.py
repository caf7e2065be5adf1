"""Pydantic request models for the tracker API."""

from pydantic import BaseModel, Field


class MealRequest(BaseModel):
    """Free-text description of a meal to analyze."""

    description: str = Field(min_length=1)


class WaterRequest(BaseModel):
    """Volume of water to log."""

    amount_ml: int = Field(gt=0)


class ChatRequest(BaseModel):
    """A message for the support chat."""

    text: str = Field(min_length=1)


class JournalDraft(BaseModel):
    """Journal content to polish or tag."""

    content: str = Field(min_length=1)


class JournalEntryRequest(BaseModel):
    """Journal entry to save, with optional pre-generated metadata."""

    content: str = Field(min_length=1)
    title: str | None = None
    tags: list[str] | None = None
    generate_metadata: bool = True

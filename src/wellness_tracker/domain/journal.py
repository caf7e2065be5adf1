"""Domain models for the journal."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class JournalEntry:
    """A saved journal entry."""

    id: UUID
    content: str
    timestamp: datetime
    title: str | None = None
    tags: tuple[str, ...] = ()

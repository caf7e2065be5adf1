"""Domain models for hydration tracking."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class WaterLog:
    """A single water intake entry."""

    id: UUID
    amount_ml: int
    timestamp: datetime

"""Domain models for the support chat."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class ChatRole(str, Enum):
    """Author of a chat message."""

    USER = "user"
    MODEL = "model"


@dataclass(frozen=True)
class ChatMessage:
    """A single message in the support conversation."""

    id: UUID
    role: ChatRole
    text: str
    timestamp: datetime

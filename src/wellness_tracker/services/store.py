"""Best-effort persistence of typed record collections."""

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeVar

from pydantic import TypeAdapter

from wellness_tracker.domain.chat import ChatMessage
from wellness_tracker.domain.diet import Meal
from wellness_tracker.domain.hydration import WaterLog
from wellness_tracker.domain.journal import JournalEntry

_logger = logging.getLogger(__name__)

T = TypeVar("T")

MEALS_KEY = "meals"
WATER_LOGS_KEY = "waterLogs"
CHAT_MESSAGES_KEY = "chatMessages"
JOURNAL_ENTRIES_KEY = "journalEntries"

COLLECTION_TYPES: dict[str, object] = {
    MEALS_KEY: list[Meal],
    WATER_LOGS_KEY: list[WaterLog],
    CHAT_MESSAGES_KEY: list[ChatMessage],
    JOURNAL_ENTRIES_KEY: list[JournalEntry],
}


class StorageBackend(Protocol):
    """Raw key-value storage for serialized collections."""

    def read(self, key: str) -> bytes | None:
        """Return the stored blob for a key, or None when absent."""

    def write(self, key: str, data: bytes) -> None:
        """Store a blob under a key, replacing any previous value."""


@dataclass
class RecordStore:
    """Loads and saves collections registered by key.

    Every key maps to a fixed collection type, so timestamps and identifiers
    are rebuilt field by field from the stored JSON rather than guessed from
    the shape of the strings.
    """

    backend: StorageBackend
    types: dict[str, object] = field(default_factory=lambda: dict(COLLECTION_TYPES))
    _adapters: dict[str, TypeAdapter[Any]] = field(
        default_factory=dict, init=False, repr=False
    )

    def load(self, key: str, default: T) -> T:
        """Return the stored collection for a key, or the default."""
        try:
            blob = self.backend.read(key)
        except OSError:
            _logger.exception("Error reading %s from storage", key)
            return default
        if blob is None:
            return default
        try:
            return self._adapter(key).validate_json(blob)
        except ValueError:
            _logger.exception("Error decoding %s from storage", key)
            return default

    def save(self, key: str, value: object) -> None:
        """Serialize and write a collection; failures are logged only."""
        try:
            blob = self._adapter(key).dump_json(value)
            self.backend.write(key, blob)
        except Exception:
            _logger.exception("Error writing %s to storage", key)

    def _adapter(self, key: str) -> TypeAdapter[Any]:
        adapter = self._adapters.get(key)
        if adapter is None:
            if key not in self.types:
                raise KeyError(f"No collection type registered for {key!r}")
            adapter = TypeAdapter(self.types[key])
            self._adapters[key] = adapter
        return adapter

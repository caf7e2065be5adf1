"""Journal service with optional generative polish and metadata."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from uuid import uuid4

from wellness_tracker.domain.assistant import JournalMetadata, normalize_tags
from wellness_tracker.domain.journal import JournalEntry
from wellness_tracker.services.assistant import AssistantService
from wellness_tracker.services.collections import (
    InvalidInputError,
    JournalLog,
    current_timestamp,
)

UNTITLED_ENTRY = "Untitled Entry"

_logger = logging.getLogger(__name__)


@dataclass
class JournalService:
    """Saves journal entries and runs the assistant helpers on drafts."""

    assistant: AssistantService
    entries: JournalLog

    async def polish(self, content: str) -> str:
        """Return a polished draft, or the draft unchanged if polishing fails."""
        if not content.strip():
            return content
        try:
            return await self.assistant.polish_journal(content)
        except Exception:
            _logger.exception("Error polishing journal content")
            return content

    async def generate_metadata(self, content: str) -> JournalMetadata | None:
        """Return a generated title and tags, or None on failure."""
        if not content.strip():
            return None
        try:
            return await self.assistant.generate_journal_metadata(content)
        except Exception:
            _logger.exception("Error generating journal metadata")
            return None

    async def save_entry(
        self,
        content: str,
        title: str | None = None,
        tags: Iterable[str] | None = None,
        *,
        generate_metadata: bool = True,
    ) -> JournalEntry:
        """Save a draft as an entry.

        Metadata is generated when neither a title nor tags are supplied and
        ``generate_metadata`` is set; any gap falls back to "Untitled Entry"
        and no tags.
        """
        if not content.strip():
            raise InvalidInputError("Journal entry is empty")
        if title is None and tags is None and generate_metadata:
            metadata = await self.generate_metadata(content)
            if metadata is not None:
                title, tags = metadata.title, metadata.tags
        entry = JournalEntry(
            id=uuid4(),
            content=content,
            title=(title or "").strip() or UNTITLED_ENTRY,
            tags=normalize_tags(tags or ()),
            timestamp=current_timestamp(),
        )
        self.entries.append(entry)
        return entry

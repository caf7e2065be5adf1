"""Support chat service with guaranteed replies."""

import logging
from dataclasses import dataclass
from uuid import uuid4

from wellness_tracker.domain.chat import ChatMessage, ChatRole
from wellness_tracker.services.assistant import (
    AssistantResponseError,
    AssistantService,
    AssistantUnavailableError,
)
from wellness_tracker.services.collections import (
    ChatHistory,
    InvalidInputError,
    current_timestamp,
)

EMPTY_REPLY_MESSAGE = "I'm here for you, but I'm having trouble connecting right now."
CONNECTION_FAILED_MESSAGE = (
    "I'm having trouble connecting. Please check your internet or try again later."
)

_logger = logging.getLogger(__name__)


@dataclass
class SupportChatService:
    """Runs one chat turn: a user message followed by exactly one reply."""

    assistant: AssistantService
    history: ChatHistory
    history_limit: int = 40

    async def send_message(self, text: str) -> tuple[ChatMessage, ChatMessage]:
        """Append the user's message and the model's reply (or a fallback)."""
        if not text.strip():
            raise InvalidInputError("Chat message is empty")
        prior = self.history.recent(self.history_limit)
        user_message = _message(ChatRole.USER, text)
        self.history.append(user_message)
        try:
            reply_text = await self.assistant.reply(prior, text)
        except AssistantResponseError:
            _logger.warning("Support chat reply was empty")
            reply_text = EMPTY_REPLY_MESSAGE
        except AssistantUnavailableError as exc:
            _logger.warning("Support chat failed to reach the assistant: %s", exc)
            reply_text = CONNECTION_FAILED_MESSAGE
        except Exception:
            _logger.exception("Support chat reply failed")
            reply_text = CONNECTION_FAILED_MESSAGE
        reply = _message(ChatRole.MODEL, reply_text)
        self.history.append(reply)
        return user_message, reply


def _message(role: ChatRole, text: str) -> ChatMessage:
    return ChatMessage(id=uuid4(), role=role, text=text, timestamp=current_timestamp())

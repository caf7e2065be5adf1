"""Shared test fixtures."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from wellness_tracker.config import Settings
from wellness_tracker.containers import AppContainer
from wellness_tracker.domain.chat import ChatRole
from wellness_tracker.services.assistant import (
    AssistantService,
    AssistantUnavailableError,
    GenerativeClient,
)
from wellness_tracker.services.store import RecordStore, StorageBackend
from wellness_tracker.state import WellnessState


@dataclass
class InMemoryStorageBackend(StorageBackend):
    """In-memory storage backend for tests."""

    blobs: dict[str, bytes] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)

    def read(self, key: str) -> bytes | None:
        return self.blobs.get(key)

    def write(self, key: str, data: bytes) -> None:
        self.writes.append(key)
        self.blobs[key] = data


@dataclass
class FailingStorageBackend(StorageBackend):
    """Backend whose reads and writes always fail."""

    def read(self, key: str) -> bytes | None:
        raise OSError("disk unavailable")

    def write(self, key: str, data: bytes) -> None:
        raise OSError("disk full")


@dataclass
class FakeGenerativeClient(GenerativeClient):
    """Fake generative client returning canned payloads per task."""

    structured: dict[str, object] = field(
        default_factory=lambda: {
            "meal_analysis": {
                "name": "Salad",
                "calories": 300,
                "protein": 10,
                "carbs": 20,
                "fats": 15,
            },
            "journal_metadata": {
                "title": "A calm morning",
                "tags": ["calm", "morning", "gratitude"],
            },
        }
    )
    text: str | None = "You're doing great. Keep going!"
    error: Exception | None = None
    structured_calls: list[dict[str, object]] = field(default_factory=list)
    text_calls: list[dict[str, object]] = field(default_factory=list)

    async def generate_structured(
        self,
        *,
        prompt: str,
        schema: dict[str, object],
        schema_name: str,
    ) -> dict[str, object]:
        self.structured_calls.append(
            {"prompt": prompt, "schema": schema, "schema_name": schema_name}
        )
        if self.error is not None:
            raise self.error
        return self.structured[schema_name]

    async def generate_text(
        self,
        *,
        messages: Sequence[tuple[ChatRole, str]],
        instructions: str | None = None,
    ) -> str:
        self.text_calls.append(
            {"messages": list(messages), "instructions": instructions}
        )
        if self.error is not None:
            raise self.error
        return self.text or ""


def unavailable() -> AssistantUnavailableError:
    return AssistantUnavailableError("connection refused")


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(openai_api_key="openai-key", data_dir=tmp_path / "data")


@pytest.fixture
def backend() -> InMemoryStorageBackend:
    return InMemoryStorageBackend()


@pytest.fixture
def store(backend: InMemoryStorageBackend) -> RecordStore:
    return RecordStore(backend)


@pytest.fixture
def generative_client() -> FakeGenerativeClient:
    return FakeGenerativeClient()


@pytest.fixture
def assistant(generative_client: FakeGenerativeClient) -> AssistantService:
    return AssistantService(client=generative_client)


@pytest.fixture
def state(store: RecordStore, assistant: AssistantService) -> WellnessState:
    return WellnessState.load(store, assistant)


@pytest.fixture
def container(
    settings: Settings,
    store: RecordStore,
    assistant: AssistantService,
    state: WellnessState,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        store=store,
        assistant_service=assistant,
        state=state,
        close_resources=close_resources,
    )

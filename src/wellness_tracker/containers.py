"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from wellness_tracker.adapters.file_storage import FileStorageBackend
from wellness_tracker.adapters.openai_generative_client import OpenAIGenerativeClient
from wellness_tracker.config import Settings
from wellness_tracker.services.assistant import AssistantService
from wellness_tracker.services.store import RecordStore
from wellness_tracker.state import WellnessState


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: RecordStore
    assistant_service: AssistantService
    state: WellnessState
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    store = RecordStore(FileStorageBackend.create(resolved_settings.data_dir))
    openai_client = OpenAIGenerativeClient.create(
        api_key=resolved_settings.openai_api_key,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
    )
    assistant_service = AssistantService(client=openai_client)
    state = WellnessState.load(
        store,
        assistant_service,
        calorie_goal=resolved_settings.daily_calorie_goal,
        water_goal_ml=resolved_settings.daily_water_goal_ml,
        chat_history_limit=resolved_settings.chat_history_limit,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        store=store,
        assistant_service=assistant_service,
        state=state,
        close_resources=close_resources,
    )

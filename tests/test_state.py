"""Tests for the session state and view routing."""

import asyncio
from dataclasses import dataclass, field

import pytest

from wellness_tracker.services.assistant import AssistantService
from wellness_tracker.services.store import RecordStore
from wellness_tracker.state import InteractionInProgressError, WellnessState
from wellness_tracker.views import View
from tests.conftest import FakeGenerativeClient, InMemoryStorageBackend


@dataclass
class BlockingGenerativeClient(FakeGenerativeClient):
    """Fake client that waits until released before answering."""

    release: asyncio.Event = field(default_factory=asyncio.Event)

    async def generate_structured(self, **kwargs) -> dict[str, object]:  # type: ignore[no-untyped-def]
        await self.release.wait()
        return await super().generate_structured(**kwargs)


def test_unknown_view_falls_back_to_overview(state: WellnessState) -> None:
    assert state.render_view("settings")["view"] == "overview"
    assert state.render_view(None)["view"] == "overview"
    assert View.parse("support-chat") is View.SUPPORT_CHAT


def test_overview_reflects_logged_meal_and_water(state: WellnessState) -> None:
    asyncio.run(state.add_meal("salad"))
    state.add_water(250)
    state.add_water(500)

    overview = state.render_view("overview")

    summary = overview["summary"]
    assert summary.calories == 300
    assert summary.calorie_percentage == 15
    assert summary.water_ml == 750
    assert summary.water_percentage == 30
    assert summary.macros.protein == 10


def test_switching_views_does_not_change_collections(
    state: WellnessState, backend: InMemoryStorageBackend
) -> None:
    state.add_water(250)
    writes = list(backend.writes)

    for view in View:
        state.render_view(view.value)

    assert backend.writes == writes
    assert len(state.water_logs) == 1


def test_hydration_view_lists_recent_entries_newest_first(
    state: WellnessState,
) -> None:
    for amount in (250, 500, 250, 500):
        state.add_water(amount)

    view = state.render_view("hydration")

    assert view["total_ml"] == 1500
    assert view["percentage"] == 60
    assert view["can_undo"] is True
    assert view["recent"] == list(reversed(state.water_logs))[:3]
    assert view["quick_add_ml"] == [250, 500]


def test_journal_view_lists_newest_first(state: WellnessState) -> None:
    first = asyncio.run(state.save_journal_entry("one", generate_metadata=False))
    second = asyncio.run(state.save_journal_entry("two", generate_metadata=False))

    assert state.render_view("journal")["entries"] == [second, first]


def test_state_reloads_from_store(
    state: WellnessState, store: RecordStore, assistant: AssistantService
) -> None:
    asyncio.run(state.add_meal("salad"))
    asyncio.run(state.send_chat_message("hi"))
    state.add_water(500)
    asyncio.run(state.save_journal_entry("note"))

    reloaded = WellnessState.load(store, assistant)

    assert reloaded.meals == state.meals
    assert reloaded.water_logs == state.water_logs
    assert reloaded.chat_messages == state.chat_messages
    assert reloaded.journal_entries == state.journal_entries


def test_second_submission_is_rejected_while_call_outstanding(
    store: RecordStore,
) -> None:
    async def scenario() -> tuple[WellnessState, bool]:
        client = BlockingGenerativeClient()
        state = WellnessState.load(store, AssistantService(client=client))
        first = asyncio.create_task(state.add_meal("salad"))
        await asyncio.sleep(0)
        busy = state.render_view("diet")["busy"]
        with pytest.raises(InteractionInProgressError):
            await state.add_meal("salad again")
        client.release.set()
        await first
        return state, busy

    state, busy = asyncio.run(scenario())

    assert busy is True
    assert len(state.meals) == 1
    assert state.is_busy(View.DIET) is False


def test_failed_call_releases_the_view(store: RecordStore) -> None:
    client = FakeGenerativeClient(error=RuntimeError("boom"))
    state = WellnessState.load(store, AssistantService(client=client))

    with pytest.raises(RuntimeError):
        asyncio.run(state.add_meal("salad"))

    assert state.is_busy(View.DIET) is False
    assert state.meals == ()

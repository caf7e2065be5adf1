"""Session state owning the four collections and their mutations."""

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from uuid import UUID

from wellness_tracker.domain.assistant import JournalMetadata
from wellness_tracker.domain.chat import ChatMessage
from wellness_tracker.domain.diet import Meal
from wellness_tracker.domain.hydration import WaterLog
from wellness_tracker.domain.journal import JournalEntry
from wellness_tracker.services.assistant import AssistantService
from wellness_tracker.services.collections import (
    ChatHistory,
    JournalLog,
    MealLog,
    WaterLogs,
)
from wellness_tracker.services.diet import DietService
from wellness_tracker.services.hydration import HydrationService
from wellness_tracker.services.journal import JournalService
from wellness_tracker.services.store import RecordStore
from wellness_tracker.services.support_chat import SupportChatService
from wellness_tracker.views import (
    View,
    diet_view,
    hydration_view,
    journal_view,
    overview_view,
    support_chat_view,
)


class InteractionInProgressError(Exception):
    """A view already has an assistant call outstanding."""

    def __init__(self, view: View) -> None:
        super().__init__(f"An interaction is already in progress for {view.value}")
        self.view = view


@dataclass
class WellnessState:
    """Single owner of the tracker's collections for the running session.

    Views read through ``render_view`` and change data only through the
    mutation methods below; every mutation is written through to storage.
    """

    diet: DietService
    hydration: HydrationService
    support_chat: SupportChatService
    journal: JournalService
    calorie_goal: int = 2000
    water_goal_ml: int = 2500
    _busy: set[View] = field(default_factory=set, init=False, repr=False)

    @classmethod
    def load(
        cls,
        store: RecordStore,
        assistant: AssistantService,
        *,
        calorie_goal: int = 2000,
        water_goal_ml: int = 2500,
        chat_history_limit: int = 40,
    ) -> "WellnessState":
        """Restore every collection from the store and wire the services."""
        return cls(
            diet=DietService(assistant=assistant, meals=MealLog.load(store)),
            hydration=HydrationService(logs=WaterLogs.load(store)),
            support_chat=SupportChatService(
                assistant=assistant,
                history=ChatHistory.load(store),
                history_limit=chat_history_limit,
            ),
            journal=JournalService(assistant=assistant, entries=JournalLog.load(store)),
            calorie_goal=calorie_goal,
            water_goal_ml=water_goal_ml,
        )

    @property
    def meals(self) -> tuple[Meal, ...]:
        return self.diet.meals.items

    @property
    def water_logs(self) -> tuple[WaterLog, ...]:
        return self.hydration.logs.items

    @property
    def chat_messages(self) -> tuple[ChatMessage, ...]:
        return self.support_chat.history.items

    @property
    def journal_entries(self) -> tuple[JournalEntry, ...]:
        return self.journal.entries.items

    def is_busy(self, view: View) -> bool:
        """Return True while a view's assistant call is outstanding."""
        return view in self._busy

    @contextmanager
    def interaction(self, view: View) -> Iterator[None]:
        """Reject a second submission from a view until the first completes."""
        if view in self._busy:
            raise InteractionInProgressError(view)
        self._busy.add(view)
        try:
            yield
        finally:
            self._busy.discard(view)

    async def add_meal(self, description: str) -> Meal:
        with self.interaction(View.DIET):
            return await self.diet.log_meal(description)

    def remove_meal(self, meal_id: UUID) -> tuple[Meal, ...]:
        return self.diet.remove_meal(meal_id)

    def add_water(self, amount_ml: int) -> WaterLog:
        return self.hydration.add_water(amount_ml)

    def remove_last_water_log(self) -> WaterLog | None:
        return self.hydration.undo_last()

    async def send_chat_message(self, text: str) -> tuple[ChatMessage, ChatMessage]:
        with self.interaction(View.SUPPORT_CHAT):
            return await self.support_chat.send_message(text)

    async def polish_journal(self, content: str) -> str:
        with self.interaction(View.JOURNAL):
            return await self.journal.polish(content)

    async def generate_journal_metadata(self, content: str) -> JournalMetadata | None:
        with self.interaction(View.JOURNAL):
            return await self.journal.generate_metadata(content)

    async def save_journal_entry(
        self,
        content: str,
        title: str | None = None,
        tags: Iterable[str] | None = None,
        *,
        generate_metadata: bool = True,
    ) -> JournalEntry:
        with self.interaction(View.JOURNAL):
            return await self.journal.save_entry(
                content, title, tags, generate_metadata=generate_metadata
            )

    def render_view(self, selector: str | None) -> dict[str, object]:
        """Build the view model for a selector; unknown selectors show the overview."""
        view = View.parse(selector)
        if view is View.DIET:
            body = diet_view(self.meals)
        elif view is View.HYDRATION:
            body = hydration_view(self.water_logs, self.water_goal_ml)
        elif view is View.SUPPORT_CHAT:
            body = support_chat_view(self.chat_messages)
        elif view is View.JOURNAL:
            body = journal_view(self.journal_entries)
        else:
            body = overview_view(
                self.meals, self.water_logs, self.calorie_goal, self.water_goal_ml
            )
        return {"view": view.value, "busy": self.is_busy(view), **body}

"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from wellness_tracker.api.models import (
    ChatRequest,
    JournalDraft,
    JournalEntryRequest,
    MealRequest,
    WaterRequest,
)
from wellness_tracker.app_logging import configure_logging
from wellness_tracker.containers import AppContainer
from wellness_tracker.domain.chat import ChatMessage
from wellness_tracker.domain.diet import Meal
from wellness_tracker.domain.hydration import WaterLog
from wellness_tracker.domain.journal import JournalEntry
from wellness_tracker.services.collections import InvalidInputError
from wellness_tracker.services.diet import MealAnalysisError
from wellness_tracker.state import InteractionInProgressError, WellnessState

_UNPROCESSABLE = 422


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.exception_handler(InteractionInProgressError)
    async def interaction_in_progress(
        request: Request, exc: InteractionInProgressError
    ) -> JSONResponse:
        logger.info("Rejected duplicate submission for %s", exc.view.value)
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)}
        )

    @app.exception_handler(InvalidInputError)
    async def invalid_input(request: Request, exc: InvalidInputError) -> JSONResponse:
        return JSONResponse(
            status_code=_UNPROCESSABLE,
            content={"detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/views/{view}")
    async def render_view(view: str, request: Request) -> dict[str, object]:
        """Return the view model for a screen."""
        return _state(request).render_view(view)

    @app.post("/diet/meals", status_code=status.HTTP_201_CREATED)
    async def add_meal(payload: MealRequest, request: Request) -> Meal:
        """Analyze a described meal and log it."""
        try:
            return await _state(request).add_meal(payload.description)
        except MealAnalysisError as exc:
            raise HTTPException(
                status_code=(
                    status.HTTP_502_BAD_GATEWAY if exc.unavailable else _UNPROCESSABLE
                ),
                detail={"message": exc.message, "description": exc.description},
            ) from exc

    @app.delete("/diet/meals/{meal_id}")
    async def remove_meal(meal_id: UUID, request: Request) -> dict[str, object]:
        """Remove a meal; unknown ids are ignored."""
        meals = _state(request).remove_meal(meal_id)
        return {"meals": list(meals)}

    @app.post("/hydration/logs", status_code=status.HTTP_201_CREATED)
    async def add_water(payload: WaterRequest, request: Request) -> WaterLog:
        """Log a glass or bottle of water."""
        return _state(request).add_water(payload.amount_ml)

    @app.delete("/hydration/logs/last")
    async def undo_water(request: Request) -> dict[str, object]:
        """Undo the most recent water entry."""
        removed = _state(request).remove_last_water_log()
        return {"removed": removed}

    @app.post("/support/messages", status_code=status.HTTP_201_CREATED)
    async def send_message(
        payload: ChatRequest, request: Request
    ) -> dict[str, ChatMessage]:
        """Send a chat message and return it with the coach's reply."""
        user_message, reply = await _state(request).send_chat_message(payload.text)
        return {"message": user_message, "reply": reply}

    @app.post("/journal/polish")
    async def polish_journal(payload: JournalDraft, request: Request) -> dict[str, str]:
        """Return polished journal content (unchanged on failure)."""
        content = await _state(request).polish_journal(payload.content)
        return {"content": content}

    @app.post("/journal/metadata")
    async def journal_metadata(
        payload: JournalDraft, request: Request
    ) -> dict[str, object]:
        """Suggest a title and tags for a draft."""
        metadata = await _state(request).generate_journal_metadata(payload.content)
        if metadata is None:
            return {"title": None, "tags": []}
        return {"title": metadata.title, "tags": metadata.tags}

    @app.post("/journal/entries", status_code=status.HTTP_201_CREATED)
    async def save_journal_entry(
        payload: JournalEntryRequest, request: Request
    ) -> JournalEntry:
        """Save a journal entry."""
        return await _state(request).save_journal_entry(
            payload.content,
            payload.title,
            payload.tags,
            generate_metadata=payload.generate_metadata,
        )

    return app


def _state(request: Request) -> WellnessState:
    container: AppContainer = request.app.state.container
    return container.state

"""Tests for the OpenAI generative adapter."""

import asyncio
import json

import httpx
import openai
import pytest

from wellness_tracker.adapters.openai_generative_client import OpenAIGenerativeClient
from wellness_tracker.domain.chat import ChatRole
from wellness_tracker.services.assistant import (
    AssistantResponseError,
    AssistantUnavailableError,
)


class _FakeResponses:
    def __init__(self, output_text: str = "", error: Exception | None = None) -> None:
        self.output_text = output_text
        self.error = error
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        if self.error is not None:
            raise self.error
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, responses: _FakeResponses) -> None:
        self.responses = responses


def _client(
    responses: _FakeResponses, reasoning_effort: str | None = None
) -> OpenAIGenerativeClient:
    return OpenAIGenerativeClient(
        client=_FakeOpenAI(responses),
        model="gpt-5-mini",
        reasoning_effort=reasoning_effort,
    )


def test_generate_structured_sends_strict_schema() -> None:
    responses = _FakeResponses(output_text=json.dumps({"title": "t", "tags": []}))
    client = _client(responses, reasoning_effort="low")

    result = asyncio.run(
        client.generate_structured(
            prompt="Tag this",
            schema={"type": "object"},
            schema_name="journal_metadata",
        )
    )

    assert result == {"title": "t", "tags": []}
    payload = responses.last_payload
    assert payload is not None
    assert payload["model"] == "gpt-5-mini"
    assert payload["store"] is False
    assert payload["reasoning"] == {"effort": "low"}
    assert payload["input"] == [{"role": "user", "content": "Tag this"}]
    assert payload["text"]["format"]["strict"] is True
    assert payload["text"]["format"]["name"] == "journal_metadata"


def test_generate_structured_rejects_empty_and_invalid_output() -> None:
    with pytest.raises(AssistantResponseError):
        asyncio.run(
            _client(_FakeResponses(output_text="")).generate_structured(
                prompt="p", schema={}, schema_name="meal_analysis"
            )
        )
    with pytest.raises(AssistantResponseError):
        asyncio.run(
            _client(_FakeResponses(output_text="not json")).generate_structured(
                prompt="p", schema={}, schema_name="meal_analysis"
            )
        )


def test_generate_text_maps_roles_and_instructions() -> None:
    responses = _FakeResponses(output_text="Hello there")
    client = _client(responses)

    text = asyncio.run(
        client.generate_text(
            messages=[
                (ChatRole.USER, "hi"),
                (ChatRole.MODEL, "hey"),
                (ChatRole.USER, "sad"),
            ],
            instructions="Be kind",
        )
    )

    assert text == "Hello there"
    payload = responses.last_payload
    assert payload is not None
    assert "reasoning" not in payload
    assert payload["instructions"] == "Be kind"
    assert [item["role"] for item in payload["input"]] == ["user", "assistant", "user"]


def test_transport_errors_become_unavailable() -> None:
    request = httpx.Request("POST", "https://api.openai.com/v1/responses")
    responses = _FakeResponses(error=openai.APIConnectionError(request=request))
    client = _client(responses)

    with pytest.raises(AssistantUnavailableError):
        asyncio.run(client.generate_text(messages=[(ChatRole.USER, "hi")]))

"""OpenAI Responses API client for the assistant tasks."""

import json
from collections.abc import Sequence
from dataclasses import dataclass

from openai import AsyncOpenAI, OpenAIError

from wellness_tracker.domain.chat import ChatRole
from wellness_tracker.services.assistant import (
    AssistantResponseError,
    AssistantUnavailableError,
    GenerativeClient,
)

_API_ROLES = {ChatRole.USER: "user", ChatRole.MODEL: "assistant"}


@dataclass
class OpenAIGenerativeClient(GenerativeClient):
    """Generative client backed by the OpenAI Responses API."""

    client: AsyncOpenAI
    model: str
    reasoning_effort: str | None = None
    store: bool = False

    @classmethod
    def create(
        cls,
        api_key: str,
        model: str,
        reasoning_effort: str | None = None,
        store: bool = False,
    ) -> "OpenAIGenerativeClient":
        """Create an OpenAI generative client."""
        return cls(
            client=AsyncOpenAI(api_key=api_key),
            model=model,
            reasoning_effort=reasoning_effort,
            store=store,
        )

    async def generate_structured(
        self,
        *,
        prompt: str,
        schema: dict[str, object],
        schema_name: str,
    ) -> dict[str, object]:
        """Call the Responses API with a strict JSON schema output format."""
        request_payload = self._base_payload()
        request_payload["input"] = [{"role": "user", "content": prompt}]
        request_payload["text"] = {
            "format": {
                "type": "json_schema",
                "name": schema_name,
                "strict": True,
                "schema": schema,
            }
        }
        output_text = await self._create(request_payload)
        if not output_text:
            raise AssistantResponseError("OpenAI returned an empty response")
        try:
            return json.loads(output_text)
        except json.JSONDecodeError as exc:
            raise AssistantResponseError("OpenAI returned invalid JSON") from exc

    async def generate_text(
        self,
        *,
        messages: Sequence[tuple[ChatRole, str]],
        instructions: str | None = None,
    ) -> str:
        """Call the Responses API with role-tagged input and return plain text."""
        request_payload = self._base_payload()
        request_payload["input"] = [
            {"role": _API_ROLES[role], "content": text} for role, text in messages
        ]
        if instructions:
            request_payload["instructions"] = instructions
        return await self._create(request_payload)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()

    def _base_payload(self) -> dict[str, object]:
        payload: dict[str, object] = {"model": self.model, "store": self.store}
        if self.reasoning_effort:
            payload["reasoning"] = {"effort": self.reasoning_effort}
        return payload

    async def _create(self, request_payload: dict[str, object]) -> str:
        try:
            response = await self.client.responses.create(**request_payload)
        except OpenAIError as exc:
            raise AssistantUnavailableError(str(exc)) from exc
        return response.output_text or ""

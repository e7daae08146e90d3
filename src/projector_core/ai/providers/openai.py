"""OpenAI Chat Completions provider (and base for OpenAI-compatible APIs)."""

from __future__ import annotations

from typing import Any

from projector_core.ai.base import OpinionProvider
from projector_core.ai.registry import register_provider
from projector_core.ai.response import decode_json_object
from projector_core.errors import MalformedResponseError


class ChatCompletionsProvider(OpinionProvider):
    """Any backend speaking the ``POST {base_url}/chat/completions`` dialect."""

    async def produce_opinion(self, prompt: str) -> dict[str, Any]:
        api_key = self._require_api_key()
        http = await self._get_http()
        resp = await http.post(
            f"{self.base_url}/chat/completions",
            headers={"Authorization": f"Bearer {api_key}"},
            json={
                "model": self.config.model,
                "messages": [{"role": "user", "content": prompt}],
                "response_format": {"type": "json_object"},
            },
        )
        resp.raise_for_status()
        body = resp.json()

        try:
            content = body["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise MalformedResponseError(f"unexpected {self.name} response structure") from exc
        if not content:
            raise MalformedResponseError(f"empty response from {self.name}")
        return decode_json_object(content)


@register_provider
class OpenAIProvider(ChatCompletionsProvider):
    name = "openai"

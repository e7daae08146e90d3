"""Anthropic Messages API provider."""

from __future__ import annotations

from typing import Any

from projector_core.ai.base import OpinionProvider
from projector_core.ai.registry import register_provider
from projector_core.ai.response import decode_json_object
from projector_core.errors import MalformedResponseError

ANTHROPIC_VERSION = "2023-06-01"


@register_provider
class ClaudeProvider(OpinionProvider):
    """Claude has no JSON response mode; the object is pulled out of the text block."""

    name = "claude"

    async def produce_opinion(self, prompt: str) -> dict[str, Any]:
        api_key = self._require_api_key()
        http = await self._get_http()
        resp = await http.post(
            f"{self.base_url}/messages",
            headers={
                "x-api-key": api_key,
                "anthropic-version": ANTHROPIC_VERSION,
            },
            json={
                "model": self.config.model,
                "max_tokens": self.config.max_tokens,
                "messages": [{"role": "user", "content": prompt}],
            },
        )
        resp.raise_for_status()
        body = resp.json()

        blocks = body.get("content") if isinstance(body, dict) else None
        if not isinstance(blocks, list) or not blocks:
            raise MalformedResponseError("unexpected Claude response structure")
        first = blocks[0]
        if not isinstance(first, dict) or first.get("type") != "text" or not isinstance(first.get("text"), str):
            raise MalformedResponseError("unexpected Claude response structure")
        return decode_json_object(first["text"])

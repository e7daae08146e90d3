"""DeepSeek provider — OpenAI-compatible chat completions at api.deepseek.com."""

from __future__ import annotations

from projector_core.ai.providers.openai import ChatCompletionsProvider
from projector_core.ai.registry import register_provider


@register_provider
class DeepSeekProvider(ChatCompletionsProvider):
    name = "deepseek"

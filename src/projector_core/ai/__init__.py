"""External opinion adapter — LLM providers behind one capability interface."""

from projector_core.ai.base import OpinionProvider
from projector_core.ai.enhancer import get_enhanced_signal
from projector_core.ai.prompt import format_prompt
from projector_core.ai.registry import PROVIDER_REGISTRY, build_provider, register_provider
from projector_core.ai.response import parse_provider_response

__all__ = [
    "OpinionProvider",
    "PROVIDER_REGISTRY",
    "build_provider",
    "format_prompt",
    "get_enhanced_signal",
    "parse_provider_response",
    "register_provider",
]

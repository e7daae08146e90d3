"""Provider registry — decorated classes are auto-registered."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from projector_core.errors import ExternalOpinionError

if TYPE_CHECKING:
    from projector_core.ai.base import OpinionProvider
    from projector_core.config.schema import AISettings

PROVIDER_REGISTRY: dict[str, type[OpinionProvider]] = {}


def register_provider(cls: type[OpinionProvider]) -> type[OpinionProvider]:
    """Class decorator that adds a provider to the global registry."""
    if not hasattr(cls, "name") or not cls.name:
        raise ValueError(f"Provider class {cls.__name__} must define a 'name' attribute")
    if cls.name in PROVIDER_REGISTRY:
        raise ValueError(f"Duplicate provider name: {cls.name!r}")
    PROVIDER_REGISTRY[cls.name] = cls
    return cls


def build_provider(
    name: str,
    settings: AISettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> OpinionProvider:
    """Instantiate the provider *name* with its section of *settings*."""
    cls = PROVIDER_REGISTRY.get(name)
    config = settings.providers.get(name)
    if cls is None or config is None:
        raise ExternalOpinionError(f"Unsupported or unconfigured AI provider: {name}")
    return cls(config, timeout_s=settings.timeout_s, transport=transport)

"""Opinion provider abstract base class."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import httpx

from projector_core.config.schema import ProviderConfig
from projector_core.errors import MissingCredentialsError


class OpinionProvider(ABC):
    """An LLM backend that turns a prompt into ``{signal, confidence, reasons}``.

    Subclasses set ``name`` and implement produce_opinion(). The HTTP client
    is created lazily; pass *transport* to route requests somewhere else.
    """

    name: str

    def __init__(
        self,
        config: ProviderConfig,
        timeout_s: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    async def _get_http(self) -> httpx.AsyncClient:
        if self._http is None or self._http.is_closed:
            self._http = httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport)
        return self._http

    async def close(self) -> None:
        if self._http and not self._http.is_closed:
            await self._http.aclose()

    def _require_api_key(self) -> str:
        if not self.config.api_key:
            raise MissingCredentialsError(f"{self.name} API key is missing")
        return self.config.api_key

    @abstractmethod
    async def produce_opinion(self, prompt: str) -> dict[str, Any]:
        """Send *prompt* and return the decoded JSON object from the reply.

        Raises ExternalOpinionError (or httpx.HTTPError) on failure; the
        payload itself is validated by the caller.
        """
        ...

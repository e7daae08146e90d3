"""Validation of provider replies into SignalOpinion."""

from __future__ import annotations

import json
import math
import re
from typing import Any, Literal

from pydantic import BaseModel, Field, StrictFloat, StrictInt, StrictStr, ValidationError, field_validator

from projector_core.errors import MalformedResponseError
from projector_core.models import SignalOpinion, clamp_confidence

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


class ProviderResponse(BaseModel):
    """The ``{signal, confidence, reasons}`` shape every provider must return."""

    signal: Literal["buy", "sell", "hold"]
    confidence: StrictInt | StrictFloat
    reasons: list[StrictStr] = Field(min_length=1)

    @field_validator("signal", mode="before")
    @classmethod
    def _lowercase(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @field_validator("confidence")
    @classmethod
    def _finite(cls, value: int | float) -> int | float:
        if isinstance(value, float) and not math.isfinite(value):
            raise ValueError("confidence must be a finite number")
        return value


def decode_json_object(text: Any) -> dict[str, Any]:
    """Decode the JSON object in *text*, tolerating prose around it."""
    if not isinstance(text, str):
        raise MalformedResponseError(f"response content is {type(text).__name__}, not text")
    match = _JSON_OBJECT.search(text)
    candidate = match.group(0) if match else text
    try:
        payload = json.loads(candidate)
    except json.JSONDecodeError as exc:
        raise MalformedResponseError(f"response is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise MalformedResponseError("response JSON is not an object")
    return payload


def parse_provider_response(payload: Any, provider: str) -> SignalOpinion:
    """Validate *payload* and convert it to an opinion tagged with *provider*."""
    try:
        parsed = ProviderResponse.model_validate(payload)
    except ValidationError as exc:
        raise MalformedResponseError(
            f"AI response has invalid structure: {exc.error_count()} error(s)"
        ) from exc
    return SignalOpinion(
        signal=parsed.signal,
        confidence=clamp_confidence(parsed.confidence),
        reasons=list(parsed.reasons),
        source=provider,
    )

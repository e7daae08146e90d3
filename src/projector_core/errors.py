"""Exception hierarchy shared by the analysis pipeline and its collaborators."""

from __future__ import annotations


class ProjectorError(Exception):
    """Base class for all projector errors."""


class InsufficientDataError(ProjectorError):
    """Too few bars, or an indicator could not produce a final value."""


class ProviderUnavailableError(ProjectorError):
    """The market-data provider could not return bars for a symbol."""


class ExternalOpinionError(ProjectorError):
    """An LLM provider failed to produce a usable opinion."""


class MissingCredentialsError(ExternalOpinionError):
    """The selected provider has no API key configured."""


class MalformedResponseError(ExternalOpinionError):
    """The provider answered, but not with {signal, confidence, reasons}."""


class PersistenceError(ProjectorError):
    """Reading or writing the watchlist / signal history failed."""

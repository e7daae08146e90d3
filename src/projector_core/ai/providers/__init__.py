"""Import all provider modules to trigger @register_provider decorators."""

from projector_core.ai.providers import claude  # noqa: F401
from projector_core.ai.providers import deepseek  # noqa: F401
from projector_core.ai.providers import openai  # noqa: F401

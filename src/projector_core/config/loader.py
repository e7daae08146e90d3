"""Config loader — reads YAML, applies PROJECTOR_* and provider env var overrides."""

from __future__ import annotations

import os
from pathlib import Path

import yaml

from projector_core.config.schema import AppConfig

# env var -> (provider, field)
_PROVIDER_ENV = {
    "OPENAI_API_KEY": ("openai", "api_key"),
    "OPENAI_MODEL": ("openai", "model"),
    "CLAUDE_API_KEY": ("claude", "api_key"),
    "CLAUDE_MODEL": ("claude", "model"),
    "CLAUDE_PROMPT_TEMPLATE": ("claude", "prompt_template"),
    "DEEPSEEK_API_KEY": ("deepseek", "api_key"),
    "DEEPSEEK_MODEL": ("deepseek", "model"),
    "DEEPSEEK_PROMPT_TEMPLATE": ("deepseek", "prompt_template"),
}

_EMAIL_ENV = {
    "EMAIL_USER": "user",
    "EMAIL_PASS": "password",
    "NOTIFICATION_EMAIL": "notification_email",
}


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from a YAML file, then apply env var overrides.

    If *path* is None or the file doesn't exist, returns defaults.

    Environment variable overrides:
        PROJECTOR_DATABASE_URL  -> database.url
        PROJECTOR_LOG_LEVEL     -> logging.level
        PROJECTOR_LOG_FORMAT    -> logging.format
        PROJECTOR_AI_ENABLED    -> ai.enabled ("true" enables)
        PROJECTOR_AI_PROVIDER   -> ai.provider
        OPENAI_API_KEY, CLAUDE_API_KEY, DEEPSEEK_API_KEY and the *_MODEL
        variables -> ai.providers.<name>.*
        EMAIL_USER, EMAIL_PASS, NOTIFICATION_EMAIL -> email.*
    """
    data: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            with open(p) as f:
                data = yaml.safe_load(f) or {}

    db_url = os.environ.get("PROJECTOR_DATABASE_URL")
    if db_url:
        data.setdefault("database", {})["url"] = db_url

    log_level = os.environ.get("PROJECTOR_LOG_LEVEL")
    if log_level:
        data.setdefault("logging", {})["level"] = log_level

    log_format = os.environ.get("PROJECTOR_LOG_FORMAT")
    if log_format:
        data.setdefault("logging", {})["format"] = log_format

    ai_enabled = os.environ.get("PROJECTOR_AI_ENABLED")
    if ai_enabled:
        data.setdefault("ai", {})["enabled"] = ai_enabled.strip().lower() == "true"

    ai_provider = os.environ.get("PROJECTOR_AI_PROVIDER")
    if ai_provider:
        data.setdefault("ai", {})["provider"] = ai_provider

    for env_name, (provider, field) in _PROVIDER_ENV.items():
        value = os.environ.get(env_name)
        if value:
            providers = data.setdefault("ai", {}).setdefault("providers", {})
            if not providers.get(provider):
                providers[provider] = {}
            providers[provider][field] = value

    for env_name, field in _EMAIL_ENV.items():
        value = os.environ.get(env_name)
        if value:
            data.setdefault("email", {})[field] = value

    return AppConfig.model_validate(data)

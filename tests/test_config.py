"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from projector_core.config import AISettings, AppConfig, load_config
from projector_core.config.schema import DEFAULT_CRYPTO_SYMBOLS, DEFAULT_PROMPT_TEMPLATE
from projector_core.models import MIN_BARS

EXAMPLE = Path(__file__).resolve().parent.parent / "config.yaml.example"

_ENV_VARS = (
    "PROJECTOR_DATABASE_URL",
    "PROJECTOR_LOG_LEVEL",
    "PROJECTOR_LOG_FORMAT",
    "PROJECTOR_AI_ENABLED",
    "PROJECTOR_AI_PROVIDER",
    "OPENAI_API_KEY",
    "OPENAI_MODEL",
    "CLAUDE_API_KEY",
    "CLAUDE_MODEL",
    "CLAUDE_PROMPT_TEMPLATE",
    "DEEPSEEK_API_KEY",
    "DEEPSEEK_MODEL",
    "DEEPSEEK_PROMPT_TEMPLATE",
    "EMAIL_USER",
    "EMAIL_PASS",
    "NOTIFICATION_EMAIL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestAppConfig:
    def test_defaults(self):
        cfg = AppConfig()
        assert cfg.analysis.rsi.oversold == 30
        assert cfg.analysis.rsi.overbought == 70
        assert cfg.analysis.bollinger.std_dev == 2.0
        assert cfg.analysis.signal_threshold == 30
        assert cfg.analysis.support_resistance.lookback == 30
        assert cfg.analysis.min_bars == MIN_BARS == 50
        assert cfg.database.url == "sqlite:///data/projector.db"
        assert cfg.logging.level == "INFO"
        assert cfg.logging.format == "console"
        assert cfg.ai.enabled is False
        assert cfg.ai.provider == "openai"

    def test_crypto_overrides(self):
        cfg = AppConfig()
        assert cfg.crypto.supported_symbols == DEFAULT_CRYPTO_SYMBOLS
        assert cfg.crypto.rsi.oversold == 25
        assert cfg.crypto.rsi.overbought == 75
        assert cfg.crypto.bollinger.std_dev == 2.5

    def test_default_providers(self):
        providers = AISettings().providers
        assert set(providers) == {"openai", "claude", "deepseek"}
        assert providers["openai"].model == "gpt-3.5-turbo"
        assert providers["claude"].base_url == "https://api.anthropic.com/v1"
        assert providers["deepseek"].prompt_template == DEFAULT_PROMPT_TEMPLATE
        assert all(p.api_key is None for p in providers.values())

    def test_partial_provider_override_keeps_defaults(self):
        settings = AISettings(providers={"claude": {"api_key": "k"}})
        assert settings.providers["claude"].api_key == "k"
        assert settings.providers["claude"].model == "claude-3-opus-20240229"
        assert "openai" in settings.providers


class TestLoadConfig:
    def test_load_example_config(self):
        cfg = load_config(EXAMPLE)
        assert cfg.analysis.macd.slow_period == 26
        assert cfg.crypto.rsi.oversold == 25
        assert "BTC-USD" in cfg.crypto.supported_symbols
        assert cfg.ai.providers["deepseek"].model == "deepseek-coder"
        assert cfg.ai.providers["deepseek"].base_url == "https://api.deepseek.com"
        assert cfg.schedule.interval_minutes == 1440

    def test_load_nonexistent_file_returns_defaults(self):
        cfg = load_config("/tmp/nonexistent_config_12345.yaml")
        assert cfg.database.url == "sqlite:///data/projector.db"

    def test_load_none_returns_defaults(self):
        cfg = load_config(None)
        assert cfg.analysis.signal_threshold == 30

    def test_env_override_database_url(self, monkeypatch):
        monkeypatch.setenv("PROJECTOR_DATABASE_URL", "sqlite:///:memory:")
        cfg = load_config(None)
        assert cfg.database.url == "sqlite:///:memory:"

    def test_env_override_logging(self, monkeypatch):
        monkeypatch.setenv("PROJECTOR_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("PROJECTOR_LOG_FORMAT", "json")
        cfg = load_config(None)
        assert cfg.logging.level == "DEBUG"
        assert cfg.logging.format == "json"

    def test_env_override_ai(self, monkeypatch):
        monkeypatch.setenv("PROJECTOR_AI_ENABLED", "true")
        monkeypatch.setenv("PROJECTOR_AI_PROVIDER", "claude")
        monkeypatch.setenv("CLAUDE_API_KEY", "sk-ant")
        monkeypatch.setenv("CLAUDE_MODEL", "claude-3-haiku-20240307")
        cfg = load_config(None)
        assert cfg.ai.enabled is True
        assert cfg.ai.provider == "claude"
        assert cfg.ai.providers["claude"].api_key == "sk-ant"
        assert cfg.ai.providers["claude"].model == "claude-3-haiku-20240307"
        assert cfg.ai.providers["openai"].api_key is None

    def test_env_api_key_applies_over_yaml(self, monkeypatch, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("ai:\n  providers:\n    openai:\n      model: gpt-4o\n")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        cfg = load_config(path)
        assert cfg.ai.providers["openai"].model == "gpt-4o"
        assert cfg.ai.providers["openai"].api_key == "sk-test"

    def test_env_overrides_yaml_values(self, monkeypatch, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("logging:\n  level: INFO\nai:\n  enabled: true\n")
        monkeypatch.setenv("PROJECTOR_LOG_LEVEL", "ERROR")
        monkeypatch.setenv("PROJECTOR_AI_ENABLED", "false")
        cfg = load_config(path)
        assert cfg.logging.level == "ERROR"
        assert cfg.ai.enabled is False

    def test_email_env(self, monkeypatch):
        monkeypatch.setenv("EMAIL_USER", "me@example.com")
        monkeypatch.setenv("EMAIL_PASS", "secret")
        monkeypatch.setenv("NOTIFICATION_EMAIL", "alerts@example.com")
        cfg = load_config(None)
        assert cfg.email.user == "me@example.com"
        assert cfg.email.password == "secret"
        assert cfg.email.notification_email == "alerts@example.com"
        assert cfg.email.smtp_port == 465

    def test_empty_yaml_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        cfg = load_config(path)
        assert cfg.analysis.min_bars == 50

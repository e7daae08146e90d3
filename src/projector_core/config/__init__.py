"""Configuration system."""

from projector_core.config.loader import load_config
from projector_core.config.schema import AISettings, AppConfig

__all__ = ["AISettings", "AppConfig", "load_config"]

"""Configuration management for bulk-summarize."""

from .loader import DEFAULT_CONFIG_PATH, Config, load_config, save_config
from .models import (
    LengthClass,
    LLMConfig,
    ProjectConfig,
    ProviderName,
    SettingsConfig,
    SourceConfig,
    SourceKind,
)

__all__ = [
    "Config",
    "DEFAULT_CONFIG_PATH",
    "LengthClass",
    "LLMConfig",
    "ProjectConfig",
    "ProviderName",
    "SettingsConfig",
    "SourceConfig",
    "SourceKind",
    "load_config",
    "save_config",
]

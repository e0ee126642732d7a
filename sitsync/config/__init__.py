"""Configuration system for sitsync."""

from sitsync.config.loader import ConfigLoadError, YAMLConfigLoader
from sitsync.config.manager import ConfigManager
from sitsync.config.models import (
    NEWLINES,
    DictionariesConfig,
    PathsConfig,
    PublishConfig,
    RulePackConfig,
    ServiceConfig,
    SitSyncConfig,
)

__all__ = [
    "ConfigLoadError",
    "ConfigManager",
    "DictionariesConfig",
    "NEWLINES",
    "PathsConfig",
    "PublishConfig",
    "RulePackConfig",
    "ServiceConfig",
    "SitSyncConfig",
    "YAMLConfigLoader",
]

"""Configuration manager for sitsync."""

from __future__ import annotations

import json
import os
from pathlib import Path
from threading import Lock
from typing import Any, ClassVar

from sitsync.config.loader import YAMLConfigLoader
from sitsync.config.models import SitSyncConfig


def _deep_merge(base: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    merged: dict[str, Any] = dict(base)
    for key, value in updates.items():
        if (
            key in merged
            and isinstance(merged[key], dict)
            and isinstance(value, dict)
        ):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _coerce_env_value(raw: str) -> Any:
    value = raw.strip()
    lowered = value.lower()
    if lowered in {"true", "false"}:
        return lowered == "true"
    if lowered in {"null", "none"}:
        return None
    if value.startswith("[") or value.startswith("{"):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return value


def _collect_env_overrides(prefix: str = "SITSYNC_") -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for key, raw_value in os.environ.items():
        if not key.startswith(prefix):
            continue
        suffix = key[len(prefix) :]
        # SITSYNC_CONFIG selects the file, it is not a setting
        if not suffix or suffix == "CONFIG":
            continue
        path = [p.strip().lower() for p in suffix.split("__") if p.strip()]
        if not path:
            continue
        cursor = overrides
        for part in path[:-1]:
            existing = cursor.get(part)
            if not isinstance(existing, dict):
                existing = {}
                cursor[part] = existing
            cursor = existing
        cursor[path[-1]] = _coerce_env_value(raw_value)
    return overrides


class ConfigManager:
    """Singleton holding the validated configuration for one run."""

    _instance: ClassVar[ConfigManager | None] = None
    _class_lock: ClassVar[Lock] = Lock()

    def __init__(self) -> None:
        self._lock = Lock()
        self._config = SitSyncConfig()
        self._config_path: Path | None = None

    @classmethod
    def instance(cls) -> ConfigManager:
        """Get singleton instance."""
        if cls._instance is not None:
            return cls._instance
        with cls._class_lock:
            if cls._instance is None:
                cls._instance = cls()
        return cls._instance

    @classmethod
    def _reset_for_tests(cls) -> None:
        """Reset singleton state for isolated unit tests."""
        with cls._class_lock:
            cls._instance = None

    @classmethod
    def load(
        cls,
        config_path: str | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> ConfigManager:
        """Load configuration from defaults + YAML + env + runtime overrides."""
        manager = cls.instance()
        resolved = YAMLConfigLoader.resolve_path(config_path)
        yaml_data = YAMLConfigLoader.load_dict(resolved)
        merged = _deep_merge(yaml_data, _collect_env_overrides())
        merged = _deep_merge(merged, overrides or {})
        new_config = SitSyncConfig.model_validate(merged)
        with manager._lock:
            manager._config = new_config
            manager._config_path = resolved if resolved.exists() else None
        return manager

    def get(self) -> SitSyncConfig:
        """Return current config snapshot."""
        with self._lock:
            return self._config

    @property
    def config_path(self) -> Path | None:
        """Path of the YAML file the current config was read from, if any."""
        with self._lock:
            return self._config_path

from __future__ import annotations

"""Configuration loading and access helpers.

This module centralises all declarative settings (summary length, view
defaults, document parsing options, logging). It loads YAML files packaged
with *xml_navigator* and merges them with user overrides located in the
user configuration directory.

On Windows: ``%LOCALAPPDATA%\\XmlNavigator\\config\\*.yml``
On Unix: ``~/.xml_navigator/*.yml``

``XMLNAV_CONFIG_DIR`` overrides the user directory (used by the test-suite).
"""

import logging
import os
from importlib import resources
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)

__all__ = ["ConfigManager", "get_user_config_dir"]


def get_user_config_dir() -> Path:
    """Get the user configuration directory."""
    override = os.environ.get("XMLNAV_CONFIG_DIR")
    if override:
        return Path(override)
    if os.name == 'nt':  # Windows
        local_appdata = os.environ.get('LOCALAPPDATA')
        if local_appdata:
            return Path(local_appdata) / "XmlNavigator" / "config"
        else:
            # Fallback for Windows
            return Path.home() / "AppData" / "Local" / "XmlNavigator" / "config"
    else:  # Unix-like systems
        return Path.home() / ".xml_navigator"


def _read_packaged(filename: str) -> str:
    return resources.files(__package__).joinpath(filename).read_text(encoding="utf-8")


class _Singleton(type):
    _instance: "ConfigManager" | None = None

    def __call__(cls, *args, **kwargs):  # type: ignore[no-self-use]
        if cls._instance is None:
            cls._instance = super().__call__(*args, **kwargs)
        return cls._instance


class ConfigManager(metaclass=_Singleton):
    """Lazy-loads and exposes configuration sections as dictionaries."""

    _DEFAULT_FILENAMES = {
        "navigator": "navigator.yml",
        "logging": "logging.yml",
    }

    def __init__(self) -> None:
        self._data: Dict[str, Dict[str, Any]] = {}
        self._ensure_loaded()

    @classmethod
    def reset_instance(cls) -> None:
        """Forget the loaded configuration so the next call reloads it."""
        cls._instance = None

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------
    def get_navigator_config(self) -> Dict[str, Any]:
        return self._data.get("navigator", {})

    def get_logging_config(self) -> Dict[str, Any]:
        return self._data.get("logging", {})

    def get_section(self, name: str) -> Dict[str, Any]:
        """Return one section of ``navigator.yml`` (``summary``, ``view``...)."""
        section = self.get_navigator_config().get(name, {})
        return section if isinstance(section, dict) else {}

    def get_value(self, section: str, key: str, default: Any = None) -> Any:
        return self.get_section(section).get(key, default)

    # ------------------------------------------------------------------
    # Internal loading logic
    # ------------------------------------------------------------------
    def _ensure_loaded(self) -> None:
        if self._data:
            return  # already loaded

        startup_summary = []
        user_config_dir = get_user_config_dir()

        for key, filename in self._DEFAULT_FILENAMES.items():
            merged_cfg: Dict[str, Any] = {}
            status = "missing"

            # 1. load packaged default
            try:
                packaged_data = yaml.safe_load(_read_packaged(filename)) or {}
                merged_cfg.update(packaged_data)
                status = "loaded"
            except (FileNotFoundError, OSError):
                logger.error("Missing packaged config for %s (%s)", key, filename)
                status = "missing"
            except yaml.YAMLError as exc:
                logger.error("Invalid packaged config for %s (%s): %s", key, filename, exc)
                status = "invalid"

            # 2. load user overrides, merged one section deep
            user_path = user_config_dir / filename
            if user_path.exists():
                try:
                    user_data = yaml.safe_load(user_path.read_text(encoding="utf-8")) or {}
                    _merge_sections(merged_cfg, user_data)
                    if status == "loaded":
                        status = "loaded+overrides"
                except (OSError, yaml.YAMLError) as exc:
                    logger.error("Could not parse user config %s: %s", user_path, exc)

            self._data[key] = merged_cfg
            startup_summary.append(f"{key}: {status}")

        logger.info("Config startup: %s", " | ".join(startup_summary))


def _merge_sections(target: Dict[str, Any], overrides: Any) -> None:
    if not isinstance(overrides, dict):
        return
    for name, value in overrides.items():
        current = target.get(name)
        if isinstance(current, dict) and isinstance(value, dict):
            merged = dict(current)
            merged.update(value)
            target[name] = merged
        else:
            target[name] = value

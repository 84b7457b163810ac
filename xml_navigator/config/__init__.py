"""Configuration files (YAML) and helpers.

`ConfigManager` reads the default files from this folder and merges them
with user overrides; `SettingsStore` persists view settings between
sessions.
"""

from .manager import ConfigManager, get_user_config_dir
from .settings import SettingsStore

__all__ = [
    "ConfigManager",
    "SettingsStore",
    "get_user_config_dir",
]

from __future__ import annotations

"""Persisted application settings.

A small section/key store saved as YAML in the user configuration
directory. Every typed read takes a default which is returned when the key
is absent or its stored value does not parse, so a damaged settings file
never prevents the application from starting.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple, Type, TypeVar, Union

import yaml

from xml_navigator.core.models.view_state import Rect

logger = logging.getLogger(__name__)

__all__ = ["SettingsStore", "LIST_SEPARATOR"]

E = TypeVar("E", bound=Enum)

LIST_SEPARATOR = ";"


class SettingsStore:
    """Section/key settings backed by a YAML file.

    Parameters
    ----------
    path : Path or None
        File the settings are loaded from and flushed to. ``None`` keeps the
        store in memory only.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self._path: Optional[Path] = Path(path) if path is not None else None
        self._data: Dict[str, Dict[str, Any]] = {}

    @property
    def path(self) -> Optional[Path]:
        return self._path

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def load(self) -> "SettingsStore":
        """Read the settings file, starting empty if it is missing or invalid."""
        self._data = {}
        if self._path is None or not self._path.exists():
            return self
        try:
            raw = yaml.safe_load(self._path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as exc:
            logger.warning("Ignoring unreadable settings file %s: %s", self._path, exc)
            return self
        if not isinstance(raw, dict):
            logger.warning("Ignoring malformed settings file %s", self._path)
            return self
        for section, values in raw.items():
            if isinstance(values, dict):
                self._data[str(section)] = {str(k): v for k, v in values.items()}
        logger.debug("Loaded settings from %s", self._path)
        return self

    def flush(self) -> None:
        """Write the settings file. Errors are logged, not raised."""
        if self._path is None:
            return
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                yaml.safe_dump(self._data, default_flow_style=False, sort_keys=True),
                encoding="utf-8",
            )
            logger.debug("Saved settings to %s", self._path)
        except OSError as exc:
            logger.error("Could not save settings to %s: %s", self._path, exc)

    # ------------------------------------------------------------------
    # Raw access
    # ------------------------------------------------------------------
    def has(self, section: str, key: str) -> bool:
        return key in self._data.get(section, {})

    def _get(self, section: str, key: str) -> Any:
        return self._data.get(section, {}).get(key)

    def _set(self, section: str, key: str, value: Any) -> None:
        self._data.setdefault(section, {})[key] = value

    def remove(self, section: str, key: str) -> None:
        self._data.get(section, {}).pop(key, None)

    # ------------------------------------------------------------------
    # Typed reads
    # ------------------------------------------------------------------
    def read_string(self, section: str, key: str, default: str = "") -> str:
        value = self._get(section, key)
        if value is None:
            return default
        return str(value)

    def read_int(self, section: str, key: str, default: int) -> int:
        value = self._get(section, key)
        if value is None or isinstance(value, bool):
            return default
        try:
            return int(value)
        except (TypeError, ValueError):
            logger.debug("Setting %s.%s is not an integer: %r", section, key, value)
            return default

    def read_enum(self, section: str, key: str, enum_type: Type[E], default: E) -> E:
        value = self._get(section, key)
        if value is None:
            return default
        try:
            return enum_type(value)
        except ValueError:
            pass
        if isinstance(value, str):
            member = enum_type.__members__.get(value.upper())
            if member is not None:
                return member
        logger.debug("Setting %s.%s is not a valid %s: %r", section, key, enum_type.__name__, value)
        return default

    def read_rect(self, section: str, key: str, default: Optional[Rect] = None) -> Optional[Rect]:
        """Read a rectangle stored as ``left,top,width,height``."""
        value = self._get(section, key)
        if value is None:
            return default
        parts = value if isinstance(value, (list, tuple)) else str(value).split(",")
        try:
            left, top, width, height = (int(str(p).strip()) for p in parts)
        except (TypeError, ValueError):
            logger.debug("Setting %s.%s is not a rectangle: %r", section, key, value)
            return default
        return Rect(left, top, width, height)

    def read_string_list(self, section: str, key: str, default: Sequence[str] = (),
                         separator: str = LIST_SEPARATOR) -> Tuple[str, ...]:
        """Read a delimited string list; empty items are dropped."""
        value = self._get(section, key)
        if value is None:
            return tuple(default)
        if isinstance(value, (list, tuple)):
            items = [str(v) for v in value]
        else:
            items = str(value).split(separator)
        return tuple(item.strip() for item in items if item.strip())

    # ------------------------------------------------------------------
    # Typed writes
    # ------------------------------------------------------------------
    def write_string(self, section: str, key: str, value: str) -> None:
        self._set(section, key, str(value))

    def write_int(self, section: str, key: str, value: int) -> None:
        self._set(section, key, int(value))

    def write_enum(self, section: str, key: str, value: Enum) -> None:
        self._set(section, key, value.value)

    def write_rect(self, section: str, key: str, value: Rect) -> None:
        self._set(section, key, f"{value.left},{value.top},{value.width},{value.height}")

    def write_string_list(self, section: str, key: str, values: Sequence[str],
                          separator: str = LIST_SEPARATOR) -> None:
        self._set(section, key, separator.join(str(v) for v in values))

from __future__ import annotations

"""Load and save the view state between sessions.

Each field is read and written independently with its own default, so one
bad value never discards the rest. Stored layouts outside the known set are
coerced to the default layout; zero or negative column widths fall back to
the configured default width.
"""

import logging
from typing import Optional, Sequence, Tuple

from xml_navigator.config.settings import SettingsStore
from xml_navigator.core.models.view_state import DEFAULT_LAYOUT, Layout, ViewState

logger = logging.getLogger(__name__)

__all__ = ["ViewStateStore"]

UI_SECTION = "UI"
SEARCH_SECTION = "Search"
MRU_SECTION = "MRU"

LAYOUT_KEY = "Layout"
SPLIT_KEY = "SplitPos"
COLUMNS_KEY = "ColumnWidths"
WINDOW_KEY = "MainWindow"
QUERY_KEY = "LastQuery"
FILES_KEY = "Files"


class ViewStateStore:
    """Translate between :class:`ViewState` and persisted settings.

    Parameters
    ----------
    default_column_width : int, default=100
        Width applied to columns with no valid stored width.
    column_count : int, default=2
        Number of property list columns (the stored list is padded or cut
        to this size).
    max_recent_files : int, default=4
        Capacity of the recently opened files list.
    """

    def __init__(self, default_column_width: int = 100, column_count: int = 2,
                 max_recent_files: int = 4) -> None:
        self.default_column_width = max(1, int(default_column_width))
        self.column_count = max(0, int(column_count))
        self.max_recent_files = max(0, int(max_recent_files))

    # --------------------------------------------------------------------- API

    def load(self, settings: SettingsStore) -> ViewState:
        layout = settings.read_enum(UI_SECTION, LAYOUT_KEY, Layout, DEFAULT_LAYOUT)

        stored_split = settings.read_int(UI_SECTION, SPLIT_KEY, -1)
        split_position: Optional[int] = stored_split if stored_split >= 0 else None

        stored_widths = settings.read_string_list(UI_SECTION, COLUMNS_KEY, (), separator=",")
        column_widths = self.normalize_column_widths(stored_widths)

        window_rect = settings.read_rect(UI_SECTION, WINDOW_KEY, None)
        if window_rect is not None and window_rect.is_empty:
            window_rect = None

        last_query = settings.read_string(SEARCH_SECTION, QUERY_KEY, "")
        recent = settings.read_string_list(MRU_SECTION, FILES_KEY, ())

        state = ViewState(
            layout=layout,
            split_position=split_position,
            column_widths=column_widths,
            last_query=last_query,
            window_rect=window_rect,
            recent_files=tuple(recent[: self.max_recent_files]),
        )
        logger.debug("View state loaded: %s", state)
        return state

    def save(self, settings: SettingsStore, state: ViewState) -> None:
        settings.write_enum(UI_SECTION, LAYOUT_KEY, state.layout)
        if state.split_position is not None:
            settings.write_int(UI_SECTION, SPLIT_KEY, state.split_position)
        else:
            settings.remove(UI_SECTION, SPLIT_KEY)
        settings.write_string_list(
            UI_SECTION, COLUMNS_KEY,
            [str(w) for w in self.normalize_column_widths(state.column_widths)],
            separator=",",
        )
        if state.window_rect is not None and not state.window_rect.is_empty:
            settings.write_rect(UI_SECTION, WINDOW_KEY, state.window_rect)
        settings.write_string(SEARCH_SECTION, QUERY_KEY, state.last_query)
        settings.write_string_list(MRU_SECTION, FILES_KEY, state.recent_files[: self.max_recent_files])
        logger.debug("View state saved: %s", state)

    # ---------------------------------------------------------------- Helpers

    def normalize_column_widths(self, widths: Sequence[object]) -> Tuple[int, ...]:
        """Return exactly ``column_count`` positive widths."""
        result = []
        for i in range(self.column_count):
            width = 0
            if i < len(widths):
                try:
                    width = int(str(widths[i]).strip())
                except ValueError:
                    width = 0
            result.append(width if width > 0 else self.default_column_width)
        return tuple(result)

    def add_recent_file(self, state: ViewState, path: str) -> ViewState:
        """Move ``path`` to the front of the recent files list."""
        files = [path] + [p for p in state.recent_files if p != path]
        return state.with_changes(recent_files=tuple(files[: self.max_recent_files]))

    def remove_recent_file(self, state: ViewState, path: str) -> ViewState:
        return state.with_changes(recent_files=tuple(p for p in state.recent_files if p != path))

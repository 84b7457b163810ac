"""View state models.

Small value objects describing how the main window was laid out when the
user last closed it: pane orientation, divider position, property list
column widths, last search query and recently opened files.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple

__all__ = ["Layout", "Rect", "ViewState", "DEFAULT_LAYOUT", "FIRST_RUN_SPLIT_RATIO"]


class Layout(Enum):
    """Orientation of the tree / properties split."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


DEFAULT_LAYOUT = Layout.VERTICAL

# Share of the available extent given to the tree pane on first run
FIRST_RUN_SPLIT_RATIO = 0.75


@dataclass(frozen=True)
class Rect:
    """Window rectangle in screen coordinates."""

    left: int
    top: int
    width: int
    height: int

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def to_geometry(self) -> str:
        """Format as a Tk geometry string (``WxH+X+Y``)."""
        return f"{self.width}x{self.height}+{self.left}+{self.top}"


@dataclass(frozen=True)
class ViewState:
    """Persisted view configuration.

    ``split_position`` is None until the layout has been shown once; see
    :meth:`effective_split_position`.
    """

    layout: Layout = DEFAULT_LAYOUT
    split_position: Optional[int] = None
    column_widths: Tuple[int, ...] = ()
    last_query: str = ""
    window_rect: Optional[Rect] = None
    recent_files: Tuple[str, ...] = field(default_factory=tuple)

    def effective_split_position(self, extent: int) -> int:
        """Return the divider position to apply for a pane of ``extent`` size.

        On first run (no stored position) the tree takes three quarters of
        the available extent.
        """
        if self.split_position is not None:
            return max(0, self.split_position)
        return max(0, int(extent * FIRST_RUN_SPLIT_RATIO))

    def with_changes(self, **changes) -> "ViewState":
        return replace(self, **changes)

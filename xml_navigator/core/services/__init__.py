from __future__ import annotations

"""Navigation services (projection, search, view state).

Services are instantiated directly with their collaborators injected; none
of them imports a UI toolkit.
"""

from .projection_service import ProjectionBuilder, ProjectionSink  # noqa: F401
from .search_service import SearchNavigator, SearchOutcome  # noqa: F401
from .view_state_service import ViewStateStore  # noqa: F401

__all__: list[str] = [
    "ProjectionBuilder",
    "ProjectionSink",
    "SearchNavigator",
    "SearchOutcome",
    "ViewStateStore",
]

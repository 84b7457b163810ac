from __future__ import annotations

"""Query-driven navigation through a document.

The navigator runs a query once, keeps the ordered matches, and hands them
out one at a time in a cycle: after the last match the first one comes
around again. "Find" and "find next" are the same primitive, since the first
:meth:`SearchNavigator.next` after a successful search yields the first
match.

States
------
- Idle: no result set. :meth:`next` raises :class:`NoActiveSearchError`.
- Active: a non-empty result set and a cursor on the match to yield next.

Results hold node references that are only valid for one projection
generation; the navigator must be reset whenever the projection is rebuilt.
"""

import logging
from enum import Enum
from typing import Hashable, Optional, Sequence, Tuple

from xml_navigator.core.exceptions import (
    NoActiveSearchError,
    QuerySyntaxError,
    StaleResultError,
    UnmappedNodeError,
)
from xml_navigator.core.models import DocumentNode
from xml_navigator.core.query import QueryEvaluator
from xml_navigator.core.tree_index import TreeIndex

logger = logging.getLogger(__name__)

__all__ = ["SearchOutcome", "SearchNavigator", "EMPTY_QUERY_MESSAGE"]

EMPTY_QUERY_MESSAGE = "Please enter an XPath expression query"


class SearchOutcome(Enum):
    FOUND = "found"
    NO_MATCHES = "no_matches"


class SearchNavigator:
    """Cycle through the matches of the last successful query.

    Parameters
    ----------
    evaluator : QueryEvaluator
        Produces the ordered matches of a query against a document root.
    last_query : str, default=""
        Query remembered from a previous session (pre-fills the find dialog).
    """

    def __init__(self, evaluator: QueryEvaluator, last_query: str = "") -> None:
        self._evaluator = evaluator
        self._results: Tuple[DocumentNode, ...] = ()
        self._cursor: int = 0
        self._last_shown: Optional[int] = None
        self.last_query: str = last_query or ""

    # --------------------------------------------------------------------- API

    def search(self, query: str, root: DocumentNode) -> SearchOutcome:
        """Run ``query`` against ``root`` and start a new cycle.

        Raises
        ------
        QuerySyntaxError
            The query is blank or the evaluator rejected it. The navigator is
            left idle and ``last_query`` keeps its previous value.
        """
        self.reset()
        if not query or not query.strip():
            raise QuerySyntaxError(EMPTY_QUERY_MESSAGE, query or "")

        # Consume the evaluator's sequence fully; cycling needs random access
        matches = tuple(self._evaluator.evaluate(query, root))
        self.last_query = query

        if not matches:
            logger.info("Query %r did not match any nodes", query)
            return SearchOutcome.NO_MATCHES

        self._results = matches
        self._cursor = 0
        logger.info("Query %r matched %d node(s)", query, len(matches))
        return SearchOutcome.FOUND

    def next(self) -> DocumentNode:
        """Return the match at the cursor and advance it, wrapping around.

        Raises
        ------
        NoActiveSearchError
            No search is active.
        """
        if not self._results:
            raise NoActiveSearchError()
        node = self._results[self._cursor]
        self._last_shown = self._cursor
        self._cursor = (self._cursor + 1) % len(self._results)
        return node

    def next_slot(self, index: TreeIndex) -> Hashable:
        """Advance like :meth:`next` and return the match's projection slot.

        Raises
        ------
        NoActiveSearchError
            No search is active.
        StaleResultError
            The match is no longer projected. The navigator is reset to idle.
        """
        node = self.next()
        try:
            return index.slot_for(node)
        except UnmappedNodeError as exc:
            logger.warning("Discarding stale search results for %r", self.last_query)
            self.reset()
            raise StaleResultError(node, exc) from exc

    def reset(self) -> None:
        """Discard the result set and return to idle."""
        if self._results:
            logger.debug("Search results discarded")
        self._results = ()
        self._cursor = 0
        self._last_shown = None

    # ---------------------------------------------------------------- Queries

    @property
    def is_active(self) -> bool:
        return bool(self._results)

    @property
    def results(self) -> Sequence[DocumentNode]:
        return self._results

    @property
    def match_count(self) -> int:
        return len(self._results)

    @property
    def current(self) -> Optional[DocumentNode]:
        """The match most recently yielded by :meth:`next`, if any."""
        if self._last_shown is None:
            return None
        return self._results[self._last_shown]

from __future__ import annotations

"""Projection of a document tree onto a UI tree control.

The builder walks the document depth-first, inserting one slot per node into
a :class:`ProjectionSink` and recording the slot/node pair in the
:class:`TreeIndex`. The whole tree is materialized on every refresh; sibling
order in the projection always equals document order.

Design principles
-----------------
- No UI toolkit imports: the sink is any object satisfying the protocol.
- The index is cleared and rebuilt wholesale, never patched.
- Listeners registered with :meth:`ProjectionBuilder.add_refresh_listener`
  run before the old projection is discarded, so state holding node
  references from the previous generation (search results) can be reset.
"""

import logging
from typing import Callable, Hashable, List, Optional, Protocol

from xml_navigator.core.models import DocumentNode
from xml_navigator.core.summary import NodeSummarizer
from xml_navigator.core.tree_index import TreeIndex

logger = logging.getLogger(__name__)

__all__ = ["ProjectionSink", "ProjectionBuilder"]


class ProjectionSink(Protocol):
    """UI tree control contract used by the builder."""

    def insert_root(self, label: str, has_children: bool) -> Hashable:
        ...

    def insert_child(self, parent: Hashable, label: str) -> Hashable:
        """Insert a new slot as the last child of ``parent``."""
        ...

    def update_label(self, slot: Hashable, label: str, has_children: bool) -> None:
        ...

    def clear(self) -> None:
        ...

    def select(self, slot: Hashable) -> None:
        ...

    def get_selection(self) -> Optional[Hashable]:
        ...


class ProjectionBuilder:
    """Build the tree projection of a document.

    Parameters
    ----------
    sink : ProjectionSink
        Tree control receiving the slots.
    index : TreeIndex
        Index populated with one mapping per projected node.
    summarizer : NodeSummarizer
        Computes each slot's label.
    """

    def __init__(self, sink: ProjectionSink, index: TreeIndex, summarizer: NodeSummarizer) -> None:
        self._sink = sink
        self._index = index
        self._summarizer = summarizer
        self._listeners: List[Callable[[], None]] = []
        self._root_slot: Optional[Hashable] = None

    # --------------------------------------------------------------------- API

    def add_refresh_listener(self, callback: Callable[[], None]) -> None:
        """Register a callback run at the start of every refresh."""
        self._listeners.append(callback)

    def refresh(self, root: DocumentNode) -> Hashable:
        """Rebuild the projection from ``root`` and return the root slot."""
        for callback in list(self._listeners):
            callback()

        self._index.clear()
        self._sink.clear()
        self._root_slot = None

        summary = self._summarizer.summarize(root)
        root_slot = self._sink.insert_root(summary.label, summary.has_children)
        self._index.add_mapping(root_slot, root)
        self._add_node_tree(root_slot, root)

        self._sink.select(root_slot)
        self._root_slot = root_slot
        logger.debug("Projection rebuilt with %d slot(s)", len(self._index))
        return root_slot

    def clear(self) -> None:
        """Discard the projection without building a new one."""
        for callback in list(self._listeners):
            callback()
        self._index.clear()
        self._sink.clear()
        self._root_slot = None

    @property
    def root_slot(self) -> Optional[Hashable]:
        return self._root_slot

    @property
    def index(self) -> TreeIndex:
        return self._index

    @property
    def summarizer(self) -> NodeSummarizer:
        return self._summarizer

    # --------------------------------------------------------------- Internal

    def _add_node_tree(self, parent_slot: Hashable, container: DocumentNode) -> None:
        for child in container.children:
            slot = self._add_node(parent_slot, child)
            if child.is_container:
                self._add_node_tree(slot, child)

    def _add_node(self, parent_slot: Hashable, node: DocumentNode) -> Hashable:
        slot = self._sink.insert_child(parent_slot, "")
        self._index.add_mapping(slot, node)
        summary = self._summarizer.summarize(node)
        self._sink.update_label(slot, summary.label, summary.has_children)
        return slot

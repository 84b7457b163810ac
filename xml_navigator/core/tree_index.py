from __future__ import annotations

"""Bidirectional index between document nodes and projection slots.

The index is keyed by node identity (``DocumentNode`` hashes by identity),
never by content, since two nodes may carry identical content. Mappings are
insert-only: the projection is always rebuilt wholesale, so the index is
cleared and refilled rather than patched.
"""

import logging
from typing import Dict, Hashable

from xml_navigator.core.exceptions import (
    DuplicateMappingError,
    UnmappedNodeError,
    UnmappedSlotError,
)
from xml_navigator.core.models import DocumentNode

logger = logging.getLogger(__name__)

__all__ = ["TreeIndex"]


class TreeIndex:
    """Keep ``slot -> node`` and ``node -> slot`` maps as exact inverses."""

    def __init__(self) -> None:
        self._slot_to_node: Dict[Hashable, DocumentNode] = {}
        self._node_to_slot: Dict[DocumentNode, Hashable] = {}
        self._generation: int = 0

    # --------------------------------------------------------------------- API

    def add_mapping(self, slot: Hashable, node: DocumentNode) -> None:
        """Map ``slot`` to ``node``.

        Raises
        ------
        DuplicateMappingError
            If either the slot or the node is already mapped.
        """
        slot_taken = slot in self._slot_to_node
        node_taken = node in self._node_to_slot
        if slot_taken or node_taken:
            raise DuplicateMappingError(slot, node, slot_taken=slot_taken, node_taken=node_taken)
        self._slot_to_node[slot] = node
        self._node_to_slot[node] = slot

    def node_for(self, slot: Hashable) -> DocumentNode:
        try:
            return self._slot_to_node[slot]
        except KeyError:
            raise UnmappedSlotError(slot) from None

    def slot_for(self, node: DocumentNode) -> Hashable:
        try:
            return self._node_to_slot[node]
        except KeyError:
            raise UnmappedNodeError(node) from None

    def clear(self) -> None:
        """Drop every mapping and start a new generation."""
        self._slot_to_node.clear()
        self._node_to_slot.clear()
        self._generation += 1
        logger.debug("Tree index cleared (generation %d)", self._generation)

    # ---------------------------------------------------------------- Queries

    def contains_slot(self, slot: Hashable) -> bool:
        return slot in self._slot_to_node

    def contains_node(self, node: DocumentNode) -> bool:
        return node in self._node_to_slot

    @property
    def generation(self) -> int:
        """Number of times the index has been cleared."""
        return self._generation

    def __len__(self) -> int:
        return len(self._slot_to_node)

from __future__ import annotations

"""Shared data structures used across the XML Navigator core.

This package exposes the document tree model consumed by the projection and
search engine. It is intentionally free of UI / I/O code so that the
contained objects can be reused in any context (unit-tests, CLI, GUI, etc.).
"""

import weakref
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Sequence, Tuple

from .view_state import Layout, Rect, ViewState

__all__ = ["NodeKind", "DocumentNode", "Layout", "Rect", "ViewState", "CONTAINER_KINDS"]


class NodeKind(Enum):
    """Closed set of document node kinds."""

    DOCUMENT = "document"
    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"
    PROCESSING_INSTRUCTION = "processing-instruction"
    DOCTYPE = "doctype"
    CDATA = "cdata"


CONTAINER_KINDS = frozenset({NodeKind.DOCUMENT, NodeKind.ELEMENT})


@dataclass(eq=False)
class DocumentNode:
    """A single node of a loaded document.

    Nodes compare and hash by identity: two text nodes with the same content
    are still distinct nodes. Only the fields relevant to ``kind`` are set.

    Attributes
    ----------
    kind
        The node kind.
    name
        Element name (qualified with its prefix where it has one).
    attributes
        Ordered ``(name, value)`` pairs for elements and processing
        instructions.
    text
        Content of text, comment and CDATA nodes.
    target
        Processing instruction target.
    declaration
        Full DOCTYPE declaration.
    children
        Ordered children (documents and elements only).
    source
        The parser object this node was built from. Opaque to the engine.
    """

    kind: NodeKind
    name: str = ""
    attributes: List[Tuple[str, str]] = field(default_factory=list)
    text: str = ""
    target: str = ""
    declaration: str = ""
    children: List["DocumentNode"] = field(default_factory=list)
    source: Any = field(default=None, repr=False)
    _parent_ref: Optional["weakref.ReferenceType[DocumentNode]"] = field(
        default=None, init=False, repr=False
    )

    # ------------------------------------------------------------ Factories
    @classmethod
    def document(cls, children: Sequence["DocumentNode"] = (), source: Any = None) -> "DocumentNode":
        node = cls(NodeKind.DOCUMENT, source=source)
        node.extend(children)
        return node

    @classmethod
    def element(cls, name: str, attributes: Sequence[Tuple[str, str]] = (),
                children: Sequence["DocumentNode"] = (), source: Any = None) -> "DocumentNode":
        node = cls(NodeKind.ELEMENT, name=name, attributes=list(attributes), source=source)
        node.extend(children)
        return node

    @classmethod
    def text_node(cls, text: str, source: Any = None) -> "DocumentNode":
        return cls(NodeKind.TEXT, text=text, source=source)

    @classmethod
    def comment(cls, text: str, source: Any = None) -> "DocumentNode":
        return cls(NodeKind.COMMENT, text=text, source=source)

    @classmethod
    def cdata(cls, text: str, source: Any = None) -> "DocumentNode":
        return cls(NodeKind.CDATA, text=text, source=source)

    @classmethod
    def processing_instruction(cls, target: str, attributes: Sequence[Tuple[str, str]] = (),
                               text: str = "", source: Any = None) -> "DocumentNode":
        return cls(NodeKind.PROCESSING_INSTRUCTION, target=target,
                   attributes=list(attributes), text=text, source=source)

    @classmethod
    def doctype(cls, declaration: str, source: Any = None) -> "DocumentNode":
        return cls(NodeKind.DOCTYPE, declaration=declaration, source=source)

    # ------------------------------------------------------------ Structure
    @property
    def parent(self) -> Optional["DocumentNode"]:
        """Return the parent node, or None for the root (or a detached node)."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def is_container(self) -> bool:
        return self.kind in CONTAINER_KINDS

    def has_children(self) -> bool:
        """Return True if this node has child nodes."""
        return len(self.children) > 0

    def append(self, child: "DocumentNode") -> "DocumentNode":
        """Add a child node and set its parent reference."""
        if not self.is_container:
            raise ValueError(f"{self.kind.value} nodes cannot have children")
        child._parent_ref = weakref.ref(self)
        self.children.append(child)
        return child

    def extend(self, children: Sequence["DocumentNode"]) -> None:
        for child in children:
            self.append(child)

    def iter(self):
        """Yield this node and all descendants in document order."""
        yield self
        for child in self.children:
            yield from child.iter()

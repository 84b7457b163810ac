from __future__ import annotations

"""Property-pane content and location of a selected node.

These helpers are side-effect-free and contain no GUI code.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

from xml_navigator.core.models import DocumentNode, NodeKind

__all__ = ["PropertiesKind", "NodeProperties", "describe_properties", "node_path"]


class PropertiesKind(Enum):
    ATTRIBUTES = "attributes"
    TEXT = "text"
    NONE = "none"


@dataclass(frozen=True)
class NodeProperties:
    """What the property pane shows for a node."""

    kind: PropertiesKind
    attributes: List[Tuple[str, str]] = field(default_factory=list)
    text: str = ""


def describe_properties(node: DocumentNode) -> NodeProperties:
    """Return the attribute rows or the full text of ``node``.

    Elements and processing instructions show their attributes; text,
    comment and CDATA nodes their content; a DOCTYPE its declaration. The
    document node has no properties.
    """
    kind = node.kind
    if kind in (NodeKind.ELEMENT, NodeKind.PROCESSING_INSTRUCTION):
        return NodeProperties(PropertiesKind.ATTRIBUTES, attributes=list(node.attributes))
    if kind in (NodeKind.TEXT, NodeKind.COMMENT, NodeKind.CDATA):
        return NodeProperties(PropertiesKind.TEXT, text=node.text)
    if kind is NodeKind.DOCTYPE:
        return NodeProperties(PropertiesKind.TEXT, text=node.declaration)
    return NodeProperties(PropertiesKind.NONE)


def node_path(node: DocumentNode) -> str:
    """Return the simple element path of ``node``, e.g. ``/catalog/book``.

    Only element names contribute; a text node inside ``<b>`` reports the
    path of ``<b>``. Nodes outside any element give an empty path.
    """
    names: List[str] = []
    current = node
    while current is not None:
        if current.kind is NodeKind.ELEMENT:
            names.append(current.name)
        current = current.parent
    return "".join("/" + name for name in reversed(names))

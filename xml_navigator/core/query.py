from __future__ import annotations

"""XPath query evaluation over loaded documents.

Queries run with lxml against the parser tree a document was built from;
results are then traced back to navigator nodes through each node's
``source``. Results keep the order lxml returns them in (document order for
node-sets).
"""

import logging
import weakref
from typing import Any, Dict, Hashable, List, Optional, Protocol

from lxml import etree as ET

from xml_navigator.core.document import TAIL_SLOT, TEXT_SLOT
from xml_navigator.core.exceptions import QuerySyntaxError
from xml_navigator.core.models import DocumentNode, NodeKind

logger = logging.getLogger(__name__)

__all__ = ["QueryEvaluator", "XPathEvaluator"]


class QueryEvaluator(Protocol):
    """Anything that turns a query string into matching document nodes."""

    def evaluate(self, query: str, root: DocumentNode) -> List[DocumentNode]:
        ...


class XPathEvaluator:
    """Evaluate XPath 1.0 expressions with lxml.

    Node-set results map to navigator nodes: elements, comments and
    processing instructions directly, text results to the matching text node
    and attribute results to the element that owns them. Expressions that
    evaluate to a number, boolean or plain string select nothing and are
    rejected with :class:`QuerySyntaxError`. lxml leaves the document node out
    of node-sets, so ``/`` matches nothing.
    """

    def __init__(self) -> None:
        self._lookups: "weakref.WeakKeyDictionary[DocumentNode, Dict[Hashable, DocumentNode]]" = (
            weakref.WeakKeyDictionary()
        )

    def evaluate(self, query: str, root: DocumentNode) -> List[DocumentNode]:
        tree = root.source
        if root.kind is not NodeKind.DOCUMENT or not isinstance(tree, ET._ElementTree):
            raise QuerySyntaxError("The document was not loaded from XML and cannot be queried", query)

        try:
            raw = tree.xpath(query)
        except ET.XPathError as exc:
            raise QuerySyntaxError(f"Failed to evaluate the XPath expression:\n\n{exc}", query, exc) from exc

        if not isinstance(raw, list):
            raise QuerySyntaxError(
                f"The XPath expression evaluates to a value ({raw!r}), not to a set of nodes",
                query,
            )

        lookup = self._lookup_for(root)
        matches: List[DocumentNode] = []
        for item in raw:
            node = self._resolve(item, lookup)
            if node is None:
                logger.debug("Ignoring XPath result with no tree node: %r", item)
                continue
            matches.append(node)
        logger.debug("XPath %r matched %d node(s)", query, len(matches))
        return matches

    # --------------------------------------------------------------- Internal

    def _lookup_for(self, root: DocumentNode) -> Dict[Hashable, DocumentNode]:
        lookup = self._lookups.get(root)
        if lookup is None:
            lookup = {}
            for node in root.iter():
                key = _source_key(node.source)
                if key is not None:
                    lookup[key] = node
            self._lookups[root] = lookup
        return lookup

    @staticmethod
    def _resolve(item: Any, lookup: Dict[Hashable, DocumentNode]) -> Optional[DocumentNode]:
        if isinstance(item, ET._Element):
            return lookup.get(item)
        if isinstance(item, ET._ElementUnicodeResult):
            owner = item.getparent()
            if owner is None:
                return None
            if item.is_attribute:
                return lookup.get(owner)
            if item.is_tail:
                return lookup.get((owner, TAIL_SLOT))
            if item.is_text:
                if isinstance(owner, (ET._Comment, ET._ProcessingInstruction)):
                    return lookup.get(owner)
                return lookup.get((owner, TEXT_SLOT))
            return None
        # Namespace nodes come back as (prefix, uri) tuples
        return None


def _source_key(source: Any) -> Optional[Hashable]:
    if isinstance(source, ET._Element):
        return source
    if isinstance(source, tuple) and len(source) == 2:
        return source
    return None

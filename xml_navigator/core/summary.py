from __future__ import annotations

"""Node summaries for the document tree view.

Every node gets a short, single-line label. Free-text labels are bounded to
a configured length and empty or pure-whitespace content is replaced with a
visible marker so a tree row never renders blank or misleading.
"""

from typing import NamedTuple, Sequence, Tuple

from xml_navigator.core.exceptions import UnknownNodeKindError
from xml_navigator.core.models import DocumentNode, NodeKind

__all__ = [
    "Summary",
    "NodeSummarizer",
    "make_attribute_summary",
    "post_process_summary",
    "DOCUMENT_LABEL",
    "DOCTYPE_LABEL",
    "EMPTY_MARKER",
    "WHITESPACE_MARKER",
    "ELLIPSIS",
    "DEFAULT_MAX_SUMMARY_LENGTH",
]

DOCUMENT_LABEL = "DOM"
DOCTYPE_LABEL = "DOCTYPE"
EMPTY_MARKER = "(empty)"
WHITESPACE_MARKER = "(whitespace)"
ELLIPSIS = "..."
DEFAULT_MAX_SUMMARY_LENGTH = 50


class Summary(NamedTuple):
    label: str
    has_children: bool


def make_attribute_summary(attributes: Sequence[Tuple[str, str]]) -> str:
    """Return ``name="value"`` pairs joined by single spaces."""
    return " ".join(f'{name}="{value}"' for name, value in attributes)


def post_process_summary(text: str, max_length: int) -> str:
    """Bound a free-text label for display.

    Examples:
        >>> post_process_summary("", 10)
        '(empty)'
        >>> post_process_summary(" \\n\\t", 10)
        '(whitespace)'
        >>> post_process_summary("abcdefghijkl", 10)
        'abcdefghij...'
    """
    if not text:
        return EMPTY_MARKER
    if text.isspace():
        return WHITESPACE_MARKER
    if len(text) > max_length:
        return text[:max_length] + ELLIPSIS
    return text


class NodeSummarizer:
    """Compute the display label of a document node.

    Parameters
    ----------
    max_length : int
        Maximum number of characters kept from a free-text label before the
        ellipsis is appended. Coerced to at least 1.
    """

    def __init__(self, max_length: int = DEFAULT_MAX_SUMMARY_LENGTH) -> None:
        self._max_length = max(1, int(max_length))

    @property
    def max_length(self) -> int:
        return self._max_length

    @max_length.setter
    def max_length(self, value: int) -> None:
        self._max_length = max(1, int(value))

    def summarize(self, node: DocumentNode) -> Summary:
        kind = node.kind
        if kind is NodeKind.DOCUMENT:
            return Summary(DOCUMENT_LABEL, node.has_children())
        if kind is NodeKind.ELEMENT:
            label = f"{node.name} {make_attribute_summary(node.attributes)}"
            return Summary(self._post_process(label), node.has_children())
        if kind in (NodeKind.TEXT, NodeKind.COMMENT, NodeKind.CDATA):
            return Summary(self._post_process(node.text), False)
        if kind is NodeKind.PROCESSING_INSTRUCTION:
            label = f"{node.target} {make_attribute_summary(node.attributes)}"
            return Summary(self._post_process(label), False)
        if kind is NodeKind.DOCTYPE:
            return Summary(DOCTYPE_LABEL, False)
        raise UnknownNodeKindError(kind)

    def _post_process(self, text: str) -> str:
        return post_process_summary(text, self._max_length)

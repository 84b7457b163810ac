from __future__ import annotations

"""Navigator exception classes.

Two families live here. Invariant violations signal a broken contract
between the engine and its caller (a slot mapped twice, a lookup of a slot
that was never projected); they are always raised and never expected in
normal operation. The remaining classes describe conditions a user can
trigger (a malformed query, a file that does not parse) and are meant to be
caught at the UI seam and reported.
"""

from pathlib import Path
from typing import Any, Optional, Union

__all__ = [
    "NavigatorError",
    "InvariantViolation",
    "DuplicateMappingError",
    "UnmappedSlotError",
    "UnmappedNodeError",
    "UnknownNodeKindError",
    "QuerySyntaxError",
    "NoActiveSearchError",
    "StaleResultError",
    "DocumentLoadError",
    "DocumentSaveError",
]


class NavigatorError(Exception):
    """Base exception for all navigator errors."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class InvariantViolation(NavigatorError):
    """Raised when a caller breaches an engine contract.

    These indicate programming errors, not user conditions.
    """


class DuplicateMappingError(InvariantViolation):
    """Raised when a slot or node is mapped a second time in one generation."""

    def __init__(self, slot: Any, node: Any, *, slot_taken: bool, node_taken: bool) -> None:
        parts = []
        if slot_taken:
            parts.append(f"slot {slot!r} is already mapped")
        if node_taken:
            parts.append(f"node {node!r} is already mapped")
        super().__init__("Duplicate tree index mapping: " + " and ".join(parts))
        self.slot = slot
        self.node = node


class UnmappedSlotError(InvariantViolation, KeyError):
    """Raised when a projection slot is not present in the tree index."""

    def __init__(self, slot: Any) -> None:
        NavigatorError.__init__(self, f"No node is mapped to slot {slot!r}")
        self.slot = slot

    def __str__(self) -> str:
        return self.args[0]


class UnmappedNodeError(InvariantViolation, KeyError):
    """Raised when a node is not present in the current projection."""

    def __init__(self, node: Any) -> None:
        NavigatorError.__init__(self, f"Node {node!r} is not in the current projection")
        self.node = node

    def __str__(self) -> str:
        return self.args[0]


class UnknownNodeKindError(InvariantViolation):
    """Raised when a node carries a kind outside the closed node-kind set."""

    def __init__(self, kind: Any) -> None:
        super().__init__(f"Unknown document node kind: {kind!r}")
        self.kind = kind


class QuerySyntaxError(NavigatorError):
    """Raised when a query is malformed or selects no nodes.

    The message is suitable for showing to the user verbatim.
    """

    def __init__(self, message: str, query: str = "", cause: Optional[BaseException] = None) -> None:
        super().__init__(message, cause)
        self.query = query


class NoActiveSearchError(NavigatorError):
    """Raised when stepping through results with no active search."""

    def __init__(self) -> None:
        super().__init__("There is no active search")


class StaleResultError(NavigatorError):
    """Raised when a search result no longer exists in the projection."""

    def __init__(self, node: Any, cause: Optional[BaseException] = None) -> None:
        super().__init__("The search result is no longer part of the document view", cause)
        self.node = node


class DocumentLoadError(NavigatorError):
    """Raised when a document cannot be read or parsed."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None,
                 cause: Optional[BaseException] = None) -> None:
        super().__init__(message, cause)
        self.path = path


class DocumentSaveError(NavigatorError):
    """Raised when a document cannot be written."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None,
                 cause: Optional[BaseException] = None) -> None:
        super().__init__(message, cause)
        self.path = path

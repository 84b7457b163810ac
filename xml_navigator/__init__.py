"""Top-level package for XML Navigator.

The engine under :mod:`xml_navigator.core` is GUI-agnostic. Front-ends
(the Tk GUI, tests) should only depend on the public API exposed here and in
:mod:`xml_navigator.core.services` rather than reaching into internals.
"""

from .core.models import DocumentNode, NodeKind  # re-export for convenience

__all__: list[str] = [
    "DocumentNode",
    "NodeKind",
]

"""UI widgets package.

Reusable Tk widgets for the navigator window.
"""

from .document_tree import DocumentTreeWidget
from .properties_panel import PropertiesPanel

__all__ = ["DocumentTreeWidget", "PropertiesPanel"]

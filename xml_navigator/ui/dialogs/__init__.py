"""Modal dialogs used by the main window."""

from .about_dialog import show_about_dialog
from .find_dialog import FindDialog
from .node_path_dialog import show_node_path_dialog

__all__ = ["FindDialog", "show_about_dialog", "show_node_path_dialog"]

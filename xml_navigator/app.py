# -*- coding: utf-8 -*-
"""Tk-based main window for XML Navigator.

Exposes :class:`XmlNavigatorApp`, which is instantiated by ``run.py``. The
window hosts the document tree and the properties pane in a split layout and
wires menu commands to :class:`NavigatorController`.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import tkinter as tk
from tkinter import filedialog, messagebox, ttk

from xml_navigator.core.models import Layout, Rect
from xml_navigator.ui.controllers import NavigatorController, OperationResult
from xml_navigator.ui.dialogs import FindDialog, show_about_dialog, show_node_path_dialog
from xml_navigator.ui.widgets import DocumentTreeWidget, PropertiesPanel

logger = logging.getLogger(__name__)

__all__ = ["XmlNavigatorApp"]

APP_TITLE = "XML Navigator"
DEFAULT_WINDOW_SIZE = (900, 640)

# A vertical divider puts the panes side by side
_PANED_ORIENT = {
    Layout.VERTICAL: "horizontal",
    Layout.HORIZONTAL: "vertical",
}


class XmlNavigatorApp:
    """Main application window wrapping the Tk widgets."""

    def __init__(self, root: tk.Tk, controller_factory=NavigatorController) -> None:
        self.root = root
        self.root.title(APP_TITLE)

        self._body = ttk.Frame(root)
        self._body.pack(expand=True, fill="both")

        self.tree = DocumentTreeWidget(self._body, on_selection_changed=self._on_selection_changed)
        self.controller: NavigatorController = controller_factory(self.tree)
        state = self.controller.load_view_state()

        self.properties = PropertiesPanel(self._body, column_widths=state.column_widths)
        self._paned: Optional[ttk.Panedwindow] = None
        self._layout_var = tk.StringVar(value=state.layout.value)
        self._recent_menu: Optional[tk.Menu] = None

        self._build_menu()
        self._bind_shortcuts()
        self._apply_window_rect(state.window_rect)
        self._build_paned(state.layout)
        self._restore_split(first=True)
        self._update_title()

        self.root.protocol("WM_DELETE_WINDOW", self.on_close)

    # ---------------------------------------------------------------- Layout
    def _build_paned(self, layout: Layout) -> None:
        if self._paned is not None:
            for pane in self._paned.panes():
                self._paned.forget(pane)
            self._paned.destroy()

        paned = ttk.Panedwindow(self._body, orient=_PANED_ORIENT[layout])
        paned.pack(expand=True, fill="both")
        paned.add(self.tree, weight=3)
        paned.add(self.properties, weight=1)
        # Panes were created before the paned window and must sit above it
        self.tree.lift(paned)
        self.properties.lift(paned)
        self._paned = paned

    def _pane_extent(self) -> int:
        assert self._paned is not None
        if str(self._paned.cget("orient")) == "horizontal":
            return self._paned.winfo_width()
        return self._paned.winfo_height()

    def _restore_split(self, first: bool = False) -> None:
        """Apply the stored divider position once the geometry has settled."""
        paned = self._paned
        if paned is None:
            return
        paned.update_idletasks()
        extent = self._pane_extent()
        if extent <= 1:
            if first:
                self.root.after(100, self._restore_split)
            return
        pos = self.controller.view_state.effective_split_position(extent)
        try:
            paned.sashpos(0, min(pos, extent))
        except tk.TclError:
            logger.debug("Could not restore divider position", exc_info=True)

    def _capture_split(self) -> Optional[int]:
        if self._paned is None:
            return None
        try:
            return int(self._paned.sashpos(0))
        except tk.TclError:
            return None

    def set_layout(self, layout: Layout) -> None:
        if layout is self.controller.view_state.layout:
            return
        self.controller.set_layout(layout)
        # The stored position belongs to the old orientation
        self.controller.view_state = self.controller.view_state.with_changes(split_position=None)
        self._build_paned(layout)
        self._layout_var.set(layout.value)
        self.root.after(0, self._restore_split)

    def _apply_window_rect(self, rect: Optional[Rect]) -> None:
        if rect is not None and not rect.is_empty:
            self.root.geometry(rect.to_geometry())
            return
        width, height = DEFAULT_WINDOW_SIZE
        pos_x = (self.root.winfo_screenwidth() // 2) - (width // 2)
        pos_y = (self.root.winfo_screenheight() // 2) - (height // 2)
        self.root.geometry(f"{width}x{height}+{pos_x}+{pos_y}")

    def _window_rect(self) -> Rect:
        return Rect(
            self.root.winfo_x(),
            self.root.winfo_y(),
            self.root.winfo_width(),
            self.root.winfo_height(),
        )

    # ------------------------------------------------------------------ Menus
    def _build_menu(self) -> None:
        menubar = tk.Menu(self.root)

        file_menu = tk.Menu(menubar, tearoff=0)
        file_menu.add_command(label="New", accelerator="Ctrl+N", command=self.new_document)
        file_menu.add_command(label="Open...", accelerator="Ctrl+O", command=self.open_file_dialog)
        file_menu.add_command(label="Save", accelerator="Ctrl+S", command=self.save_document)
        file_menu.add_command(label="Save As...", command=self.save_document_as)
        file_menu.add_command(label="Close", command=self.close_document)
        file_menu.add_separator()
        self._recent_menu = tk.Menu(file_menu, tearoff=0)
        file_menu.add_cascade(label="Recent Files", menu=self._recent_menu)
        file_menu.add_separator()
        file_menu.add_command(label="Exit", command=self.on_close)
        menubar.add_cascade(label="File", menu=file_menu)

        edit_menu = tk.Menu(menubar, tearoff=0)
        edit_menu.add_command(label="Find...", accelerator="Ctrl+F", command=self.find)
        edit_menu.add_command(label="Find Next", accelerator="F3", command=self.find_next)
        menubar.add_cascade(label="Edit", menu=edit_menu)

        view_menu = tk.Menu(menubar, tearoff=0)
        view_menu.add_radiobutton(
            label="Horizontal",
            variable=self._layout_var,
            value=Layout.HORIZONTAL.value,
            command=lambda: self.set_layout(Layout.HORIZONTAL),
        )
        view_menu.add_radiobutton(
            label="Vertical",
            variable=self._layout_var,
            value=Layout.VERTICAL.value,
            command=lambda: self.set_layout(Layout.VERTICAL),
        )
        view_menu.add_separator()
        view_menu.add_command(label="Expand All", command=self.tree.expand_all)
        view_menu.add_command(label="Collapse All", command=self.tree.collapse_all)
        view_menu.add_separator()
        view_menu.add_command(label="Node Path...", command=self.show_node_path)
        menubar.add_cascade(label="View", menu=view_menu)

        help_menu = tk.Menu(menubar, tearoff=0)
        help_menu.add_command(label="About", command=lambda: show_about_dialog(self.root))
        menubar.add_cascade(label="Help", menu=help_menu)

        self.root.config(menu=menubar)
        self._refresh_recent_menu()

    def _refresh_recent_menu(self) -> None:
        menu = self._recent_menu
        if menu is None:
            return
        menu.delete(0, "end")
        files = self.controller.view_state.recent_files
        if not files:
            menu.add_command(label="(none)", state="disabled")
            return
        for i, path in enumerate(files, start=1):
            menu.add_command(label=f"{i} {path}", command=lambda p=path: self.open_path(p))

    def _bind_shortcuts(self) -> None:
        self.root.bind_all("<Control-n>", lambda _e: self.new_document())
        self.root.bind_all("<Control-o>", lambda _e: self.open_file_dialog())
        self.root.bind_all("<Control-s>", lambda _e: self.save_document())
        self.root.bind_all("<Control-f>", lambda _e: self.find())
        self.root.bind_all("<F3>", lambda _e: self.find_next())

    # --------------------------------------------------------------- Commands
    def open_file_dialog(self) -> None:
        path = filedialog.askopenfilename(
            title="Open XML Document",
            filetypes=[("XML files", "*.xml"), ("All files", "*.*")],
        )
        if path:
            self.open_path(path)

    def open_path(self, path: str) -> None:
        result = self.controller.open_document(path)
        self._refresh_recent_menu()
        if not result.success:
            self._show_error(result)
            return
        self._show_selected_properties()
        self._update_title(Path(path).name)

    def new_document(self) -> None:
        result = self.controller.new_document()
        self._show_selected_properties()
        self._update_title("Untitled" if result.success else "")

    def save_document(self) -> None:
        if not self.controller.has_document:
            return
        if self.controller.document_path is None:
            self.save_document_as()
            return
        self._report_save(self.controller.save_document())

    def save_document_as(self) -> None:
        if not self.controller.has_document:
            return
        current = self.controller.document_path
        path = filedialog.asksaveasfilename(
            title="Save XML Document",
            defaultextension=".xml",
            initialfile=current.name if current is not None else "",
            filetypes=[("XML files", "*.xml"), ("All files", "*.*")],
        )
        if path:
            self._report_save(self.controller.save_document(path))

    def close_document(self) -> None:
        self.controller.close_document()
        self.properties.clear()
        self._update_title()

    def find(self) -> None:
        if not self.controller.has_document:
            return
        query = FindDialog.ask_query(self.root, self.controller.last_query)
        if query is None:
            return
        self._report(self.controller.find(query))

    def find_next(self) -> None:
        if not self.controller.has_document:
            return
        if not self.controller.search.is_active:
            self.find()
            return
        self._report(self.controller.find_next())

    def show_node_path(self) -> None:
        if self.controller.selected_node() is None:
            return
        show_node_path_dialog(self.root, self.controller.selected_node_path())

    def on_close(self) -> None:
        """Persist the view state and close the window."""
        try:
            self.controller.save_view_state(
                split_position=self._capture_split(),
                column_widths=self.properties.get_column_widths(),
                window_rect=self._window_rect(),
            )
        except (OSError, tk.TclError):
            logger.error("Failed to save view settings", exc_info=True)
        self.controller.close_document()
        self.root.destroy()

    # ---------------------------------------------------------------- Helpers
    def _on_selection_changed(self, slot: Optional[str]) -> None:
        self.properties.show_properties(self.controller.properties_for_slot(slot))

    def _show_selected_properties(self) -> None:
        self._on_selection_changed(self.tree.get_selection())

    def _report(self, result: OperationResult) -> None:
        if result.success:
            self._show_selected_properties()
            self.tree.focus_tree()
        else:
            self._show_error(result)

    def _report_save(self, result: OperationResult) -> None:
        self._refresh_recent_menu()
        if not result.success:
            self._show_error(result)
            return
        path = self.controller.document_path
        self._update_title(path.name if path is not None else "")

    def _show_error(self, result: OperationResult) -> None:
        messagebox.showerror(APP_TITLE, result.message, parent=self.root)

    def _update_title(self, doc_name: str = "") -> None:
        self.root.title(f"{doc_name} - {APP_TITLE}" if doc_name else APP_TITLE)

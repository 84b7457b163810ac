from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable, List, Optional


class DocumentTreeWidget(ttk.Frame):
    """Tkinter widget that renders the document projection in a Treeview.

    The widget is the projection sink for the navigator: it creates one
    Treeview item per document node on request and reports selection changes
    as Treeview item ids (the projection slots). It keeps no node references;
    slot/node mapping is the tree index's job.

    Callbacks:
        - on_selection_changed: Invoked when the selection changes (via
          <<TreeviewSelect>>). Receives the selected item id or None.
        - on_item_activated: Invoked on double-click / Return with the item id.

    Notes
    -----
    - UI-only: no service or controller imports. No logging or I/O.
    - Items are always appended as the last child of their parent.
    """

    def __init__(
        self,
        master: "tk.Widget",
        *,
        on_selection_changed: Optional[Callable[[Optional[str]], None]] = None,
        on_item_activated: Optional[Callable[[str], None]] = None,
    ) -> None:
        super().__init__(master)
        self._on_selection_changed = on_selection_changed
        self._on_item_activated = on_item_activated

        self._tree = ttk.Treeview(self, show="tree", selectmode="browse", height=12)
        self._vsb = ttk.Scrollbar(self, orient="vertical", command=self._tree.yview)
        self._hsb = ttk.Scrollbar(self, orient="horizontal", command=self._tree.xview)
        self._tree.configure(yscrollcommand=self._vsb.set, xscrollcommand=self._hsb.set)

        self._tree.grid(row=0, column=0, sticky="nsew")
        self._vsb.grid(row=0, column=1, sticky="ns")
        self._hsb.grid(row=1, column=0, sticky="ew")
        self.columnconfigure(0, weight=1)
        self.rowconfigure(0, weight=1)

        # Fixed-width font like the property pane so labels line up
        try:
            style = ttk.Style(self)
            style.configure("Navigator.Treeview", font="TkFixedFont")
            self._tree.configure(style="Navigator.Treeview")
        except tk.TclError:
            pass
        try:
            self._tree.tag_configure("container", foreground="#1a4f8b")
            self._tree.tag_configure("leaf", foreground="#333333")
        except tk.TclError:
            pass

        self._tree.bind("<<TreeviewSelect>>", self._on_select_event, add="+")
        self._tree.bind("<Double-1>", self._on_activate_event, add="+")
        self._tree.bind("<Return>", self._on_activate_event, add="+")

    # ------------------------------------------------------------------ Sink API
    def insert_root(self, label: str, has_children: bool) -> str:
        item_id = self._tree.insert("", "end", text=label, open=True, tags=(_tag_for(has_children),))
        return item_id

    def insert_child(self, parent: str, label: str) -> str:
        return self._tree.insert(parent, "end", text=label)

    def update_label(self, slot: str, label: str, has_children: bool) -> None:
        self._tree.item(slot, text=label, tags=(_tag_for(has_children),))

    def clear(self) -> None:
        children = self._tree.get_children("")
        if children:
            self._tree.delete(*children)

    def select(self, slot: str) -> None:
        self._tree.selection_set(slot)
        self._tree.focus(slot)
        self._tree.see(slot)

    def get_selection(self) -> Optional[str]:
        selection = self._tree.selection()
        return selection[0] if selection else None

    # ---------------------------------------------------------------- Helpers
    def get_children(self, slot: str = "") -> List[str]:
        return list(self._tree.get_children(slot))

    def item_text(self, slot: str) -> str:
        return str(self._tree.item(slot, "text"))

    def expand_all(self) -> None:
        def walk(parent: str) -> None:
            for child in self._tree.get_children(parent):
                self._tree.item(child, open=True)
                walk(child)

        walk("")

    def collapse_all(self) -> None:
        def walk(parent: str) -> None:
            for child in self._tree.get_children(parent):
                self._tree.item(child, open=False)
                walk(child)

        walk("")

    def focus_tree(self) -> None:
        try:
            self._tree.focus_set()
        except tk.TclError:
            pass

    # ------------------------------------------------------------------ Events
    def _on_select_event(self, _event: "tk.Event") -> None:
        if self._on_selection_changed is None:
            return
        self._on_selection_changed(self.get_selection())

    def _on_activate_event(self, _event: "tk.Event") -> None:
        slot = self.get_selection()
        if slot is None or self._on_item_activated is None:
            return
        self._on_item_activated(slot)


def _tag_for(has_children: bool) -> str:
    return "container" if has_children else "leaf"

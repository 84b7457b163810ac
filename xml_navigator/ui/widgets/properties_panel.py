from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Optional, Sequence, Tuple

from xml_navigator.core.node_details import NodeProperties, PropertiesKind

COLUMN_IDS = ("name", "value")
COLUMN_TITLES = ("Name", "Value")


class PropertiesPanel(ttk.Frame):
    """Right-hand pane showing the properties of the selected node.

    Depending on the node it shows a two-column attribute list (elements and
    processing instructions), a read-only text view (text, comment, CDATA and
    DOCTYPE nodes), or nothing at all.

    Parameters
    ----------
    master : tk.Widget
        Parent widget.
    column_widths : Sequence[int]
        Initial widths of the Name and Value columns.
    """

    def __init__(self, master: "tk.Widget", *, column_widths: Sequence[int] = (100, 100)) -> None:
        super().__init__(master)

        # Attribute list
        self._attrs_frame = ttk.Frame(self)
        self._attrs = ttk.Treeview(self._attrs_frame, columns=COLUMN_IDS, show="headings", selectmode="browse")
        for col, title in zip(COLUMN_IDS, COLUMN_TITLES):
            self._attrs.heading(col, text=title, anchor="w")
            self._attrs.column(col, anchor="w", stretch=False)
        attrs_vsb = ttk.Scrollbar(self._attrs_frame, orient="vertical", command=self._attrs.yview)
        self._attrs.configure(yscrollcommand=attrs_vsb.set)
        self._attrs.grid(row=0, column=0, sticky="nsew")
        attrs_vsb.grid(row=0, column=1, sticky="ns")
        self._attrs_frame.columnconfigure(0, weight=1)
        self._attrs_frame.rowconfigure(0, weight=1)

        # Text view
        self._text_frame = ttk.Frame(self)
        self._text = tk.Text(self._text_frame, wrap="word", font="TkFixedFont", height=8, width=40)
        text_vsb = ttk.Scrollbar(self._text_frame, orient="vertical", command=self._text.yview)
        self._text.configure(yscrollcommand=text_vsb.set, state="disabled")
        self._text.grid(row=0, column=0, sticky="nsew")
        text_vsb.grid(row=0, column=1, sticky="ns")
        self._text_frame.columnconfigure(0, weight=1)
        self._text_frame.rowconfigure(0, weight=1)

        self.columnconfigure(0, weight=1)
        self.rowconfigure(0, weight=1)

        self._kind: PropertiesKind = PropertiesKind.NONE
        self.set_column_widths(column_widths)

    # --------------------------------------------------------------- Public API
    def show_properties(self, props: NodeProperties) -> None:
        """Switch to the view matching ``props`` and fill it."""
        if props.kind is PropertiesKind.ATTRIBUTES:
            self._attrs.delete(*self._attrs.get_children(""))
            for name, value in props.attributes:
                self._attrs.insert("", "end", values=(name, value))
            self._show(self._attrs_frame)
        elif props.kind is PropertiesKind.TEXT:
            self._text.configure(state="normal")
            self._text.delete("1.0", "end")
            self._text.insert("1.0", props.text)
            self._text.configure(state="disabled")
            self._show(self._text_frame)
        else:
            self._show(None)
        self._kind = props.kind

    def clear(self) -> None:
        self.show_properties(NodeProperties(PropertiesKind.NONE))

    @property
    def kind(self) -> PropertiesKind:
        return self._kind

    def get_column_widths(self) -> Tuple[int, ...]:
        return tuple(int(self._attrs.column(col, "width")) for col in COLUMN_IDS)

    def set_column_widths(self, widths: Sequence[int]) -> None:
        for col, width in zip(COLUMN_IDS, widths):
            if width > 0:
                self._attrs.column(col, width=int(width))

    def attribute_rows(self) -> Tuple[Tuple[str, str], ...]:
        return tuple(tuple(self._attrs.item(i, "values")) for i in self._attrs.get_children(""))

    def text_value(self) -> str:
        return self._text.get("1.0", "end-1c")

    # ----------------------------------------------------------------- Internal
    def _show(self, frame: Optional[ttk.Frame]) -> None:
        for candidate in (self._attrs_frame, self._text_frame):
            if candidate is frame:
                candidate.grid(row=0, column=0, sticky="nsew")
            else:
                candidate.grid_remove()

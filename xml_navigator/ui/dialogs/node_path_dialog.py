from __future__ import annotations

import tkinter as tk
from tkinter import ttk

from .find_dialog import center_dialog


def show_node_path_dialog(parent: tk.Widget, path: str) -> None:
    """Show the element path of the selected node in a copyable field."""
    top = tk.Toplevel(parent)
    try:
        top.title("Node Path")
        top.transient(parent.winfo_toplevel())
        top.grab_set()
        top.resizable(True, False)
    except tk.TclError:
        pass

    container = ttk.Frame(top, padding=(12, 10))
    container.grid(row=0, column=0, sticky="nsew")
    top.columnconfigure(0, weight=1)
    container.columnconfigure(0, weight=1)

    var = tk.StringVar(value=path)
    entry = ttk.Entry(container, textvariable=var, width=60, state="readonly")
    entry.grid(row=0, column=0, sticky="ew")

    def _copy() -> None:
        top.clipboard_clear()
        top.clipboard_append(path)

    btns = ttk.Frame(container)
    btns.grid(row=1, column=0, sticky="e", pady=(10, 0))
    ttk.Button(btns, text="Copy", command=_copy).grid(row=0, column=0, padx=(0, 6))
    ttk.Button(btns, text="Close", style="Accent.TButton", command=top.destroy).grid(row=0, column=1)

    top.bind("<Escape>", lambda _e: top.destroy())
    entry.focus_set()
    entry.selection_range(0, tk.END)

    center_dialog(top, parent, 520, 100)
    top.wait_window(top)

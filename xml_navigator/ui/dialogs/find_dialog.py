from __future__ import annotations

import tkinter as tk
from tkinter import messagebox, ttk

from xml_navigator.core.services.search_service import EMPTY_QUERY_MESSAGE


class FindDialog:
    """Modal prompt for an XPath query.

    Use: query = FindDialog.ask_query(parent, initialvalue)
    Returns the entered query or None if cancelled. A blank query is refused
    in place with a warning; the dialog stays open.
    """

    @staticmethod
    def ask_query(parent: tk.Widget, initialvalue: str = "", title: str = "Find") -> str | None:
        top = tk.Toplevel(parent)
        try:
            top.title(title)
            top.transient(parent.winfo_toplevel())
            top.grab_set()
            top.resizable(True, False)
        except tk.TclError:
            pass

        container = ttk.Frame(top, padding=(12, 10))
        container.grid(row=0, column=0, sticky="nsew")
        top.columnconfigure(0, weight=1)
        top.rowconfigure(0, weight=1)
        container.columnconfigure(0, weight=1)

        ttk.Label(container, text="XPath expression:").grid(row=0, column=0, sticky="w", pady=(0, 6))

        var = tk.StringVar(value=str(initialvalue or ""))
        entry = ttk.Entry(container, textvariable=var, width=60)
        entry.grid(row=1, column=0, sticky="ew")

        btns = ttk.Frame(container)
        btns.grid(row=2, column=0, sticky="e", pady=(10, 0))

        result: list[str | None] = [None]

        def _ok() -> None:
            query = var.get()
            if not query.strip():
                messagebox.showwarning(title, EMPTY_QUERY_MESSAGE, parent=top)
                entry.focus_set()
                return
            result[0] = query
            top.destroy()

        def _cancel() -> None:
            result[0] = None
            top.destroy()

        ttk.Button(btns, text="Cancel", command=_cancel).grid(row=0, column=0, padx=(0, 6))
        ttk.Button(btns, text="Find", style="Accent.TButton", command=_ok).grid(row=0, column=1)

        entry.bind("<Return>", lambda _e: _ok())
        entry.bind("<Escape>", lambda _e: _cancel())
        top.protocol("WM_DELETE_WINDOW", _cancel)

        entry.focus_set()
        entry.selection_range(0, tk.END)

        center_dialog(top, parent, 520, 130)
        top.wait_window(top)
        return result[0]


def center_dialog(top: tk.Toplevel, parent: tk.Widget, width: int, min_height: int) -> None:
    """Size ``top`` and place it over the parent's toplevel window."""
    try:
        top.update_idletasks()
        h = max(min_height, top.winfo_height())
        pr = parent.winfo_toplevel()
        px, py = pr.winfo_rootx(), pr.winfo_rooty()
        pw, ph = pr.winfo_width(), pr.winfo_height()
        x = px + (pw - width) // 2
        y = py + (ph - h) // 3
        top.geometry(f"{width}x{h}+{x}+{y}")
    except tk.TclError:
        pass

# -*- coding: utf-8 -*-
"""About dialog for XML Navigator.

Kept separate from ``app.py`` so the main window module stays focused on
layout and commands. Shows the application name, version and a short blurb.
"""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk

from xml_navigator.version import get_app_version


def show_about_dialog(root: tk.Tk) -> None:
    """Display a compact About dialog centered over ``root``."""
    top = tk.Toplevel(root)
    try:
        top.title("About XML Navigator")
        top.transient(root)
        top.resizable(False, False)
        top.grab_set()
    except tk.TclError:
        pass

    try:
        root.update_idletasks()
        w, h = 360, 200
        rx, ry = root.winfo_rootx(), root.winfo_rooty()
        rw, rh = root.winfo_width(), root.winfo_height()
        top.geometry(f"{w}x{h}+{rx + (rw - w) // 2}+{ry + (rh - h) // 2}")
    except tk.TclError:
        pass

    content = ttk.Frame(top, padding=(20, 16))
    content.pack(expand=True, fill="both")

    ttk.Label(content, text="XML Navigator", font=("Trebuchet MS", 14, "bold")).pack(anchor="center")
    ttk.Label(content, text=get_app_version(), foreground="#555555").pack(pady=(2, 8), anchor="center")
    ttk.Label(
        content,
        text="Browse XML documents as a tree and\nlocate nodes with XPath queries.",
        justify="center",
    ).pack(anchor="center")

    ttk.Button(content, text="Close", command=top.destroy).pack(side="bottom", pady=(12, 0))
    top.bind("<Escape>", lambda _e: top.destroy())

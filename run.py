# -*- coding: utf-8 -*-

"""
Main entry point for launching XML Navigator.
"""

import argparse
import logging
import tkinter as tk

from xml_navigator.logging_config import setup_logging
from xml_navigator.app import XmlNavigatorApp


def main(argv=None):
    """
    Configure logging, main window, and launch application.
    """
    parser = argparse.ArgumentParser(description="Browse an XML document as a tree.")
    parser.add_argument("document", nargs="?", help="XML document to open on start-up")
    args = parser.parse_args(argv)

    setup_logging()

    root = tk.Tk()

    # Use modern theme if available
    try:
        from sv_ttk import set_theme
        set_theme("light")
    except ImportError:
        print("Warning: 'sv-ttk' theme is not installed.")

    app = XmlNavigatorApp(root)
    if args.document:
        root.after(0, lambda: app.open_path(args.document))

    root.mainloop()


if __name__ == '__main__':
    main()

    logging.info("===== Application terminated =====")

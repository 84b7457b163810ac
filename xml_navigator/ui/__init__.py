"""User interface layer.

Controllers live in :mod:`xml_navigator.ui.controllers` and carry no Tk code;
widgets and dialogs are imported from their own subpackages.
"""

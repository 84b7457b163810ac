import tkinter as tk
import pytest

from xml_navigator.core.document import DocumentSource
from xml_navigator.core.node_details import NodeProperties, PropertiesKind
from xml_navigator.core.services import ProjectionBuilder
from xml_navigator.core.summary import NodeSummarizer
from xml_navigator.core.tree_index import TreeIndex
from xml_navigator.ui.widgets import DocumentTreeWidget, PropertiesPanel


def _can_create_tk_root() -> bool:
    try:
        r = tk.Tk()
        r.destroy()
        return True
    except tk.TclError:
        return False


pytestmark = pytest.mark.skipif(
    not _can_create_tk_root(),
    reason="Tkinter root cannot be created in this environment (likely headless CI without display).",
)


@pytest.fixture
def tk_root():
    root = tk.Tk()
    root.withdraw()
    yield root
    root.destroy()


def test_tree_widget_receives_projection(tk_root):
    selected = []
    widget = DocumentTreeWidget(tk_root, on_selection_changed=selected.append)
    widget.pack()
    index = TreeIndex()
    builder = ProjectionBuilder(widget, index, NodeSummarizer())

    root_slot = builder.refresh(DocumentSource().load_string('<a x="1"><b/>text</a>'))
    tk_root.update()

    assert widget.item_text(root_slot) == "DOM"
    (a_slot,) = widget.get_children(root_slot)
    assert widget.item_text(a_slot) == 'a x="1"'
    assert [widget.item_text(s) for s in widget.get_children(a_slot)] == ["b ", "text"]
    assert widget.get_selection() == root_slot
    assert selected and selected[-1] == root_slot


def test_tree_widget_clear_and_select(tk_root):
    widget = DocumentTreeWidget(tk_root)
    root_slot = widget.insert_root("DOM", True)
    child = widget.insert_child(root_slot, "")
    widget.update_label(child, "leaf", False)

    widget.select(child)
    assert widget.get_selection() == child

    widget.clear()
    assert widget.get_children() == []
    assert widget.get_selection() is None


def test_properties_panel_switches_views(tk_root):
    panel = PropertiesPanel(tk_root, column_widths=(120, 200))

    panel.show_properties(NodeProperties(PropertiesKind.ATTRIBUTES, attributes=[("id", "b1")]))
    assert panel.kind is PropertiesKind.ATTRIBUTES
    assert panel.attribute_rows() == (("id", "b1"),)

    panel.show_properties(NodeProperties(PropertiesKind.TEXT, text="hello world"))
    assert panel.kind is PropertiesKind.TEXT
    assert panel.text_value() == "hello world"

    panel.clear()
    assert panel.kind is PropertiesKind.NONE
    assert panel.get_column_widths() == (120, 200)

"""Test configuration and shared fixtures for XML Navigator.

Provides a recording projection sink, sample documents and an isolated user
configuration directory. Every test runs with its own config directory and a
fresh ``ConfigManager`` so persisted settings never leak between tests.
"""

import logging
import sys
from pathlib import Path
from typing import Dict, Hashable, List, Optional, Tuple

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from xml_navigator.config import ConfigManager
from xml_navigator.core.document import DocumentSource

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


SAMPLE_XML = """<?xml version="1.0"?>
<!DOCTYPE catalog>
<!-- inventory -->
<catalog xmlns:x="urn:extra">
  <book id="b1" x:shelf="3">
    <title>Dune</title>
    <price>9.99</price>
  </book>
  <book id="b2">
    <title>Emma</title>
    <?render mode="fast"?>
  </book>
</catalog>
"""


class FakeProjection:
    """In-memory projection sink recording every call.

    Slots are consecutive integers starting at 1. ``children`` keeps the
    insertion order of each parent's slots.
    """

    def __init__(self) -> None:
        self._next = 1
        self.labels: Dict[Hashable, str] = {}
        self.flags: Dict[Hashable, bool] = {}
        self.children: Dict[Hashable, List[Hashable]] = {}
        self.parents: Dict[Hashable, Optional[Hashable]] = {}
        self.roots: List[Hashable] = []
        self.selection: Optional[Hashable] = None
        self.calls: List[Tuple[str, Hashable]] = []

    def _new_slot(self) -> int:
        slot = self._next
        self._next += 1
        return slot

    def insert_root(self, label: str, has_children: bool) -> Hashable:
        slot = self._new_slot()
        self.labels[slot] = label
        self.flags[slot] = has_children
        self.children[slot] = []
        self.parents[slot] = None
        self.roots.append(slot)
        self.calls.append(("insert_root", slot))
        return slot

    def insert_child(self, parent: Hashable, label: str) -> Hashable:
        assert parent in self.children, f"unknown parent slot {parent!r}"
        slot = self._new_slot()
        self.labels[slot] = label
        self.flags[slot] = False
        self.children[slot] = []
        self.children[parent].append(slot)
        self.parents[slot] = parent
        self.calls.append(("insert_child", slot))
        return slot

    def update_label(self, slot: Hashable, label: str, has_children: bool) -> None:
        assert slot in self.labels, f"unknown slot {slot!r}"
        self.labels[slot] = label
        self.flags[slot] = has_children
        self.calls.append(("update_label", slot))

    def clear(self) -> None:
        self.labels.clear()
        self.flags.clear()
        self.children.clear()
        self.parents.clear()
        self.roots.clear()
        self.selection = None
        self.calls.append(("clear", None))

    def select(self, slot: Hashable) -> None:
        assert slot in self.labels, f"unknown slot {slot!r}"
        self.selection = slot
        self.calls.append(("select", slot))

    def get_selection(self) -> Optional[Hashable]:
        return self.selection

    # Helpers for assertions
    def child_labels(self, slot: Hashable) -> List[str]:
        return [self.labels[s] for s in self.children[slot]]


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the user config directory at a temp folder and reset the singleton."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("XMLNAV_CONFIG_DIR", str(config_dir))
    ConfigManager.reset_instance()
    yield config_dir
    ConfigManager.reset_instance()


@pytest.fixture
def sink():
    return FakeProjection()


@pytest.fixture
def sample_xml() -> str:
    return SAMPLE_XML


@pytest.fixture
def sample_file(tmp_path) -> Path:
    path = tmp_path / "catalog.xml"
    path.write_text(SAMPLE_XML, encoding="utf-8")
    return path


@pytest.fixture
def sample_document():
    """The sample catalog parsed with whitespace discarded."""
    return DocumentSource(discard_whitespace=True).load_string(SAMPLE_XML)
